"""
Testy dla generatora armii.

Testuje:
- Limit punktów i limit 11 jednostek na typ
- Zachłanny dobór wg effectiveness
- Pomijanie za drogich typów
- Cache rankingu
- Rozstawienie: unikalne kratki, fallback, przepełnienie
- Determinizm przy tym samym seedzie
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tactics.army.army import Army
from tactics.army.generator import ArmyGenerator, GeneratorConfig, effectiveness
from tactics.core.config_loader import ConfigLoader
from tactics.core.rng import GameRNG
from tactics.units.unit import Unit


DATA_PATH = Path(__file__).parent.parent / "data"


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

def create_template(unit_type: str, health: int, base_attack: int, cost: int) -> Unit:
    """Helper do tworzenia szablonów katalogu."""
    return Unit(
        name=unit_type,
        unit_type=unit_type,
        health=health,
        base_attack=base_attack,
        cost=cost,
    )


@pytest.fixture
def generator():
    return ArmyGenerator(rng=GameRNG(42))


@pytest.fixture
def catalog():
    """Katalog z data/units.yaml."""
    return ConfigLoader(str(DATA_PATH)).load_catalog()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: EFFECTIVENESS I RANKING
# ═══════════════════════════════════════════════════════════════════════════

def test_effectiveness():
    unit = create_template("A", health=10, base_attack=5, cost=5)
    assert effectiveness(unit) == pytest.approx(3.0)


def test_effectiveness_rejects_non_positive_cost():
    with pytest.raises(ValueError):
        effectiveness(create_template("Free", health=10, base_attack=5, cost=0))


def test_rank_descending(generator):
    weak = create_template("Weak", health=1, base_attack=1, cost=10)
    strong = create_template("Strong", health=50, base_attack=50, cost=10)

    ranked = generator.rank([weak, strong])

    assert [u.unit_type for u, _ in ranked] == ["Strong", "Weak"]
    assert ranked[0][1] == pytest.approx(10.0)


def test_rank_ties_keep_catalog_order(generator):
    a = create_template("A", health=5, base_attack=5, cost=10)
    b = create_template("B", health=3, base_attack=2, cost=5)

    ranked = generator.rank([a, b])

    assert [u.unit_type for u, _ in ranked] == ["A", "B"]


def test_rank_is_idempotent(generator, catalog):
    first = generator.rank(catalog)
    second = generator.rank(catalog)

    assert [(u.unit_type, s) for u, s in first] == [(u.unit_type, s) for u, s in second]


def test_rank_is_cached(generator):
    """Zmiana statystyk szablonu po rankingu nie zmienia kolejności."""
    a = create_template("A", health=10, base_attack=10, cost=10)
    b = create_template("B", health=5, base_attack=5, cost=10)
    generator.rank([a, b])

    b.health = 500
    ranked = generator.rank([a, b])

    assert [u.unit_type for u, _ in ranked] == ["A", "B"]


def test_reset_reranks(generator):
    a = create_template("A", health=10, base_attack=10, cost=10)
    b = create_template("B", health=5, base_attack=5, cost=10)
    generator.rank([a, b])

    b.health = 500
    generator.reset()

    assert [u.unit_type for u, _ in generator.rank([a, b])] == ["B", "A"]


def test_different_catalog_reranks(generator):
    a = create_template("A", health=10, base_attack=10, cost=10)
    c = create_template("C", health=90, base_attack=90, cost=10)
    generator.rank([a])

    assert [u.unit_type for u, _ in generator.rank([a, c])] == ["C", "A"]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZACHŁANNY DOBÓR
# ═══════════════════════════════════════════════════════════════════════════

def test_equal_scores_first_template_fills_budget(generator):
    """A (1.0) i B (1.0), budżet 100 -> 10x A, 0x B."""
    a = create_template("A", health=5, base_attack=5, cost=10)
    b = create_template("B", health=3, base_attack=2, cost=5)

    army = generator.generate([a, b], max_points=100)

    assert isinstance(army, Army)
    assert army.count_by_type() == {"A": 10}
    assert army.points == 100


def test_units_per_type_capped_at_eleven(generator):
    cheap = create_template("Cheap", health=5, base_attack=5, cost=1)

    army = generator.generate([cheap], max_points=100)

    assert len(army) == 11
    assert army.points == 11


def test_cap_leaves_budget_for_next_type(generator):
    cheap = create_template("Cheap", health=50, base_attack=50, cost=1)
    filler = create_template("Filler", health=1, base_attack=1, cost=10)

    army = generator.generate([cheap, filler], max_points=100)

    assert army.count_by_type() == {"Cheap": 11, "Filler": 8}
    assert army.points == 91


def test_too_expensive_type_is_skipped(generator):
    """Typ, który się nie mieści, nie blokuje tańszych."""
    big = create_template("Big", health=1000, base_attack=1000, cost=200)
    small = create_template("Small", health=5, base_attack=5, cost=10)

    army = generator.generate([big, small], max_points=100)

    assert army.count_by_type() == {"Small": 10}


def test_partial_budget_then_cheaper(generator):
    big = create_template("Big", health=100, base_attack=100, cost=60)
    small = create_template("Small", health=5, base_attack=5, cost=10)

    army = generator.generate([big, small], max_points=100)

    assert army.count_by_type() == {"Big": 1, "Small": 4}
    assert army.points == 100


def test_never_exceeds_budget(generator, catalog):
    for budget in (0, 9, 10, 57, 300, 1500, 2000):
        army = generator.generate(catalog, max_points=budget)
        assert army.points <= budget
        assert army.points == sum(u.cost for u in army.units)
        assert all(count <= 11 for count in army.count_by_type().values())


def test_zero_budget_empty_army(generator, catalog):
    army = generator.generate(catalog, max_points=0)
    assert len(army) == 0
    assert army.points == 0


def test_unit_names_and_independence(generator):
    template = create_template("A", health=5, base_attack=5, cost=10)

    army = generator.generate([template], max_points=30)

    assert [u.name for u in army.units] == ["A 0", "A 1", "A 2"]
    assert all(u is not template for u in army.units)
    assert not template.has_position()

    army.units[0].attack_bonuses["X"] = 2.0
    assert "X" not in army.units[1].attack_bonuses


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ROZSTAWIENIE
# ═══════════════════════════════════════════════════════════════════════════

def test_positions_unique_and_in_placement_area(generator, catalog):
    army = generator.generate(catalog, max_points=1500)

    positions = [u.position for u in army.units]
    assert len(positions) == len(set(positions))
    assert all(0 <= p.x < 3 and 0 <= p.y < 21 for p in positions)


def test_scan_fallback_when_no_attempts():
    config = GeneratorConfig(max_placement_attempts=0)
    generator = ArmyGenerator(config, GameRNG(1))
    template = create_template("A", health=5, base_attack=5, cost=1)

    army = generator.generate([template], max_points=3)

    assert [(u.x, u.y) for u in army.units] == [(0, 0), (0, 1), (0, 2)]


def test_full_placement_area_raises():
    config = GeneratorConfig(placement_columns=1, placement_rows=2)
    generator = ArmyGenerator(config, GameRNG(1))
    template = create_template("A", health=5, base_attack=5, cost=1)

    with pytest.raises(ValueError):
        generator.generate([template], max_points=3)


def test_exactly_full_area_succeeds():
    config = GeneratorConfig(placement_columns=1, placement_rows=3, max_placement_attempts=5)
    generator = ArmyGenerator(config, GameRNG(7))
    template = create_template("A", health=5, base_attack=5, cost=1)

    army = generator.generate([template], max_points=3)

    assert {(u.x, u.y) for u in army.units} == {(0, 0), (0, 1), (0, 2)}


def test_same_seed_same_army(catalog):
    first = ArmyGenerator(rng=GameRNG(123)).generate(catalog, 1500)
    second = ArmyGenerator(rng=GameRNG(123)).generate(catalog, 1500)

    assert [(u.name, u.x, u.y) for u in first.units] == [(u.name, u.x, u.y) for u in second.units]


def test_config_from_dict():
    config = GeneratorConfig.from_dict(
        {"max_units_per_type": 5, "max_placement_attempts": None},
        {"placement_columns": 2},
    )

    assert config.max_units_per_type == 5
    assert config.max_placement_attempts == 1000
    assert config.placement_columns == 2
    assert config.placement_rows == 21


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ARMIA
# ═══════════════════════════════════════════════════════════════════════════

def test_mirror_moves_army_to_right_edge(generator):
    template = create_template("A", health=5, base_attack=5, cost=1)
    army = generator.generate([template], max_points=5)
    columns = [u.x for u in army.units]

    army.mirror(27)

    assert [u.x for u in army.units] == [26 - x for x in columns]
    assert all(24 <= u.x <= 26 for u in army.units)


def test_army_defeated_when_all_dead(generator):
    template = create_template("A", health=5, base_attack=5, cost=10)
    army = generator.generate([template], max_points=20)

    assert not army.is_defeated()
    for unit in army.units:
        unit.take_damage(100)

    assert army.is_defeated()
    assert army.living_units() == []
    assert len(army) == 2
