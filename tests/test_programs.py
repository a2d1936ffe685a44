"""
Testy dla programów ataku.

Testuje:
- MeleeProgram: reguła flanki + najkrótsza ścieżka, fallback
- RangedProgram: najsłabszy cel, remisy przez GameRNG
- IdleProgram
- assign_programs wg attack_type
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tactics.army.army import Army
from tactics.core.rng import GameRNG
from tactics.units.program import (
    IdleProgram, MeleeProgram, RangedProgram, assign_programs,
)
from tactics.units.unit import Unit


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

def create_unit(
    name: str,
    x: int = -1,
    y: int = -1,
    health: int = 20,
    base_attack: int = 5,
    attack_type: str = "melee",
) -> Unit:
    """Helper do tworzenia jednostek testowych."""
    return Unit(
        name=name,
        unit_type=name.split()[0],
        health=health,
        base_attack=base_attack,
        cost=10,
        attack_type=attack_type,
        x=x,
        y=y,
    )


@pytest.fixture
def enemies():
    """
    Armia po prawej:
        e1 (25, 0) -> rząd 1, slot 0
        e2 (26, 0) -> rząd 2, slot 0
        e3 (26, 10) -> rząd 2, slot 10
    """
    return [
        create_unit("E 1", 25, 0),
        create_unit("E 2", 26, 0),
        create_unit("E 3", 26, 10),
    ]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: MELEE
# ═══════════════════════════════════════════════════════════════════════════

def test_melee_picks_nearest_exposed_target(enemies):
    attacker = create_unit("Knight 0", 0, 0)
    program = MeleeProgram(attacker, enemies, [attacker] + enemies, is_left_side=True)

    # Kandydaci: e1 (ścieżka 26), e3 (ścieżka 37); e2 zasłonięty przez e3
    assert program.choose_target() is enemies[0]


def test_melee_attack_deals_damage(enemies):
    attacker = create_unit("Knight 0", 0, 0, base_attack=7)
    program = MeleeProgram(attacker, enemies, [attacker] + enemies, is_left_side=True)

    target = program.attack()

    assert target is enemies[0]
    assert target.health == 13
    assert program.last_result.dealt == 7


def test_melee_fallback_when_nothing_reachable(enemies):
    """Atakujący zablokowany w rogu - bije najbliższego w linii prostej."""
    attacker = create_unit("Knight 0", 0, 0)
    allies = [create_unit("Wall 0", 1, 0), create_unit("Wall 1", 0, 1)]
    program = MeleeProgram(attacker, enemies, [attacker] + allies + enemies, is_left_side=True)

    assert program.choose_target() is enemies[0]


def test_melee_right_side_sees_leftmost():
    """Atakujący z prawej: w rzędzie widać jednostkę o najmniejszym slocie."""
    near = create_unit("L 0", 0, 2)
    far = create_unit("L 1", 0, 15)
    attacker = create_unit("R 0", 26, 15)
    program = MeleeProgram(attacker, [near, far], [attacker, near, far], is_left_side=False)

    assert program.choose_target() is near


def test_melee_no_living_enemies():
    dead = create_unit("E 0", 25, 0, health=0)
    attacker = create_unit("Knight 0", 0, 0)
    program = MeleeProgram(attacker, [dead], [attacker, dead], is_left_side=True)

    assert program.attack() is None
    assert program.last_result is None


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RANGED
# ═══════════════════════════════════════════════════════════════════════════

def test_ranged_targets_weakest():
    enemies = [
        create_unit("E 0", health=10),
        create_unit("E 1", health=3),
        create_unit("E 2", health=8),
    ]
    archer = create_unit("Archer 0", base_attack=2, attack_type="ranged")
    program = RangedProgram(archer, enemies, GameRNG(1))

    target = program.attack()

    assert target is enemies[1]
    assert target.health == 1


def test_ranged_ignores_dead():
    enemies = [create_unit("E 0", health=0), create_unit("E 1", health=9)]
    program = RangedProgram(create_unit("Archer 0"), enemies, GameRNG(1))

    assert program.choose_target() is enemies[1]


def test_ranged_tie_is_deterministic():
    def pick(seed):
        enemies = [create_unit(f"E {i}", health=5) for i in range(4)]
        program = RangedProgram(create_unit("Archer 0"), enemies, GameRNG(seed))
        return program.choose_target().name

    assert pick(99) == pick(99)


def test_ranged_no_enemies():
    program = RangedProgram(create_unit("Archer 0"), [], GameRNG(1))
    assert program.attack() is None


# ═══════════════════════════════════════════════════════════════════════════
# TEST: IDLE I PRZYPISANIE
# ═══════════════════════════════════════════════════════════════════════════

def test_idle_never_attacks():
    program = IdleProgram(create_unit("Dummy 0"))
    assert program.attack() is None


def test_assign_programs_by_attack_type():
    left = Army(units=[
        create_unit("Knight 0", 0, 0),
        create_unit("Archer 0", 1, 0, attack_type="ranged"),
    ])
    right = Army(units=[create_unit("E 0", 26, 0)])
    battlefield = left.units + right.units

    assign_programs(left, right, battlefield, is_left_side=True, rng=GameRNG(1))

    knight, archer = left.units
    assert isinstance(knight.program, MeleeProgram)
    assert knight.program.is_left_side
    assert knight.program.unit is knight
    assert isinstance(archer.program, RangedProgram)
    assert archer.program.enemies is right.units
