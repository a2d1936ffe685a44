"""
Testy dla selektora celów (reguła flanki).

Testuje:
- Skrajnie prawa / lewa żywa jednostka w rzędzie
- Martwe i puste sloty nie blokują
- Kolejność wyniku (rząd po rzędzie, od lewej)
- arrange_rows
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tactics.core.targeting import get_suitable_units, arrange_rows
from tactics.units.unit import Unit


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

def create_unit(name: str, health: int = 10, x: int = -1, y: int = -1) -> Unit:
    """Helper do tworzenia jednostek testowych."""
    return Unit(name=name, unit_type="test", health=health, base_attack=1, cost=1, x=x, y=y)


@pytest.fixture
def row_with_dead_middle():
    """Rząd 0..4, jednostka 2 martwa."""
    units = [create_unit(f"u{i}") for i in range(5)]
    units[2].health = 0
    return units


# ═══════════════════════════════════════════════════════════════════════════
# TEST: REGUŁA FLANKI
# ═══════════════════════════════════════════════════════════════════════════

def test_left_attacker_gets_rightmost(row_with_dead_middle):
    """Atakujący z lewej -> tylko skrajnie prawa jednostka."""
    targets = get_suitable_units([row_with_dead_middle], is_left_army_target=True)
    assert targets == [row_with_dead_middle[4]]


def test_right_attacker_gets_leftmost(row_with_dead_middle):
    """Atakujący z prawej -> tylko skrajnie lewa jednostka."""
    targets = get_suitable_units([row_with_dead_middle], is_left_army_target=False)
    assert targets == [row_with_dead_middle[0]]


def test_dead_unit_does_not_block():
    """Martwa skrajna jednostka odsłania sąsiada."""
    row = [create_unit("a"), create_unit("b"), create_unit("c", health=0)]

    assert get_suitable_units([row], True) == [row[1]]


def test_empty_slots_do_not_block():
    row = [None, create_unit("a"), None]

    assert get_suitable_units([row], True) == [row[1]]
    assert get_suitable_units([row], False) == [row[1]]


def test_dead_and_missing_never_returned():
    row = [None, create_unit("dead", health=0), None]

    assert get_suitable_units([row], True) == []
    assert get_suitable_units([row], False) == []


def test_rows_are_scanned_in_order():
    """Wynik: rząd po rzędzie."""
    a, b, c, d = (create_unit(n) for n in "abcd")
    rows = [[a, b], [None, None], [c, None, d]]

    assert get_suitable_units(rows, True) == [b, d]
    assert get_suitable_units(rows, False) == [a, c]


def test_single_unit_row_is_always_exposed():
    unit = create_unit("solo")
    assert get_suitable_units([[unit]], True) == [unit]
    assert get_suitable_units([[unit]], False) == [unit]


def test_no_rows():
    assert get_suitable_units([], True) == []


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ARRANGE ROWS
# ═══════════════════════════════════════════════════════════════════════════

def test_arrange_rows_uses_column_and_row():
    a = create_unit("a", x=0, y=5)
    b = create_unit("b", x=1, y=3)
    c = create_unit("c", x=25, y=7)   # 25 % 3 == 1
    unplaced = create_unit("unplaced")

    rows = arrange_rows([a, b, c, unplaced])

    assert len(rows) == 3
    assert all(len(row) == 21 for row in rows)
    assert rows[0][5] is a
    assert rows[1][3] is b
    assert rows[1][7] is c
    assert sum(u is not None for row in rows for u in row) == 3


def test_arrange_rows_feeds_selector():
    """Rząd 1: b (y=3) i c (y=7) -> z lewej widać c, z prawej b."""
    b = create_unit("b", x=1, y=3)
    c = create_unit("c", x=25, y=7)

    rows = arrange_rows([b, c])

    assert get_suitable_units(rows, True) == [c]
    assert get_suitable_units(rows, False) == [b]


def test_flank_order_runs_along_y():
    """Ten sam x (jeden rząd): z lewej odsłonięty większy y, z prawej mniejszy."""
    low = create_unit("low", x=24, y=2)
    high = create_unit("high", x=24, y=9)

    rows = arrange_rows([high, low])

    assert get_suitable_units(rows, True) == [high]
    assert get_suitable_units(rows, False) == [low]
