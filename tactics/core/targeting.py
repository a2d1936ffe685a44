"""
Selektor celów ataku wręcz (reguła flanki).

Armia przeciwnika jest ułożona w rzędy (3 rzędy). Każdy rząd to lista
slotów - w slocie stoi jednostka albo None (pusty slot).

REGUŁA:
═══════════════════════════════════════════════════════════════════

    Jednostka jest dostępna do ataku w swoim rzędzie, jeśli żadna
    INNA żywa jednostka tej samej armii nie stoi między nią
    a stroną atakującego.

    Atakujący po LEWEJ stronie (atakowana armia po prawej):
        -> w każdym rzędzie tylko SKRAJNIE PRAWA żywa jednostka

    Atakujący po PRAWEJ stronie:
        -> w każdym rzędzie tylko SKRAJNIE LEWA żywa jednostka

    Pusty slot (None) ani martwa jednostka NIE blokują linii ataku.

    Przykład (jeden rząd, atakujący z lewej):
        slot:   0    1    2     3    4
               [A]  [B]  [x]   [D]  [E]      x = martwy
        wynik: [E]

UŻYCIE:
═══════════════════════════════════════════════════════════════════

    rows = arrange_rows(enemy_army.units)   # rząd = x mod 3, slot = y
    targets = get_suitable_units(rows, is_left_army_target=True)
"""

from __future__ import annotations
from typing import List, Optional, Sequence, TYPE_CHECKING

from .grid import TARGET_ROWS, PLACEMENT_ROWS

if TYPE_CHECKING:
    from ..units.unit import Unit


Row = Sequence[Optional["Unit"]]


def get_suitable_units(
    units_by_row: Sequence[Row],
    is_left_army_target: bool,
) -> List["Unit"]:
    """
    Wyznacza jednostki przeciwnika dostępne do ataku.

    Args:
        units_by_row: Rzędy jednostek przeciwnika (None = pusty slot)
        is_left_army_target: True gdy atakujący stoi po lewej stronie

    Returns:
        List[Unit]: Cele w kolejności rząd po rzędzie, od lewej do prawej

    Complexity:
        O(rows * units_per_row)
    """
    suitable: List["Unit"] = []

    for row in units_by_row:
        suitable.extend(_find_suitable_units_in_row(row, is_left_army_target))

    return suitable


def _find_suitable_units_in_row(row: Row, is_left_army_target: bool) -> List["Unit"]:
    """Szuka dostępnych celów w jednym rzędzie."""
    result = []

    for index, unit in enumerate(row):
        if not _is_standing(unit):
            continue

        if is_left_army_target:
            exposed = _is_rightmost(row, index)
        else:
            exposed = _is_leftmost(row, index)

        if exposed:
            result.append(unit)

    return result


def _is_standing(unit: Optional["Unit"]) -> bool:
    return unit is not None and unit.is_alive()


def _is_rightmost(row: Row, index: int) -> bool:
    """Nic żywego na prawo od slotu `index`."""
    return not any(_is_standing(u) for u in row[index + 1:])


def _is_leftmost(row: Row, index: int) -> bool:
    """Nic żywego na lewo od slotu `index`."""
    return not any(_is_standing(u) for u in row[:index])


def arrange_rows(
    units: Sequence["Unit"],
    rows: int = TARGET_ROWS,
    row_length: int = PLACEMENT_ROWS,
) -> List[List[Optional["Unit"]]]:
    """
    Układa armię w przestrzeni adresowej selektora celów.

    Rząd = kolumna rozstawienia (x mod rows), slot = wiersz siatki (y).

    Kierunek flanki biegnie więc wzdłuż osi y, nie x:
    "skrajnie prawa" jednostka rzędu to ta o NAJWIĘKSZYM y,
    "skrajnie lewa" - o najmniejszym y. Strona pola bitwy (x)
    wybiera tylko, który z tych końców jest odsłonięty.
    Jednostki bez pozycji (-1, -1) oraz poza zakresem są pomijane.

    Args:
        units: Jednostki jednej armii
        rows: Liczba rzędów
        row_length: Długość rzędu

    Returns:
        List[List[Optional[Unit]]]: rows x row_length, None = pusty slot
    """
    grid: List[List[Optional["Unit"]]] = [[None] * row_length for _ in range(rows)]

    for unit in units:
        if unit.x < 0 or not 0 <= unit.y < row_length:
            continue
        slot = grid[unit.x % rows]
        # Żywa jednostka ma pierwszeństwo nad martwą na tym samym slocie
        if slot[unit.y] is None or not slot[unit.y].is_alive():
            slot[unit.y] = unit

    return grid
