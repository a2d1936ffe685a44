"""
Prostokątna siatka pola bitwy i reguły poprawności współrzędnych.

Pole bitwy to siatka WIDTH x HEIGHT kratek (domyślnie 27 x 21).
Każda jednostka zajmuje dokładnie jedną kratkę (x, y).

Układ siatki:
    x = kolumna (0 = lewa krawędź, 26 = prawa krawędź)
    y = wiersz  (0 = góra, 20 = dół)

    y=0:  (0,0) (1,0) (2,0) ... (26,0)
    y=1:  (0,1) (1,1) (2,1) ... (26,1)
    ...

Sąsiedztwo (4 kierunki, bez przekątnych):
    Kierunek   (dx, dy)
    ─────────────────────
    W  (←)     (-1,  0)
    E  (→)     (+1,  0)
    N  (↑)     ( 0, -1)
    S  (↓)     ( 0, +1)

Zajętość:
    Nie trzymamy stałego indeksu zajętości - zbiór zajętych pól
    jest budowany na nowo z żywych jednostek przy każdym zapytaniu
    (patrz occupied_cells). Klucze to Edge (porównywane strukturalnie),
    nie sformatowane stringi "x,y".

Przykład użycia:
    >>> occupied = {Edge(1, 1)}
    >>> is_valid(0, 0, occupied)
    True
    >>> is_valid(1, 1, occupied)
    False
    >>> is_valid(27, 0, occupied)
    False
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..units.unit import Unit


# Wymiary siatki ścieżek
WIDTH = 27
HEIGHT = 21

# Wymiary siatki rozstawienia armii (3 kolumny x 21 wierszy)
PLACEMENT_COLUMNS = 3
PLACEMENT_ROWS = 21

# Liczba rzędów w przestrzeni adresowej selektora celów
TARGET_ROWS = 3

# Kolejność: W, E, N, S
DIRECTIONS: List[Tuple[int, int]] = [
    (-1, 0),   # W
    (+1, 0),   # E
    (0, -1),   # N
    (0, +1),   # S
]


@dataclass
class GridConfig:
    """
    Wymiary siatek silnika.

    Attributes:
        width (int): Szerokość siatki ścieżek
        height (int): Wysokość siatki ścieżek
        placement_columns (int): Kolumny pola rozstawienia
        placement_rows (int): Wiersze pola rozstawienia
        target_rows (int): Rzędy selektora celów
    """
    width: int = WIDTH
    height: int = HEIGHT
    placement_columns: int = PLACEMENT_COLUMNS
    placement_rows: int = PLACEMENT_ROWS
    target_rows: int = TARGET_ROWS

    @classmethod
    def from_dict(cls, grid: Dict[str, Any]) -> "GridConfig":
        """Z sekcji `grid` pliku defaults.yaml (brakujące klucze = stałe)."""
        return cls(**{k: v for k, v in grid.items() if k in cls.__dataclass_fields__ and v is not None})

    def to_dict(self) -> Dict[str, int]:
        return {
            "width": self.width,
            "height": self.height,
            "placement_columns": self.placement_columns,
            "placement_rows": self.placement_rows,
            "target_rows": self.target_rows,
        }


@dataclass(frozen=True)
class Edge:
    """
    Pojedyncza kratka siatki (x, y).

    Używana jako krok ścieżki oraz jako wskaźnik poprzednika
    w algorytmie Dijkstry. Niemutowalna - może być kluczem
    w słowniku lub elementem zbioru.

    Attributes:
        x (int): Kolumna
        y (int): Wiersz
    """
    x: int
    y: int

    def neighbors(self) -> List["Edge"]:
        """
        Zwraca 4 sąsiadów ortogonalnych (bez sprawdzania granic).

        Returns:
            List[Edge]: Sąsiedzi w kolejności W, E, N, S
        """
        return [Edge(self.x + dx, self.y + dy) for dx, dy in DIRECTIONS]

    def distance(self, other: "Edge") -> int:
        """
        Odległość Manhattan (liczba kroków bez przeszkód).

        Example:
            >>> Edge(0, 0).distance(Edge(3, 4))
            7
        """
        return abs(self.x - other.x) + abs(self.y - other.y)

    def to_list(self) -> List[int]:
        """Serializuje do [x, y]."""
        return [self.x, self.y]

    def __repr__(self) -> str:
        return f"Edge({self.x}, {self.y})"


def is_valid(
    x: int,
    y: int,
    occupied: Set[Edge],
    width: int = WIDTH,
    height: int = HEIGHT,
) -> bool:
    """
    Sprawdza czy na kratkę (x, y) można wejść.

    Kratka jest poprawna jeśli:
    - Leży w granicach siatki: 0 <= x < width, 0 <= y < height
    - Nie jest zajęta

    Args:
        x: Kolumna
        y: Wiersz
        occupied: Zbiór zajętych kratek
        width: Szerokość siatki
        height: Wysokość siatki

    Returns:
        bool: True jeśli kratka jest w granicach i wolna
    """
    return 0 <= x < width and 0 <= y < height and Edge(x, y) not in occupied


def in_bounds(x: int, y: int, width: int = WIDTH, height: int = HEIGHT) -> bool:
    """Sprawdza tylko granice siatki (bez zajętości)."""
    return 0 <= x < width and 0 <= y < height


def occupied_cells(
    units: Iterable["Unit"],
    exclude: Optional[Iterable["Unit"]] = None,
) -> Set[Edge]:
    """
    Buduje zbiór kratek zajętych przez żywe jednostki.

    Martwe jednostki nie blokują ruchu. Jednostki z `exclude`
    (np. atakujący i jego cel) są pomijane, porównanie po tożsamości.

    Args:
        units: Wszystkie jednostki na polu bitwy (obie armie)
        exclude: Jednostki do pominięcia

    Returns:
        Set[Edge]: Zajęte kratki
    """
    skip = list(exclude or ())
    return {
        Edge(u.x, u.y)
        for u in units
        if u.is_alive() and all(u is not s for s in skip)
    }


def debug_print(
    occupied: Set[Edge],
    path: Optional[List[Edge]] = None,
    width: int = WIDTH,
    height: int = HEIGHT,
) -> str:
    """
    Zwraca tekstową reprezentację siatki do debugowania.

    Legenda:
        . = wolne pole
        X = zajęte pole
        * = krok ścieżki

    Returns:
        str: Tekstowa wizualizacja siatki
    """
    steps = set(path or [])
    lines = []
    for y in range(height):
        row = []
        for x in range(width):
            cell = Edge(x, y)
            if cell in steps:
                row.append("*")
            elif cell in occupied:
                row.append("X")
            else:
                row.append(".")
        lines.append(" ".join(row))
    return "\n".join(lines)
