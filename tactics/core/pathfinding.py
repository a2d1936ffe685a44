"""
Algorytm Dijkstry dla prostokątnej siatki pola bitwy.

Znajduje najkrótszą ścieżkę od kratki atakującego do kratki celu,
omijając kratki zajęte przez inne żywe jednostki (obu armii).

Jak działa:
    1. Odległości startują od "nieskończoności", start ma 0
    2. Kolejka priorytetowa (heapq) kluczowana skumulowaną odległością
    3. Zawsze zdejmuj kratkę z najmniejszą odległością
    4. Gdy zdjęta kratka == cel - przerwij (odległość jest już finalna)
    5. Dla każdego sąsiada: jeśli droga przez bieżącą kratkę jest
       ŚCIŚLE krótsza - zapisz odległość i poprzednika
    6. Odtwórz ścieżkę od celu do startu po wskaźnikach poprzedników

Koszt ruchu:
    Każdy krok na sąsiednią kratkę kosztuje 1, więc w praktyce jest to
    BFS. Kolejka priorytetowa zostaje, żeby dało się dodać inne koszty.

Zajęte pola:
    Wszystkie żywe jednostki POZA atakującym i celem - obaj muszą
    móc "stać" na swoich kratkach podczas odtwarzania ścieżki.

Przykład użycia:
    >>> path = get_target_path(attacker, target, all_units)
    >>> path[0] == Edge(attacker.x, attacker.y)
    True
    >>> path[-1] == Edge(target.x, target.y)
    True

Edge cases:
    - Cel nieosiągalny: zwraca pustą listę [] (to nie jest błąd)
    - Atakujący na kratce celu: zwraca [start]

Złożoność:
    O(W*H * log(W*H)) w najgorszym przypadku.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Set, TYPE_CHECKING
from dataclasses import dataclass, field
import heapq

from .grid import Edge, WIDTH, HEIGHT, is_valid, occupied_cells

if TYPE_CHECKING:
    from ..units.unit import Unit


INFINITY = float("inf")


@dataclass(order=True)
class _EdgeDistance:
    """
    Wpis kolejki priorytetowej.

    Sortowanie wyłącznie po distance, co pozwala
    używać heapq jako min-priority queue.

    Attributes:
        distance: Skumulowana odległość od startu
        position: Kratka (nie używana w sortowaniu)
    """
    distance: int
    position: Edge = field(compare=False)


def get_target_path(
    attack_unit: "Unit",
    target_unit: "Unit",
    existing_units: Sequence["Unit"],
    width: int = WIDTH,
    height: int = HEIGHT,
) -> List[Edge]:
    """
    Wyznacza najkrótszą trasę między atakującym a atakowanym.

    Args:
        attack_unit: Jednostka, która atakuje
        target_unit: Jednostka, która jest atakowana
        existing_units: Wszystkie jednostki na polu bitwy
        width: Szerokość siatki
        height: Wysokość siatki

    Returns:
        List[Edge]: Ścieżka od atakującego do celu (włącznie z oboma).
                    Pusta lista jeśli ścieżka nie istnieje.
    """
    start = Edge(attack_unit.x, attack_unit.y)
    goal = Edge(target_unit.x, target_unit.y)
    occupied = occupied_cells(existing_units, exclude=(attack_unit, target_unit))

    return find_path(start, goal, occupied, width, height)


def find_path(
    start: Edge,
    goal: Edge,
    occupied: Set[Edge],
    width: int = WIDTH,
    height: int = HEIGHT,
) -> List[Edge]:
    """
    Dijkstra na siatce z przeszkodami.

    Args:
        start: Kratka startowa
        goal: Kratka docelowa
        occupied: Zbiór kratek zablokowanych
        width: Szerokość siatki
        height: Wysokość siatki

    Returns:
        List[Edge]: Ścieżka start..goal lub [] gdy brak ścieżki
    """
    distance: Dict[Edge, float] = {start: 0}
    visited: Set[Edge] = set()
    previous: Dict[Edge, Edge] = {}

    queue: List[_EdgeDistance] = [_EdgeDistance(0, start)]

    while queue:
        current = heapq.heappop(queue)

        # Już przetworzony - pomiń (stare wpisy w kolejce)
        if current.position in visited:
            continue
        visited.add(current.position)

        if current.position == goal:
            break

        _explore_neighbors(current, occupied, distance, previous, queue, width, height)

    return _construct_path(previous, start, goal)


def _explore_neighbors(
    current: _EdgeDistance,
    occupied: Set[Edge],
    distance: Dict[Edge, float],
    previous: Dict[Edge, Edge],
    queue: List[_EdgeDistance],
    width: int,
    height: int,
) -> None:
    """Relaksacja 4 sąsiadów bieżącej kratki."""
    for neighbor in current.position.neighbors():
        if not is_valid(neighbor.x, neighbor.y, occupied, width, height):
            continue

        # Koszt ruchu = 1 (brak kosztów terenu)
        new_distance = current.distance + 1

        if new_distance < distance.get(neighbor, INFINITY):
            distance[neighbor] = new_distance
            previous[neighbor] = current.position
            heapq.heappush(queue, _EdgeDistance(new_distance, neighbor))


def _construct_path(
    previous: Dict[Edge, Edge],
    start: Edge,
    goal: Edge,
) -> List[Edge]:
    """
    Odtwarza ścieżkę od goal do start używając mapy poprzedników.

    Returns:
        List[Edge]: Ścieżka od start do goal, [] gdy łańcuch się urywa
    """
    path = []
    current = goal

    while current != start:
        path.append(current)
        prev = previous.get(current)
        if prev is None:
            return []
        current = prev

    path.append(start)
    path.reverse()
    return path


def path_length(path: List[Edge]) -> int:
    """
    Liczba kroków na ścieżce (bez kratki startowej).

    Returns:
        int: len(path) - 1, albo -1 gdy ścieżka jest pusta
    """
    return len(path) - 1 if path else -1


def find_path_next_step(
    attack_unit: "Unit",
    target_unit: "Unit",
    existing_units: Sequence["Unit"],
) -> Optional[Edge]:
    """
    Znajduje tylko następny krok na ścieżce do celu.

    Returns:
        Optional[Edge]: Następna kratka lub None jeśli brak ścieżki
                        albo atakujący już stoi na celu
    """
    path = get_target_path(attack_unit, target_unit, existing_units)

    if len(path) < 2:
        return None

    return path[1]
