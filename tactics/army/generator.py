"""
Generator armii komputera pod limit punktów.

ALGORYTM:
═══════════════════════════════════════════════════════════════════

    1. RANKING (raz na instancję generatora)
       ─────────────────────────────────────────────────────────
       • effectiveness = (base_attack + health) / cost
       • Wynik liczony RAZ dla szablonu i trzymany jako para
         (szablon, wynik) - bez słownika kluczowanego obiektem
       • Sortowanie malejąco, stabilne (remis = kolejność katalogu)

    2. ZACHŁANNY DOBÓR
       ─────────────────────────────────────────────────────────
       • Dla każdego szablonu w kolejności rankingu:
           count = min(11, (max_points - spent) // cost)
       • count == 0 -> pomiń, kolejny (tańszy) szablon może się zmieścić
       • Twórz count jednostek: "{unit_type} 0", "{unit_type} 1", ...

    3. ROZSTAWIENIE
       ─────────────────────────────────────────────────────────
       • Losuj (x, y), x ∈ [0, 3), y ∈ [0, 21) aż trafisz wolne pole
       • Po max_placement_attempts nieudanych losowaniach:
         deterministyczny skan wolnych pól (x, potem y)
       • Brak wolnych pól -> ValueError

MEMOIZACJA:
═══════════════════════════════════════════════════════════════════

    Ranking jest cache'owany w instancji. Kolejne generate()
    (np. z innym max_points) powtarzają tylko krok 2 i 3.
    Gdy podany katalog ma inne typy niż zrankowany - ranking od nowa.

Przykład użycia:
    >>> generator = ArmyGenerator(rng=GameRNG(42))
    >>> army = generator.generate(loader.load_catalog(), max_points=1500)
    >>> army.points <= 1500
    True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, TYPE_CHECKING

from ..core.grid import Edge, PLACEMENT_COLUMNS, PLACEMENT_ROWS
from ..core.rng import GameRNG
from ..core.config_loader import get_value
from .army import Army

if TYPE_CHECKING:
    from ..units.unit import Unit


@dataclass
class GeneratorConfig:
    """
    Konfiguracja generatora armii.

    Attributes:
        max_units_per_type (int): Limit jednostek jednego typu (stos)
        placement_columns (int): Szerokość pola rozstawienia
        placement_rows (int): Wysokość pola rozstawienia
        max_placement_attempts (int): Losowania przed skanem wolnych pól
    """
    max_units_per_type: int = 11
    placement_columns: int = PLACEMENT_COLUMNS
    placement_rows: int = PLACEMENT_ROWS
    max_placement_attempts: int = 1000

    @classmethod
    def from_dict(cls, army: Dict[str, Any], grid: Optional[Dict[str, Any]] = None) -> "GeneratorConfig":
        """Z sekcji `army` i `grid` pliku defaults.yaml."""
        grid = grid or {}
        return cls(
            max_units_per_type=get_value(army, "max_units_per_type", 11),
            placement_columns=get_value(grid, "placement_columns", PLACEMENT_COLUMNS),
            placement_rows=get_value(grid, "placement_rows", PLACEMENT_ROWS),
            max_placement_attempts=get_value(army, "max_placement_attempts", 1000),
        )


def effectiveness(unit: "Unit") -> float:
    """
    Wartość jednostki na punkt kosztu.

    Raises:
        ValueError: Gdy koszt nie jest dodatni
    """
    if unit.cost <= 0:
        raise ValueError(f"Unit '{unit.unit_type}' has non-positive cost {unit.cost}")
    return (unit.base_attack + unit.health) / unit.cost


class ArmyGenerator:
    """
    Buduje armię komputera z katalogu szablonów.

    Attributes:
        config (GeneratorConfig): Limity i wymiary
        rng (GameRNG): Generator pozycji
        _ranked (Optional[List[Tuple[Unit, float]]]): Cache rankingu
        _ranked_types (Tuple[str, ...]): Typy katalogu, dla którego jest ranking
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        rng: Optional[GameRNG] = None,
    ):
        self.config = config or GeneratorConfig()
        self.rng = rng or GameRNG()
        self._ranked: Optional[List[Tuple["Unit", float]]] = None
        self._ranked_types: Tuple[str, ...] = ()

    # ─────────────────────────────────────────────────────────────────────────
    # RANKING
    # ─────────────────────────────────────────────────────────────────────────

    def rank(self, unit_list: Sequence["Unit"]) -> List[Tuple["Unit", float]]:
        """
        Zwraca (szablon, effectiveness) posortowane malejąco.

        Cache'owane - dla tego samego katalogu liczone tylko raz.

        Args:
            unit_list: Katalog - jeden szablon na typ

        Returns:
            List[Tuple[Unit, float]]: Ranking (remis = kolejność katalogu)
        """
        types = tuple(u.unit_type for u in unit_list)
        if self._ranked is None or types != self._ranked_types:
            scored = [(unit, effectiveness(unit)) for unit in unit_list]
            # sort() jest stabilny - remisy zostają w kolejności katalogu
            scored.sort(key=lambda pair: pair[1], reverse=True)
            self._ranked = scored
            self._ranked_types = types
        return list(self._ranked)

    def reset(self) -> None:
        """Czyści cache rankingu."""
        self._ranked = None
        self._ranked_types = ()

    # ─────────────────────────────────────────────────────────────────────────
    # GENEROWANIE
    # ─────────────────────────────────────────────────────────────────────────

    def generate(self, unit_list: Sequence["Unit"], max_points: int) -> Army:
        """
        Formuje armię komputera.

        Args:
            unit_list: Katalog - jeden szablon każdego typu
            max_points: Maksymalna suma kosztów wszystkich jednostek

        Returns:
            Army: Armia z rozstawionymi jednostkami; points <= max_points

        Complexity:
            O(n * m), n = liczba typów, m = limit jednostek na typ
        """
        selected: List["Unit"] = []
        current_points = 0

        for template, _score in self.rank(unit_list):
            count = self._max_units_to_add(template, max_points, current_points)
            if count <= 0:
                continue
            selected.extend(template.spawn(index) for index in range(count))
            current_points += count * template.cost

        self._assign_coordinates(selected)

        return Army(units=selected, points=current_points)

    def _max_units_to_add(self, unit: "Unit", max_points: int, current_points: int) -> int:
        """Ile jednostek danego typu jeszcze się zmieści."""
        return min(self.config.max_units_per_type, (max_points - current_points) // unit.cost)

    # ─────────────────────────────────────────────────────────────────────────
    # ROZSTAWIENIE
    # ─────────────────────────────────────────────────────────────────────────

    def _assign_coordinates(self, units: List["Unit"]) -> None:
        """
        Przydziela każdej jednostce unikalną kratkę pola rozstawienia.

        Raises:
            ValueError: Gdy jednostek jest więcej niż kratek
        """
        occupied: Set[Edge] = set()

        for unit in units:
            cell = self._random_free_cell(occupied)
            if cell is None:
                cell = self._first_free_cell(occupied)
            if cell is None:
                raise ValueError(
                    f"No free placement cell for '{unit.name}' "
                    f"({len(units)} units, "
                    f"{self.config.placement_columns * self.config.placement_rows} cells)"
                )
            occupied.add(cell)
            unit.set_position(cell.x, cell.y)

    def _random_free_cell(self, occupied: Set[Edge]) -> Optional[Edge]:
        for _ in range(self.config.max_placement_attempts):
            cell = Edge(
                self.rng.randrange(self.config.placement_columns),
                self.rng.randrange(self.config.placement_rows),
            )
            if cell not in occupied:
                return cell
        return None

    def _first_free_cell(self, occupied: Set[Edge]) -> Optional[Edge]:
        for x in range(self.config.placement_columns):
            for y in range(self.config.placement_rows):
                cell = Edge(x, y)
                if cell not in occupied:
                    return cell
        return None
