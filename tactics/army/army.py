"""
Army - kolekcja jednostek jednej strony bitwy.

Armia posiada swoje jednostki na wyłączność - żadna jednostka nie
należy do dwóch armii. Kolejność jednostek nie ma znaczenia dla reguł,
ale jest stabilna (kolejność tworzenia), co daje determinizm.

Punkty armii (points):
    Suma kosztów jednostek rozstawionych przy budowie armii.
    NIE maleje, gdy jednostki giną w bitwie.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, TYPE_CHECKING

from ..core.grid import WIDTH

if TYPE_CHECKING:
    from ..units.unit import Unit


@dataclass(eq=False)
class Army:
    """
    Armia jednej strony.

    Attributes:
        units (List[Unit]): Wszystkie jednostki (także martwe)
        points (int): Suma kosztów przy budowie
    """
    units: List["Unit"] = field(default_factory=list)
    points: int = 0

    def living_units(self) -> List["Unit"]:
        """Zwraca listę żywych jednostek."""
        return [u for u in self.units if u.is_alive()]

    def is_defeated(self) -> bool:
        """Czy armia nie ma już żywych jednostek."""
        return not any(u.is_alive() for u in self.units)

    def count_by_type(self) -> Dict[str, int]:
        """Liczba jednostek per unit_type (kolejność pierwszego wystąpienia)."""
        counts: Dict[str, int] = {}
        for unit in self.units:
            counts[unit.unit_type] = counts.get(unit.unit_type, 0) + 1
        return counts

    def mirror(self, width: int = WIDTH) -> "Army":
        """
        Przenosi armię na przeciwną krawędź pola bitwy.

        Generator rozstawia jednostki w kolumnach 0..2 (lewa krawędź).
        Armia grająca po prawej stronie dostaje x -> width - 1 - x.

        Returns:
            Army: self (dla łańcuchowania)
        """
        for unit in self.units:
            if unit.has_position():
                unit.set_position(width - 1 - unit.x, unit.y)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": self.points,
            "units": [u.to_dict() for u in self.units],
            "counts": self.count_by_type(),
        }

    def __len__(self) -> int:
        return len(self.units)
