"""
Unit - klasa reprezentująca jednostkę na polu bitwy.

Jednostka łączy:
- Statystyki (health, base_attack, cost)
- Typ ataku i bonusy (attack_bonuses / defence_bonuses)
- Pozycję na siatce (x, y)
- Program ataku (AttackProgram) - zewnętrzne źródło decyzji

Cykl życia jednostki:
═══════════════════════════════════════════════════════════════════

    1. SZABLON
       - Z definicji YAML (ConfigLoader.load_unit -> Unit.from_config)
       - Jeden szablon na typ jednostki w katalogu
       - Pozycja nieustawiona: (-1, -1)

    2. INSTANCJA
       - Generator armii tworzy z szablonu wiele jednostek (spawn)
       - Każda dostaje własną nazwę "{unit_type} {index}"
       - Pozycja przydzielana RAZ przy rozstawieniu armii

    3. WALKA
       - health maleje pod wpływem ataków, nigdy poniżej 0

    4. ŚMIERĆ
       - health == 0 -> jednostka przestaje działać
       - Zostaje w rekordzie armii (nie jest usuwana)

Identyfikacja:
    Jednostki są porównywane po TOŻSAMOŚCI (eq=False), nie po polach.
    Dwie jednostki z tymi samymi statystykami to różne byty.

Przykład użycia:
    >>> template = Unit.from_config(loader.load_unit("knight"))
    >>> knight = template.spawn(0)
    >>> knight.name
    'Knight 0'
    >>> knight.is_alive()
    True
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..core.grid import Edge

if TYPE_CHECKING:
    from .program import AttackProgram


UNSET = -1


@dataclass(eq=False)
class Unit:
    """
    Reprezentuje jednostkę na polu bitwy.

    Attributes:
        name (str): Nazwa jednostki (np. "Knight 3")
        unit_type (str): Typ jednostki (np. "Knight")
        health (int): Aktualne zdrowie (> 0 dopóki żyje)
        base_attack (int): Bazowa siła ataku
        cost (int): Koszt w punktach armii (> 0)
        attack_type (str): Typ ataku (np. "melee", "ranged")
        attack_bonuses (Dict[str, float]): unit_type celu -> mnożnik obrażeń
        defence_bonuses (Dict[str, float]): attack_type atakującego -> mnożnik obrażeń
        x (int): Kolumna (-1 = nieustawiona)
        y (int): Wiersz (-1 = nieustawiona)
        program (Optional[AttackProgram]): Polityka wyboru celu
    """

    name: str
    unit_type: str
    health: int
    base_attack: int
    cost: int
    attack_type: str = "melee"
    attack_bonuses: Dict[str, float] = field(default_factory=dict)
    defence_bonuses: Dict[str, float] = field(default_factory=dict)
    x: int = UNSET
    y: int = UNSET
    program: Optional["AttackProgram"] = field(default=None, repr=False)

    # ─────────────────────────────────────────────────────────────────────────
    # FACTORY METHODS
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Unit":
        """
        Tworzy szablon jednostki z konfiguracji (słownika z ConfigLoader).

        Args:
            config: Słownik z load_unit() (zawiera defaults)

        Returns:
            Unit: Szablon z nieustawioną pozycją

        Example:
            >>> config = loader.load_unit("archer")
            >>> template = Unit.from_config(config)
        """
        unit_id = config.get("id", "unknown")
        unit_type = config.get("unit_type", unit_id.replace("_", " ").title())

        return cls(
            name=config.get("name", unit_type),
            unit_type=unit_type,
            health=int(config["health"]),
            base_attack=int(config["base_attack"]),
            cost=int(config["cost"]),
            attack_type=config.get("attack_type", "melee"),
            attack_bonuses=dict(config.get("attack_bonuses") or {}),
            defence_bonuses=dict(config.get("defence_bonuses") or {}),
        )

    def spawn(self, index: int) -> "Unit":
        """
        Tworzy nową, niezależną jednostkę z tego szablonu.

        Nazwa: "{unit_type} {index}". Pozycja nieustawiona.
        Słowniki bonusów są kopiowane - instancje nie współdzielą stanu.

        Args:
            index: Numer kolejny jednostki danego typu (od 0)
        """
        return Unit(
            name=f"{self.unit_type} {index}",
            unit_type=self.unit_type,
            health=self.health,
            base_attack=self.base_attack,
            cost=self.cost,
            attack_type=self.attack_type,
            attack_bonuses=dict(self.attack_bonuses),
            defence_bonuses=dict(self.defence_bonuses),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # STAN I ŻYCIE
    # ─────────────────────────────────────────────────────────────────────────

    def is_alive(self) -> bool:
        """Sprawdza czy jednostka żyje."""
        return self.health > 0

    def take_damage(self, amount: int) -> int:
        """
        Zmniejsza zdrowie, nigdy poniżej 0.

        Returns:
            int: Faktycznie odebrane zdrowie
        """
        dealt = min(self.health, max(0, amount))
        self.health -= dealt
        return dealt

    # ─────────────────────────────────────────────────────────────────────────
    # POZYCJA
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def position(self) -> Edge:
        return Edge(self.x, self.y)

    def has_position(self) -> bool:
        return self.x != UNSET and self.y != UNSET

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje jednostkę do słownika (wyniki, API)."""
        return {
            "name": self.name,
            "unit_type": self.unit_type,
            "health": self.health,
            "base_attack": self.base_attack,
            "cost": self.cost,
            "attack_type": self.attack_type,
            "position": [self.x, self.y],
            "is_alive": self.is_alive(),
        }

    def to_snapshot(self) -> Dict[str, Any]:
        """Pełny snapshot do logu startu bitwy."""
        result = self.to_dict()
        result["attack_bonuses"] = dict(self.attack_bonuses)
        result["defence_bonuses"] = dict(self.defence_bonuses)
        return result

    def __repr__(self) -> str:
        return f"Unit({self.name!r}, hp={self.health}, atk={self.base_attack}, at=({self.x}, {self.y}))"
