"""
Programy ataku - polityki wyboru celu przypięte do jednostek.

Pętla bitwy nie wie JAK jednostka wybiera cel. Pyta tylko:

    target = unit.program.attack()   # -> Optional[Unit]

Program wybiera cel, wykonuje atak (zadaje obrażenia) i zwraca
zaatakowaną jednostkę albo None, gdy w tej turze nie atakuje.

PROGRAMY:
═══════════════════════════════════════════════════════════════════

    IdleProgram     - nigdy nie atakuje (testy, jednostki pasywne)
    MeleeProgram    - cele z reguły flanki (get_suitable_units),
                      spośród nich najbliższy osiągalny (Dijkstra)
    RangedProgram   - dowolny żywy wróg, najpierw najsłabszy (min health)

    assign_programs() - przypisuje programy całej armii wg attack_type

UŻYCIE:
═══════════════════════════════════════════════════════════════════

    battlefield = left.units + right.units
    assign_programs(left, right, battlefield, is_left_side=True, rng=rng)
    assign_programs(right, left, battlefield, is_left_side=False, rng=rng)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, TYPE_CHECKING

from ..core.pathfinding import get_target_path
from ..core.targeting import get_suitable_units, arrange_rows
from ..combat.damage import DamageResult, calculate_damage, apply_damage

if TYPE_CHECKING:
    from .unit import Unit
    from ..army.army import Army
    from ..core.rng import GameRNG


RANGED_ATTACK_TYPES = ("ranged",)


class AttackProgram(ABC):
    """
    Bazowa klasa programu ataku.

    Attributes:
        unit: Jednostka, która wykonuje program
        last_result: Wynik ostatniego ataku (None gdy nie atakowała)
    """

    def __init__(self, unit: "Unit"):
        self.unit = unit
        self.last_result: Optional[DamageResult] = None

    @abstractmethod
    def attack(self) -> Optional["Unit"]:
        """
        Wybiera cel i wykonuje atak.

        Returns:
            Zaatakowana jednostka lub None jeśli brak ataku
        """
        pass

    def strike(self, target: "Unit") -> "Unit":
        """Zadaje obrażenia celowi i zapamiętuje wynik."""
        result = calculate_damage(self.unit, target)
        apply_damage(target, result)
        self.last_result = result
        return target


class IdleProgram(AttackProgram):
    """Program, który nigdy nie atakuje."""

    def attack(self) -> Optional["Unit"]:
        self.last_result = None
        return None


class MeleeProgram(AttackProgram):
    """
    Atak wręcz z regułą flanki.

    1. Kandydaci = get_suitable_units(rzędy armii wroga, strona atakującego)
    2. Dla każdego kandydata ścieżka Dijkstry przez pole bitwy
    3. Wybierz najkrótszą niepustą ścieżkę (remis: kolejność kandydatów)
    4. Gdy żaden kandydat nie jest osiągalny - najbliższy w linii prostej

    Attributes:
        enemies: Jednostki armii przeciwnika (żywa referencja)
        battlefield: Wszystkie jednostki obu armii (przeszkody)
        is_left_side: Czy atakujący stoi po lewej stronie
    """

    def __init__(
        self,
        unit: "Unit",
        enemies: Sequence["Unit"],
        battlefield: Sequence["Unit"],
        is_left_side: bool,
    ):
        super().__init__(unit)
        self.enemies = enemies
        self.battlefield = battlefield
        self.is_left_side = is_left_side

    def attack(self) -> Optional["Unit"]:
        self.last_result = None
        target = self.choose_target()
        if target is None:
            return None
        return self.strike(target)

    def choose_target(self) -> Optional["Unit"]:
        """Wybiera cel bez atakowania."""
        candidates = get_suitable_units(arrange_rows(self.enemies), self.is_left_side)
        if not candidates:
            return None

        best = None
        best_length = None
        for candidate in candidates:
            path = get_target_path(self.unit, candidate, self.battlefield)
            if not path:
                continue
            if best_length is None or len(path) < best_length:
                best = candidate
                best_length = len(path)

        if best is not None:
            return best

        # Nikt osiągalny - bij najbliższego w linii prostej
        return min(candidates, key=lambda c: self.unit.position.distance(c.position))


class RangedProgram(AttackProgram):
    """
    Atak dystansowy - ignoruje flankę i przeszkody.

    Priorytet: najmniej zdrowia (dobijanie).
    Przy remisie: deterministycznie losowy wybór (GameRNG).
    """

    def __init__(self, unit: "Unit", enemies: Sequence["Unit"], rng: "GameRNG"):
        super().__init__(unit)
        self.enemies = enemies
        self.rng = rng

    def attack(self) -> Optional["Unit"]:
        self.last_result = None
        target = self.choose_target()
        if target is None:
            return None
        return self.strike(target)

    def choose_target(self) -> Optional["Unit"]:
        alive = [e for e in self.enemies if e.is_alive()]
        if not alive:
            return None

        lowest = min(e.health for e in alive)
        weakest = [e for e in alive if e.health == lowest]
        if len(weakest) == 1:
            return weakest[0]

        # Sortuj po nazwie dla stabilności, potem losuj
        weakest.sort(key=lambda e: e.name)
        return self.rng.choice(weakest)


def assign_programs(
    army: "Army",
    enemy_army: "Army",
    battlefield: List["Unit"],
    is_left_side: bool,
    rng: "GameRNG",
) -> None:
    """
    Przypisuje domyślne programy wszystkim jednostkom armii.

    attack_type "ranged" -> RangedProgram, pozostałe -> MeleeProgram.

    Args:
        army: Armia, której jednostki dostają programy
        enemy_army: Armia przeciwnika
        battlefield: Wszystkie jednostki obu armii
        is_left_side: Czy `army` stoi po lewej stronie
        rng: Generator do rozstrzygania remisów
    """
    for unit in army.units:
        if unit.attack_type in RANGED_ATTACK_TYPES:
            unit.program = RangedProgram(unit, enemy_army.units, rng)
        else:
            unit.program = MeleeProgram(unit, enemy_army.units, battlefield, is_left_side)
