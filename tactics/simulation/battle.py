"""
Pętla bitwy - rozstrzyganie walki dwóch armii do wyeliminowania strony.

PĘTLA RUNDY:
═══════════════════════════════════════════════════════════════════

    Dopóki OBIE strony mają aktywne jednostki:

    1. LEWA strona atakuje PRAWĄ
    2. PRAWA strona atakuje LEWĄ

    Kolejność ma znaczenie: strona działająca pierwsza może wybić
    obrońców, zanim ci zdążą zaatakować w tej samej rundzie.

TURA STRONY:
═══════════════════════════════════════════════════════════════════

    • Snapshot aktywnych jednostek strony
    • Sortowanie malejąco po base_attack (stabilne - remis zostaje
      w kolejności armii)
    • Dla każdej jednostki:
        - martwa -> usuń z aktywnych, dalej
        - target = unit.program.attack()
        - target nie None i w aktywnych obrońcach:
            -> battle_log.record(attacker, target)
            -> cel martwy -> usuń z aktywnych obrońców

ZAKOŃCZENIE:
═══════════════════════════════════════════════════════════════════

    Pętla kończy się, gdy programy ataku wybierają żywe cele -
    każdy trafiony atak zadaje >= 1 obrażeń. Programy, które w
    nieskończoność zwracają None, mogą zatrzymać bitwę na zawsze;
    BattleConfig.max_rounds pozwala to ograniczyć (domyślnie brak limitu).

    Wyjątek rzucony przez program ataku (także KeyboardInterrupt)
    przerywa całą bitwę - nie ma częściowego wyniku.

Przykład użycia:
    >>> simulator = BattleSimulator(PrintBattleLog())
    >>> result = simulator.simulate(player_army, computer_army)
    >>> result.winner
    'left'
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..core.config_loader import get_value
from ..events.event_logger import BattleLog, EventLogger

if TYPE_CHECKING:
    from ..army.army import Army
    from ..units.unit import Unit


LEFT = "left"
RIGHT = "right"


@dataclass
class BattleConfig:
    """
    Konfiguracja pętli bitwy.

    Attributes:
        max_rounds (Optional[int]): Limit rund (None = do wyeliminowania strony)
    """
    max_rounds: Optional[int] = None

    @classmethod
    def from_dict(cls, battle: Dict[str, Any]) -> "BattleConfig":
        """Z sekcji `battle` pliku defaults.yaml."""
        return cls(max_rounds=get_value(battle, "max_rounds", None))


@dataclass
class BattleResult:
    """
    Wynik bitwy.

    Attributes:
        winner (Optional[str]): "left", "right" lub None (limit rund / brak jednostek)
        rounds (int): Liczba rozegranych rund
        survivors (List[Unit]): Żywe jednostki po bitwie
    """
    winner: Optional[str]
    rounds: int
    survivors: List["Unit"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": self.winner,
            "rounds": self.rounds,
            "survivors": [u.to_dict() for u in self.survivors],
        }


class BattleSimulator:
    """
    Rozstrzyga bitwę między armią gracza (lewa) i komputera (prawa).

    Attributes:
        battle_log (BattleLog): Odbiorca raportów o atakach
        config (BattleConfig): Konfiguracja
        events (Optional[EventLogger]): Opcjonalny log rund, śmierci, startu i końca
    """

    def __init__(
        self,
        battle_log: BattleLog,
        config: Optional[BattleConfig] = None,
        events: Optional[EventLogger] = None,
    ):
        self.battle_log = battle_log
        self.config = config or BattleConfig()
        self.events = events

    # ─────────────────────────────────────────────────────────────────────────
    # GŁÓWNA PĘTLA
    # ─────────────────────────────────────────────────────────────────────────

    def simulate(self, player_army: "Army", computer_army: "Army") -> BattleResult:
        """
        Symuluje bitwę do wyeliminowania jednej ze stron.

        Args:
            player_army: Armia gracza (lewa strona, działa pierwsza)
            computer_army: Armia komputera (prawa strona)

        Returns:
            BattleResult: Zwycięzca, liczba rund, ocaleni

        Complexity:
            O(rounds * n log n), n = liczba jednostek strony
        """
        player_units = list(player_army.units)
        computer_units = list(computer_army.units)

        if self.events is not None:
            self.events.log_battle_start(
                [u.to_snapshot() for u in player_units],
                [u.to_snapshot() for u in computer_units],
            )

        rounds = 0
        while player_units and computer_units:
            if self.config.max_rounds is not None and rounds >= self.config.max_rounds:
                break
            rounds += 1
            if self.events is not None:
                self.events.log_round_start(rounds)

            self._execute_attacks(player_units, computer_units)
            self._execute_attacks(computer_units, player_units)

        result = BattleResult(
            winner=self._winner(player_army, computer_army),
            rounds=rounds,
            survivors=player_army.living_units() + computer_army.living_units(),
        )

        if self.events is not None:
            self.events.log_battle_end(
                result.winner,
                rounds,
                [u.to_dict() for u in result.survivors],
            )

        return result

    def _execute_attacks(
        self,
        attacking_units: List["Unit"],
        defending_units: List["Unit"],
    ) -> None:
        """
        Tura jednej strony.

        Modyfikuje obie listy w miejscu (usuwa martwe jednostki).
        """
        # sorted() jest stabilny - remis zostaje w kolejności armii
        ordered = sorted(attacking_units, key=lambda u: u.base_attack, reverse=True)

        for attacker in ordered:
            if not attacker.is_alive():
                _discard(attacking_units, attacker)
                continue

            target = attacker.program.attack() if attacker.program is not None else None

            if target is not None and _contains(defending_units, target):
                self.battle_log.record(attacker, target)
                if not target.is_alive():
                    _discard(defending_units, target)
                    if self.events is not None:
                        self.events.log_death(target.name, attacker.name)

    @staticmethod
    def _winner(player_army: "Army", computer_army: "Army") -> Optional[str]:
        player_alive = not player_army.is_defeated()
        computer_alive = not computer_army.is_defeated()

        if player_alive and not computer_alive:
            return LEFT
        if computer_alive and not player_alive:
            return RIGHT
        return None


def _contains(units: List["Unit"], unit: "Unit") -> bool:
    return any(u is unit for u in units)


def _discard(units: List["Unit"], unit: "Unit") -> None:
    for index, u in enumerate(units):
        if u is unit:
            del units[index]
            return
