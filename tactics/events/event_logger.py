"""
Log bitwy - odbiorca raportów o atakach + zapis zdarzeń do JSON.

Pętla bitwy raportuje KAŻDY rozstrzygnięty atak jednym wywołaniem:

    battle_log.record(attacker, target)

BattleLog to interfejs. Implementacje:
    EventLogger     - zbiera zdarzenia, zapis do JSON (replay)
    PrintBattleLog  - wypisuje ataki na konsolę

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    BATTLE_START
    ─────────────────────────────────────────────────────────────
    Początek bitwy.
    Data: left (lista snapshotów), right (lista snapshotów)

    BATTLE_END
    ─────────────────────────────────────────────────────────────
    Koniec bitwy.
    Data: winner, total_rounds, survivors

    ROUND_START
    ─────────────────────────────────────────────────────────────
    Początek rundy.

    UNIT_ATTACK
    ─────────────────────────────────────────────────────────────
    Rozstrzygnięty atak.
    Data: target_health (zdrowie celu po ataku), damage (jeśli znane)

    UNIT_DEATH
    ─────────────────────────────────────────────────────────────
    Śmierć jednostki.
    Data: killer

    ARMY_GENERATED
    ─────────────────────────────────────────────────────────────
    Wygenerowana armia komputera.
    Data: points, counts

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "seed": 12345,
        "grid": {"width": 27, "height": 21},
        "timestamp": "2024-01-01T12:00:00"
    },
    "initial_state": {"left": [...], "right": [...]},
    "events": [
        {"round": 1, "type": "UNIT_ATTACK", "unit_id": "Knight 0",
         "target_id": "Archer 3", "data": {"target_health": 4}},
        ...
    ],
    "final_state": {"winner": "left", "total_rounds": 7, "survivors": [...]}
}
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from datetime import datetime
import json
from pathlib import Path

from ..core.grid import WIDTH, HEIGHT

if TYPE_CHECKING:
    from ..units.unit import Unit


class BattleLog(ABC):
    """Odbiorca raportów o atakach."""

    @abstractmethod
    def record(self, attacker: "Unit", target: "Unit") -> None:
        """
        Rejestruje rozstrzygnięty atak.

        Args:
            attacker: Jednostka atakująca
            target: Zaatakowana jednostka (zdrowie już po ataku)
        """
        pass


class PrintBattleLog(BattleLog):
    """Wypisuje każdy atak na konsolę."""

    def record(self, attacker: "Unit", target: "Unit") -> None:
        status = "✝" if not target.is_alive() else f"{target.health} HP"
        print(
            f"  {attacker.name} @ ({attacker.x}, {attacker.y}) -> "
            f"{target.name} @ ({target.x}, {target.y}) [{status}]"
        )


class EventType(Enum):
    """Typ zdarzenia w bitwie."""

    # Bitwa
    BATTLE_START = auto()
    BATTLE_END = auto()
    ROUND_START = auto()

    # Jednostki
    UNIT_ATTACK = auto()
    UNIT_DEATH = auto()

    # Armie
    ARMY_GENERATED = auto()


@dataclass
class BattleEvent:
    """
    Pojedyncze zdarzenie w bitwie.

    Attributes:
        round (int): Numer rundy (0 = przed bitwą)
        event_type (EventType): Typ zdarzenia
        unit_id (Optional[str]): Nazwa jednostki (jeśli dotyczy)
        target_id (Optional[str]): Nazwa celu (jeśli dotyczy)
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    round: int
    event_type: EventType
    unit_id: Optional[str] = None
    target_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result = {
            "round": self.round,
            "type": self.event_type.name,
        }

        if self.unit_id:
            result["unit_id"] = self.unit_id
        if self.target_id:
            result["target_id"] = self.target_id
        if self.data:
            result["data"] = self.data

        return result


class EventLogger(BattleLog):
    """
    Logger zdarzeń bitwy.

    Zbiera wszystkie zdarzenia i może je zapisać do pliku JSON.
    `current_round` ustawia pętla bitwy przez log_round_start().

    Example:
        >>> logger = EventLogger(seed=12345)
        >>> simulator = BattleSimulator(logger)
        >>> simulator.simulate(player_army, computer_army)
        >>> logger.save("output/battle_12345.json")
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        grid_width: int = WIDTH,
        grid_height: int = HEIGHT,
    ):
        self.events: List[BattleEvent] = []
        self.current_round = 0
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "seed": seed,
            "grid": {"width": grid_width, "height": grid_height},
            "timestamp": datetime.now().isoformat(),
        }
        self.initial_state: Dict[str, Any] = {}
        self.final_state: Dict[str, Any] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: BattleEvent) -> None:
        self.events.append(event)

    def log_event(
        self,
        event_type: EventType,
        unit_id: Optional[str] = None,
        target_id: Optional[str] = None,
        **data: Any,
    ) -> BattleEvent:
        """
        Tworzy i loguje zdarzenie w bieżącej rundzie.

        Returns:
            BattleEvent: Utworzone zdarzenie
        """
        event = BattleEvent(
            round=self.current_round,
            event_type=event_type,
            unit_id=unit_id,
            target_id=target_id,
            data=dict(data),
        )
        self.log(event)
        return event

    def record(self, attacker: "Unit", target: "Unit") -> None:
        """Loguje atak (UNIT_ATTACK) ze zdrowiem celu po ataku."""
        data: Dict[str, Any] = {"target_health": target.health}

        program = attacker.program
        result = getattr(program, "last_result", None)
        if result is not None:
            data["damage"] = result.dealt

        self.log_event(
            EventType.UNIT_ATTACK,
            unit_id=attacker.name,
            target_id=target.name,
            **data,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_battle_start(self, left: List[Dict], right: List[Dict]) -> None:
        """Loguje start bitwy."""
        self.initial_state = {"left": left, "right": right}
        self.current_round = 0
        self.log_event(EventType.BATTLE_START, left=len(left), right=len(right))

    def log_battle_end(
        self,
        winner: Optional[str],
        total_rounds: int,
        survivors: List[Dict],
    ) -> None:
        """Loguje koniec bitwy."""
        self.final_state = {
            "winner": winner,
            "total_rounds": total_rounds,
            "survivors": survivors,
        }
        self.log_event(
            EventType.BATTLE_END,
            winner=winner,
            total_rounds=total_rounds,
            survivors=[s["name"] for s in survivors],
        )

    def log_round_start(self, round_number: int) -> None:
        self.current_round = round_number
        self.log_event(EventType.ROUND_START)

    def log_death(self, unit_id: str, killer_id: Optional[str] = None) -> None:
        """Loguje śmierć jednostki."""
        self.log_event(EventType.UNIT_DEATH, unit_id=unit_id, killer=killer_id)

    def log_army_generated(self, points: int, counts: Dict[str, int]) -> None:
        self.log_event(EventType.ARMY_GENERATED, points=points, counts=counts)

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "initial_state": self.initial_state,
            "events": [e.to_dict() for e in self.events],
            "final_state": self.final_state,
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Zwraca log jako string JSON.

        Args:
            indent: Wcięcie (None = compact)
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        return len(self.events)

    def get_events(self) -> List[Dict[str, Any]]:
        """Zdarzenia jako lista słowników (API)."""
        return [e.to_dict() for e in self.events]

    def get_events_by_type(self, event_type: EventType) -> List[BattleEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_unit(self, unit_id: str) -> List[BattleEvent]:
        """Filtruje zdarzenia dla jednostki."""
        return [e for e in self.events if e.unit_id == unit_id]

    def get_events_in_round(self, round_number: int) -> List[BattleEvent]:
        return [e for e in self.events if e.round == round_number]
