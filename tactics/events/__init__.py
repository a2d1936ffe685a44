"""
Events module - log bitwy i zapis zdarzeń do formatu JSON.

Zawiera:
- BattleLog: Interfejs odbiorcy raportów o atakach
- PrintBattleLog: Log na konsolę
- BattleEvent: Dataclass reprezentująca zdarzenie
- EventType: Enum typów zdarzeń
- EventLogger: Klasa logująca zdarzenia
"""

from .event_logger import BattleLog, PrintBattleLog, BattleEvent, EventType, EventLogger

__all__ = ["BattleLog", "PrintBattleLog", "BattleEvent", "EventType", "EventLogger"]
