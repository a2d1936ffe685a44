"""
Testy dla loggera zdarzeń.
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tactics.events.event_logger import (
    BattleEvent, EventLogger, EventType, PrintBattleLog,
)
from tactics.units.unit import Unit


def create_unit(name: str, health: int = 10) -> Unit:
    return Unit(name=name, unit_type="test", health=health, base_attack=1, cost=1, x=0, y=0)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZDARZENIA
# ═══════════════════════════════════════════════════════════════════════════

def test_event_to_dict_skips_empty_fields():
    event = BattleEvent(round=2, event_type=EventType.ROUND_START)
    assert event.to_dict() == {"round": 2, "type": "ROUND_START"}


def test_record_without_program_has_no_damage():
    logger = EventLogger()
    logger.log_round_start(3)

    logger.record(create_unit("A"), create_unit("B", health=7))

    event = logger.events[-1]
    assert event.round == 3
    assert event.event_type == EventType.UNIT_ATTACK
    assert event.data == {"target_health": 7}


def test_filters():
    logger = EventLogger()
    logger.log_round_start(1)
    logger.record(create_unit("A"), create_unit("B"))
    logger.log_round_start(2)
    logger.log_death("B", "A")

    assert logger.get_event_count() == 4
    assert len(logger.get_events_in_round(2)) == 2
    assert [e.event_type for e in logger.get_events_for_unit("B")] == [EventType.UNIT_DEATH]
    assert logger.get_events_by_type(EventType.UNIT_DEATH)[0].data == {"killer": "A"}


def test_army_generated_event():
    logger = EventLogger()
    logger.log_army_generated(100, {"Pikeman": 10})

    assert logger.get_events() == [
        {"round": 0, "type": "ARMY_GENERATED", "data": {"points": 100, "counts": {"Pikeman": 10}}}
    ]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SERIALIZACJA
# ═══════════════════════════════════════════════════════════════════════════

def test_save_and_load(tmp_path):
    logger = EventLogger(seed=777, grid_width=27, grid_height=21)
    logger.log_battle_start([{"name": "A"}], [{"name": "B"}])
    logger.log_battle_end("left", 4, [{"name": "A"}])

    path = tmp_path / "out" / "battle.json"
    logger.save(str(path))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["metadata"]["seed"] == 777
    assert data["metadata"]["grid"] == {"width": 27, "height": 21}
    assert data["initial_state"] == {"left": [{"name": "A"}], "right": [{"name": "B"}]}
    assert data["final_state"]["winner"] == "left"
    assert data["events"][-1]["data"]["survivors"] == ["A"]


def test_to_json_compact():
    logger = EventLogger(seed=1)
    text = logger.to_json(indent=None)

    assert "\n" not in text
    assert json.loads(text)["events"] == []


def test_print_battle_log(capsys):
    PrintBattleLog().record(create_unit("A"), create_unit("B", health=0))

    out = capsys.readouterr().out
    assert "A" in out and "B" in out
    assert "✝" in out
