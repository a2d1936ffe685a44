"""
Units router - katalog dostępnych jednostek.
"""

from fastapi import APIRouter, HTTPException
from typing import List, Dict, Any
from pathlib import Path

from tactics.core.config_loader import ConfigLoader
from tactics.army.generator import effectiveness
from tactics.units.unit import Unit


router = APIRouter()

# Initialize config loader
DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


def _unit_info(unit_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    template = Unit.from_config(data)
    return {
        "id": unit_id,
        "unit_type": template.unit_type,
        "health": template.health,
        "base_attack": template.base_attack,
        "cost": template.cost,
        "attack_type": template.attack_type,
        "attack_bonuses": template.attack_bonuses,
        "defence_bonuses": template.defence_bonuses,
        "effectiveness": round(effectiveness(template), 3),
    }


@router.get("/units")
async def get_units() -> List[Dict[str, Any]]:
    """
    Zwraca listę wszystkich szablonów jednostek (kolejność katalogu).
    """
    return [_unit_info(unit_id, data) for unit_id, data in _loader.load_all_units().items()]


@router.get("/units/{unit_id}")
async def get_unit(unit_id: str) -> Dict[str, Any]:
    """
    Zwraca szczegóły szablonu jednostki.

    Raises:
        HTTPException 404: Nieznane ID
    """
    try:
        data = _loader.load_unit(unit_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unit '{unit_id}' not found")
    return _unit_info(unit_id, data)
