"""
Simulation router - generowanie armii, ścieżki i symulacja bitwy.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Dict, Any, Optional
from pathlib import Path
import random

from tactics.core.config_loader import ConfigLoader, get_value
from tactics.core.grid import Edge, GridConfig, in_bounds
from tactics.core.pathfinding import find_path, path_length
from tactics.core.rng import GameRNG
from tactics.army.army import Army
from tactics.army.generator import ArmyGenerator, GeneratorConfig
from tactics.units.unit import Unit
from tactics.units.program import assign_programs
from tactics.events.event_logger import EventLogger
from tactics.simulation.battle import BattleSimulator, BattleConfig


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class UnitPlacement(BaseModel):
    """Jednostka gracza umieszczona na planszy."""
    unit_id: str
    position: List[int]  # [x, y]


class GenerateRequest(BaseModel):
    """Request do wygenerowania armii."""
    max_points: int
    seed: Optional[int] = None


class PathRequest(BaseModel):
    """Request do wyznaczenia ścieżki."""
    attacker: List[int]  # [x, y]
    target: List[int]    # [x, y]
    obstacles: List[List[int]] = []


class SimulationRequest(BaseModel):
    """
    Request do symulacji.

    Brak `player` -> armia gracza też jest generowana (player_points).
    """
    player: Optional[List[UnitPlacement]] = None
    player_points: Optional[int] = None
    computer_points: Optional[int] = None
    seed: Optional[int] = None


# ═══════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def _grid_config() -> GridConfig:
    return GridConfig.from_dict(_loader.get_grid_config())


def _generator(rng: GameRNG) -> ArmyGenerator:
    config = GeneratorConfig.from_dict(_loader.get_army_config(), _loader.get_grid_config())
    return ArmyGenerator(config, rng)


def _default_points() -> int:
    return get_value(_loader.get_army_config(), "default_points", 1500)


def _generate(generator: ArmyGenerator, catalog: List[Unit], max_points: int) -> Army:
    """Generuje armię; przepełnione pole rozstawienia -> 400."""
    try:
        return generator.generate(catalog, max_points)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _to_edge(coords: List[int], grid: GridConfig, field_name: str) -> Edge:
    if len(coords) != 2 or not in_bounds(coords[0], coords[1], grid.width, grid.height):
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} position: {coords}")
    return Edge(coords[0], coords[1])


def _player_army(placements: List[UnitPlacement], grid: GridConfig) -> Army:
    """Buduje armię gracza z ręcznych pozycji."""
    units: List[Unit] = []
    taken = set()
    counters: Dict[str, int] = {}

    for placement in placements:
        try:
            template = Unit.from_config(_loader.load_unit(placement.unit_id))
        except KeyError:
            raise HTTPException(status_code=400, detail=f"Unit '{placement.unit_id}' not found")

        cell = _to_edge(placement.position, grid, placement.unit_id)
        if cell in taken:
            raise HTTPException(status_code=400, detail=f"Position {placement.position} already taken")
        taken.add(cell)

        index = counters.get(template.unit_type, 0)
        counters[template.unit_type] = index + 1

        unit = template.spawn(index)
        unit.set_position(cell.x, cell.y)
        units.append(unit)

    return Army(units=units, points=sum(u.cost for u in units))


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/generate")
async def generate_army(request: GenerateRequest) -> Dict[str, Any]:
    """
    Generuje armię komputera pod limit punktów.

    Returns:
        Dict z punktami, jednostkami i licznością typów

    Raises:
        HTTPException 400: Armia nie mieści się na polu rozstawienia
    """
    seed = request.seed if request.seed is not None else random.randint(1, 999999)
    army = _generate(_generator(GameRNG(seed)), _loader.load_catalog(), request.max_points)

    result = army.to_dict()
    result["seed"] = seed
    return result


@router.post("/path")
async def get_path(request: PathRequest) -> Dict[str, Any]:
    """
    Najkrótsza ścieżka między dwiema kratkami z przeszkodami.

    Pusta ścieżka = cel nieosiągalny (nie błąd).
    """
    grid = _grid_config()
    start = _to_edge(request.attacker, grid, "attacker")
    goal = _to_edge(request.target, grid, "target")
    occupied = {
        _to_edge(o, grid, "obstacle") for o in request.obstacles
    } - {start, goal}

    path = find_path(start, goal, occupied, grid.width, grid.height)

    return {
        "path": [edge.to_list() for edge in path],
        "length": path_length(path),
        "reachable": bool(path),
    }


@router.post("/simulate")
def run_simulation(request: SimulationRequest) -> Dict[str, Any]:
    """
    Uruchamia bitwę: gracz (lewa strona) vs komputer (prawa strona).

    Zwykłe `def` - bitwa liczy się w threadpoolu, nie blokuje event loopa.

    Returns:
        Wynik bitwy z logiem eventów
    """
    seed = request.seed if request.seed is not None else random.randint(1, 999999)
    rng = GameRNG(seed)
    grid = _grid_config()
    catalog = _loader.load_catalog()
    logger = EventLogger(seed=seed, grid_width=grid.width, grid_height=grid.height)

    if request.player is not None:
        player_army = _player_army(request.player, grid)
    else:
        player_points = request.player_points if request.player_points is not None else _default_points()
        player_army = _generate(_generator(rng.fork()), catalog, player_points)
        logger.log_army_generated(player_army.points, player_army.count_by_type())

    computer_points = request.computer_points if request.computer_points is not None else _default_points()
    computer_army = _generate(_generator(rng.fork()), catalog, computer_points)
    computer_army.mirror(grid.width)
    logger.log_army_generated(computer_army.points, computer_army.count_by_type())

    player_cells = {u.position for u in player_army.units}
    if any(u.position in player_cells for u in computer_army.units):
        raise HTTPException(status_code=400, detail="Player units overlap the computer deployment zone")

    battlefield = player_army.units + computer_army.units
    battle_rng = rng.fork()
    assign_programs(player_army, computer_army, battlefield, is_left_side=True, rng=battle_rng)
    assign_programs(computer_army, player_army, battlefield, is_left_side=False, rng=battle_rng)

    simulator = BattleSimulator(
        logger,
        BattleConfig.from_dict(_loader.get_battle_config()),
        events=logger,
    )
    result = simulator.simulate(player_army, computer_army)

    events = logger.get_events()

    return {
        "seed": seed,
        "player_army": player_army.to_dict(),
        "computer_army": computer_army.to_dict(),
        "result": result.to_dict(),
        "events": events,
        "total_events": len(events),
    }


@router.get("/grid-config")
async def get_grid_config() -> Dict[str, Any]:
    """
    Zwraca konfigurację siatki.
    """
    result = _grid_config().to_dict()
    result["left_columns"] = list(range(result["placement_columns"]))
    result["right_columns"] = [result["width"] - 1 - x for x in result["left_columns"]]
    return result
