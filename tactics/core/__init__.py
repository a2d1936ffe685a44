"""
Core module - podstawowe komponenty silnika.

Zawiera:
- Edge, is_valid: Siatka 27x21 i reguły poprawności kratek
- get_target_path: Algorytm Dijkstry (atakujący -> cel)
- get_suitable_units: Selektor celów wręcz (reguła flanki)
- GameRNG: Deterministyczny generator losowości
- ConfigLoader: Wczytywanie konfiguracji z defaults
"""

from .grid import Edge, GridConfig, is_valid, occupied_cells, WIDTH, HEIGHT
from .pathfinding import get_target_path, find_path, path_length
from .targeting import get_suitable_units, arrange_rows
from .rng import GameRNG
from .config_loader import ConfigLoader

__all__ = [
    "Edge", "GridConfig", "is_valid", "occupied_cells", "WIDTH", "HEIGHT",
    "get_target_path", "find_path", "path_length",
    "get_suitable_units", "arrange_rows",
    "GameRNG", "ConfigLoader",
]
