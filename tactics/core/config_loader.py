"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Silnik ładuje definicje z plików YAML:
- defaults.yaml: wartości bazowe jednostek + stałe siatki, generatora i bitwy
- units.yaml: katalog szablonów jednostek (jeden szablon na typ)

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml - sekcja unit_defaults
    2. Wczytaj konkretną definicję (np. jednostka "knight")
    3. Dla każdego klucza w defaults, którego brak w definicji:
       - Użyj wartości z defaults
    4. Definicja może nadpisać defaults (także zagnieżdżone bonusy)

Przykład:
    defaults.yaml:
        unit_defaults:
            attack_type: melee
            attack_bonuses: {}

    units.yaml:
        units:
          knight:
            health: 40
            base_attack: 12
            cost: 20
            # attack_type nie podane -> "melee" z defaults

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> knight = loader.load_unit("knight")
    >>> knight["attack_type"]
    'melee'
    >>> catalog = loader.load_catalog()   # List[Unit] w kolejności z pliku
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import copy

import yaml

if TYPE_CHECKING:
    from ..units.unit import Unit


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults
        _units (Dict): Cache wczytanych jednostek
    """

    def __init__(self, data_path: str = "data/"):
        """
        Args:
            data_path: Ścieżka do folderu z plikami YAML
        """
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._units: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca słownik z wartościami domyślnymi.

        Cache'uje wczytany plik - kolejne wywołania są szybkie.
        """
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_unit_defaults(self) -> Dict:
        return self.get_defaults().get("unit_defaults", {})

    def get_grid_config(self) -> Dict:
        """Wymiary siatki ścieżek, siatki rozstawienia i rzędów celów."""
        return self.get_defaults().get("grid", {})

    def get_army_config(self) -> Dict:
        """Limity generatora armii."""
        return self.get_defaults().get("army", {})

    def get_battle_config(self) -> Dict:
        """Ustawienia pętli bitwy."""
        return self.get_defaults().get("battle", {})

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE JEDNOSTEK
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_units_raw(self) -> Dict:
        """Zwraca wszystkie surowe definicje jednostek."""
        if self._units is None:
            data = self._load_yaml("units.yaml")
            self._units = data.get("units", {})
        return self._units

    def load_unit(self, unit_id: str) -> Dict:
        """
        Wczytuje definicję jednostki z uzupełnionymi defaults.

        Args:
            unit_id: ID jednostki (klucz w units.yaml)

        Returns:
            Dict: Pełna definicja jednostki

        Raises:
            KeyError: Jeśli jednostka nie istnieje
        """
        units = self._get_all_units_raw()

        if unit_id not in units:
            raise KeyError(f"Unit '{unit_id}' not found in units.yaml")

        result = copy.deepcopy(self.get_unit_defaults())
        result = self._deep_merge(result, units[unit_id] or {})
        result["id"] = unit_id

        return result

    def load_all_units(self) -> Dict[str, Dict]:
        """
        Wczytuje wszystkie definicje jednostek.

        Returns:
            Dict[str, Dict]: Mapa unit_id -> definicja (kolejność z pliku)
        """
        units = self._get_all_units_raw()
        return {uid: self.load_unit(uid) for uid in units.keys()}

    def load_catalog(self) -> List["Unit"]:
        """
        Buduje katalog szablonów jednostek dla generatora armii.

        Returns:
            List[Unit]: Jeden szablon na typ, w kolejności z units.yaml
        """
        from ..units.unit import Unit

        return [Unit.from_config(config) for config in self.load_all_units().values()]

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie plików.
        """
        self._defaults = None
        self._units = None


def get_value(section: Dict[str, Any], key: str, default: Any) -> Any:
    """Wartość z sekcji konfiguracji; brak klucza lub null -> default."""
    value = section.get(key)
    return default if value is None else value
