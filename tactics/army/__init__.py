"""
Army module - armie i ich generowanie.

Zawiera:
- Army: Kolekcja jednostek + punkty
- ArmyGenerator: Zachłanny generator armii pod limit punktów
- GeneratorConfig: Limity generatora
"""

from .army import Army
from .generator import ArmyGenerator, GeneratorConfig, effectiveness

__all__ = ["Army", "ArmyGenerator", "GeneratorConfig", "effectiveness"]
