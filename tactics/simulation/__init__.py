"""
Simulation module - pętla bitwy.

Zawiera:
- BattleSimulator: Rozstrzyganie bitwy runda po rundzie
- BattleConfig: Konfiguracja (limit rund)
- BattleResult: Wynik bitwy
"""

from .battle import BattleSimulator, BattleConfig, BattleResult, LEFT, RIGHT

__all__ = ["BattleSimulator", "BattleConfig", "BattleResult", "LEFT", "RIGHT"]
