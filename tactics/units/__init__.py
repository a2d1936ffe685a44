"""
Units module - jednostki i ich programy ataku.

Zawiera:
- Unit: Jednostka (statystyki, bonusy, pozycja, program)
- AttackProgram: Bazowa polityka wyboru celu
- IdleProgram, MeleeProgram, RangedProgram: Domyślne polityki
- assign_programs: Przypisanie polityk całej armii
"""

from .unit import Unit, UNSET
from .program import (
    AttackProgram,
    IdleProgram,
    MeleeProgram,
    RangedProgram,
    assign_programs,
)

__all__ = [
    "Unit", "UNSET",
    "AttackProgram", "IdleProgram", "MeleeProgram", "RangedProgram",
    "assign_programs",
]
