"""
Combat module - obliczanie obrażeń.

Zawiera:
- DamageResult: Wynik ataku
- calculate_damage: Obrażenia z uwzględnieniem bonusów
- apply_damage: Odjęcie zdrowia celowi
"""

from .damage import DamageResult, calculate_damage, apply_damage, damage_multiplier

__all__ = ["DamageResult", "calculate_damage", "apply_damage", "damage_multiplier"]
