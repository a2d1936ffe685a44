"""
Obliczanie obrażeń pojedynczego ataku.

WZÓR:
═══════════════════════════════════════════════════════════════════

    raw        = attacker.base_attack
    attack_mod = attacker.attack_bonuses[defender.unit_type]    (domyślnie 1.0)
    defence_mod = defender.defence_bonuses[attacker.attack_type] (domyślnie 1.0)

    final = max(1, round(raw * attack_mod * defence_mod))

    Przykłady:
        Archer (atk 6) vs Dragon, attack_bonuses {Dragon: 1.5}
            -> 6 * 1.5 = 9
        Knight (atk 12, melee) vs Golem, defence_bonuses {melee: 0.5}
            -> 12 * 0.5 = 6

MINIMUM:
═══════════════════════════════════════════════════════════════════

    Każdy trafiony atak zadaje co najmniej 1 punkt obrażeń.
    Dzięki temu bitwa, w której każdy wybiera żywy cel,
    zawsze się kończy.

KOLEJNOŚĆ:
═══════════════════════════════════════════════════════════════════

    1. calculate_damage - liczy wynik (bez efektów ubocznych)
    2. apply_damage     - odejmuje zdrowie (nigdy poniżej 0)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..units.unit import Unit


MIN_DAMAGE = 1


@dataclass
class DamageResult:
    """
    Wynik obliczenia obrażeń.

    Attributes:
        raw_damage (int): Obrażenia bazowe (base_attack)
        multiplier (float): Łączny mnożnik z bonusów
        final_damage (int): Obrażenia po bonusach
        dealt (int): Faktycznie odebrane zdrowie (po apply_damage)
        killed (bool): Czy cel zginął (po apply_damage)
    """
    raw_damage: int
    multiplier: float
    final_damage: int
    dealt: int = 0
    killed: bool = False

    def to_dict(self) -> dict:
        """Serializuje wynik do słownika."""
        return {
            "raw_damage": self.raw_damage,
            "multiplier": round(self.multiplier, 3),
            "final_damage": self.final_damage,
            "dealt": self.dealt,
            "killed": self.killed,
        }


def damage_multiplier(attacker: "Unit", defender: "Unit") -> float:
    """
    Łączny mnożnik obrażeń z bonusów obu stron.

    Returns:
        float: attack_mod * defence_mod
    """
    attack_mod = attacker.attack_bonuses.get(defender.unit_type, 1.0)
    defence_mod = defender.defence_bonuses.get(attacker.attack_type, 1.0)
    return attack_mod * defence_mod


def calculate_damage(attacker: "Unit", defender: "Unit") -> DamageResult:
    """
    Oblicza obrażenia ataku (bez modyfikacji jednostek).

    Args:
        attacker: Jednostka atakująca
        defender: Jednostka broniąca się

    Returns:
        DamageResult: Wynik z final_damage >= 1
    """
    multiplier = damage_multiplier(attacker, defender)
    final = max(MIN_DAMAGE, round(attacker.base_attack * multiplier))

    return DamageResult(
        raw_damage=attacker.base_attack,
        multiplier=multiplier,
        final_damage=final,
    )


def apply_damage(defender: "Unit", result: DamageResult) -> int:
    """
    Aplikuje obrażenia do obrońcy.

    Args:
        defender: Cel
        result: Wynik z calculate_damage

    Returns:
        int: Faktycznie odebrane zdrowie
    """
    result.dealt = defender.take_damage(result.final_damage)
    result.killed = not defender.is_alive()
    return result.dealt
