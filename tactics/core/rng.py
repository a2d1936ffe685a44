"""
Deterministyczny generator liczb losowych (RNG).

Generator armii losuje pozycje jednostek, a polityki ataku
rozstrzygają remisy losowo. Ten sam seed musi dawać:
- To samo rozstawienie armii
- Ten sam przebieg bitwy

GameRNG opakowuje Pythonowy random.Random.

Jak używać:
    - Każdy generator armii / bitwa dostaje WŁASNĄ instancję
    - NIE używaj globalnego random - jest współdzielony

Przykład użycia:
    >>> rng = GameRNG(seed=12345)
    >>> rng.randrange(3)   # kolumna rozstawienia
    2
"""

from __future__ import annotations
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')


class GameRNG:
    """
    Deterministyczny generator losowości.

    Attributes:
        seed (Optional[int]): Ziarno użyte do inicjalizacji
        _rng (random.Random): Wewnętrzny generator
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Ziarno losowości. None = losowe ziarno systemowe.
        """
        self.seed = seed
        self._rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Liczba całkowita z przedziału [a, b] (włącznie)."""
        return self._rng.randint(a, b)

    def randrange(self, stop: int) -> int:
        """Liczba całkowita z przedziału [0, stop)."""
        return self._rng.randrange(stop)

    def choice(self, seq: Sequence[T]) -> T:
        """
        Wybiera losowy element z sekwencji.

        Raises:
            IndexError: Jeśli sekwencja jest pusta
        """
        return self._rng.choice(seq)

    def fork(self) -> "GameRNG":
        """
        Tworzy nowy RNG z seedem bazowanym na aktualnym stanie.

        Przydatne gdy np. rozstawienie armii i bitwa mają mieć
        niezależne sekwencje losowości.
        """
        new_seed = self.randint(0, 2**31 - 1)
        return GameRNG(new_seed)

    def __repr__(self) -> str:
        return f"GameRNG(seed={self.seed})"
