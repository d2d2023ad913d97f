"""
Secure randomness helpers.

Everything draws from ``random.SystemRandom``, which reads the operating
system CSPRNG. ``randrange`` uses rejection sampling, so index draws are
uniform over ``[0, n)`` with no modulo bias.
"""

from __future__ import annotations

from random import SystemRandom
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


_sysrand = SystemRandom()


def secure_index(n: int, rng: RandomSource | None = None) -> int:
    """
    Uniform integer in ``[0, n)``.

    Errors from the entropy source are not caught: a machine that cannot
    produce secure randomness must not produce passwords either.
    """
    if n <= 0:
        raise ValueError("n must be > 0")
    return (rng or _sysrand).randrange(n)


def secure_choice(alphabet: Sequence[T], rng: RandomSource | None = None) -> T:
    return alphabet[secure_index(len(alphabet), rng)]


def secure_shuffle(items: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """
    Fisher-Yates shuffle. Returns a new list, the input is left untouched.
    """
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = secure_index(i + 1, rng)
        out[i], out[j] = out[j], out[i]
    return out
