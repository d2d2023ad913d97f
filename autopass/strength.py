"""
Heuristic password strength scoring (0-100).
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Mapping


@dataclass(frozen=True)
class StrengthResult:
    score: int
    label: str
    # Display hint for front ends (hex RGB).
    color: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping) -> "StrengthResult":
        return cls(
            score=int(data["score"]),
            label=str(data["label"]),
            color=str(data.get("color", "")),
        )


# (lower bound, label, color), highest band first
STRENGTH_BANDS = (
    (80, "Strong", "#22c55e"),
    (60, "Good", "#10b981"),
    (30, "Fair", "#f59e0b"),
    (0, "Weak", "#ef4444"),
)

_VARIETY_PATTERNS = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^a-zA-Z0-9]"),
)


def _band(value: int) -> StrengthResult:
    """Map a clamped score to its band; anything below 30 is Weak."""
    for lower, label, color in STRENGTH_BANDS[:-1]:
        if value >= lower:
            return StrengthResult(value, label, color)
    _, label, color = STRENGTH_BANDS[-1]
    return StrengthResult(value, label, color)


def score(password: str) -> StrengthResult:
    """
    Score a password.

    - length: 2 points per character, capped at 30
    - variety: 10 points each for lowercase, uppercase, digit, other
    - uniqueness: distinct/total ratio scaled to 20, floored
    - penalty: 2 points per adjacent pair whose code points differ by
      exactly one (``ab``, ``21``), capped at 10

    The result is clamped to [0, 100].
    """
    if not password:
        return _band(0)

    total = min(len(password) * 2, 30)
    total += sum(10 for pattern in _VARIETY_PATTERNS if pattern.search(password))
    total += int(len(set(password)) / len(password) * 20)

    consecutive = sum(
        1
        for prev, cur in zip(password, password[1:])
        if abs(ord(cur) - ord(prev)) == 1
    )
    total -= min(consecutive * 2, 10)

    return _band(max(0, min(100, total)))
