"""
Application state shared by the front ends.

The CLI and the GUI both keep an ``AppState`` and pass it to the
functions here, rather than holding options and history in globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import (
    DEFAULT_CONFIG,
    GenerationOptions,
    GenerationRequest,
    HintRequiredError,
)
from .entropy import RandomSource
from .generator import generate_password, strip_whitespace
from .history import HistoryEntry, HistoryStore, now_millis
from .strength import score

logger = logging.getLogger(__name__)

MODES = ("random", "hint")


@dataclass
class AppState:
    mode: str = "random"
    length: int = DEFAULT_CONFIG.default_length
    options: GenerationOptions = field(default_factory=GenerationOptions)
    hint: str = ""
    current_password: str = ""
    history: HistoryStore | None = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode {self.mode!r}; expected one of {MODES}.")

    def request(self) -> GenerationRequest:
        """
        Build the generation request for the current settings.

        Raises HintRequiredError in hint mode when the hint is blank.
        """
        if self.mode == "hint":
            if not strip_whitespace(self.hint):
                raise HintRequiredError("Please enter a hint")
            return GenerationRequest(self.length, self.options, self.hint.strip())
        return GenerationRequest(self.length, self.options)


def generate(
    state: AppState,
    now: int | None = None,
    rng: RandomSource | None = None,
) -> HistoryEntry:
    """
    Generate a password for ``state``, score it and record it.
    """
    request = state.request()
    password = generate_password(request, rng)
    entry = HistoryEntry(
        password=password,
        mode=request.mode,
        strength=score(password),
        timestamp=now if now is not None else now_millis(),
    )

    state.current_password = password
    if state.history is not None:
        state.history.add(entry)

    logger.debug("Generated %s password, strength %s", entry.mode, entry.strength.label)
    return entry


def clear(state: AppState) -> bool:
    """Forget the current password and wipe history."""
    state.current_password = ""
    if state.history is None:
        return False
    return state.history.clear()
