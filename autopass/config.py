"""
Configuration and shared types for the AutoPass password generator.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


class AutoPassError(Exception):
    """Base class for all AutoPass errors."""


class ConfigurationError(AutoPassError, ValueError):
    """Requested length cannot produce a valid password."""


class HintRequiredError(AutoPassError, ValueError):
    """Hint mode was selected but no usable hint was given."""


class CharacterClass(enum.Enum):
    """
    Closed set of character classes. Each member's value is its alphabet.
    """

    LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
    UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    DIGITS = "0123456789"
    SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

    @property
    def alphabet(self) -> str:
        return self.value


@dataclass(frozen=True)
class GenerationOptions:
    # Lowercase is always on; these toggle the other three classes.
    uppercase: bool = True
    numbers: bool = True
    symbols: bool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, bool] | None) -> "GenerationOptions":
        """
        Build options from a ``{uppercase, numbers, symbols}`` mapping.
        Missing keys default to True.
        """
        values = values or {}
        return cls(
            uppercase=bool(values.get("uppercase", True)),
            numbers=bool(values.get("numbers", True)),
            symbols=bool(values.get("symbols", True)),
        )

    def enabled_classes(self) -> list[CharacterClass]:
        """
        Optional classes that are switched on, in guarantee order
        (uppercase, digits, symbols). Lowercase is not included.
        """
        enabled = []
        if self.uppercase:
            enabled.append(CharacterClass.UPPERCASE)
        if self.numbers:
            enabled.append(CharacterClass.DIGITS)
        if self.symbols:
            enabled.append(CharacterClass.SYMBOLS)
        return enabled

    def pool(self) -> str:
        """Combined alphabet: lowercase plus every enabled class."""
        return CharacterClass.LOWERCASE.alphabet + "".join(
            cls.alphabet for cls in self.enabled_classes()
        )


@dataclass(frozen=True)
class GenerationRequest:
    length: int
    options: GenerationOptions = field(default_factory=GenerationOptions)
    hint: str | None = None

    @property
    def mode(self) -> str:
        return "hint" if self.hint else "random"


@dataclass
class AutoPassConfig:
    # Length used when the caller does not pick one.
    default_length: int = 16

    # Bounds offered by the interactive front ends (slider / spin box).
    min_length: int = 4
    max_length: int = 64

    # Newest entries kept in the history file.
    history_limit: int = 50

    # Clipboard is wiped this long after a copy.
    clipboard_clear_ms: int = 15000

    # None means the per-user data directory (see history.default_history_path).
    history_path: Path | None = None

    # Fernet key file for an encrypted history; None keeps it as plain JSON.
    history_key_file: Path | None = None

    @classmethod
    def from_env(cls) -> "AutoPassConfig":
        cfg = cls()
        env_path = os.getenv("AUTOPASS_HISTORY_FILE")
        if env_path:
            cfg.history_path = Path(env_path).expanduser()
        env_key = os.getenv("AUTOPASS_HISTORY_KEY_FILE")
        if env_key:
            cfg.history_key_file = Path(env_key).expanduser()
        return cfg


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = AutoPassConfig()
