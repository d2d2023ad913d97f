"""
AutoPass: random and hint-based password generator with strength scoring.
"""

__version__ = "1.0.0"

from .config import (
    AutoPassConfig,
    AutoPassError,
    CharacterClass,
    ConfigurationError,
    DEFAULT_CONFIG,
    GenerationOptions,
    GenerationRequest,
    HintRequiredError,
)
from .generator import generate_from_hint, generate_password, generate_random
from .strength import StrengthResult, score

__all__ = [
    "AutoPassConfig",
    "AutoPassError",
    "CharacterClass",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "GenerationOptions",
    "GenerationRequest",
    "HintRequiredError",
    "StrengthResult",
    "generate_from_hint",
    "generate_password",
    "generate_random",
    "score",
]
