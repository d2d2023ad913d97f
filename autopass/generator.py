"""
Password generation: fully random, or seeded with a user hint.
"""

from __future__ import annotations

import logging
import re

from .config import (
    CharacterClass,
    ConfigurationError,
    GenerationOptions,
    GenerationRequest,
)
from .entropy import RandomSource, secure_choice, secure_shuffle

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def strip_whitespace(hint: str) -> str:
    """Remove every whitespace character, not just the ends."""
    return _WHITESPACE.sub("", hint)


def _check_length(length: int) -> None:
    if length < 1:
        raise ConfigurationError(f"Password length must be >= 1, got {length}.")


def generate_random(
    length: int,
    options: GenerationOptions | None = None,
    rng: RandomSource | None = None,
) -> str:
    """
    Generate a random password of exactly ``length`` characters.

    One character of every enabled class, plus one lowercase character,
    is always present. The rest is drawn from the combined pool and the
    whole sequence is shuffled.

    Raises ConfigurationError if ``length`` cannot hold the guaranteed
    characters.
    """
    _check_length(length)
    opts = options or GenerationOptions()

    classes = opts.enabled_classes() + [CharacterClass.LOWERCASE]
    if length < len(classes):
        raise ConfigurationError(
            f"Password length {length} is too short for {len(classes)} "
            "required character classes."
        )

    required = [secure_choice(cls.alphabet, rng) for cls in classes]

    pool = opts.pool()
    chars = required + [secure_choice(pool, rng) for _ in range(length - len(required))]

    logger.debug("Generated random password (length=%d, pool=%d)", length, len(pool))
    return "".join(secure_shuffle(chars, rng))


def generate_from_hint(
    hint: str,
    length: int,
    options: GenerationOptions | None = None,
    rng: RandomSource | None = None,
) -> str:
    """
    Keep the hint (whitespace removed) at the start and pad it with a
    shuffled random suffix up to ``length``.

    A hint at least ``length`` long is simply truncated. Class guarantees
    in the suffix depend on how much room it has: uppercase needs 1 slot,
    digits 2 and symbols 3. Lowercase is not guaranteed here.
    """
    _check_length(length)
    opts = options or GenerationOptions()

    clean_hint = strip_whitespace(hint)
    if len(clean_hint) >= length:
        return clean_hint[:length]

    random_length = length - len(clean_hint)
    pool = opts.pool()

    required = []
    if opts.uppercase and random_length > 0:
        required.append(secure_choice(CharacterClass.UPPERCASE.alphabet, rng))
    if opts.numbers and random_length > 1:
        required.append(secure_choice(CharacterClass.DIGITS.alphabet, rng))
    if opts.symbols and random_length > 2:
        required.append(secure_choice(CharacterClass.SYMBOLS.alphabet, rng))

    filler = [secure_choice(pool, rng) for _ in range(random_length - len(required))]
    suffix = secure_shuffle(required + filler, rng)

    logger.debug(
        "Generated hint password (hint=%d chars, suffix=%d chars)",
        len(clean_hint),
        random_length,
    )
    return clean_hint + "".join(suffix)


def generate_password(
    request: GenerationRequest,
    rng: RandomSource | None = None,
) -> str:
    """
    High-level entry point: pick hint or random generation from the request.
    """
    if request.mode == "hint":
        return generate_from_hint(request.hint, request.length, request.options, rng)
    return generate_random(request.length, request.options, rng)
