"""Pronounceable Generator - built-in custom generator.

Builds passwords from consonant/vowel syllables followed by a few digits,
e.g. ``Mobaketu42``. Options are stored as ``key=value`` pairs separated by
semicolons::

    syllables=4;capitalize=true;digits=2
"""

from typing import Any
import logging
import uuid

import click

from pwgen_profiles.exceptions import GeneratorError
from pwgen_profiles.generators.pattern_generator import LOWER_CONSONANTS, LOWER_VOWELS
from pwgen_profiles.generators.registry import CustomGenerator

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS: dict[str, Any] = {
    "syllables": 4,
    "capitalize": True,
    "digits": 2,
}


def parse_options(blob: str) -> dict[str, Any]:
    """Parse an options blob, falling back to defaults for missing keys.

    Raises:
        GeneratorError: If a value cannot be parsed
    """
    options = dict(DEFAULT_OPTIONS)
    for item in blob.split(";"):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or key not in DEFAULT_OPTIONS:
            raise GeneratorError(f"Unknown option {item!r}")

        value = value.strip()
        if isinstance(DEFAULT_OPTIONS[key], bool):
            options[key] = value.lower() in ("1", "true", "yes", "on")
        else:
            try:
                options[key] = int(value)
            except ValueError as e:
                raise GeneratorError(f"Option {key!r} must be an integer") from e
            if options[key] < 0:
                raise GeneratorError(f"Option {key!r} must not be negative")
    return options


def format_options(options: dict[str, Any]) -> str:
    """Render options as a blob, in the order of DEFAULT_OPTIONS."""
    parts = []
    for key in DEFAULT_OPTIONS:
        value = options.get(key, DEFAULT_OPTIONS[key])
        if isinstance(value, bool):
            value = "true" if value else "false"
        parts.append(f"{key}={value}")
    return ";".join(parts)


class PronounceableGenerator(CustomGenerator):
    """Generates pronounceable passwords from random syllables."""

    uuid = uuid.UUID("6b3b9e1c-54b1-4f5e-9a55-2f1f0c7d8e21")
    name = "Pronounceable"
    supports_options = True

    def generate(self, profile, entropy=None, registry=None) -> str:
        options = parse_options(profile.custom_algorithm_options)
        excluded = set(profile.exclude_characters)

        consonants = [c for c in LOWER_CONSONANTS if c not in excluded]
        vowels = [v for v in LOWER_VOWELS if v not in excluded]
        digits = [d for d in "0123456789" if d not in excluded]
        if options["syllables"] and (not consonants or not vowels):
            raise GeneratorError("No consonants or vowels left after exclusions")
        if options["digits"] and not digits:
            raise GeneratorError("No digits left after exclusions")

        word = "".join(
            self._rng.choice(consonants) + self._rng.choice(vowels)
            for _ in range(options["syllables"])
        )
        if options["capitalize"]:
            word = word.capitalize()

        return word + "".join(self._rng.choice(digits) for _ in range(options["digits"]))

    def edit_options(self, current: str) -> str:
        try:
            options = parse_options(current)
        except GeneratorError:
            logger.warning("Discarding unreadable options for %s", self.name)
            options = dict(DEFAULT_OPTIONS)

        options["syllables"] = click.prompt(
            "Syllables", type=click.IntRange(min=0), default=options["syllables"]
        )
        options["capitalize"] = click.confirm("Capitalize", default=options["capitalize"])
        options["digits"] = click.prompt(
            "Trailing digits", type=click.IntRange(min=0), default=options["digits"]
        )
        return format_options(options)
