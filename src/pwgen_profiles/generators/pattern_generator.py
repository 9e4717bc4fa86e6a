"""Pattern Generator - expands placeholder patterns into passwords.

Supported syntax:

- A placeholder character selects a character class (see PLACEHOLDERS)
- ``\\x`` inserts the literal character ``x``
- ``{n}`` repeats the previous element ``n`` times
- ``[...]`` is a custom class built from placeholders and escaped literals

For example ``HH\\-HH\\-HH`` yields ``3F-A0-7C`` and ``u{2}d{4}`` yields
``QX4821``.
"""

from typing import TYPE_CHECKING
import logging

from pwgen_profiles.charsets.charset import (
    BRACKETS,
    DIGITS,
    HIGH_RANGE,
    LOWER_CASE,
    PRINTABLE_ASCII_SPECIAL,
    PUNCTUATION,
    UPPER_CASE,
)
from pwgen_profiles.exceptions import GeneratorError
from pwgen_profiles.generators.base import Generator
from pwgen_profiles.profiles.base import GenerationProfile

if TYPE_CHECKING:
    from pwgen_profiles.generators.registry import CustomGeneratorRegistry

logger = logging.getLogger(__name__)

LOWER_VOWELS = "aeiou"
UPPER_VOWELS = "AEIOU"
LOWER_CONSONANTS = "bcdfghjklmnpqrstvwxyz"
UPPER_CONSONANTS = "BCDFGHJKLMNPQRSTVWXYZ"

PLACEHOLDERS: dict[str, str] = {
    "d": DIGITS,
    "l": LOWER_CASE,
    "L": LOWER_CASE + UPPER_CASE,
    "u": UPPER_CASE,
    "a": LOWER_CASE + DIGITS,
    "A": LOWER_CASE + UPPER_CASE + DIGITS,
    "U": UPPER_CASE + DIGITS,
    "h": DIGITS + "abcdef",
    "H": DIGITS + "ABCDEF",
    "v": LOWER_VOWELS,
    "V": LOWER_VOWELS + UPPER_VOWELS,
    "Z": UPPER_VOWELS,
    "c": LOWER_CONSONANTS,
    "C": LOWER_CONSONANTS + UPPER_CONSONANTS,
    "z": UPPER_CONSONANTS,
    "p": PUNCTUATION,
    "b": BRACKETS,
    "s": PRINTABLE_ASCII_SPECIAL,
    "S": UPPER_CASE + LOWER_CASE + DIGITS + PRINTABLE_ASCII_SPECIAL,
    "x": HIGH_RANGE,
}


class PatternGenerator(Generator):
    """Generator for pattern profiles."""

    def generate(
        self,
        profile: GenerationProfile,
        entropy: bytes | None = None,
        registry: "CustomGeneratorRegistry | None" = None,
    ) -> str:
        elements = self.parse(profile.pattern)

        used: set[str] = set()
        chars = []
        for element in elements:
            pool = self._filter_pool(element, profile)
            if profile.no_repeating_characters:
                pool = "".join(ch for ch in pool if ch not in used)
            if not pool:
                raise GeneratorError("Pattern element has no characters left after exclusions")

            ch = self._rng.choice(pool)
            used.add(ch)
            chars.append(ch)

        if profile.pattern_permute:
            self._rng.shuffle(chars)

        return "".join(chars)

    def parse(self, pattern: str) -> list[str]:
        """Split a pattern into one character pool per output character.

        Args:
            pattern: The pattern text

        Returns:
            List of character pools; literals are single-character pools

        Raises:
            GeneratorError: If the pattern is malformed
        """
        elements: list[str] = []
        i = 0

        while i < len(pattern):
            ch = pattern[i]

            if ch == "\\":
                if i + 1 >= len(pattern):
                    raise GeneratorError("Pattern ends with an unfinished escape")
                elements.append(pattern[i + 1])
                i += 2

            elif ch == "[":
                end, pool = self._parse_class(pattern, i + 1)
                elements.append(pool)
                i = end + 1

            elif ch == "{":
                end = pattern.find("}", i)
                if end < 0:
                    raise GeneratorError(f"Unterminated repeat count at position {i}")
                count_text = pattern[i + 1:end]
                if not count_text.isdigit():
                    raise GeneratorError(f"Invalid repeat count {count_text!r}")
                if not elements:
                    raise GeneratorError("Repeat count without a preceding element")
                count = int(count_text)
                last = elements.pop()
                elements.extend([last] * count)
                i = end + 1

            elif ch in PLACEHOLDERS:
                elements.append(PLACEHOLDERS[ch])
                i += 1

            else:
                raise GeneratorError(f"Unknown placeholder {ch!r} at position {i}")

        logger.debug("Parsed pattern into %d elements", len(elements))
        return elements

    def _parse_class(self, pattern: str, start: int) -> tuple[int, str]:
        """Parse a ``[...]`` class starting after the opening bracket."""
        chars: list[str] = []
        i = start

        while i < len(pattern):
            ch = pattern[i]
            if ch == "]":
                pool = "".join(dict.fromkeys(chars))
                if not pool:
                    raise GeneratorError(f"Empty character class at position {start - 1}")
                return i, pool
            if ch == "\\":
                if i + 1 >= len(pattern):
                    raise GeneratorError("Pattern ends with an unfinished escape")
                chars.append(pattern[i + 1])
                i += 2
                continue
            if ch not in PLACEHOLDERS:
                raise GeneratorError(f"Unknown placeholder {ch!r} at position {i}")
            chars.extend(PLACEHOLDERS[ch])
            i += 1

        raise GeneratorError(f"Unterminated character class at position {start - 1}")
