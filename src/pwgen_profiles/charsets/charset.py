"""Character set specification used by generation profiles.

A CharSetSpec is the composable set of characters a character-set password
is drawn from. It is built from named categories and literal characters and
rendered back as a canonical string when stored inside a profile.
"""

from enum import Enum
from typing import Iterable, Iterator


UPPER_CASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWER_CASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SPECIAL = "!\"#$%&'*+,./:;=?@\\^`|~"
HIGH_RANGE = "".join(chr(c) for c in range(0xA1, 0x100) if c != 0xAD)
BRACKETS = "[]{}()<>"
PUNCTUATION = ",.;:"
PRINTABLE_ASCII_SPECIAL = "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"
LOOK_ALIKE = "O0l1I|"

# Never members of a character set.
INVALID = "\t\r\n"


class CharCategory(str, Enum):
    """Named character categories that can be toggled in a profile."""

    UPPER = "upper"
    LOWER = "lower"
    DIGIT = "digit"
    SPECIAL = "special"
    HIGH_RANGE = "high_range"
    MINUS = "minus"
    UNDERLINE = "underline"
    SPACE = "space"
    BRACKETS = "brackets"

    @property
    def characters(self) -> str:
        """The canonical characters of this category."""
        return _CATEGORY_CHARACTERS[self]


_CATEGORY_CHARACTERS: dict[CharCategory, str] = {
    CharCategory.UPPER: UPPER_CASE,
    CharCategory.LOWER: LOWER_CASE,
    CharCategory.DIGIT: DIGITS,
    CharCategory.SPECIAL: SPECIAL,
    CharCategory.HIGH_RANGE: HIGH_RANGE,
    CharCategory.MINUS: "-",
    CharCategory.UNDERLINE: "_",
    CharCategory.SPACE: " ",
    CharCategory.BRACKETS: BRACKETS,
}

# Order in which categories are stripped when a stored character set is
# split back into toggles. A character shared by two categories belongs to
# the first one tried; stored profiles depend on this order.
CATEGORY_ORDER: tuple[CharCategory, ...] = (
    CharCategory.UPPER,
    CharCategory.LOWER,
    CharCategory.DIGIT,
    CharCategory.SPECIAL,
    CharCategory.HIGH_RANGE,
    CharCategory.MINUS,
    CharCategory.UNDERLINE,
    CharCategory.SPACE,
    CharCategory.BRACKETS,
)


def _characters_of(item: CharCategory | str) -> str:
    if isinstance(item, CharCategory):
        return item.characters
    return item


class CharSetSpec:
    """Set of characters composed from categories and literal characters.

    The set itself is unordered; ``canonical_form()`` renders the members
    deduplicated and ordered by code point, so two specs with the same
    members always render identically.

    ``excluded`` holds characters that must not be used even when they are
    members. It is kept apart from the members so that toggling categories
    never loses the user's exclusions.
    """

    def __init__(self, characters: str = "", excluded: str = ""):
        self._chars: set[str] = set()
        self.excluded = excluded
        self.add(characters)

    @classmethod
    def from_categories(
        cls,
        categories: Iterable[CharCategory],
        custom: str = "",
        excluded: str = "",
    ) -> "CharSetSpec":
        """Build a spec from enabled categories plus free-form characters.

        Args:
            categories: Categories to include
            custom: Additional literal characters
            excluded: Characters to exclude at generation time

        Returns:
            A new CharSetSpec
        """
        spec = cls(excluded=excluded)
        for category in categories:
            spec.add(category)
        spec.add(custom)
        return spec

    def add(self, item: CharCategory | str) -> None:
        """Add a category or literal characters to the set."""
        for ch in _characters_of(item):
            if ch not in INVALID:
                self._chars.add(ch)

    def remove_if_all_present(self, item: CharCategory | str) -> bool:
        """Remove a category or literal characters if all of them are present.

        Args:
            item: Category or literal characters to remove

        Returns:
            True if every character was present and has been removed,
            False if the set was left unchanged
        """
        chars = set(_characters_of(item))
        if not chars <= self._chars:
            return False

        self._chars -= chars
        return True

    def contains_all(self, item: CharCategory | str) -> bool:
        """Check whether every character of a category or string is present."""
        return set(_characters_of(item)) <= self._chars

    def canonical_form(self) -> str:
        """Render the members as a deduplicated, code-point ordered string."""
        return "".join(sorted(self._chars))

    def effective_characters(self) -> str:
        """Members minus the excluded characters, in canonical order."""
        excluded = set(self.excluded)
        return "".join(ch for ch in sorted(self._chars) if ch not in excluded)

    def copy(self) -> "CharSetSpec":
        return CharSetSpec(self.canonical_form(), excluded=self.excluded)

    def __contains__(self, ch: object) -> bool:
        return ch in self._chars

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._chars))

    def __len__(self) -> int:
        return len(self._chars)

    def __bool__(self) -> bool:
        return bool(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharSetSpec):
            return NotImplemented
        return self._chars == other._chars and self.excluded == other.excluded

    def __str__(self) -> str:
        return self.canonical_form()

    def __repr__(self) -> str:
        return f"CharSetSpec({self.canonical_form()!r}, excluded={self.excluded!r})"


def canonicalize(characters: str) -> str:
    """Return the canonical form of a raw character string."""
    return CharSetSpec(characters).canonical_form()
