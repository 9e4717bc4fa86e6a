"""Base classes for generation profiles.

A GenerationProfile is the complete description of how to generate a
password: which generator to use and every parameter any of the generators
needs. Profiles are values; they never reference live registry objects,
only the stable identifier of a custom generator.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pwgen_profiles.charsets.charset import CharCategory, CharSetSpec, canonicalize


class GeneratorType(str, Enum):
    """Generation modes a profile can select."""

    CHARSET = "charset"
    PATTERN = "pattern"
    CUSTOM = "custom"


DEFAULT_LENGTH = 20


def _default_char_set() -> str:
    return CharSetSpec.from_categories(
        [CharCategory.UPPER, CharCategory.LOWER, CharCategory.DIGIT]
    ).canonical_form()


class GenerationProfile(BaseModel):
    """Configuration describing how to generate one password.

    The generator type decides which fields drive generation:

    - charset: ``length`` and ``char_set``
    - pattern: ``pattern`` and ``pattern_permute``
    - custom: ``custom_algorithm_id`` and ``custom_algorithm_options``

    The remaining fields are kept as they are so that switching modes back
    and forth never loses settings.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Display name")
    generator_type: GeneratorType = Field(
        default=GeneratorType.CHARSET,
        description="Generation mode"
    )
    length: int = Field(default=DEFAULT_LENGTH, ge=0, description="Target password length")
    char_set: str = Field(
        default_factory=_default_char_set,
        description="Canonical character set string"
    )
    pattern: str = Field(default="", description="Pattern for pattern mode")
    pattern_permute: bool = Field(
        default=False,
        description="Randomly permute the characters produced by the pattern"
    )
    collect_user_entropy: bool = Field(
        default=False,
        description="Ask the user for additional entropy before generating"
    )
    exclude_look_alike: bool = Field(
        default=False,
        description="Exclude look-alike characters such as O/0 and l/1"
    )
    no_repeating_characters: bool = Field(
        default=False,
        description="Use every character at most once"
    )
    exclude_characters: str = Field(default="", description="Characters never to use")
    custom_algorithm_id: str = Field(
        default="",
        description="Identifier of the custom generator (empty for none)"
    )
    custom_algorithm_options: str = Field(
        default="",
        description="Opaque options of the custom generator (empty for default)"
    )

    @field_validator("char_set")
    @classmethod
    def _canonical_char_set(cls, value: str) -> str:
        return canonicalize(value)

    def char_set_spec(self) -> CharSetSpec:
        """Build a fresh CharSetSpec from the stored character set."""
        return CharSetSpec(self.char_set, excluded=self.exclude_characters)

    def renamed(self, name: str) -> "GenerationProfile":
        """Return a copy of this profile with another name."""
        return self.model_copy(update={"name": name})


class ProfileBuilder:
    """Fluent builder for creating GenerationProfiles."""

    def __init__(self, name: str = ""):
        self._name = name
        self._values: dict = {}
        self._categories: list[CharCategory] = []
        self._custom_chars = ""

    def charset(self, length: int, *categories: CharCategory | str) -> "ProfileBuilder":
        self._values["generator_type"] = GeneratorType.CHARSET
        self._values["length"] = length
        self._categories.extend(CharCategory(c) for c in categories)
        return self

    def characters(self, chars: str) -> "ProfileBuilder":
        self._custom_chars += chars
        return self

    def pattern(self, pattern: str, permute: bool = False) -> "ProfileBuilder":
        self._values["generator_type"] = GeneratorType.PATTERN
        self._values["pattern"] = pattern
        self._values["pattern_permute"] = permute
        return self

    def custom(self, identifier: str, options: str = "") -> "ProfileBuilder":
        self._values["generator_type"] = GeneratorType.CUSTOM
        self._values["custom_algorithm_id"] = identifier
        self._values["custom_algorithm_options"] = options
        return self

    def exclude(self, chars: str) -> "ProfileBuilder":
        self._values["exclude_characters"] = chars
        return self

    def exclude_look_alike(self, enabled: bool = True) -> "ProfileBuilder":
        self._values["exclude_look_alike"] = enabled
        return self

    def no_repeat(self, enabled: bool = True) -> "ProfileBuilder":
        self._values["no_repeating_characters"] = enabled
        return self

    def collect_entropy(self, enabled: bool = True) -> "ProfileBuilder":
        self._values["collect_user_entropy"] = enabled
        return self

    def build(self) -> GenerationProfile:
        values = dict(self._values)
        if self._categories or self._custom_chars:
            values["char_set"] = CharSetSpec.from_categories(
                self._categories, self._custom_chars
            ).canonical_form()
        return GenerationProfile(name=self._name, **values)

