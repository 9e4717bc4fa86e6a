"""Profile Store - the named profiles that persist across editing sessions."""

from enum import Enum
import logging

from pydantic import BaseModel, Field

from pwgen_profiles.exceptions import DuplicateProfileError, InvalidNameError
from pwgen_profiles.profiles.base import GenerationProfile, GeneratorType

logger = logging.getLogger(__name__)


class PseudoProfile(str, Enum):
    """Reserved entries of the profile list that are not stored profiles."""

    CUSTOM = "(Custom)"
    DERIVE_FROM_INITIAL = "(Derive from previous password)"
    AUTO_GENERATED = "(Automatically generated passwords)"

    @property
    def label(self) -> str:
        return self.value


# Never valid as user profile names.
RESERVED_LABELS: frozenset[str] = frozenset(p.label for p in PseudoProfile)


STANDARD_PROFILES: tuple[tuple[str, str], ...] = (
    ("40-Bit Hex Key (built-in)", "h{10}"),
    ("128-Bit Hex Key (built-in)", "h{32}"),
    ("256-Bit Hex Key (built-in)", "h{64}"),
    ("Random MAC Address (built-in)", "HH\\-HH\\-HH\\-HH\\-HH\\-HH"),
)


class ProfileStore(BaseModel):
    """User profiles plus the two reserved profiles.

    - ``user_profiles``: ordered, names unique
    - ``auto_generated``: settings for automatically generated passwords
    - ``last_used``: the settings the editor was left with last time
    """

    user_profiles: list[GenerationProfile] = Field(
        default_factory=list,
        description="User-defined profiles in display order"
    )
    auto_generated: GenerationProfile = Field(
        default_factory=GenerationProfile,
        description="Profile used for automatically generated passwords"
    )
    last_used: GenerationProfile = Field(
        default_factory=GenerationProfile,
        description="Profile the last editing session ended with"
    )

    def get(self, name: str) -> GenerationProfile | None:
        """Get a user profile by name."""
        index = self.index_of(name)
        if index < 0:
            return None
        return self.user_profiles[index]

    def index_of(self, name: str) -> int:
        """Position of the first user profile with this name, -1 if none."""
        for i, profile in enumerate(self.user_profiles):
            if profile.name == name:
                return i
        return -1

    def add(self, profile: GenerationProfile) -> None:
        """Append a user profile.

        Raises:
            InvalidNameError: If the name is empty or a reserved label
            DuplicateProfileError: If a profile with the same name exists
        """
        if not profile.name:
            raise InvalidNameError(profile.name, "name must not be empty")
        if profile.name in RESERVED_LABELS:
            raise InvalidNameError(profile.name, "name is reserved")
        if self.index_of(profile.name) >= 0:
            raise DuplicateProfileError(f"Profile '{profile.name}' already exists")
        self.user_profiles.append(profile)

    def replace(self, profile: GenerationProfile) -> bool:
        """Replace the user profile with the same name, keeping its position.

        Returns:
            True if replaced, False if no profile had that name
        """
        index = self.index_of(profile.name)
        if index < 0:
            return False
        self.user_profiles[index] = profile
        return True

    def remove(self, name: str) -> bool:
        """Remove the first user profile with this name."""
        index = self.index_of(name)
        if index < 0:
            return False
        del self.user_profiles[index]
        return True

    def list_names(self) -> list[str]:
        return [p.name for p in self.user_profiles]

    def add_standard_profiles_if_none_available(self) -> bool:
        """Seed the built-in hex key and MAC address profiles into an empty store.

        Returns:
            True if the standard profiles were added
        """
        if self.user_profiles:
            return False

        for name, pattern in STANDARD_PROFILES:
            self.user_profiles.append(
                GenerationProfile(
                    name=name,
                    generator_type=GeneratorType.PATTERN,
                    pattern=pattern,
                )
            )
        logger.debug("Added %d standard profiles", len(STANDARD_PROFILES))
        return True

