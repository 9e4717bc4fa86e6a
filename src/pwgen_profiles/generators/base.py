"""Base classes for Generators.

Generators are responsible for:
- Turning a GenerationProfile into one password
- Honouring the profile's exclusion flags
- Reporting failures as GeneratorError

They never modify the profile they are given.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol
import random
import secrets

from pwgen_profiles.charsets.charset import LOOK_ALIKE
from pwgen_profiles.profiles.base import GenerationProfile

if TYPE_CHECKING:
    from pwgen_profiles.generators.registry import CustomGeneratorRegistry


class SupportsGenerate(Protocol):
    """Anything that can produce a password from a profile."""

    def generate(
        self,
        profile: GenerationProfile,
        entropy: bytes | None = None,
        registry: "CustomGeneratorRegistry | None" = None,
    ) -> str:
        ...


class Generator(ABC):
    """Abstract base class for all password generators."""

    def __init__(self, seed: int | None = None):
        """Initialize the generator.

        Args:
            seed: Optional random seed for deterministic generation. Without
                a seed the operating system's secure random source is used.
        """
        self._seed = seed
        self._rng = self._make_rng(seed)

    @staticmethod
    def _make_rng(seed: int | None) -> random.Random:
        if seed is None:
            return secrets.SystemRandom()
        return random.Random(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    @seed.setter
    def seed(self, value: int | None) -> None:
        self._seed = value
        self._rng = self._make_rng(value)

    @abstractmethod
    def generate(
        self,
        profile: GenerationProfile,
        entropy: bytes | None = None,
        registry: "CustomGeneratorRegistry | None" = None,
    ) -> str:
        """Generate a password from a profile.

        Args:
            profile: The profile describing the password
            entropy: Optional additional entropy supplied by the user
            registry: Registry used to resolve custom generators

        Returns:
            The generated password

        Raises:
            GeneratorError: If no password can be generated
        """
        pass

    def _filter_pool(self, chars: str, profile: GenerationProfile) -> str:
        """Apply the profile's exclusions to a pool of characters.

        Args:
            chars: Candidate characters
            profile: Profile carrying the exclusion settings

        Returns:
            Deduplicated characters in their original order
        """
        excluded = set(profile.exclude_characters)
        if profile.exclude_look_alike:
            excluded.update(LOOK_ALIKE)

        seen: set[str] = set()
        pool = []
        for ch in chars:
            if ch in excluded or ch in seen:
                continue
            seen.add(ch)
            pool.append(ch)
        return "".join(pool)
