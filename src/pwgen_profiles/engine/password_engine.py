"""Password Engine - generates a password for any profile.

The engine dispatches a profile to the generator matching its mode and is
the default Generator used for previews and one-off generation.
"""

import logging

from pwgen_profiles.exceptions import GeneratorError, UnresolvedCustomAlgorithm
from pwgen_profiles.generators.base import Generator
from pwgen_profiles.generators.charset_generator import CharSetGenerator
from pwgen_profiles.generators.pattern_generator import PatternGenerator
from pwgen_profiles.generators.registry import (
    CustomGeneratorRegistry,
    get_global_generator_registry,
)
from pwgen_profiles.profiles.base import GenerationProfile, GeneratorType

logger = logging.getLogger(__name__)


class PasswordEngine:
    """Engine for generating passwords from profiles.

    The PasswordEngine:
    - Uses the character-set generator for charset profiles
    - Uses the pattern generator for pattern profiles
    - Resolves custom profiles through the custom generator registry
    """

    def __init__(
        self,
        registry: CustomGeneratorRegistry | None = None,
        seed: int | None = None,
    ):
        self.registry = registry if registry is not None else get_global_generator_registry()
        self._generators: dict[GeneratorType, Generator] = {
            GeneratorType.CHARSET: CharSetGenerator(seed=seed),
            GeneratorType.PATTERN: PatternGenerator(seed=seed),
        }

    def generate(
        self,
        profile: GenerationProfile,
        entropy: bytes | None = None,
        registry: CustomGeneratorRegistry | None = None,
    ) -> str:
        """Generate one password.

        Args:
            profile: The profile describing the password
            entropy: Optional additional entropy supplied by the user
            registry: Registry overriding the engine's own for custom profiles

        Returns:
            The generated password

        Raises:
            GeneratorError: If generation fails or the custom algorithm
                cannot be resolved
        """
        if registry is None:
            registry = self.registry

        if profile.generator_type == GeneratorType.CUSTOM:
            try:
                generator = registry.resolve(profile.custom_algorithm_id)
            except UnresolvedCustomAlgorithm as e:
                raise GeneratorError(str(e)) from e
            logger.debug("Generating with custom algorithm %s", generator.name)
            return generator.generate(profile, entropy, registry)

        generator = self._generators[profile.generator_type]
        return generator.generate(profile, entropy, registry)
