"""Character Set Generator - draws passwords from a profile's character set."""

from typing import TYPE_CHECKING
import logging

from pwgen_profiles.exceptions import GeneratorError
from pwgen_profiles.generators.base import Generator
from pwgen_profiles.profiles.base import GenerationProfile

if TYPE_CHECKING:
    from pwgen_profiles.generators.registry import CustomGeneratorRegistry

logger = logging.getLogger(__name__)


class CharSetGenerator(Generator):
    """Generator for character-set profiles.

    Every character is drawn independently from the profile's character set
    after exclusions. With ``no_repeating_characters`` each drawn character
    is taken out of the pool.
    """

    def generate(
        self,
        profile: GenerationProfile,
        entropy: bytes | None = None,
        registry: "CustomGeneratorRegistry | None" = None,
    ) -> str:
        if profile.length == 0:
            return ""

        pool = list(self._filter_pool(profile.char_set_spec().effective_characters(), profile))
        if not pool:
            raise GeneratorError("Character set is empty after exclusions")

        if profile.no_repeating_characters and profile.length > len(pool):
            raise GeneratorError(
                f"Cannot draw {profile.length} distinct characters from a set of {len(pool)}"
            )

        logger.debug("Drawing %d characters from a pool of %d", profile.length, len(pool))

        chars = []
        for _ in range(profile.length):
            index = self._rng.randrange(len(pool))
            if profile.no_repeating_characters:
                chars.append(pool.pop(index))
            else:
                chars.append(pool[index])

        return "".join(chars)
