"""Preview Runner - generates a bounded batch of sample passwords.

The batch is produced lazily: each iteration checks for cancellation,
invokes the generator once with the same profile and reports progress.
Outcomes are handed to the consumer one at a time and not kept.
"""

from typing import Callable, Iterator
import logging

from pydantic import SecretStr

from pwgen_profiles.exceptions import GeneratorError
from pwgen_profiles.generators.base import SupportsGenerate
from pwgen_profiles.generators.registry import (
    CustomGeneratorRegistry,
    get_global_generator_registry,
)
from pwgen_profiles.profiles.base import GenerationProfile

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_COUNT = 30


class PreviewOutcome:
    """Result of one preview iteration: a secret or a generator failure."""

    __slots__ = ("index", "secret", "error")

    def __init__(
        self,
        index: int,
        secret: SecretStr | None = None,
        error: GeneratorError | None = None,
    ):
        self.index = index
        self.secret = secret
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def reveal(self) -> str:
        """Return the generated password.

        Raises:
            GeneratorError: The failure of this iteration, if it failed
        """
        if self.error is not None:
            raise self.error
        return self.secret.get_secret_value()

    def __repr__(self) -> str:
        if self.ok:
            return f"PreviewOutcome(index={self.index}, secret={self.secret!r})"
        return f"PreviewOutcome(index={self.index}, error={self.error!r})"


class PreviewRunner:
    """Runs a generator repeatedly to preview the output of a profile."""

    def __init__(self, registry: CustomGeneratorRegistry | None = None):
        self.registry = registry if registry is not None else get_global_generator_registry()

    def run(
        self,
        profile: GenerationProfile,
        count: int,
        generator: SupportsGenerate,
        on_progress: Callable[[int], None] | None = None,
        is_cancelled: Callable[[], bool] | None = None,
    ) -> Iterator[PreviewOutcome]:
        """Generate up to ``count`` sample passwords.

        Args:
            profile: Immutable profile snapshot used for every iteration
            count: Number of samples to generate
            generator: Generator invoked once per iteration
            on_progress: Called with ``100 * i // count`` for each iteration
                ``i`` and with 100 once the batch ends
            is_cancelled: Checked before each iteration; stops the batch
                early when it returns True

        Returns:
            A lazy iterator with one PreviewOutcome per completed iteration.
            A GeneratorError is reported in its outcome and does not stop the
            batch; any other exception, including one raised by a callback,
            propagates.

        Raises:
            ValueError: If count is negative (raised immediately)
        """
        if count < 0:
            raise ValueError("count must not be negative")
        return self._iterate(profile, count, generator, on_progress, is_cancelled)

    def _iterate(
        self,
        profile: GenerationProfile,
        count: int,
        generator: SupportsGenerate,
        on_progress: Callable[[int], None] | None,
        is_cancelled: Callable[[], bool] | None,
    ) -> Iterator[PreviewOutcome]:
        produced = 0
        for i in range(count):
            if is_cancelled is not None and is_cancelled():
                logger.debug("Preview cancelled after %d of %d", produced, count)
                break

            try:
                secret = generator.generate(profile, None, self.registry)
                outcome = PreviewOutcome(i, secret=SecretStr(secret))
            except GeneratorError as e:
                logger.debug("Preview iteration %d failed: %s", i, e)
                outcome = PreviewOutcome(i, error=e)

            if on_progress is not None:
                on_progress((100 * i) // count)

            produced += 1
            yield outcome

        if on_progress is not None:
            on_progress(100)
