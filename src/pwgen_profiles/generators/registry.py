"""Custom Generator Registry for pluggable password algorithms."""

from abc import abstractmethod
from typing import Iterator
import base64
import binascii
import logging
import uuid

from pwgen_profiles.exceptions import UnresolvedCustomAlgorithm
from pwgen_profiles.generators.base import Generator

logger = logging.getLogger(__name__)


def identifier_for(generator_uuid: uuid.UUID) -> str:
    """Encode a generator UUID as the identifier stored in profiles."""
    return base64.b64encode(generator_uuid.bytes).decode("ascii")


def parse_identifier(identifier: str) -> uuid.UUID:
    """Decode a stored identifier back into a UUID.

    Raises:
        UnresolvedCustomAlgorithm: If the identifier is empty or malformed
    """
    if not identifier:
        raise UnresolvedCustomAlgorithm(identifier)
    try:
        raw = base64.b64decode(identifier, validate=True)
        return uuid.UUID(bytes=raw)
    except (binascii.Error, ValueError) as e:
        raise UnresolvedCustomAlgorithm(identifier) from e


class CustomGenerator(Generator):
    """A pluggable generator that profiles reference by identifier.

    Subclasses set ``uuid`` and ``name``. Generators that can be configured
    set ``supports_options`` and override ``edit_options``; the options are
    an opaque string stored in the profile.
    """

    uuid: uuid.UUID
    name: str
    supports_options: bool = False

    @property
    def identifier(self) -> str:
        return identifier_for(self.uuid)

    def edit_options(self, current: str) -> str:
        """Let the user edit the options blob.

        Args:
            current: Current options ("" for defaults)

        Returns:
            The possibly updated options; the unchanged value if the user
            aborts
        """
        return current

    @abstractmethod
    def generate(self, profile, entropy=None, registry=None) -> str:
        pass


class CustomGeneratorRegistry:
    """Registry for custom password generators.

    Generators are looked up by their stable identifier (or UUID) when a
    profile is resolved and by display name when the user picks one from a
    list.
    """

    def __init__(self, register_defaults: bool = True):
        self._generators: dict[uuid.UUID, CustomGenerator] = {}
        if register_defaults:
            self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in custom generators."""
        from pwgen_profiles.generators.pronounceable import PronounceableGenerator

        self.register(PronounceableGenerator())

    def register(self, generator: CustomGenerator) -> None:
        """Register a custom generator.

        Args:
            generator: The generator to register

        Raises:
            ValueError: If a generator with the same UUID or name
                is already registered
        """
        if generator.uuid in self._generators:
            raise ValueError(f"Generator '{generator.name}' is already registered")
        if self.find_by_name(generator.name) is not None:
            raise ValueError(f"A generator named '{generator.name}' is already registered")

        self._generators[generator.uuid] = generator
        logger.debug("Registered custom generator %s (%s)", generator.name, generator.identifier)

    def unregister(self, generator_uuid: uuid.UUID) -> bool:
        """Remove a generator from the registry.

        Returns:
            True if removed, False if not found
        """
        if generator_uuid in self._generators:
            del self._generators[generator_uuid]
            return True
        return False

    def find_by_id(self, identifier: str | uuid.UUID) -> CustomGenerator | None:
        """Find a generator by identifier or UUID; None if unknown or malformed."""
        try:
            return self.resolve(identifier)
        except UnresolvedCustomAlgorithm:
            return None

    def find_by_name(self, name: str) -> CustomGenerator | None:
        """Find a generator by its display name."""
        for generator in self._generators.values():
            if generator.name == name:
                return generator
        return None

    def resolve(self, identifier: str | uuid.UUID) -> CustomGenerator:
        """Resolve an identifier to a registered generator.

        Args:
            identifier: Stored identifier string or UUID

        Returns:
            The registered generator

        Raises:
            UnresolvedCustomAlgorithm: If the identifier is empty, malformed
                or not registered
        """
        if isinstance(identifier, uuid.UUID):
            generator_uuid = identifier
        else:
            generator_uuid = parse_identifier(identifier)

        generator = self._generators.get(generator_uuid)
        if generator is None:
            raise UnresolvedCustomAlgorithm(str(identifier))
        return generator

    def list_names(self) -> list[str]:
        """List the display names of all registered generators."""
        return [g.name for g in self._generators.values()]

    def __iter__(self) -> Iterator[CustomGenerator]:
        return iter(list(self._generators.values()))

    def __len__(self) -> int:
        return len(self._generators)

    def __contains__(self, identifier: str | uuid.UUID) -> bool:
        return self.find_by_id(identifier) is not None


_global_registry: CustomGeneratorRegistry | None = None


def get_global_generator_registry() -> CustomGeneratorRegistry:
    """Get the global custom generator registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = CustomGeneratorRegistry()
    return _global_registry
