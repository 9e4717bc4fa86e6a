"""Profile Store Loader for reading and writing the store as YAML."""

from pathlib import Path
from typing import Any
import logging

import yaml
from pydantic import ValidationError

from pwgen_profiles.exceptions import ProfileStoreError
from pwgen_profiles.profiles.base import GenerationProfile, GeneratorType
from pwgen_profiles.profiles.store import RESERVED_LABELS, ProfileStore

logger = logging.getLogger(__name__)


class ProfileStoreLoader:
    """Loads and saves a ProfileStore as a YAML document.

    Layout::

        last_used: {profile}
        auto_generated: {profile}
        user_profiles:
          - {profile}
    """

    def load_file(self, path: Path | str) -> ProfileStore:
        """Load a store from a YAML file.

        A missing file yields an empty store.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded ProfileStore instance
        """
        path = Path(path)
        if not path.exists():
            logger.debug("Profile store %s does not exist, starting empty", path)
            return ProfileStore()

        with open(path, encoding="utf-8") as f:
            content = f.read()

        return self.load_from_string(content)

    def load_from_string(self, content: str) -> ProfileStore:
        """Load a store from a YAML string.

        Raises:
            ProfileStoreError: If the content is not a YAML mapping
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ProfileStoreError(f"Profile store is not valid YAML: {e}") from e

        if data is None:
            return ProfileStore()
        if not isinstance(data, dict):
            raise ProfileStoreError("Profile store must be a YAML mapping")

        return self._parse_store(data)

    def _parse_store(self, data: dict[str, Any]) -> ProfileStore:
        """Parse store data from YAML structure.

        Unreadable profiles are skipped (or reset to defaults for the
        reserved ones) with a warning; they never make the store unusable.
        """
        store = ProfileStore()

        for key in ("last_used", "auto_generated"):
            if not isinstance(data.get(key), dict):
                continue
            try:
                setattr(store, key, self._parse_profile(data[key]))
            except ProfileStoreError as e:
                logger.warning("Resetting %s profile to defaults: %s", key, e)

        for p_data in data.get("user_profiles") or []:
            if not isinstance(p_data, dict):
                logger.warning("Skipping malformed profile entry: %r", p_data)
                continue

            try:
                profile = self._parse_profile(p_data)
            except ProfileStoreError as e:
                logger.warning("Skipping unreadable profile: %s", e)
                continue

            if not profile.name:
                logger.warning("Skipping user profile without a name")
                continue
            if profile.name in RESERVED_LABELS:
                logger.warning("Skipping user profile with reserved name '%s'", profile.name)
                continue
            if profile.name in store.list_names():
                logger.warning("Skipping duplicate profile '%s'", profile.name)
                continue
            store.user_profiles.append(profile)

        return store

    def _parse_profile(self, data: dict[str, Any]) -> GenerationProfile:
        """Parse a single profile, falling back to defaults for bad values.

        Raises:
            ProfileStoreError: If a value cannot be used even after fallbacks
        """
        generator_type_str = data.get("generator_type", "charset")
        try:
            generator_type = GeneratorType(generator_type_str)
        except ValueError:
            logger.warning("Unknown generator type %r, using charset", generator_type_str)
            generator_type = GeneratorType.CHARSET

        values: dict[str, Any] = {"generator_type": generator_type}
        for key in (
            "name",
            "length",
            "char_set",
            "pattern",
            "pattern_permute",
            "collect_user_entropy",
            "exclude_look_alike",
            "no_repeating_characters",
            "exclude_characters",
            "custom_algorithm_id",
            "custom_algorithm_options",
        ):
            if data.get(key) is not None:
                values[key] = data[key]

        custom_id = values.get("custom_algorithm_id", "")
        if not isinstance(custom_id, str):
            logger.warning("Ignoring malformed custom algorithm id %r", custom_id)
            values["custom_algorithm_id"] = ""

        try:
            return GenerationProfile(**values)
        except ValidationError as e:
            raise ProfileStoreError(
                f"Invalid profile '{values.get('name', '')}': {e}"
            ) from e

    def save_file(self, store: ProfileStore, path: Path | str) -> None:
        """Save a store to a YAML file.

        Args:
            store: The store to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._store_to_dict(store)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def _store_to_dict(self, store: ProfileStore) -> dict[str, Any]:
        """Convert a ProfileStore to a dictionary for YAML serialization."""
        return {
            "last_used": self._profile_to_dict(store.last_used),
            "auto_generated": self._profile_to_dict(store.auto_generated),
            "user_profiles": [self._profile_to_dict(p) for p in store.user_profiles],
        }

    def _profile_to_dict(self, profile: GenerationProfile) -> dict[str, Any]:
        return profile.model_dump(mode="json")


def load_store(path: Path | str) -> ProfileStore:
    """Convenience function to load a profile store from a file.

    Args:
        path: Path to the YAML file

    Returns:
        Loaded ProfileStore instance
    """
    loader = ProfileStoreLoader()
    return loader.load_file(path)


def save_store(store: ProfileStore, path: Path | str) -> None:
    """Convenience function to save a profile store to a file."""
    ProfileStoreLoader().save_file(store, path)
