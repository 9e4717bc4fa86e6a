"""Profile Manager - the editing session behind a password generator dialog.

The ProfileManager owns the editor state of one session:

- The selected profile label (a pseudo-profile or a stored user profile)
- The individual selections (mode, length, category toggles, free text,
  flags, custom algorithm)
- A cache of custom-algorithm options keyed by algorithm identifier

A front end issues commands (import, select, set, save, remove) and reads
the result back through ``export_active_profile()``.
"""

from enum import Enum
import logging

from pwgen_profiles.charsets.charset import CATEGORY_ORDER, CharCategory, CharSetSpec
from pwgen_profiles.exceptions import InvalidNameError, UnresolvedCustomAlgorithm
from pwgen_profiles.generators.registry import (
    CustomGenerator,
    CustomGeneratorRegistry,
    get_global_generator_registry,
)
from pwgen_profiles.profiles.base import DEFAULT_LENGTH, GenerationProfile, GeneratorType
from pwgen_profiles.profiles.store import RESERVED_LABELS, ProfileStore, PseudoProfile

logger = logging.getLogger(__name__)


class SaveOutcome(str, Enum):
    """Which branch ``save_active_profile_as`` took."""

    REPLACED_RESERVED = "replaced_reserved"
    REPLACED_EXISTING = "replaced_existing"
    APPENDED = "appended"


class ProfileManager:
    """Editing session over a ProfileStore.

    Not safe for concurrent use; one manager serves one editor at a time.
    """

    def __init__(
        self,
        store: ProfileStore,
        registry: CustomGeneratorRegistry | None = None,
        initial: GenerationProfile | None = None,
        add_standard_profiles: bool = True,
    ):
        """Start an editing session.

        Args:
            store: Store holding the user and reserved profiles
            registry: Registry of custom generators
            initial: Profile supplied by the caller, offered as
                "derive from previous password"
            add_standard_profiles: Seed the built-in profiles into a store
                without user profiles
        """
        self.store = store
        self.registry = registry if registry is not None else get_global_generator_registry()
        self.initial = initial

        self._options: dict[str, str] = {}

        self._selected_name = PseudoProfile.CUSTOM.label
        self._generator_type = GeneratorType.CHARSET
        self._length = DEFAULT_LENGTH
        self._categories: dict[CharCategory, bool] = {c: False for c in CATEGORY_ORDER}
        self._custom_characters = ""
        self._pattern = ""
        self._pattern_permute = False
        self._collect_user_entropy = False
        self._exclude_look_alike = False
        self._no_repeating_characters = False
        self._exclude_characters = ""
        self._custom_algorithm: CustomGenerator | None = None

        if initial is not None:
            self._cache_options_of(initial)

        if add_standard_profiles:
            self.store.add_standard_profiles_if_none_available()
        for profile in self.store.user_profiles:
            if profile.generator_type == GeneratorType.CUSTOM:
                self._cache_options_of(profile)

        if initial is not None:
            self.select_pseudo_profile(PseudoProfile.DERIVE_FROM_INITIAL)
        else:
            self.import_profile(self.store.last_used)
            self._selected_name = PseudoProfile.CUSTOM.label

    # ------------------------------------------------------------------
    # Profile <-> selections

    def export_active_profile(self) -> GenerationProfile:
        """Snapshot the current selections into a profile."""
        spec = CharSetSpec.from_categories(
            [c for c in CATEGORY_ORDER if self._categories[c]],
            self._custom_characters,
        )

        algorithm = self._custom_algorithm
        if algorithm is not None:
            custom_id = algorithm.identifier
            custom_options = self._options.get(custom_id) or ""
        else:
            custom_id = ""
            custom_options = ""

        return GenerationProfile(
            name=self._selected_name,
            generator_type=self._generator_type,
            length=self._length,
            char_set=spec.canonical_form(),
            pattern=self._pattern,
            pattern_permute=self._pattern_permute,
            collect_user_entropy=self._collect_user_entropy,
            exclude_look_alike=self._exclude_look_alike,
            no_repeating_characters=self._no_repeating_characters,
            exclude_characters=self._exclude_characters,
            custom_algorithm_id=custom_id,
            custom_algorithm_options=custom_options,
        )

    def import_profile(self, profile: GenerationProfile) -> None:
        """Replace all selections with the settings of a profile.

        Category toggles are recovered by stripping each category from the
        profile's character set in CATEGORY_ORDER; characters left over
        become the custom characters. An unresolvable custom algorithm
        leaves no algorithm selected.
        """
        self._selected_name = profile.name
        self._generator_type = profile.generator_type
        self._length = profile.length

        remaining = CharSetSpec(profile.char_set)
        for category in CATEGORY_ORDER:
            self._categories[category] = remaining.remove_if_all_present(category)
        self._custom_characters = remaining.canonical_form()

        self._pattern = profile.pattern
        self._pattern_permute = profile.pattern_permute
        self._collect_user_entropy = profile.collect_user_entropy
        self._exclude_look_alike = profile.exclude_look_alike
        self._no_repeating_characters = profile.no_repeating_characters
        self._exclude_characters = profile.exclude_characters

        self._select_custom_algorithm_by_id(
            profile.custom_algorithm_id, profile.custom_algorithm_options
        )

    def _select_custom_algorithm_by_id(self, identifier: str, options: str | None) -> None:
        try:
            algorithm = self.registry.resolve(identifier)
        except UnresolvedCustomAlgorithm as e:
            if identifier:
                logger.debug("%s; no custom algorithm selected", e)
            self._custom_algorithm = None
            return

        self._custom_algorithm = algorithm
        if options is not None:
            self._options[algorithm.identifier] = options

    def _cache_options_of(self, profile: GenerationProfile) -> None:
        algorithm = self.registry.find_by_id(profile.custom_algorithm_id)
        if algorithm is not None:
            self._options[algorithm.identifier] = profile.custom_algorithm_options

    # ------------------------------------------------------------------
    # Selection

    @property
    def selected_name(self) -> str:
        return self._selected_name

    def choices(self) -> list[str]:
        """Labels a user can pick from, in display order."""
        labels = [PseudoProfile.CUSTOM.label]
        if self.initial is not None:
            labels.append(PseudoProfile.DERIVE_FROM_INITIAL.label)
        labels.append(PseudoProfile.AUTO_GENERATED.label)
        labels.extend(self.store.list_names())
        return labels

    def select_pseudo_profile(self, kind: PseudoProfile) -> None:
        """Select one of the reserved pseudo-profiles.

        CUSTOM only marks the selection. DERIVE_FROM_INITIAL re-imports the
        caller's initial profile (nothing happens without one).
        AUTO_GENERATED imports the store's auto-generated profile.
        """
        kind = PseudoProfile(kind)

        if kind == PseudoProfile.DERIVE_FROM_INITIAL:
            if self.initial is None:
                return
            self.import_profile(self.initial)
        elif kind == PseudoProfile.AUTO_GENERATED:
            self.import_profile(self.store.auto_generated)

        self._selected_name = kind.label
        logger.debug("Selected pseudo-profile %s", kind.label)

    def select_profile(self, name: str) -> bool:
        """Select a pseudo-profile label or a stored user profile.

        Returns:
            True if the label was known and selected
        """
        if name in RESERVED_LABELS:
            kind = PseudoProfile(name)
            if kind == PseudoProfile.DERIVE_FROM_INITIAL and self.initial is None:
                return False
            self.select_pseudo_profile(kind)
            return True

        profile = self.store.get(name)
        if profile is None:
            return False

        self.import_profile(profile)
        self._selected_name = name
        logger.debug("Selected profile %s", name)
        return True

    @property
    def can_remove_selected(self) -> bool:
        return self._selected_name not in RESERVED_LABELS

    # ------------------------------------------------------------------
    # Store CRUD

    def save_active_profile_as(self, name: str) -> SaveOutcome:
        """Store the active settings under a name.

        Args:
            name: Target name; the auto-generated label replaces the
                reserved auto-generated profile

        Returns:
            Which branch was taken

        Raises:
            InvalidNameError: If the name is empty or is the Custom or
                derive-from-initial label
        """
        if not name:
            raise InvalidNameError(name, "name must not be empty")
        if name in (PseudoProfile.CUSTOM.label, PseudoProfile.DERIVE_FROM_INITIAL.label):
            raise InvalidNameError(name, "name is reserved")

        current = self.export_active_profile()

        if name == PseudoProfile.AUTO_GENERATED.label:
            self.store.auto_generated = current.renamed("")
            outcome = SaveOutcome.REPLACED_RESERVED
        elif self.store.replace(current.renamed(name)):
            outcome = SaveOutcome.REPLACED_EXISTING
        else:
            self.store.add(current.renamed(name))
            outcome = SaveOutcome.APPENDED

        self._selected_name = name
        logger.debug("Saved profile %s (%s)", name, outcome.value)
        return outcome

    def remove_profile(self, name: str) -> bool:
        """Remove a stored user profile.

        Returns:
            False for reserved labels and unknown names, True if removed
        """
        if name in RESERVED_LABELS:
            return False

        removed = self.store.remove(name)
        if removed:
            self._selected_name = PseudoProfile.CUSTOM.label
            logger.debug("Removed profile %s", name)
        return removed

    # ------------------------------------------------------------------
    # Custom algorithm options

    def options_for(self, identifier: str) -> str | None:
        """Cached options of a custom algorithm, None if never set."""
        return self._options.get(identifier)

    def set_options_for(self, identifier: str, blob: str) -> None:
        self._options[identifier] = blob

    @property
    def custom_algorithm(self) -> CustomGenerator | None:
        return self._custom_algorithm

    @property
    def custom_options_available(self) -> bool:
        """Whether the options of the selected custom algorithm can be edited."""
        return (
            self._generator_type == GeneratorType.CUSTOM
            and self._custom_algorithm is not None
            and self._custom_algorithm.supports_options
        )

    def select_custom_algorithm(self, name: str | None) -> bool:
        """Select a custom algorithm by display name, or none.

        Returns:
            False if the name is not registered; no algorithm is then selected
        """
        self._mark_custom()
        if name is None:
            self._custom_algorithm = None
            return True

        algorithm = self.registry.find_by_name(name)
        self._custom_algorithm = algorithm
        return algorithm is not None

    def edit_custom_options(self) -> bool:
        """Open the options editor of the selected custom algorithm.

        Returns:
            False if no algorithm is selected or it has no options
        """
        algorithm = self._custom_algorithm
        if algorithm is None or not algorithm.supports_options:
            return False

        current = self._options.get(algorithm.identifier) or ""
        self._options[algorithm.identifier] = algorithm.edit_options(current)
        return True

    # ------------------------------------------------------------------
    # Field edits; each one turns the selection into a custom profile

    def _mark_custom(self) -> None:
        self._selected_name = PseudoProfile.CUSTOM.label

    def set_generator_type(self, generator_type: GeneratorType | str) -> None:
        self._generator_type = GeneratorType(generator_type)
        self._mark_custom()

    def set_length(self, length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        self._length = length
        self._mark_custom()

    def set_category(self, category: CharCategory | str, enabled: bool) -> None:
        self._categories[CharCategory(category)] = enabled
        self._mark_custom()

    def set_custom_characters(self, chars: str) -> None:
        self._custom_characters = chars
        self._mark_custom()

    def set_pattern(self, pattern: str, permute: bool | None = None) -> None:
        self._pattern = pattern
        if permute is not None:
            self._pattern_permute = permute
        self._mark_custom()

    def set_pattern_permute(self, enabled: bool) -> None:
        self._pattern_permute = enabled
        self._mark_custom()

    def set_collect_user_entropy(self, enabled: bool) -> None:
        self._collect_user_entropy = enabled
        self._mark_custom()

    def set_exclude_look_alike(self, enabled: bool) -> None:
        self._exclude_look_alike = enabled
        self._mark_custom()

    def set_no_repeating_characters(self, enabled: bool) -> None:
        self._no_repeating_characters = enabled
        self._mark_custom()

    def set_exclude_characters(self, chars: str) -> None:
        self._exclude_characters = chars
        self._mark_custom()

    def category_enabled(self, category: CharCategory | str) -> bool:
        return self._categories[CharCategory(category)]

    @property
    def custom_characters(self) -> str:
        return self._custom_characters

    @property
    def has_advanced_options(self) -> bool:
        """Whether any of the less visible exclusion settings is active."""
        return (
            self._exclude_look_alike
            or self._no_repeating_characters
            or bool(self._exclude_characters)
        )

    # ------------------------------------------------------------------
    # Session end

    def accept(self) -> GenerationProfile:
        """Return the profile the user accepted."""
        return self.export_active_profile()

    def close(self) -> GenerationProfile:
        """End the session, remembering the active settings as last used.

        Returns:
            The profile stored as ``store.last_used``
        """
        last_used = self.export_active_profile()
        self.store.last_used = last_used
        return last_used
