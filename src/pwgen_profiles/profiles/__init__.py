"""Profiles module - generation profiles and the store that keeps them.

Profiles are plain configuration values that specify:
- The generation mode
- Character set, pattern or custom algorithm parameters
- Exclusion flags

They contain no generation logic.
"""

from pwgen_profiles.profiles.base import GenerationProfile, GeneratorType, ProfileBuilder
from pwgen_profiles.profiles.store import RESERVED_LABELS, ProfileStore, PseudoProfile
from pwgen_profiles.profiles.loader import ProfileStoreLoader, load_store, save_store

__all__ = [
    "GenerationProfile",
    "GeneratorType",
    "ProfileBuilder",
    "ProfileStore",
    "PseudoProfile",
    "RESERVED_LABELS",
    "ProfileStoreLoader",
    "load_store",
    "save_store",
]
