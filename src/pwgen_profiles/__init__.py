"""
pwgen-profiles - Password generation profiles.

Defines persistable password generation profiles (character set, pattern or
pluggable custom algorithm), an editing session that maps profiles to editor
selections, and a preview runner for sample passwords.
"""

__version__ = "0.1.0"

from pwgen_profiles.charsets.charset import CharCategory, CharSetSpec
from pwgen_profiles.profiles.base import GenerationProfile, GeneratorType
from pwgen_profiles.profiles.store import ProfileStore
from pwgen_profiles.generators.registry import CustomGenerator, CustomGeneratorRegistry
from pwgen_profiles.engine.profile_manager import ProfileManager, PseudoProfile, SaveOutcome
from pwgen_profiles.engine.preview_runner import PreviewRunner
from pwgen_profiles.engine.password_engine import PasswordEngine

__all__ = [
    "CharCategory",
    "CharSetSpec",
    "GenerationProfile",
    "GeneratorType",
    "ProfileStore",
    "CustomGenerator",
    "CustomGeneratorRegistry",
    "ProfileManager",
    "PseudoProfile",
    "SaveOutcome",
    "PreviewRunner",
    "PasswordEngine",
]
