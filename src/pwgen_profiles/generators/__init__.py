"""Generators module - turns profiles into passwords.

Generators cover the three generation modes:
- Character set
- Pattern
- Custom (pluggable, resolved through the registry)
"""

from pwgen_profiles.generators.base import Generator, SupportsGenerate
from pwgen_profiles.generators.charset_generator import CharSetGenerator
from pwgen_profiles.generators.pattern_generator import PatternGenerator
from pwgen_profiles.generators.registry import CustomGenerator, CustomGeneratorRegistry
from pwgen_profiles.generators.pronounceable import PronounceableGenerator

__all__ = [
    "Generator",
    "SupportsGenerate",
    "CharSetGenerator",
    "PatternGenerator",
    "CustomGenerator",
    "CustomGeneratorRegistry",
    "PronounceableGenerator",
]
