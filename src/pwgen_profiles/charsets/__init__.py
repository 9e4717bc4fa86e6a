"""Charsets module - character categories and composable character sets."""

from pwgen_profiles.charsets.charset import (
    CATEGORY_ORDER,
    CharCategory,
    CharSetSpec,
    canonicalize,
)

__all__ = [
    "CATEGORY_ORDER",
    "CharCategory",
    "CharSetSpec",
    "canonicalize",
]
