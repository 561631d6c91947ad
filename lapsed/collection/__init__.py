"""
Identifier normalization shared by every interaction source and the roster.

File: collection/__init__.py
Author: Aidan Allchin
Created: 2026-01-04
Last Modified: 2026-01-04
"""

from .id_normalization import (
    DIGITS,
    E164,
    IDENTIFIER_MODES,
    digits_only,
    e164_key,
    normalize_identifier,
    normalize_identifier_list,
)

__all__ = [
    "DIGITS",
    "E164",
    "IDENTIFIER_MODES",
    "digits_only",
    "e164_key",
    "normalize_identifier",
    "normalize_identifier_list",
]
