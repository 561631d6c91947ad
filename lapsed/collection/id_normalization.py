"""
Identifier normalization utilities.

Every identifier that enters the pipeline (call log numbers, message
addresses, contact phone numbers) goes through the same function so that
the logs and the roster agree on a join key.

File: collection/id_normalization.py
Author: Aidan Allchin
Created: 2026-01-04
Last Modified: 2026-01-10
"""

import logging
import re
from typing import Iterable, List, Optional

import phonenumbers

log = logging.getLogger(__name__)

DIGITS = "digits"
E164 = "e164"
IDENTIFIER_MODES = (DIGITS, E164)

_NON_DIGIT = re.compile(r"[^0-9]")


def digits_only(raw: Optional[str]) -> Optional[str]:
    """
    Strip every character that is not a decimal digit.

    Args:
        raw: Raw identifier (e.g., "(555) 123-4567", "+1 555 123 4567")

    Returns:
        Digit string (e.g., "5551234567") or None if nothing is left

    Examples:
        >>> digits_only("555-123-4567")
        '5551234567'
        >>> digits_only("Mom")
        None
    """
    if raw is None or not isinstance(raw, str):
        return None
    digits = _NON_DIGIT.sub("", raw)
    return digits or None


def _parse_valid(number: str, default_region: str) -> Optional[str]:
    """E.164 form of `number` if phonenumbers accepts it as valid, else None"""
    try:
        parsed = phonenumbers.parse(number, default_region)
    except phonenumbers.NumberParseException as e:
        log.debug(f"Could not parse phone number '{number}': {e}")
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def e164_key(raw: Optional[str], default_region: str = "US") -> Optional[str]:
    """
    Normalize a phone number to E.164 format (e.g., "+15551234567").

    Numbers that phonenumbers cannot validate fall back to their digits,
    keeping a leading '+' when the input had one. The fallback key is
    checked the same way as the input, so feeding any result back in
    returns it unchanged.

    Examples:
        >>> e164_key("(202) 555-0188")
        '+12025550188'
        >>> e164_key("+1 202 555 0188")
        '+12025550188'
        >>> e164_key("+6502530000")
        '+6502530000'
    """
    digits = digits_only(raw)
    if digits is None:
        return None

    raw = raw.strip()
    fallback = f"+{digits}" if raw.startswith("+") else digits

    for candidate in (raw, fallback):
        normalized = _parse_valid(candidate, default_region)
        if normalized:
            return normalized

    log.debug(f"Phone number '{raw}' is not valid, using '{fallback}'")
    return fallback


def normalize_identifier(
        raw: Optional[str],
        mode: str = DIGITS,
        default_region: str = "US",
    ) -> Optional[str]:
    """
    Canonicalize a raw identifier into a matching key.

    Args:
        raw: Raw identifier string, or None
        mode: "digits" (strip non-digits) or "e164" (phonenumbers, falling back to digits)
        default_region: Region used to interpret national numbers in e164 mode

    Returns:
        Non-empty key (digits, or E.164 in e164 mode), or None if the identifier is unusable
    """
    if mode == DIGITS:
        return digits_only(raw)
    if mode == E164:
        return e164_key(raw, default_region)
    raise ValueError(f"Unknown identifier mode '{mode}'. Must be one of: {IDENTIFIER_MODES}")


def normalize_identifier_list(
        identifiers: Iterable[Optional[str]],
        mode: str = DIGITS,
        default_region: str = "US",
    ) -> List[str]:
    """
    Normalize a list of identifiers, dropping invalid ones and duplicates.

    Examples:
        >>> normalize_identifier_list(["555-123-4567", "(555) 123 4567", "n/a"])
        ['5551234567']
    """
    normalized = []
    seen = set()
    for identifier in identifiers:
        norm = normalize_identifier(identifier, mode, default_region)
        if norm and norm not in seen:
            seen.add(norm)
            normalized.append(norm)
    return normalized
