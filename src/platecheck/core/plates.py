"""Plate normalization, jurisdiction detection and formatting.

Pure functions, no I/O. Isle of Man plates use letter groups ending in
MN, the MAN/MANX prefixes, or the modern numeric ``1-MN-00`` form.
Anything that matches none of those is treated as a UK plate.
"""

import re

from platecheck.exceptions import InvalidPlateError
from platecheck.models.plate import Jurisdiction, Plate

# Ordered (name, pattern) rules. First match wins; extend the list to add
# plate eras without touching the control flow in classify().
IOM_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    # PMN 147 E, AMN 123, BMN 456 A
    ("classic_mn", re.compile(r"^[A-Z]MN\s*\d+\s*[A-Z]?$", re.IGNORECASE)),
    # MAN 123, MAN 6 F
    ("man_prefix", re.compile(r"^MAN\s*\d+\s*[A-Z]?$", re.IGNORECASE)),
    # MANX 1, MANX 100 A
    ("manx_prefix", re.compile(r"^MANX\s*\d+\s*[A-Z]?$", re.IGNORECASE)),
    # 1-MN-00, 123 MN 456
    ("numeric_mn", re.compile(r"^\d+[\s-]?MN[\s-]?\d+$", re.IGNORECASE)),
    # Two letter MN suffix: AAMN 12, XMN 3 B
    ("two_letter_mn", re.compile(r"^[A-Z]{1,2}MN\s*\d+\s*[A-Z]?$", re.IGNORECASE)),
]

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[\s-]+")

_LETTERS_DIGITS = re.compile(r"^([A-Z]+)(\d+)([A-Z]?)$")
_NUMERIC_MN = re.compile(r"^(\d+)MN(\d+)$")


def normalize_plate(raw: str) -> str:
    """Uppercase and strip all whitespace.

    Idempotent. Validity (minimum length) is checked by ``Plate.is_valid``.
    """
    return _WHITESPACE.sub("", (raw or "").upper())


def _clean(raw: str) -> str:
    """Uppercase with spaces and hyphens removed."""
    return _SEPARATORS.sub("", (raw or "").upper())


def classify(raw: str) -> Jurisdiction:
    """Detect the jurisdiction of a raw plate string.

    Each rule is tried against the space-separated form and the fully
    stripped form, since some patterns only match one of them.
    """
    spaced = _SEPARATORS.sub(" ", (raw or "").upper()).strip()
    candidates = (spaced, spaced.replace(" ", ""))

    for _name, pattern in IOM_PATTERNS:
        if any(pattern.match(candidate) for candidate in candidates):
            return Jurisdiction.ISLE_OF_MAN

    return Jurisdiction.UK


def is_manx_plate(raw: str) -> bool:
    return classify(raw) == Jurisdiction.ISLE_OF_MAN


def format_for_registry_query(raw: str, jurisdiction: Jurisdiction | None = None) -> str:
    """Format a plate for the registry API.

    Isle of Man plates become hyphenated (``PMN-147-E``, ``1-MN-00``).
    UK plates, and Manx plates in an unrecognized shape, pass through cleaned.
    """
    jurisdiction = jurisdiction or classify(raw)
    if jurisdiction == Jurisdiction.UK:
        return normalize_plate(raw)

    clean = _clean(raw)

    match = _LETTERS_DIGITS.match(clean)
    if match:
        letters, numbers, suffix = match.groups()
        if suffix:
            return f"{letters}-{numbers}-{suffix}"
        return f"{letters}-{numbers}"

    modern = _NUMERIC_MN.match(clean)
    if modern:
        return f"{modern.group(1)}-MN-{modern.group(2)}"

    return clean


def format_for_display(raw: str, jurisdiction: Jurisdiction | None = None) -> str:
    """Format a plate for display, space separated.

    Manx plates are split into their groups (``PMN 147 E``). UK plates get
    a space after the fourth character (``AB12 CDE``).
    """
    jurisdiction = jurisdiction or classify(raw)
    clean = _clean(raw)

    if jurisdiction == Jurisdiction.UK:
        return f"{clean[:4]} {clean[4:]}" if len(clean) > 4 else clean

    match = _LETTERS_DIGITS.match(clean)
    if match:
        letters, numbers, suffix = match.groups()
        return " ".join(part for part in (letters, numbers, suffix) if part)

    modern = _NUMERIC_MN.match(clean)
    if modern:
        return f"{modern.group(1)} MN {modern.group(2)}"

    return clean


def parse_plate(raw: str) -> Plate:
    """Build the request-scoped Plate for a raw user string."""
    raw = raw or ""
    jurisdiction = classify(raw)
    return Plate(
        raw=raw,
        canonical=normalize_plate(raw),
        jurisdiction=jurisdiction,
        display=format_for_display(raw, jurisdiction),
        query=format_for_registry_query(raw, jurisdiction),
    )


def require_valid_plate(raw: str) -> Plate:
    """Like ``parse_plate`` but rejects plates too short to look up.

    Raises:
        InvalidPlateError: Fewer than two characters once whitespace is removed
    """
    plate = parse_plate(raw)
    if not plate.is_valid:
        raise InvalidPlateError(raw)
    return plate
