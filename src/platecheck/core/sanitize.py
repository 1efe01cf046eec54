"""Validation of free-text values scraped from third-party HTML.

Every validator returns the cleaned value, or None to reject it. A
rejected field is omitted rather than guessed at.
"""

import re
from datetime import date, datetime
from typing import Optional

# Whole-value placeholders that mean "no data"
PLACEHOLDER_VALUES = frozenset(
    {
        "n/a",
        "na",
        "-",
        "--",
        "unknown",
        "not available",
        "none",
        "null",
        "tbc",
    }
)

# Boilerplate that leaks in when a label matches page chrome instead of a value
BOILERPLATE_PHRASES = (
    "click here",
    "learn more",
    "settlement figure",
    "company offers",
    "find out more",
    "sign up",
    "buy now",
    "full check",
)

HTML_LEAK_CHARS = ("<", ">", '"')

INSURANCE_GROUP = re.compile(r"^\d{1,2}[A-Z]?$")
MAX_INSURANCE_GROUP = 50

_CURRENCY = re.compile(r"[£$€]")
_DIGIT_COMMA = re.compile(r"\d{1,3}(,\d{3})+")
MAX_PRICE_LENGTH = 20

# The five canonical UK plate shapes, on uppercase text without spaces
UK_PLATE_FORMATS = {
    "current": re.compile(r"^[A-Z]{2}\d{2}[A-Z]{3}$"),  # AB12 CDE
    "prefix": re.compile(r"^[A-Z]\d{1,3}[A-Z]{3}$"),  # A123 BCD
    "suffix": re.compile(r"^[A-Z]{3}\d{1,3}[A-Z]$"),  # ABC 123D
    "dateless_num_alpha": re.compile(r"^\d{1,4}[A-Z]{1,3}$"),  # 1234 AB
    "dateless_alpha_num": re.compile(r"^[A-Z]{1,3}\d{1,4}$"),  # AB 1234
}

_WHITESPACE = re.compile(r"\s+")
_ENGINE_CC = re.compile(r"(\d+)\s*cc", re.IGNORECASE)
_ENGINE_LITRES = re.compile(r"(\d+(?:\.\d+)?)\s*l", re.IGNORECASE)
_YEAR = re.compile(r"(\d{4})")

DATE_FORMATS = ("%d/%m/%Y", "%d-%m-%Y", "%Y-%m-%d", "%d %B %Y", "%d %b %Y", "%B %d, %Y")


def _collapse(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip()


def sanitize_text(value: Optional[str], max_length: int = 100) -> Optional[str]:
    """Clean a scraped free-text value or reject it.

    Rejects empty values, HTML fragments, over-long text, placeholders and
    marketing boilerplate (case-insensitive).
    """
    if value is None:
        return None

    cleaned = _collapse(value)
    if not cleaned:
        return None
    if any(ch in cleaned for ch in HTML_LEAK_CHARS):
        return None
    if len(cleaned) > max_length:
        return None

    lower = cleaned.lower()
    if lower in PLACEHOLDER_VALUES:
        return None
    if any(phrase in lower for phrase in BOILERPLATE_PHRASES):
        return None

    return cleaned


def sanitize_insurance_group(value: Optional[str]) -> Optional[str]:
    """Reduce an insurance group to '1'-'50' with an optional letter, e.g. '32E'."""
    cleaned = sanitize_text(value, max_length=50)
    if cleaned is None:
        return None

    compact = cleaned.upper().replace(" ", "")
    if INSURANCE_GROUP.match(compact):
        return compact

    embedded = re.search(r"\d+", cleaned)
    if embedded:
        group = int(embedded.group())
        if 1 <= group <= MAX_INSURANCE_GROUP:
            return str(group)

    return None


def sanitize_price(value: Optional[str]) -> Optional[str]:
    """Accept prices that carry a currency symbol or a 1,234 digit group."""
    if value is None or "<" in value:
        return None

    cleaned = _collapse(value)
    if not cleaned or len(cleaned) > MAX_PRICE_LENGTH:
        return None
    if not (_CURRENCY.search(cleaned) or _DIGIT_COMMA.search(cleaned)):
        return None

    return cleaned


def sanitize_uk_plate(value: Optional[str]) -> Optional[str]:
    """Validate a UK registration and format it for display (``AB12 CDE``)."""
    if value is None:
        return None

    compact = _WHITESPACE.sub("", value).upper()
    if not compact or compact == "N/A":
        return None

    if not any(pattern.match(compact) for pattern in UK_PLATE_FORMATS.values()):
        return None

    if len(compact) > 4:
        return f"{compact[:4]} {compact[4:]}"
    return compact


def parse_engine_size(text: Optional[str]) -> int:
    """Parse '1998cc' or '2.0L' into whole cc. Unparsable text gives 0."""
    if not text:
        return 0

    cc = _ENGINE_CC.search(text)
    if cc:
        return int(cc.group(1))

    litres = _ENGINE_LITRES.search(text)
    if litres:
        return round(float(litres.group(1)) * 1000)

    return 0


def parse_year(text: Optional[str]) -> int:
    """First four-digit run in the text, or 0."""
    if not text:
        return 0
    match = _YEAR.search(text)
    return int(match.group(1)) if match else 0


def parse_first_int(text: Optional[str]) -> Optional[int]:
    if not text:
        return None
    match = re.search(r"(\d+)", text.replace(",", ""))
    return int(match.group(1)) if match else None


def parse_date_text(text: Optional[str]) -> Optional[date]:
    """Parse a date from the formats UK sites commonly print."""
    if not text:
        return None

    cleaned = _collapse(text)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None
