"""Ordered predicate tables that map free text onto status enums.

Each table is a list of (predicate, value) pairs checked in order; the
first predicate that matches the lowercased text wins, otherwise the
default applies.
"""

from typing import Callable, Optional, TypeVar

from platecheck.models.vehicle import MotStatus, TaxStatus

T = TypeVar("T")

Rule = tuple[Callable[[str], bool], T]


def first_match(text: Optional[str], rules: list[Rule], default: T) -> T:
    """Return the value of the first rule matching ``text``."""
    lower = (text or "").strip().lower()
    for predicate, value in rules:
        if predicate(lower):
            return value
    return default


# DVLA API vocabulary (exact values)
DVLA_TAX_RULES: list[Rule] = [
    (lambda t: t == "taxed", TaxStatus.TAXED),
    (lambda t: t == "sorn", TaxStatus.SORN),
    (lambda t: "not taxed for on road use" in t, TaxStatus.NOT_TAXED_FOR_ROAD_USE),
]

DVLA_MOT_RULES: list[Rule] = [
    (lambda t: t == "valid", MotStatus.VALID),
    (lambda t: "no details" in t, MotStatus.NO_DETAILS_HELD),
]

# Scraped third-party page wording
SCRAPED_TAX_RULES: list[Rule] = [
    (
        lambda t: "taxed" in t and "untaxed" not in t and "not taxed" not in t,
        TaxStatus.TAXED,
    ),
    (lambda t: "sorn" in t, TaxStatus.SORN),
]

SCRAPED_MOT_RULES: list[Rule] = [
    (lambda t: "expired" in t or "not valid" in t, MotStatus.NOT_VALID),
    (lambda t: "valid" in t or "expires" in t, MotStatus.VALID),
]

# Isle of Man "Status of Vehicle Licence"
IOM_TAX_RULES: list[Rule] = [
    (lambda t: "active" in t or "valid" in t, TaxStatus.TAXED),
    (lambda t: "sorn" in t, TaxStatus.SORN),
]


def dvla_tax_status(text: Optional[str]) -> TaxStatus:
    return first_match(text, DVLA_TAX_RULES, TaxStatus.UNTAXED)


def dvla_mot_status(text: Optional[str]) -> MotStatus:
    return first_match(text, DVLA_MOT_RULES, MotStatus.NOT_VALID)


def scraped_tax_status(text: Optional[str]) -> TaxStatus:
    return first_match(text, SCRAPED_TAX_RULES, TaxStatus.UNTAXED)


def scraped_mot_status(text: Optional[str]) -> MotStatus:
    return first_match(text, SCRAPED_MOT_RULES, MotStatus.NO_DETAILS_HELD)


def iom_tax_status(text: Optional[str]) -> TaxStatus:
    return first_match(text, IOM_TAX_RULES, TaxStatus.UNTAXED)
