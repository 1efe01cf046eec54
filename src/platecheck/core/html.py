"""Best-effort field extraction from scraped HTML by label proximity."""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Elements that commonly hold a field label
LABEL_TAGS = ["th", "td", "dt", "h4", "strong", "label", "span"]

# Elements whose next sibling usually holds the value
VALUE_TAGS = ["td", "dd", "p", "span", "div"]


class LabelExtractor:
    """Find values next to labels in an HTML document.

    Strategy order, first non-empty value wins:
    1. An element whose whole text is the label -> its next sibling element
    2. An element whose text contains the label -> next sibling, else the
       parent's text with the label removed
    3. Regex ``Label: value`` over the raw markup
    """

    def __init__(self, html: str, parser: str = "html.parser") -> None:
        self.html = html
        self.soup = BeautifulSoup(html, parser)

    def extract(self, label: str) -> Optional[str]:
        """Extract the value for a single label."""
        for strategy in (self._exact_label, self._contains_label, self._regex_label):
            value = strategy(label)
            if value:
                return value
        return None

    def first(self, *labels: str) -> Optional[str]:
        """Try each label in turn, returning the first value found."""
        for label in labels:
            value = self.extract(label)
            if value:
                return value
        return None

    def contains(self, text: str) -> bool:
        return text.lower() in self.html.lower()

    # ─────────────────────────────────────────────────────────────────────
    # Strategies
    # ─────────────────────────────────────────────────────────────────────

    def _exact_label(self, label: str) -> Optional[str]:
        wanted = _norm(label)
        for el in self.soup.find_all(LABEL_TAGS):
            if _norm(el.get_text()) == wanted:
                value = _sibling_text(el)
                if value:
                    return value
        return None

    def _contains_label(self, label: str) -> Optional[str]:
        wanted = _norm(label)
        for el in self.soup.find_all(LABEL_TAGS):
            text = _norm(el.get_text())
            if wanted not in text or len(text) > len(wanted) + 40:
                continue

            value = _sibling_text(el)
            if value:
                return value

            parent = el.parent
            if isinstance(parent, Tag):
                remainder = parent.get_text(" ", strip=True)
                remainder = re.sub(re.escape(label), "", remainder, count=1, flags=re.I)
                remainder = remainder.strip(" :")
                if remainder:
                    return remainder
        return None

    def _regex_label(self, label: str) -> Optional[str]:
        pattern = re.compile(rf"{re.escape(label)}\s*:\s*([^<\n,]+)", re.IGNORECASE)
        match = pattern.search(self.html)
        if match and match.group(1).strip():
            return match.group(1).strip()
        return None


def _norm(text: str) -> str:
    return " ".join(text.split()).strip(" :").lower()


def _sibling_text(el: Tag) -> Optional[str]:
    sibling = el.find_next_sibling(VALUE_TAGS)
    if sibling is None:
        return None
    text = sibling.get_text(" ", strip=True)
    return text or None
