"""Split raw receipt text into lines and tag structural noise.

Noise lines (headers, addresses, totals, payment boilerplate) never become
items, but they stay in ``all_lines`` because the other extractors read
their signal from exactly those lines.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

# Canadian street-type tokens shared by address and noise detection.
STREET_TYPES = (
    r"st|street|ave|avenue|rd|road|blvd|boulevard|dr|drive|way|lane|"
    r"cres|crescent|court|hwy|highway|pkwy|parkway|place"
)


def first_match(rules: Iterable[tuple[re.Pattern[str], T]], text: str) -> T | None:
    """Return the result paired with the first pattern that matches text.

    Rule tables are ordered lists of (pattern, result); evaluation stops at
    the first hit so table order is the tie-break.
    """
    for pattern, result in rules:
        if pattern.search(text):
            return result
    return None


# Ordered (pattern, label) table; the first matching rule names the noise kind.
NOISE_LINE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^[A-Z\s&]+$"), "business_name"),
    (re.compile(rf"\d{{1,4}}\s+.+\s+(?:{STREET_TYPES})\b", re.IGNORECASE), "address"),
    (re.compile(r"tel:|phone:|fax:", re.IGNORECASE), "contact"),
    (re.compile(r"date:|time:|transaction", re.IGNORECASE), "metadata"),
    (re.compile(r"thank\s+you|visit\s+us", re.IGNORECASE), "message"),
    (re.compile(r"payment:|card:|cash", re.IGNORECASE), "payment"),
    (re.compile(r"subtotal|tax|total|amount|\b(?:hst|gst|pst|qst)\b", re.IGNORECASE), "totals"),
    (re.compile(r"^\s*[\d\-/:]+\s*$"), "date_time"),
    (re.compile(r"^[*\-=_]+$"), "decorative"),
)


def noise_label(line: str) -> str | None:
    """Return the noise kind of a line, or None for a content line."""
    return first_match(NOISE_LINE_RULES, line)


def is_noise_line(line: str) -> bool:
    return noise_label(line) is not None


@dataclass(frozen=True)
class ReceiptLines:
    """Receipt lines with the named views each extractor reads from."""

    all_lines: tuple[str, ...]
    content_lines: tuple[str, ...]

    def first(self, n: int) -> tuple[str, ...]:
        """The first n lines (header window)."""
        return self.all_lines[:n]

    def last(self, n: int) -> tuple[str, ...]:
        """The last n lines (footer window)."""
        return self.all_lines[-n:] if n > 0 else ()

    def between(self, start: int, stop: int) -> tuple[str, ...]:
        """Zero-based half-open window of lines."""
        return self.all_lines[start:stop]


def split_lines(raw_text: str) -> tuple[str, ...]:
    return tuple(line.strip() for line in raw_text.splitlines() if line.strip())


def classify_lines(raw_text: str) -> ReceiptLines:
    """Split raw OCR text and partition it into content and noise lines."""
    all_lines = split_lines(raw_text)
    content_lines = tuple(line for line in all_lines if not is_noise_line(line))
    return ReceiptLines(all_lines=all_lines, content_lines=content_lines)
