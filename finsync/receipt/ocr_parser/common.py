"""Shared constants and helpers for OCR receipt parsing."""

import re
from decimal import Decimal, InvalidOperation

from finsync.domain.receipt import to_money
from finsync.receipt.line_classifier import STREET_TYPES, first_match

__all__ = [
    "AMOUNT_PATTERN",
    "PROVINCE_CODES",
    "STREET_TYPES",
    "collapse_whitespace",
    "first_match",
    "parse_amount",
]

# Dollar amount with optional thousands separators and up to two decimals,
# e.g. "4.25", "1,299.99", "12".
AMOUNT_PATTERN = r"(\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?)"

PROVINCE_CODES = "AB|BC|MB|NB|NL|NS|NT|NU|ON|PE|QC|SK|YT"


def parse_amount(raw: str) -> Decimal | None:
    """Parse a matched amount string into a two-decimal Decimal.

    Returns None for anything that is not a finite, non-negative number.
    """
    cleaned = raw.replace(",", "").strip()
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
        if not value.is_finite() or value < 0:
            return None
        # Long digit runs (barcodes, merged OCR digits) overflow quantize.
        return to_money(value)
    except InvalidOperation:
        return None


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
