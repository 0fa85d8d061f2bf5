"""Merchant/address/phone/date/payment extraction helpers."""

import re
from collections.abc import Sequence
from datetime import date

from finsync.receipt.line_classifier import is_noise_line

from .common import PROVINCE_CODES, STREET_TYPES, collapse_whitespace, first_match

MERCHANT_MIN_LENGTH = 3
MERCHANT_MAX_LENGTH = 60

# Header lines that can never be the merchant name.
MERCHANT_SKIP_PATTERNS = [
    re.compile(rf"\d{{1,4}}\s+.+\s+(?:{STREET_TYPES})\b", re.IGNORECASE),
    re.compile(r"tel:|phone:|fax:|@", re.IGNORECASE),
    re.compile(r"date:|time:|transaction", re.IGNORECASE),
    re.compile(r"subtotal|total|\btax\b", re.IGNORECASE),
    re.compile(r"^\s*[\d\-/:]+\s*$"),
    re.compile(r"^[*\-=_]+$"),
]

KNOWN_CHAINS = (
    "TIM HORTONS",
    "SOBEYS",
    "LOBLAWS",
    "NO FRILLS",
    "SUPERSTORE",
    "METRO",
    "FOOD BASICS",
    "FRESHCO",
    "COSTCO",
    "WALMART",
    "CANADIAN TIRE",
    "HOME DEPOT",
    "SHOPPERS DRUG MART",
    "PETRO-CANADA",
    "ESSO",
    "STARBUCKS",
    "MCDONALD'S",
)

# Ordered business-name signals; the label is only used for debug tracing.
BUSINESS_NAME_RULES = (
    (re.compile(r"^(?=.*[A-Z]{2})[A-Z0-9\s&'.,\-#!/()]+$"), "all_caps"),
    (
        re.compile(
            r"\b(STORE|SHOP|MARKET|RESTAURANT|CAFE|HOTEL|GAS|STATION|PHARMACY|GROCERY|SUPERMARKET)\b",
            re.IGNORECASE,
        ),
        "store_type",
    ),
    (re.compile(r"\b(INC|LLC|LTD|CORP|CO)\b\.?", re.IGNORECASE), "legal_suffix"),
    (re.compile("|".join(re.escape(chain) for chain in KNOWN_CHAINS), re.IGNORECASE), "known_chain"),
)

STORE_NUMBER_PREFIX = re.compile(r"^\s*#\s*\d+\s*")
STORE_NUMBER_SUFFIX = re.compile(r"\s*#\s*\d+\s*$")


def clean_merchant_name(name: str) -> str:
    """Strip leading/trailing store numbers ("#1234") and collapse whitespace."""
    cleaned = STORE_NUMBER_PREFIX.sub("", name)
    cleaned = STORE_NUMBER_SUFFIX.sub("", cleaned)
    return collapse_whitespace(cleaned)


def _is_merchant_candidate(line: str) -> bool:
    if not MERCHANT_MIN_LENGTH <= len(line) <= MERCHANT_MAX_LENGTH:
        return False
    return not any(pattern.search(line) for pattern in MERCHANT_SKIP_PATTERNS)


def extract_merchant(first_lines: Sequence[str]) -> str | None:
    """
    Extract the merchant name from the receipt header.

    Strategy order:
    1. First header line carrying a business-name signal
    2. First header line that is not a noise line
    """
    for line in first_lines:
        if not _is_merchant_candidate(line):
            continue
        if first_match(BUSINESS_NAME_RULES, line) is not None:
            cleaned = clean_merchant_name(line)
            if cleaned:
                return cleaned

    for line in first_lines:
        if MERCHANT_MIN_LENGTH <= len(line) <= MERCHANT_MAX_LENGTH and not is_noise_line(line):
            cleaned = clean_merchant_name(line)
            if cleaned:
                return cleaned
    return None


STREET_ADDRESS_PATTERN = re.compile(rf"\b\d+\s+[A-Za-z0-9.'\- ]+?\s+(?:{STREET_TYPES})\b", re.IGNORECASE)
CITY_PROVINCE_PATTERN = re.compile(rf"\b[A-Za-z][A-Za-z .'\-]*,\s*(?:{PROVINCE_CODES})\b")


def extract_address(window: Sequence[str]) -> str | None:
    """Return the first street-address or "City, PR" line in the window."""
    for line in window:
        if STREET_ADDRESS_PATTERN.search(line) or CITY_PROVINCE_PATTERN.search(line):
            return collapse_whitespace(line)
    return None


PHONE_PATTERN = re.compile(
    r"(?:(?:Tel|Phone)\s*:?\s*)?(?<!\d)\(?(\d{3})\)?[\s.\-]?(\d{3})[\s.\-](\d{4})(?!\d)",
    re.IGNORECASE,
)


def extract_phone(first_lines: Sequence[str]) -> str | None:
    """Return the first North-American phone number as "(NNN) NNN-NNNN"."""
    for line in first_lines:
        match = PHONE_PATTERN.search(line)
        if match:
            area, exchange, number = match.groups()
            return f"({area}) {exchange}-{number}"
    return None


# Priority order matters: an explicit "Date:" label beats any bare date.
DATE_PATTERNS = (
    (re.compile(r"Date:\s*(\d{1,2}/\d{1,2}/(?:\d{4}|\d{2}))(?![\d/])", re.IGNORECASE), "mdy"),
    (re.compile(r"(?<![\d/])(\d{1,2}/\d{1,2}/(?:\d{4}|\d{2}))(?![\d/])"), "mdy"),
    (re.compile(r"(?<![\d\-])(\d{1,2}-\d{1,2}-(?:\d{4}|\d{2}))(?![\d\-])"), "mdy"),
    (re.compile(r"(?<![\d\-])(\d{4}-\d{1,2}-\d{1,2})(?![\d\-])"), "ymd"),
)


def _expand_year(year: int) -> int:
    # Map 2-digit years to 2000s/1900s
    if year < 100:
        return 2000 + year if year <= 69 else 1900 + year
    return year


def _parse_date(raw: str, order: str) -> date | None:
    parts = [int(part) for part in re.split(r"[/\-]", raw)]
    if order == "ymd":
        year, month, day = parts
    else:
        # North American month/day/year
        month, day, year = parts
    try:
        return date(_expand_year(year), month, day)
    except ValueError:
        return None


def extract_date(full_text: str) -> date | None:
    """Extract the transaction date from the full receipt text (None if unknown)."""
    for pattern, order in DATE_PATTERNS:
        for match in pattern.finditer(full_text):
            parsed = _parse_date(match.group(1), order)
            if parsed is not None:
                return parsed
    return None


PAYMENT_KEYWORD_PATTERN = re.compile(
    r"\b(Credit Card|Debit Card|American Express|Amex|MasterCard|Visa|Interac|Cash)\b",
    re.IGNORECASE,
)
MASKED_CARD_PATTERN = re.compile(r"\*{4}\d{4}")


def extract_payment_method(last_lines: Sequence[str]) -> str | None:
    """Return the payment method named in the receipt footer."""
    for line in last_lines:
        keyword = PAYMENT_KEYWORD_PATTERN.search(line)
        if keyword:
            return keyword.group(1)
        masked = MASKED_CARD_PATTERN.search(line)
        if masked:
            return masked.group(0)
    return None
