"""Summary amount extraction (subtotal, Canadian sales taxes, total, tip)."""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from .common import AMOUNT_PATTERN, parse_amount

# A real tax line on a typical receipt is a small dollar figure; anything
# larger is almost certainly a rate or a total picked up by a loose label.
MAX_PLAUSIBLE_TAX = Decimal("50")

# Label separator, then the amount. The trailing lookahead keeps "13" in
# "HST 13%" from being read as an amount.
_VALUE = rf"[:\s]+\$?{AMOUNT_PATTERN}(?![\d.,%])"
# Optional rate annotation such as "(13%)" or "5%".
_RATE = r"(?:\s*\(?\s*\d+(?:\.\d+)?\s*%\s*\)?)?"

TOTALS_LABEL_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "subtotal": (
        re.compile(rf"\bSubtotal{_VALUE}", re.IGNORECASE),
        re.compile(rf"\bSub[\s-]Total{_VALUE}", re.IGNORECASE),
    ),
    "tax": (
        re.compile(rf"\b(?:HST|GST|PST|QST)\b{_RATE}{_VALUE}", re.IGNORECASE),
        re.compile(rf"(?<!after )\bTax\b{_RATE}{_VALUE}", re.IGNORECASE),
    ),
    "total": (
        re.compile(rf"(?<!sub )(?<!sub-)\b(?:Grand\s+)?Total(?:\s+Due)?{_VALUE}", re.IGNORECASE),
        re.compile(rf"\bAmount(?:\s+Due)?{_VALUE}", re.IGNORECASE),
    ),
    "tip": (
        re.compile(rf"\bTip{_VALUE}", re.IGNORECASE),
        re.compile(rf"\bGratuity{_VALUE}", re.IGNORECASE),
    ),
}


@dataclass(frozen=True)
class SummaryTotals:
    """Summary amounts found on a receipt; any of them may be missing."""

    subtotal: Decimal | None = None
    tax: Decimal | None = None
    total: Decimal | None = None
    tip: Decimal | None = None


def _match_field(field_name: str, line: str) -> Decimal | None:
    for pattern in TOTALS_LABEL_PATTERNS[field_name]:
        match = pattern.search(line)
        if not match:
            continue
        amount = parse_amount(match.group(1))
        if amount is None:
            continue
        if field_name == "tax" and amount > MAX_PLAUSIBLE_TAX:
            continue
        return amount
    return None


def extract_totals(all_lines: Sequence[str]) -> SummaryTotals:
    """
    Extract summary amounts from every receipt line.

    Totals lines are classified as noise, so this reads all lines rather
    than content lines. The first line that yields a value for a field wins;
    later lines never overwrite it.
    """
    found: dict[str, Decimal] = {}
    for line in all_lines:
        for field_name in TOTALS_LABEL_PATTERNS:
            if field_name in found:
                continue
            amount = _match_field(field_name, line)
            if amount is not None:
                found[field_name] = amount
    return SummaryTotals(**found)
