"""Text-line based receipt item extraction."""

import re
from collections.abc import Sequence

from finsync.domain.receipt import ReceiptLineItem

from .common import AMOUNT_PATTERN, parse_amount


# "<name> <price>" with the price at the end of the line, e.g. "Milk 2%  $4.25".
# The sign group catches "-$5.00" / "$-5.00" so refunds are rejected, not misread.
ITEM_LINE_PATTERN = re.compile(rf"^(.+?)\s+(-?\$?-?){AMOUNT_PATTERN}$")


def _parse_item_line(line: str) -> ReceiptLineItem | None:
    match = ITEM_LINE_PATTERN.match(line)
    if not match:
        return None
    name = match.group(1).strip()
    if not name or "-" in match.group(2):
        return None
    price = parse_amount(match.group(3))
    if price is None or price <= 0:
        return None
    return ReceiptLineItem(name=name, price=price)


def extract_items(content_lines: Sequence[str]) -> tuple[ReceiptLineItem, ...]:
    """
    Extract line items from the receipt's content (non-noise) lines.

    Duplicate names are kept as separate entries in receipt order. Quantity
    is always 1; multi-quantity lines are not detected.
    """
    items: list[ReceiptLineItem] = []
    for line in content_lines:
        item = _parse_item_line(line)
        if item is None:
            continue
        items.append(item)
    return tuple(items)
