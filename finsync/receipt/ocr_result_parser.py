"""Parse raw OCR text into structured ExtractedReceiptData."""

from finsync.domain.receipt import ExtractedReceiptData

from .categories import CategoryRules, classify_category
from .line_classifier import classify_lines
from .ocr_parser import (
    extract_address,
    extract_date,
    extract_items,
    extract_merchant,
    extract_payment_method,
    extract_phone,
    extract_totals,
)

# Header/footer windows each extractor is allowed to look at.
MERCHANT_WINDOW = 5
ADDRESS_WINDOW = (1, 6)  # lines 2-6
PHONE_WINDOW = 8
PAYMENT_WINDOW = 10


def parse_receipt_text(text: str, *, category_rules: CategoryRules) -> ExtractedReceiptData:
    """
    Reconstruct a structured receipt record from raw OCR text.

    Every extractor runs independently over its own view of the lines, so a
    miss in one never affects another. The result depends only on the text
    and the rules, so parsing the same text twice yields equal records.
    """
    lines = classify_lines(text)

    merchant_name = extract_merchant(lines.first(MERCHANT_WINDOW))
    items = extract_items(lines.content_lines)
    totals = extract_totals(lines.all_lines)

    return ExtractedReceiptData(
        merchant_name=merchant_name,
        address=extract_address(lines.between(*ADDRESS_WINDOW)),
        phone=extract_phone(lines.first(PHONE_WINDOW)),
        date=extract_date(text),
        items=items,
        subtotal=totals.subtotal,
        tax=totals.tax,
        tip=totals.tip,
        total=totals.total,
        amount=totals.total,
        payment_method=extract_payment_method(lines.last(PAYMENT_WINDOW)),
        category=classify_category(merchant_name, items, rules=category_rules),
    )
