"""Composable OCR receipt parser components."""

from .fields_parser import (
    clean_merchant_name,
    extract_address,
    extract_date,
    extract_merchant,
    extract_payment_method,
    extract_phone,
)
from .items_text_parser import extract_items
from .totals_parser import SummaryTotals, extract_totals

__all__ = [
    "SummaryTotals",
    "clean_merchant_name",
    "extract_address",
    "extract_date",
    "extract_items",
    "extract_merchant",
    "extract_payment_method",
    "extract_phone",
    "extract_totals",
]
