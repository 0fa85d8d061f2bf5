"""Core domain models for receipt OCR extraction.

Usage:
    from finsync.domain import ExtractedReceiptData, ReceiptLineItem
"""

from finsync.domain.receipt import (
    RECEIPT_CATEGORIES,
    ExtractedReceiptData,
    OcrBackend,
    OcrResult,
    RawOcrOutput,
    ReceiptLineItem,
    ValidationReport,
)

__all__ = [
    "RECEIPT_CATEGORIES",
    "ExtractedReceiptData",
    "OcrBackend",
    "OcrResult",
    "RawOcrOutput",
    "ReceiptLineItem",
    "ValidationReport",
]
