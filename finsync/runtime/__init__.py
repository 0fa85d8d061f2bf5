"""Runtime infrastructure for the FinSync OCR engine.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Deployment configuration via OcrConfig, load_ocr_config()
- Category rule loading via load_category_rules()
- The OCR service via ReceiptOcrService

Usage:
    from finsync.runtime import ReceiptOcrService, get_logger, load_ocr_config

    logger = get_logger(__name__)
    service = ReceiptOcrService(load_ocr_config())
"""

from finsync.runtime.category_rules import load_category_rules
from finsync.runtime.config import OcrConfig, load_ocr_config
from finsync.runtime.logging import get_logger, set_log_level
from finsync.runtime.receipt_pipeline import (
    CloudVisionUnavailable,
    ExtractionOutcome,
    ReceiptOcrService,
)

__all__ = [
    # Logging
    "get_logger",
    "set_log_level",
    # Configuration
    "OcrConfig",
    "load_ocr_config",
    # Rules
    "load_category_rules",
    # OCR service
    "CloudVisionUnavailable",
    "ExtractionOutcome",
    "ReceiptOcrService",
]
