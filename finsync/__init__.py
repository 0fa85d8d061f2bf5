"""FinSync receipt OCR extraction and validation engine."""

__version__ = "0.1.0"
