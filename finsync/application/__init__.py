"""Application workflows built on the runtime OCR service."""
