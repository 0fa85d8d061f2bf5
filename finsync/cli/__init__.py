"""Command-line interface for the FinSync receipt OCR engine.

Usage:
    finsync-ocr scan <image>
    finsync-ocr scan <image> --json
    finsync-ocr status
    finsync-ocr serve [--port]
"""
