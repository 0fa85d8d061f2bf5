"""Receipt scan workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from finsync.domain.receipt import OcrResult
from finsync.runtime.config import OcrConfig
from finsync.runtime.receipt_pipeline import ImageSource, ReceiptOcrService

ScanStatus = Literal[
    "file_not_found",
    "no_text",
    "extracted",
]


@dataclass(frozen=True)
class ReceiptScanRequest:
    """Inputs for running receipt scan workflow."""

    image: ImageSource
    config: OcrConfig


@dataclass(frozen=True)
class ReceiptScanResult:
    """Outcome from receipt scan workflow."""

    status: ScanStatus
    result: OcrResult | None = None
    error: str | None = None


async def run_receipt_scan(
    request: ReceiptScanRequest,
    service: ReceiptOcrService | None = None,
) -> ReceiptScanResult:
    """Run scan flow: check input -> preprocess -> OCR -> parse -> validate."""
    if isinstance(request.image, (str, Path)) and not Path(request.image).exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"Receipt file not found: {request.image}",
        )

    if service is None:
        service = ReceiptOcrService(request.config)

    image = await service.preprocess_image(request.image)
    outcome = await service.extract_text(image)
    if not outcome.success:
        return ReceiptScanResult(status="no_text", error=outcome.error)

    return ReceiptScanResult(status="extracted", result=outcome.result)
