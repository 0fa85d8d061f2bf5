"""Receipt command handlers used by the unified CLI."""

import argparse
import asyncio
import json
from dataclasses import replace
from pathlib import Path

from finsync.application.receipts.scan import ReceiptScanRequest, run_receipt_scan
from finsync.domain.receipt import OcrResult
from finsync.runtime import ReceiptOcrService, get_logger, load_ocr_config

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI server for receipt uploads."""
    import uvicorn

    from finsync.runtime.receipt_server import create_app

    print(f"Starting receipt OCR server on {args.host}:{args.port}")
    print(f"Upload endpoint: http://{args.host}:{args.port}/ocr")
    print("Press Ctrl+C to stop")

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def _print_result(result: OcrResult) -> None:
    data = result.extracted_data
    print(f"\n{'=' * 60}")
    print(f"OCR method:  {result.ocr_method.value} ({result.processing_time:.0f} ms)")
    print(f"Merchant:    {data.merchant_name or '-'}")
    print(f"Address:     {data.address or '-'}")
    print(f"Phone:       {data.phone or '-'}")
    print(f"Date:        {data.date.isoformat() if data.date else '-'}")
    print(f"Category:    {data.category or '-'}")
    print(f"Payment:     {data.payment_method or '-'}")
    print(f"\nItems ({len(data.items)}):")
    for item in data.items:
        print(f"  {item.name:<32} ${item.price:>8}")
    for label, value in (("Subtotal", data.subtotal), ("Tax", data.tax), ("Tip", data.tip), ("Total", data.total)):
        if value is not None:
            print(f"{label:<34} ${value:>8}")
    print(f"\nConfidence:  {result.confidence:.2f} (validation {result.validation.confidence:.2f})")
    for issue in result.validation.issues:
        print(f"  ! {issue}")
    print(f"{'=' * 60}\n")


def cmd_scan(args: argparse.Namespace) -> int:
    """Scan a receipt image and print the extracted data."""
    config = load_ocr_config()
    if args.no_simulation:
        config = replace(config, simulation_enabled=False)

    scan = asyncio.run(run_receipt_scan(ReceiptScanRequest(image=Path(args.image), config=config)))

    if scan.status == "file_not_found":
        logger.error("%s", scan.error)
        print(f"Error: {scan.error}")
        return 1

    if scan.status == "no_text" or scan.result is None:
        print(f"OCR failed: {scan.error}")
        return 1

    if args.json:
        print(json.dumps(scan.result.to_dict(), indent=2))
    else:
        _print_result(scan.result)
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Print which OCR backends are configured."""
    service = ReceiptOcrService(load_ocr_config())
    is_valid, issues = service.validate_configuration()
    status = service.service_status()

    print(f"Supported methods:    {', '.join(status['supported_methods']) or 'none'}")
    print(f"Google Vision:        {'enabled' if status['is_google_vision_enabled'] else 'disabled'}")
    print(f"Confidence threshold: {status['confidence_threshold']:.2f}")
    for issue in issues:
        print(f"  ! {issue}")
    return 0 if is_valid else 1
