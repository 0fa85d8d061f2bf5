"""FastAPI server that runs receipt OCR on uploaded images."""

from __future__ import annotations

import hashlib

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from finsync.application.receipts.scan import ReceiptScanRequest, run_receipt_scan
from finsync.runtime.config import DEFAULT_PORT, OcrConfig, load_ocr_config
from finsync.runtime.logging import get_logger
from finsync.runtime.receipt_pipeline import ReceiptOcrService

logger = get_logger(__name__)


def create_app(config: OcrConfig | None = None, service: ReceiptOcrService | None = None) -> FastAPI:
    """Build the upload server around one configured OCR service."""
    if config is None:
        config = service.config if service is not None else load_ocr_config()
    if service is None:
        service = ReceiptOcrService(config)

    app = FastAPI(title="FinSync Receipt OCR")
    app.state.ocr_config = config
    app.state.ocr_service = service

    @app.post("/ocr")
    async def upload_receipt(request: Request) -> JSONResponse:
        """Receive a receipt image and return the extracted receipt data."""
        form = await request.form()

        file = None
        for key, value in form.items():
            logger.debug("Form field: key=%r, type=%s", key, type(value))
            if isinstance(value, UploadFile):
                file = value
                break

        if file is None:
            return JSONResponse({"status": "error", "message": "No file found in request"}, status_code=400)

        contents = await file.read()
        if not contents:
            return JSONResponse({"status": "error", "message": "Uploaded file is empty"}, status_code=400)

        image_sha256 = hashlib.sha256(contents).hexdigest()
        logger.info("Received receipt %s (%d bytes)", image_sha256[:12], len(contents))

        scan = await run_receipt_scan(ReceiptScanRequest(image=contents, config=config), service=service)
        if scan.status != "extracted" or scan.result is None:
            return JSONResponse({"status": "error", "message": scan.error}, status_code=422)

        return JSONResponse(
            {
                "status": "success",
                "image_sha256": image_sha256,
                "size_bytes": len(contents),
                "result": scan.result.to_dict(),
            }
        )

    @app.get("/status")
    async def status() -> dict[str, object]:
        """Report which OCR backends are available."""
        is_valid, issues = service.validate_configuration()
        return {**service.service_status(), "configuration_valid": is_valid, "configuration_issues": issues}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=DEFAULT_PORT)
