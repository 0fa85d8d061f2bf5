"""Runtime OCR backends and the receipt OCR service.

Text comes from Google Vision when an API key is configured, falling back
once to the simulated backend when the cloud call fails. The recovered text
is parsed, categorized and scored by the pure ``finsync.receipt`` modules.
"""

from __future__ import annotations

import asyncio
import base64
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Union

import httpx

from finsync.domain.receipt import OcrBackend, OcrResult, RawOcrOutput
from finsync.receipt.ocr_result_parser import parse_receipt_text
from finsync.receipt.simulated_receipts import SIMULATED_CONFIDENCE, simulated_receipt_text
from finsync.receipt.validator import validate_extracted_data
from finsync.runtime.category_rules import load_category_rules
from finsync.runtime.config import OcrConfig
from finsync.runtime.logging import get_logger

logger = get_logger(__name__)

ImageSource = Union[str, Path, bytes]

# Cloud responses without per-token confidences are still normally reliable.
DEFAULT_CLOUD_CONFIDENCE = 0.9
MIN_API_KEY_LENGTH = 10

RECOMMENDED_CONFIDENCE_THRESHOLDS = {
    "google-vision": 0.85,
    "simulation": 0.75,
}

NO_TEXT_ERROR = "No text could be extracted from the receipt image"

ExtractionStatus = Literal["extracted", "no_text"]


class CloudVisionUnavailable(RuntimeError):
    """Raised when the cloud OCR backend cannot produce text for an image."""


@dataclass(frozen=True)
class ExtractionOutcome:
    """Outcome of one OCR request: a result, or the reason there is none."""

    status: ExtractionStatus
    result: OcrResult | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status == "extracted"


def _image_key(image: ImageSource) -> bytes:
    """Stable bytes identifying an image reference, for template selection."""
    if isinstance(image, bytes):
        return image
    return str(image).encode("utf-8")


def _read_image_bytes(image: ImageSource) -> bytes:
    if isinstance(image, bytes):
        return image
    return Path(image).read_bytes()


def build_vision_request(image_bytes: bytes) -> dict[str, Any]:
    """Build the JSON body of a single TEXT_DETECTION annotate request."""
    return {
        "requests": [
            {
                "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                "features": [{"type": "TEXT_DETECTION", "maxResults": 1}],
            }
        ]
    }


def parse_vision_response(payload: dict[str, Any]) -> tuple[str, float]:
    """
    Extract (text, confidence) from a Vision annotate response.

    The first annotation is the aggregate text; confidence is the mean of the
    per-token confidences that follow it.

    Raises:
        CloudVisionUnavailable: on an error field or missing/empty text.
    """
    if payload.get("error"):
        raise CloudVisionUnavailable(f"Vision API error: {payload['error']}")

    responses = payload.get("responses") or []
    if not isinstance(responses, list) or not responses:
        raise CloudVisionUnavailable("Vision API returned no responses")
    first = responses[0] or {}
    if not isinstance(first, dict):
        raise CloudVisionUnavailable("Vision API returned a malformed response")
    error = first.get("error")
    if error:
        message = error.get("message", error) if isinstance(error, dict) else error
        raise CloudVisionUnavailable(f"Vision API error: {message}")

    annotations = first.get("textAnnotations") or []
    if not isinstance(annotations, list) or not annotations or not isinstance(annotations[0], dict):
        raise CloudVisionUnavailable("Vision API detected no text")
    text = str(annotations[0].get("description") or "")
    if not text.strip():
        raise CloudVisionUnavailable("Vision API detected no text")

    confidences = [
        float(annotation["confidence"])
        for annotation in annotations[1:]
        if isinstance(annotation, dict) and isinstance(annotation.get("confidence"), (int, float))
    ]
    if not confidences:
        return text, DEFAULT_CLOUD_CONFIDENCE
    return text, sum(confidences) / len(confidences)


class ReceiptOcrService:
    """Turn receipt images into scored, structured receipt records.

    One instance is configured once and can serve many concurrent requests;
    it keeps no per-request state.
    """

    def __init__(
        self,
        config: OcrConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    async def extract_text(self, image: ImageSource) -> ExtractionOutcome:
        """Run OCR on one image and parse the result.

        Cloud failures fall back to the simulated backend exactly once. The
        only failure surfaced to the caller is "no text at all".
        """
        start_time = time.perf_counter()
        raw = await self._recognize(image)
        if raw is None or not raw.text.strip():
            logger.error("%s", NO_TEXT_ERROR)
            return ExtractionOutcome(status="no_text", error=NO_TEXT_ERROR)

        extracted = parse_receipt_text(
            raw.text,
            category_rules=load_category_rules(self.config.category_rules_path),
        )
        report = validate_extracted_data(extracted, self.config.confidence_threshold)
        processing_time = (time.perf_counter() - start_time) * 1000
        logger.info(
            "OCR via %s finished in %.0f ms (confidence %.2f, %d issues)",
            raw.backend.value,
            processing_time,
            report.confidence,
            len(report.issues),
        )

        return ExtractionOutcome(
            status="extracted",
            result=OcrResult(
                text=raw.text,
                confidence=round(raw.backend_confidence * report.confidence, 4),
                extracted_data=extracted,
                processing_time=processing_time,
                ocr_method=raw.backend,
                validation=report,
            ),
        )

    async def _recognize(self, image: ImageSource) -> RawOcrOutput | None:
        if self.config.cloud_enabled:
            try:
                return await self.call_cloud_vision(image)
            except CloudVisionUnavailable as exc:
                logger.warning("Cloud OCR unavailable, falling back to simulation: %s", exc)

        if not self.config.simulation_enabled:
            return None
        return await self.simulate_ocr(image)

    async def call_cloud_vision(self, image: ImageSource) -> RawOcrOutput:
        """
        Send one TEXT_DETECTION request to Google Vision.

        Raises:
            CloudVisionUnavailable: for unreadable images, transport errors,
                non-2xx responses and responses without text.
        """
        try:
            image_bytes = await asyncio.to_thread(_read_image_bytes, image)
        except OSError as exc:
            raise CloudVisionUnavailable(f"Failed to read receipt image: {exc}") from exc

        logger.info("Sending receipt to Google Vision (%d bytes)...", len(image_bytes))
        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.config.request_timeout) as client:
                response = await client.post(
                    self.config.vision_endpoint,
                    params={"key": self.config.google_vision_api_key},
                    json=build_vision_request(image_bytes),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as exc:
            raise CloudVisionUnavailable(f"Failed to connect to Vision API: {exc}") from exc

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        if not response.is_success:
            # Body is not logged: it can echo receipt contents.
            raise CloudVisionUnavailable(f"Vision API error: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise CloudVisionUnavailable("Vision API returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise CloudVisionUnavailable("Vision API returned an unexpected payload")

        text, confidence = parse_vision_response(payload)
        logger.debug("Vision API returned %d chars in %.0f ms", len(text), elapsed_ms)
        return RawOcrOutput(
            text=text,
            backend_confidence=confidence,
            backend=OcrBackend.CLOUD_VISION,
            elapsed_ms=elapsed_ms,
        )

    async def simulate_ocr(self, image: ImageSource) -> RawOcrOutput:
        """Produce deterministic receipt text after an artificial delay."""
        start_time = time.perf_counter()
        await asyncio.sleep(self.config.simulated_delay_seconds)
        text = simulated_receipt_text(_image_key(image))
        return RawOcrOutput(
            text=text,
            backend_confidence=SIMULATED_CONFIDENCE,
            backend=OcrBackend.SIMULATED,
            elapsed_ms=(time.perf_counter() - start_time) * 1000,
        )

    async def preprocess_image(self, image: ImageSource) -> ImageSource:
        """Image pre-processing hook; returns the image unchanged."""
        return image

    def validate_configuration(self) -> tuple[bool, list[str]]:
        """Check whether cloud OCR is usable with the current configuration."""
        issues: list[str] = []
        api_key = self.config.google_vision_api_key
        if not api_key:
            issues.append("Google Vision API not configured")
        elif len(api_key) < MIN_API_KEY_LENGTH:
            issues.append("Google Vision API key appears invalid")
        return not issues, issues

    def service_status(self) -> dict[str, Any]:
        methods = [OcrBackend.SIMULATED.value] if self.config.simulation_enabled else []
        if self.config.cloud_enabled:
            methods.insert(0, OcrBackend.CLOUD_VISION.value)
        return {
            "is_google_vision_enabled": self.config.cloud_enabled,
            "has_api_key": bool(self.config.google_vision_api_key),
            "supported_methods": methods,
            "confidence_threshold": self.config.confidence_threshold,
        }

    def recommended_confidence_threshold(self, method: str) -> float:
        return RECOMMENDED_CONFIDENCE_THRESHOLDS.get(method, self.config.confidence_threshold)
