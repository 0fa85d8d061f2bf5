"""Deployment configuration for the receipt OCR service.

Configuration is an explicit, immutable object handed to the service
constructor. ``load_ocr_config()`` builds one from environment variables:

    FINSYNC_VISION_API_KEY            Google Vision API key (enables cloud OCR)
    FINSYNC_OCR_CONFIDENCE_THRESHOLD  Acceptance threshold in [0, 1] (default 0.7)
    FINSYNC_VISION_ENDPOINT           Vision annotate URL override
    FINSYNC_OCR_TIMEOUT               Cloud request timeout in seconds (default 30)
    FINSYNC_SIMULATED_DELAY           Simulated backend delay in seconds (default 2)
    FINSYNC_CATEGORY_RULES            Path to a category rules TOML override
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"
DEFAULT_CONFIDENCE_THRESHOLD = 0.7
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_SIMULATED_DELAY = 2.0
DEFAULT_PORT = 8080


@dataclass(frozen=True)
class OcrConfig:
    """Settings shared by every OCR request handled by one service instance."""

    google_vision_api_key: str | None = None
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    vision_endpoint: str = DEFAULT_VISION_ENDPOINT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    simulated_delay_seconds: float = DEFAULT_SIMULATED_DELAY
    simulation_enabled: bool = True
    category_rules_path: str | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(f"confidence_threshold must be within [0, 1]: {self.confidence_threshold}")
        if self.simulated_delay_seconds < 0:
            raise ValueError(f"simulated_delay_seconds must be non-negative: {self.simulated_delay_seconds}")

    @property
    def cloud_enabled(self) -> bool:
        """Cloud OCR is eligible whenever an API key is present."""
        return bool(self.google_vision_api_key)


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_ocr_config(environ: Mapping[str, str] | None = None) -> OcrConfig:
    """Build an OcrConfig from environment variables (or the given mapping)."""
    env = os.environ if environ is None else environ
    return OcrConfig(
        google_vision_api_key=env.get("FINSYNC_VISION_API_KEY", "").strip() or None,
        confidence_threshold=_env_float(env, "FINSYNC_OCR_CONFIDENCE_THRESHOLD", DEFAULT_CONFIDENCE_THRESHOLD),
        vision_endpoint=env.get("FINSYNC_VISION_ENDPOINT", "").strip() or DEFAULT_VISION_ENDPOINT,
        request_timeout=_env_float(env, "FINSYNC_OCR_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        simulated_delay_seconds=_env_float(env, "FINSYNC_SIMULATED_DELAY", DEFAULT_SIMULATED_DELAY),
        category_rules_path=env.get("FINSYNC_CATEGORY_RULES", "").strip() or None,
    )
