"""Data models for receipt OCR extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

# Closed set of spending categories a receipt can be classified into.
FOOD_AND_DINING = "Food & Dining"
GROCERIES = "Groceries"
TRANSPORTATION = "Transportation"
SHOPPING = "Shopping"
HEALTHCARE = "Healthcare"

RECEIPT_CATEGORIES: tuple[str, ...] = (
    FOOD_AND_DINING,
    GROCERIES,
    TRANSPORTATION,
    SHOPPING,
    HEALTHCARE,
)

CENTS = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    """Quantize a monetary value to two decimal places."""
    return value.quantize(CENTS)


class OcrBackend(str, Enum):
    """OCR backend that produced the raw text."""

    CLOUD_VISION = "google-vision"
    SIMULATED = "simulation"


@dataclass(frozen=True)
class RawOcrOutput:
    """Raw text recovered from a single receipt image."""

    text: str
    backend_confidence: float
    backend: OcrBackend
    elapsed_ms: float


@dataclass(frozen=True)
class ReceiptLineItem:
    """A single purchased item on a receipt."""

    name: str
    price: Decimal
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"Item price must be non-negative: {self.price}")
        if self.quantity < 1:
            raise ValueError(f"Item quantity must be at least 1: {self.quantity}")

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "price": float(self.price), "quantity": self.quantity}


_MONEY_FIELDS = ("subtotal", "tax", "tip", "total", "amount")


@dataclass(frozen=True)
class ExtractedReceiptData:
    """Structured record reconstructed from receipt text.

    Every field is optional: a missing field means the parser found no
    match, which is expected for noisy OCR output.
    """

    merchant_name: str | None = None
    address: str | None = None
    phone: str | None = None
    date: date | None = None
    items: tuple[ReceiptLineItem, ...] = field(default_factory=tuple)
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    tip: Decimal | None = None
    total: Decimal | None = None
    # Alias of total kept for older callers that only read "amount".
    amount: Decimal | None = None
    payment_method: str | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        for name in _MONEY_FIELDS:
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")
        if self.category is not None and self.category not in RECEIPT_CATEGORIES:
            raise ValueError(f"Unknown receipt category: {self.category!r}")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-safe mapping; money is emitted as float."""
        data: dict[str, Any] = {
            "merchant_name": self.merchant_name,
            "address": self.address,
            "phone": self.phone,
            "date": self.date.isoformat() if self.date else None,
            "items": [item.to_dict() for item in self.items],
            "payment_method": self.payment_method,
            "category": self.category,
        }
        for name in _MONEY_FIELDS:
            value = getattr(self, name)
            data[name] = float(value) if value is not None else None
        return data


@dataclass(frozen=True)
class ValidationReport:
    """Quality assessment of an ExtractedReceiptData record."""

    is_valid: bool
    confidence: float
    issues: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"is_valid": self.is_valid, "confidence": self.confidence, "issues": list(self.issues)}


@dataclass(frozen=True)
class OcrResult:
    """Full pipeline output for one receipt image."""

    text: str
    confidence: float
    extracted_data: ExtractedReceiptData
    processing_time: float  # milliseconds
    ocr_method: OcrBackend
    validation: ValidationReport

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "extracted_data": self.extracted_data.to_dict(),
            "processing_time": round(self.processing_time, 1),
            "ocr_method": self.ocr_method.value,
            "validation": self.validation.to_dict(),
        }
