"""Realistic receipt text templates for the simulated OCR backend."""

import hashlib
from collections.abc import Callable
from datetime import date

SIMULATED_CONFIDENCE = 0.85


def _grocery_receipt(day: date) -> str:
    return f"""SOBEYS GROCERY STORE #4521
1120 Queen St, Halifax, NS
Tel: (902) 555-0148
Date: {day:%m/%d/%Y}
Time: 14:32
================================
Bananas                  $1.89
Milk 2% 4L               $6.49
Bread Whole Wheat        $3.99
Eggs Large Dozen         $4.29
Cheddar Cheese           $3.60
--------------------------------
Subtotal                $20.26
HST (13%)                $2.63
Total                   $22.89
Payment: Debit Card
Interac ****4417
Thank you for shopping at Sobeys!
"""


def _quick_service_receipt(day: date) -> str:
    return f"""TIM HORTONS #1187
455 Yonge St, Toronto, ON
Phone: 416-555-0199
Date: {day:%m/%d/%Y}
Transaction #88213
Breakfast Sandwich        $5.49
Double Double             $2.19
Hash Brown                $1.79
Subtotal                  $9.47
HST (13%)                 $1.23
Total                    $10.70
Payment: Visa
Card: ****9032
Visit us again!
"""


def _hardware_receipt(day: date) -> str:
    return f"""CANADIAN TIRE CORP
2 Brewer Hunt Way, Ottawa, ON
Tel: (613) 555-0102
Date: {day:%m/%d/%Y}
Extension Cord 25ft      $24.99
Wood Screws 100pk         $8.49
LED Bulb 4pk             $12.99
Subtotal                 $46.47
GST (5%)                  $2.32
PST (8%)                  $3.72
Total                    $52.51
Payment: MasterCard
Thank you for shopping!
"""


RECEIPT_TEMPLATES: tuple[Callable[[date], str], ...] = (
    _grocery_receipt,
    _quick_service_receipt,
    _hardware_receipt,
)


def select_template_index(image_key: bytes) -> int:
    """Pick a template deterministically from the image reference."""
    digest = hashlib.sha256(image_key).digest()
    return int.from_bytes(digest[:4], "big") % len(RECEIPT_TEMPLATES)


def simulated_receipt_text(image_key: bytes, day: date | None = None) -> str:
    """Return simulated OCR text for an image, dated ``day`` (default today)."""
    template = RECEIPT_TEMPLATES[select_template_index(image_key)]
    return template(day or date.today())
