"""Quality scoring for extracted receipt records."""

from datetime import date, timedelta
from decimal import Decimal

from finsync.domain.receipt import ExtractedReceiptData, ValidationReport

# Fixed additive penalties, subtracted from a starting confidence of 1.0.
MISSING_MERCHANT_PENALTY = 0.2
SHORT_MERCHANT_PENALTY = 0.1
MISSING_TOTAL_PENALTY = 0.3
NON_POSITIVE_TOTAL_PENALTY = 0.2
HIGH_TOTAL_PENALTY = 0.1
UNUSUAL_DATE_PENALTY = 0.1
MISSING_ITEMS_PENALTY = 0.2
INVALID_ITEMS_MAX_PENALTY = 0.2

HIGH_TOTAL_LIMIT = Decimal("10000")
MIN_NAME_LENGTH = 2
FUTURE_DATE_TOLERANCE = timedelta(days=7)


def _one_year_before(day: date) -> date:
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        # Feb 29 -> Feb 28 of the previous year
        return day.replace(year=day.year - 1, day=28)


def validate_extracted_data(
    data: ExtractedReceiptData,
    threshold: float,
    *,
    today: date | None = None,
) -> ValidationReport:
    """
    Score an extracted record for completeness and plausibility.

    Args:
        data: The record to score. It is never modified.
        threshold: Minimum confidence for the record to count as valid,
            taken from deployment configuration.
        today: Reference date for the date-window check (defaults to today).

    Returns:
        ValidationReport with issues in evaluation order.
    """
    issues: list[str] = []
    score = 1.0

    if not data.merchant_name:
        issues.append("No merchant name detected")
        score -= MISSING_MERCHANT_PENALTY
    elif len(data.merchant_name) < MIN_NAME_LENGTH:
        issues.append("Merchant name seems too short")
        score -= SHORT_MERCHANT_PENALTY

    if data.amount is None and data.total is None:
        issues.append("No total amount detected")
        score -= MISSING_TOTAL_PENALTY
    else:
        effective_total = data.amount if data.amount is not None else data.total
        effective_total = effective_total or Decimal("0")
        if effective_total <= 0:
            issues.append("Total amount is zero or negative")
            score -= NON_POSITIVE_TOTAL_PENALTY
        elif effective_total > HIGH_TOTAL_LIMIT:
            issues.append("Total amount seems unusually high")
            score -= HIGH_TOTAL_PENALTY

    if data.date is not None:
        reference = today or date.today()
        if data.date < _one_year_before(reference) or data.date > reference + FUTURE_DATE_TOLERANCE:
            issues.append("Date seems unusual (too old or in future)")
            score -= UNUSUAL_DATE_PENALTY

    if not data.items:
        issues.append("No items detected")
        score -= MISSING_ITEMS_PENALTY
    else:
        invalid_count = sum(
            1 for item in data.items if not item.name or len(item.name) < MIN_NAME_LENGTH or item.price <= 0
        )
        if invalid_count:
            issues.append(f"{invalid_count} items have invalid data")
            score -= (invalid_count / len(data.items)) * INVALID_ITEMS_MAX_PENALTY

    confidence = max(0.0, round(score, 4))
    return ValidationReport(
        is_valid=confidence >= threshold,
        confidence=confidence,
        issues=tuple(issues),
    )
