from decimal import Decimal

import pytest

from finsync.receipt.ocr_parser.totals_parser import SummaryTotals, extract_totals


def test_extract_totals_reads_summary_block() -> None:
    totals = extract_totals(
        [
            "Coffee $2.19",
            "Subtotal $9.47",
            "HST (13%) $1.23",
            "Tip $2.00",
            "Total $12.70",
        ]
    )

    assert totals == SummaryTotals(
        subtotal=Decimal("9.47"),
        tax=Decimal("1.23"),
        total=Decimal("12.70"),
        tip=Decimal("2.00"),
    )


def test_total_with_label_colon_and_dollar_sign() -> None:
    assert extract_totals(["Total: $12.34"]).total == Decimal("12.34")


def test_subtotal_line_never_sets_total() -> None:
    totals = extract_totals(["Sub-Total 8.00", "SUBTOTAL 9.00"])

    assert totals.subtotal == Decimal("8.00")
    assert totals.total is None


def test_first_match_wins_per_field() -> None:
    totals = extract_totals(["GST (5%) $2.32", "PST (8%) $3.72", "Total $52.51", "Total $99.99"])

    assert totals.tax == Decimal("2.32")
    assert totals.total == Decimal("52.51")


def test_tax_rate_is_not_read_as_amount() -> None:
    assert extract_totals(["HST 13%"]).tax is None
    assert extract_totals(["HST 13% 2.60"]).tax == Decimal("2.60")


def test_implausible_tax_is_rejected() -> None:
    totals = extract_totals(["Tax $75.00", "Tax $4.10"])

    assert totals.tax == Decimal("4.10")


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Amount Due $40.00", Decimal("40.00")),
        ("GRAND TOTAL 1,250.00", Decimal("1250.00")),
    ],
)
def test_total_label_variants(line: str, expected: Decimal) -> None:
    assert extract_totals([line]).total == expected


def test_gratuity_sets_tip() -> None:
    assert extract_totals(["Gratuity: 5.00"]).tip == Decimal("5.00")


def test_empty_input_yields_no_totals() -> None:
    assert extract_totals([]) == SummaryTotals()


def test_overlong_total_is_discarded() -> None:
    totals = extract_totals(["Total 99999999999999999999999999999", "Amount Due $5.00"])

    assert totals.total == Decimal("5.00")
