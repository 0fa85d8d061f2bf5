from decimal import Decimal

import pytest

from finsync.domain.receipt import FOOD_AND_DINING, GROCERIES, HEALTHCARE, SHOPPING, TRANSPORTATION, ReceiptLineItem
from finsync.receipt.categories import (
    CategoryRules,
    build_category_rules,
    category_for_items,
    classify_category,
)


def _item(name: str) -> ReceiptLineItem:
    return ReceiptLineItem(name=name, price=Decimal("1.00"))


@pytest.mark.parametrize(
    ("merchant", "expected"),
    [
        ("SOBEYS GROCERY STORE", GROCERIES),
        ("TIM HORTONS", FOOD_AND_DINING),
        ("PETRO-CANADA", TRANSPORTATION),
        ("Canadian Tire Corp", SHOPPING),
        ("SHOPPERS DRUG MART", HEALTHCARE),
    ],
)
def test_merchant_keywords(category_rules: CategoryRules, merchant: str, expected: str) -> None:
    assert classify_category(merchant, [], rules=category_rules) == expected


def test_merchant_match_beats_item_fallback(category_rules: CategoryRules) -> None:
    items = [_item("Breakfast Sandwich")]

    assert classify_category("TIM HORTONS", items, rules=category_rules) == FOOD_AND_DINING


def test_item_fallback_defaults_to_groceries(category_rules: CategoryRules) -> None:
    items = [_item("Bananas"), _item("Whole Milk")]

    assert classify_category("FRESH STOP", items, rules=category_rules) == GROCERIES
    assert classify_category(None, items, rules=category_rules) == GROCERIES


def test_item_fallback_with_dine_in_hint() -> None:
    rules = build_category_rules({"food_item_keywords": ["burger"], "dine_in_hints": ["restaurant"]})

    assert category_for_items("Joe's Restaurant", [_item("Burger")], rules) == FOOD_AND_DINING
    assert category_for_items("Joe's Place", [_item("Burger")], rules) == GROCERIES


def test_no_match_returns_none(category_rules: CategoryRules) -> None:
    assert classify_category("ACME WIDGETS", [_item("Widget")], rules=category_rules) is None
    assert classify_category(None, [], rules=category_rules) is None


def test_rules_keep_file_order() -> None:
    rules = build_category_rules(
        {
            "rules": [
                {"category": "Shopping", "keywords": ["mart"]},
                {"category": "Healthcare", "keywords": "drug mart"},
            ]
        }
    )

    assert [rule.category for rule in rules.merchant_rules] == [SHOPPING, HEALTHCARE]
    assert classify_category("Shoppers Drug Mart", [], rules=rules) == SHOPPING


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown category"):
        build_category_rules({"rules": [{"category": "Travel", "keywords": ["hotel"]}]})
