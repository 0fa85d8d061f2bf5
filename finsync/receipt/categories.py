"""Spending-category classification for parsed receipts.

Rules are plain data: an ordered tuple of (category, keywords) pairs built
from TOML configs. Classification folds over the rules and the first
category with a keyword hit wins.

To add new rules:
1. Edit receipt/rules/default_category_rules.toml, or
2. Point FINSYNC_CATEGORY_RULES at a TOML file with the same layout
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from finsync.domain.receipt import FOOD_AND_DINING, GROCERIES, RECEIPT_CATEGORIES, ReceiptLineItem


@dataclass(frozen=True)
class CategoryRule:
    """Merchant keywords that map to one spending category."""

    category: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class CategoryRules:
    """In-memory category rules and item fallback keywords."""

    merchant_rules: tuple[CategoryRule, ...]
    food_item_keywords: tuple[str, ...]
    dine_in_hints: tuple[str, ...]


def _normalize_keywords(raw: Any) -> tuple[str, ...]:
    """Normalize keywords value from TOML into a lower-cased tuple."""
    if isinstance(raw, str):
        value = raw.strip().lower()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip().lower() for v in raw if str(v).strip())
    return tuple()


def build_category_rules(config: Mapping[str, Any]) -> CategoryRules:
    """Build category rules from a parsed TOML mapping.

    Raises:
        ValueError: if a rule names a category outside RECEIPT_CATEGORIES.
    """
    merchant_rules: list[CategoryRule] = []
    for rule in config.get("rules", []):
        if not isinstance(rule, Mapping):
            continue
        category = str(rule.get("category") or "").strip()
        if category not in RECEIPT_CATEGORIES:
            raise ValueError(f"Unknown category in rules: {category!r}")
        keywords = _normalize_keywords(rule.get("keywords"))
        if keywords:
            merchant_rules.append(CategoryRule(category=category, keywords=keywords))

    return CategoryRules(
        merchant_rules=tuple(merchant_rules),
        food_item_keywords=_normalize_keywords(config.get("food_item_keywords", [])),
        dine_in_hints=_normalize_keywords(config.get("dine_in_hints", [])),
    )


def category_for_merchant(merchant_name: str, rules: CategoryRules) -> str | None:
    """Return the first category whose keywords appear in the merchant name."""
    merchant_lower = merchant_name.lower()
    for rule in rules.merchant_rules:
        if any(keyword in merchant_lower for keyword in rule.keywords):
            return rule.category
    return None


def category_for_items(
    merchant_name: str | None,
    items: Sequence[ReceiptLineItem],
    rules: CategoryRules,
) -> str | None:
    """Fallback: classify from item names when the merchant is not recognized.

    Food items default to Groceries unless the merchant name hints at a
    restaurant or cafe.
    """
    has_food = any(
        keyword in item.name.lower() for item in items for keyword in rules.food_item_keywords
    )
    if not has_food:
        return None
    merchant_lower = (merchant_name or "").lower()
    if any(hint in merchant_lower for hint in rules.dine_in_hints):
        return FOOD_AND_DINING
    return GROCERIES


def classify_category(
    merchant_name: str | None,
    items: Sequence[ReceiptLineItem],
    *,
    rules: CategoryRules,
) -> str | None:
    """Derive a spending category, merchant first, items second; None if neither matches."""
    if merchant_name:
        category = category_for_merchant(merchant_name, rules)
        if category is not None:
            return category
    return category_for_items(merchant_name, items, rules)
