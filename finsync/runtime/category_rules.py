"""Runtime loader for receipt category rules."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from finsync.receipt.categories import CategoryRules, build_category_rules
from finsync.runtime.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORY_RULES_PATH = Path(__file__).resolve().parents[1] / "receipt" / "rules" / "default_category_rules.toml"


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    if not path.exists():
        logger.warning("Category rules file not found: %s", path)
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=4)
def load_category_rules(config_path: str | None = None) -> CategoryRules:
    """
    Load category rules into pure in-memory rules.

    Args:
        config_path: Optional TOML path override. If None, uses the packaged defaults.

    Returns:
        CategoryRules preserving the file's rule order.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CATEGORY_RULES_PATH
    rules = build_category_rules(_load_toml(path))
    logger.debug("Loaded %d category rules from %s", len(rules.merchant_rules), path)
    return rules
