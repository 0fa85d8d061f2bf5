"""Shared pytest fixtures for FinSync receipt OCR tests."""

from __future__ import annotations

import pytest

from finsync.receipt.categories import CategoryRules
from finsync.runtime.category_rules import load_category_rules
from finsync.runtime.config import OcrConfig


@pytest.fixture
def category_rules() -> CategoryRules:
    return load_category_rules()


@pytest.fixture
def fast_config() -> OcrConfig:
    """Simulation-only config without the artificial backend delay."""
    return OcrConfig(simulated_delay_seconds=0)
