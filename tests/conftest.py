"""Pytest configuration and fixtures for skucodec tests.

Provides a small bilingual dictionary, the stock barcode schema, a catalog and
a fixed clock so generated codes are deterministic.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from skucodec.config import reset_config
from skucodec.encoding.schema import SchemaRegistry, default_schema
from skucodec.models import CatalogDictionary, CatalogProduct, DictionaryEntry


def _entries(*rows: tuple[str, str | None, str, str]) -> dict[str, DictionaryEntry]:
    return {
        code: DictionaryEntry(code=code, numeric_code=numeric, label_ar=ar, label_en=en)
        for code, numeric, ar, en in rows
    }


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test reads configuration from its own environment."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def dictionary() -> CatalogDictionary:
    """Small dictionary without a units table (units print as raw codes)."""
    return CatalogDictionary(
        categories=_entries(
            ("BOX", "01", "علبة", "Box"),
            ("BAG", "02", "كيس", "Bag"),
            ("CUP", "04", "كوب", "Cup"),
            ("STK", "05", "ملصق", "Sticker"),
        ),
        brands=_entries(
            ("MIXB", "101", "ميكس براند", "Mix Brand"),
            ("HANO", "102", "هانوفريان", "Hanoverian"),
        ),
        colors=_entries(
            ("BRN", "01", "بني", "Brown"),
            ("WHT", "02", "أبيض", "White"),
            ("RED", "03", "أحمر", "Red"),
        ),
        collections=_entries(("FETH", "01", "ريشة", "Feather")),
        materials=_entries(("PLS", "02", "بلاستيك", "Plastic")),
    )


@pytest.fixture
def schema() -> SchemaRegistry:
    """Stock layout: 628 | 1057 | categoryNum | YY | MM | sequence | checksum."""
    return default_schema()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 14, 9, 30)


@pytest.fixture
def catalog() -> list[CatalogProduct]:
    return [
        CatalogProduct(id="p-1", code="123", name="Mix Brand Box Brown 36pcs"),
        CatalogProduct(id="p-2", code="00456", name="Hanoverian Paper Cup"),
        CatalogProduct(id="p-3", code="BOX-MIXB-BRN", name="علبة ميكس براند"),
        CatalogProduct(id="p-4", code="0123", name="Duplicate of p-1"),
    ]
