"""Bilingual (English/Arabic) product names.

The category code selects one of a closed set of naming variants. BOX, BAG
and CUP have fixed templates; every other category uses the configurable
``NamingOrder`` (ordered, per-language list of enabled fields).

Field order differs between the English and Arabic templates on purpose
(Arabic puts the noun first). Missing optional fields contribute nothing and
whitespace is collapsed, so no template leaves empty placeholders behind.
Dictionary misses never fail: labels fall back to the raw code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from skucodec.models import CatalogDictionary, Domain, Language, ProductAttributes

_WHITESPACE_RE = re.compile(r"\s+")


class NameVariant(str, Enum):
    """Naming template selected by category."""

    BOX = "BOX"
    BAG = "BAG"
    CUP = "CUP"
    FALLBACK = "FALLBACK"


def variant_for(category: str | None) -> NameVariant:
    """Map a category code to its naming variant (FALLBACK for anything unnamed)."""
    if category in (NameVariant.BOX.value, NameVariant.BAG.value, NameVariant.CUP.value):
        return NameVariant(category)
    return NameVariant.FALLBACK


FALLBACK_FIELDS = ("productName", "category", "brand", "color", "collection", "material", "usage")


class NamingField(BaseModel):
    """One slot in a fallback naming order."""

    field: str
    enabled: bool = True

    @field_validator("field")
    @classmethod
    def validate_field(cls, v: str) -> str:
        if v not in FALLBACK_FIELDS:
            raise ValueError(f"Unknown naming field {v!r}. Expected one of {FALLBACK_FIELDS}")
        return v


class NamingOrder(BaseModel):
    """Per-language ordered field lists for the fallback variant."""

    arabic: list[NamingField] = Field(default_factory=list)
    english: list[NamingField] = Field(default_factory=list)

    def fields(self, language: Language) -> list[str]:
        slots = self.arabic if language is Language.ARABIC else self.english
        return [slot.field for slot in slots if slot.enabled]


def default_naming_order() -> NamingOrder:
    return NamingOrder(
        arabic=[
            NamingField(field=name)
            for name in ("productName", "category", "brand", "color", "collection")
        ],
        english=[
            NamingField(field=name)
            for name in ("brand", "color", "category", "productName", "collection")
        ],
    )


@dataclass(frozen=True)
class ComposedNames:
    english: str
    arabic: str


def tidy(text: str) -> str:
    """Collapse internal whitespace to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _label(
    dictionary: CatalogDictionary, domain: Domain, code: str | None, language: Language
) -> str:
    if not code:
        return ""
    return dictionary.label_or_code(domain, code, language)


def _quantity(attrs: ProductAttributes, dictionary: CatalogDictionary, language: Language) -> str:
    """``{qty}{unit}`` with no space, or empty when there is no quantity."""
    if not attrs.quantity:
        return ""
    return f"{attrs.quantity}{_label(dictionary, Domain.UNITS, attrs.unit, language)}"


def _box_name(attrs: ProductAttributes, dictionary: CatalogDictionary, language: Language) -> str:
    default_category = "علبة" if language is Language.ARABIC else "Box"
    brand = _label(dictionary, Domain.BRANDS, attrs.brand, language)
    category = dictionary.label(Domain.CATEGORIES, attrs.category, language) or default_category
    color = _label(dictionary, Domain.COLORS, attrs.color, language)
    collection = _label(dictionary, Domain.COLLECTIONS, attrs.collection, language)
    qty = _quantity(attrs, dictionary, language)

    if language is Language.ARABIC:
        return tidy(f"{category} {brand} {color} {collection} {qty}")
    return tidy(f"{brand} {category} {color} {collection} {qty}")


def _bag_name(attrs: ProductAttributes, dictionary: CatalogDictionary, language: Language) -> str:
    brand = _label(dictionary, Domain.BRANDS, attrs.brand, language)
    color = _label(dictionary, Domain.COLORS, attrs.color, language)
    collection = _label(dictionary, Domain.COLLECTIONS, attrs.collection, language)
    qty = _quantity(attrs, dictionary, language)

    if language is Language.ARABIC:
        return tidy(f"كيس {brand} {collection} {color} {qty}")
    return tidy(f"{brand} Bag {collection} {color} {qty}")


def _cup_name(attrs: ProductAttributes, dictionary: CatalogDictionary, language: Language) -> str:
    default_material = "ورق" if language is Language.ARABIC else "Paper"
    brand = _label(dictionary, Domain.BRANDS, attrs.brand, language)
    material = _label(dictionary, Domain.MATERIALS, attrs.material, language) or default_material
    collection = _label(dictionary, Domain.COLLECTIONS, attrs.collection, language)
    qty = _quantity(attrs, dictionary, language)

    if language is Language.ARABIC:
        return tidy(f"كوب {material} {brand} {qty} {collection}")
    return tidy(f"{brand} {qty} {material} Cup {collection}")


def _fallback_name(
    attrs: ProductAttributes,
    dictionary: CatalogDictionary,
    naming_order: NamingOrder,
    language: Language,
) -> str:
    if language is Language.ARABIC:
        product_name = attrs.product_name or ""
    else:
        product_name = attrs.product_name_english or attrs.product_name or ""

    values = {
        "productName": product_name,
        "category": _label(dictionary, Domain.CATEGORIES, attrs.category, language),
        "brand": _label(dictionary, Domain.BRANDS, attrs.brand, language),
        "color": _label(dictionary, Domain.COLORS, attrs.color, language),
        "collection": _label(dictionary, Domain.COLLECTIONS, attrs.collection, language),
        "material": _label(dictionary, Domain.MATERIALS, attrs.material, language),
        "usage": _label(dictionary, Domain.USAGES, attrs.usage, language),
    }

    parts = [values[name] for name in naming_order.fields(language)]
    parts.append(_quantity(attrs, dictionary, language))
    return tidy(" ".join(part for part in parts if part))


def compose_name(
    attrs: ProductAttributes,
    dictionary: CatalogDictionary,
    language: Language,
    naming_order: NamingOrder | None = None,
) -> str:
    """Compose the product name in one language."""
    variant = variant_for(attrs.category)

    if variant is NameVariant.BOX:
        return _box_name(attrs, dictionary, language)
    if variant is NameVariant.BAG:
        return _bag_name(attrs, dictionary, language)
    if variant is NameVariant.CUP:
        return _cup_name(attrs, dictionary, language)
    return _fallback_name(attrs, dictionary, naming_order or default_naming_order(), language)


def compose_names(
    attrs: ProductAttributes,
    dictionary: CatalogDictionary,
    naming_order: NamingOrder | None = None,
) -> ComposedNames:
    """Compose English and Arabic names for a product.

    Example:
        BOX / MIXB ("Mix Brand") / BRN ("Brown") / 36 pcs ->
        ``"Mix Brand Box Brown 36pcs"`` and ``"علبة ميكس براند بني 36pcs"``
    """
    return ComposedNames(
        english=compose_name(attrs, dictionary, Language.ENGLISH, naming_order),
        arabic=compose_name(attrs, dictionary, Language.ARABIC, naming_order),
    )
