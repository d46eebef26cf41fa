"""skucodec Pydantic models for type-safe data validation.

Covers the configuration-side inputs (dictionary entries, schema elements),
the generation output (``GeneratedIdentity``) and the matching call shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)


class Language(str, Enum):
    """Label language for bilingual dictionaries."""

    ARABIC = "ar"
    ENGLISH = "en"


class Domain(str, Enum):
    """Attribute families that carry their own code table."""

    CATEGORIES = "categories"
    BRANDS = "brands"
    COLORS = "colors"
    COLLECTIONS = "collections"
    MATERIALS = "materials"
    UNITS = "units"
    USAGES = "usages"


class QuerySource(str, Enum):
    """Where a lookup string came from."""

    MANUAL = "manual"
    OCR = "ocr"
    FILENAME = "filename"


class MatchMethod(str, Enum):
    """How a catalog entry was resolved."""

    CODE = "code"
    NAME = "name"
    NONE = "none"


class DictionaryEntry(BaseModel):
    """One row of a domain code table."""

    code: str
    numeric_code: str | None = None
    label_ar: str = ""
    label_en: str = ""

    @field_validator("numeric_code")
    @classmethod
    def validate_numeric_code(cls, v: str | None) -> str | None:
        if v and not (v.isascii() and v.isdigit()):
            raise ValueError(f"numeric_code must be digits only, got {v!r}")
        return v or None

    def label(self, language: Language) -> str:
        return self.label_ar if language is Language.ARABIC else self.label_en

    class Config:
        json_schema_extra = {
            "example": {
                "code": "MIXB",
                "numeric_code": "101",
                "label_ar": "ميكس براند",
                "label_en": "Mix Brand",
            }
        }


class CatalogDictionary(BaseModel):
    """Per-domain ``code -> DictionaryEntry`` tables.

    Codes are unique within a domain because they are mapping keys. Numeric
    codes must also be unique within a domain (not across domains), compared
    with leading zeros ignored.

    Lookups never raise for a missing code; they return ``None`` so callers
    decide whether to fall back to the raw code (see ``label_or_code``).
    """

    categories: dict[str, DictionaryEntry] = Field(default_factory=dict)
    brands: dict[str, DictionaryEntry] = Field(default_factory=dict)
    colors: dict[str, DictionaryEntry] = Field(default_factory=dict)
    collections: dict[str, DictionaryEntry] = Field(default_factory=dict)
    materials: dict[str, DictionaryEntry] = Field(default_factory=dict)
    units: dict[str, DictionaryEntry] = Field(default_factory=dict)
    usages: dict[str, DictionaryEntry] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_unique_numeric_codes(self) -> CatalogDictionary:
        for domain in Domain:
            seen: dict[str, str] = {}
            for code, entry in self.table(domain).items():
                if entry.code != code:
                    raise ValueError(
                        f"{domain.value}: entry key {code!r} does not match entry code {entry.code!r}"
                    )
                if entry.numeric_code is None:
                    continue
                # Barcode elements are zero-padded, so "1" and "01" encode alike
                key = entry.numeric_code.lstrip("0") or "0"
                if key in seen:
                    raise ValueError(
                        f"{domain.value}: numeric code {entry.numeric_code!r} of {code!r} "
                        f"collides with {seen[key]!r} once zero-padded"
                    )
                seen[key] = code
        return self

    def table(self, domain: Domain) -> dict[str, DictionaryEntry]:
        return getattr(self, domain.value)

    def lookup(self, domain: Domain, code: str | None) -> DictionaryEntry | None:
        """Return the entry for ``code`` or ``None`` when absent."""
        if not code:
            return None
        return self.table(domain).get(code)

    def label(self, domain: Domain, code: str | None, language: Language) -> str | None:
        """Return the translated label, or ``None`` when there is no translation."""
        entry = self.lookup(domain, code)
        if entry is None:
            return None
        return entry.label(language) or None

    def label_or_code(self, domain: Domain, code: str | None, language: Language) -> str:
        """Return the translated label, falling back to the raw code."""
        label = self.label(domain, code, language)
        if label is not None:
            return label
        return code or ""

    def numeric_code(self, domain: Domain, code: str | None) -> str | None:
        entry = self.lookup(domain, code)
        return entry.numeric_code if entry else None


class CodeSchemaElement(BaseModel):
    """One positional element of the numeric barcode.

    ``value`` is a static configured value; when empty, the element id is used
    as the dynamic key (year, month, sequence, categoryNum, ...).
    """

    id: str
    value: str = ""
    length: int = Field(ge=0, le=255)
    enabled: bool = True
    fixed: bool = False
    order_index: int = 0
    name_en: str = ""
    name_ar: str = ""
    description: str = ""

    @property
    def is_dynamic(self) -> bool:
        return not self.value


class ProductAttributes(BaseModel):
    """Attribute codes supplied by the caller for one product."""

    category: str
    brand: str
    color: str
    collection: str | None = None
    quantity: str | None = None
    unit: str | None = None
    material: str | None = None
    usage: str | None = None
    sequence: str | None = None  # Explicit sequence; HHMM of "now" otherwise
    product_name: str | None = None
    product_name_english: str | None = None

    @field_validator("collection", "quantity", "unit", "material", "usage", "sequence")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    class Config:
        json_schema_extra = {
            "example": {
                "category": "BOX",
                "brand": "MIXB",
                "color": "BRN",
                "quantity": "36",
                "unit": "pcs",
                "sequence": "0456",
            }
        }


class GeneratedIdentity(BaseModel):
    """Internal code, barcode and bilingual names for one generated product.

    Accepts ``breakdown`` (element id -> encoded digits) as a mapping, stores
    it as ordered pairs and exposes it read-only. Serialized output carries
    ``breakdown`` as a plain dict.
    """

    internal_code: str
    barcode: str
    name_arabic: str
    name_english: str
    breakdown_items: tuple[tuple[str, str], ...] = Field(default=(), exclude=True)

    @model_validator(mode="before")
    @classmethod
    def collect_breakdown(cls, data: Any) -> Any:
        if isinstance(data, dict) and "breakdown" in data:
            data = dict(data)
            data["breakdown_items"] = tuple(dict(data.pop("breakdown")).items())
        return data

    @property
    def breakdown(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.breakdown_items))

    @model_serializer(mode="wrap")
    def serialize_breakdown(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        data["breakdown"] = dict(self.breakdown_items)
        return data

    @field_validator("barcode")
    @classmethod
    def validate_barcode(cls, v: str) -> str:
        if not (v.isascii() and v.isdigit()):
            raise ValueError("barcode must contain ASCII digits only")
        return v

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "internal_code": "BOX-MIXB-BRN-25-0456",
                "barcode": "628105701250304565",
                "name_arabic": "علبة ميكس براند بني 36pcs",
                "name_english": "Mix Brand Box Brown 36pcs",
                "breakdown": {"saudiCode": "628", "companyCode": "1057"},
            }
        }


class CatalogProduct(BaseModel):
    """Read-only catalog entry consulted by the matcher."""

    id: str
    code: str = ""
    name: str = ""


class MatchQuery(BaseModel):
    """A single lookup request."""

    raw_text: str
    source: QuerySource = QuerySource.MANUAL


class MatchResult(BaseModel):
    """Outcome of one lookup. ``method=NONE`` is a normal result, not an error."""

    matched_product_id: str | None = None
    method: MatchMethod = MatchMethod.NONE
    reason: str | None = None
    code: str | None = None  # Candidate code extracted from the query, if any

    @property
    def matched(self) -> bool:
        return self.matched_product_id is not None
