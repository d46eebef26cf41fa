"""Internal code (SKU) and numeric barcode composition.

Internal code: ``{category}-{brand}[-{collection}]-{color}-{YY}-{sequence}``.
Barcode: schema-driven digit string, see ``skucodec.encoding.schema``.

Sequence numbers are caller input. Without one, the local time of ``now``
formatted ``HHMM`` is used, so two identities generated in the same minute
without an explicit sequence get the same sequence. Batch callers must pass
explicit sequences (see ``IdentityGenerator.generate_batch``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from skucodec.canonical.checksum import checksum
from skucodec.encoding.schema import SchemaError, SchemaRegistry, check_length
from skucodec.models import CatalogDictionary, CodeSchemaElement, Domain, ProductAttributes

logger = logging.getLogger(__name__)

CHECKSUM_ELEMENT_ID = "checksum"
MISSING_NUMERIC_CODE = "00"


@dataclass(frozen=True)
class BarcodeComposition:
    """Barcode digits plus the padded value contributed by each element."""

    barcode: str
    payload: str
    breakdown: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def default_sequence(now: datetime) -> str:
    """Sequence fallback: local ``HHMM`` of ``now`` (not unique within a minute)."""
    return now.strftime("%H%M")


def resolve_sequence(attrs: ProductAttributes, now: datetime) -> str:
    return attrs.sequence or default_sequence(now)


def compose_internal_code(attrs: ProductAttributes, now: datetime | None = None) -> str:
    """Build the human-readable internal code.

    The collection segment is left out entirely (no empty segment) when the
    product has no collection.

    Args:
        attrs: Product attribute codes
        now: Clock reading for year and default sequence (defaults to local now)

    Returns:
        Internal code such as ``BOX-MIXB-BRN-25-0456``
    """
    now = now or datetime.now()

    parts = [attrs.category, attrs.brand]
    if attrs.collection:
        parts.append(attrs.collection)
    parts.extend([attrs.color, now.strftime("%y"), resolve_sequence(attrs, now)])

    return "-".join(parts)


def _numeric_or_default(
    dictionary: CatalogDictionary, domain: Domain, code: str | None
) -> str:
    numeric = dictionary.numeric_code(domain, code)
    if numeric is None:
        if code:
            logger.debug(f"No numeric code for {domain.value}/{code}, using {MISSING_NUMERIC_CODE}")
        return MISSING_NUMERIC_CODE
    return numeric


def resolve_dynamic_values(
    attrs: ProductAttributes, dictionary: CatalogDictionary, now: datetime
) -> dict[str, str]:
    """Values for dynamic (non-static) schema elements, keyed by element id."""
    return {
        "year": now.strftime("%y"),
        "month": now.strftime("%m"),
        "sequence": resolve_sequence(attrs, now),
        "categoryNum": _numeric_or_default(dictionary, Domain.CATEGORIES, attrs.category),
        "brandNum": _numeric_or_default(dictionary, Domain.BRANDS, attrs.brand),
        "colorNum": _numeric_or_default(dictionary, Domain.COLORS, attrs.color),
        "collectionNum": _numeric_or_default(dictionary, Domain.COLLECTIONS, attrs.collection),
    }


def _encode(element: CodeSchemaElement, value: str) -> str:
    """Left-zero-pad ``value`` to the element length, refusing to truncate."""
    if value and not (value.isascii() and value.isdigit()):
        raise SchemaError(f"Value {value!r} for element {element.id!r} is not numeric")
    check_length(element, value)
    return value.rjust(element.length, "0")


def compose_barcode(
    attrs: ProductAttributes,
    schema: SchemaRegistry,
    dictionary: CatalogDictionary,
    now: datetime | None = None,
) -> BarcodeComposition:
    """Build the numeric barcode for a product.

    A static element ``value`` wins over the dynamic value of the same id.
    Unknown dynamic ids encode as zeros. The checksum element is computed over
    the payload; other fixed elements append their static value.

    Returns:
        BarcodeComposition whose ``barcode`` length equals ``schema.total_length``

    Raises:
        SchemaError: On duplicate ids, non-numeric values, or a value longer
            than its declared length
    """
    now = now or datetime.now()
    schema.validate()

    dynamic = resolve_dynamic_values(attrs, dictionary, now)
    breakdown: dict[str, str] = {}

    payload_parts = []
    for element in schema.payload_elements():
        value = dynamic.get(element.id, "") if element.is_dynamic else element.value
        encoded = _encode(element, value)
        payload_parts.append(encoded)
        breakdown[element.id] = encoded
    payload = "".join(payload_parts)

    barcode_parts = [payload]
    for element in schema.fixed_elements():
        if element.id == CHECKSUM_ELEMENT_ID:
            encoded = _encode(element, checksum(payload))
        else:
            encoded = _encode(element, element.value)
        barcode_parts.append(encoded)
        breakdown[element.id] = encoded
    barcode = "".join(barcode_parts)

    logger.debug(f"Composed barcode {barcode} ({len(barcode)} digits) from {len(breakdown)} elements")
    return BarcodeComposition(
        barcode=barcode, payload=payload, breakdown=MappingProxyType(breakdown)
    )
