"""Barcode schema registry.

The barcode payload is the concatenation of every enabled, non-fixed element
in ``order_index`` order, each left-zero-padded to its declared length.
Enabled ``fixed`` elements (the checksum) always follow the payload,
regardless of their ``order_index``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from skucodec.models import CodeSchemaElement


class SchemaError(ValueError):
    """Barcode schema is inconsistent or a value cannot be encoded."""

    pass


class DuplicateIdError(SchemaError):
    """Two schema elements share an id."""

    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Duplicate schema element id: {element_id!r}")


class LengthOverflowError(SchemaError):
    """A resolved value is longer than its element's declared length."""

    def __init__(self, element_id: str, value: str, length: int):
        self.element_id = element_id
        self.value = value
        self.length = length
        super().__init__(
            f"Value {value!r} for element {element_id!r} exceeds declared length {length}"
        )


class SchemaRegistry:
    """Ordered, read-only list of barcode schema elements."""

    def __init__(self, elements: Iterable[CodeSchemaElement]):
        # Stable sort keeps declaration order for equal order_index values
        self._elements: tuple[CodeSchemaElement, ...] = tuple(
            sorted(elements, key=lambda e: e.order_index)
        )

    @classmethod
    def from_dicts(cls, rows: Iterable[Mapping]) -> SchemaRegistry:
        """Build a registry from plain mappings, using list position as the default order."""
        elements = []
        for idx, row in enumerate(rows):
            data = dict(row)
            data.setdefault("order_index", idx)
            elements.append(CodeSchemaElement(**data))
        return cls(elements)

    @property
    def elements(self) -> tuple[CodeSchemaElement, ...]:
        return self._elements

    def __iter__(self):
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def get(self, element_id: str) -> CodeSchemaElement | None:
        for element in self._elements:
            if element.id == element_id:
                return element
        return None

    def payload_elements(self) -> list[CodeSchemaElement]:
        """Enabled, non-fixed elements in encoding order."""
        return [e for e in self._elements if e.enabled and not e.fixed]

    def fixed_elements(self) -> list[CodeSchemaElement]:
        """Enabled fixed elements, appended after the payload."""
        return [e for e in self._elements if e.enabled and e.fixed]

    @property
    def payload_length(self) -> int:
        return sum(e.length for e in self.payload_elements())

    @property
    def total_length(self) -> int:
        """Barcode length: sum of all enabled element lengths."""
        return sum(e.length for e in self._elements if e.enabled)

    def validate(self, values: Mapping[str, str] | None = None) -> None:
        """Check the schema, and optionally a set of resolved values against it.

        Args:
            values: Optional ``element_id -> resolved value`` mapping. Elements
                without an entry are checked against their static ``value``.

        Raises:
            DuplicateIdError: If two elements share an id
            LengthOverflowError: If a resolved value exceeds its declared length
        """
        seen: set[str] = set()
        for element in self._elements:
            if element.id in seen:
                raise DuplicateIdError(element.id)
            seen.add(element.id)

        for element in self._elements:
            if not element.enabled:
                continue
            value = element.value
            if values is not None and element.id in values:
                value = values[element.id]
            check_length(element, value)


def check_length(element: CodeSchemaElement, value: str) -> None:
    """Raise ``LengthOverflowError`` when ``value`` does not fit ``element``."""
    if len(value) > element.length:
        raise LengthOverflowError(element.id, value, element.length)


def default_schema() -> SchemaRegistry:
    """Stock layout: country, company, category, year, month, sequence, checksum."""
    return SchemaRegistry.from_dicts(
        [
            {"id": "saudiCode", "value": "628", "length": 3, "name_en": "Country Code"},
            {"id": "companyCode", "value": "1057", "length": 4, "name_en": "Company Code"},
            {"id": "categoryNum", "length": 2, "name_en": "Category Code"},
            {"id": "internalBase", "length": 0, "enabled": False, "name_en": "Internal Base"},
            {"id": "year", "length": 2, "name_en": "Year"},
            {"id": "month", "length": 2, "name_en": "Month"},
            {"id": "sequence", "length": 4, "name_en": "Sequence"},
            {"id": "checksum", "length": 1, "fixed": True, "name_en": "Checksum"},
        ]
    )
