"""Unit tests for the barcode schema registry."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from skucodec.encoding.schema import (
    DuplicateIdError,
    LengthOverflowError,
    SchemaError,
    SchemaRegistry,
    default_schema,
)
from skucodec.models import CodeSchemaElement


class TestSchemaRegistry:
    """Test ordering, lengths and validation."""

    def test_default_schema_layout(self):
        schema = default_schema()

        assert [e.id for e in schema.payload_elements()] == [
            "saudiCode",
            "companyCode",
            "categoryNum",
            "year",
            "month",
            "sequence",
        ]
        assert [e.id for e in schema.fixed_elements()] == ["checksum"]
        assert schema.payload_length == 17
        assert schema.total_length == 18

    def test_sorted_by_order_index(self):
        schema = SchemaRegistry(
            [
                CodeSchemaElement(id="b", length=1, order_index=2),
                CodeSchemaElement(id="a", length=1, order_index=1),
            ]
        )
        assert [e.id for e in schema] == ["a", "b"]

    def test_equal_order_index_keeps_declaration_order(self):
        schema = SchemaRegistry(
            [CodeSchemaElement(id=name, length=1) for name in ("x", "y", "z")]
        )
        assert [e.id for e in schema] == ["x", "y", "z"]

    def test_from_dicts_uses_position_as_default_order(self):
        schema = SchemaRegistry.from_dicts(
            [{"id": "first", "length": 1}, {"id": "second", "length": 1, "order_index": -1}]
        )
        assert [e.id for e in schema] == ["second", "first"]

    def test_disabled_elements_excluded_from_lengths(self):
        schema = SchemaRegistry.from_dicts(
            [
                {"id": "a", "length": 3},
                {"id": "b", "length": 5, "enabled": False},
                {"id": "checksum", "length": 1, "fixed": True},
            ]
        )
        assert schema.payload_length == 3
        assert schema.total_length == 4
        assert len(schema) == 3

    def test_get(self):
        schema = default_schema()
        assert schema.get("sequence").length == 4
        assert schema.get("missing") is None

    def test_duplicate_ids_rejected(self):
        schema = SchemaRegistry.from_dicts([{"id": "a", "length": 1}, {"id": "a", "length": 2}])

        with pytest.raises(DuplicateIdError) as exc_info:
            schema.validate()

        assert exc_info.value.element_id == "a"

    def test_static_value_longer_than_length_rejected(self):
        schema = SchemaRegistry.from_dicts([{"id": "company", "value": "12345", "length": 3}])

        with pytest.raises(LengthOverflowError) as exc_info:
            schema.validate()

        assert exc_info.value.element_id == "company"
        assert exc_info.value.length == 3

    def test_resolved_values_checked(self):
        with pytest.raises(LengthOverflowError):
            default_schema().validate({"sequence": "12345"})

        default_schema().validate({"sequence": "1234"})

    def test_disabled_elements_not_checked(self):
        schema = SchemaRegistry.from_dicts(
            [{"id": "unused", "value": "999", "length": 1, "enabled": False}]
        )
        schema.validate()

    def test_errors_are_value_errors(self):
        assert issubclass(DuplicateIdError, SchemaError)
        assert issubclass(LengthOverflowError, SchemaError)
        assert issubclass(SchemaError, ValueError)


class TestCodeSchemaElement:
    def test_length_bounds(self):
        with pytest.raises(ValidationError):
            CodeSchemaElement(id="big", length=256)
        with pytest.raises(ValidationError):
            CodeSchemaElement(id="neg", length=-1)

    def test_dynamic_when_no_static_value(self):
        assert CodeSchemaElement(id="year", length=2).is_dynamic
        assert not CodeSchemaElement(id="saudiCode", value="628", length=3).is_dynamic
