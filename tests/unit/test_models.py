"""Unit tests for skucodec Pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from skucodec.models import (
    CatalogDictionary,
    DictionaryEntry,
    Domain,
    GeneratedIdentity,
    Language,
    MatchMethod,
    MatchResult,
    ProductAttributes,
)


class TestDictionaryEntry:
    def test_blank_numeric_code_is_none(self):
        assert DictionaryEntry(code="PCS", numeric_code="").numeric_code is None

    @pytest.mark.parametrize("numeric", ["1a", "٠١", " 01"])
    def test_numeric_code_must_be_ascii_digits(self, numeric):
        with pytest.raises(ValidationError):
            DictionaryEntry(code="X", numeric_code=numeric)

    def test_label_by_language(self):
        entry = DictionaryEntry(code="BRN", label_ar="بني", label_en="Brown")
        assert entry.label(Language.ARABIC) == "بني"
        assert entry.label(Language.ENGLISH) == "Brown"


class TestCatalogDictionary:
    """Test lookups and consistency checks."""

    def test_lookup_miss_returns_none(self, dictionary):
        assert dictionary.lookup(Domain.BRANDS, "NOPE") is None
        assert dictionary.lookup(Domain.BRANDS, None) is None
        assert dictionary.numeric_code(Domain.BRANDS, "NOPE") is None

    def test_label_or_code(self, dictionary):
        assert dictionary.label_or_code(Domain.COLORS, "BRN", Language.ENGLISH) == "Brown"
        assert dictionary.label_or_code(Domain.COLORS, "ZZZ", Language.ENGLISH) == "ZZZ"
        assert dictionary.label_or_code(Domain.UNITS, "pcs", Language.ARABIC) == "pcs"

    def test_empty_label_counts_as_untranslated(self):
        dictionary = CatalogDictionary(
            colors={"BRN": DictionaryEntry(code="BRN", numeric_code="01", label_en="Brown")}
        )
        assert dictionary.label(Domain.COLORS, "BRN", Language.ARABIC) is None
        assert dictionary.label_or_code(Domain.COLORS, "BRN", Language.ARABIC) == "BRN"

    def test_key_must_match_entry_code(self):
        with pytest.raises(ValidationError):
            CatalogDictionary(brands={"MIXB": DictionaryEntry(code="OTHER")})

    @pytest.mark.parametrize("first,second", [("01", "1"), ("7", "007"), ("0", "00")])
    def test_numeric_codes_collide_after_zero_padding(self, first, second):
        """Codes equal once zero-padded would encode identical barcode digits."""
        with pytest.raises(ValidationError, match="collides"):
            CatalogDictionary(
                colors={
                    "RED": DictionaryEntry(code="RED", numeric_code=first),
                    "BLU": DictionaryEntry(code="BLU", numeric_code=second),
                }
            )

    def test_padding_collision_is_value_error(self):
        with pytest.raises(ValueError):
            CatalogDictionary(
                colors={
                    "RED": DictionaryEntry(code="RED", numeric_code="01"),
                    "BLU": DictionaryEntry(code="BLU", numeric_code="1"),
                }
            )

    def test_numeric_codes_unique_per_domain(self):
        with pytest.raises(ValidationError):
            CatalogDictionary(
                colors={
                    "BRN": DictionaryEntry(code="BRN", numeric_code="01"),
                    "RED": DictionaryEntry(code="RED", numeric_code="01"),
                }
            )


class TestProductAttributes:
    def test_blank_optionals_become_none(self):
        attrs = ProductAttributes(
            category="BOX", brand="MIXB", color="BRN", collection=" ", sequence="", unit=""
        )
        assert attrs.collection is None
        assert attrs.sequence is None
        assert attrs.unit is None

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            ProductAttributes(category="BOX", brand="MIXB")


class TestGeneratedIdentity:
    @pytest.fixture
    def identity(self) -> GeneratedIdentity:
        return GeneratedIdentity(
            internal_code="BOX-MIXB-BRN-25-0456",
            barcode="628105701250304565",
            name_arabic="علبة ميكس براند بني 36pcs",
            name_english="Mix Brand Box Brown 36pcs",
            breakdown={"saudiCode": "628", "checksum": "5"},
        )

    def test_breakdown_is_read_only(self, identity):
        with pytest.raises(TypeError):
            identity.breakdown["checksum"] = "0"
        assert identity.breakdown["checksum"] == "5"

    def test_breakdown_source_mapping_is_copied(self):
        source = {"checksum": "5"}
        identity = GeneratedIdentity(
            internal_code="X", barcode="5", name_arabic="", name_english="", breakdown=source
        )
        source["checksum"] = "0"
        assert identity.breakdown["checksum"] == "5"

    def test_breakdown_order_and_serialization(self, identity):
        assert list(identity.breakdown) == ["saudiCode", "checksum"]

        dumped = identity.model_dump()
        assert dumped["breakdown"] == {"saudiCode": "628", "checksum": "5"}
        assert "breakdown_items" not in dumped
        assert '"breakdown":{"saudiCode":"628","checksum":"5"}' in identity.model_dump_json()

    def test_barcode_must_be_digits(self):
        with pytest.raises(ValidationError):
            GeneratedIdentity(
                internal_code="BOX-MIXB-BRN-25-0456",
                barcode="62810A",
                name_arabic="",
                name_english="",
            )


class TestMatchResult:
    def test_default_is_no_match(self):
        result = MatchResult()
        assert result.method is MatchMethod.NONE
        assert not result.matched

    def test_matched(self):
        assert MatchResult(matched_product_id="p-1", method=MatchMethod.CODE).matched
