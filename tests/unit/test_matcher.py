"""Unit tests for catalog matching."""

from __future__ import annotations

import pytest

from skucodec.encoding.generator import generate_identity
from skucodec.matching.extractor import extract_code
from skucodec.matching.matcher import (
    CodeMatcher,
    codes_equal,
    filter_catalog,
    find_by_code,
    find_by_name,
    match,
)
from skucodec.models import (
    CatalogProduct,
    MatchMethod,
    MatchQuery,
    ProductAttributes,
    QuerySource,
)


class TestCodesEqual:
    def test_numeric_leading_zeros(self):
        assert codes_equal("456", "00456")
        assert codes_equal("0", "000")

    def test_alphanumeric_exact(self):
        assert codes_equal("boxmixbbrn", "boxmixbbrn")
        assert not codes_equal("a1", "a01")

    def test_empty_never_equal(self):
        assert not codes_equal("", "")


class TestLookups:
    def test_find_by_code(self, catalog):
        assert find_by_code("٠٠٤٥٦", catalog).id == "p-2"
        assert find_by_code("box-mixb-brn", catalog).id == "p-3"
        assert find_by_code("999", catalog) is None
        assert find_by_code("", catalog) is None

    def test_find_by_name_is_bidirectional(self, catalog):
        assert find_by_name("paper cup", catalog).id == "p-2"
        assert find_by_name("the hanoverian paper cup 12oz sleeve", catalog).id == "p-2"

    def test_empty_names_never_match(self):
        catalog = [CatalogProduct(id="blank", code="1", name="")]
        assert find_by_name("anything", catalog) is None
        assert find_by_name("", catalog) is None

    def test_filter_catalog(self, catalog):
        assert [p.id for p in filter_catalog(catalog, "MIX")] == ["p-1", "p-3"]
        assert len(filter_catalog(catalog, "")) == len(catalog)


class TestCodeMatcher:
    """Test the code, hint, name lookup order."""

    def test_filename_code_match(self, catalog):
        result = match(
            MatchQuery(raw_text="IMG_00123_final.jpg", source=QuerySource.FILENAME), catalog
        )

        assert result.matched_product_id == "p-1"
        assert result.method is MatchMethod.CODE
        assert result.code == "123"

    def test_leading_zeros_on_catalog_side(self, catalog):
        result = match("456", catalog)
        assert result.matched_product_id == "p-2"
        assert result.method is MatchMethod.CODE

    def test_first_match_in_catalog_order_wins(self, catalog):
        result = match("0123", catalog)
        assert result.matched_product_id == "p-1"

    def test_name_match_after_code_miss(self, catalog):
        result = match("Hanoverian Paper Cup 12oz", catalog)

        assert result.matched_product_id == "p-2"
        assert result.method is MatchMethod.NAME
        assert result.code == "12"

    def test_arabic_name_with_tashkeel(self, catalog):
        result = match("عُلْبَة ميكس براند", catalog)

        assert result.matched_product_id == "p-3"
        assert result.method is MatchMethod.NAME
        assert result.code is None

    def test_no_match_reports_candidate_code(self, catalog):
        result = match("zzz", catalog)

        assert result.method is MatchMethod.NONE
        assert result.matched_product_id is None
        assert "zzz" in result.reason

    def test_no_match_without_code(self, catalog):
        result = match("؟؟", catalog)

        assert result.method is MatchMethod.NONE
        assert result.reason == "no code or name match"

    def test_empty_catalog(self):
        assert match("123", []).method is MatchMethod.NONE

    def test_none_catalog_rejected(self):
        with pytest.raises(TypeError):
            match("123", None)

    def test_name_hints(self, catalog):
        matcher = CodeMatcher(name_hints={"00789": "Hanoverian Paper Cup"})
        result = matcher.match(MatchQuery(raw_text="789"), catalog)

        assert result.matched_product_id == "p-2"
        assert result.method is MatchMethod.NAME

    def test_catalog_is_not_modified(self, catalog):
        before = [p.model_copy() for p in catalog]
        match("IMG_00123_final.jpg", catalog, source=QuerySource.FILENAME)
        assert catalog == before

    def test_generated_barcode_round_trip(self, dictionary, fixed_now):
        identity = generate_identity(
            ProductAttributes(category="BOX", brand="MIXB", color="BRN", sequence="0456"),
            dictionary,
            now=fixed_now,
        )
        catalog = [
            CatalogProduct(id="other", code="1", name="Other"),
            CatalogProduct(id="generated", code=identity.barcode, name=identity.name_english),
        ]

        assert extract_code(identity.barcode) == identity.barcode
        result = match(identity.barcode, catalog)
        assert result.matched_product_id == "generated"
        assert result.method is MatchMethod.CODE
