"""Catalog lookup by code, then by name.

Lookup order:
1. Code: the extracted candidate equals a product's normalized code, or both
   are purely numeric and equal as integers (leading zeros ignored)
2. Name hints (optional): candidate code mapped to a product name by a
   ``code,name`` sheet, compared by normalized equality
3. Name: normalized query text and product name contain one another
4. No match, with a human-readable reason

First match in catalog order wins; there is no scoring across several
plausible entries. The matcher holds no per-call state and can be shared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from skucodec.canonical.normalizer import is_numeric_code, normalize_code, normalize_text
from skucodec.matching.extractor import extract_code, strip_extension
from skucodec.models import CatalogProduct, MatchMethod, MatchQuery, MatchResult, QuerySource

logger = logging.getLogger(__name__)


def codes_equal(candidate: str, product_code: str) -> bool:
    """Compare two canonical codes, numerically when both are digit strings."""
    if not candidate or not product_code:
        return False
    if candidate == product_code:
        return True
    if is_numeric_code(candidate) and is_numeric_code(product_code):
        # Integer equality on digit strings of any length
        return (candidate.lstrip("0") or "0") == (product_code.lstrip("0") or "0")
    return False


def find_by_code(code: str | None, catalog: Iterable[CatalogProduct]) -> CatalogProduct | None:
    candidate = normalize_code(code)
    if not candidate:
        return None
    for product in catalog:
        if codes_equal(candidate, normalize_code(product.code)):
            return product
    return None


def find_by_name(text: str | None, catalog: Iterable[CatalogProduct]) -> CatalogProduct | None:
    """Bidirectional substring match on normalized names. Empty names never match."""
    needle = normalize_text(text)
    if not needle:
        return None
    for product in catalog:
        name = normalize_text(product.name)
        if name and (needle in name or name in needle):
            return product
    return None


def find_by_exact_name(name: str | None, catalog: Iterable[CatalogProduct]) -> CatalogProduct | None:
    target = normalize_text(name)
    if not target:
        return None
    for product in catalog:
        if normalize_text(product.name) == target:
            return product
    return None


def filter_catalog(catalog: Iterable[CatalogProduct], text: str | None) -> list[CatalogProduct]:
    """Narrow a catalog to products whose normalized name or code contains ``text``."""
    needle = normalize_text(text)
    if not needle:
        return list(catalog)
    return [
        p
        for p in catalog
        if needle in normalize_text(p.name) or needle in normalize_text(p.code)
    ]


class CodeMatcher:
    """Resolve free-form input to a catalog entry."""

    def __init__(self, name_hints: Mapping[str, str] | None = None):
        """Initialize matcher.

        Args:
            name_hints: Optional ``canonical code -> product name`` mapping
                consulted when the code step fails
        """
        self.name_hints = {normalize_code(k): v for k, v in (name_hints or {}).items()}

    def match(self, query: MatchQuery, catalog: Sequence[CatalogProduct]) -> MatchResult:
        """Match one query against ``catalog``.

        Raises:
            TypeError: If catalog is None
        """
        if catalog is None:
            raise TypeError("catalog is required (pass an empty list for an empty catalog)")

        if query.source is QuerySource.FILENAME:
            text = strip_extension(query.raw_text)
        else:
            text = query.raw_text
        code = extract_code(text)

        if code:
            product = find_by_code(code, catalog)
            if product:
                return MatchResult(matched_product_id=product.id, method=MatchMethod.CODE, code=code)

            hinted_name = self.name_hints.get(code)
            if hinted_name:
                product = find_by_exact_name(hinted_name, catalog)
                if product:
                    logger.debug(f"Code {code} resolved through name hint {hinted_name!r}")
                    return MatchResult(
                        matched_product_id=product.id, method=MatchMethod.NAME, code=code
                    )

        product = find_by_name(text, catalog)
        if product:
            return MatchResult(matched_product_id=product.id, method=MatchMethod.NAME, code=code)

        if code:
            reason = f"no catalog entry with code {code!r}"
        else:
            reason = "no code or name match"
        return MatchResult(method=MatchMethod.NONE, reason=reason, code=code)


def match(
    query: MatchQuery | str,
    catalog: Sequence[CatalogProduct],
    source: QuerySource = QuerySource.MANUAL,
) -> MatchResult:
    """Match raw text (or a ``MatchQuery``) against a catalog without name hints."""
    if isinstance(query, str):
        query = MatchQuery(raw_text=query, source=source)
    return CodeMatcher().match(query, catalog)
