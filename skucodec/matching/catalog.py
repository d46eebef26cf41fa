"""CSV readers for catalogs and code-to-name hint sheets."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from skucodec.canonical.normalizer import normalize_code
from skucodec.models import CatalogProduct

logger = logging.getLogger(__name__)


def load_catalog(csv_path: Path) -> list[CatalogProduct]:
    """Read a catalog CSV with ``id``, ``code`` and ``name`` columns.

    ``id`` defaults to ``code`` when the column is absent or blank. Rows with
    neither code nor name are skipped.

    Raises:
        FileNotFoundError: If csv_path does not exist
    """
    products: list[CatalogProduct] = []
    with csv_path.open(encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            code = (row.get("code") or "").strip()
            name = (row.get("name") or "").strip()
            if not code and not name:
                logger.warning(f"Skipping catalog row {line_no}: no code or name")
                continue
            product_id = (row.get("id") or "").strip() or code or name
            products.append(CatalogProduct(id=product_id, code=code, name=name))

    logger.info(f"Loaded {len(products)} catalog products from {csv_path}")
    return products


def load_name_hints(csv_path: Path) -> dict[str, str]:
    """Read a ``code,name`` sheet into a ``canonical code -> name`` mapping.

    A first line mentioning ``code`` is treated as a header.
    """
    hints: dict[str, str] = {}
    with csv_path.open(encoding="utf-8-sig", newline="") as f:
        rows = [row for row in csv.reader(f) if row]

    if rows and any("code" in cell.lower() for cell in rows[0]):
        rows = rows[1:]

    for row in rows:
        code = normalize_code(row[0])
        name = row[1].strip() if len(row) > 1 else ""
        if code and name:
            hints[code] = name
    return hints
