"""YAML loaders for generation configuration.

Loads the three configuration documents the generator needs:

- dictionary: per-domain code tables (``categories``, ``brands``, ...). Each
  domain is either a mapping ``CODE: {numeric, ar, en}`` or a list of
  ``{code, ar, en}`` rows. JSON documents load too, since YAML is a superset.
  Numeric codes must be strings (quoted in YAML).
- barcode schema: list of elements (``elements:`` key or top-level list)
- naming order: ``arabic`` / ``english`` lists of field names or
  ``{field, enabled}`` mappings
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skucodec.encoding.naming import NamingField, NamingOrder
from skucodec.encoding.schema import SchemaError, SchemaRegistry
from skucodec.models import CatalogDictionary, DictionaryEntry, Domain

logger = logging.getLogger(__name__)

_NUMERIC_KEYS = ("numeric", "numeric_code", "numericCode")
_ARABIC_KEYS = ("ar", "label_ar", "labelAr")
_ENGLISH_KEYS = ("en", "label_en", "labelEn")
_SCHEMA_KEY_ALIASES = {
    "orderIndex": "order_index",
    "nameEn": "name_en",
    "nameAr": "name_ar",
}


class ConfigurationError(Exception):
    """Configuration file is invalid or missing."""

    pass


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


def _first(row: dict[str, Any], keys: tuple[str, ...], default: Any = None) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default


def _entry(domain: Domain, code: str, row: dict[str, Any]) -> DictionaryEntry:
    numeric = _first(row, _NUMERIC_KEYS)
    # Bare YAML numbers lose leading zeros (01 -> 1) or read as octal (010 -> 8)
    if numeric is not None and not isinstance(numeric, str):
        raise ConfigurationError(
            f"{domain.value}/{code}: numeric code must be a quoted string, "
            f"got {type(numeric).__name__} {numeric!r}"
        )
    try:
        return DictionaryEntry(
            code=str(code),
            numeric_code=numeric,
            label_ar=str(_first(row, _ARABIC_KEYS, "")),
            label_en=str(_first(row, _ENGLISH_KEYS, "")),
        )
    except ValidationError as e:
        raise ConfigurationError(f"{domain.value}/{code}: {e}") from e


def parse_dictionary(data: dict[str, Any]) -> CatalogDictionary:
    """Build a ``CatalogDictionary`` from an already-parsed document.

    Raises:
        ConfigurationError: If a domain has the wrong shape or codes collide
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected mapping of domains, got {type(data).__name__}")

    tables: dict[str, dict[str, DictionaryEntry]] = {}
    for domain in Domain:
        raw = data.get(domain.value)
        if raw is None:
            continue

        table: dict[str, DictionaryEntry] = {}
        if isinstance(raw, dict):
            for code, row in raw.items():
                if not isinstance(row, dict):
                    raise ConfigurationError(f"{domain.value}/{code}: expected mapping")
                table[str(code)] = _entry(domain, code, row)
        elif isinstance(raw, list):
            for idx, row in enumerate(raw):
                if not isinstance(row, dict) or not row.get("code"):
                    logger.warning(f"Skipping {domain.value} row {idx}: missing 'code'")
                    continue
                code = str(row["code"])
                if code in table:
                    raise ConfigurationError(f"{domain.value}: duplicate code {code!r}")
                table[code] = _entry(domain, code, row)
        else:
            raise ConfigurationError(
                f"{domain.value}: expected mapping or list, got {type(raw).__name__}"
            )
        tables[domain.value] = table

    try:
        return CatalogDictionary(**tables)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid dictionary: {e}") from e


def load_dictionary(path: Path) -> CatalogDictionary:
    dictionary = parse_dictionary(_read_yaml(path))
    logger.info(
        f"Loaded dictionary from {path}: "
        + ", ".join(f"{d.value}={len(dictionary.table(d))}" for d in Domain)
    )
    return dictionary


def load_schema(path: Path) -> SchemaRegistry:
    """Load and validate a barcode schema.

    Raises:
        ConfigurationError: If the file is missing, malformed, or inconsistent
    """
    data = _read_yaml(path)
    rows = data.get("elements") if isinstance(data, dict) else data
    if not isinstance(rows, list):
        raise ConfigurationError(f"Expected list of schema elements in {path}")

    normalized_rows = []
    for row in rows:
        if not isinstance(row, dict):
            raise ConfigurationError(f"Schema element must be a mapping, got {row!r}")
        normalized = {_SCHEMA_KEY_ALIASES.get(k, k): v for k, v in row.items()}
        if normalized.get("value") is None:
            normalized["value"] = ""
        normalized["value"] = str(normalized["value"])
        normalized_rows.append(normalized)

    try:
        schema = SchemaRegistry.from_dicts(normalized_rows)
        schema.validate()
    except (ValidationError, SchemaError) as e:
        raise ConfigurationError(f"Invalid barcode schema in {path}: {e}") from e

    logger.info(f"Loaded barcode schema from {path}: {schema.total_length} digits")
    return schema


def _naming_fields(rows: Any, language: str) -> list[NamingField]:
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise ConfigurationError(f"naming order '{language}' must be a list")

    fields = []
    for row in rows:
        if isinstance(row, str):
            fields.append(NamingField(field=row))
        elif isinstance(row, dict):
            fields.append(
                NamingField(
                    field=row.get("field") or row.get("value") or row.get("id"),
                    enabled=row.get("enabled", True),
                )
            )
        else:
            raise ConfigurationError(f"Invalid naming field {row!r}")
    return fields


def load_naming_order(path: Path) -> NamingOrder:
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected mapping with 'arabic'/'english' in {path}")

    try:
        return NamingOrder(
            arabic=_naming_fields(data.get("arabic"), "arabic"),
            english=_naming_fields(data.get("english"), "english"),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid naming order in {path}: {e}") from e
