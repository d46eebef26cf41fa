"""Identity encoding: barcode schema, code composition and naming."""

from skucodec.encoding.composer import (
    BarcodeComposition,
    compose_barcode,
    compose_internal_code,
    default_sequence,
)
from skucodec.encoding.generator import IdentityGenerator, generate_identity
from skucodec.encoding.loader import ConfigurationError
from skucodec.encoding.naming import NamingOrder, NameVariant, compose_names, variant_for
from skucodec.encoding.schema import (
    DuplicateIdError,
    LengthOverflowError,
    SchemaError,
    SchemaRegistry,
    default_schema,
)

__all__ = [
    "BarcodeComposition",
    "ConfigurationError",
    "DuplicateIdError",
    "IdentityGenerator",
    "LengthOverflowError",
    "NameVariant",
    "NamingOrder",
    "SchemaError",
    "SchemaRegistry",
    "compose_barcode",
    "compose_internal_code",
    "compose_names",
    "default_schema",
    "default_sequence",
    "generate_identity",
    "variant_for",
]
