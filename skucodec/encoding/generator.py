"""Identity generation: internal code + barcode + bilingual names.

``IdentityGenerator`` bundles the dictionary, barcode schema and naming order
so callers configure once and generate many identities. It holds no mutable
state: every call is determined by its attributes and the ``now`` it is given.
"""

from __future__ import annotations

import logging
from datetime import datetime

from skucodec.config import AppConfig, get_config
from skucodec.encoding.composer import compose_barcode, compose_internal_code
from skucodec.encoding.loader import load_dictionary, load_naming_order, load_schema
from skucodec.encoding.naming import NamingOrder, compose_names, default_naming_order
from skucodec.encoding.schema import SchemaRegistry, default_schema
from skucodec.models import CatalogDictionary, GeneratedIdentity, ProductAttributes

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 1000
DEFAULT_SEQUENCE_WIDTH = 4


def generate_identity(
    attrs: ProductAttributes,
    dictionary: CatalogDictionary,
    schema: SchemaRegistry | None = None,
    naming_order: NamingOrder | None = None,
    now: datetime | None = None,
) -> GeneratedIdentity:
    """Generate the full identity for one product.

    Args:
        attrs: Product attribute codes (``sequence`` optional)
        dictionary: Domain code tables
        schema: Barcode schema (stock layout when omitted)
        naming_order: Fallback naming order (stock order when omitted)
        now: Clock reading shared by internal code and barcode

    Raises:
        SchemaError: If a value cannot be encoded within its declared length
    """
    now = now or datetime.now()
    schema = schema or default_schema()

    internal_code = compose_internal_code(attrs, now)
    composition = compose_barcode(attrs, schema, dictionary, now)
    names = compose_names(attrs, dictionary, naming_order)

    logger.debug(f"Generated {internal_code} / {composition.barcode}")
    return GeneratedIdentity(
        internal_code=internal_code,
        barcode=composition.barcode,
        name_arabic=names.arabic,
        name_english=names.english,
        breakdown=composition.breakdown,
    )


class IdentityGenerator:
    """Configured identity generator."""

    def __init__(
        self,
        dictionary: CatalogDictionary,
        schema: SchemaRegistry | None = None,
        naming_order: NamingOrder | None = None,
    ):
        self.dictionary = dictionary
        self.schema = schema or default_schema()
        self.naming_order = naming_order or default_naming_order()
        self.schema.validate()

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> IdentityGenerator:
        """Load dictionary, schema and naming order from the configured YAML files.

        Raises:
            ConfigurationError: If a configuration file is missing or invalid
        """
        config = config or get_config()
        return cls(
            dictionary=load_dictionary(config.codec.dictionary_path),
            schema=load_schema(config.codec.schema_path),
            naming_order=load_naming_order(config.codec.naming_path),
        )

    def generate(self, attrs: ProductAttributes, now: datetime | None = None) -> GeneratedIdentity:
        return generate_identity(attrs, self.dictionary, self.schema, self.naming_order, now)

    def generate_batch(
        self,
        attrs: ProductAttributes,
        count: int,
        start: int = 1,
        now: datetime | None = None,
    ) -> list[GeneratedIdentity]:
        """Generate ``count`` identities for the same attributes.

        Each item gets an explicit sequence ``start, start+1, ...`` zero-padded
        to the schema's sequence width, so a batch never relies on the
        time-based default. Any sequence on ``attrs`` is ignored.

        Raises:
            ValueError: If count is outside 1..1000
            SchemaError: If a sequence no longer fits the sequence element
        """
        if not 1 <= count <= MAX_BATCH_SIZE:
            raise ValueError(f"count must be between 1 and {MAX_BATCH_SIZE}, got {count}")
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")

        now = now or datetime.now()
        sequence_element = self.schema.get("sequence")
        width = sequence_element.length if sequence_element else DEFAULT_SEQUENCE_WIDTH

        identities = []
        for offset in range(count):
            sequence = str(start + offset).zfill(width)
            item = attrs.model_copy(update={"sequence": sequence})
            identities.append(self.generate(item, now))

        logger.info(f"Generated batch of {len(identities)} identities for {attrs.category}-{attrs.brand}")
        return identities
