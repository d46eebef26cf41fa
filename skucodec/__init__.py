"""skucodec - product identity codec.

Composes internal codes, check-digit barcodes and bilingual names from a
configurable schema, and matches free-form input back to catalog products.
"""

__version__ = "0.1.0"
