"""Canonical forms: text/code normalization and check digits."""

from skucodec.canonical.checksum import InvalidInputError, checksum, verify_check_digit
from skucodec.canonical.normalizer import is_numeric_code, normalize_code, normalize_text

__all__ = [
    "InvalidInputError",
    "checksum",
    "is_numeric_code",
    "normalize_code",
    "normalize_text",
    "verify_check_digit",
]
