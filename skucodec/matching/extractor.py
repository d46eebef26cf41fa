"""Candidate code extraction from free text.

Used for manual entry, OCR output and filenames alike. The first digit run
wins (so ``IMG_00123_final.jpg`` yields ``123``); otherwise the first
alphanumeric token with optional inner ``-``/``_``/``.`` separators.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from skucodec.canonical.normalizer import normalize_code, normalize_text

_WHITESPACE_RE = re.compile(r"\s+")
_DIGIT_RUN_RE = re.compile(r"[0-9]+")
_TOKEN_RE = re.compile(r"[a-z0-9]+[\-_.]*[a-z0-9]+")
_EXTENSION_RE = re.compile(r"\.[^.]+$")


def extract_code(text: str | None) -> str | None:
    """Extract a canonical candidate code from ``text``.

    Returns:
        Canonical code (see ``normalize_code``) or None when nothing code-like
        is present
    """
    cleaned = _WHITESPACE_RE.sub("", normalize_text(text))
    if not cleaned:
        return None

    digits = _DIGIT_RUN_RE.search(cleaned)
    if digits:
        return normalize_code(digits.group(0))

    token = _TOKEN_RE.search(cleaned)
    if token:
        return normalize_code(token.group(0)) or None

    return None


def strip_extension(filename: str) -> str:
    """Drop directory components and the final extension of a filename."""
    return _EXTENSION_RE.sub("", PurePath(filename).name)


def extract_code_from_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    return extract_code(strip_extension(filename))
