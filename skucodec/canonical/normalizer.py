"""Text and code canonicalization for matching.

Free-form input (manual entry, OCR output, filenames, scanner output) is
reduced to a comparable normal form before any catalog comparison.

Normalization rules:
- Text: Unicode NFKD, combining marks removed (Arabic tashkeel, Latin accents),
  lowercase, Arabic-Indic digits mapped to ASCII, ``_``/``-`` runs to a space,
  whitespace collapsed
- Code: normalized text with whitespace removed, restricted to ``[a-z0-9-_.]``,
  leading zeros stripped from purely numeric codes
"""

from __future__ import annotations

import re
import unicodedata

# U+0660..U+0669 (Arabic-Indic) and U+06F0..U+06F9 (Extended Arabic-Indic)
_ARABIC_DIGITS = str.maketrans(
    "٠١٢٣٤٥٦٧٨٩۰۱۲۳۴۵۶۷۸۹",
    "01234567890123456789",
)

_SEPARATOR_RE = re.compile(r"[_\-]+")
_WHITESPACE_RE = re.compile(r"\s+")
_CODE_DISALLOWED_RE = re.compile(r"[^a-z0-9\-_.]")
_NUMERIC_RE = re.compile(r"^[0-9]+$")


def strip_marks(text: str) -> str:
    """Decompose ``text`` (NFKD) and drop every combining mark."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))


def normalize_text(text: str | None) -> str:
    """Normalize text to canonical form.

    Args:
        text: Input string (``None`` is treated as empty)

    Returns:
        Normalized string (mark-free, lowercase, ASCII digits, single spaces)
    """
    if not text:
        return ""

    # Unicode NFKD decomposition, then drop diacritics
    text = strip_marks(str(text))

    # Lowercase
    text = text.lower()

    # Arabic-Indic digits have no compatibility decomposition, map explicitly
    text = text.translate(_ARABIC_DIGITS)

    # Replace separator runs with a single space
    text = _SEPARATOR_RE.sub(" ", text)

    # Collapse multiple spaces
    text = _WHITESPACE_RE.sub(" ", text)

    return text.strip()


def is_numeric_code(code: str | None) -> bool:
    """Return True when ``code`` is a non-empty run of ASCII digits."""
    return bool(code) and _NUMERIC_RE.match(code) is not None


def normalize_code(code: str | None) -> str:
    """Normalize a product code for equality comparison.

    ``"007"``, ``"7"`` and ``"٠٠٧"`` all canonicalize to ``"7"``.

    Args:
        code: Raw code string

    Returns:
        Canonical code (possibly empty)
    """
    normalized = normalize_text(code)
    normalized = _WHITESPACE_RE.sub("", normalized)
    normalized = _CODE_DISALLOWED_RE.sub("", normalized)

    if is_numeric_code(normalized):
        return normalized.lstrip("0") or "0"

    return normalized
