"""Free-text to catalog matching: code extraction, lookup and scan tallies."""

from skucodec.matching.extractor import extract_code, extract_code_from_filename
from skucodec.matching.matcher import CodeMatcher, filter_catalog, match
from skucodec.matching.verification import LineStatus, VerificationTally

__all__ = [
    "CodeMatcher",
    "LineStatus",
    "VerificationTally",
    "extract_code",
    "extract_code_from_filename",
    "filter_catalog",
    "match",
]
