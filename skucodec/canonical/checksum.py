"""Alternating-weight modulo-10 check digit.

Same structure as GTIN/EAN check digits: digits at even (0-based) positions
weigh 1, odd positions weigh 3, and the check digit brings the weighted sum to
a multiple of ten. Error-detecting only: any single-digit substitution in the
payload changes the result.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Payload contains something other than ASCII digits."""

    pass


def _require_digits(payload: str) -> None:
    if not isinstance(payload, str):
        raise InvalidInputError(f"Expected str payload, got {type(payload).__name__}")
    if payload and not (payload.isascii() and payload.isdigit()):
        raise InvalidInputError(f"Checksum payload must be digits only: {payload!r}")


def checksum(payload: str) -> str:
    """Compute the check digit for an all-digit payload.

    Args:
        payload: ASCII digit string (may be empty)

    Returns:
        Single check digit as a one-character string

    Raises:
        InvalidInputError: If payload contains non-digit characters
    """
    _require_digits(payload)

    total = sum(int(digit) * (1 if i % 2 == 0 else 3) for i, digit in enumerate(payload))
    return str((10 - total % 10) % 10)


def verify_check_digit(code: str) -> bool:
    """Return True when the last digit of ``code`` is the check digit of the rest.

    Raises:
        InvalidInputError: If code contains non-digit characters
    """
    _require_digits(code)
    if len(code) < 2:
        return False
    return checksum(code[:-1]) == code[-1]
