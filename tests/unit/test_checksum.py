"""Unit tests for the alternating-weight check digit."""

from __future__ import annotations

import pytest

from skucodec.canonical.checksum import InvalidInputError, checksum, verify_check_digit


class TestChecksum:
    """Test check digit computation."""

    @pytest.mark.parametrize(
        "payload,expected",
        [
            ("400638133393", "1"),
            ("590123412345", "7"),
            ("62810570125030456", "5"),
            ("0", "0"),
            ("5", "5"),
        ],
    )
    def test_known_values(self, payload, expected):
        assert checksum(payload) == expected

    def test_empty_payload_is_zero(self):
        assert checksum("") == "0"

    def test_returns_single_digit_string(self):
        digit = checksum("98765432109876543210")
        assert len(digit) == 1
        assert digit.isdigit()

    def test_detects_every_single_digit_substitution(self):
        """Changing any one payload digit changes the check digit."""
        for payload in ("62810570125030456", "400638133393", "0000000"):
            baseline = checksum(payload)
            for position, digit in enumerate(payload):
                for replacement in "0123456789":
                    if replacement == digit:
                        continue
                    mutated = payload[:position] + replacement + payload[position + 1 :]
                    assert checksum(mutated) != baseline, (payload, position, replacement)

    @pytest.mark.parametrize("payload", ["12a4", " 123", "١٢٣", "12.3", "-1"])
    def test_rejects_non_digits(self, payload):
        with pytest.raises(InvalidInputError):
            checksum(payload)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            checksum("x")


class TestVerifyCheckDigit:
    """Test full-code verification."""

    def test_valid_codes(self):
        assert verify_check_digit("4006381333931")
        assert verify_check_digit("628105701250304565")

    def test_wrong_check_digit(self):
        assert not verify_check_digit("4006381333932")

    def test_too_short(self):
        assert not verify_check_digit("")
        assert not verify_check_digit("7")

    def test_rejects_non_digits(self):
        with pytest.raises(InvalidInputError):
            verify_check_digit("40063813339X")
