"""Scan-count tally for verifying an issued/received list of products.

The matcher is stateless; this tally is the caller-owned state of one
verification session. Each successful match increments its product's count,
and the operator can adjust counts by hand.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from skucodec.models import MatchResult


class LineStatus(str, Enum):
    MATCH = "match"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass(frozen=True)
class TallyLine:
    product_id: str
    expected: int
    scanned: int

    @property
    def status(self) -> LineStatus:
        if self.scanned < self.expected:
            return LineStatus.MISSING
        if self.scanned > self.expected:
            return LineStatus.EXTRA
        return LineStatus.MATCH


class VerificationTally:
    """Expected vs scanned quantities per product."""

    def __init__(self, expected: Mapping[str, int]):
        for product_id, qty in expected.items():
            if qty < 0:
                raise ValueError(f"Expected quantity for {product_id!r} must be >= 0, got {qty}")
        self._expected: dict[str, int] = dict(expected)
        self._scanned: dict[str, int] = {product_id: 0 for product_id in expected}

    def _require_known(self, product_id: str) -> None:
        if product_id not in self._expected:
            raise KeyError(f"Product {product_id!r} is not part of this verification")

    def record(self, result: MatchResult) -> bool:
        """Count a match result. Returns False for no-match or products not on the list."""
        if result.matched_product_id is None or result.matched_product_id not in self._expected:
            return False
        self._scanned[result.matched_product_id] += 1
        return True

    def increment(self, product_id: str) -> int:
        self._require_known(product_id)
        self._scanned[product_id] += 1
        return self._scanned[product_id]

    def decrement(self, product_id: str) -> int:
        """Decrease the count, never below zero."""
        self._require_known(product_id)
        self._scanned[product_id] = max(0, self._scanned[product_id] - 1)
        return self._scanned[product_id]

    def set_to_expected(self, product_id: str) -> int:
        self._require_known(product_id)
        self._scanned[product_id] = self._expected[product_id]
        return self._scanned[product_id]

    def reset(self) -> None:
        for product_id in self._scanned:
            self._scanned[product_id] = 0

    def scanned(self, product_id: str) -> int:
        self._require_known(product_id)
        return self._scanned[product_id]

    def status(self, product_id: str) -> LineStatus:
        self._require_known(product_id)
        return TallyLine(product_id, self._expected[product_id], self._scanned[product_id]).status

    def lines(self) -> list[TallyLine]:
        return [
            TallyLine(product_id, expected, self._scanned[product_id])
            for product_id, expected in self._expected.items()
        ]

    @property
    def total_expected(self) -> int:
        return sum(self._expected.values())

    @property
    def total_scanned(self) -> int:
        return sum(self._scanned.values())

    @property
    def remaining(self) -> int:
        return max(0, self.total_expected - self.total_scanned)

    @property
    def has_discrepancy(self) -> bool:
        return any(line.status is not LineStatus.MATCH for line in self.lines())

    @property
    def progress(self) -> int:
        """Scanned share of the expected total, as a percentage capped at 100."""
        total = self.total_expected
        if total == 0:
            return 100
        return min(100, round(self.total_scanned / total * 100))
