"""Bulk image tagging: match many image files to catalog products.

OCR is an injected async callable (``path -> text``); this module never does
OCR itself. OCR calls run under a semaphore (bounded concurrency) with a
per-item timeout. A failed or timed-out OCR call degrades that item to the
filename-based lookup and the batch carries on.

Usage:
    tagger = BulkTagger(catalog, ocr=my_ocr)
    report = await tagger.tag(paths)
    print(report.stats["matched"], "of", report.stats["attempted"])
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skucodec.config import get_config
from skucodec.matching.matcher import CodeMatcher
from skucodec.models import CatalogProduct, MatchMethod, MatchQuery, MatchResult, QuerySource

logger = logging.getLogger(__name__)

OcrProvider = Callable[[Path], Awaitable[str | None]]


@dataclass
class TagOutcome:
    """Per-file outcome.

    Attributes:
        path: Image file
        result: Match result for the file
        code_source: "ocr" or "filename" for code matches, None otherwise
        ocr_error: Why OCR produced nothing usable, if it failed
        unsupported: File type is not an accepted image format
    """

    path: Path
    result: MatchResult
    code_source: str | None = None
    ocr_error: str | None = None
    unsupported: bool = False


@dataclass
class BulkTagReport:
    outcomes: list[TagOutcome] = field(default_factory=list)
    stats: dict[str, Any] = field(
        default_factory=lambda: {
            "attempted": 0,
            "matched": 0,
            "matched_by_code": 0,
            "matched_by_name": 0,
            "unmatched": 0,
            "unsupported": 0,
            "ocr_failures": 0,
        }
    )


class BulkTagger:
    """Matches image files to products using OCR text, then the filename."""

    def __init__(
        self,
        catalog: Sequence[CatalogProduct],
        ocr: OcrProvider | None = None,
        matcher: CodeMatcher | None = None,
        concurrency: int | None = None,
        timeout_seconds: float | None = None,
        supported_extensions: Iterable[str] | None = None,
    ):
        """Initialize tagger.

        Args:
            catalog: Products to match against (read-only)
            ocr: Async OCR callable; filename-only matching when omitted
            matcher: Matcher to use (plain ``CodeMatcher`` by default)
            concurrency: Max concurrent OCR calls (config default: 3)
            timeout_seconds: Per-item OCR timeout (config default: 30)
            supported_extensions: Image suffixes to accept (config default)
        """
        if catalog is None:
            raise TypeError("catalog is required")

        settings = get_config().matching
        self.catalog = list(catalog)
        self.ocr = ocr
        self.matcher = matcher or CodeMatcher()
        self.concurrency = settings.ocr_concurrency if concurrency is None else concurrency
        self.timeout_seconds = (
            settings.ocr_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self.supported_extensions = {
            ext.lower() for ext in (supported_extensions or settings.supported_image_extensions)
        }
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")

    def is_supported(self, path: Path) -> bool:
        return path.suffix.lower() in self.supported_extensions

    async def _read_text(self, path: Path, semaphore: asyncio.Semaphore) -> tuple[str | None, str | None]:
        """Run OCR for one file. Returns ``(text, error)``; never raises."""
        if self.ocr is None:
            return None, None

        async with semaphore:
            try:
                text = await asyncio.wait_for(self.ocr(path), timeout=self.timeout_seconds)
                return text, None
            except asyncio.TimeoutError:
                logger.warning(f"OCR timed out after {self.timeout_seconds}s for {path.name}")
                return None, f"OCR timed out after {self.timeout_seconds}s"
            except Exception as e:
                logger.warning(f"OCR failed for {path.name}: {e}", exc_info=True)
                return None, f"OCR failed: {e}"

    async def tag_one(self, path: Path, semaphore: asyncio.Semaphore) -> TagOutcome:
        path = Path(path)
        if not self.is_supported(path):
            return TagOutcome(
                path=path,
                result=MatchResult(method=MatchMethod.NONE, reason="unsupported format"),
                unsupported=True,
            )

        text, ocr_error = await self._read_text(path, semaphore)

        if text:
            result = self.matcher.match(
                MatchQuery(raw_text=text, source=QuerySource.OCR), self.catalog
            )
            if result.method is MatchMethod.CODE:
                return TagOutcome(path=path, result=result, code_source="ocr")

        result = self.matcher.match(
            MatchQuery(raw_text=path.name, source=QuerySource.FILENAME), self.catalog
        )
        code_source = "filename" if result.method is MatchMethod.CODE else None
        return TagOutcome(path=path, result=result, code_source=code_source, ocr_error=ocr_error)

    async def tag(self, paths: Iterable[Path | str]) -> BulkTagReport:
        """Tag every file; one file's OCR failure never aborts the batch."""
        report = BulkTagReport()
        paths = [Path(p) for p in paths]
        report.stats["attempted"] = len(paths)
        if not paths:
            return report

        semaphore = asyncio.Semaphore(self.concurrency)
        logger.info(f"Tagging {len(paths)} files (OCR concurrency {self.concurrency})")
        report.outcomes = list(await asyncio.gather(*(self.tag_one(p, semaphore) for p in paths)))

        for outcome in report.outcomes:
            if outcome.ocr_error:
                report.stats["ocr_failures"] += 1
            if outcome.unsupported:
                report.stats["unsupported"] += 1
            elif outcome.result.method is MatchMethod.CODE:
                report.stats["matched"] += 1
                report.stats["matched_by_code"] += 1
            elif outcome.result.method is MatchMethod.NAME:
                report.stats["matched"] += 1
                report.stats["matched_by_name"] += 1
            else:
                report.stats["unmatched"] += 1

        logger.info(
            f"Bulk tagging complete: {report.stats['matched']}/{report.stats['attempted']} matched, "
            f"{report.stats['ocr_failures']} OCR failures, {report.stats['unsupported']} unsupported"
        )
        return report
