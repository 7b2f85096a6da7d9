"""Deterministic byte form of a report plus its CSV attachments."""

import asyncio

from reportproof.hashing.ecma_json import stringify
from reportproof.hashing.exceptions import AttachmentFetchError
from reportproof.hashing.fetcher import BaseAttachmentFetcher
from reportproof.logging.logger import Log
from reportproof.reports.exceptions import MalformedReportError
from reportproof.reports.models import Report

SOURCE_HEADER = "\n\n# Source: {url}\n"
FETCH_FAILED_SENTINEL = "# Fetch failed"


class Canonicalizer:
    """Builds the canonical representation that gets fingerprinted.

    Layout: the report as two-space indented JSON, byte for byte what
    JSON.stringify produces for the same file, then one block per attachment
    in declared field order. A failed fetch is recorded as a sentinel line
    instead of aborting.
    """

    def __init__(self, fetcher: BaseAttachmentFetcher) -> None:
        self._fetcher = fetcher

    def canonicalize(self, report: Report) -> bytes:
        return self.canonical_text(report).encode("utf-8")

    def canonical_text(self, report: Report) -> str:
        base_text = self._serialize(report)
        urls = report.attachment_urls()
        blocks = asyncio.run(self._fetch_blocks(urls)) if urls else []
        Log.debug(f"Canonicalized report {report.job_id} with {len(blocks)} attachments")
        return (base_text + "".join(blocks)).replace("\r\n", "\n").strip()

    @staticmethod
    def _serialize(report: Report) -> str:
        try:
            text = stringify(report.data, indent=2)
        except (TypeError, ValueError, OverflowError) as exc:
            raise MalformedReportError(
                f"Report {report.job_id or '<unknown>'} is not serializable: {exc}"
            ) from exc
        return text.strip()

    async def _fetch_blocks(self, urls: list[str]) -> list[str]:
        # gather returns results in argument order, not completion order
        return await asyncio.gather(*(self._fetch_block(url) for url in urls))

    async def _fetch_block(self, url: str) -> str:
        header = SOURCE_HEADER.format(url=url)
        try:
            text = await self._fetcher.fetch_text(url)
        except AttachmentFetchError as exc:
            Log.warning(f"Attachment fetch failed, hashing sentinel instead: {exc}")
            return header + FETCH_FAILED_SENTINEL
        return header + text.strip()
