import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from reportproof.hashing.exceptions import AttachmentFetchError
from reportproof.hashing.fetcher import BaseAttachmentFetcher

CUMULATIVE_URL = "https://files.example.com/J1/cumulative.csv"
PARTICLE_URL = "https://files.example.com/J1/particles.csv"
REJECTION_URL = "https://files.example.com/J1/rejection.csv"


class FakeAttachmentFetcher(BaseAttachmentFetcher):
    """In-process fetcher with canned bodies, failures and per-URL delays."""

    def __init__(
        self,
        contents: dict[str, str] | None = None,
        failing: set[str] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self._contents = contents or {}
        self._failing = failing or set()
        self._delays = delays or {}
        self.completed: list[str] = []

    async def fetch_text(self, url: str) -> str:
        await asyncio.sleep(self._delays.get(url, 0))
        self.completed.append(url)
        if url in self._failing or url not in self._contents:
            raise AttachmentFetchError(f"Failed to fetch {url}: unreachable")
        return self._contents[url]


@pytest.fixture()
def make_fetcher() -> Callable[..., FakeAttachmentFetcher]:
    return FakeAttachmentFetcher


@pytest.fixture()
def plain_report_data() -> dict[str, Any]:
    return {
        "jobId": "J1",
        "username": "alice",
        "productName": "batch-7",
        "results": {},
    }


@pytest.fixture()
def report_with_attachments() -> dict[str, Any]:
    return {
        "jobId": "J1",
        "username": "alice",
        "productName": "batch-7",
        "results": {
            "cumulative_analysis_csv": CUMULATIVE_URL,
            "particle_distribution_csv": PARTICLE_URL,
            "rejection_analysis_display_csv": REJECTION_URL,
            "d50_um": 41.7,
        },
        "instrument": {"model": "PSA-300", "serial": "X-99"},
    }


@pytest.fixture()
def attachment_contents() -> dict[str, str]:
    return {
        CUMULATIVE_URL: "size,cumulative\r\n10,0.12\r\n20,0.55\r\n",
        PARTICLE_URL: "\nid,diameter\n1,12.5\n2,40.1\n",
        REJECTION_URL: "reason,count\nblurred,3\n",
    }


@pytest.fixture()
def jobs_dir(tmp_path: Path) -> Path:
    path = tmp_path / "jobs"
    path.mkdir()
    return path


@pytest.fixture()
def write_report(jobs_dir: Path) -> Callable[[dict[str, Any]], Path]:
    """Persist a report document as {jobs_dir}/{jobId}.json."""

    def _write(data: dict[str, Any]) -> Path:
        path = jobs_dir / f"{data['jobId']}.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write
