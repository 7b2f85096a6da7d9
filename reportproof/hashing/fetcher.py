from abc import ABC, abstractmethod

import httpx

from reportproof.hashing.exceptions import AttachmentFetchError


class BaseAttachmentFetcher(ABC):
    """Contract for retrieving report attachments as raw text."""

    @abstractmethod
    async def fetch_text(self, url: str) -> str:
        """Return the body of url as text.

        Raises:
            AttachmentFetchError: on any failure to retrieve or decode the body.
        """


class HttpxAttachmentFetcher(BaseAttachmentFetcher):
    """Fetches attachments over HTTP(S) with httpx.

    The status code is not inspected: whatever body the server returns is the
    content that gets hashed.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_text(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise AttachmentFetchError(f"Failed to fetch {url}: {exc}") from exc

        try:
            # a leading byte order mark is not part of the text
            return response.content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise AttachmentFetchError(f"Body of {url} is not UTF-8 text") from exc
