"""Fetches documents over HTTP(S)."""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx

from config import FETCH_TIMEOUT, MAX_DOCUMENT_BYTES

logger = logging.getLogger(__name__)


@dataclass
class FetchedDocument:
    """Raw bytes and transport metadata of a fetched document."""
    content: bytes
    content_type: str
    filename: str


class TransportError(Exception):
    """Raised when a URL cannot be fetched. Distinct from extraction failures."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        self.message = f"Failed to fetch document: {reason}"
        super().__init__(self.message)


class DocumentTooLargeError(Exception):
    """Raised as soon as a document body passes the byte limit."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        self.message = f"Document exceeds {max_bytes} bytes"
        super().__init__(self.message)


class DocumentFetcher:
    """Downloads document bytes from a URL with httpx."""

    def __init__(
        self,
        timeout: float = FETCH_TIMEOUT,
        max_bytes: int = MAX_DOCUMENT_BYTES,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            max_bytes: Largest body accepted; reading stops once it is passed
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.transport = transport

    async def fetch(self, url: str, max_bytes: Optional[int] = None) -> FetchedDocument:
        """
        Fetch a document, streaming the body so oversized documents are cut off early.

        Args:
            url: HTTP(S) URL of a PDF or DOCX document
            max_bytes: Per-call override of the byte limit

        Returns:
            FetchedDocument with body, Content-Type header and a display filename

        Raises:
            ValueError: If url is empty
            TransportError: On a malformed URL, network failure or a non-success status
            DocumentTooLargeError: If Content-Length or the body passes the limit
        """
        if not url or not url.strip():
            raise ValueError("Please enter a URL")
        url = url.strip()
        limit = self.max_bytes if max_bytes is None else max_bytes

        logger.info(f"Fetching document from {url}")
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport
        ) as client:
            try:
                request = client.build_request("GET", url)
            except (httpx.InvalidURL, ValueError) as e:
                logger.warning(f"Invalid URL {url!r}: {e}")
                raise TransportError(url, "Invalid URL") from e

            try:
                response = await client.send(request, stream=True)
                try:
                    content = await self._read_body(response, limit)
                finally:
                    await response.aclose()
            except httpx.InvalidURL as e:
                # Raised for a bad redirect Location
                logger.warning(f"Invalid URL while fetching {url!r}: {e}")
                raise TransportError(url, "Invalid URL") from e
            except httpx.TimeoutException as e:
                logger.error(f"Timed out fetching {url}: {e}")
                raise TransportError(url, "Request timed out") from e
            except httpx.RequestError as e:
                logger.error(f"Request error fetching {url}: {e}")
                raise TransportError(url, str(e) or type(e).__name__) from e

        content_type = response.headers.get("content-type", "")
        logger.info(f"Fetched {len(content)} bytes ({content_type or 'no content type'})")

        return FetchedDocument(
            content=content,
            content_type=content_type,
            filename=self.filename_from_url(url)
        )

    async def _read_body(self, response: httpx.Response, limit: int) -> bytes:
        if not response.is_success:
            logger.warning(f"Fetching {response.url} returned HTTP {response.status_code}")
            raise TransportError(
                str(response.url),
                f"HTTP error! Status: {response.status_code}",
                status_code=response.status_code
            )

        declared = response.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > limit:
            logger.warning(f"Content-Length {declared} exceeds limit of {limit} bytes")
            raise DocumentTooLargeError(limit)

        chunks = []
        received = 0
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > limit:
                logger.warning(f"Body passed limit of {limit} bytes, stopped reading")
                raise DocumentTooLargeError(limit)
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def filename_from_url(url: str) -> str:
        """Last path segment of the URL, or "document" if there is none."""
        path = urlparse(url).path
        name = unquote(path.split("/")[-1])
        return name or "document"
