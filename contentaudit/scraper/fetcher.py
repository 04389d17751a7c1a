"""HTTP fetcher: one bounded GET per call, failures mapped to pipeline errors."""

from __future__ import annotations

import codecs
import logging
import time

import httpx

from contentaudit.config import settings
from contentaudit.scraper.errors import (
    FetchTimeout,
    MissingInput,
    ResponseTooLarge,
    TransportFailure,
    UpstreamStatusFailure,
)
from contentaudit.scraper.models import FetchResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _declared_length(response: httpx.Response) -> int | None:
    """Return the ``Content-Length`` header as an int, or ``None`` if unusable."""
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _read_bounded(
    response: httpx.Response, limit: int, deadline: float | None = None
) -> bytes:
    """Read the streamed body of *response*, failing once it exceeds *limit* bytes.

    *deadline* is a ``time.monotonic()`` value; once it passes the read is
    abandoned with :class:`FetchTimeout`, however steadily data still trickles in.
    """
    declared = _declared_length(response)
    if declared is not None and declared > limit:
        raise ResponseTooLarge(
            f"Response from {response.url} is {declared} bytes (limit {limit})"
        )

    buf = bytearray()
    for chunk in response.iter_bytes():
        buf.extend(chunk)
        if len(buf) > limit:
            raise ResponseTooLarge(
                f"Response from {response.url} exceeded {limit} bytes"
            )
        if deadline is not None and time.monotonic() > deadline:
            raise FetchTimeout(f"Timed out reading response from {response.url}")
    return bytes(buf)


def _decode(body: bytes, charset: str | None) -> str:
    """Decode *body* with the declared *charset*, falling back to UTF-8."""
    encoding = "utf-8"
    if charset:
        try:
            encoding = codecs.lookup(charset).name
        except LookupError:
            logger.debug("Unknown charset %r, decoding as UTF-8", charset)
    return body.decode(encoding, errors="replace")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_url(url: str) -> FetchResult:
    """Fetch *url* and return a :class:`FetchResult`.

    Issues exactly one GET (redirects followed) with the identifying
    ``User-Agent`` from settings.  The body is only read once the final
    status is known to be 2xx.

    Raises:
        MissingInput: If *url* is empty.
        FetchTimeout: If the server does not answer in time.
        ResponseTooLarge: If the body exceeds ``settings.max_response_bytes``.
        TransportFailure: On connection/DNS errors or malformed URLs.
        UpstreamStatusFailure: If the final status is not 2xx.
    """
    if not url or not url.strip():
        raise MissingInput()
    url = url.strip()
    # httpx timeouts apply per operation; this caps the whole fetch.
    deadline = time.monotonic() + settings.request_timeout

    try:
        with httpx.Client(
            headers=settings.request_headers,
            timeout=settings.request_timeout,
            follow_redirects=True,
        ) as client:
            with client.stream("GET", url) as response:
                if not response.is_success:
                    raise UpstreamStatusFailure(
                        response.status_code, response.reason_phrase
                    )
                body = _read_bounded(response, settings.max_response_bytes, deadline)
                charset = response.charset_encoding
                status_code = response.status_code
    except httpx.TimeoutException as exc:
        raise FetchTimeout(f"Timed out fetching {url}") from exc
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
        raise TransportFailure(f"Invalid URL {url!r}: {exc}") from exc
    except httpx.HTTPError as exc:
        raise TransportFailure(f"Failed to fetch {url}: {exc}") from exc

    logger.debug("Fetched %s: HTTP %d, %d bytes", url, status_code, len(body))
    return FetchResult(
        source_url=url,
        raw_markup=_decode(body, charset),
        status_code=status_code,
    )
