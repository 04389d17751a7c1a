"""Error taxonomy for the fetch → extract pipeline.

Every failure is terminal for the current request.  Each class carries the
HTTP status the API layer answers with, so callers can map errors without a
lookup table of their own.
"""

from __future__ import annotations


class ContentAuditError(Exception):
    """Base class for all pipeline failures."""

    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingInput(ContentAuditError):
    """The URL was absent or empty."""

    http_status = 400

    def __init__(self, message: str = "URL is required") -> None:
        super().__init__(message)


class TransportFailure(ContentAuditError):
    """Network, DNS or connection failure, or a URL httpx cannot request."""

    http_status = 502


class FetchTimeout(TransportFailure):
    """The remote server did not answer within ``settings.request_timeout``."""

    http_status = 504


class ResponseTooLarge(TransportFailure):
    """The response body exceeded ``settings.max_response_bytes``."""


class UpstreamStatusFailure(ContentAuditError):
    """The remote server answered with a non-2xx status."""

    http_status = 502

    def __init__(self, status_code: int, reason: str = "") -> None:
        detail = f"{status_code} {reason}".strip()
        super().__init__(f"Failed to fetch URL: {detail}")
        self.status_code = status_code
        self.reason = reason


class ParseFailure(ContentAuditError):
    """The markup could not be parsed into any tree."""

    http_status = 422


class NoContentRegion(ContentAuditError):
    """No ``article``, ``main`` or ``body`` element exists."""

    http_status = 422

    def __init__(self, message: str = "Could not find main content") -> None:
        super().__init__(message)
