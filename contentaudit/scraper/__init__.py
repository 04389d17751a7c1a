"""Scraper package: web fetch & content extraction."""

from contentaudit.scraper.errors import (
    ContentAuditError,
    FetchTimeout,
    MissingInput,
    NoContentRegion,
    ParseFailure,
    ResponseTooLarge,
    TransportFailure,
    UpstreamStatusFailure,
)
from contentaudit.scraper.extractor import extract_content, extract_text
from contentaudit.scraper.fetcher import fetch_url
from contentaudit.scraper.models import ExtractionResult, FetchResult

__all__ = [
    "fetch_url",
    "extract_content",
    "extract_text",
    "FetchResult",
    "ExtractionResult",
    "ContentAuditError",
    "MissingInput",
    "TransportFailure",
    "FetchTimeout",
    "ResponseTooLarge",
    "UpstreamStatusFailure",
    "ParseFailure",
    "NoContentRegion",
]
