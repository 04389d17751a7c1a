"""URL extraction pipeline.

``fetch_and_extract`` runs the two stages for a single URL:

    fetch → extract

Each stage either returns its result or raises a
:class:`~contentaudit.scraper.errors.ContentAuditError`; the extractor only
ever sees a successful fetch.
"""

from __future__ import annotations

import logging

from contentaudit.scraper.errors import ContentAuditError, MissingInput
from contentaudit.scraper.extractor import extract_content
from contentaudit.scraper.fetcher import fetch_url
from contentaudit.scraper.models import ExtractionResult

logger = logging.getLogger(__name__)


def fetch_and_extract(url: str | None) -> ExtractionResult:
    """Fetch *url* and return its normalized primary content.

    Pipeline:
        1. :func:`~contentaudit.scraper.fetcher.fetch_url`: one bounded GET.
        2. :func:`~contentaudit.scraper.extractor.extract_content`: parse,
           prune noise, select the content region, normalize.

    Raises:
        ContentAuditError: The first failure, unchanged.  No partial text is
            returned alongside an error.
    """
    if not url or not url.strip():
        raise MissingInput()

    logger.info("Fetching content from URL: %s", url)
    try:
        page = fetch_url(url)
    except ContentAuditError as exc:
        logger.warning("Fetch failed for %s: %s", url, exc)
        raise

    try:
        result = extract_content(page)
    except ContentAuditError as exc:
        logger.warning("Extraction failed for %s: %s", url, exc)
        raise

    logger.info("Extracted content length: %d (%s)", len(result.content), url)
    return result
