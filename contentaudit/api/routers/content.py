"""Content extraction endpoints.

Routes
------
POST /fetch-url-content    Body: {"url": "https://..."}             → fetch_and_extract
POST /extract              Body: {"html": "<html>…", "url": "..."}  → extract_text

Pipeline errors are not handled here; they propagate to the
``ContentAuditError`` handler installed by the app factory, which answers
``{"error": "<message>"}``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from contentaudit.pipeline import fetch_and_extract
from contentaudit.scraper.errors import ContentAuditError
from contentaudit.scraper.extractor import extract_text

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class FetchUrlRequest(BaseModel):
    # Optional so an absent URL reaches the pipeline and is reported as
    # MissingInput rather than a validation error.
    url: Optional[str] = None


class ExtractHtmlRequest(BaseModel):
    html: str
    url: str = ""


class ContentResponse(BaseModel):
    content: str
    url: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/fetch-url-content", response_model=ContentResponse)
def fetch_url_content(body: FetchUrlRequest) -> dict[str, str]:
    """Fetch a URL and return the normalized text of its primary content."""
    return fetch_and_extract(body.url).to_dict()


@router.post("/extract", response_model=ContentResponse)
def extract_html(body: ExtractHtmlRequest) -> dict[str, str]:
    """Extract primary content from markup supplied in the request body."""
    try:
        content = extract_text(body.html)
    except ContentAuditError as exc:
        logger.warning("Extraction failed for inline markup: %s", exc)
        raise
    logger.info("Extracted content length: %d (inline markup)", len(content))
    return {"content": content, "url": body.url}
