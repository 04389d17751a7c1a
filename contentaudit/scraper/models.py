"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchResult:
    """The raw HTTP response body for a single successful URL fetch."""

    source_url: str
    raw_markup: str
    status_code: int


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized primary-content text extracted from a page."""

    content: str
    source_url: str

    def to_dict(self) -> dict[str, str]:
        """Return the JSON shape answered by the API: ``{"content", "url"}``."""
        return {"content": self.content, "url": self.source_url}
