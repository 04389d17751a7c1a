"""Content extraction: turns a :class:`FetchResult` into an :class:`ExtractionResult`."""

from __future__ import annotations

import re

from contentaudit.scraper.document import ParsedDocument, parse_document
from contentaudit.scraper.errors import NoContentRegion
from contentaudit.scraper.models import ExtractionResult, FetchResult

# Elements whose whole subtree is boilerplate rather than content
NOISE_TAGS = frozenset({"script", "style", "nav", "footer", "aside"})

# Primary content candidates, highest priority first
CONTENT_TAGS = ("article", "main", "body")

_LINE_BREAK_RE = re.compile(r"\r\n?")
# A newline plus any whitespace around it, so indented blank lines count too
_NEWLINE_RUN_RE = re.compile(r"[^\S\n]*\n\s*")
_INLINE_WS_RE = re.compile(r"[^\S\n]+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def noise_indices(doc: ParsedDocument) -> frozenset[int]:
    """Return the index of every node inside a noise subtree.

    Relies on pre-order indexing: a parent is always visited before its
    children, so one forward pass is enough.
    """
    skip: set[int] = set()
    for node in doc.nodes:
        if node.parent is not None and node.parent in skip:
            skip.add(node.index)
        elif node.is_element and node.tag in NOISE_TAGS:
            skip.add(node.index)
    return frozenset(skip)


def select_primary(doc: ParsedDocument, skip: frozenset[int] = frozenset()) -> int:
    """Return the index of the primary content element.

    First ``<article>``, else first ``<main>``, else first ``<body>``.

    Raises:
        NoContentRegion: If none of them exist outside the noise subtrees.
    """
    for tag in CONTENT_TAGS:
        index = doc.find_first(tag, skip)
        if index is not None:
            return index
    raise NoContentRegion()


def collect_text(doc: ParsedDocument, root: int, skip: frozenset[int] = frozenset()) -> str:
    """Concatenate the text nodes under *root* in document order."""
    return "".join(node.text for node in doc.walk(root, skip) if not node.is_element)


def normalize_text(text: str) -> str:
    """Collapse whitespace runs and trim.

    Runs of newlines, together with the spaces and tabs on the blank or
    indented lines between them, collapse to one newline; remaining runs of
    spaces, tabs and other non-newline whitespace collapse to one space.
    """
    text = _LINE_BREAK_RE.sub("\n", text)
    text = _NEWLINE_RUN_RE.sub("\n", text)
    text = _INLINE_WS_RE.sub(" ", text)
    return text.strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_text(markup: str) -> str:
    """Return the normalized primary-content text of *markup*.

    An empty but locatable content region yields ``""``.

    Raises:
        ParseFailure: If the markup cannot be parsed at all.
        NoContentRegion: If there is no article, main or body element.
    """
    doc = parse_document(markup)
    skip = noise_indices(doc)
    root = select_primary(doc, skip)
    return normalize_text(collect_text(doc, root, skip))


def extract_content(page: FetchResult) -> ExtractionResult:
    """Extract the primary content of a fetched *page*."""
    return ExtractionResult(
        content=extract_text(page.raw_markup),
        source_url=page.source_url,
    )
