"""Arena representation of a parsed HTML document.

BeautifulSoup does the tolerant parsing; the resulting soup is flattened into
a list of :class:`Node` objects addressed by index.  Indices follow document
(pre-)order, so a parent always has a smaller index than any of its
descendants, and child lists are plain ordered index lists.  Nothing downstream
mutates the arena.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from bs4.exceptions import ParserRejectedMarkup

from contentaudit.scraper.errors import ParseFailure

ELEMENT = "element"
TEXT = "text"


@dataclass
class Node:
    index: int
    kind: str
    tag: str = ""
    attrs: dict[str, str] = field(default_factory=dict)
    text: str = ""
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    @property
    def is_element(self) -> bool:
        return self.kind == ELEMENT


@dataclass
class ParsedDocument:
    """Flat, index-addressed document tree."""

    nodes: List[Node] = field(default_factory=list)
    roots: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def walk(self, start: int, skip: frozenset[int] = frozenset()) -> Iterator[Node]:
        """Yield *start* and its descendants in document order.

        Subtrees rooted at an index in *skip* are not entered.
        """
        stack = [start]
        while stack:
            index = stack.pop()
            if index in skip:
                continue
            node = self.nodes[index]
            yield node
            stack.extend(reversed(node.children))

    def find_first(self, tag: str, skip: frozenset[int] = frozenset()) -> Optional[int]:
        """Return the index of the first *tag* element not in *skip*, or ``None``."""
        for node in self.nodes:
            if node.is_element and node.tag == tag and node.index not in skip:
                return node.index
        return None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _is_text(item: object) -> bool:
    # Comments, doctype, CDATA and processing instructions are all
    # PreformattedString subclasses and carry no readable text.
    return isinstance(item, NavigableString) and not isinstance(item, PreformattedString)


def _flatten_attrs(tag: Tag) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for name, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        attrs[name] = value if value is not None else ""
    return attrs


def _from_soup(soup: BeautifulSoup) -> ParsedDocument:
    doc = ParsedDocument()
    stack: list[tuple[object, Optional[int]]] = [
        (child, None) for child in reversed(list(soup.children))
    ]

    while stack:
        item, parent = stack.pop()
        if isinstance(item, Tag):
            node = Node(
                index=len(doc.nodes),
                kind=ELEMENT,
                tag=item.name.lower(),
                attrs=_flatten_attrs(item),
                parent=parent,
            )
            stack.extend((child, node.index) for child in reversed(list(item.children)))
        elif _is_text(item):
            node = Node(index=len(doc.nodes), kind=TEXT, text=str(item), parent=parent)
        else:
            continue

        doc.nodes.append(node)
        if parent is None:
            doc.roots.append(node.index)
        else:
            doc.nodes[parent].children.append(node.index)

    return doc


def parse_document(markup: str) -> ParsedDocument:
    """Parse *markup* into a :class:`ParsedDocument`.

    Uses the lenient ``html.parser`` backend, so unclosed or misnested tags are
    repaired rather than rejected.  It does not invent a ``<body>`` the markup
    never had.

    Raises:
        ParseFailure: If the parser rejects the markup outright.
    """
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseFailure(f"Failed to parse HTML: {exc}") from exc
    return _from_soup(soup)
