"""
Module: analyzer.utils.html

Purpose:
    HTML structure loading. Parses raw HTML into a navigable, read-only
    element tree and exposes it through SourceElement, so detectors never
    touch BeautifulSoup types directly. Parsing is structural only:
    scripts are not executed and nothing is fetched.

Key Functions:
    - load_html(): Parse an HTML string into an HtmlDocument (never raises)

Key Classes:
    - HtmlDocument: Document-level queries (CSS, tag, class, attribute, id)
    - SourceElement: Read-only view of one element

Dependencies:
    - bs4 (BeautifulSoup): Error-tolerant HTML parsing
    - lxml: Parser backend with browser-style recovery
    - soupsieve: CSS selector matching (closest / match)

Used By:
    - analyzer.detection: Candidate pools and solution lookup
    - analyzer.pipeline: Parse phase
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

import soupsieve as sv
from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

logger = logging.getLogger(__name__)

# libxml2 recovery: an open <p> is closed by the next block element and
# content is wrapped in <html><body>, as a browser would do
PARSER = "lxml"


class SourceElement:
    """
    Read-only view of a parsed element.

    Equality and hashing follow node identity, so two elements with the
    same markup in different places of the document stay distinct.

    Example:
        >>> doc = load_html("<div><p class='problem'>Solve for x: 2x = 4</p><ol></ol></div>")
        >>> p = doc.select("p")[0]
        >>> p.tag, p.classes, p.find_next_sibling("ol").tag
        ('p', ('problem',), 'ol')
    """

    __slots__ = ("_node",)

    def __init__(self, node: Tag):
        self._node = node

    # ─────────────────────────────────────────────────────────────────────
    # Content
    # ─────────────────────────────────────────────────────────────────────

    @property
    def tag(self) -> str:
        """Lower-case tag name."""
        return (self._node.name or "").lower()

    @property
    def text(self) -> str:
        """Flattened text content, trimmed."""
        return self._node.get_text().strip()

    @property
    def inner_html(self) -> str:
        return self._node.decode_contents()

    @property
    def element_id(self) -> str:
        return self.get_attribute("id") or ""

    @property
    def classes(self) -> Tuple[str, ...]:
        value = self._node.get("class") or ()
        if isinstance(value, str):
            return tuple(value.split())
        return tuple(value)

    def get_attribute(self, name: str) -> Optional[str]:
        """Attribute value, multi-valued attributes joined with spaces."""
        value = self._node.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    # ─────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────

    @property
    def parent(self) -> Optional[SourceElement]:
        """Parent element, or None at the document root."""
        parent = self._node.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return SourceElement(parent)

    @property
    def children(self) -> List[SourceElement]:
        """Child elements (text nodes skipped)."""
        return [SourceElement(c) for c in self._node.children if isinstance(c, Tag)]

    @property
    def next_element_sibling(self) -> Optional[SourceElement]:
        return next(self._following_siblings(), None)

    @property
    def previous_element_sibling(self) -> Optional[SourceElement]:
        for sibling in self._node.previous_siblings:
            if isinstance(sibling, Tag):
                return SourceElement(sibling)
        return None

    def find_next_sibling(self, tag_name: str) -> Optional[SourceElement]:
        """Nearest following sibling with the given tag name."""
        wanted = tag_name.lower()
        for sibling in self._following_siblings():
            if sibling.tag == wanted:
                return sibling
        return None

    def _following_siblings(self) -> Iterator[SourceElement]:
        for sibling in self._node.next_siblings:
            if isinstance(sibling, Tag):
                yield SourceElement(sibling)

    # ─────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────

    def select(self, selector: str) -> List[SourceElement]:
        """Descendants matching a CSS selector, in document order."""
        return [SourceElement(t) for t in self._node.select(selector)]

    def select_one(self, selector: str) -> Optional[SourceElement]:
        found = self._node.select_one(selector)
        return SourceElement(found) if found is not None else None

    def matches(self, selector: str) -> bool:
        return sv.match(selector, self._node)

    def closest(self, selector: str) -> Optional[SourceElement]:
        """Nearest ancestor-or-self matching a CSS selector."""
        found = sv.closest(selector, self._node)
        if found is None or isinstance(found, BeautifulSoup):
            return None
        return SourceElement(found)

    # ─────────────────────────────────────────────────────────────────────
    # Identity
    # ─────────────────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceElement):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        return f"SourceElement(<{self.tag}> {self.text[:40]!r})"


class HtmlDocument:
    """
    Parsed HTML document.

    All queries return SourceElement lists in document order; an empty
    or unparseable document simply returns empty lists.
    """

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    @property
    def is_empty(self) -> bool:
        return not any(isinstance(node, Tag) for node in self._soup.descendants)

    def select(self, selector: str) -> List[SourceElement]:
        """Elements matching a CSS selector, de-duplicated, in document order."""
        return [SourceElement(t) for t in self._soup.select(selector)]

    def select_tags(self, *names: str) -> List[SourceElement]:
        """
        Elements with any of the given tag names, grouped by tag.

        Groups follow the argument order; each group is in document order.
        """
        elements: List[SourceElement] = []
        for name in names:
            elements.extend(SourceElement(t) for t in self._soup.find_all(name.lower()))
        return elements

    def find_by_class(self, class_name: str) -> List[SourceElement]:
        return [SourceElement(t) for t in self._soup.find_all(class_=class_name)]

    def find_by_attribute(self, name: str, value: Optional[str] = None) -> List[SourceElement]:
        """Elements carrying ``name`` (optionally with exactly ``value``)."""
        attrs = {name: value if value is not None else True}
        return [SourceElement(t) for t in self._soup.find_all(attrs=attrs)]

    def find_by_id(self, element_id: str) -> Optional[SourceElement]:
        if not element_id:
            return None
        found = self._soup.find(id=element_id)
        return SourceElement(found) if isinstance(found, Tag) else None


def load_html(html_content: Optional[str]) -> HtmlDocument:
    """
    Parse HTML into a read-only document.

    Malformed markup is repaired with browser-style recovery: unclosed
    tags are closed, a paragraph ends where a block element starts, stray
    end tags are dropped and content lands inside <html><body>. Leading
    bare text is wrapped in a <p>. This function never raises: input the
    parser rejects yields an empty document.

    Args:
        html_content: Raw HTML (None is treated as empty)

    Returns:
        HtmlDocument ready for querying

    Example:
        >>> doc = load_html("<p>y = 2x + 1")
        >>> [e.text for e in doc.select("p")]
        ['y = 2x + 1']
    """
    markup = html_content or ""
    try:
        soup = BeautifulSoup(markup, PARSER)
    except ParserRejectedMarkup as e:
        logger.warning(f"HTML parser rejected markup ({len(markup)} chars): {e}")
        soup = BeautifulSoup("", PARSER)
    return HtmlDocument(soup)
