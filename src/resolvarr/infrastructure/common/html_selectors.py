"""CSS-selector helpers over BeautifulSoup for link-aggregator pages.

Aggregator pages are scanned with a prioritised list of selectors.
Unlike a fallback chain, every selector is applied in turn and the
matches are concatenated, so a button matched by an early selector is
seen first.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (lxml parser)."""
    return BeautifulSoup(html, "lxml")


def iter_hrefs(
    root: BeautifulSoup | Tag,
    selectors: Iterable[str],
) -> Iterator[tuple[Tag, str]]:
    """Yield ``(element, href)`` for every selector match, in selector order.

    Elements without an ``href`` attribute yield an empty string so the
    caller can apply its own skip rules.
    """
    for sel in selectors:
        for tag in root.select(sel):
            href = tag.get("href")
            yield tag, str(href).strip() if href else ""


def find_href_by_text(
    root: BeautifulSoup | Tag,
    needles: Iterable[str],
) -> str:
    """Return the href of the first anchor whose text contains a needle.

    Needles are checked in order; each needle scans the whole document
    before the next one is tried.
    """
    anchors = [a for a in root.select("a[href]") if a.get("href")]
    for needle in needles:
        for anchor in anchors:
            if needle in anchor.get_text():
                return str(anchor["href"]).strip()
    return ""


def find_href_containing(
    root: BeautifulSoup | Tag,
    fragments: Iterable[str],
) -> str:
    """Return the first href containing one of *fragments* (case-insensitive)."""
    anchors = [a for a in root.select("a[href]") if a.get("href")]
    for fragment in fragments:
        for anchor in anchors:
            href = str(anchor["href"]).strip()
            if fragment in href.lower():
                return href
    return ""


def element_text(element: Tag) -> str:
    """Return the element's text, stripped."""
    return element.get_text(strip=True)
