"""
Selector/traversal capability used by the extractors.

The extractors only depend on two small interfaces:
- SelectorEngine.select(selector, context) -> ordered list of Node
- Node.inner_text / Node.href

SoupEngine is the default implementation on top of BeautifulSoup (CSS
selectors are resolved by soupsieve). Any other engine with the same
shape can be passed to the extractors instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

# BeautifulSoup tree builders the front-end supports
PARSERS = ("html5lib", "html.parser", "lxml")
DEFAULT_PARSER = "html5lib"


class Node(Protocol):
    @property
    def inner_text(self) -> str: ...

    @property
    def href(self) -> str: ...


class SelectorEngine(Protocol):
    def select(self, selector: str, context: Node) -> List[Node]: ...


# ---------------------------------------------------------------------------
# BeautifulSoup implementation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SoupNode:
    """
    Wraps a bs4 Tag (or the BeautifulSoup document itself).

    base_url is carried along so that href can be made absolute the same
    way a browser resolves anchor.href.
    """

    tag: Union[Tag, BeautifulSoup]
    base_url: Optional[str] = None

    @property
    def inner_text(self) -> str:
        # collapse runs of whitespace (incl. &nbsp;) like rendered text
        return " ".join(self.tag.get_text().split())

    @property
    def href(self) -> str:
        raw = self.tag.get("href") or ""
        if isinstance(raw, list):
            raw = " ".join(raw)
        raw = raw.strip()
        if self.base_url and raw:
            return urljoin(self.base_url, raw)
        return raw


class SoupEngine:
    """
    Resolves CSS selectors scoped to a SoupNode.

    Matches are returned in document order; no match -> empty list.
    """

    def select(self, selector: str, context: SoupNode) -> List[SoupNode]:
        return [SoupNode(tag, context.base_url) for tag in context.tag.select(selector)]


def load_document(html: str, base_url: Optional[str] = None, parser: str = DEFAULT_PARSER) -> SoupNode:
    """
    Parse raw HTML into a document node for the extractors.

    The default selectors contain "tbody" steps. html5lib builds tables the
    way a browser does and inserts missing <tbody> elements, so it also
    works on page source as sent by the server. "html.parser" and "lxml"
    keep the markup as written and only match pages that spell out <tbody>.
    """
    soup = BeautifulSoup(html, parser)
    return SoupNode(soup, base_url)
