import logging
from typing import Callable, Optional

import lxml.html
from lxml import etree
from lxml.html import soupparser

from wetcher.domain.job import ParserMode
from wetcher.exceptions import ParseError

logger = logging.getLogger(__name__)


def _parse_html(text: str):
    try:
        return lxml.html.document_fromstring(text)
    except ValueError:
        # lxml refuses str input that carries an XML encoding declaration
        return lxml.html.document_fromstring(text.encode("utf-8"))


def _parse_soup(text: str):
    return soupparser.fromstring(text)


class DocumentParser:
    """Parses document text into an lxml element tree, tolerating malformed markup.

    `html` uses libxml2's recovering HTML parser; `soup` routes the markup
    through BeautifulSoup first, which copes with badly broken pages.
    """

    def __init__(self, parse_fns: Optional[dict[ParserMode, Callable[[str], etree._Element]]] = None):
        self._parse_fns = parse_fns or {
            ParserMode.HTML: _parse_html,
            ParserMode.SOUP: _parse_soup,
        }

    def parse(self, text: str, mode: ParserMode = ParserMode.HTML, resource=None) -> etree._Element:
        """Return the root element of the parsed document. Raises ParseError."""
        if text is None or not text.strip():
            raise ParseError(resource, "document is empty")
        try:
            root = self._parse_fns[mode](text)
        except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
            raise ParseError(resource, str(e)) from e
        if root is None:
            raise ParseError(resource, "document has no root element")
        logger.debug("Parsed %s with %s parser, root <%s>", resource, mode.value, root.tag)
        return root
