"""Compiled, reusable XPath queries."""
from __future__ import annotations

from typing import Any

from lxml import etree

from wetcher.exceptions import QueryCompileError, QueryEvalError


class Query:
    """An XPath expression compiled once and applied to many nodes.

    Evaluation never mutates the tree it is applied to.
    """

    __slots__ = ("raw", "_xpath")

    def __init__(self, raw: str, xpath: etree.XPath):
        self.raw = raw
        self._xpath = xpath

    def evaluate(self, node: Any) -> list:
        """Apply the query with `node` as the context item.

        Node-set results are returned in document order; scalar results
        (strings, numbers, booleans) are wrapped in a one-item list.
        """
        try:
            result = self._xpath(node)
        except (etree.XPathError, TypeError, ValueError) as e:
            raise QueryEvalError(self.raw, e) from e
        if isinstance(result, list):
            return result
        return [result]

    def __eq__(self, other) -> bool:
        return isinstance(other, Query) and other.raw == self.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"Query({self.raw!r})"


def compile_query(raw: Any, location: str = "") -> Query:
    if not isinstance(raw, str):
        raise QueryCompileError(repr(raw), "expected a string", location)
    if not raw.strip():
        raise QueryCompileError(raw, "no XPath was specified", location)
    try:
        xpath = etree.XPath(raw)
    except etree.XPathSyntaxError as e:
        raise QueryCompileError(raw, str(e), location) from e
    return Query(raw, xpath)
