"""Applies a target tree to a parsed document and builds the result tree."""
import logging
import math
from typing import Any, Iterable

from lxml import etree

from wetcher.domain.job import Each, Extractor, Single, Target, TargetTree
from wetcher.domain.result import UNKNOWN, EvalError, Group, ResultTree, Value, Values
from wetcher.exceptions import QueryEvalError

logger = logging.getLogger(__name__)


def _is_element(item: Any) -> bool:
    # comments and processing instructions are _Element subclasses with a non-string tag
    return isinstance(item, etree._Element) and isinstance(item.tag, str)


def element_children(item: Any) -> list:
    """Immediate element children of `item` in document order; none for non-elements."""
    if not _is_element(item):
        return []
    return [child for child in item.iterchildren() if isinstance(child.tag, str)]


def _xpath_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value):
        return str(int(value))
    return repr(value)


def extract_value(item: Any, extractor: Extractor = Extractor.TEXT) -> Value:
    """Copy the value of one matched item into a plain string, or UNKNOWN."""
    if extractor is Extractor.TEXT:
        if _is_element(item):
            return "".join(item.itertext()).strip()
        if isinstance(item, str):
            return str(item).strip()
        return UNKNOWN

    if extractor is Extractor.STRING:
        if _is_element(item):
            return "".join(item.itertext())
        if isinstance(item, etree._Element):
            return str(item.text or "")
        if isinstance(item, str):
            return str(item)
        if isinstance(item, bool):
            return "true" if item else "false"
        if isinstance(item, (int, float)):
            return _xpath_number(float(item))
        return UNKNOWN

    if extractor is Extractor.HTML:
        if _is_element(item):
            return etree.tostring(item, encoding="unicode", with_tail=False)
        if isinstance(item, str):
            return str(item)
        return UNKNOWN

    raise ValueError(f"Unknown extractor: {extractor!r}")


class TargetEvaluator:
    """Walks a TargetTree over lxml nodes.

    Every node-set fans out into a Group keyed "[0]", "[1]", ... in source
    order. A query that fails to apply becomes an EvalError at that field
    only; sibling fields and the parent still complete. Holds no state, so a
    single instance can be shared by concurrently running jobs.
    """

    def evaluate(self, nodes: Iterable[Any], targets: TargetTree) -> Group:
        return Group({
            f"[{index}]": self.evaluate_node(node, targets)
            for index, node in enumerate(nodes)
        })

    def evaluate_node(self, node: Any, targets: TargetTree) -> Group:
        return Group({
            name: self._evaluate_target(node, target)
            for name, target in targets.items()
        })

    def _evaluate_target(self, node: Any, target: Target) -> ResultTree:
        if isinstance(target, Single):
            try:
                items = target.path.evaluate(node)
            except QueryEvalError as e:
                logger.debug("Query %s failed: %s", target.path.raw, e)
                return EvalError(e)
            if target.then is None:
                return Values([extract_value(item, target.extract) for item in items])
            return self.evaluate(items, target.then)

        if isinstance(target, Each):
            return Group({
                f"[{index}]": self.evaluate_node(child, target.targets)
                for index, child in enumerate(element_children(node))
            })

        raise TypeError(f"Unknown target type: {type(target).__name__}")
