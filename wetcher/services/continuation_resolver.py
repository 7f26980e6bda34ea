import logging
from typing import Any, NamedTuple, Optional

from wetcher.domain.job import Continuation, Ref
from wetcher.exceptions import QueryEvalError

logger = logging.getLogger(__name__)


class Resolution(NamedTuple):
    """Continuation strings found in a document, in match order."""
    continuations: list[str]
    error: Optional[QueryEvalError] = None


class ContinuationResolver:
    """Derives "next location" strings from a parsed document.

    The rule's query runs against the whole document. Only attribute values
    are kept (e.g. `//a[@rel='next']/@href`); other matches are ignored.
    An evaluation failure yields no continuations plus the error, so the
    caller can log it without aborting the cycle.
    """

    def resolve(self, document: Any, rule: Optional[Continuation]) -> Resolution:
        if rule is None:
            return Resolution([])
        if not isinstance(rule, Ref):
            raise TypeError(f"Unknown continuation type: {type(rule).__name__}")
        root = document.getroottree() if hasattr(document, "getroottree") else document
        try:
            items = rule.path.evaluate(root)
        except QueryEvalError as e:
            return Resolution([], e)
        continuations = [str(item) for item in items if getattr(item, "is_attribute", False)]
        skipped = len(items) - len(continuations)
        if skipped:
            logger.debug("Ignored %s non-attribute match(es) of %s", skipped, rule.path.raw)
        return Resolution(continuations)
