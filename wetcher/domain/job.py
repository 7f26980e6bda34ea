from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Iterator, Mapping, Optional, Union

from wetcher.domain.resource import Resource
from wetcher.domain.query import Query


class Extractor(str, Enum):
    """How leaf values are read from matched items."""

    TEXT = "text"
    STRING = "string"
    HTML = "html"


class ParserMode(str, Enum):
    HTML = "html"
    SOUP = "soup"


@dataclass(frozen=True)
class TargetTree:
    """Ordered field name -> Target mapping. Field names are unique."""

    fields: tuple[tuple[str, "Target"], ...] = ()

    @classmethod
    def of(cls, mapping: Mapping[str, "Target"]) -> "TargetTree":
        return cls(tuple(mapping.items()))

    def items(self) -> Iterator[tuple[str, "Target"]]:
        return iter(self.fields)

    def names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def __len__(self) -> int:
        return len(self.fields)


@dataclass(frozen=True)
class Single:
    """Apply `path`; extract leaf values, or descend into `then` when set."""

    path: Query
    then: Optional[TargetTree] = None
    extract: Extractor = Extractor.TEXT


@dataclass(frozen=True)
class Each:
    """Evaluate `targets` against every element child of the current node."""

    targets: TargetTree


Target = Union[Single, Each]


@dataclass(frozen=True)
class Ref:
    """Continuation read from attribute values matched by `path`."""

    path: Query


Continuation = Ref


@dataclass(frozen=True)
class Job:
    name: str
    resource: Resource
    period: timedelta
    targets: TargetTree
    continuation: Optional[Continuation] = None
    parser: ParserMode = ParserMode.HTML

    def __repr__(self) -> str:
        return f"<Job name={self.name} resource={self.resource} period={self.period.total_seconds()}s>"
