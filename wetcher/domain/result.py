"""Result tree produced by applying a target tree to a document."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from wetcher.exceptions import QueryEvalError


class Unknown:
    """Marker for a matched item that carries no extractable value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = Unknown()

Value = Union[str, Unknown]


@dataclass
class Group:
    entries: dict[str, "ResultTree"] = field(default_factory=dict)

    def to_data(self) -> dict:
        return {name: entry.to_data() for name, entry in self.entries.items()}


@dataclass
class Values:
    values: list[Value] = field(default_factory=list)

    def to_data(self) -> list:
        return [None if value is UNKNOWN else value for value in self.values]


@dataclass
class EvalError:
    error: QueryEvalError

    def to_data(self) -> dict[str, Any]:
        return {"error": str(self.error)}


ResultTree = Union[Group, Values, EvalError]


def iter_errors(tree: ResultTree, path: str = ""):
    """Yield (field path, EvalError) for every failed position in `tree`."""
    if isinstance(tree, EvalError):
        yield path, tree
    elif isinstance(tree, Group):
        for name, entry in tree.entries.items():
            child = f"{path}{name}" if name.startswith("[") or not path else f"{path}.{name}"
            yield from iter_errors(entry, child)
