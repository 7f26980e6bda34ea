from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class UrlResource:
    """An absolute http(s) URL fetched with a GET request."""

    url: str

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class PathResource:
    """A local file read from disk."""

    path: str

    def __str__(self) -> str:
        return self.path


Resource = Union[UrlResource, PathResource]
