from __future__ import annotations

from typing import Protocol

from wetcher.domain.fetched_document import FetchedDocument
from wetcher.domain.resource import Resource


class Fetcher(Protocol):
    """Fetch a resource and return its raw document text.

    Raises a FetchError subclass (NetworkError or IoError) on failure.
    """

    def fetch(self, resource: Resource) -> FetchedDocument: ...
