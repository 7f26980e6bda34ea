import time
from datetime import timedelta
from typing import Callable

import requests

from wetcher.domain.fetched_document import FetchedDocument
from wetcher.domain.resource import UrlResource
from wetcher.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for fetching documents.

    Requires http_client callable for dependency injection.
    This enables easy testing without patching and allows swapping HTTP libraries.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: float = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, resource: UrlResource) -> FetchedDocument:
        """GET the URL and return body text, elapsed time, status code and Content-Type."""
        headers = {"User-Agent": self.user_agent}
        started = time.monotonic()
        try:
            resp = self.http_client(resource.url, headers=headers, timeout=self.timeout)
            text = resp.text
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(resource, e) from e
        elapsed = timedelta(seconds=time.monotonic() - started)

        # Extract Content-Type if response has headers; let real exceptions bubble up.
        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        return FetchedDocument(text, elapsed, resp.status_code, ct)
