from __future__ import annotations

from dataclasses import dataclass

from wetcher.domain.resource import PathResource, Resource, UrlResource
from wetcher.services.fetcher import Fetcher


@dataclass(frozen=True)
class FetcherFactory:
    http_fetcher: Fetcher
    file_fetcher: Fetcher

    def get(self, resource: Resource) -> Fetcher:
        if isinstance(resource, UrlResource):
            return self.http_fetcher
        if isinstance(resource, PathResource):
            return self.file_fetcher
        raise TypeError(f"Unknown resource type: {type(resource).__name__}")

    def fetch(self, resource: Resource):
        return self.get(resource).fetch(resource)
