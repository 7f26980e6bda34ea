import time
from datetime import timedelta

from wetcher.domain.fetched_document import FetchedDocument
from wetcher.domain.resource import PathResource
from wetcher.exceptions import FileReadError


class FileService:
    """Reads local files as UTF-8 text."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def fetch(self, resource: PathResource) -> FetchedDocument:
        started = time.monotonic()
        try:
            with open(resource.path, "r", encoding=self.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(resource, e) from e
        return FetchedDocument(text, timedelta(seconds=time.monotonic() - started))
