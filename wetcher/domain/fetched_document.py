from datetime import timedelta
from typing import NamedTuple, Optional


class FetchedDocument(NamedTuple):
    """Raw document text returned by a fetcher."""
    text: str
    elapsed: timedelta
    status_code: Optional[int] = None
    content_type: Optional[str] = None
