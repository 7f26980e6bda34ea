"""Custom exceptions for wetcher."""


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded. Fatal at startup."""


class InvalidConfigError(ConfigError):
    """Raised when a configuration entry is malformed."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"{location or '<root>'}: {reason}")


class QueryCompileError(InvalidConfigError):
    """Raised when an XPath query cannot be compiled."""

    def __init__(self, query: str, reason: str, location: str = ""):
        self.query = query
        super().__init__(location, f"invalid XPath {query!r}: {reason}")


class QueryEvalError(Exception):
    """Raised when a compiled query fails to apply to a node."""

    def __init__(self, query: str, original: Exception):
        self.query = query
        self.original = original
        super().__init__(f"failed to apply {query!r}: {original}")


class FetchError(Exception):
    """Raised when a resource cannot be fetched."""

    def __init__(self, resource, original: Exception):
        self.resource = resource
        self.original = original
        super().__init__(f"fetch failed for {resource}: {original}")


class NetworkError(FetchError):
    pass


class HttpFetchError(NetworkError):
    """Raised when an HTTP fetch fails due to network/transport errors."""


class IoError(FetchError):
    pass


class FileReadError(IoError):
    """Raised when a local file cannot be read."""


class ParseError(Exception):
    """Raised when a fetched document cannot be parsed into a tree."""

    def __init__(self, resource, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(f"failed to parse {resource}: {reason}")
