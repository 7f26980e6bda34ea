from typing import Any, Optional
from urllib.parse import urlsplit

from wetcher.domain.job import (
    Each,
    Extractor,
    Job,
    ParserMode,
    Ref,
    Single,
    Target,
    TargetTree,
)
from wetcher.domain.resource import PathResource, Resource, UrlResource
from wetcher.exceptions import InvalidConfigError
from wetcher.domain.query import compile_query
from wetcher.utils.duration_utils import parse_duration


def _join(location: str, key: Any) -> str:
    if isinstance(key, int):
        return f"{location}[{key}]"
    return f"{location}.{key}" if location else str(key)


def _tagged(data: Any, location: str, tags: tuple[str, ...]) -> tuple[str, Any]:
    """Split a single-key `{Tag: body}` mapping into (tag, body), matching tags case-insensitively."""
    if not isinstance(data, dict) or len(data) != 1:
        raise InvalidConfigError(location, f"expected a mapping with exactly one of {', '.join(tags)}")
    (key, body), = data.items()
    tag = str(key).strip().lower()
    if tag not in tags:
        raise InvalidConfigError(location, f"unknown variant {key!r}, expected one of {', '.join(tags)}")
    return tag, body


class JobConfigParser:
    """Parse a YAML dict into a Job.

    Responsibility: schema/validation for job entries, including compiling
    every XPath query once. It does NOT perform filesystem IO.
    Any malformed entry raises InvalidConfigError naming its location.
    """

    def parse(self, *, data: Any, location: str = "") -> Job:
        if not isinstance(data, dict):
            raise InvalidConfigError(location, "job entry must be a mapping")

        resource = self.parse_resource(data, location)

        period = parse_duration(data.get("period"))
        if period is None:
            raise InvalidConfigError(_join(location, "period"), f"invalid or missing period {data.get('period')!r}")
        if period.total_seconds() <= 0:
            raise InvalidConfigError(_join(location, "period"), "period must be positive")

        if "targets" not in data:
            raise InvalidConfigError(_join(location, "targets"), "missing targets")
        targets = self.parse_targets(data.get("targets"), _join(location, "targets"))

        continuation = None
        if data.get("continuation") is not None:
            continuation = self.parse_continuation(data.get("continuation"), _join(location, "continuation"))

        parser = data.get("parser", ParserMode.HTML.value)
        try:
            parser_mode = ParserMode(str(parser).strip().lower())
        except ValueError:
            raise InvalidConfigError(_join(location, "parser"), f"unknown parser {parser!r}") from None

        name = data.get("name") or str(resource)
        return Job(
            name=str(name),
            resource=resource,
            period=period,
            targets=targets,
            continuation=continuation,
            parser=parser_mode,
        )

    def parse_resource(self, data: dict, location: str) -> Resource:
        url: Optional[str] = data.get("url")
        path: Optional[str] = data.get("path")
        if (url is None) == (path is None):
            raise InvalidConfigError(location, "exactly one of 'url' or 'path' is required")
        if url is not None:
            parts = urlsplit(str(url))
            if parts.scheme not in ("http", "https") or not parts.netloc:
                raise InvalidConfigError(_join(location, "url"), f"not an absolute http(s) URL: {url!r}")
            return UrlResource(str(url))
        if not isinstance(path, str) or not path:
            raise InvalidConfigError(_join(location, "path"), f"invalid path {path!r}")
        try:
            path.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidConfigError(_join(location, "path"), f"path {path!r} is not a valid UTF-8 path") from None
        return PathResource(path)

    def parse_targets(self, data: Any, location: str) -> TargetTree:
        if not isinstance(data, dict):
            raise InvalidConfigError(location, "targets must be a mapping of field name to target")
        fields = {}
        for name, target in data.items():
            fields[str(name)] = self.parse_target(target, _join(location, name))
        return TargetTree.of(fields)

    def parse_target(self, data: Any, location: str) -> Target:
        tag, body = _tagged(data, location, ("single", "each"))
        if tag == "each":
            return Each(self.parse_targets(body, _join(location, "each")))

        location = _join(location, "single")
        if not isinstance(body, dict):
            raise InvalidConfigError(location, "single target must be a mapping with a 'path'")
        unknown = set(body) - {"path", "then", "extract"}
        if unknown:
            raise InvalidConfigError(location, f"unknown keys {sorted(unknown)}")
        path = compile_query(body.get("path"), _join(location, "path"))

        then = None
        if body.get("then") is not None:
            then = self.parse_targets(body.get("then"), _join(location, "then"))

        raw_extract = body.get("extract", Extractor.TEXT.value)
        try:
            extract = Extractor(str(raw_extract).strip().lower())
        except ValueError:
            raise InvalidConfigError(_join(location, "extract"), f"unknown extractor {raw_extract!r}") from None
        if then is not None and "extract" in body:
            raise InvalidConfigError(location, "'extract' cannot be combined with 'then'")
        return Single(path=path, then=then, extract=extract)

    def parse_continuation(self, data: Any, location: str) -> Ref:
        tag, body = _tagged(data, location, ("ref",))
        return Ref(compile_query(body, _join(location, tag)))
