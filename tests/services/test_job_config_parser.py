from datetime import timedelta

import pytest

from wetcher.domain.job import Each, Extractor, ParserMode, Ref, Single
from wetcher.domain.resource import PathResource, UrlResource
from wetcher.exceptions import InvalidConfigError, QueryCompileError
from wetcher.services.job_config_parser import JobConfigParser


def _job(**overrides):
    data = {
        "url": "https://example.com/list/page1",
        "period": 30,
        "targets": {"title": {"single": {"path": "//h1"}}},
        "continuation": {"ref": "//a[@rel='next']/@href"},
    }
    data.update(overrides)
    return data


def test_parse_minimal_url_job():
    job = JobConfigParser().parse(data=_job())

    assert job.resource == UrlResource("https://example.com/list/page1")
    assert job.name == "https://example.com/list/page1"
    assert job.period == timedelta(seconds=30)
    assert job.targets.names() == ["title"]
    assert isinstance(job.continuation, Ref)
    assert job.continuation.path.raw == "//a[@rel='next']/@href"
    assert job.parser is ParserMode.HTML


def test_parse_path_job_with_duration_string():
    data = _job(period="1m30s", name="local")
    del data["url"]
    data["path"] = "./fixtures/page.html"

    job = JobConfigParser().parse(data=data)

    assert job.resource == PathResource("./fixtures/page.html")
    assert job.name == "local"
    assert job.period == timedelta(seconds=90)


def test_parse_nested_targets_preserve_order_and_shape():
    targets = {
        "items": {
            "Single": {
                "path": "//li",
                "then": {
                    "name": {"single": {"path": "./a"}},
                    "link": {"single": {"path": "./a/@href", "extract": "string"}},
                },
            },
        },
        "rows": {"Each": {"cell": {"single": {"path": "."}}}},
        "heading": {"single": {"path": "//h1", "extract": "html"}},
    }

    job = JobConfigParser().parse(data=_job(targets=targets))

    assert job.targets.names() == ["items", "rows", "heading"]
    fields = dict(job.targets.items())
    items = fields["items"]
    assert isinstance(items, Single)
    assert items.then.names() == ["name", "link"]
    assert dict(items.then.items())["link"].extract is Extractor.STRING
    assert isinstance(fields["rows"], Each)
    assert fields["rows"].targets.names() == ["cell"]
    assert fields["heading"].extract is Extractor.HTML


def test_continuation_is_optional():
    data = _job()
    del data["continuation"]

    assert JobConfigParser().parse(data=data).continuation is None


def test_bad_query_names_its_location():
    targets = {"items": {"single": {"path": "//li", "then": {"name": {"single": {"path": "./a["}}}}}}

    with pytest.raises(QueryCompileError) as exc_info:
        JobConfigParser().parse(data=_job(targets=targets), location="resources[0]")

    assert exc_info.value.location == "resources[0].targets.items.single.then.name.single.path"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"period": "inf"}, "invalid or missing period"),
        ({"period": 1e300}, "invalid or missing period"),
        ({"period": {"secs": 1e300}}, "invalid or missing period"),
        ({"period": 0}, "period must be positive"),
        ({"period": "soon"}, "invalid or missing period"),
        ({"url": "ftp://example.com/x"}, "not an absolute http"),
        ({"url": "/relative"}, "not an absolute http"),
        ({"path": "./also.html"}, "exactly one of 'url' or 'path'"),
        ({"targets": ["not", "a", "mapping"]}, "targets must be a mapping"),
        ({"targets": {"x": {"many": {}}}}, "unknown variant"),
        ({"targets": {"x": {"single": {"path": "//a"}, "each": {}}}}, "exactly one of"),
        ({"targets": {"x": {"single": {"path": "//a", "extract": "json"}}}}, "unknown extractor"),
        ({"targets": {"x": {"single": {"path": "//a", "xpath": "//b"}}}}, "unknown keys"),
        ({"continuation": {"href": "//a/@href"}}, "unknown variant"),
        ({"parser": "xml"}, "unknown parser"),
    ],
)
def test_malformed_entries_raise(overrides, message):
    with pytest.raises(InvalidConfigError, match=message):
        JobConfigParser().parse(data=_job(**overrides))


def test_extract_cannot_be_combined_with_then():
    targets = {"x": {"single": {"path": "//a", "extract": "text", "then": {"y": {"single": {"path": "."}}}}}}

    with pytest.raises(InvalidConfigError, match="cannot be combined"):
        JobConfigParser().parse(data=_job(targets=targets))


def test_missing_targets_raises():
    data = _job()
    del data["targets"]

    with pytest.raises(InvalidConfigError, match="missing targets"):
        JobConfigParser().parse(data=data)


def test_soup_parser_mode():
    assert JobConfigParser().parse(data=_job(parser="Soup")).parser is ParserMode.SOUP
