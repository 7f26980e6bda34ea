import lxml.html
import pytest

from wetcher.exceptions import QueryCompileError, QueryEvalError
from wetcher.domain.query import compile_query


@pytest.fixture
def root():
    return lxml.html.document_fromstring("<ul><li>a</li><li>b</li><li>c</li></ul>")


def test_compile_rejects_malformed_xpath():
    with pytest.raises(QueryCompileError, match="invalid XPath"):
        compile_query("//li[", location="resources[0].targets.items")


def test_compile_error_carries_location():
    with pytest.raises(QueryCompileError) as exc_info:
        compile_query("//li[", location="resources[0].targets.items")
    assert exc_info.value.location == "resources[0].targets.items"
    assert exc_info.value.query == "//li["


@pytest.mark.parametrize("raw", ["", "   ", None, 12])
def test_compile_rejects_empty_or_non_string(raw):
    with pytest.raises(QueryCompileError):
        compile_query(raw)


def test_evaluate_returns_nodes_in_document_order(root):
    query = compile_query("//li")
    items = query.evaluate(root)
    assert [item.text for item in items] == ["a", "b", "c"]


def test_evaluate_is_reusable_and_deterministic(root):
    query = compile_query("//li/text()")
    assert query.evaluate(root) == query.evaluate(root) == ["a", "b", "c"]


def test_scalar_result_is_wrapped(root):
    assert compile_query("count(//li)").evaluate(root) == [3.0]


def test_undefined_variable_raises_eval_error(root):
    query = compile_query("$missing")
    with pytest.raises(QueryEvalError) as exc_info:
        query.evaluate(root)
    assert exc_info.value.query == "$missing"


def test_non_node_context_raises_eval_error():
    with pytest.raises(QueryEvalError):
        compile_query(".").evaluate("plain string")


def test_queries_compare_by_text():
    assert compile_query("//a") == compile_query("//a")
    assert compile_query("//a") != compile_query("//b")
