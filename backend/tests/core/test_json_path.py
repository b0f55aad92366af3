"""Path Expression tests — JSONPath selectors over resolved values.

Tests cover:
    - Single match returns the value itself
    - Several matches return a list in document order
    - No match returns None
    - Filter expressions (extended grammar)
    - Malformed expressions raise InvalidPathExpressionError at compile time
"""

import pytest

from materializer.core.errors import InvalidPathExpressionError
from materializer.core.json_path import compile_path, query_path

ITEMS = {"items": [{"id": 1, "tag": "a"}, {"id": 2, "tag": "b"}]}


def test_single_match_returns_value():
    expression = compile_path("$.current.temp")
    assert query_path(expression, {"current": {"temp": 72}}) == 72


def test_multiple_matches_return_list_in_order():
    assert query_path(compile_path("$.items[*].id"), ITEMS) == [1, 2]


def test_no_match_returns_none():
    assert query_path(compile_path("$.missing.key"), ITEMS) is None


def test_filter_expression_selects_matching_element():
    expression = compile_path("$.items[?(@.id > 1)].tag")
    assert query_path(expression, ITEMS) == "b"


def test_matched_object_returned_whole():
    assert query_path(compile_path("$.items[0]"), ITEMS) == {"id": 1, "tag": "a"}


def test_malformed_expression_raises_at_compile_time():
    with pytest.raises(InvalidPathExpressionError) as exc_info:
        compile_path("$.items[")
    assert exc_info.value.path == "$.items["
