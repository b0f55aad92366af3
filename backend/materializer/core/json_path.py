"""Path Expressions — JSONPath selectors over already-resolved JSON values.

Invariants:
    - Expressions compiled once (schema build time), evaluated per resolution
    - No match → None; one match → that value; several → list in document order
    - Malformed expressions raise InvalidPathExpressionError at compile time

Design Decisions:
    - jsonpath-ng extended grammar: filters and arithmetic available to schema authors
"""

from jsonpath_ng.jsonpath import JSONPath
from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse

from materializer.core.domain_types import JsonValue
from materializer.core.errors import InvalidPathExpressionError


def compile_path(path: str) -> JSONPath:
    try:
        return parse(path)
    except JSONPathError as e:
        raise InvalidPathExpressionError(path, str(e)) from e


def query_path(expression: JSONPath, value: JsonValue) -> JsonValue:
    """Evaluate a compiled expression against value."""
    matches = [match.value for match in expression.find(value)]
    if not matches:
        return None
    if len(matches) == 1:
        return matches[0]
    return matches
