"""Domain Types — names and constants shared across the materializer.

Invariants:
    - Directive names are the schema "wire format": spelled exactly as in SDL
    - Complexity constants are fixed, not configurable
    - All valid directive kinds encoded as an Enum — no raw string matching

Design Decisions:
    - str Enum: DirectiveKind("httpGet") parses a directive name directly
    - JsonValue alias over a wrapper class: values stay plain json.loads output
"""

from enum import Enum
from typing import Any, Union


# ─── Value Types ─────────────────────────────────────────────────

# Shape produced by json.loads; nested members are JsonValue too.
JsonValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]


# ─── Constants ───────────────────────────────────────────────────

MAX_QUERY_COMPLEXITY = 20000.0
HTTP_FIELD_COMPLEXITY = 1000.0
TYPE_TAG_FIELD = "type"


# ─── Enums ───────────────────────────────────────────────────────

class DirectiveKind(str, Enum):
    """Field-resolution directives recognized in schema source."""
    HTTP_GET = "httpGet"
    JSON_CONST = "jsonConst"
    CONST = "const"
    ARG = "arg"
    VALUE = "value"
    CONTEXT = "context"

    @classmethod
    def lookup(cls, name: str) -> "DirectiveKind | None":
        """Return the kind for a directive name, or None if unrecognized."""
        try:
            return cls(name)
        except ValueError:
            return None


ROOT_VALUE_DIRECTIVES = frozenset({DirectiveKind.JSON_CONST, DirectiveKind.CONST})


class ScalarName(str, Enum):
    """Scalar output types the coercion engine knows how to build."""
    BOOLEAN = "Boolean"
    STRING = "String"
    INT = "Int"
    BIG_INT = "BigInt"
    BIG_DECIMAL = "BigDecimal"
    FLOAT = "Float"
