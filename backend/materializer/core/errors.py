"""Error Hierarchy — typed, categorized exceptions for every materializer failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Schema-definition defects (missing directive arguments, unsupported types,
      bad path expressions) are raised at schema build time, before any query runs
    - Data defects (coercion, upstream HTTP) are raised at resolution time and
      scoped to the single field being resolved
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with MaterializerError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    SCHEMA_DEFINITION = "schema_definition"
    COERCION = "coercion"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    directive: str | None = None
    type_name: str | None = None
    field_name: str | None = None


class MaterializerError(Exception):
    """Base exception for all materializer errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "directive": self.context.directive,
                    "type_name": self.context.type_name,
                    "field_name": self.context.field_name,
                },
            }
        }


# ─── Schema Definition Errors (build time) ──────────────────────

class MissingDirectiveArgumentError(MaterializerError):
    """A directive occurrence lacks an argument its resolver requires."""
    def __init__(
        self, argument: str | tuple[str, ...], directive: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.directive = directive
        names = (argument,) if isinstance(argument, str) else argument
        super().__init__(
            f"Can't find a directive argument "
            f"{' or '.join(repr(n) for n in names)} on @{directive}.",
            "MISSING_DIRECTIVE_ARGUMENT", ErrorCategory.SCHEMA_DEFINITION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.argument = argument
        self.directive = directive


class UnsupportedTypeError(MaterializerError):
    """The schema declares an output type the coercion engine cannot build."""
    def __init__(self, type_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.type_name = type_name
        super().__init__(
            f"Builder for type '{type_name}' is not supported yet.",
            "UNSUPPORTED_TYPE", ErrorCategory.SCHEMA_DEFINITION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.type_name = type_name


class InvalidPathExpressionError(MaterializerError):
    """A @value/@context path argument is not a valid JSONPath expression."""
    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid path expression '{path}': {reason}",
            "INVALID_PATH_EXPRESSION", ErrorCategory.SCHEMA_DEFINITION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.path = path


class SchemaLoadError(MaterializerError):
    """The schema source could not be read."""
    def __init__(self, source: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unable to load schema from '{source}': {reason}",
            "SCHEMA_LOAD_ERROR", ErrorCategory.SCHEMA_DEFINITION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.source = source


class SchemaNotMaterializedError(MaterializerError):
    """A request arrived before the schema was built."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Schema not materialized",
            "SCHEMA_NOT_MATERIALIZED", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 503,
        )


# ─── Query Errors (400-level) ───────────────────────────────────

class CoercionError(MaterializerError):
    """A runtime value failed to convert to its declared output type."""
    def __init__(
        self, value: Any, target_type: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.type_name = target_type
        super().__init__(
            f"Invalid {target_type}: {value!r}.",
            "COERCION_ERROR", ErrorCategory.COERCION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.value = value
        self.target_type = target_type


class QueryTooComplexError(MaterializerError):
    """Aggregate query complexity exceeds the allowed ceiling."""
    def __init__(
        self, complexity: float, max_complexity: float,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Query complexity is {_format_cost(complexity)} but max allowed "
            f"complexity is {_format_cost(max_complexity)}. "
            "Please reduce the number of the fields in the query.",
            "QUERY_TOO_COMPLEX", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.complexity = complexity
        self.max_complexity = max_complexity


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamHttpError(MaterializerError):
    """An outbound @httpGet call failed."""
    def __init__(
        self, url: str, reason: str, status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"GET {url} failed: {reason}",
            "UPSTREAM_HTTP_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.url = url
        self.status_code = status_code


def _format_cost(value: float) -> str:
    """Render whole-number costs without a trailing '.0'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
