"""Query Executor — parse, validate, guard complexity, execute against a materialized schema.

Invariants:
    - Complexity checked exactly once, after validation, before execution starts
    - A rejected query never reaches a resolver (no outbound HTTP)
    - Root value is passed as both root_value and context_value
    - Field errors are scoped to their field: data keeps sibling results
    - Error entries carry only message/locations/path — never stack traces

Design Decisions:
    - graphql-core owns parsing, validation, and execution ordering; this module
      only sequences the steps (ADR: ExMA impureim sandwich)
    - handle_exception() is the single exception → user message mapping
"""

import logging
from inspect import isawaitable
from typing import Any

from graphql import ExecutionResult, GraphQLError, execute, parse, validate

from materializer.core.errors import MaterializerError, QueryTooComplexError
from materializer.core.query_complexity import QueryComplexityGuard, estimate_complexity
from materializer.services.schema_builder import MaterializedSchema

logger = logging.getLogger(__name__)


def handle_exception(error: BaseException) -> str:
    """Reduce any resolution failure to the text shown to the query caller."""
    if isinstance(error, MaterializerError):
        return error.message
    return str(error)


def format_error(error: GraphQLError) -> dict[str, Any]:
    formatted = dict(error.formatted)
    if error.original_error is not None:
        formatted["message"] = handle_exception(error.original_error)
    formatted.pop("extensions", None)
    return formatted


class QueryExecutor:
    """Runs GraphQL requests against one MaterializedSchema."""

    def __init__(
        self,
        materialized: MaterializedSchema,
        guard: QueryComplexityGuard | None = None,
    ):
        self.materialized = materialized
        self.guard = guard or QueryComplexityGuard()

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> dict[str, Any]:
        """Return a GraphQL response dict: {"data": ..., "errors": [...]}."""
        schema = self.materialized.schema
        try:
            document = parse(query)
        except GraphQLError as e:
            return {"errors": [format_error(e)]}

        validation_errors = validate(schema, document)
        if validation_errors:
            return {"errors": [format_error(e) for e in validation_errors]}

        try:
            complexity = self.guard.check(estimate_complexity(
                schema, document, self.materialized.field_costs, operation_name,
            ))
        except QueryTooComplexError as e:
            logger.warning(
                "Rejected query: %s", e.message,
                extra={"error_code": e.code, "complexity": e.complexity},
            )
            return {"errors": [{"message": handle_exception(e)}]}
        logger.debug("Query complexity %s", complexity, extra={"complexity": complexity})

        result = execute(
            schema,
            document,
            root_value=self.materialized.root_value,
            context_value=self.materialized.root_value,
            variable_values=variables,
            operation_name=operation_name,
        )
        if isawaitable(result):
            result = await result
        return self._to_response(result)

    def _to_response(self, result: ExecutionResult) -> dict[str, Any]:
        response: dict[str, Any] = {"data": result.data}
        if result.errors:
            for error in result.errors:
                self._log_field_error(error)
            response["errors"] = [format_error(e) for e in result.errors]
        return response

    def _log_field_error(self, error: GraphQLError) -> None:
        original = error.original_error
        code = original.code if isinstance(original, MaterializerError) else None
        logger.warning(
            "Field error at %s: %s", error.path, error.message,
            extra={"error_code": code},
            exc_info=original if code is None and original is not None else None,
        )
