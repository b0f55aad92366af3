"""GraphQL Route — POST endpoint executing queries, GET endpoint printing the SDL.

Invariants:
    - Query-level failures (syntax, validation, complexity) return 200 with "errors"
      (GraphQL-over-HTTP convention); data is omitted
    - Field failures return 200 with partial "data" plus "errors"
    - Executor obtained via dependency (overridable in tests)
    - Response returned as-is: null field values inside "data" are kept
    - BigDecimal values rendered as exact decimal strings, never via float
"""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from graphql import print_schema

from materializer.core.errors import SchemaNotMaterializedError
from materializer.schemas.graphql import GraphQLRequest, GraphQLResponse
from materializer.services.query_executor import QueryExecutor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/graphql", tags=["graphql"])


def get_executor(request: Request) -> QueryExecutor:
    executor = getattr(request.app.state, "executor", None)
    if executor is None:
        raise SchemaNotMaterializedError()
    return executor


@router.post("", response_model=GraphQLResponse)
async def graphql_query(
    body: GraphQLRequest, executor: QueryExecutor = Depends(get_executor),
):
    """Execute one GraphQL operation."""
    result = await executor.execute(
        body.query, body.variables, body.operation_name,
    )
    return JSONResponse(
        content=jsonable_encoder(result, custom_encoder={Decimal: str}),
    )


@router.get("/schema", response_class=PlainTextResponse)
async def graphql_schema(executor: QueryExecutor = Depends(get_executor)):
    """Materialized schema as SDL, directive definitions included."""
    return print_schema(executor.materialized.schema)
