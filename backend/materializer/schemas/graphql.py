"""GraphQL Schemas — Pydantic models for the GraphQL HTTP endpoint.

Invariants:
    - Request shape follows the GraphQL-over-HTTP convention (query, variables, operationName)
    - Response data/errors passed through as produced by QueryExecutor

Design Decisions:
    - Field alias for operationName: Python name stays snake_case
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphQLRequest(BaseModel):
    """Incoming GraphQL request body."""
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(min_length=1)
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")


class GraphQLErrorEntry(BaseModel):
    """One entry of the response "errors" list."""
    message: str
    locations: list[dict[str, int]] | None = None
    path: list[str | int] | None = None


class GraphQLResponse(BaseModel):
    """GraphQL response envelope."""
    data: dict[str, Any] | None = None
    errors: list[GraphQLErrorEntry] | None = None
