"""Resolution Context — everything one field resolution may read.

Invariants:
    - Scoped to a single field resolution; never shared across fields
    - Frozen: resolvers derive new contexts (with_parent) instead of mutating
"""

from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Union

from graphql import FieldNode, GraphQLOutputType, GraphQLResolveInfo

from materializer.core.domain_types import JsonValue


@dataclass(frozen=True)
class ResolutionContext:
    """Parent value, root value, field metadata, and query arguments."""
    parent: JsonValue
    root: JsonValue
    field_name: str
    field_type: GraphQLOutputType
    args: dict[str, Any] = field(default_factory=dict)
    field_nodes: tuple[FieldNode, ...] = ()
    variable_values: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_info(
        cls, parent: JsonValue, info: GraphQLResolveInfo, args: dict[str, Any],
    ) -> "ResolutionContext":
        return cls(
            parent=parent,
            root=info.context,
            field_name=info.field_name,
            field_type=info.return_type,
            args=args,
            field_nodes=tuple(info.field_nodes),
            variable_values=info.variable_values or {},
        )

    def with_parent(self, parent: JsonValue) -> "ResolutionContext":
        return replace(self, parent=parent)


# A resolver returns the coerced value, or an awaitable of it (@httpGet).
FieldResolver = Callable[[ResolutionContext], Union[Any, Awaitable[Any]]]
