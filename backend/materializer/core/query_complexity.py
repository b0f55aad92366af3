"""Query Complexity — estimate a query's cost and reject it above the ceiling.

Invariants:
    - Default field cost: 1 + cost of its sub-selection
    - Fields with a flat cost (network-bound) cost exactly that; children ignored
    - Fragment spreads and inline fragments are expanded in place
    - __typename costs nothing
    - Total == ceiling is accepted; total > ceiling raises QueryTooComplexError

Design Decisions:
    - Runs after graphql-core validation: fragment cycles already rejected
    - Cost keyed by (parent type name, field name): set once by the schema builder
"""

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLNamedType,
    GraphQLSchema,
    InlineFragmentNode,
    SelectionSetNode,
    get_named_type,
    get_operation_ast,
)

from materializer.core.domain_types import MAX_QUERY_COMPLEXITY
from materializer.core.errors import QueryTooComplexError

FieldCosts = dict[tuple[str, str], float]

_TYPENAME_FIELD = "__typename"


class QueryComplexityGuard:
    """Rejects queries whose estimated complexity exceeds max_complexity."""

    def __init__(self, max_complexity: float = MAX_QUERY_COMPLEXITY):
        self.max_complexity = max_complexity

    def check(self, complexity: float) -> float:
        if complexity > self.max_complexity:
            raise QueryTooComplexError(complexity, self.max_complexity)
        return complexity


def estimate_complexity(
    schema: GraphQLSchema,
    document: DocumentNode,
    field_costs: FieldCosts,
    operation_name: str | None = None,
) -> float:
    """Sum field costs over the selected operation of document."""
    operation = get_operation_ast(document, operation_name)
    if operation is None:
        return 0.0
    fragments = {
        definition.name.value: definition
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }
    estimator = _Estimator(schema, fragments, field_costs)
    return estimator.selection_cost(
        schema.get_root_type(operation.operation), operation.selection_set,
    )


class _Estimator:
    def __init__(
        self,
        schema: GraphQLSchema,
        fragments: dict[str, FragmentDefinitionNode],
        field_costs: FieldCosts,
    ):
        self._schema = schema
        self._fragments = fragments
        self._field_costs = field_costs

    def selection_cost(
        self, parent_type: GraphQLNamedType | None, selection_set: SelectionSetNode,
    ) -> float:
        total = 0.0
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                total += self._field_cost(parent_type, selection)
            elif isinstance(selection, InlineFragmentNode):
                fragment_type = parent_type
                if selection.type_condition is not None:
                    fragment_type = self._schema.get_type(
                        selection.type_condition.name.value,
                    )
                total += self.selection_cost(fragment_type, selection.selection_set)
            elif isinstance(selection, FragmentSpreadNode):
                fragment = self._fragments.get(selection.name.value)
                if fragment is not None:
                    total += self.selection_cost(
                        self._schema.get_type(fragment.type_condition.name.value),
                        fragment.selection_set,
                    )
        return total

    def _field_cost(self, parent_type: GraphQLNamedType | None, node: FieldNode) -> float:
        name = node.name.value
        if name == _TYPENAME_FIELD:
            return 0.0
        if parent_type is not None:
            flat = self._field_costs.get((parent_type.name, name))
            if flat is not None:
                return flat
        if node.selection_set is None:
            return 1.0
        fields = getattr(parent_type, "fields", None) or {}
        definition = fields.get(name)
        child_type = get_named_type(definition.type) if definition is not None else None
        return 1.0 + self.selection_cost(child_type, node.selection_set)
