"""Query Complexity tests — cost estimation and the 20000 ceiling.

Tests cover:
    - Leaf field costs 1; object field costs 1 + children
    - Flat-cost fields ignore their children
    - Aliased repeats counted once per occurrence
    - Named fragments and inline fragments expanded
    - __typename free
    - Operation selected by name
    - Guard accepts exactly 20000, rejects 20001 with both numbers in message

Design Decisions:
    - Schema built with graphql-core build_schema; flat costs passed explicitly
"""

import pytest
from graphql import build_schema, parse

from materializer.core.errors import QueryTooComplexError
from materializer.core.query_complexity import QueryComplexityGuard, estimate_complexity

SCHEMA = build_schema("""
    interface Animal { name: String }
    type Dog implements Animal { name: String barks: Boolean }
    type Owner { name: String pet: Animal }
    type Query {
        owner: Owner
        weather: Weather
        pets: [Animal]
        count: Int
    }
    type Weather { temp: Int wind: Int }
""")
COSTS = {("Query", "weather"): 1000.0}


def _cost(query: str, operation_name: str | None = None) -> float:
    return estimate_complexity(SCHEMA, parse(query), COSTS, operation_name)


def test_leaf_field_costs_one():
    assert _cost("{ count }") == 1.0


def test_object_field_costs_one_plus_children():
    assert _cost("{ owner { name pet { name } } }") == 4.0


def test_flat_cost_ignores_children():
    assert _cost("{ weather { temp wind } }") == 1000.0


def test_aliases_counted_per_occurrence():
    assert _cost("{ a: weather { temp } b: weather { temp } count }") == 2001.0


def test_named_fragment_expanded():
    query = """
        { owner { ...OwnerFields } }
        fragment OwnerFields on Owner { name pet { name } }
    """
    assert _cost(query) == 4.0


def test_inline_fragment_uses_type_condition():
    assert _cost("{ pets { name ... on Dog { barks } } }") == 3.0


def test_typename_is_free():
    assert _cost("{ owner { __typename name } }") == 2.0


def test_operation_selected_by_name():
    query = "query Cheap { count } query Costly { weather { temp } }"
    assert _cost(query, "Costly") == 1000.0
    assert _cost(query, "Cheap") == 1.0


def test_unknown_operation_costs_nothing():
    assert _cost("query A { count } query B { count }") == 0.0


def test_guard_accepts_exactly_the_ceiling():
    assert QueryComplexityGuard().check(20000) == 20000


def test_guard_rejects_one_over_the_ceiling():
    with pytest.raises(QueryTooComplexError) as exc_info:
        QueryComplexityGuard().check(20001)
    assert "20001" in exc_info.value.message
    assert "20000" in exc_info.value.message
    assert exc_info.value.complexity == 20001


def test_guard_with_estimated_query_over_ceiling():
    aliases = " ".join(f"w{i}: weather {{ temp }}" for i in range(20))
    guard = QueryComplexityGuard()
    assert guard.check(_cost(f"{{ {aliases} }}")) == 20000.0
    with pytest.raises(QueryTooComplexError):
        guard.check(_cost(f"{{ {aliases} count }}"))
