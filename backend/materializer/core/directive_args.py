"""Directive Arguments — typed accessors over a directive occurrence's arguments.

Invariants:
    - Arguments matched by exact name; the FIRST syntactic match wins
    - String accessors only match string-literal arguments
    - Missing required arguments raise MissingDirectiveArgumentError
    - Embedded JSON syntax errors surface as json.JSONDecodeError (not remapped)
"""

import json
from typing import Any

from graphql import DirectiveNode, StringValueNode, ValueNode, value_from_ast_untyped

from materializer.core.domain_types import JsonValue
from materializer.core.errors import MissingDirectiveArgumentError


def optional_string(directive: DirectiveNode, name: str) -> str | None:
    """Return the raw text of a string argument, or None if absent."""
    for argument in directive.arguments or ():
        if argument.name.value == name and isinstance(argument.value, StringValueNode):
            return argument.value.value
    return None


def required_string(directive: DirectiveNode, name: str) -> str:
    value = optional_string(directive, name)
    if value is None:
        raise MissingDirectiveArgumentError(name, directive.name.value)
    return value


def required_json(directive: DirectiveNode, name: str) -> JsonValue:
    """Parse a string argument whose text is itself a JSON document."""
    return json.loads(required_string(directive, name))


def required_raw(directive: DirectiveNode, name: str) -> ValueNode:
    """Return the argument's literal node un-evaluated."""
    for argument in directive.arguments or ():
        if argument.name.value == name:
            return argument.value
    raise MissingDirectiveArgumentError(name, directive.name.value)


def literal_to_json(
    node: ValueNode, variables: dict[str, Any] | None = None,
) -> JsonValue:
    """Convert a GraphQL literal (object, list, enum, scalar) to a JSON value."""
    return value_from_ast_untyped(node, variables)
