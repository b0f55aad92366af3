"""Value Coercion — maps untyped JSON values onto declared GraphQL output types.

Invariants:
    - Pure function: no IO, no async; identical (type, value) → identical result or error
    - None (absent or JSON null) yields None for every type, non-null included
    - Lists are never auto-wrapped: a non-list value for a list type is a CoercionError
    - Composite types (object, interface, union) pass the value through untouched
    - Booleans, numbers, and strings interconvert only via the string rules below
    - Any other type raises UnsupportedTypeError (definition defect, not data defect)

Design Decisions:
    - Scalars matched by name so custom SDL scalars BigInt/BigDecimal work without
      registering Python-side scalar classes
    - bool checked before int everywhere: bool is an int subclass in Python
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from graphql import (
    GraphQLList,
    GraphQLNonNull,
    GraphQLOutputType,
    GraphQLScalarType,
    is_composite_type,
)

from materializer.core.domain_types import JsonValue, ScalarName
from materializer.core.errors import CoercionError, UnsupportedTypeError

_INTEGER_TEXT = re.compile(r"[+-]?\d+")


def coerce_value(output_type: GraphQLOutputType, value: JsonValue) -> Any:
    """Convert value into the shape required by output_type."""
    if isinstance(output_type, GraphQLNonNull):
        output_type = output_type.of_type
    if value is None:
        return None
    if isinstance(output_type, GraphQLList):
        if not isinstance(value, list):
            raise CoercionError(value, "list")
        return [coerce_value(output_type.of_type, item) for item in value]
    if isinstance(output_type, GraphQLScalarType):
        return _coerce_scalar(output_type, value)
    if is_composite_type(output_type):
        return value
    raise UnsupportedTypeError(str(output_type))


def ensure_coercible(output_type: GraphQLOutputType) -> None:
    """Raise UnsupportedTypeError now for a type coerce_value could never build."""
    while isinstance(output_type, (GraphQLNonNull, GraphQLList)):
        output_type = output_type.of_type
    if isinstance(output_type, GraphQLScalarType):
        if output_type.name not in _SCALAR_CONVERTERS:
            raise UnsupportedTypeError(output_type.name)
    elif not is_composite_type(output_type):
        raise UnsupportedTypeError(str(output_type))


def _coerce_scalar(scalar: GraphQLScalarType, value: JsonValue) -> Any:
    converter = _SCALAR_CONVERTERS.get(scalar.name)
    if converter is None:
        raise UnsupportedTypeError(scalar.name)
    return converter(value)


def _to_boolean(value: JsonValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise CoercionError(value, "boolean")


def _to_string(value: JsonValue) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise CoercionError(value, "string")


def _to_int(value: JsonValue) -> int:
    return _parse_integer(value, "int")


def _to_big_int(value: JsonValue) -> int:
    return _parse_integer(value, "big int")


def _parse_integer(value: JsonValue, target: str) -> int:
    if isinstance(value, bool):
        raise CoercionError(value, target)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            raise CoercionError(value, target) from None
    if isinstance(value, str) and _INTEGER_TEXT.fullmatch(value):
        return int(value)
    raise CoercionError(value, target)


def _to_big_decimal(value: JsonValue) -> Decimal:
    if isinstance(value, bool):
        raise CoercionError(value, "big decimal")
    if isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise CoercionError(value, "big decimal") from None
        if result.is_finite():
            return result
    raise CoercionError(value, "big decimal")


def _to_float(value: JsonValue) -> float:
    if isinstance(value, bool):
        raise CoercionError(value, "double")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise CoercionError(value, "double") from None
    raise CoercionError(value, "double")


_SCALAR_CONVERTERS: dict[str, Callable[[JsonValue], Any]] = {
    ScalarName.BOOLEAN.value: _to_boolean,
    ScalarName.STRING.value: _to_string,
    ScalarName.INT.value: _to_int,
    ScalarName.BIG_INT.value: _to_big_int,
    ScalarName.BIG_DECIMAL.value: _to_big_decimal,
    ScalarName.FLOAT.value: _to_float,
}
