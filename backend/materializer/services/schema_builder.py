"""Schema Builder — turns directive-annotated SDL into an executable graphql-core schema.

Invariants:
    - Every object field gets exactly one resolver, built here once, never per query
    - Definition defects (missing directive arguments, unsupported output types,
      bad path expressions) raise from build_materialized_schema, before any query
    - Abstract types resolve by the value's "type" tag (is_instance_of)
    - @httpGet fields (object or interface) carry a flat complexity of 1000;
      others use the default
    - The parsed document is never mutated; directive definitions are appended
      to a copy only when the SDL does not declare them itself

Design Decisions:
    - Resolvers installed on graphql-core GraphQLField.resolve after build_ast_schema:
      graphql-core stays the execution engine, this module only supplies behavior
    - resolve_type on interfaces/unions (not is_type_of on objects): graphql-core
      calls is_type_of for every object value, which would reject untagged values
    - Directive arguments declared nullable so missing ones surface as
      MissingDirectiveArgumentError, not as a generic SDL validation error
"""

import logging
from dataclasses import dataclass
from typing import Any

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    FieldDefinitionNode,
    GraphQLAbstractType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLResolveInfo,
    GraphQLSchema,
    GraphQLUnionType,
    build_ast_schema,
    is_introspection_type,
    parse,
)

from materializer.core.boundary_protocols import JsonFetcher
from materializer.core.coerce_value import ensure_coercible
from materializer.core.domain_types import (
    HTTP_FIELD_COMPLEXITY,
    TYPE_TAG_FIELD,
    DirectiveKind,
    JsonValue,
)
from materializer.core.errors import MaterializerError
from materializer.core.query_complexity import FieldCosts
from materializer.core.resolution_context import FieldResolver, ResolutionContext
from materializer.core.root_value import build_root_value
from materializer.services.directive_resolvers import DirectiveResolvers

logger = logging.getLogger(__name__)

DIRECTIVE_DEFINITIONS = """
directive @httpGet(url: String) repeatable on FIELD_DEFINITION
directive @jsonConst(value: String) repeatable on FIELD_DEFINITION | SCHEMA
directive @const(value: String) repeatable on FIELD_DEFINITION | SCHEMA
directive @arg(name: String) repeatable on FIELD_DEFINITION
directive @value(name: String, path: String) repeatable on FIELD_DEFINITION
directive @context(name: String, path: String) repeatable on FIELD_DEFINITION
"""


@dataclass(frozen=True)
class MaterializedSchema:
    """Executable schema plus the per-schema data the executor needs."""
    schema: GraphQLSchema
    root_value: dict[str, JsonValue]
    field_costs: FieldCosts


def build_materialized_schema(
    source: str | DocumentNode, fetcher: JsonFetcher,
) -> MaterializedSchema:
    """Parse (if needed), build, and wire resolvers for a schema source."""
    document = parse(source) if isinstance(source, str) else source
    document = with_directive_definitions(document)
    schema = build_ast_schema(document)
    resolvers = DirectiveResolvers(fetcher)
    field_costs: FieldCosts = {}

    for named_type in schema.type_map.values():
        if is_introspection_type(named_type):
            continue
        if isinstance(named_type, GraphQLObjectType):
            _install_field_resolvers(named_type, resolvers, field_costs)
        elif isinstance(named_type, GraphQLInterfaceType):
            named_type.resolve_type = resolve_abstract_type
            _record_field_costs(named_type, field_costs)
        elif isinstance(named_type, GraphQLUnionType):
            named_type.resolve_type = resolve_abstract_type

    root_value = build_root_value(document)
    logger.info(
        "Materialized schema: %d types, %d network-bound fields",
        len(schema.type_map), len(field_costs),
    )
    return MaterializedSchema(schema, root_value, field_costs)


def with_directive_definitions(document: DocumentNode) -> DocumentNode:
    """Append definitions for the materializer directives the SDL omits."""
    declared = {
        definition.name.value
        for definition in document.definitions
        if isinstance(definition, DirectiveDefinitionNode)
    }
    missing = [
        definition
        for definition in parse(DIRECTIVE_DEFINITIONS).definitions
        if definition.name.value not in declared
    ]
    if not missing:
        return document
    return DocumentNode(definitions=[*document.definitions, *missing])


def is_instance_of(value: Any, type_name: str) -> bool:
    """True iff value is an object whose "type" tag equals type_name exactly."""
    if not isinstance(value, dict):
        return False
    tag = value.get(TYPE_TAG_FIELD)
    return isinstance(tag, str) and tag == type_name


def resolve_abstract_type(
    value: Any, info: GraphQLResolveInfo, abstract_type: GraphQLAbstractType,
) -> str | None:
    for possible_type in info.schema.get_possible_types(abstract_type):
        if is_instance_of(value, possible_type.name):
            return possible_type.name
    return None


def field_complexity(definition: FieldDefinitionNode) -> float | None:
    """Flat cost for network-bound fields; None means default structural cost."""
    for directive in definition.directives or ():
        if directive.name.value == DirectiveKind.HTTP_GET.value:
            return HTTP_FIELD_COMPLEXITY
    return None


def _install_field_resolvers(
    object_type: GraphQLObjectType,
    resolvers: DirectiveResolvers,
    field_costs: FieldCosts,
) -> None:
    for field_name, field in object_type.fields.items():
        definition = field.ast_node
        if definition is None:
            continue
        try:
            ensure_coercible(field.type)
            resolver = resolvers.build(definition)
        except MaterializerError as e:
            e.context.type_name = e.context.type_name or object_type.name
            e.context.field_name = field_name
            logger.error(
                "Invalid field definition %s.%s: %s",
                object_type.name, field_name, e.message,
                extra={"field_name": field_name, "error_code": e.code},
            )
            raise
        field.resolve = _as_graphql_resolver(resolver)
    _record_field_costs(object_type, field_costs)


def _record_field_costs(
    parent_type: GraphQLObjectType | GraphQLInterfaceType, field_costs: FieldCosts,
) -> None:
    # Interface fields are costed too: selections through an interface
    # are estimated against the interface definition.
    for field_name, field in parent_type.fields.items():
        if field.ast_node is None:
            continue
        cost = field_complexity(field.ast_node)
        if cost is not None:
            field_costs[(parent_type.name, field_name)] = cost


def _as_graphql_resolver(resolver: FieldResolver):
    def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        return resolver(ResolutionContext.from_info(parent, info, args))

    return resolve
