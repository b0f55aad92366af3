"""Root Value — the initial value handed to top-level resolvers.

Invariants:
    - Only schema-level directives are read (field-level ones are ignored)
    - jsonConst/const values extracted exactly as for field resolvers
    - Object results shallow-merged in declaration order; later keys win
    - Non-object results silently discarded
"""

from graphql import DocumentNode, SchemaDefinitionNode

from materializer.core.directive_args import literal_to_json, required_json, required_raw
from materializer.core.domain_types import ROOT_VALUE_DIRECTIVES, DirectiveKind, JsonValue


def build_root_value(document: DocumentNode) -> dict[str, JsonValue]:
    root: dict[str, JsonValue] = {}
    for definition in document.definitions:
        if not isinstance(definition, SchemaDefinitionNode):
            continue
        for directive in definition.directives or ():
            value = _root_directive_value(directive)
            if isinstance(value, dict):
                root.update(value)
    return root


def _root_directive_value(directive) -> JsonValue:
    kind = DirectiveKind.lookup(directive.name.value)
    if kind not in ROOT_VALUE_DIRECTIVES:
        return None
    if kind is DirectiveKind.JSON_CONST:
        return required_json(directive, "value")
    return literal_to_json(required_raw(directive, "value"))
