import logging

from tree_sitter import Node

from type_hoist.core.ast import NodeKind

logger = logging.getLogger(__name__)

# Statement-level declarations the alias can be inserted before.
TARGET_KINDS = frozenset(
    {
        NodeKind.LEXICAL_DECLARATION,
        NodeKind.VARIABLE_DECLARATION,
        NodeKind.FUNCTION_DECLARATION,
        NodeKind.GENERATOR_FUNCTION_DECLARATION,
        NodeKind.CLASS_DECLARATION,
        NodeKind.ABSTRACT_CLASS_DECLARATION,
        NodeKind.TYPE_ALIAS_DECLARATION,
        NodeKind.INTERFACE_DECLARATION,
    }
)

# `export ...` and `declare ...` must stay glued to their declaration.
WRAPPER_KINDS = frozenset({NodeKind.EXPORT_STATEMENT, NodeKind.AMBIENT_DECLARATION})

CONTAINER_KINDS = frozenset({NodeKind.PROGRAM, NodeKind.STATEMENT_BLOCK}) | WRAPPER_KINDS

# `export default class {}` and `export default function () {}` carry an anonymous value.
_DEFAULT_EXPORT_VALUE_KINDS = frozenset(
    {NodeKind.CLASS, NodeKind.FUNCTION_EXPRESSION, NodeKind.FUNCTION, NodeKind.GENERATOR_FUNCTION}
)


def find_insertion_anchor(start: Node) -> Node | None:
    """Return the statement-level node to insert a declaration before, or None.

    Walks parent links from ``start`` up to the program root.
    """
    current = start
    while current.parent is not None:
        parent = current.parent
        if NodeKind.of(current) in TARGET_KINDS and NodeKind.of(parent) in CONTAINER_KINDS:
            if NodeKind.of(parent) in WRAPPER_KINDS:
                return _outermost_wrapper(parent)
            return current
        if NodeKind.of(current) in WRAPPER_KINDS and _wraps_declaration(current):
            return _outermost_wrapper(current)

        current = parent
        if NodeKind.of(current) is NodeKind.PROGRAM:
            break

    logger.warning(
        "Could not determine insertion point for node at line %d; fix withheld",
        start.start_point[0] + 1,
    )
    return None


def _wraps_declaration(wrapper: Node) -> bool:
    declaration = wrapper.child_by_field_name("declaration")
    if declaration is None and NodeKind.of(wrapper) is NodeKind.AMBIENT_DECLARATION:
        declaration = next(iter(wrapper.named_children), None)
    if NodeKind.of(declaration) in TARGET_KINDS:
        return True
    value = wrapper.child_by_field_name("value")
    return NodeKind.of(value) in _DEFAULT_EXPORT_VALUE_KINDS


def _outermost_wrapper(wrapper: Node) -> Node:
    # `export declare const ...` nests one wrapper in another
    while wrapper.parent is not None and NodeKind.of(wrapper.parent) in WRAPPER_KINDS:
        wrapper = wrapper.parent
    return wrapper
