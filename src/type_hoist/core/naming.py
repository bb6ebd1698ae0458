"""Derive a readable alias name for a hoisted object-type literal.

The name comes from the syntactic role of the annotation that holds the
literal: the bound variable, the parameter, the class property or the
function whose return type it describes. Anything unexpected falls back to
``ExtractedType``.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node

from type_hoist.core.ast import FUNCTION_KINDS, PARAMETER_KINDS, NodeKind, node_text, walk

logger = logging.getLogger(__name__)

FALLBACK_TYPE_NAME = "ExtractedType"

_SNAKE_SEGMENT = re.compile(r"_([a-z])")
_PARAMETER_PROPERTY_MODIFIERS = frozenset({"accessibility_modifier", "override_modifier", "readonly"})
_DECLARED_TYPE_KINDS = frozenset(
    {
        NodeKind.TYPE_ALIAS_DECLARATION,
        NodeKind.INTERFACE_DECLARATION,
        NodeKind.CLASS_DECLARATION,
        NodeKind.ABSTRACT_CLASS_DECLARATION,
        NodeKind.ENUM_DECLARATION,
    }
)


class AnnotationRole(Enum):
    VARIABLE_BINDING = "variable_binding"
    FUNCTION_PARAMETER = "function_parameter"
    PARAMETER_PROPERTY = "parameter_property"
    DESTRUCTURED_OBJECT_PARAMETER = "destructured_object_parameter"
    DESTRUCTURED_ARRAY_PARAMETER = "destructured_array_parameter"
    CLASS_PROPERTY = "class_property"
    FUNCTION_RETURN = "function_return"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TypeAnnotationContext:
    annotation: Node
    owner: Node | None
    role: AnnotationRole
    source_bytes: bytes = field(repr=False)


def to_pascal_case(value: str) -> str:
    if not value:
        return ""
    value = _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), value)
    return value[0].upper() + value[1:]


def classify_annotation(annotation: Node, source_bytes: bytes) -> TypeAnnotationContext:
    """Pair a ``type_annotation`` node with its owner and the role it plays there."""
    owner = annotation.parent
    return TypeAnnotationContext(
        annotation=annotation,
        owner=owner,
        role=_role_of(annotation, owner),
        source_bytes=source_bytes,
    )


def _role_of(annotation: Node, owner: Node | None) -> AnnotationRole:
    kind = NodeKind.of(owner)
    if owner is None:
        return AnnotationRole.UNKNOWN

    if kind is NodeKind.VARIABLE_DECLARATOR and owner.child_by_field_name("type") == annotation:
        return AnnotationRole.VARIABLE_BINDING

    if kind in PARAMETER_KINDS:
        pattern_kind = NodeKind.of(owner.child_by_field_name("pattern"))
        if _is_parameter_property(owner):
            return AnnotationRole.PARAMETER_PROPERTY
        if pattern_kind is NodeKind.IDENTIFIER:
            return AnnotationRole.FUNCTION_PARAMETER
        if pattern_kind is NodeKind.OBJECT_PATTERN:
            return AnnotationRole.DESTRUCTURED_OBJECT_PARAMETER
        if pattern_kind is NodeKind.ARRAY_PATTERN:
            return AnnotationRole.DESTRUCTURED_ARRAY_PARAMETER
        return AnnotationRole.UNKNOWN

    if kind is NodeKind.PUBLIC_FIELD_DEFINITION:
        return AnnotationRole.CLASS_PROPERTY

    if kind in FUNCTION_KINDS and owner.child_by_field_name("return_type") == annotation:
        return AnnotationRole.FUNCTION_RETURN

    return AnnotationRole.UNKNOWN


def _is_parameter_property(parameter: Node) -> bool:
    return any(child.type in _PARAMETER_PROPERTY_MODIFIERS for child in parameter.children)


def derive_type_name(context: TypeAnnotationContext) -> str:
    """Return ``PascalCase(base) + suffix`` for the context, or ``ExtractedType``."""
    try:
        name = _derive(context)
    except Exception:
        logger.exception("Error deriving type name")
        return FALLBACK_TYPE_NAME
    return name or FALLBACK_TYPE_NAME


def _derive(context: TypeAnnotationContext) -> str | None:
    owner = context.owner
    source = context.source_bytes
    role = context.role
    if owner is None:
        return None

    if role is AnnotationRole.VARIABLE_BINDING:
        target = owner.child_by_field_name("name")
        if NodeKind.of(target) is NodeKind.IDENTIFIER:
            return to_pascal_case(node_text(target, source)) + "Type"
        return None

    if role in (AnnotationRole.FUNCTION_PARAMETER, AnnotationRole.PARAMETER_PROPERTY):
        pattern = owner.child_by_field_name("pattern")
        if NodeKind.of(pattern) is NodeKind.IDENTIFIER:
            return to_pascal_case(node_text(pattern, source)) + "Type"
        return None

    if role is AnnotationRole.DESTRUCTURED_OBJECT_PARAMETER:
        function = _enclosing_function(owner)
        if function is None:
            return None
        function_name = _function_name(function, source)
        return to_pascal_case(function_name) + "Props" if function_name else "PropsType"

    if role is AnnotationRole.DESTRUCTURED_ARRAY_PARAMETER:
        return "ParamsType" if _enclosing_function(owner) is not None else None

    if role is AnnotationRole.CLASS_PROPERTY:
        key = owner.child_by_field_name("name")
        if NodeKind.of(key) is NodeKind.PROPERTY_IDENTIFIER:
            return to_pascal_case(node_text(key, source)) + "Type"
        return None

    if role is AnnotationRole.FUNCTION_RETURN:
        function_name = _function_name(owner, source) or _assigned_variable_name(owner, source)
        return to_pascal_case(function_name or "Function") + "ReturnType"

    return None


def _enclosing_function(parameter: Node) -> Node | None:
    parameters = parameter.parent
    if NodeKind.of(parameters) is not NodeKind.FORMAL_PARAMETERS:
        return None
    function = parameters.parent
    return function if NodeKind.of(function) in FUNCTION_KINDS else None


def _function_name(function: Node, source_bytes: bytes) -> str | None:
    # a method key names the property, not the function it holds
    if NodeKind.of(function) is NodeKind.METHOD_DEFINITION:
        return None
    name = function.child_by_field_name("name")
    if NodeKind.of(name) is NodeKind.IDENTIFIER:
        return node_text(name, source_bytes)
    return None


def _assigned_variable_name(function: Node, source_bytes: bytes) -> str | None:
    declarator = function.parent
    if NodeKind.of(declarator) is not NodeKind.VARIABLE_DECLARATOR:
        return None
    if declarator.child_by_field_name("value") != function:
        return None
    target = declarator.child_by_field_name("name")
    if NodeKind.of(target) is NodeKind.IDENTIFIER:
        return node_text(target, source_bytes)
    return None


def collect_declared_type_names(root: Node, source_bytes: bytes) -> set[str]:
    """Names already bound in the type namespace anywhere in the file."""
    names: set[str] = set()
    for node in walk(root):
        if NodeKind.of(node) in _DECLARED_TYPE_KINDS:
            name = node.child_by_field_name("name")
            if name is not None:
                names.add(node_text(name, source_bytes))
    return names


class NameRegistry:
    """Hands out alias names that are unique within one file.

    A taken name gets the smallest free numeric suffix, starting at 2.
    """

    def __init__(self, taken: Iterable[str] = ()) -> None:
        self._taken = set(taken)

    def claim(self, name: str) -> str:
        candidate = name
        suffix = 2
        while candidate in self._taken:
            candidate = f"{name}{suffix}"
            suffix += 1
        self._taken.add(candidate)
        return candidate
