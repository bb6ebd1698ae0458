import logging
from collections.abc import Iterator
from enum import StrEnum
from pathlib import Path
from typing import cast

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from type_hoist.core.languages import resolve_language
from type_hoist.models import Position

logger = logging.getLogger(__name__)


class NodeKind(StrEnum):
    """Closed set of tree-sitter node types the rule dispatches on."""

    PROGRAM = "program"
    STATEMENT_BLOCK = "statement_block"
    EXPORT_STATEMENT = "export_statement"
    AMBIENT_DECLARATION = "ambient_declaration"
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    FUNCTION_DECLARATION = "function_declaration"
    GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    FUNCTION = "function"
    GENERATOR_FUNCTION = "generator_function"
    ARROW_FUNCTION = "arrow_function"
    METHOD_DEFINITION = "method_definition"
    CLASS_DECLARATION = "class_declaration"
    ABSTRACT_CLASS_DECLARATION = "abstract_class_declaration"
    CLASS = "class"
    PUBLIC_FIELD_DEFINITION = "public_field_definition"
    FORMAL_PARAMETERS = "formal_parameters"
    REQUIRED_PARAMETER = "required_parameter"
    OPTIONAL_PARAMETER = "optional_parameter"
    TYPE_ANNOTATION = "type_annotation"
    OBJECT_TYPE = "object_type"
    TYPE_ALIAS_DECLARATION = "type_alias_declaration"
    INTERFACE_DECLARATION = "interface_declaration"
    ENUM_DECLARATION = "enum_declaration"
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    TYPE_IDENTIFIER = "type_identifier"
    OBJECT_PATTERN = "object_pattern"
    ARRAY_PATTERN = "array_pattern"
    OTHER = "other"

    @classmethod
    def of(cls, node: Node | None) -> "NodeKind":
        # keyword tokens such as `function` and `class` share their type name
        if node is None or not node.is_named:
            return cls.OTHER
        return _KINDS_BY_TYPE.get(node.type, cls.OTHER)


_KINDS_BY_TYPE = {kind.value: kind for kind in NodeKind if kind is not NodeKind.OTHER}

FUNCTION_KINDS = frozenset(
    {
        NodeKind.FUNCTION_DECLARATION,
        NodeKind.GENERATOR_FUNCTION_DECLARATION,
        NodeKind.FUNCTION_EXPRESSION,
        NodeKind.FUNCTION,
        NodeKind.GENERATOR_FUNCTION,
        NodeKind.ARROW_FUNCTION,
        NodeKind.METHOD_DEFINITION,
    }
)

PARAMETER_KINDS = frozenset({NodeKind.REQUIRED_PARAMETER, NodeKind.OPTIONAL_PARAMETER})


def parse_source(source_bytes: bytes, language: str) -> Tree:
    parser = get_parser(cast(SupportedLanguage, language))
    tree = parser.parse(source_bytes)
    if tree.root_node.has_error:
        logger.debug("Source contains syntax errors; linting the recoverable parts")
    return tree


def parse_file(path: str, language: str | None = None) -> tuple[Tree, bytes, str]:
    file_path = Path(path)
    resolved_language = resolve_language(language, file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_source(source_bytes, resolved_language), source_bytes, resolved_language


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8")


def _position(row: int, byte_column: int, offset: int, source_bytes: bytes) -> Position:
    # tree-sitter columns count bytes; report characters
    prefix = source_bytes[offset - byte_column : offset].decode("utf-8", errors="replace")
    return Position(line=row + 1, column=len(prefix) + 1)


def start_position(node: Node, source_bytes: bytes) -> Position:
    return _position(node.start_point[0], node.start_point[1], node.start_byte, source_bytes)


def end_position(node: Node, source_bytes: bytes) -> Position:
    return _position(node.end_point[0], node.end_point[1], node.end_byte, source_bytes)


def spans_multiple_lines(node: Node) -> bool:
    return node.start_point[0] != node.end_point[0]


def walk(root: Node) -> Iterator[Node]:
    """Yield nodes depth-first in source order."""
    cursor = root.walk()
    visited_children = False
    while True:
        if not visited_children:
            yield cursor.node
            if cursor.goto_first_child():
                continue
        if cursor.goto_next_sibling():
            visited_children = False
        elif cursor.goto_parent():
            visited_children = True
        else:
            return
