from tree_sitter import Node

from type_hoist.core.ast import node_text
from type_hoist.models import Fix, TextEdit


def build_type_alias(name: str, literal_text: str) -> str:
    return f"type {name} = {literal_text};\n\n"


def build_fix(literal: Node, name: str, anchor: Node, source_bytes: bytes) -> Fix:
    """Insert the alias before ``anchor`` and replace ``literal`` with its name."""
    declaration = build_type_alias(name, node_text(literal, source_bytes))
    return Fix(
        insertion=TextEdit(start_byte=anchor.start_byte, end_byte=anchor.start_byte, text=declaration),
        replacement=TextEdit(start_byte=literal.start_byte, end_byte=literal.end_byte, text=name),
    )
