"""Unit tests for alias text generation and fix edits."""

from collections.abc import Callable

from conftest import find_nodes
from tree_sitter import Tree

from type_hoist.core.rewrite import build_fix, build_type_alias

ParseTs = Callable[[str], tuple[Tree, bytes]]


def test_build_type_alias_keeps_literal_verbatim() -> None:
    literal = "{\n  host: string; // primary\n  port: number;\n}"

    assert build_type_alias("MyConfigType", literal) == f"type MyConfigType = {literal};\n\n"


def test_build_fix_produces_insertion_then_replacement(parse_ts: ParseTs) -> None:
    source = "const x = 1;\nlet myConfig: {\n  host: string;\n};\n"
    tree, source_bytes = parse_ts(source)
    literal = find_nodes(tree.root_node, "object_type")[0]
    anchor = find_nodes(tree.root_node, "lexical_declaration")[1]

    fix = build_fix(literal, "MyConfigType", anchor, source_bytes)

    assert fix.insertion.start_byte == fix.insertion.end_byte
    assert fix.insertion.start_byte == source.index("let myConfig")
    assert fix.insertion.text == "type MyConfigType = {\n  host: string;\n};\n\n"
    assert fix.replacement.start_byte < fix.replacement.end_byte
    assert source[fix.replacement.start_byte : fix.replacement.end_byte] == "{\n  host: string;\n}"
    assert fix.replacement.text == "MyConfigType"
    assert fix.edits == (fix.insertion, fix.replacement)
    assert (fix.start_byte, fix.end_byte) == (fix.insertion.start_byte, fix.replacement.end_byte)
