"""Shared fixtures and helpers for tests."""

import logging
from collections.abc import Callable

import pytest
from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import get_parser

from type_hoist.core.ast import walk

# ---------------------------------------------------------------------------
# Auto-marker: every test under tests/ is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _reset_type_hoist_logger() -> None:
    """CLI runs attach handlers and raise the level; undo that between tests."""
    logger = logging.getLogger("type_hoist")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def typescript_parser() -> Parser:
    """Return a tree-sitter parser for TypeScript."""
    return get_parser("typescript")


@pytest.fixture
def parse_ts(typescript_parser: Parser) -> Callable[[str], tuple[Tree, bytes]]:
    """Parse a TypeScript snippet, returning the tree and the source bytes."""

    def _parse(source: str) -> tuple[Tree, bytes]:
        source_bytes = source.encode("utf-8")
        return typescript_parser.parse(source_bytes), source_bytes

    return _parse


def find_nodes(root: Node, node_type: str) -> list[Node]:
    return [node for node in walk(root) if node.type == node_type]


def find_annotation(root: Node) -> Node:
    """Return the first ``type_annotation`` whose type is an object literal."""
    for node in find_nodes(root, "type_annotation"):
        if any(child.type == "object_type" for child in node.named_children):
            return node
    raise AssertionError("no object-type annotation in snippet")
