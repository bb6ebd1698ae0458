"""Tests for the rule registry and the rule context."""

import pytest

from type_hoist.core.ast import FUNCTION_KINDS, NodeKind, parse_source
from type_hoist.core.linter import lint_source
from type_hoist.core.matcher import MESSAGE_ID, RULE_ID
from type_hoist.core.rule import RuleContext
from type_hoist.plugin import RULES, get_rules


def test_registry_exposes_rule_metadata() -> None:
    rule = RULES[RULE_ID]

    assert rule.meta.type == "suggestion"
    assert rule.meta.fixable == "code"
    assert rule.meta.options_schema == []
    assert MESSAGE_ID in rule.meta.messages


def test_visitor_table_covers_annotation_sites() -> None:
    source = b"let x = 1;"
    tree = parse_source(source, "typescript")
    rule = RULES[RULE_ID]
    context = RuleContext(rule_id=RULE_ID, meta=rule.meta, root=tree.root_node, source_bytes=source)

    visitors = rule.create(context)

    assert set(visitors) == {NodeKind.VARIABLE_DECLARATOR, NodeKind.PUBLIC_FIELD_DEFINITION} | FUNCTION_KINDS


def test_get_rules_selects_by_name() -> None:
    assert list(get_rules()) == [RULE_ID]
    assert list(get_rules([RULE_ID])) == [RULE_ID]


def test_get_rules_rejects_unknown_rule() -> None:
    with pytest.raises(ValueError, match="Unknown rule"):
        get_rules(["no-such-rule"])


def test_lint_source_with_empty_rule_set() -> None:
    assert lint_source(b"let x: {\n  a: string;\n};\n", "typescript", rules={}) == []
