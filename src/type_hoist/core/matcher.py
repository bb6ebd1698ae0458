"""Detect multiline object-type literals in annotation slots and report them."""

from tree_sitter import Node

from type_hoist.core.ast import FUNCTION_KINDS, PARAMETER_KINDS, NodeKind, spans_multiple_lines
from type_hoist.core.insertion import find_insertion_anchor
from type_hoist.core.naming import (
    NameRegistry,
    classify_annotation,
    collect_declared_type_names,
    derive_type_name,
)
from type_hoist.core.rewrite import build_fix
from type_hoist.core.rule import RuleContext, RuleMeta, Visitor
from type_hoist.models import Fix

RULE_ID = "no-inline-multiline-types"
MESSAGE_ID = "inlineType"
MESSAGE = "Inline type literal annotations are disallowed. Extract to a named interface or type alias."


class InlineTypeMatcher:
    def __init__(self, context: RuleContext) -> None:
        self._context = context
        self._names = NameRegistry(collect_declared_type_names(context.root, context.source_bytes))

    def visitors(self) -> dict[NodeKind, Visitor]:
        table: dict[NodeKind, Visitor] = {
            NodeKind.VARIABLE_DECLARATOR: self.visit_variable_declarator,
            NodeKind.PUBLIC_FIELD_DEFINITION: self.visit_class_property,
        }
        for kind in FUNCTION_KINDS:
            table[kind] = self.visit_function
        return table

    def visit_variable_declarator(self, node: Node) -> None:
        self.check_annotation(node.child_by_field_name("type"))

    def visit_class_property(self, node: Node) -> None:
        self.check_annotation(node.child_by_field_name("type"))

    def visit_function(self, node: Node) -> None:
        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            for parameter in parameters.named_children:
                if NodeKind.of(parameter) in PARAMETER_KINDS:
                    self.check_annotation(parameter.child_by_field_name("type"))
        self.check_annotation(node.child_by_field_name("return_type"))

    def check_annotation(self, annotation: Node | None) -> None:
        if annotation is None or NodeKind.of(annotation) is not NodeKind.TYPE_ANNOTATION:
            return
        literal = _annotated_type(annotation)
        if literal is None or NodeKind.of(literal) is not NodeKind.OBJECT_TYPE:
            return
        if not spans_multiple_lines(literal):
            return
        self._context.report(literal, MESSAGE_ID, fix=self._fix_for(annotation, literal))

    def _fix_for(self, annotation: Node, literal: Node) -> Fix | None:
        anchor = find_insertion_anchor(annotation)
        if anchor is None:
            return None
        source = self._context.source_bytes
        name = self._names.claim(derive_type_name(classify_annotation(annotation, source)))
        return build_fix(literal, name, anchor, source)


def _annotated_type(annotation: Node) -> Node | None:
    for child in annotation.named_children:
        if child.type != "comment":
            return child
    return None


class NoInlineMultilineTypes:
    meta = RuleMeta(
        type="suggestion",
        description="Disallows inline object type literals that span multiple lines",
        fixable="code",
        messages={MESSAGE_ID: MESSAGE},
    )

    def create(self, context: RuleContext) -> dict[NodeKind, Visitor]:
        return InlineTypeMatcher(context).visitors()
