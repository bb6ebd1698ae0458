from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field
from tree_sitter import Node

from type_hoist.core.ast import NodeKind, end_position, start_position
from type_hoist.models import Finding, Fix

Visitor = Callable[[Node], None]


class RuleMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["problem", "suggestion", "layout"]
    description: str
    fixable: Literal["code", "whitespace"] | None = None
    options_schema: list[dict[str, object]] = Field(default_factory=list)
    messages: dict[str, str]


@dataclass
class RuleContext:
    """Per-file view handed to a rule: the source, the tree and a report sink."""

    rule_id: str
    meta: RuleMeta
    root: Node
    source_bytes: bytes
    findings: list[Finding] = field(default_factory=list)

    def report(self, node: Node, message_id: str, fix: Fix | None = None) -> None:
        self.findings.append(
            Finding(
                rule_id=self.rule_id,
                message_id=message_id,
                message=self.meta.messages[message_id],
                start=start_position(node, self.source_bytes),
                end=end_position(node, self.source_bytes),
                start_byte=node.start_byte,
                end_byte=node.end_byte,
                fix=fix,
            )
        )


class Rule(Protocol):
    meta: RuleMeta

    def create(self, context: RuleContext) -> dict[NodeKind, Visitor]: ...
