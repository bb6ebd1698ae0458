from type_hoist.cli.common import render_table
from type_hoist.plugin import RULES


def rules() -> None:
    """List the available rules."""
    rows = [
        (rule_id, rule.meta.type, rule.meta.fixable or "-", rule.meta.description)
        for rule_id, rule in sorted(RULES.items())
    ]
    render_table(["rule", "type", "fixable", "description"], rows)
