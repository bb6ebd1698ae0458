from type_hoist.core.matcher import RULE_ID, NoInlineMultilineTypes
from type_hoist.core.rule import Rule

RULES: dict[str, Rule] = {
    RULE_ID: NoInlineMultilineTypes(),
}


def get_rules(names: list[str] | None = None) -> dict[str, Rule]:
    if not names:
        return dict(RULES)
    unknown = sorted(set(names) - set(RULES))
    if unknown:
        raise ValueError(f"Unknown rule(s) {unknown}. Available: {sorted(RULES)}")
    return {name: RULES[name] for name in names}
