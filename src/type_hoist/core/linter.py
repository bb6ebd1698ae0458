"""Drive rules over a syntax tree and apply their fixes."""

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Tree

from type_hoist.config import Settings
from type_hoist.core.ast import NodeKind, parse_file, parse_source, walk
from type_hoist.core.languages import is_supported_file
from type_hoist.core.rule import Rule, RuleContext, Visitor
from type_hoist.models import FileReport, Finding, Fix
from type_hoist.plugin import RULES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixResult:
    source_bytes: bytes
    findings: list[Finding]
    passes: int
    applied: int


def lint_tree(tree: Tree, source_bytes: bytes, rules: Mapping[str, Rule] | None = None) -> list[Finding]:
    active_rules = RULES if rules is None else rules
    root = tree.root_node

    dispatch: dict[NodeKind, list[Visitor]] = defaultdict(list)
    contexts: list[RuleContext] = []
    for rule_id, rule in active_rules.items():
        context = RuleContext(rule_id=rule_id, meta=rule.meta, root=root, source_bytes=source_bytes)
        for kind, visitor in rule.create(context).items():
            dispatch[kind].append(visitor)
        contexts.append(context)

    for node in walk(root):
        for visitor in dispatch.get(NodeKind.of(node), ()):
            visitor(node)

    findings = [finding for context in contexts for finding in context.findings]
    return sorted(findings, key=lambda f: (f.start_byte, f.end_byte, f.rule_id))


def lint_source(source_bytes: bytes, language: str, rules: Mapping[str, Rule] | None = None) -> list[Finding]:
    return lint_tree(parse_source(source_bytes, language), source_bytes, rules)


def apply_fixes(source_bytes: bytes, findings: Iterable[Finding]) -> tuple[bytes, int]:
    """Apply every fix that does not overlap an earlier one.

    Each fix is applied as a single replacement spanning all of its edits, so
    two fixes touching the same region never interleave. Skipped fixes are
    picked up by a later pass over the rewritten source.
    """
    fixes = sorted(
        (finding.fix for finding in findings if finding.fix is not None),
        key=lambda fix: (fix.start_byte, fix.end_byte),
    )
    output = bytearray()
    cursor = 0
    last_end = -1
    applied = 0
    for fix in fixes:
        if fix.start_byte <= last_end:
            logger.debug("Skipping overlapping fix at byte %d", fix.start_byte)
            continue
        output += source_bytes[cursor : fix.start_byte]
        output += _merged_replacement(fix, source_bytes)
        cursor = last_end = fix.end_byte
        applied += 1
    output += source_bytes[cursor:]
    return bytes(output), applied


def _merged_replacement(fix: Fix, source_bytes: bytes) -> bytes:
    merged = bytearray()
    position = fix.start_byte
    for edit in sorted(fix.edits, key=lambda e: (e.start_byte, e.end_byte)):
        merged += source_bytes[position : edit.start_byte]
        merged += edit.text.encode("utf-8")
        position = edit.end_byte
    return bytes(merged)


def fix_source(
    source_bytes: bytes,
    language: str,
    max_passes: int = 10,
    rules: Mapping[str, Rule] | None = None,
) -> FixResult:
    findings = lint_source(source_bytes, language, rules)
    passes = 0
    total_applied = 0
    while passes < max_passes:
        fixed, applied = apply_fixes(source_bytes, findings)
        if applied == 0:
            break
        passes += 1
        total_applied += applied
        source_bytes = fixed
        findings = lint_source(source_bytes, language, rules)
        logger.debug("Fix pass %d applied %d fix(es)", passes, applied)
    return FixResult(source_bytes=source_bytes, findings=findings, passes=passes, applied=total_applied)


def lint_file(
    path: str,
    settings: Settings | None = None,
    fix: bool = False,
    language: str | None = None,
    rules: Mapping[str, Rule] | None = None,
) -> FileReport:
    settings = settings or Settings()
    tree, source_bytes, resolved_language = parse_file(path, language)

    if not fix:
        return FileReport(path=path, language=resolved_language, findings=lint_tree(tree, source_bytes, rules))

    result = fix_source(source_bytes, resolved_language, settings.max_fix_passes, rules)
    return FileReport(
        path=path,
        language=resolved_language,
        findings=result.findings,
        fixed_source=result.source_bytes.decode("utf-8") if result.applied else None,
        passes=result.passes,
        applied=result.applied,
    )


def iter_source_files(paths: Iterable[str | Path], exclude_dirs: Iterable[str] = ()) -> Iterator[Path]:
    excluded = set(exclude_dirs)
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if path.is_file():
            yield path
            continue
        for candidate in sorted(path.rglob("*")):
            relative_parts = candidate.relative_to(path).parts[:-1]
            if excluded.intersection(relative_parts):
                continue
            if candidate.is_file() and is_supported_file(candidate):
                yield candidate
