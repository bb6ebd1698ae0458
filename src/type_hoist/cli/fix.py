import difflib
from pathlib import Path
from typing import Annotated

import typer
from rich.syntax import Syntax

from type_hoist.cli.common import collect_files, console, err_console, load_settings, render_findings, select_rules
from type_hoist.core.linter import lint_file
from type_hoist.models import FileReport


def _unified_diff(path: Path, original: str, fixed: str) -> str:
    return "".join(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            fixed.splitlines(keepends=True),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
        )
    )


def fix(
    paths: Annotated[list[str], typer.Argument(help="Files or directories to fix.")],
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Compute fixes without writing files.")] = False,
    diff: Annotated[bool, typer.Option("--diff", help="Show a unified diff of each fixed file.")] = False,
    max_passes: Annotated[int | None, typer.Option(min=1, help="Max fix passes per file.")] = None,
    language: Annotated[str | None, typer.Option(help="Force a language (ts, tsx).")] = None,
    rule: Annotated[list[str] | None, typer.Option("--rule", help="Run only this rule (repeatable).")] = None,
) -> None:
    """Hoist multiline inline object types into named type aliases."""
    settings = load_settings()
    rules = select_rules(rule)
    if max_passes is not None:
        settings = settings.model_copy(update={"max_fix_passes": max_passes})

    reports: list[FileReport] = []
    fixed_files = 0
    for path in collect_files(paths, settings):
        try:
            report = lint_file(str(path), settings, fix=True, language=language, rules=rules)
        except ValueError as exc:
            err_console.print(f"[red]{path}: {exc}[/red]")
            raise typer.Exit(code=2) from None
        reports.append(report)

        if report.fixed_source is None:
            continue
        fixed_files += 1
        if diff:
            original = path.read_bytes().decode("utf-8")
            console.print(Syntax(_unified_diff(path, original, report.fixed_source), "diff"))
        if not dry_run:
            path.write_bytes(report.fixed_source.encode("utf-8"))

    applied = sum(report.applied for report in reports)
    verb = "Would fix" if dry_run else "Fixed"
    console.print(f"[green]{verb}[/green] {applied} finding(s) in {fixed_files} file(s)")

    remaining = [report for report in reports if report.findings]
    if remaining:
        console.print("[yellow]Remaining findings:[/yellow]")
        render_findings(remaining)
        raise typer.Exit(code=1)
