from collections.abc import Sequence
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from type_hoist.config import Settings, get_settings
from type_hoist.core.linter import iter_source_files
from type_hoist.core.rule import Rule
from type_hoist.models import FileReport
from type_hoist.plugin import get_rules

console = Console()
err_console = Console(stderr=True)


def load_settings() -> Settings:
    try:
        return get_settings()
    except (ValidationError, ValueError) as exc:
        err_console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=2) from None


def select_rules(names: Sequence[str] | None) -> dict[str, Rule]:
    try:
        return get_rules(list(names) if names else None)
    except ValueError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from None


def collect_files(paths: Sequence[str], settings: Settings) -> list[Path]:
    try:
        return list(iter_source_files(paths, settings.exclude_dirs))
    except FileNotFoundError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from None


def render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)


def render_findings(reports: Sequence[FileReport]) -> None:
    rows = [
        (
            report.path,
            f"{finding.start.line}:{finding.start.column}",
            finding.rule_id,
            finding.message,
            "yes" if finding.fix is not None else "no",
        )
        for report in reports
        for finding in report.findings
    ]
    if rows:
        render_table(["file", "location", "rule", "message", "fixable"], rows)
    total = len(rows)
    console.print(f"({total} finding{'s' if total != 1 else ''})")
