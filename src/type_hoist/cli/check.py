import json
from enum import StrEnum
from typing import Annotated

import typer

from type_hoist.cli.common import collect_files, console, err_console, load_settings, render_findings, select_rules
from type_hoist.core.linter import lint_file
from type_hoist.models import FileReport


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


def check(
    paths: Annotated[list[str], typer.Argument(help="Files or directories to check.")],
    output_format: Annotated[OutputFormat, typer.Option("--format", help="Output format.")] = OutputFormat.TEXT,
    language: Annotated[str | None, typer.Option(help="Force a language (ts, tsx).")] = None,
    rule: Annotated[list[str] | None, typer.Option("--rule", help="Run only this rule (repeatable).")] = None,
) -> None:
    """Report multiline inline object type annotations."""
    settings = load_settings()
    rules = select_rules(rule)
    reports: list[FileReport] = []
    for path in collect_files(paths, settings):
        try:
            reports.append(lint_file(str(path), settings, language=language, rules=rules))
        except ValueError as exc:
            err_console.print(f"[red]{path}: {exc}[/red]")
            raise typer.Exit(code=2) from None

    if output_format is OutputFormat.JSON:
        payload = [report.model_dump(mode="json", exclude={"fixed_source", "passes", "applied"}) for report in reports]
        console.print_json(json.dumps(payload))
    else:
        render_findings(reports)

    if any(report.findings for report in reports):
        raise typer.Exit(code=1)
