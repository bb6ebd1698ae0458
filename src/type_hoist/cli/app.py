from enum import StrEnum
from typing import Annotated

import typer

from type_hoist.cli.check import check
from type_hoist.cli.common import load_settings
from type_hoist.cli.fix import fix
from type_hoist.cli.rules import rules
from type_hoist.cli.watch import watch
from type_hoist.logging_setup import configure_logging


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


app = typer.Typer(
    name="type-hoist",
    help="type-hoist: extract multiline inline object types into named type aliases.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("check")(check)
app.command("fix")(fix)
app.command("watch")(watch)
app.command("rules")(rules)


@app.callback()
def _configure(
    log_level: Annotated[
        LogLevel | None, typer.Option("--log-level", case_sensitive=False, help="Logging level.")
    ] = None,
) -> None:
    configure_logging(log_level.value if log_level else load_settings().log_level)


def main() -> None:
    app()
