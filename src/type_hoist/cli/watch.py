import asyncio
from pathlib import Path
from typing import Annotated

import typer

from type_hoist.cli.common import console, load_settings, render_findings
from type_hoist.core.linter import lint_file
from type_hoist.core.ports.watcher import FileWatcherPort
from type_hoist.watcher.watchfiles_adapter import WatchfilesWatcher


def watch(
    directory: Annotated[str, typer.Argument(help="Directory to watch.")] = ".",
) -> None:
    """Re-check TypeScript files whenever they change."""
    settings = load_settings()

    async def _on_change(paths: set[Path]) -> None:
        reports = [lint_file(str(path), settings) for path in sorted(paths)]
        render_findings(reports)

    async def _run() -> None:
        watcher: FileWatcherPort = WatchfilesWatcher(directory, _on_change, exclude_dirs=settings.exclude_dirs)
        await watcher.start()
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching[/green] {directory} (Ctrl+C to stop)")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
