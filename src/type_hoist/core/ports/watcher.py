from typing import Protocol


class FileWatcherPort(Protocol):
    """A background source of file-change events for ``type-hoist watch``."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...

    async def wait(self) -> None:
        """Block until the watcher finishes or is cancelled."""
        ...
