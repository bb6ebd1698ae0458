import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "type_hoist"


def configure_logging(level: str = "WARNING") -> None:
    logger = logging.getLogger(_LOGGER_NAME)
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
