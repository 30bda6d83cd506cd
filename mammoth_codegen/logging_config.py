"""Logging setup shared by the library and the command-line interface.

Library modules only call ``get_logger(__name__)``; handlers are installed
once by ``configure_logging``, normally from the CLI.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "mammoth_codegen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package's root logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Install a rich handler on the package logger.

    Args:
        verbose: Log debug messages instead of warnings and errors only.
        console: Console to log to; defaults to stderr.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
