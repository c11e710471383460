"""
Logging setup for the preprocessor.

mdBook reads the processed book from stdout, so every log record goes to
stderr through a Rich console.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# Only the levels the preprocessor emits
_LOG_THEME = Theme({
    "logging.level.debug": "dim",
    "logging.level.info": "blue",
    "logging.level.warning": "bold yellow",
    "logging.level.error": "bold red",
})

_console = Console(theme=_LOG_THEME, stderr=True)

ROOT_LOGGER_NAME = 'mdbook_open_git_repo'

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def setup_logging(
    level: str = 'WARNING',
    show_path: bool = False,
    show_time: bool = False,
) -> None:
    """
    Route the package's log records to a Rich handler on stderr.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        show_path: Whether to show the emitting file and line
        show_time: Whether to prefix records with a timestamp
    """
    level_value = getattr(logging, level.upper())

    handler = RichHandler(
        console=_console,
        level=level_value,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=False,
    )

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level_value)
    logger.handlers.clear()
    logger.addHandler(handler)
    # Prevent propagation to root logger
    logger.propagate = False


# Keep the package quiet until setup_logging is called
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
