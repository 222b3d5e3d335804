"""
Rich console logging for the command-line interface.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .logger import _level_value

PACKAGE_LOGGER = "caselib_bundle"

console = Console(stderr=True)


def setup_rich_logging(level: str = "INFO", show_path: bool = False) -> logging.Logger:
    """
    Route the package logger through a RichHandler.

    Args:
        level: Log level name
        show_path: Show the emitting module path next to each record

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_value(level))
    logger.handlers.clear()

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=show_path,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)
    logger.propagate = False
    return logger


def success(message: str) -> None:
    console.print(f"[green]✓ {escape(message)}[/green]")


def failure(message: str) -> None:
    console.print(f"[red]✗ {escape(message)}[/red]")
