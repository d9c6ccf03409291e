"""Rich-backed logging for the kubeseal-api server.

This module routes all server output, including the uvicorn loggers,
through a single Rich handler and provides a small vocabulary of
message helpers used across the package.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

# Custom theme with consistent colors
_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "highlight": "cyan bold",
        "muted": "dim",
    }
)

# Shared console instance
console = Console(theme=_THEME, stderr=True)

logger = logging.getLogger("kubeseal_api")

_MARKUP = {"markup": True}


def configure_logging(level: str) -> None:
    """Install the Rich handler on the root logger.

    Args:
        level: Log level name such as 'info' or 'debug' (case-insensitive).

    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def literal(text: str) -> str:
    """Escape text so Rich prints it verbatim instead of parsing it as markup.

    Args:
        text: Untrusted text, e.g. a kubeseal diagnostic.

    Returns:
        The escaped text.

    """
    return escape(text)


def info(message: str) -> None:
    """Log an informational message."""
    logger.info(f"[info]ℹ[/info] {message}", extra=_MARKUP)


def success(message: str) -> None:
    """Log a success message."""
    logger.info(f"[success]✓[/success] {message}", extra=_MARKUP)


def warning(message: str) -> None:
    """Log a warning message."""
    logger.warning(f"[warning]⚠[/warning] {message}", extra=_MARKUP)


def error(message: str) -> None:
    """Log an error message."""
    logger.error(f"[error]✗[/error] {message}", extra=_MARKUP)


def action(message: str) -> None:
    """Log an action/progress message."""
    logger.debug(f"[info]→[/info] {message}", extra=_MARKUP)


def highlight(text: str) -> str:
    """Return text wrapped in highlight markup.

    Args:
        text: The text to highlight.

    Returns:
        Text wrapped in Rich markup for highlighting.

    """
    return f"[highlight]{escape(text)}[/highlight]"


def summary_panel(title: str, items: dict[str, str]) -> None:
    """Print a summary panel with key-value pairs.

    Args:
        title: Title for the panel.
        items: Dictionary of label -> value pairs to display.

    """
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column(style="cyan")

    for label, value in items.items():
        table.add_row(f"{label}:", value)

    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style="green"))
