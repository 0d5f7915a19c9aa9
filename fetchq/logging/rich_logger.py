"""Rich-based reporter implementation."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.models import Item


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Route the package loggers through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        console: Console to write to. Defaults to stderr.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    logger = logging.getLogger("fetchq")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


class RichProgressReporter:
    """Reporter using Rich for terminal output.

    Implements the ProgressReporter protocol. Everything goes to stderr so
    that stdout only carries generated scripts.
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
    ):
        """Initialize the reporter.

        Args:
            verbose: Enable verbose output.
            quiet: Suppress all non-essential output.
            console: Console to print to. Defaults to a stderr console.
        """
        self._console = console or Console(stderr=True)
        self._verbose = verbose
        self._quiet = quiet

    @property
    def console(self) -> Console:
        return self._console

    # --- Logging Methods ---

    def info(self, message: str) -> None:
        """Log an info message."""
        if not self._quiet:
            self._console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        """Log a success message."""
        if not self._quiet:
            self._console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self._console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Log an error message."""
        self._console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def debug(self, message: str) -> None:
        """Log a debug message (only in verbose mode)."""
        if self._verbose:
            self._console.print(f"[dim]  {escape(message)}[/dim]")

    # --- Specialized Output ---

    def print_header(self, title: str) -> None:
        """Print a styled header."""
        if self._quiet:
            return

        text = Text(title, style="bold cyan")
        self._console.print(Panel(text, border_style="cyan"))

    def print_config(self, config_items: dict) -> None:
        """Print configuration as a table."""
        if self._quiet:
            return

        table = Table(title="Configuration", show_header=True, header_style="bold")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        for key, value in config_items.items():
            table.add_row(key, Text(str(value)))

        self._console.print(table)

    def print_queue(self, site: str, items: list[Item], title: Optional[str] = None) -> None:
        """Print every item of a queue with its decision (verbose only)."""
        if self._quiet or not self._verbose:
            return

        table = Table(title=title or f"Queue: {site}", show_header=True, header_style="bold")
        table.add_column("", width=1)
        table.add_column("Path", style="white")
        table.add_column("Destination", style="cyan")
        table.add_column("Reason", style="dim")

        for item in items:
            if item.transfer:
                marker = "[green]✓[/green]"
            elif item.merged:
                marker = "[yellow]≡[/yellow]"
            else:
                marker = "[dim]·[/dim]"
            table.add_row(marker, Text(item.path), Text(item.dst_dir()), Text(item.reason))

        self._console.print(table)


class QuietProgressReporter:
    """Minimal reporter that only shows warnings and errors."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        print(f"ERROR: {message}", file=sys.stderr)

    def debug(self, message: str) -> None:
        pass

    def print_header(self, title: str) -> None:
        pass

    def print_config(self, config_items: dict) -> None:
        pass

    def print_queue(self, site: str, items: list[Item], title: Optional[str] = None) -> None:
        pass
