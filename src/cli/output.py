"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich for spinners, tables and colored text. Supports verbosity levels
and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, Sequence

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from src.models.page import Page


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Page saved")
        >>> with handler.spinner("Fetching pages..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.no_color = no_color
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without markup processing."""
        self.console.print(message, markup=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a request is in flight.

        Example:
            >>> with handler.spinner("Fetching page..."):
            ...     asyncio.run(actions.fetch_page("about.md"))
        """
        if self.no_color:
            # Plain output for pipes and tests
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_pages(self, pages: Sequence[Page]) -> None:
        """Display pages as a table of name, path and title."""
        if not pages:
            self.console.print("[yellow]No pages found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Name")
        table.add_column("Path")
        table.add_column("Title")
        for page in pages:
            table.add_row(page.name or "", page.path or "", page.title or "")
        self.console.print(table)
        self.console.print(f"\n{len(pages)} page(s)")

    def print_validation_errors(self, errors: Sequence[str]) -> None:
        """Display the messages of a rejected page draft."""
        self.error("Page was not saved:")
        for message in errors:
            self.console.print(f"  • {message}", markup=False)
