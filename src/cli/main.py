"""Main CLI entry point for the pages-admin command.

This module provides the Typer application that serves as the entry point
for the pages-admin command-line tool. Each subcommand runs one page
operation and reports its terminal notification.
"""

import asyncio
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, Optional

import typer

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.file_mapper.errors import FileMapperError
from src.file_mapper.frontmatter_handler import FrontmatterHandler
from src.models.notification import Notification, NotificationKind
from src.page_actions.page_actions import PageActions
from src.page_actions.sinks import LoggingSink, RecordingSink
from src.pages_client.config import ClientConfig, Settings
from src.pages_client.errors import ConfigError

VERSION = "0.1.0"

app = typer.Typer(
    name="pages-admin",
    help="""Manage the pages of a content backend from the command line.

QUICK START:
  pages-admin list                         # List pages
  pages-admin get about.md -o about.md     # Download a page
  pages-admin put about.md --name about.md # Update a page
  pages-admin put new-page.md              # Create a page
  pages-admin delete about.md              # Delete a page

The API URL is read from PAGES_API_URL (or a .env file) unless --url is given.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Options shared by every subcommand."""
    url: Optional[str]
    output: OutputHandler


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"pages-admin_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pages-admin version {VERSION}")
        raise typer.Exit()


def _run_operation(
    state: CLIState,
    message: str,
    operation: Callable[[PageActions], Awaitable[None]],
) -> Notification:
    """Run one page operation and return its terminal notification.

    Exits with GENERAL_ERROR when settings are missing.
    """
    output = state.output
    try:
        config = ClientConfig.from_settings(Settings.load(state.url))
    except ConfigError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    recorder = RecordingSink()
    actions = PageActions(config, LoggingSink(recorder))
    output.debug(f"Using API at {config.base_url}")
    try:
        with output.spinner(message):
            asyncio.run(operation(actions))
    finally:
        config.transport.close()

    for notification in recorder.notifications:
        output.debug(f"  {notification.kind.value}")
    return recorder.notifications[-1]


def _exit_on_failure(state: CLIState, notification: Notification) -> None:
    """Report a failed operation and exit with the matching code."""
    exit_code = ExitCode.for_notification(notification)
    if exit_code is ExitCode.SUCCESS:
        return
    if notification.kind is NotificationKind.VALIDATION_ERROR:
        state.output.print_validation_errors(notification.errors or ())
    else:
        state.output.error(f"Request failed: {notification.error}")
    raise typer.Exit(exit_code)


@app.callback()
def main_callback(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        help="Pages API base URL (overrides PAGES_API_URL)",
        metavar="URL",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Manage the pages of a content backend from the command line."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(
        url=url,
        output=OutputHandler(verbosity=verbosity, no_color=no_color),
    )


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List all pages."""
    state: CLIState = ctx.obj
    notification = _run_operation(
        state, "Fetching pages...", lambda actions: actions.fetch_pages()
    )
    _exit_on_failure(state, notification)
    state.output.print_pages(notification.pages or ())


@app.command("get")
def get_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the page to fetch"),
    output_file: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the page to this file instead of printing it",
        metavar="FILE",
    ),
) -> None:
    """Fetch one page as Markdown with YAML frontmatter."""
    state: CLIState = ctx.obj
    notification = _run_operation(
        state, f"Fetching {name}...", lambda actions: actions.fetch_page(name)
    )
    _exit_on_failure(state, notification)

    page = notification.page
    if output_file:
        try:
            FrontmatterHandler.write(output_file, page)
        except FileMapperError as e:
            state.output.error(str(e))
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        state.output.success(f"Saved {name} to {output_file}")
    else:
        state.output.print(FrontmatterHandler.generate(page))


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the page to delete"),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Delete without asking for confirmation",
    ),
) -> None:
    """Delete one page."""
    state: CLIState = ctx.obj
    if not yes and not typer.confirm(f"Delete page {name}?"):
        state.output.warning("Aborted")
        raise typer.Exit(ExitCode.SUCCESS)

    notification = _run_operation(
        state, f"Deleting {name}...", lambda actions: actions.delete_page(name)
    )
    _exit_on_failure(state, notification)
    state.output.success(f"Deleted {notification.id}")


@app.command("put")
def put_command(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Markdown file with YAML frontmatter"),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Update this existing page (default: create at the file's path)",
    ),
) -> None:
    """Create or update a page from a local file."""
    state: CLIState = ctx.obj
    try:
        draft = FrontmatterHandler.read(file)
    except FileMapperError as e:
        state.output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    target = name or draft.path
    notification = _run_operation(
        state, f"Saving {target}...", lambda actions: actions.put_page(draft, name)
    )
    _exit_on_failure(state, notification)
    saved = notification.page
    state.output.success(f"Saved {saved.name or target}")


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
