"""
Main Entry Point

Command-line front end for the Profile Fetcher. Each command runs one of
the demonstrated patterns against the API:

1. chained   - explicit step chain (user -> posts -> count)
2. awaited   - the same pipeline as ordered awaits
3. parallel  - one pipeline per id, run concurrently, fail-fast
4. profile   - the fetch-button handler, printing the output region
5. search / create / todos - the extra API features
6. serve-text / serve-static - the two demo HTTP servers
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.console import Console
from rich.table import Table

from .api import APIClient
from .config import config
from .orchestration import Outcome, run_chained, show_multiple_users, show_user_data
from .orchestration.pipeline import STEP_ERRORS
from .servers import make_static_server, make_text_server
from .ui import (
    OutputRegion,
    TriggerControl,
    handle_create_click,
    handle_fetch_click,
    handle_search_click,
    random_user_id,
)


app = typer.Typer(
    name="profile-fetcher",
    help="Profile Fetcher - async user/post fetching patterns against JSONPlaceholder",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


# Configure logging
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging for the application."""
    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("profile_fetcher")
    logger.setLevel(getattr(logging, log_level.upper()))
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    level = getattr(logging, log_level.upper())
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='w',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_format = logging.Formatter(config.log.log_format)
    file_handler.setFormatter(file_format)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


def _exit_for(outcome: Outcome) -> None:
    if not outcome.ok:
        console.print(f"[red]Error:[/red] {outcome.error}")
        raise typer.Exit(code=1)


@app.callback()
def cli(
    log_level: str = typer.Option(
        config.log.log_level,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
    count_delay: Optional[float] = typer.Option(
        None,
        "--count-delay",
        help="Simulated latency of the post count step in seconds",
        min=0.0,
    ),
):
    """Profile Fetcher"""
    setup_logging(log_level)
    if count_delay is not None:
        config.api.count_delay_seconds = count_delay


@app.command()
def chained(user_id: str = typer.Argument(..., help="User id to fetch")):
    """Fetch user -> posts -> count as a chain of steps."""
    outcome = asyncio.run(run_chained(APIClient(), user_id))
    _exit_for(outcome)
    console.print(f"Total posts: [bold]{outcome.value}[/bold]")


@app.command()
def awaited(user_id: str = typer.Argument(..., help="User id to fetch")):
    """Fetch user -> posts -> count with sequential awaits."""
    outcome = asyncio.run(show_user_data(APIClient(), user_id))
    _exit_for(outcome)
    console.print(f"Post count: [bold]{outcome.value}[/bold]")


@app.command()
def parallel(user_ids: List[str] = typer.Argument(..., help="User ids to fetch concurrently")):
    """Run one pipeline per id concurrently; any failure fails the whole run."""
    outcome = asyncio.run(show_multiple_users(APIClient(), user_ids))
    _exit_for(outcome)

    table = Table(title="Users and their post counts")
    table.add_column("Name")
    table.add_column("Posts", justify="right")
    for summary in outcome.value:
        table.add_row(summary.name, str(summary.post_count))
    console.print(table)


@app.command()
def profile(
    user_id: Optional[str] = typer.Argument(None, help="User id (random if omitted)"),
    validate: bool = typer.Option(False, "--validate", help="Reject ids outside 1-10"),
):
    """Run the fetch-profile handler and print the output region."""
    if user_id is None:
        user_id = str(random_user_id())

    control = TriggerControl()
    output = OutputRegion()
    outcome = asyncio.run(
        handle_fetch_click(APIClient(), control, user_id, output, validate=validate)
    )
    console.print(output.content, markup=False, highlight=False)
    if not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def search(term: str = typer.Argument(..., help="Text to look for in titles and bodies")):
    """Search all posts by title or body."""
    output = OutputRegion()
    outcome = asyncio.run(handle_search_click(APIClient(), TriggerControl("search"), term, output))
    console.print(output.content, markup=False, highlight=False)
    if not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def create(
    title: str = typer.Option(..., "--title", help="Post title"),
    body: str = typer.Option(..., "--body", help="Post body"),
    user_id: int = typer.Option(1, "--user-id", help="Owning user id", min=1),
):
    """Create a post (the API echoes it back with a fake id)."""
    output = OutputRegion()
    outcome = asyncio.run(
        handle_create_click(APIClient(), TriggerControl("create"), title, body, user_id, output)
    )
    console.print(output.content, markup=False, highlight=False)
    if not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def todos(user_id: str = typer.Argument(..., help="User id")):
    """Show completed vs incomplete todo counts for a user."""
    try:
        items = asyncio.run(APIClient().fetch_user_resource("todos", user_id))
    except STEP_ERRORS as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    completed = sum(1 for item in items if item.get("completed"))
    console.print(f"Completed: {completed}", style="green", highlight=False)
    console.print(f"Incomplete: {len(items) - completed}", style="yellow", highlight=False)


@app.command()
def demo():
    """Run the chained, awaited and parallel examples for users 1, 2 and 3."""
    async def run_all():
        client = APIClient()
        return [
            await run_chained(client, 1),
            await show_user_data(client, 1),
            await show_multiple_users(client, [1, 2, 3]),
        ]

    outcomes = asyncio.run(run_all())
    if not all(outcome.ok for outcome in outcomes):
        raise typer.Exit(code=1)


@app.command("serve-text")
def serve_text(port: int = typer.Option(config.server.port, "--port", "-p")):
    """Serve the plain-text home/about router."""
    server = make_text_server(port=port)
    console.print(f"Server is running at http://{config.server.host}:{server.server_port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        raise typer.Exit(code=130)
    finally:
        server.server_close()


@app.command("serve-static")
def serve_static(
    directory: Path = typer.Argument(
        config.server.static_directory,
        help="Directory to serve",
        file_okay=False,
        dir_okay=True,
    ),
    port: int = typer.Option(config.server.port, "--port", "-p"),
):
    """Serve files from a directory."""
    server = make_static_server(directory, port=port)
    console.print(f"Server is running at http://{config.server.host}:{server.server_port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        raise typer.Exit(code=130)
    finally:
        server.server_close()


def main():
    """Main entry point for the command-line interface."""
    logger = logging.getLogger("profile_fetcher")

    try:
        exit_code = app(standalone_mode=False)

    except click.exceptions.Abort:
        # Click turns Ctrl-C into Abort when not in standalone mode
        logger.info("Interrupted by user")
        sys.exit(130)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
