"""
Taskboard CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging

import typer
from rich.console import Console

from taskboard import __version__
from taskboard.cli import checklist, lanes, merge
from taskboard.core.config import load_layered_env

# Help panel names for command grouping
PANEL_LANES = "Move Work Packages"
PANEL_GATES = "Gates"
PANEL_INSTALL = "About"

# Create the main Typer app
app = typer.Typer(
    name="taskboard",
    help="File-based kanban board for work packages",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    feature: str | None = typer.Option(
        None,
        "--feature",
        "-f",
        help="Feature to operate on (default: current git branch)",
    ),
) -> None:
    """
    Taskboard - move work packages through planned, doing, for_review, done.

    Each work package is a Markdown file in a lane directory:

        specs/<feature>/tasks/<lane>/WP01-setup.md

    Common Workflows:
        taskboard list                          # Show the board
        taskboard move --wp WP01 --to doing     # Start work
        taskboard history --wp WP01 --note ...  # Log progress
        taskboard accept                        # Is the feature done?
    """
    # .env files may set TASKBOARD_* overrides for the config loader
    load_layered_env()

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    ctx.obj = {"debug": debug, "feature": feature}


app.command(name="list", rich_help_panel=PANEL_LANES)(lanes.list_lanes)
app.command(name="move", rich_help_panel=PANEL_LANES)(lanes.move)
app.command(name="history", rich_help_panel=PANEL_LANES)(lanes.history)
app.command(name="rollback", rich_help_panel=PANEL_LANES)(lanes.rollback)
app.command(name="mark", rich_help_panel=PANEL_LANES)(checklist.mark)

app.command(name="accept", rich_help_panel=PANEL_GATES)(lanes.accept)
app.command(name="merge", rich_help_panel=PANEL_GATES)(merge.merge)


@app.command(rich_help_panel=PANEL_INSTALL)
def version() -> None:
    """Show taskboard version and exit."""
    console.print(f"taskboard version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "cli_main"]
