"""
Standardized error handling and exit codes for the taskboard CLI.

Errors and warnings go to stderr with optional actionable guidance so
that stdout only carries command output.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

err_console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for taskboard operations."""

    SUCCESS = 0
    """Operation completed successfully (including no-op moves)."""

    GENERAL_ERROR = 1
    """Not found, invalid lane, failed gate, or unimplemented operation."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Invalid lane: review",
        ...     reason="Lanes are: planned, doing, for_review, done",
        ... )
    """
    err_console.print(f"[red]Error:[/red] {escape(problem)}", soft_wrap=True)

    if reason:
        err_console.print(f"[dim]{escape(reason)}[/dim]", soft_wrap=True)

    if solution:
        err_console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}", soft_wrap=True)


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)


def print_not_project_root_error() -> None:
    """Print error when not in a taskboard project directory."""
    print_error(
        "Not in a git repository or taskboard project",
        reason="Could not find .taskboard/, .taskboard.json, or .git/",
        solution="cd to your project root",
    )


def print_feature_not_detected_error(specs_dir: str) -> None:
    """Print error when the current feature cannot be determined."""
    print_error(
        "Cannot determine current feature",
        reason=f"Not on a feature branch and not inside {specs_dir}/<feature>/",
        solution="taskboard --feature <name> <command>",
    )
