"""
Taskboard CLI - Checklist command.

Tick or clear a task's checkbox in the feature's tasks.md.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from taskboard.cli.context import resolve_board_context
from taskboard.cli.errors import ExitCode, print_error
from taskboard.core.lanes import TaskNotInChecklistError, update_tasks_file
from taskboard.core.lanes.checklist import CHECKLIST_FILENAME

console = Console()


def mark(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID as written in the checklist (e.g. WP01)"),
    status: str = typer.Argument(..., help="'done' ticks the box, anything else clears it"),
    tasks_file: Path | None = typer.Option(
        None,
        "--file",
        help="Checklist file (default: <feature dir>/tasks.md)",
    ),
) -> None:
    """
    Update a task's checkbox in tasks.md.

    Examples:
        taskboard mark WP01 done
        taskboard mark WP02 planned --file specs/001-auth/tasks.md
    """
    if tasks_file is None:
        board = resolve_board_context(ctx)
        tasks_file = board.layout.feature_dir(board.feature) / CHECKLIST_FILENAME

    try:
        update_tasks_file(tasks_file, task_id, status)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except TaskNotInChecklistError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    box = "[X]" if status.strip().lower() == "done" else "[ ]"
    console.print(f"{escape(box)} {escape(task_id)}", soft_wrap=True)
