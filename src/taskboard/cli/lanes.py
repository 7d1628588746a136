"""
Taskboard CLI - Lane commands.

Move work packages between lanes and inspect the board:
planned -> doing -> for_review -> done
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from taskboard.cli.context import resolve_board_context
from taskboard.cli.errors import ExitCode, err_console, print_error, print_warning
from taskboard.core.lanes import (
    Lane,
    MoveStatus,
    TasksDirectoryNotFoundError,
)

console = Console()

# Lane colors for display
LANE_COLORS: dict[Lane, str] = {
    Lane.PLANNED: "blue",
    Lane.DOING: "cyan",
    Lane.FOR_REVIEW: "magenta",
    Lane.DONE: "green",
}

WP_OPTION_NAMES = ("--wp", "--work-package")


def _lane_name(lane: Lane | None) -> str:
    return lane.value if lane is not None else "?"


def _warn_duplicates(identifier: str, duplicates: list[Path]) -> None:
    if not duplicates:
        return
    print_warning(
        f"Work package {identifier} also exists at: "
        + ", ".join(str(p) for p in duplicates)
        + " (possibly an interrupted move; inspect and remove the stale copy)"
    )


def _warn_skipped(skipped: list[Path]) -> None:
    for path in skipped:
        print_warning(f"Skipped {path}: not valid UTF-8 text")


def _print_not_found(identifier: str, feature: str) -> None:
    print_error(
        f"Work package {identifier} not found in feature {feature}",
        solution="taskboard list",
    )


def list_lanes(ctx: typer.Context) -> None:
    """
    List work packages in every lane.

    Examples:
        taskboard list
        taskboard --feature 001-auth list
    """
    board = resolve_board_context(ctx)
    try:
        listings = board.workflow().list_lanes(board.feature)
    except TasksDirectoryNotFoundError:
        print_error(f"No tasks directory found for feature {board.feature}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    for listing in listings:
        color = LANE_COLORS[listing.lane]
        console.print()
        console.print(f"[bold {color}]{listing.lane.value.upper()}:[/bold {color}]")

        if not listing.exists:
            console.print("  [dim](lane not created)[/dim]")
        elif not listing.documents:
            console.print("  [dim](empty)[/dim]")
        else:
            for summary in listing.documents:
                line = f"  - {escape(summary.name)}"
                if summary.title:
                    line += f"  [dim]{escape(summary.title)}[/dim]"
                console.print(line, soft_wrap=True)
        _warn_skipped(listing.skipped)


def move(
    ctx: typer.Context,
    work_package: str = typer.Option(..., *WP_OPTION_NAMES, help="Work package ID"),
    to: str = typer.Option(
        ...,
        "--to",
        "--target",
        help="Target lane (planned, doing, for_review, done)",
    ),
    note: str | None = typer.Option(None, "--note", help="Activity note"),
) -> None:
    """
    Move a work package to another lane.

    Updates the package's lane field and adds an Activity Log entry.
    Moving to the lane it is already in does nothing.

    Examples:
        taskboard move --wp WP01 --to doing
        taskboard move --wp WP01 --to for-review --note "ready for eyes"
    """
    board = resolve_board_context(ctx)
    result = board.workflow().move(board.feature, work_package, to, note=note)

    if result.status == MoveStatus.INVALID_LANE:
        print_error(
            f"Invalid lane: {to}",
            reason=f"Must be one of: {', '.join(Lane.names())}",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _warn_skipped(result.skipped)

    if result.status == MoveStatus.NOT_FOUND:
        _print_not_found(work_package, board.feature)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _warn_duplicates(work_package, result.duplicates)
    to_lane = _lane_name(result.to_lane)

    if result.status == MoveStatus.DESTINATION_OCCUPIED:
        print_error(
            f"Cannot move {work_package}: {result.new_path} holds another work package",
            reason="Moving would overwrite it",
            solution="Rename one of the files so they no longer collide",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if result.status == MoveStatus.ALREADY_IN_LANE:
        console.print(
            f"Work package {escape(work_package)} already in {to_lane} lane",
            soft_wrap=True,
        )
        return

    console.print(
        f"[green]Moved[/green] {escape(work_package)} from "
        f"{_lane_name(result.from_lane)} to {to_lane}",
        soft_wrap=True,
    )
    console.print(f"  {result.old_path} → {result.new_path}", soft_wrap=True, highlight=False)


def history(
    ctx: typer.Context,
    work_package: str = typer.Option(..., *WP_OPTION_NAMES, help="Work package ID"),
    note: str | None = typer.Option(None, "--note", help="Activity note"),
) -> None:
    """
    Add an Activity Log entry without moving the work package.

    Examples:
        taskboard history --wp WP01 --note "paired with Sam on the parser"
    """
    board = resolve_board_context(ctx)
    result = board.workflow().record_history(board.feature, work_package, note=note)
    _warn_skipped(result.skipped)

    if not result.ok:
        _print_not_found(work_package, board.feature)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _warn_duplicates(work_package, result.duplicates)
    console.print(f"Added activity log entry to {escape(work_package)}")


def rollback() -> None:
    """
    Undo a lane move (not implemented).

    Moves are not journaled, so there is nothing to roll back to.
    Move the package back explicitly instead.
    """
    print_error(
        "Rollback functionality not yet implemented",
        reason="To roll back a move, move the work package back to its previous lane",
        solution="taskboard move --wp <ID> --to <previous lane>",
    )
    raise typer.Exit(ExitCode.GENERAL_ERROR)


def accept(ctx: typer.Context) -> None:
    """
    Check that every work package of the feature is in the done lane.

    Exits 0 when the feature is ready for acceptance, 1 otherwise.
    """
    board = resolve_board_context(ctx)
    try:
        result = board.workflow().accept(board.feature)
    except TasksDirectoryNotFoundError:
        print_error(f"No tasks directory found for feature {board.feature}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if result.ready:
        console.print("[green]✓[/green] All work packages are complete (in 'done' lane)")
        console.print(f"Feature {escape(board.feature)} is ready for acceptance")
        return

    for item in result.outstanding:
        err_console.print(f"  [yellow]![/yellow] {escape(str(item))} - not done", soft_wrap=True)
    print_error(
        f"{len(result.outstanding)} work package(s) not yet complete",
        solution="Move all work packages to the 'done' lane before accepting",
    )
    raise typer.Exit(ExitCode.GENERAL_ERROR)
