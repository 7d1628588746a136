"""
Taskboard CLI - Merge command.

Gate for integrating a feature branch: refuses to start with uncommitted
changes. The integration itself is not implemented yet.
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from taskboard.cli.context import resolve_board_context
from taskboard.cli.errors import ExitCode, print_error
from taskboard.core.lanes import check_merge_gate

console = Console()


def merge(
    ctx: typer.Context,
    strategy: Annotated[
        str | None,
        typer.Option(
            "--strategy",
            help="Merge strategy (default from config: merge)",
        ),
    ] = None,
    target: Annotated[
        str | None,
        typer.Option(
            "--target",
            help="Branch to merge into (default from config: main)",
        ),
    ] = None,
) -> None:
    """
    Merge the current feature into its target branch.

    Checks that there are no staged or unstaged changes first. Exits 1
    when the working tree is dirty, and 1 afterwards as well until the
    integration step is implemented.

    Examples:
        taskboard merge
        taskboard merge --strategy squash --target develop
    """
    board = resolve_board_context(ctx)
    gate = check_merge_gate(
        board.repo_root,
        board.feature,
        strategy=strategy or board.config.merge.strategy,
        target=target or board.config.merge.target,
    )

    if not gate.clean:
        print_error(
            "Working directory has uncommitted changes",
            solution="Commit or stash changes before merging",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print(
        f"Merging feature {escape(gate.feature)} into {escape(gate.target)} "
        f"using {escape(gate.strategy)} strategy...",
        soft_wrap=True,
    )
    print_error(
        "Full merge functionality is not implemented",
        reason="Only the clean working tree check runs today",
        solution=f"git checkout {gate.target} && git merge {gate.feature}",
    )
    raise typer.Exit(ExitCode.GENERAL_ERROR)
