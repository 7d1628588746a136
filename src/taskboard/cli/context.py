"""
Per-invocation context for taskboard commands.

Resolves the project root, configuration and current feature once, before
any command logic runs, and hands them to the command as explicit values.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError

from taskboard.cli.errors import (
    ExitCode,
    print_error,
    print_feature_not_detected_error,
    print_not_project_root_error,
)
from taskboard.core.config import TaskboardConfig, load_config
from taskboard.core.lanes import LaneLayout, LaneWorkflow
from taskboard.utils.git import get_current_branch
from taskboard.utils.project import detect_feature_from_path, find_project_root

logger = logging.getLogger(__name__)


@dataclass
class BoardContext:
    """Everything a command needs to act on one feature."""

    repo_root: Path
    feature: str
    config: TaskboardConfig
    layout: LaneLayout

    def workflow(self) -> LaneWorkflow:
        return LaneWorkflow(self.layout, actor=self.config.actor)


def detect_feature(cwd: Path, specs_dirname: str) -> str | None:
    """Current feature: git branch first, then the working-directory path."""
    branch = get_current_branch(cwd)
    if branch:
        return branch
    return detect_feature_from_path(cwd, specs_dirname)


def resolve_board_context(ctx: typer.Context) -> BoardContext:
    """
    Build the BoardContext for a command or exit with an error.

    Raises:
        typer.Exit: If the project root, config or feature cannot be resolved
    """
    options = ctx.obj or {}
    cwd = Path.cwd()

    repo_root = find_project_root(cwd)
    if repo_root is None:
        print_not_project_root_error()
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    try:
        config = load_config(repo_root)
    except ValidationError as e:
        print_error("Invalid taskboard configuration", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    feature = options.get("feature") or detect_feature(cwd, config.layout.specs_dir)
    if not feature:
        print_feature_not_detected_error(config.layout.specs_dir)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    logger.debug("Resolved feature %s in %s", feature, repo_root)
    layout = LaneLayout(
        repo_root,
        specs_dirname=config.layout.specs_dir,
        tasks_dirname=config.layout.tasks_dir,
    )
    return BoardContext(repo_root=repo_root, feature=feature, config=config, layout=layout)
