"""
Git utilities for taskboard.

Provides the two git facts the lane tooling needs: the current branch
(used as the feature name) and whether the working tree is clean (the
merge gate).
"""

from __future__ import annotations

import subprocess
from pathlib import Path


def get_current_branch(cwd: Path | None = None) -> str | None:
    """Get the current branch name.

    Returns:
        Branch name, or None outside a repository, when git is missing,
        or on a detached HEAD.
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None

    branch = result.stdout.strip()
    if not branch or branch == "HEAD":
        return None
    return branch


def _git_quiet(repo_root: Path, *args: str) -> bool:
    try:
        result = subprocess.run(
            ["git", "-C", str(repo_root), *args],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        # Git not installed
        return False
    return result.returncode == 0


def is_working_tree_clean(repo_root: Path) -> bool:
    """Check for uncommitted changes, both unstaged and staged.

    Returns:
        True only if both `git diff` and `git diff --cached` report no
        changes. Any git failure counts as not clean.
    """
    return _git_quiet(repo_root, "diff", "--quiet", "--exit-code") and _git_quiet(
        repo_root, "diff", "--cached", "--quiet", "--exit-code"
    )
