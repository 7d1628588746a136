"""
Project root discovery utilities for taskboard.

This module provides functions for discovering project boundaries
by searching for marker files like .taskboard/, .taskboard.json, or .git/,
and for reading the current feature out of a working-directory path.
"""

from pathlib import Path

# Markers that indicate a project root, in order of priority
PROJECT_ROOT_MARKERS = [
    ".taskboard",  # Taskboard directory
    ".taskboard.json",  # Taskboard configuration file
    ".git",  # Git repository
]


def find_project_root(start: Path | None = None) -> Path | None:
    """
    Find the project root directory by searching upward for marker files.

    Args:
        start: Directory to start searching from. Defaults to current working directory.

    Returns:
        Path to the project root directory, or None if not found.

    Example:
        >>> find_project_root(Path("/project/specs/demo/tasks"))
        PosixPath('/project')
    """
    if start is None:
        start = Path.cwd()

    current = start.resolve()
    while True:
        for marker in PROJECT_ROOT_MARKERS:
            if (current / marker).exists():
                return current
        if current == current.parent:  # Filesystem root
            return None
        current = current.parent


def detect_feature_from_path(path: Path, specs_dirname: str = "specs") -> str | None:
    """
    Read the feature name from a path inside the specs directory.

    Example:
        >>> detect_feature_from_path(Path("/repo/specs/001-auth/tasks"))
        '001-auth'
    """
    parts = path.parts
    for index, part in enumerate(parts[:-1]):
        if part == specs_dirname:
            return parts[index + 1]
    return None
