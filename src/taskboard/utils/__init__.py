"""Utility modules for taskboard."""

from .project import detect_feature_from_path, find_project_root

__all__ = [
    "detect_feature_from_path",
    "find_project_root",
]
