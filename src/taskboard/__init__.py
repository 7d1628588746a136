"""
Taskboard - file-based kanban for work packages

A CLI tool that moves work package documents through the planned, doing,
for_review and done lanes while keeping their metadata, location and
activity log consistent.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
