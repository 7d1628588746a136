"""
Configuration data models for taskboard.

These models define the structure of .taskboard.json and
~/.config/taskboard/config.json files, with validation and type safety
via Pydantic.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LayoutConfig(BaseModel):
    """
    Where work packages live inside the repository.

    Lane directories resolve to <specs_dir>/<feature>/<tasks_dir>/<lane>/.
    """
    specs_dir: str = Field(
        default="specs",
        min_length=1,
        description="Directory (relative to the project root) holding one folder per feature"
    )
    tasks_dir: str = Field(
        default="tasks",
        min_length=1,
        description="Folder inside a feature directory holding the lane directories"
    )

    @field_validator("specs_dir", "tasks_dir")
    @classmethod
    def validate_relative_name(cls, v: str) -> str:
        """Reject absolute paths and parent references."""
        if v.startswith("/") or ".." in v.split("/"):
            raise ValueError(f"must be a relative directory name, got {v!r}")
        return v


class MergeConfig(BaseModel):
    """Defaults for the merge gate."""
    strategy: str = Field(
        default="merge",
        description="Integration strategy reported by `taskboard merge`"
    )
    target: str = Field(
        default="main",
        description="Branch a feature is merged into"
    )


class TaskboardConfig(BaseModel):
    """
    Top-level taskboard configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = TaskboardConfig(layout=LayoutConfig(specs_dir="kitty-specs"))
        >>> config.layout.tasks_dir
        'tasks'
    """
    layout: LayoutConfig = Field(
        default_factory=LayoutConfig,
        description="Work package directory layout"
    )
    merge: MergeConfig = Field(
        default_factory=MergeConfig,
        description="Merge gate defaults"
    )
    actor: Optional[str] = Field(
        default=None,
        description="Name written to activity log entries (defaults to $USER)"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )
