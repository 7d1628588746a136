"""
Work package data models for taskboard.

Defines the Lane enum, the WorkPackageDocument / WorkPackage models and the
result models returned by lifecycle operations. Work packages are Markdown
files with a frontmatter block, stored one per file in lane directories
(planned, doing, for_review, done) under a feature's tasks/ folder.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import frontmatter  # type: ignore[import-untyped]
import yaml
from pydantic import BaseModel, Field

from taskboard.core.lanes import document


class Lane(str, Enum):
    """Kanban lanes a work package moves through.

    Lane directories, in board order:
    - tasks/planned/
    - tasks/doing/
    - tasks/for_review/
    - tasks/done/

    DONE is terminal by policy only: the accept gate checks it, but moves out
    of done are allowed.
    """

    PLANNED = "planned"
    DOING = "doing"
    FOR_REVIEW = "for_review"
    DONE = "done"

    @classmethod
    def normalize(cls, value: str | None) -> "Lane | None":
        """Normalize a user-supplied lane name.

        Case-folds and maps dashes and spaces to underscores, so
        "For-Review" and "for review" both resolve to FOR_REVIEW.

        Returns:
            The matching Lane, or None if the name is not a lane.
        """
        if value is None:
            return None
        key = value.strip().casefold().replace("-", "_").replace(" ", "_")
        for lane in cls:
            if lane.value == key:
                return lane
        return None

    @classmethod
    def names(cls) -> list[str]:
        return [lane.value for lane in cls]


class WorkPackageDocument(BaseModel):
    """
    A work package file split into metadata block, padding and body.

    The metadata block is kept as raw text. Scalar lookups and edits are
    line-level text operations so untouched fields keep their exact bytes.
    """

    metadata_block: str = ""
    body: str = ""
    padding: str = ""

    @classmethod
    def from_text(cls, text: str) -> "WorkPackageDocument":
        metadata_block, body, padding = document.split(text)
        return cls(metadata_block=metadata_block, body=body, padding=padding)

    def to_text(self) -> str:
        return document.join(self.metadata_block, self.body, self.padding)

    def get(self, key: str) -> str | None:
        return document.get_scalar(self.metadata_block, key)

    def with_field(self, key: str, value: str) -> "WorkPackageDocument":
        """Return a copy with one metadata field set."""
        return self.model_copy(
            update={"metadata_block": document.set_scalar(self.metadata_block, key, value)}
        )

    def with_activity(self, entry_line: str) -> "WorkPackageDocument":
        """Return a copy with an entry added at the top of the Activity Log."""
        return self.model_copy(
            update={
                "body": document.append_activity_log(
                    self.body, entry_line, newline=document.line_ending(self.to_text())
                )
            }
        )

    @property
    def metadata(self) -> dict[str, Any]:
        """Parsed (read-only) view of the metadata block.

        Returns an empty dict when the block is missing or is not valid YAML.
        """
        if not self.metadata_block:
            return {}
        try:
            post = frontmatter.loads(self.metadata_block)
        except (yaml.YAMLError, ValueError, TypeError):
            # Non-mapping frontmatter makes the parser fail on dict.update
            return {}
        return dict(post.metadata)


class WorkPackage(BaseModel):
    """
    A work package document located in a lane directory.

    Example:
        >>> wp = WorkPackage(
        ...     feature="demo",
        ...     path=Path("specs/demo/tasks/planned/WP01-setup.md"),
        ...     current_lane=Lane.PLANNED,
        ...     relative_path="tasks/planned/WP01-setup.md",
        ...     document=WorkPackageDocument.from_text("---\\nwork_package_id: WP01\\n---\\n"),
        ... )
        >>> wp.identifier
        'WP01'
    """

    feature: str = Field(..., description="Feature (branch) owning the package")
    path: Path = Field(..., description="Path to the work package file")
    current_lane: Lane = Field(..., description="Lane derived from the containing directory")
    relative_path: str = Field(..., description="Path relative to the feature directory")
    document: WorkPackageDocument = Field(default_factory=WorkPackageDocument)

    @property
    def identifier(self) -> str | None:
        return self.document.get("work_package_id") or self.document.get("id")

    @property
    def title(self) -> str | None:
        return self.document.get("title")

    @property
    def declared_lane(self) -> str | None:
        """Raw `lane` metadata field, if present."""
        return self.document.get("lane")

    @property
    def lane(self) -> Lane:
        """Lane from metadata when it names a valid lane, else the directory lane."""
        return Lane.normalize(self.declared_lane) or self.current_lane

    @property
    def filename(self) -> str:
        return self.path.name


class PackageSummary(BaseModel):
    """Lightweight listing entry for a work package file."""

    name: str
    identifier: str | None = None
    title: str | None = None


class LaneListing(BaseModel):
    """Contents of one lane directory."""

    lane: Lane
    path: Path
    exists: bool
    documents: list[PackageSummary] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)


class LocateStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


class LocateResult(BaseModel):
    """Outcome of a work package lookup.

    `duplicates` lists every further file carrying the same identifier,
    in lane order. A non-empty list means the board is inconsistent
    (usually an interrupted move).
    `skipped` lists files that could not be read as UTF-8 text.
    """

    feature: str
    identifier: str
    status: LocateStatus
    work_package: WorkPackage | None = None
    duplicates: list[Path] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == LocateStatus.FOUND


class MoveStatus(str, Enum):
    MOVED = "moved"
    ALREADY_IN_LANE = "already_in_lane"
    NOT_FOUND = "not_found"
    INVALID_LANE = "invalid_lane"
    DESTINATION_OCCUPIED = "destination_occupied"


class MoveResult(BaseModel):
    """Outcome of a lane move."""

    feature: str
    identifier: str
    status: MoveStatus
    requested_lane: str
    from_lane: Lane | None = None
    to_lane: Lane | None = None
    old_path: Path | None = None
    new_path: Path | None = None
    entry: str | None = None
    duplicates: list[Path] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (MoveStatus.MOVED, MoveStatus.ALREADY_IN_LANE)


class HistoryStatus(str, Enum):
    RECORDED = "recorded"
    NOT_FOUND = "not_found"


class HistoryResult(BaseModel):
    """Outcome of recording an activity log entry without moving."""

    feature: str
    identifier: str
    status: HistoryStatus
    lane: Lane | None = None
    path: Path | None = None
    entry: str | None = None
    duplicates: list[Path] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == HistoryStatus.RECORDED


class OutstandingPackage(BaseModel):
    lane: Lane
    name: str

    def __str__(self) -> str:
        return f"{self.lane.value}/{self.name}"


class AcceptResult(BaseModel):
    """Outcome of the completion gate."""

    feature: str
    outstanding: list[OutstandingPackage] = Field(default_factory=list)

    @property
    def ready(self) -> bool:
        return not self.outstanding


class MergeGateResult(BaseModel):
    """Outcome of the pre-merge clean working tree check."""

    feature: str
    clean: bool
    strategy: str
    target: str
