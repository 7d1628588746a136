"""
Work package lifecycle operations for taskboard.

Provides the LaneWorkflow class that moves work packages between lane
directories, records activity log entries and checks the acceptance gate.
"""

import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from taskboard.core.lanes import document
from taskboard.core.lanes.layout import LaneLayout
from taskboard.core.lanes.locator import locate, matches_identifier
from taskboard.core.lanes.models import (
    AcceptResult,
    HistoryResult,
    HistoryStatus,
    Lane,
    LaneListing,
    LocateResult,
    MergeGateResult,
    MoveResult,
    MoveStatus,
    OutstandingPackage,
)
from taskboard.utils.git import is_working_tree_clean

logger = logging.getLogger(__name__)

UNKNOWN_ACTOR = "unknown"
DEFAULT_HISTORY_NOTE = "Activity recorded"


class LaneWorkflowError(Exception):
    """Base exception for lane workflow errors."""

    pass


class TasksDirectoryNotFoundError(LaneWorkflowError):
    """Raised when a feature has no tasks directory."""

    def __init__(self, feature: str, path: Path) -> None:
        super().__init__(f"No tasks directory found for feature {feature}: {path}")
        self.feature = feature
        self.path = path


def resolve_actor(configured: str | None = None) -> str:
    """Name recorded in activity log entries.

    Never fails: falls back to "unknown" when no identity is available.
    """
    return configured or os.environ.get("USER") or UNKNOWN_ACTOR


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LaneWorkflow:
    """
    Manages work packages across the planned/doing/for_review/done lanes.

    Transitions are unrestricted: any lane can move to any other lane,
    including backwards. The feature is passed explicitly to every
    operation.

    Example:
        >>> workflow = LaneWorkflow(LaneLayout(Path(".")))
        >>> result = workflow.move("demo", "WP01", "doing", note="start work")
        >>> result.status
        <MoveStatus.MOVED: 'moved'>
    """

    def __init__(
        self,
        layout: LaneLayout,
        actor: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the LaneWorkflow.

        Args:
            layout: Directory layout of the project
            actor: Name for activity log entries (default: $USER or "unknown")
            clock: Returns the current time; injectable for tests
        """
        self.layout = layout
        self.actor = resolve_actor(actor)
        self.clock = clock or _utc_now

    def _timestamp(self) -> str:
        return document.utc_timestamp(self.clock())

    def _require_tasks_dir(self, feature: str) -> Path:
        tasks_dir = self.layout.tasks_dir(feature)
        if not tasks_dir.is_dir():
            raise TasksDirectoryNotFoundError(feature, tasks_dir)
        return tasks_dir

    def locate(self, feature: str, identifier: str) -> LocateResult:
        return locate(self.layout, feature, identifier)

    def list_lanes(self, feature: str) -> list[LaneListing]:
        """
        List the documents in each lane, in board order.

        Files that are not UTF-8 text are left out of `documents` and
        reported in `skipped`.

        Raises:
            TasksDirectoryNotFoundError: If the feature has no tasks directory
        """
        self._require_tasks_dir(feature)
        listings: list[LaneListing] = []
        for lane in Lane:
            lane_dir = self.layout.lane_dir(feature, lane)
            listing = LaneListing(lane=lane, path=lane_dir, exists=lane_dir.is_dir())
            for path in self.layout.list_documents(lane_dir):
                try:
                    listing.documents.append(self.layout.summarize(path))
                except UnicodeDecodeError as e:
                    logger.warning("Skipping %s: not valid UTF-8 (%s)", path, e)
                    listing.skipped.append(path)
            listings.append(listing)
        return listings

    def _destination_holds_other(self, path: Path, identifier: str) -> bool:
        """True if `path` exists and is not a copy of `identifier`."""
        if not path.exists():
            return False
        try:
            existing = self.layout.read_document(path)
        except UnicodeDecodeError:
            return True
        return not matches_identifier(existing, identifier)

    def move(
        self,
        feature: str,
        identifier: str,
        target_lane: str,
        note: str | None = None,
    ) -> MoveResult:
        """
        Move a work package to another lane.

        The file keeps its name and changes directory. Its `lane` field is
        updated and one activity log entry is added. The new content is
        written to the destination before the source is removed, so an
        interrupted move leaves the package in at least one lane.

        Returns:
            MoveResult with status MOVED, ALREADY_IN_LANE (nothing written),
            or NOT_FOUND, INVALID_LANE and DESTINATION_OCCUPIED (all without
            side effects). A destination file is only replaced when it is a
            copy of the same work package left by an interrupted move.
        """
        lane = Lane.normalize(target_lane)
        if lane is None:
            return MoveResult(
                feature=feature,
                identifier=identifier,
                status=MoveStatus.INVALID_LANE,
                requested_lane=target_lane,
            )

        located = self.locate(feature, identifier)
        wp = located.work_package
        if wp is None:
            return MoveResult(
                feature=feature,
                identifier=identifier,
                status=MoveStatus.NOT_FOUND,
                requested_lane=target_lane,
                to_lane=lane,
                skipped=located.skipped,
            )

        if wp.current_lane == lane:
            return MoveResult(
                feature=feature,
                identifier=identifier,
                status=MoveStatus.ALREADY_IN_LANE,
                requested_lane=target_lane,
                from_lane=wp.current_lane,
                to_lane=lane,
                old_path=wp.path,
                new_path=wp.path,
                duplicates=located.duplicates,
                skipped=located.skipped,
            )

        new_path = self.layout.lane_dir(feature, lane) / wp.filename
        if self._destination_holds_other(new_path, identifier):
            logger.warning(
                "Refusing to move %s: %s holds another document", identifier, new_path
            )
            return MoveResult(
                feature=feature,
                identifier=identifier,
                status=MoveStatus.DESTINATION_OCCUPIED,
                requested_lane=target_lane,
                from_lane=wp.current_lane,
                to_lane=lane,
                old_path=wp.path,
                new_path=new_path,
                duplicates=located.duplicates,
                skipped=located.skipped,
            )

        entry = document.format_entry(
            self._timestamp(),
            self.actor,
            f"{wp.current_lane.value} → {lane.value}",
            note or f"Moved to {lane.value}",
        )
        updated = wp.document.with_field("lane", lane.value).with_activity(entry)

        if new_path.exists():
            logger.warning("Replacing stale copy %s while moving %s", new_path, identifier)
        new_path.parent.mkdir(parents=True, exist_ok=True)
        document.write_document(new_path, updated.to_text())
        wp.path.unlink()

        logger.info(
            "Moved %s from %s to %s (%s)",
            identifier,
            wp.current_lane.value,
            lane.value,
            new_path,
        )
        return MoveResult(
            feature=feature,
            identifier=identifier,
            status=MoveStatus.MOVED,
            requested_lane=target_lane,
            from_lane=wp.current_lane,
            to_lane=lane,
            old_path=wp.path,
            new_path=new_path,
            entry=entry,
            duplicates=located.duplicates,
            skipped=located.skipped,
        )

    def record_history(
        self,
        feature: str,
        identifier: str,
        note: str | None = None,
    ) -> HistoryResult:
        """
        Add an activity log entry without moving the package.

        Repeated calls add repeated entries; nothing is deduplicated.
        """
        located = self.locate(feature, identifier)
        wp = located.work_package
        if wp is None:
            return HistoryResult(
                feature=feature,
                identifier=identifier,
                status=HistoryStatus.NOT_FOUND,
                skipped=located.skipped,
            )

        entry = document.format_entry(
            self._timestamp(),
            self.actor,
            wp.current_lane.value,
            note or DEFAULT_HISTORY_NOTE,
        )
        document.write_document(wp.path, wp.document.with_activity(entry).to_text())

        logger.info("Recorded activity for %s in %s", identifier, wp.path)
        return HistoryResult(
            feature=feature,
            identifier=identifier,
            status=HistoryStatus.RECORDED,
            lane=wp.current_lane,
            path=wp.path,
            entry=entry,
            duplicates=located.duplicates,
            skipped=located.skipped,
        )

    def accept(self, feature: str) -> AcceptResult:
        """
        Check that every work package of a feature is done.

        Read-only.

        Raises:
            TasksDirectoryNotFoundError: If the feature has no tasks directory
        """
        self._require_tasks_dir(feature)
        outstanding = [
            OutstandingPackage(lane=lane, name=path.name)
            for lane in Lane
            if lane != Lane.DONE
            for path in self.layout.list_documents(self.layout.lane_dir(feature, lane))
        ]
        return AcceptResult(feature=feature, outstanding=outstanding)


def check_merge_gate(
    repo_root: Path,
    feature: str,
    strategy: str = "merge",
    target: str = "main",
) -> MergeGateResult:
    """Check that the working tree has no staged or unstaged changes."""
    clean = is_working_tree_clean(repo_root)
    if not clean:
        logger.info("Merge gate closed for %s: working tree has changes", feature)
    return MergeGateResult(feature=feature, clean=clean, strategy=strategy, target=target)
