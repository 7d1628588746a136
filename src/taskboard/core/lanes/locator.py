"""
Work package lookup across lane directories.
"""

import logging
from pathlib import Path

from taskboard.core.lanes.layout import LaneLayout
from taskboard.core.lanes.models import (
    Lane,
    LocateResult,
    LocateStatus,
    WorkPackage,
    WorkPackageDocument,
)

logger = logging.getLogger(__name__)

IDENTIFIER_KEYS = ("work_package_id", "id")


def matches_identifier(doc: WorkPackageDocument, identifier: str) -> bool:
    """True if either the primary or the legacy id field equals `identifier`."""
    return any(doc.get(key) == identifier for key in IDENTIFIER_KEYS)


def locate(layout: LaneLayout, feature: str, identifier: str) -> LocateResult:
    """
    Find the work package with the given identifier.

    Lanes are scanned in board order and files by name; the first match
    wins. The scan still runs to the end so that further copies of the
    same identifier are reported in `duplicates` instead of being
    silently ignored.

    Args:
        layout: Lane directory layout of the project
        feature: Feature owning the work package
        identifier: Value of the work_package_id (or legacy id) field

    Returns:
        LocateResult with status FOUND or NOT_FOUND
    """
    found: WorkPackage | None = None
    duplicates: list[Path] = []
    skipped: list[Path] = []
    feature_dir = layout.feature_dir(feature)

    for lane in Lane:
        for path in layout.list_documents(layout.lane_dir(feature, lane)):
            try:
                doc = layout.read_document(path)
            except UnicodeDecodeError as e:
                logger.warning("Skipping %s: not valid UTF-8 (%s)", path, e)
                skipped.append(path)
                continue
            if not matches_identifier(doc, identifier):
                continue
            if found is not None:
                duplicates.append(path)
                continue
            found = WorkPackage(
                feature=feature,
                path=path,
                current_lane=lane,
                relative_path=path.relative_to(feature_dir).as_posix(),
                document=doc,
            )

    if found is None:
        logger.debug("Work package %s not found in feature %s", identifier, feature)
        return LocateResult(
            feature=feature,
            identifier=identifier,
            status=LocateStatus.NOT_FOUND,
            skipped=skipped,
        )

    if duplicates:
        logger.warning(
            "Work package %s has %d extra copies; using %s",
            identifier,
            len(duplicates),
            found.relative_path,
        )
    return LocateResult(
        feature=feature,
        identifier=identifier,
        status=LocateStatus.FOUND,
        work_package=found,
        duplicates=duplicates,
        skipped=skipped,
    )
