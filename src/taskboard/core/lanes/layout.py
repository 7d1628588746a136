"""
Lane directory layout for taskboard.

Maps (feature, lane) pairs to directories:

    <repo_root>/<specs_dir>/<feature>/<tasks_dir>/<lane>/

and enumerates the work package files inside a lane.
"""

import logging
from pathlib import Path

from taskboard.core.lanes import document
from taskboard.core.lanes.models import Lane, PackageSummary, WorkPackageDocument

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".md"


class LaneLayout:
    """
    Filesystem layout of a project's work packages.

    Example:
        >>> layout = LaneLayout(Path("/repo"))
        >>> layout.lane_dir("demo", Lane.DOING)
        PosixPath('/repo/specs/demo/tasks/doing')
    """

    def __init__(
        self,
        repo_root: Path,
        specs_dirname: str = "specs",
        tasks_dirname: str = "tasks",
    ) -> None:
        self.repo_root = Path(repo_root)
        self.specs_dirname = specs_dirname
        self.tasks_dirname = tasks_dirname

    def feature_dir(self, feature: str) -> Path:
        return self.repo_root / self.specs_dirname / feature

    def tasks_dir(self, feature: str) -> Path:
        return self.feature_dir(feature) / self.tasks_dirname

    def lane_dir(self, feature: str, lane: Lane) -> Path:
        """Directory for a lane. It does not have to exist."""
        return self.tasks_dir(feature) / lane.value

    @staticmethod
    def list_documents(lane_dir: Path) -> list[Path]:
        """
        List work package files directly inside a lane directory.

        Returns:
            Markdown files sorted by name; empty if the directory is absent.
        """
        if not lane_dir.is_dir():
            return []
        return sorted(
            (p for p in lane_dir.iterdir() if p.is_file() and p.suffix == DOCUMENT_SUFFIX),
            key=lambda p: p.name,
        )

    @staticmethod
    def read_document(path: Path) -> WorkPackageDocument:
        return WorkPackageDocument.from_text(document.read_document(path))

    def summarize(self, path: Path) -> PackageSummary:
        """Build a listing entry for a work package file.

        Uses the parsed frontmatter so quoted or folded titles come out
        clean, and falls back to line lookups when the YAML is malformed.

        Raises:
            UnicodeDecodeError: If the file is not UTF-8 text
        """
        doc = self.read_document(path)
        metadata = doc.metadata
        if metadata:
            identifier = metadata.get("work_package_id") or metadata.get("id")
            title = metadata.get("title")
        else:
            if doc.metadata_block:
                logger.debug("Falling back to scalar lookup for %s", path)
            identifier = doc.get("work_package_id") or doc.get("id")
            title = doc.get("title")

        return PackageSummary(
            name=path.name,
            identifier=str(identifier) if identifier is not None else None,
            title=str(title) if title is not None else None,
        )
