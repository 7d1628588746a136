"""
Pytest configuration and shared fixtures.

Provides a temporary project with a lane directory tree and helpers for
writing work package documents.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from taskboard.core.config import clear_cache
from taskboard.core.lanes import Lane, LaneLayout, LaneWorkflow

FIXED_NOW = datetime(2026, 1, 24, 15, 30, 0, tzinfo=timezone.utc)


def make_document(
    identifier: str,
    declared_lane: str | None = None,
    title: str | None = None,
    body: str = "",
    id_key: str = "work_package_id",
) -> str:
    """Render a work package document with a frontmatter block."""
    lines = ["---", f"{id_key}: {identifier}"]
    if title is not None:
        lines.append(f'title: "{title}"')
    if declared_lane is not None:
        lines.append(f"lane: {declared_lane}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config, .env files and cached config out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for var in ("TASKBOARD_SPECS_DIR", "TASKBOARD_TASKS_DIR", "TASKBOARD_ACTOR"):
        monkeypatch.delenv(var, raising=False)
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def project_dir(tmp_path):
    """
    Provide a temporary project root.

    Creates:
    - .taskboard/ marker
    - specs/demo/tasks/ with all four lane directories
    """
    project = tmp_path / "project"
    (project / ".taskboard").mkdir(parents=True)
    for lane in Lane:
        (project / "specs" / "demo" / "tasks" / lane.value).mkdir(parents=True)
    return project


@pytest.fixture
def layout(project_dir):
    return LaneLayout(project_dir)


@pytest.fixture
def workflow(layout):
    """LaneWorkflow with a fixed actor and clock."""
    return LaneWorkflow(layout, actor="tester", clock=lambda: FIXED_NOW)


@pytest.fixture
def write_wp(layout):
    """Write a work package into a lane of the demo feature."""

    def _write(
        filename: str,
        lane: Lane,
        identifier: str,
        body: str = "",
        feature: str = "demo",
        **kwargs,
    ) -> Path:
        lane_dir = layout.lane_dir(feature, lane)
        lane_dir.mkdir(parents=True, exist_ok=True)
        path = lane_dir / filename
        path.write_text(make_document(identifier, body=body, **kwargs), encoding="utf-8")
        return path

    return _write
