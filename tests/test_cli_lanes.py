"""
Tests for the taskboard CLI commands.

Every command resolves the project root and feature first, then maps the
workflow outcome to an exit code.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from taskboard import __version__
from taskboard.cli import app
from taskboard.core.lanes import Lane, LaneLayout

runner = CliRunner()


@pytest.fixture
def in_project(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("TASKBOARD_ACTOR", "cli-user")
    return project_dir


def invoke(*args: str):
    return runner.invoke(app, ["--feature", "demo", *args])


class TestContextResolution:
    """Tests for project root and feature detection."""

    def test_not_in_project(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        monkeypatch.chdir(empty)
        with patch("taskboard.cli.context.find_project_root", return_value=None):
            result = invoke("list")
        assert result.exit_code == 1
        assert "not in a git repository" in result.output.lower()

    def test_feature_from_path(self, in_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(in_project / "specs" / "demo" / "tasks")
        with patch("taskboard.cli.context.get_current_branch", return_value=None):
            result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "PLANNED:" in result.output

    def test_feature_from_branch(self, in_project: Path) -> None:
        with patch("taskboard.cli.context.get_current_branch", return_value="demo"):
            result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "DONE:" in result.output

    def test_feature_not_detected(self, in_project: Path) -> None:
        with patch("taskboard.cli.context.get_current_branch", return_value=None):
            result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "cannot determine current feature" in result.output.lower()

    def test_project_config_changes_layout(self, in_project: Path) -> None:
        (in_project / ".taskboard.json").write_text('{"layout": {"specs_dir": "kitty-specs"}}')
        (in_project / "kitty-specs" / "demo" / "tasks" / "doing").mkdir(parents=True)
        result = invoke("list")
        assert result.exit_code == 0
        assert "(lane not created)" in result.output


class TestListCommand:
    """Tests for `taskboard list`."""

    def test_list(self, in_project: Path, write_wp, layout: LaneLayout) -> None:
        write_wp("WP01-setup.md", Lane.PLANNED, "WP01", title="Set up")
        layout.lane_dir("demo", Lane.DONE).rmdir()

        result = invoke("list")

        assert result.exit_code == 0
        output = result.output
        for heading in ("PLANNED:", "DOING:", "FOR_REVIEW:", "DONE:"):
            assert heading in output
        assert "- WP01-setup.md" in output
        assert "Set up" in output
        assert "(empty)" in output
        assert "(lane not created)" in output

    def test_list_skips_undecodable_file(self, in_project: Path, layout: LaneLayout) -> None:
        (layout.lane_dir("demo", Lane.PLANNED) / "notes.md").write_bytes(b"caf\xe9\n")

        result = invoke("list")

        assert result.exit_code == 0
        assert "notes.md" in result.output
        assert "not valid UTF-8" in result.output

    def test_list_missing_tasks_dir(self, in_project: Path) -> None:
        result = runner.invoke(app, ["--feature", "ghost", "list"])
        assert result.exit_code == 1
        assert "No tasks directory found for feature ghost" in result.output


class TestMoveCommand:
    """Tests for `taskboard move`."""

    def test_move_then_noop(self, in_project: Path, write_wp, layout: LaneLayout) -> None:
        write_wp("WP01.md", Lane.PLANNED, "WP01", declared_lane="planned")

        result = invoke("move", "--wp", "WP01", "--to", "doing", "--note", "start work")
        assert result.exit_code == 0
        assert "Moved WP01 from planned to doing" in result.output

        target = layout.lane_dir("demo", Lane.DOING) / "WP01.md"
        text = target.read_text(encoding="utf-8")
        assert "lane: doing" in text
        assert "| cli-user | planned → doing | start work" in text

        again = invoke("move", "--wp", "WP01", "--to", "doing")
        assert again.exit_code == 0
        assert "already in doing lane" in again.output
        assert target.read_text(encoding="utf-8") == text

    def test_move_aliases(self, in_project: Path, write_wp, layout: LaneLayout) -> None:
        write_wp("WP01.md", Lane.PLANNED, "WP01")
        result = invoke("move", "--work-package", "WP01", "--target", "for-review")
        assert result.exit_code == 0
        assert (layout.lane_dir("demo", Lane.FOR_REVIEW) / "WP01.md").exists()

    def test_move_invalid_lane(self, in_project: Path, write_wp) -> None:
        path = write_wp("WP01.md", Lane.PLANNED, "WP01")
        result = invoke("move", "--wp", "WP01", "--to", "review")
        assert result.exit_code == 1
        assert "Invalid lane: review" in result.output
        assert "planned, doing, for_review, done" in result.output
        assert path.exists()

    def test_move_not_found(self, in_project: Path) -> None:
        result = invoke("move", "--wp", "WP42", "--to", "doing")
        assert result.exit_code == 1
        assert "Work package WP42 not found in feature demo" in result.output

    def test_move_missing_required_option(self, in_project: Path) -> None:
        result = invoke("move", "--wp", "WP01")
        assert result.exit_code != 0

    def test_move_into_occupied_file_name(self, in_project: Path, write_wp) -> None:
        source = write_wp("task.md", Lane.PLANNED, "WP01")
        occupant = write_wp("task.md", Lane.DOING, "WP02")
        before = occupant.read_bytes()

        result = invoke("move", "--wp", "WP01", "--to", "doing")

        assert result.exit_code == 1
        assert "holds another work package" in result.output
        assert source.exists()
        assert occupant.read_bytes() == before

    def test_move_warns_about_undecodable_file(
        self, in_project: Path, write_wp, layout: LaneLayout
    ) -> None:
        write_wp("WP01.md", Lane.PLANNED, "WP01")
        (layout.lane_dir("demo", Lane.DOING) / "notes.md").write_bytes(b"caf\xe9\n")

        result = invoke("move", "--wp", "WP01", "--to", "done")

        assert result.exit_code == 0
        assert "not valid UTF-8" in result.output
        assert "Moved WP01 from planned to done" in result.output

    def test_move_warns_about_duplicates(self, in_project: Path, write_wp) -> None:
        write_wp("WP01.md", Lane.PLANNED, "WP01")
        write_wp("WP01-old.md", Lane.DONE, "WP01")
        result = invoke("move", "--wp", "WP01", "--to", "doing")
        assert result.exit_code == 0
        assert "Warning:" in result.output
        assert "WP01-old.md" in result.output


class TestHistoryCommand:
    """Tests for `taskboard history`."""

    def test_history(self, in_project: Path, write_wp) -> None:
        path = write_wp("WP01.md", Lane.DOING, "WP01")
        result = invoke("history", "--wp", "WP01", "--note", "halfway")
        assert result.exit_code == 0
        assert "Added activity log entry to WP01" in result.output
        assert "| cli-user | doing | halfway" in path.read_text(encoding="utf-8")

    def test_history_not_found(self, in_project: Path) -> None:
        result = invoke("history", "--wp", "WP42")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestAcceptCommand:
    """Tests for `taskboard accept`."""

    def test_accept_outstanding_then_ready(
        self, in_project: Path, write_wp, layout: LaneLayout
    ) -> None:
        path = write_wp("WP01.md", Lane.FOR_REVIEW, "WP01")

        result = invoke("accept")
        assert result.exit_code == 1
        assert "for_review/WP01.md - not done" in result.output
        assert "1 work package(s) not yet complete" in result.output

        path.rename(layout.lane_dir("demo", Lane.DONE) / path.name)
        result = invoke("accept")
        assert result.exit_code == 0
        assert "ready for acceptance" in result.output

    def test_accept_missing_tasks_dir(self, in_project: Path) -> None:
        result = runner.invoke(app, ["--feature", "ghost", "accept"])
        assert result.exit_code == 1


class TestRollbackCommand:
    def test_rollback_always_fails(self, in_project: Path) -> None:
        result = invoke("rollback")
        assert result.exit_code == 1
        assert "not yet implemented" in result.output
        assert "taskboard move" in result.output


class TestMergeCommand:
    """Tests for `taskboard merge`."""

    @patch("taskboard.core.lanes.workflow.is_working_tree_clean", return_value=False)
    def test_merge_dirty(self, mock_clean, in_project: Path) -> None:
        result = invoke("merge")
        assert result.exit_code == 1
        assert "uncommitted changes" in result.output
        assert "Merging feature" not in result.output

    @patch("taskboard.core.lanes.workflow.is_working_tree_clean", return_value=True)
    def test_merge_clean_not_implemented(self, mock_clean, in_project: Path) -> None:
        result = invoke("merge", "--strategy", "squash", "--target", "develop")
        assert result.exit_code == 1
        assert "Merging feature demo into develop using squash strategy" in result.output
        assert "not implemented" in result.output

    @patch("taskboard.core.lanes.workflow.is_working_tree_clean", return_value=True)
    def test_merge_defaults_from_config(self, mock_clean, in_project: Path) -> None:
        result = invoke("merge")
        assert "into main using merge strategy" in result.output


class TestMarkCommand:
    """Tests for `taskboard mark`."""

    def test_mark_done_in_feature_checklist(self, in_project: Path) -> None:
        checklist = in_project / "specs" / "demo" / "tasks.md"
        checklist.write_text("- [ ] WP01 Set up\n- [ ] WP02 Build\n")

        result = invoke("mark", "WP01", "done")

        assert result.exit_code == 0
        assert checklist.read_text() == "- [X] WP01 Set up\n- [ ] WP02 Build\n"

    def test_mark_explicit_file(self, in_project: Path) -> None:
        checklist = in_project / "checklist.md"
        checklist.write_text("  - [x] WP03 Ship\n")
        result = runner.invoke(app, ["mark", "WP03", "planned", "--file", str(checklist)])
        assert result.exit_code == 0
        assert checklist.read_text() == "  - [ ] WP03 Ship\n"

    def test_mark_missing_file(self, in_project: Path) -> None:
        result = invoke("mark", "WP01", "done")
        assert result.exit_code == 1
        assert "Tasks file not found" in result.output

    def test_mark_unknown_task(self, in_project: Path) -> None:
        (in_project / "specs" / "demo" / "tasks.md").write_text("- [ ] WP01 Set up\n")
        result = invoke("mark", "WP09", "done")
        assert result.exit_code == 1
        assert "Task ID WP09 not found" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output
