"""
Checkbox updates for a feature's tasks.md checklist.

Lines look like ``- [ ] WP01 Set up project``. Marking a task done turns
the box into ``[X]``; any other status clears it.
"""

import re
from pathlib import Path

from taskboard.core.lanes import document
from taskboard.core.lanes.workflow import LaneWorkflowError

CHECKLIST_FILENAME = "tasks.md"


class TaskNotInChecklistError(LaneWorkflowError):
    """Raised when no checkbox line carries the task id."""

    pass


def set_task_checkbox(text: str, task_id: str, done: bool) -> tuple[str, bool]:
    """
    Set the checkbox of the first line for `task_id`.

    Returns:
        (new_text, changed) where changed is False if no line matched
    """
    pattern = re.compile(
        rf"^(\s*-\s*)\[[ xX]\]\s+({re.escape(task_id)})(\b.*)$",
        re.MULTILINE,
    )
    checkbox = "[X]" if done else "[ ]"
    new_text, count = pattern.subn(
        lambda m: f"{m.group(1)}{checkbox} {m.group(2)}{m.group(3)}",
        text,
        count=1,
    )
    return new_text, count > 0


def update_tasks_file(path: Path, task_id: str, status: str) -> None:
    """
    Update a checklist file in place.

    Raises:
        FileNotFoundError: If the checklist file does not exist
        TaskNotInChecklistError: If no checkbox line matches task_id
    """
    if not path.is_file():
        raise FileNotFoundError(f"Tasks file not found: {path}")

    new_text, changed = set_task_checkbox(
        document.read_document(path), task_id, status.strip().lower() == "done"
    )
    if not changed:
        raise TaskNotInChecklistError(f"Task ID {task_id} not found in {path}")
    document.write_document(path, new_text)
