"""
Taskboard lanes module.

Work packages are Markdown files with a frontmatter block, stored in lane
directories under a feature's tasks/ folder:

- tasks/planned/
- tasks/doing/
- tasks/for_review/
- tasks/done/

Moving a package relocates its file, rewrites its `lane` field and adds an
entry to the top of its Activity Log.
"""

from taskboard.core.lanes.checklist import (
    TaskNotInChecklistError,
    set_task_checkbox,
    update_tasks_file,
)
from taskboard.core.lanes.layout import LaneLayout
from taskboard.core.lanes.locator import locate
from taskboard.core.lanes.models import (
    AcceptResult,
    HistoryResult,
    HistoryStatus,
    Lane,
    LaneListing,
    LocateResult,
    LocateStatus,
    MergeGateResult,
    MoveResult,
    MoveStatus,
    OutstandingPackage,
    PackageSummary,
    WorkPackage,
    WorkPackageDocument,
)
from taskboard.core.lanes.workflow import (
    LaneWorkflow,
    LaneWorkflowError,
    TasksDirectoryNotFoundError,
    check_merge_gate,
    resolve_actor,
)

__all__ = [
    # Models
    "AcceptResult",
    "HistoryResult",
    "HistoryStatus",
    "Lane",
    "LaneListing",
    "LocateResult",
    "LocateStatus",
    "MergeGateResult",
    "MoveResult",
    "MoveStatus",
    "OutstandingPackage",
    "PackageSummary",
    "WorkPackage",
    "WorkPackageDocument",
    # Layout and lookup
    "LaneLayout",
    "locate",
    # Workflow
    "LaneWorkflow",
    "LaneWorkflowError",
    "TasksDirectoryNotFoundError",
    "check_merge_gate",
    "resolve_actor",
    # Checklist
    "TaskNotInChecklistError",
    "set_task_checkbox",
    "update_tasks_file",
]
