from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from models.models_user import ApplicationStage, ApplicationTask, ApplicationTaskGroup, ShortlistedUniversity

# Static deadline assigned when a university is locked
DEFAULT_APPLICATION_DEADLINE = datetime(2024, 12, 15, tzinfo=timezone.utc)

def toggle_shortlist(shortlist: List[Dict[str, Any]], university: ShortlistedUniversity) -> List[Dict[str, Any]]:
    """Remove the university if it is already shortlisted, otherwise add it unlocked."""
    if any(u.get("name") == university.name for u in shortlist):
        return [u for u in shortlist if u.get("name") != university.name]
    entry = university.model_copy(update={"locked": False, "application_deadline": None})
    return shortlist + [entry.model_dump()]

def lock_university(shortlist: List[Dict[str, Any]], name: str) -> Tuple[Optional[List[Dict[str, Any]]], str]:
    """
    Lock a shortlisted university and move the student into the applying stage.
    Returns (None, stage) when the name is not shortlisted.
    """
    if not any(u.get("name") == name for u in shortlist):
        return None, ApplicationStage.DISCOVERING.value
    updated = []
    for u in shortlist:
        if u.get("name") == name:
            u = {**u, "locked": True, "application_deadline": DEFAULT_APPLICATION_DEADLINE}
        updated.append(u)
    stage = ApplicationStage.APPLYING if any(u.get("locked") for u in updated) else ApplicationStage.DISCOVERING
    return updated, stage.value

def replace_tasks(task_groups: List[Dict[str, Any]], university_name: str, tasks: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Swap the task group for one university; every new task starts incomplete."""
    group = ApplicationTaskGroup(
        university_name=university_name,
        tasks=[ApplicationTask.model_validate({**t, "id": str(t.get("id", i)), "completed": False}) for i, t in enumerate(tasks)],
    )
    kept = [g for g in task_groups if g.get("university_name") != university_name]
    return kept + [group.model_dump()]

def toggle_task(task_groups: List[Dict[str, Any]], university_name: str, task_id: str) -> Tuple[List[Dict[str, Any]], Optional[bool], Optional[str]]:
    """
    Flip one task's completed flag.
    Returns (groups, completed, error) where error names what was not found.
    """
    group = next((g for g in task_groups if g.get("university_name") == university_name), None)
    if group is None:
        return task_groups, None, "University tasks not found"
    task = next((t for t in group.get("tasks", []) if t.get("id") == task_id), None)
    if task is None:
        return task_groups, None, "Task not found"
    task["completed"] = not task.get("completed", False)
    return task_groups, task["completed"], None
