"""
Dependency graph analysis over an in-memory task collection

All functions are pure: they read the tasks they are given and never
touch storage.
"""

from typing import Dict, List, Optional, Sequence
from pydantic import BaseModel
from taskflow.models.task import Task
from taskflow.utils.error_handler import DependencyCycleError


class TopologicalOrder(BaseModel):
    """Result of ordering tasks by dependencies.

    ``ordered`` holds the tasks that could be placed after all of their
    dependencies. ``residual`` holds what was left when a pass placed
    nothing (tasks on or behind a cycle), in their original relative order.
    """

    ordered: List[Task]
    residual: List[Task] = []

    @property
    def is_complete(self) -> bool:
        return not self.residual

    @property
    def tasks(self) -> List[Task]:
        """Placed tasks followed by the residual tail"""
        return self.ordered + self.residual


def index_tasks(tasks: Sequence[Task]) -> Dict[int, Task]:
    """Map id -> task, first occurrence wins"""
    by_id: Dict[int, Task] = {}
    for task in tasks:
        by_id.setdefault(task.id, task)
    return by_id


def is_ready(task: Task, tasks: Sequence[Task]) -> bool:
    """True if every dependency resolves to a done task.

    A dependency id with no matching task counts as unmet.
    """
    if not task.dependencies:
        return True
    by_id = index_tasks(tasks)
    for dep_id in task.dependencies:
        dep = by_id.get(dep_id)
        if dep is None or not dep.is_done:
            return False
    return True


def pending_dependencies(task: Task, tasks: Sequence[Task]) -> List[int]:
    """Dependency ids of ``task`` that are not done yet (dangling ids included)"""
    by_id = index_tasks(tasks)
    return [
        dep_id for dep_id in task.dependencies
        if dep_id not in by_id or not by_id[dep_id].is_done
    ]


def blocked_by(task_id: int, tasks: Sequence[Task]) -> List[Task]:
    """Tasks that list ``task_id`` as a dependency (unblocked once it is done)"""
    return [task for task in tasks if task_id in task.dependencies]


def dependent_count(task_id: int, tasks: Sequence[Task]) -> int:
    """Number of direct dependents of ``task_id``"""
    return len(blocked_by(task_id, tasks))


def has_cycle(task_id: int, candidate_dep_id: int, tasks: Sequence[Task]) -> bool:
    """Would adding "task_id depends on candidate_dep_id" close a loop?

    Walks the candidate's dependencies depth-first; reaching ``task_id``
    means the candidate already depends on it, directly or transitively.
    """
    by_id = index_tasks(tasks)
    visited = set()
    stack = [candidate_dep_id]

    while stack:
        current = stack.pop()
        if current == task_id:
            return True
        if current in visited:
            continue
        visited.add(current)

        task = by_id.get(current)
        if task is not None:
            stack.extend(task.dependencies)

    return False


def topological_order(tasks: Sequence[Task]) -> TopologicalOrder:
    """Order tasks so that each one follows its dependencies.

    Every pass scans the remaining tasks from the end and places those
    whose dependencies are already placed. Unlike a strict ordering, a
    dependency that points outside ``tasks`` (for example a done task when
    only pending ones are ordered) does not hold a task back; otherwise
    every task behind a finished one would land in the residual and be
    reported as part of a cycle. When a pass places nothing, the remaining
    tasks are returned as ``residual`` instead of raising.
    """
    member_ids = {task.id for task in tasks}
    placed: set = set()
    remaining = list(tasks)
    ordered: List[Task] = []

    while remaining:
        found = False
        for i in range(len(remaining) - 1, -1, -1):
            task = remaining[i]
            if all(dep_id in placed or dep_id not in member_ids for dep_id in task.dependencies):
                ordered.append(task)
                placed.add(task.id)
                del remaining[i]
                found = True

        if not found:
            return TopologicalOrder(ordered=ordered, residual=remaining)

    return TopologicalOrder(ordered=ordered)


def depth(task_id: int, tasks: Sequence[Task], memo: Optional[Dict[int, int]] = None) -> int:
    """Length of the longest dependency chain ending at ``task_id``.

    0 for a task without dependencies or an unknown id. ``memo`` may be
    shared across calls over the same, unchanged collection.

    Raises:
        DependencyCycleError: if a cycle is reachable from ``task_id``
    """
    if memo is None:
        memo = {}
    return _depth(task_id, index_tasks(tasks), memo, [])


def _depth(task_id: int, by_id: Dict[int, Task], memo: Dict[int, int], path: List[int]) -> int:
    if task_id in memo:
        return memo[task_id]
    if task_id in path:
        raise DependencyCycleError(path[path.index(task_id):] + [task_id])

    task = by_id.get(task_id)
    if task is None or not task.dependencies:
        memo[task_id] = 0
        return 0

    path.append(task_id)
    result = 1 + max(_depth(dep_id, by_id, memo, path) for dep_id in task.dependencies)
    path.pop()

    memo[task_id] = result
    return result


def group_by_depth(tasks: Sequence[Task]) -> Dict[int, List[Task]]:
    """Tasks grouped by depth, keys ascending, insertion order inside a level"""
    memo: Dict[int, int] = {}
    groups: Dict[int, List[Task]] = {}
    for task in tasks:
        groups.setdefault(depth(task.id, tasks, memo), []).append(task)
    return {level: groups[level] for level in sorted(groups)}
