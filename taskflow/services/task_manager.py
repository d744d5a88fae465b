"""
Task management service
"""

from datetime import date
from typing import Callable, Optional
from taskflow.config.constants import NEXT_RUNNER_UPS, PRIORITY_ALIASES
from taskflow.models.task import Project, Task, TaskStatus, Priority
from taskflow.services.task_store import TaskStore
from taskflow.services.dependency_graph import (
    blocked_by,
    group_by_depth,
    has_cycle,
    is_ready,
    topological_order,
)
from taskflow.services.priority_scorer import rank_by_score, score
from taskflow.utils.date_utils import get_current_date, format_date
from taskflow.utils.error_handler import (
    DependencyError,
    TaskNotFoundError,
    ValidationError,
)
from taskflow.utils.logger import logger
from taskflow.utils.colors import color, YELLOW
from taskflow.utils.formatters import (
    format_all_blocked,
    format_all_done,
    format_current_task,
    format_dependency_added,
    format_dependency_removed,
    format_description_updated,
    format_graph,
    format_priority_updated,
    format_scores_table,
    format_status,
    format_task_added,
    format_task_card,
    format_task_completed,
    format_task_list,
    format_task_started,
)


class TaskManager:
    """Service for managing tasks and their dependencies"""

    def __init__(self, store: TaskStore, today: Optional[Callable[[], date]] = None):
        """
        Initialize task manager

        Args:
            store: Task document repository
            today: Reference date provider (defaults to the local date)
        """
        self.store = store
        self.today = today or get_current_date
        self.logger = logger

    def _get_task(self, project: Project, task_id: int) -> Task:
        task = project.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def add_task(self, title: str) -> str:
        """
        Create a pending task with the next free id

        Args:
            title: Task title

        Returns:
            Confirmation message
        """
        title = (title or "").strip()
        if not title:
            raise ValidationError('Usage: taskflow add "Task title"')

        project = self.store.load()
        task = Task(
            id=project.next_id(),
            title=title,
            created_at=format_date(self.today()),
        )
        project.tasks.append(task)
        self.store.save(project)

        self.logger.info(f"Task #{task.id} added: {title}")
        return format_task_added(task)

    def list_tasks(self) -> str:
        """List tasks by state; pending ones in dependency order"""
        project = self.store.load()
        tasks = project.tasks

        in_progress = [t for t in tasks if t.is_in_progress]
        pending = [t for t in tasks if t.is_pending]
        done = [t for t in tasks if t.is_done]

        order = topological_order(pending)
        if not order.is_complete:
            self.logger.warning(
                f"Pending tasks contain a dependency cycle: {[t.id for t in order.residual]}"
            )

        return format_task_list(
            project.name,
            in_progress=in_progress,
            pending=order.tasks,
            done=done,
            all_tasks=tasks,
            residual=order.residual,
        )

    def next_task(self) -> str:
        """
        Start the highest scored ready task

        A task already in progress is shown again instead of starting a
        second one.

        Returns:
            Formatted message
        """
        project = self.store.load()
        tasks = project.tasks
        today = self.today()

        current = next((t for t in tasks if t.is_in_progress), None)
        if current is not None:
            return format_current_task(current, score(current, tasks, today), tasks)

        pending = [t for t in tasks if t.is_pending]
        ready = [t for t in pending if is_ready(t, tasks)]

        if not ready:
            if pending:
                return format_all_blocked(pending, tasks)
            return format_all_done()

        ranked = rank_by_score(ready, tasks, today)
        selected, breakdown = ranked[0]
        selected.status = TaskStatus.IN_PROGRESS.value
        self.store.save(project)

        self.logger.info(f"Task #{selected.id} started (score {breakdown.total})")
        return format_task_started(
            selected,
            breakdown,
            ranked[1:1 + NEXT_RUNNER_UPS],
            tasks,
        )

    def complete_task(self, task_id: int) -> str:
        """
        Mark a task as done and report what it unblocked

        Args:
            task_id: Task ID

        Returns:
            Formatted message
        """
        project = self.store.load()
        task = self._get_task(project, task_id)
        tasks = project.tasks

        if task.is_done:
            return color(f"⚠️  Task #{task_id} is already done ({task.completed_at})", YELLOW)

        task.status = TaskStatus.DONE.value
        task.completed_at = format_date(self.today())
        self.store.save(project)
        self.logger.info(f"Task #{task_id} done")

        unblocked = [
            t for t in blocked_by(task_id, tasks)
            if t.is_pending and is_ready(t, tasks)
        ]
        next_ready = next(
            (t for t in tasks if t.is_pending and is_ready(t, tasks)),
            None,
        )
        return format_task_completed(task, unblocked, next_ready)

    def add_dependency(self, task_id: int, dependency_id: int) -> str:
        """
        Make task_id depend on dependency_id

        Args:
            task_id: Dependent task ID
            dependency_id: Task that must be done first

        Returns:
            Confirmation message

        Raises:
            TaskNotFoundError: If either task does not exist
            DependencyError: On self, duplicate or cycle-closing edges
        """
        project = self.store.load()
        task = self._get_task(project, task_id)
        dependency = self._get_task(project, dependency_id)

        if task_id == dependency_id:
            raise DependencyError(
                "A task cannot depend on itself",
                task_id, dependency_id, error_code="self",
            )
        if dependency_id in task.dependencies:
            raise DependencyError(
                f"Task #{task_id} already depends on #{dependency_id}",
                task_id, dependency_id, error_code="duplicate",
            )
        if has_cycle(task_id, dependency_id, project.tasks):
            raise DependencyError(
                "This would create a circular dependency: "
                f"#{dependency_id} already depends (directly or indirectly) on #{task_id}",
                task_id, dependency_id, error_code="cycle",
            )

        task.dependencies.append(dependency_id)
        self.store.save(project)

        self.logger.info(f"Dependency added: #{task_id} -> #{dependency_id}")
        return format_dependency_added(task, dependency)

    def remove_dependency(self, task_id: int, dependency_id: int) -> str:
        """
        Remove dependency_id from task_id's dependencies

        Args:
            task_id: Dependent task ID
            dependency_id: Dependency to drop

        Returns:
            Confirmation message
        """
        project = self.store.load()
        task = self._get_task(project, task_id)

        if dependency_id not in task.dependencies:
            raise DependencyError(
                f"Task #{task_id} does not depend on #{dependency_id}",
                task_id, dependency_id, error_code="missing",
            )

        task.dependencies.remove(dependency_id)
        self.store.save(project)

        self.logger.info(f"Dependency removed: #{task_id} -> #{dependency_id}")
        return format_dependency_removed(task_id, dependency_id)

    def show_graph(self) -> str:
        """Dependency graph grouped by depth"""
        project = self.store.load()
        if not project.tasks:
            return format_graph({}, [])
        return format_graph(group_by_depth(project.tasks), project.tasks)

    def get_status(self) -> str:
        """Project counters and progress"""
        project = self.store.load()
        tasks = project.tasks

        pending = [t for t in tasks if t.is_pending]
        blocked = [t for t in pending if not is_ready(t, tasks)]
        counts = {
            "total": len(tasks),
            "done": sum(1 for t in tasks if t.is_done),
            "in_progress": sum(1 for t in tasks if t.is_in_progress),
            "available": len(pending) - len(blocked),
            "blocked": len(blocked),
            "with_dependencies": sum(1 for t in tasks if t.dependencies),
        }
        return format_status(project.name, counts)

    def edit_task(self, task_id: int, text: Optional[str] = None) -> str:
        """
        Replace a task's description, or show the task when no text is given

        Args:
            task_id: Task ID
            text: New description (optional)

        Returns:
            Formatted message
        """
        project = self.store.load()
        task = self._get_task(project, task_id)

        if not text:
            return format_task_card(task, project.tasks)

        task.description = text
        self.store.save(project)

        self.logger.info(f"Description of task #{task_id} updated")
        return format_description_updated(task_id)

    def set_priority(self, task_id: int, priority: str) -> str:
        """
        Set a task's priority tier

        Args:
            task_id: Task ID
            priority: alta, media or baixa (high/medium/low accepted)

        Returns:
            Confirmation message
        """
        tier = PRIORITY_ALIASES.get((priority or "").strip().lower())
        if tier is None:
            raise ValidationError(
                f"Invalid priority '{priority}'. Use: "
                + ", ".join(p.value for p in Priority)
            )

        project = self.store.load()
        task = self._get_task(project, task_id)
        task.priority = tier
        self.store.save(project)

        self.logger.info(f"Priority of task #{task_id} set to {tier}")
        return format_priority_updated(task_id, tier)

    def show_scores(self) -> str:
        """Score table for every task that is not done, best first"""
        project = self.store.load()
        tasks = project.tasks
        open_tasks = [t for t in tasks if not t.is_done]

        if not open_tasks:
            return format_all_done()

        ranked = rank_by_score(open_tasks, tasks, self.today())
        rows = [(task, breakdown, is_ready(task, tasks)) for task, breakdown in ranked]
        return format_scores_table(rows)
