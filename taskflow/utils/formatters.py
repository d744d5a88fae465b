"""
Message formatting utilities
"""

from typing import List, Dict, Optional, Sequence, Tuple
from taskflow.config.constants import (
    PROGRESS_BAR_WIDTH,
    SCORES_TITLE_MAX,
    SCORE_HOT_THRESHOLD,
    SCORE_WARM_THRESHOLD,
    SCORE_WEIGHT_URGENCY,
    SCORE_WEIGHT_PRIORITY,
    SCORE_WEIGHT_DEPENDENTS,
    SCORE_WEIGHT_DEPTH,
)
from taskflow.models.score import ScoreBreakdown
from taskflow.models.task import Task, TaskStatus, Priority
from taskflow.services.dependency_graph import (
    blocked_by,
    index_tasks,
    is_ready,
    pending_dependencies,
)
from taskflow.utils.colors import (
    color,
    BOLD,
    DIM,
    RED,
    GREEN,
    YELLOW,
    BLUE,
    MAGENTA,
    CYAN,
    GRAY,
)

CARD_RULE = "─" * 49

STATUS_LABELS = {
    TaskStatus.PENDING.value: "pending",
    TaskStatus.IN_PROGRESS.value: "in progress",
    TaskStatus.DONE.value: "done",
}

PRIORITY_LABELS = {
    Priority.HIGH.value: ("high", RED),
    Priority.MEDIUM.value: ("medium", YELLOW),
    Priority.LOW.value: ("low", GRAY),
}


def format_status_icon(status: str, blocked: bool = False) -> str:
    """Icon for a task state; ``blocked`` overrides a pending icon"""
    if status == TaskStatus.DONE:
        return color("✓", GREEN)
    if status == TaskStatus.IN_PROGRESS:
        return color("→", YELLOW)
    if blocked:
        return color("⊘", RED)
    return color("○", GRAY)


def format_status_label(status: str) -> str:
    return STATUS_LABELS.get(status, str(status))


def format_priority(priority: str) -> str:
    label, style = PRIORITY_LABELS.get(priority, (priority, ""))
    return color(label, style) if style else label


def format_task_added(task: Task) -> str:
    return color(f"✅ Task #{task.id} added: {task.title}", GREEN)


def _format_dependency_ids(task: Task, by_id: Dict[int, Task]) -> str:
    parts = []
    for dep_id in task.dependencies:
        dep = by_id.get(dep_id)
        style = GREEN if dep is not None and dep.is_done else RED
        parts.append(color(str(dep_id), style))
    return color(" (deps: ", DIM) + ", ".join(parts) + color(")", DIM)


def format_task_list(
    project_name: str,
    in_progress: Sequence[Task],
    pending: Sequence[Task],
    done: Sequence[Task],
    all_tasks: Sequence[Task],
    residual: Sequence[Task] = (),
) -> str:
    """
    Format the task list grouped by state

    Args:
        project_name: Project name for the header
        in_progress: Tasks being worked on
        pending: Pending tasks, already in dependency order
        done: Completed tasks
        all_tasks: Full collection (for dependency lookups)
        residual: Pending tasks that could not be ordered (cycle)

    Returns:
        Formatted message
    """
    if not all_tasks:
        return (
            color("📋 No tasks found", YELLOW) + "\n"
            + color('   Use "taskflow add" to create one', GRAY)
        )

    by_id = index_tasks(all_tasks)
    lines = [color(f"📋 Tasks - {project_name}", BLUE, BOLD), ""]

    if in_progress:
        lines.append(color("🔄 In progress:", YELLOW))
        for task in in_progress:
            deps = color(f" (deps: {', '.join(str(d) for d in task.dependencies)})", DIM) if task.dependencies else ""
            lines.append(
                f"   {format_status_icon(task.status)} #{task.id} "
                f"[{format_priority(task.priority)}] {task.title}{deps}"
            )
        lines.append("")

    if pending:
        lines.append(color("⏳ Pending:", BLUE))
        for task in pending:
            ready = is_ready(task, all_tasks)
            deps = _format_dependency_ids(task, by_id) if task.dependencies else ""
            blocked_tag = "" if ready else " " + color("[BLOCKED]", RED)
            lines.append(
                f"   {format_status_icon(task.status, blocked=not ready)} #{task.id} "
                f"[{format_priority(task.priority)}] {task.title}{deps}{blocked_tag}"
            )
        lines.append("")

    if residual:
        ids = ", ".join(f"#{task.id}" for task in residual)
        lines.append(color(f"⚠️  Circular dependencies among: {ids}", RED))
        lines.append("")

    if done:
        lines.append(color("✅ Done:", GREEN))
        for task in done:
            lines.append(color(f"   ✓ #{task.id} {task.title}", GRAY))
        lines.append("")

    return "\n".join(lines).rstrip("\n")


def format_task_card(task: Task, all_tasks: Sequence[Task]) -> str:
    """
    Format the detailed view of one task

    Args:
        task: Task to show
        all_tasks: Full collection (dependencies and dependents)

    Returns:
        Formatted card
    """
    by_id = index_tasks(all_tasks)
    bar = color("│", BLUE)
    lines = [
        color(f"┌{CARD_RULE}┐", BLUE),
        f"{bar} " + color(f"#{task.id} {task.title}", BOLD),
        color(f"├{CARD_RULE}┤", BLUE),
        f"{bar} Status: {format_status_icon(task.status)} {format_status_label(task.status)}",
        f"{bar} Priority: {format_priority(task.priority)}",
    ]

    if task.description:
        lines.append(bar)
        lines.append(f"{bar} " + color(task.description, DIM))

    if task.dependencies:
        lines.append(bar)
        lines.append(f"{bar} " + color("Dependencies:", CYAN))
        for dep_id in task.dependencies:
            dep = by_id.get(dep_id)
            if dep is None:
                lines.append(f"{bar}   " + color("?", RED) + f" #{dep_id} (missing)")
                continue
            icon = color("✓", GREEN) if dep.is_done else color("○", RED)
            lines.append(f"{bar}   {icon} #{dep.id} {dep.title}")
        if not is_ready(task, all_tasks):
            lines.append(f"{bar}   " + color("⚠ Waiting on dependencies", RED))

    unblocks = blocked_by(task.id, all_tasks)
    if unblocks:
        lines.append(bar)
        lines.append(f"{bar} " + color("Unblocks:", MAGENTA))
        for dependent in unblocks:
            lines.append(f"{bar}   → #{dependent.id} {dependent.title}")

    lines.append(bar)
    if task.created_at:
        lines.append(f"{bar} " + color(f"Created: {task.created_at}", DIM))
    if task.completed_at:
        lines.append(f"{bar} " + color(f"Completed: {task.completed_at}", DIM))
    lines.append(color(f"└{CARD_RULE}┘", BLUE))
    return "\n".join(lines)


def format_score_line(breakdown: ScoreBreakdown) -> str:
    return (
        color("📊 Score: ", CYAN) + color(str(breakdown.total), CYAN, BOLD) + color(" points", CYAN) + "\n"
        + color(
            f"   Urgency: {breakdown.urgency.points} | Priority: {breakdown.priority.points} | "
            f"Dependents: {breakdown.dependents.points} | Depth: {breakdown.depth.points}",
            DIM,
        )
    )


def format_current_task(task: Task, breakdown: ScoreBreakdown, all_tasks: Sequence[Task]) -> str:
    """Task already in progress, shown again by "next" """
    return "\n".join([
        format_task_card(task, all_tasks),
        color("Score: ", GRAY) + color(str(breakdown.total), CYAN) + color(" points", GRAY),
        color(f'Use "taskflow done {task.id}" when finished', GRAY),
    ])


def format_task_started(
    task: Task,
    breakdown: ScoreBreakdown,
    runner_ups: Sequence[Tuple[Task, ScoreBreakdown]],
    all_tasks: Sequence[Task],
) -> str:
    """
    Format the task selected by "next"

    Args:
        task: Selected task (now in progress)
        breakdown: Its score breakdown
        runner_ups: Other ready candidates with their scores, best first
        all_tasks: Full collection

    Returns:
        Formatted message
    """
    lines = [format_task_card(task, all_tasks), format_score_line(breakdown)]

    if runner_ups:
        lines.append("")
        lines.append(color("Other available:", DIM))
        for other, other_score in runner_ups:
            lines.append(color(f"   #{other.id} {other.title} (score: {other_score.total})", DIM))

    lines.append("")
    lines.append(color(f'Use "taskflow done {task.id}" when finished', GRAY))
    lines.append(color('Use "taskflow scores" to see every score', GRAY))
    return "\n".join(lines)


def format_all_blocked(blocked: Sequence[Task], all_tasks: Sequence[Task]) -> str:
    lines = [color("⚠️  Every pending task is blocked!", YELLOW), "", color("Blocked tasks:", GRAY)]
    for task in blocked:
        waiting = ", ".join(f"#{dep_id}" for dep_id in pending_dependencies(task, all_tasks))
        lines.append(f"   #{task.id} {task.title} " + color(f"(waiting on: {waiting})", DIM))
    return "\n".join(lines)


def format_all_done() -> str:
    return color("🎉 All tasks are done!", GREEN)


def format_task_completed(task: Task, unblocked: Sequence[Task], next_task: Optional[Task]) -> str:
    """
    Format task completion confirmation message

    Args:
        task: Completed task
        unblocked: Dependents that became ready
        next_task: Suggested next ready task, if any

    Returns:
        Formatted message
    """
    lines = [color(f"✅ Task #{task.id} done!", GREEN)]

    if unblocked:
        lines.append("")
        lines.append(color("🔓 Unblocked tasks:", GREEN))
        for dependent in unblocked:
            lines.append(f"   → #{dependent.id} {dependent.title}")

    if next_task is not None:
        lines.append("")
        lines.append(color(f"Next: #{next_task.id} - {next_task.title}", GRAY))
        lines.append(color('Use "taskflow next" to start it', GRAY))

    return "\n".join(lines)


def format_dependency_added(task: Task, dependency: Task) -> str:
    return (
        color(f"✅ Dependency added: #{task.id} depends on #{dependency.id}", GREEN) + "\n"
        + color(f"   {task.title} → {dependency.title}", GRAY)
    )


def format_dependency_removed(task_id: int, dependency_id: int) -> str:
    return color(f"✅ Dependency removed: #{task_id} no longer depends on #{dependency_id}", GREEN)


def format_graph(groups: Dict[int, List[Task]], all_tasks: Sequence[Task]) -> str:
    """
    Format the dependency graph grouped by depth

    Args:
        groups: depth -> tasks, ascending depth
        all_tasks: Full collection (for dependents)

    Returns:
        Formatted graph
    """
    if not all_tasks:
        return color("📋 No tasks found", YELLOW)

    bar = color("│", BLUE)
    lines = [
        color(f"┌{CARD_RULE}┐", BLUE, BOLD),
        color("│" + "DEPENDENCY GRAPH".center(len(CARD_RULE)) + "│", BLUE, BOLD),
        color(f"├{CARD_RULE}┤", BLUE, BOLD),
    ]

    for level, tasks in groups.items():
        indent = "  " * level
        for task in tasks:
            dependents = blocked_by(task.id, all_tasks)
            arrow = ""
            if dependents:
                arrow = " " + color(f"──► [{', '.join(str(d.id) for d in dependents)}]", DIM)
            lines.append(f"{bar} {indent}{format_status_icon(task.status)} [{task.id}] {task.title}{arrow}")

    lines.append(color(f"├{CARD_RULE}┤", BLUE, BOLD))
    lines.append(f"{bar} " + color("Legend: ○ pending  → in progress  ✓ done", DIM))
    lines.append(f"{bar} " + color("        ──► unblocks task(s)", DIM))
    lines.append(color(f"└{CARD_RULE}┘", BLUE, BOLD))
    return "\n".join(lines)


def format_progress_bar(percent: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    filled = round(percent * width / 100)
    return "█" * filled + "░" * (width - filled)


def format_status(project_name: str, counts: Dict[str, int]) -> str:
    """
    Format project status summary

    Args:
        project_name: Project name
        counts: total, done, in_progress, available, blocked, with_dependencies

    Returns:
        Formatted message
    """
    total = counts["total"]
    percent = round(counts["done"] * 100 / total) if total else 0

    lines = [
        color(f"📊 Project status: {project_name}", BLUE, BOLD),
        "",
        f"   Total: {total} tasks",
        color(f"   ✅ Done: {counts['done']}", GREEN),
        color(f"   🔄 In progress: {counts['in_progress']}", YELLOW),
        color(f"   ○  Available: {counts['available']}", BLUE),
        color(f"   ⊘  Blocked: {counts['blocked']}", RED),
        "",
        f"   {color(format_progress_bar(percent), GREEN)} {percent}%",
    ]

    if counts["with_dependencies"]:
        lines.append("")
        lines.append(color(f"   {counts['with_dependencies']} task(s) with dependencies configured", DIM))
        lines.append(color('   Use "taskflow graph" to see them', DIM))

    return "\n".join(lines)


def format_description_updated(task_id: int) -> str:
    return color(f"✅ Description of task #{task_id} updated", GREEN)


def format_priority_updated(task_id: int, priority: str) -> str:
    return color(f"✅ Priority of task #{task_id} set to ", GREEN) + format_priority(priority)


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def format_scores_table(rows: Sequence[Tuple[Task, ScoreBreakdown, bool]]) -> str:
    """
    Format the score table

    Args:
        rows: (task, breakdown, ready) tuples, best score first

    Returns:
        Formatted table
    """
    lines = [
        color("📊 Automatic prioritization scores", BLUE, BOLD),
        "",
        color("  #ID  │ Score │ Urg │ Pri │ Dep │ Dpth │ State        │ Task", DIM),
        color("───────┼───────┼─────┼─────┼─────┼──────┼──────────────┼───────────────", DIM),
    ]

    for task, breakdown, ready in rows:
        if task.is_in_progress:
            state = color("in progress".ljust(12), YELLOW)
        elif ready:
            state = color("available".ljust(12), GREEN)
        else:
            state = color("blocked".ljust(12), RED)

        if breakdown.total >= SCORE_HOT_THRESHOLD:
            score_style = RED
        elif breakdown.total >= SCORE_WARM_THRESHOLD:
            score_style = YELLOW
        else:
            score_style = GRAY

        lines.append(
            "  " + color(f"#{str(task.id).ljust(3)}", BOLD)
            + " │ " + color(str(breakdown.total).rjust(5), score_style)
            + f" │ {str(breakdown.urgency.points).rjust(3)}"
            + f" │ {str(breakdown.priority.points).rjust(3)}"
            + f" │ {str(breakdown.dependents.points).rjust(3)}"
            + f" │ {str(breakdown.depth.points).rjust(4)}"
            + f" │ {state} │ {_truncate(task.title, SCORES_TITLE_MAX)}"
        )

    lines.append("")
    lines.append(color("Legend: Urg=Urgency, Pri=Priority, Dep=Dependents, Dpth=Depth", DIM))
    lines.append(color(
        f"Formula: (Urg×{SCORE_WEIGHT_URGENCY}) + (Pri×{SCORE_WEIGHT_PRIORITY}) + "
        f"(Dep×{SCORE_WEIGHT_DEPENDENTS}) + (Dpth×{SCORE_WEIGHT_DEPTH})",
        DIM,
    ))
    lines.append(color("Higher score = higher priority", DIM))
    return "\n".join(lines)


def format_help() -> str:
    cmd = lambda text: color(text, YELLOW)  # noqa: E731
    return "\n".join([
        color("📋 taskflow - task management with dependencies and automatic prioritization", BLUE, BOLD),
        "",
        color("Basic commands:", GREEN),
        "",
        f"  {cmd('taskflow add <title>')}                  Add a new task",
        f"  {cmd('taskflow list')}                         List every task",
        f"  {cmd('taskflow next')}                         Start the next task (by score)",
        f"  {cmd('taskflow done <id>')}                    Mark a task as done",
        f"  {cmd('taskflow status')}                       Project overview",
        f"  {cmd('taskflow edit <id> [text]')}             Show a task or replace its description",
        f"  {cmd('taskflow priority <id> <p>')}            Set priority (alta/media/baixa)",
        "",
        color("Dependency commands:", CYAN),
        "",
        f"  {cmd('taskflow depends <id> --on <dep-id>')}     Add a dependency",
        f"  {cmd('taskflow undepends <id> --from <dep-id>')} Remove a dependency",
        f"  {cmd('taskflow graph')}                          Show the dependency graph",
        "",
        color("Automatic prioritization:", MAGENTA),
        "",
        f"  {cmd('taskflow scores')}                         Show every task's score",
        "",
        color("  Score = (Urgency×2) + (Priority×3) + (Dependents×4) + (Depth×1)", DIM),
        color('  Highest score is picked first by "taskflow next"', DIM),
        "",
        color("Examples:", GRAY),
        '  taskflow add "Implement login"',
        "  taskflow depends 3 --on 1     " + color("# task 3 depends on task 1", DIM),
        "  taskflow scores               " + color("# see computed scores", DIM),
        "  taskflow next                 " + color("# start the highest scored task", DIM),
    ])
