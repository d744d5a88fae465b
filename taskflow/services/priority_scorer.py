"""
Automatic prioritization: composite score per task

score = 2 * urgency + 3 * priority weight + 4 * direct dependents + 1 * depth
"""

from datetime import date
from typing import Dict, List, Optional, Sequence
from taskflow.config.constants import (
    PRIORITY_WEIGHTS,
    PRIORITY_WEIGHT_UNKNOWN,
    SCORE_WEIGHT_URGENCY,
    SCORE_WEIGHT_PRIORITY,
    SCORE_WEIGHT_DEPENDENTS,
    SCORE_WEIGHT_DEPTH,
    URGENCY_MAX_DAYS,
)
from taskflow.models.score import ScoreBreakdown, ScoreComponent
from taskflow.models.task import Task
from taskflow.services.dependency_graph import dependent_count, depth
from taskflow.utils.date_utils import days_between, parse_date_str


def urgency(task: Task, today: date) -> int:
    """Days since creation, clamped to [0, URGENCY_MAX_DAYS]; 0 for unusable dates"""
    created = parse_date_str(task.created_at)
    if created is None:
        return 0
    return max(0, min(days_between(created, today), URGENCY_MAX_DAYS))


def priority_weight(priority: Optional[str]) -> int:
    return PRIORITY_WEIGHTS.get(priority, PRIORITY_WEIGHT_UNKNOWN)


def _component(value: int, weight: int) -> ScoreComponent:
    return ScoreComponent(value=value, weight=weight, points=value * weight)


def score(
    task: Task,
    tasks: Sequence[Task],
    today: date,
    depth_memo: Optional[Dict[int, int]] = None,
) -> ScoreBreakdown:
    """
    Compute the score breakdown of one task

    Args:
        task: Task to score
        tasks: Full task collection (for dependents and depth)
        today: Reference date for urgency
        depth_memo: Depth cache shared across calls on the same collection

    Returns:
        ScoreBreakdown with the total and its four terms

    Raises:
        DependencyCycleError: if the stored graph has a cycle behind the task
    """
    if depth_memo is None:
        depth_memo = {}

    urgency_part = _component(urgency(task, today), SCORE_WEIGHT_URGENCY)
    priority_part = _component(priority_weight(task.priority), SCORE_WEIGHT_PRIORITY)
    dependents_part = _component(dependent_count(task.id, tasks), SCORE_WEIGHT_DEPENDENTS)
    depth_part = _component(depth(task.id, tasks, depth_memo), SCORE_WEIGHT_DEPTH)

    total = (
        urgency_part.points
        + priority_part.points
        + dependents_part.points
        + depth_part.points
    )
    return ScoreBreakdown(
        task_id=task.id,
        total=total,
        urgency=urgency_part,
        priority=priority_part,
        dependents=dependents_part,
        depth=depth_part,
    )


def rank_by_score(
    candidates: Sequence[Task],
    tasks: Sequence[Task],
    today: date,
) -> List[tuple]:
    """
    Rank candidates by descending score

    The sort is stable: equal totals keep the candidates' input order.

    Returns:
        List of (task, ScoreBreakdown) pairs, best first
    """
    memo: Dict[int, int] = {}
    scored = [(task, score(task, tasks, today, memo)) for task in candidates]
    scored.sort(key=lambda pair: pair[1].total, reverse=True)
    return scored
