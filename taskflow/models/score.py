"""
Score breakdown model
"""

from pydantic import BaseModel


class ScoreComponent(BaseModel):
    """One weighted term of the score"""
    value: int
    weight: int
    points: int


class ScoreBreakdown(BaseModel):
    """Composite priority score of a task, with its four terms"""
    task_id: int
    total: int
    urgency: ScoreComponent
    priority: ScoreComponent
    dependents: ScoreComponent
    depth: ScoreComponent
