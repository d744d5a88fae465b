"""
Task and project models
"""

from enum import Enum
from typing import Optional, List, Any
from pydantic import BaseModel, Field, ConfigDict, ValidationInfo, field_validator
from taskflow.config.constants import (
    STATUS_PENDING,
    STATUS_IN_PROGRESS,
    STATUS_DONE,
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    PRIORITY_LOW,
)


class TaskStatus(str, Enum):
    """Stored task states ("blocked" is derived, never stored)"""
    PENDING = STATUS_PENDING
    IN_PROGRESS = STATUS_IN_PROGRESS
    DONE = STATUS_DONE


class Priority(str, Enum):
    """Priority tiers"""
    HIGH = PRIORITY_HIGH
    MEDIUM = PRIORITY_MEDIUM
    LOW = PRIORITY_LOW


class Task(BaseModel):
    """Task model"""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
    )

    id: int
    title: str = Field(alias="titulo")
    description: str = Field("", alias="descricao")
    status: TaskStatus = TaskStatus.PENDING
    priority: str = Field(Priority.MEDIUM.value, alias="prioridade")  # unknown tiers are tolerated
    dependencies: List[int] = Field(default_factory=list, alias="dependencias")
    created_at: Optional[str] = Field(None, alias="criadoEm")  # unparseable dates score 0 urgency
    completed_at: Optional[str] = Field(None, alias="concluidoEm")

    @field_validator("dependencies", mode="before")
    @classmethod
    def _default_dependencies(cls, value: Any) -> Any:
        # Older documents have no "dependencias" key or store null
        return [] if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        # Unknown states in hand-edited documents fall back to pending
        if value in tuple(s.value for s in TaskStatus):
            return value
        return TaskStatus.PENDING.value

    @field_validator("priority", "description", mode="before")
    @classmethod
    def _default_text(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        return Priority.MEDIUM.value if info.field_name == "priority" else ""

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    @property
    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING

    @property
    def is_in_progress(self) -> bool:
        return self.status == TaskStatus.IN_PROGRESS


class Project(BaseModel):
    """Project document: name, creation date and the tasks in insertion order"""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    name: str = Field(alias="projeto")
    created_at: Optional[str] = Field(None, alias="criadoEm")
    tasks: List[Task] = Field(default_factory=list, alias="tarefas")

    @field_validator("tasks", mode="before")
    @classmethod
    def _default_tasks(cls, value: Any) -> Any:
        return [] if value is None else value

    def get_task(self, task_id: int) -> Optional[Task]:
        """Get a task by id"""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def next_id(self) -> int:
        """Next free id: max existing id + 1, or 1 for an empty project"""
        if not self.tasks:
            return 1
        return max(task.id for task in self.tasks) + 1

    def to_document(self) -> dict:
        """Serialize with the persisted (aliased) keys"""
        return self.model_dump(mode="json", by_alias=True)
