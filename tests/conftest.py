"""
Pytest configuration and fixtures
"""

import pytest
from datetime import date
from taskflow.models.task import Task
from taskflow.services.task_store import TaskStore
from taskflow.services.task_manager import TaskManager
from taskflow.utils import colors

TODAY = date(2024, 11, 15)
TODAY_STR = "2024-11-15"


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Disable ANSI colors so assertions match plain text"""
    monkeypatch.setattr(colors, "ENABLED", False)


@pytest.fixture
def today():
    """Fixed reference date"""
    return TODAY


@pytest.fixture
def tasks_file(tmp_path):
    """Path of a task document inside a temporary directory"""
    return tmp_path / "tasks" / "tasks.json"


@pytest.fixture
def task_store(tasks_file):
    """Task store with temporary file"""
    return TaskStore(tasks_file=str(tasks_file))


@pytest.fixture
def task_manager(task_store):
    """Task manager with a fixed reference date"""
    return TaskManager(task_store, today=lambda: TODAY)


def make_task(task_id, dependencies=None, status="pendente", priority="media", created_at=TODAY_STR, title=None):
    """Build a task for pure graph/scoring tests"""
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        status=status,
        priority=priority,
        dependencies=list(dependencies or []),
        created_at=created_at,
        completed_at=created_at if status == "concluida" else None,
    )
