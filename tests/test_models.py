"""
Tests for task and project models
"""

import pytest
from pydantic import ValidationError as ModelValidationError
from taskflow.models.task import Project, Task, TaskStatus


def test_task_from_document_keys():
    """Test persisted keys populate the model"""
    task = Task.model_validate({
        "id": 3,
        "titulo": "Write docs",
        "descricao": "README",
        "status": "em-progresso",
        "prioridade": "alta",
        "dependencias": [1, 2],
        "criadoEm": "2024-11-10",
        "concluidoEm": None,
    })

    assert task.title == "Write docs"
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.is_in_progress
    assert task.dependencies == [1, 2]


def test_task_defaults():
    """Test missing optional keys get defaults"""
    task = Task.model_validate({"id": 1, "titulo": "A", "criadoEm": "2024-11-10", "dependencias": None})

    assert task.status == "pendente"
    assert task.priority == "media"
    assert task.description == ""
    assert task.dependencies == []
    assert task.completed_at is None


def test_unknown_status_falls_back_to_pending():
    """Test hand-edited states load as pending instead of failing the document"""
    task = Task.model_validate({"id": 1, "titulo": "A", "criadoEm": "2024-11-10", "status": "blocked"})
    assert task.is_pending


def test_missing_creation_date_and_null_priority():
    task = Task.model_validate({"id": 1, "titulo": "A", "prioridade": None})
    assert task.created_at is None
    assert task.priority == "media"


def test_task_without_id_or_title_is_rejected():
    with pytest.raises(ModelValidationError):
        Task.model_validate({"titulo": "A"})
    with pytest.raises(ModelValidationError):
        Task.model_validate({"id": 1})


def test_unknown_priority_is_kept():
    """Test unknown priority tiers load unchanged"""
    task = Task(id=1, title="A", created_at="2024-11-10", priority="urgente")
    assert task.priority == "urgente"


def test_status_assignment_is_validated():
    task = Task(id=1, title="A", created_at="2024-11-10")
    task.status = TaskStatus.DONE
    assert task.is_done
    assert task.status == "concluida"

    task.status = TaskStatus.IN_PROGRESS.value
    assert task.is_in_progress


def test_project_next_id():
    """Test next id is max + 1, never reusing gaps"""
    project = Project(name="demo", created_at="2024-11-10")
    assert project.next_id() == 1

    project.tasks = [
        Task(id=1, title="A", created_at="2024-11-10"),
        Task(id=7, title="B", created_at="2024-11-10"),
    ]
    assert project.next_id() == 8
    assert project.get_task(7).title == "B"
    assert project.get_task(2) is None


def test_project_to_document():
    """Test serialization uses the persisted key names"""
    project = Project(
        name="demo",
        created_at="2024-11-10",
        tasks=[Task(id=1, title="A", created_at="2024-11-10", dependencies=[])],
    )
    document = project.to_document()

    assert set(document) == {"projeto", "criadoEm", "tarefas"}
    assert document["tarefas"][0] == {
        "id": 1,
        "titulo": "A",
        "descricao": "",
        "status": "pendente",
        "prioridade": "media",
        "dependencias": [],
        "criadoEm": "2024-11-10",
        "concluidoEm": None,
    }
