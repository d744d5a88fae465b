"""
Task store: loads and persists the project's task document
"""

import json
from typing import Optional
from pathlib import Path
from pydantic import ValidationError as ModelValidationError
from taskflow.config.settings import settings
from taskflow.models.task import Project
from taskflow.utils.date_utils import get_current_date_str
from taskflow.utils.error_handler import StorageError
from taskflow.utils.logger import logger


class TaskStore:
    """Repository for the project's JSON task document"""

    def __init__(self, tasks_file: Optional[str] = None):
        """
        Initialize task store

        Args:
            tasks_file: Path to the task document (optional, uses settings)
        """
        if tasks_file is None:
            tasks_file = settings.TASKS_FILE_PATH
        self.tasks_file = Path(tasks_file)
        self.logger = logger

    def load(self) -> Project:
        """
        Load the project document

        A missing or unreadable document (not JSON) is treated as a first
        run: a fresh empty project is created and saved right away.
        Tasks with missing or unknown optional fields load with defaults.

        Returns:
            Loaded project

        Raises:
            StorageError: If the document is JSON but not a task document;
                the file is left untouched
        """
        try:
            with open(self.tasks_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            self.logger.debug(f"No task document at {self.tasks_file}, starting a new project")
            return self._start_new_project()
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Failed to read {self.tasks_file}: {e}. Starting a new project")
            return self._start_new_project()

        try:
            project = Project.model_validate(data)
        except ModelValidationError as e:
            raise StorageError(
                f"{self.tasks_file} is not a valid task document, fix or remove it: {e}",
                path=str(self.tasks_file),
            ) from e

        self.logger.debug(f"Loaded {len(project.tasks)} tasks from {self.tasks_file}")
        return project

    def save(self, project: Project) -> None:
        """
        Persist the whole project document

        Args:
            project: Project to write

        Raises:
            StorageError: If the document cannot be written
        """
        try:
            self.tasks_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.tasks_file, 'w', encoding='utf-8') as f:
                json.dump(project.to_document(), f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise StorageError(f"Could not save tasks: {e}", path=str(self.tasks_file)) from e
        self.logger.debug(f"Saved {len(project.tasks)} tasks to {self.tasks_file}")

    def _start_new_project(self) -> Project:
        project = self._new_project()
        self.save(project)
        return project

    def _new_project(self) -> Project:
        return Project(
            name=Path.cwd().name,
            created_at=get_current_date_str(),
            tasks=[],
        )
