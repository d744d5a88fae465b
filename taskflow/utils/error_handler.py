"""
Error handling utilities
"""

from typing import Optional, List
from taskflow.models.response import ErrorResponse
from taskflow.utils.logger import logger


class TaskflowError(Exception):
    """Base exception for taskflow errors"""
    pass


class ValidationError(TaskflowError):
    """Invalid user input (missing or malformed arguments)"""
    pass


class TaskNotFoundError(TaskflowError):
    """Referenced task id does not exist"""
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task #{task_id} not found")


class DependencyError(TaskflowError):
    """Dependency edge rejected (self, duplicate, cycle or missing edge)"""
    def __init__(self, message: str, task_id: int, dependency_id: int, error_code: Optional[str] = None):
        self.message = message
        self.task_id = task_id
        self.dependency_id = dependency_id
        self.error_code = error_code
        super().__init__(self.message)


class DependencyCycleError(TaskflowError):
    """Cycle met while computing depth over stored data"""
    def __init__(self, cycle: List[int]):
        self.cycle = cycle
        path = " -> ".join(f"#{task_id}" for task_id in cycle)
        super().__init__(f"Cycle detected during depth computation: {path}")


class StorageError(TaskflowError):
    """Task document could not be read as a project or could not be written"""
    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(self.message)


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return user-friendly message

    Args:
        error: Exception to handle

    Returns:
        ErrorResponse with user-friendly message
    """
    if isinstance(error, ValidationError):
        logger.debug(f"Validation error: {error}")
        return ErrorResponse(message=str(error), error_code="validation")

    if isinstance(error, TaskNotFoundError):
        logger.debug(f"Task not found: {error.task_id}")
        return ErrorResponse(
            message=str(error),
            error_code="not_found",
            details={"task_id": error.task_id},
        )

    if isinstance(error, DependencyError):
        logger.info(f"Dependency rejected: {error.message}")
        return ErrorResponse(
            message=error.message,
            error_code=error.error_code or "dependency",
            details={"task_id": error.task_id, "dependency_id": error.dependency_id},
        )

    if isinstance(error, DependencyCycleError):
        logger.warning(f"Stored graph contains a cycle: {error.cycle}")
        return ErrorResponse(
            message=f"{error}. Fix it with \"undepends\".",
            error_code="cycle",
            details={"cycle": error.cycle},
        )

    logger.error(f"Error occurred: {error}", exc_info=True)

    if isinstance(error, StorageError):
        return ErrorResponse(
            message=error.message,
            error_code="storage",
            details={"path": error.path},
            fatal=True,
        )

    # Generic error message
    return ErrorResponse(
        message=f"Unexpected error: {error}",
        fatal=True,
    )
