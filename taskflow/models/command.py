"""
Command model for parsed command-line invocations
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict
from enum import Enum


class ActionType(str, Enum):
    """Action types for commands"""
    ADD = "add"
    LIST = "list"
    NEXT = "next"
    DONE = "done"
    DEPENDS = "depends"
    UNDEPENDS = "undepends"
    GRAPH = "graph"
    STATUS = "status"
    EDIT = "edit"
    PRIORITY = "priority"
    SCORES = "scores"
    HELP = "help"


class ParsedCommand(BaseModel):
    """Parsed command, ready for dispatch"""

    model_config = ConfigDict(use_enum_values=True)

    action: ActionType
    task_id: Optional[int] = None
    dependency_id: Optional[int] = None  # --on / --from
    title: Optional[str] = None
    text: Optional[str] = None  # new description for edit
    priority: Optional[str] = None
