"""
Main application entry point
"""

import sys
from typing import List, Optional, Tuple
from taskflow.models.command import ActionType, ParsedCommand
from taskflow.services.command_parser import CommandParser
from taskflow.services.task_manager import TaskManager
from taskflow.services.task_store import TaskStore
from taskflow.utils.colors import color, RED
from taskflow.utils.error_handler import TaskflowError, handle_error
from taskflow.utils.formatters import format_help
from taskflow.utils.logger import logger
from taskflow.config.settings import settings


class TaskflowCLI:
    """Command-line application"""

    def __init__(self, task_manager: Optional[TaskManager] = None):
        """
        Initialize CLI

        Args:
            task_manager: Task service (built on the configured store if omitted)
        """
        self.parser = CommandParser()
        self.task_manager = task_manager or TaskManager(TaskStore())
        self.logger = logger

    def dispatch(self, command: ParsedCommand) -> str:
        """
        Run a parsed command

        Args:
            command: Parsed command

        Returns:
            Response message
        """
        action = ActionType(command.action)
        manager = self.task_manager

        if action == ActionType.ADD:
            return manager.add_task(command.title)
        if action == ActionType.LIST:
            return manager.list_tasks()
        if action == ActionType.NEXT:
            return manager.next_task()
        if action == ActionType.DONE:
            return manager.complete_task(command.task_id)
        if action == ActionType.DEPENDS:
            return manager.add_dependency(command.task_id, command.dependency_id)
        if action == ActionType.UNDEPENDS:
            return manager.remove_dependency(command.task_id, command.dependency_id)
        if action == ActionType.GRAPH:
            return manager.show_graph()
        if action == ActionType.STATUS:
            return manager.get_status()
        if action == ActionType.EDIT:
            return manager.edit_task(command.task_id, command.text)
        if action == ActionType.PRIORITY:
            return manager.set_priority(command.task_id, command.priority)
        if action == ActionType.SCORES:
            return manager.show_scores()
        return format_help()

    def handle(self, argv: List[str]) -> Tuple[str, int]:
        """
        Parse and run one invocation

        User errors produce a message and exit code 0; only fatal errors
        (failed save, unexpected exceptions) exit with 1.

        Args:
            argv: Arguments after the program name

        Returns:
            (message, exit code)
        """
        try:
            settings.validate()
            command = self.parser.parse(argv)
            return self.dispatch(command), 0
        except TaskflowError as e:
            response = handle_error(e)
            return color(f"❌ {response.message}", RED), 1 if response.fatal else 0
        except Exception as e:
            response = handle_error(e)
            return color(f"❌ {response.message}", RED), 1


def main(argv: Optional[List[str]] = None) -> int:
    cli = TaskflowCLI()
    message, code = cli.handle(sys.argv[1:] if argv is None else argv)
    print(message)
    return code


if __name__ == "__main__":
    sys.exit(main())
