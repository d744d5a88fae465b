"""
Command-line argument parsing into ParsedCommand
"""

from typing import List, Optional
from taskflow.models.command import ActionType, ParsedCommand
from taskflow.utils.error_handler import ValidationError
from taskflow.utils.logger import logger

USAGE = {
    ActionType.ADD: 'Usage: taskflow add "Task title"',
    ActionType.DONE: "Usage: taskflow done <id>",
    ActionType.DEPENDS: (
        "Usage: taskflow depends <id> --on <dependency-id>\n"
        "   Example: taskflow depends 5 --on 2\n"
        "   (task 5 now depends on task 2)"
    ),
    ActionType.UNDEPENDS: (
        "Usage: taskflow undepends <id> --from <dependency-id>\n"
        "   Example: taskflow undepends 5 --from 2"
    ),
    ActionType.EDIT: 'Usage: taskflow edit <id> "new description"',
    ActionType.PRIORITY: "Usage: taskflow priority <id> <alta|media|baixa>",
}


def parse_task_id(raw: Optional[str]) -> Optional[int]:
    """Positive integer id, or None for anything else"""
    if raw is None:
        return None
    raw = raw.strip().lstrip("#")
    if not raw.isdecimal():
        return None
    value = int(raw)
    return value if value > 0 else None


def _flag_value(args: List[str], flag: str) -> Optional[str]:
    """Value following ``flag`` (``--on 3`` or ``--on=3``)"""
    for i, arg in enumerate(args):
        if arg == flag:
            return args[i + 1] if i + 1 < len(args) else None
        if arg.startswith(flag + "="):
            return arg[len(flag) + 1:]
    return None


class CommandParser:
    """Parser turning argv into a ParsedCommand"""

    def __init__(self):
        """Initialize command parser"""
        self.logger = logger

    def parse(self, argv: List[str]) -> ParsedCommand:
        """
        Parse command-line arguments

        An empty or unknown verb maps to help.

        Args:
            argv: Arguments after the program name

        Returns:
            ParsedCommand

        Raises:
            ValidationError: If the verb's arguments are missing or malformed
        """
        if not argv:
            return ParsedCommand(action=ActionType.HELP)

        verb, args = argv[0].lower(), argv[1:]
        try:
            action = ActionType(verb)
        except ValueError:
            self.logger.debug(f"Unknown command: {verb}")
            return ParsedCommand(action=ActionType.HELP)

        self.logger.debug(f"Parsing {action.value} with args {args}")

        if action == ActionType.ADD:
            title = " ".join(args).strip()
            if not title:
                raise ValidationError(USAGE[action])
            return ParsedCommand(action=action, title=title)

        if action in (ActionType.DONE, ActionType.EDIT, ActionType.PRIORITY):
            task_id = parse_task_id(args[0] if args else None)
            if task_id is None:
                raise ValidationError(USAGE[action])

            if action == ActionType.DONE:
                return ParsedCommand(action=action, task_id=task_id)

            if action == ActionType.EDIT:
                text = " ".join(args[1:]).strip() or None
                return ParsedCommand(action=action, task_id=task_id, text=text)

            if len(args) < 2:
                raise ValidationError(USAGE[action])
            return ParsedCommand(action=action, task_id=task_id, priority=args[1])

        if action in (ActionType.DEPENDS, ActionType.UNDEPENDS):
            flag = "--on" if action == ActionType.DEPENDS else "--from"
            task_id = parse_task_id(args[0] if args else None)
            dependency_id = parse_task_id(_flag_value(args, flag))
            if task_id is None or dependency_id is None:
                raise ValidationError(USAGE[action])
            return ParsedCommand(action=action, task_id=task_id, dependency_id=dependency_id)

        # list, next, graph, status, scores, help take no arguments
        return ParsedCommand(action=action)
