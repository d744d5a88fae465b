"""
Tests for command parser
"""

import pytest
from taskflow.models.command import ActionType
from taskflow.services.command_parser import CommandParser, parse_task_id
from taskflow.utils.error_handler import ValidationError


@pytest.fixture
def parser():
    return CommandParser()


@pytest.mark.parametrize("argv", [[], ["help"], ["frobnicate", "1"]])
def test_help_fallback(parser, argv):
    """Test no verb or unknown verb maps to help"""
    assert parser.parse(argv).action == ActionType.HELP


def test_add_joins_title(parser):
    """Test title words are joined"""
    command = parser.parse(["add", "Implement", "login"])
    assert command.action == ActionType.ADD
    assert command.title == "Implement login"


def test_add_without_title(parser):
    with pytest.raises(ValidationError, match="taskflow add"):
        parser.parse(["add"])


@pytest.mark.parametrize("raw, expected", [
    ("3", 3),
    ("#12", 12),
    (" 7 ", 7),
    ("0", None),
    ("-1", None),
    ("abc", None),
    ("3abc", None),
    ("²", None),
    (None, None),
])
def test_parse_task_id(raw, expected):
    """Test only positive integers are ids"""
    assert parse_task_id(raw) == expected


def test_done(parser):
    assert parser.parse(["done", "4"]).task_id == 4
    with pytest.raises(ValidationError, match="taskflow done <id>"):
        parser.parse(["done"])
    with pytest.raises(ValidationError):
        parser.parse(["done", "four"])


def test_depends_flags(parser):
    """Test --on in either spelling"""
    command = parser.parse(["depends", "5", "--on", "2"])
    assert command.action == ActionType.DEPENDS
    assert (command.task_id, command.dependency_id) == (5, 2)

    command = parser.parse(["depends", "5", "--on=2"])
    assert (command.task_id, command.dependency_id) == (5, 2)


@pytest.mark.parametrize("argv", [
    ["depends", "5"],
    ["depends", "5", "--on"],
    ["depends", "5", "--on", "x"],
    ["depends", "--on", "2"],
    ["depends", "5", "--from", "2"],
    ["undepends", "5", "--on", "2"],
])
def test_malformed_dependency_flags(parser, argv):
    """Test malformed flag pairs are validation errors"""
    with pytest.raises(ValidationError, match="Usage"):
        parser.parse(argv)


def test_undepends(parser):
    command = parser.parse(["undepends", "5", "--from", "2"])
    assert command.action == ActionType.UNDEPENDS
    assert (command.task_id, command.dependency_id) == (5, 2)


def test_edit_with_and_without_text(parser):
    """Test edit text is optional"""
    command = parser.parse(["edit", "2", "New", "description"])
    assert command.text == "New description"

    command = parser.parse(["edit", "2"])
    assert command.task_id == 2
    assert command.text is None


def test_priority(parser):
    command = parser.parse(["priority", "2", "alta"])
    assert (command.task_id, command.priority) == (2, "alta")

    with pytest.raises(ValidationError, match="alta\\|media\\|baixa"):
        parser.parse(["priority", "2"])


@pytest.mark.parametrize("verb", ["list", "next", "graph", "status", "scores", "LIST"])
def test_argumentless_verbs(parser, verb):
    assert parser.parse([verb]).action == verb.lower()
