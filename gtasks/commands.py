"""Command-line grammar.

    list tasks                       -> ListDefaultTasks
    list all tasks                   -> ListAllTasks
    list tasklists                   -> ListTasklists
    list tasks in <name...>          -> ListTasksInList
    move tasks from <name...> to <name...> -> MoveTasks

List names are the remaining words joined with single spaces. In a move the
first standalone ``to`` word separates the two names, so a source list whose
title contains the word "to" cannot be named.
"""

from collections.abc import Sequence

from gtasks.exceptions import UnrecognizedCommandError
from gtasks.models.commands import (
    Command,
    ListAllTasks,
    ListDefaultTasks,
    ListTasklists,
    ListTasksInList,
    MoveTasks,
)

LITERAL_COMMANDS = {
    "list tasks": ListDefaultTasks,
    "list all tasks": ListAllTasks,
    "list tasklists": ListTasklists,
}

LIST_IN_PREFIX = ["list", "tasks", "in"]
MOVE_PREFIX = ["move", "tasks", "from"]
MOVE_SEPARATOR = "to"

USAGE = "\n".join(
    [
        "usage: gtasks list tasklists",
        "       gtasks list tasks",
        "       gtasks list all tasks",
        "       gtasks list tasks in <list name>",
        "       gtasks move tasks from <list name> to <list name>",
    ]
)


def _parse_move(words: list[str], text: str) -> MoveTasks:
    try:
        sep = words.index(MOVE_SEPARATOR)
    except ValueError:
        raise UnrecognizedCommandError(text) from None
    from_name = " ".join(words[:sep])
    to_name = " ".join(words[sep + 1:])
    if not from_name or not to_name:
        raise UnrecognizedCommandError(text)
    return MoveTasks(from_name=from_name, to_name=to_name)


def parse_command(argv: Sequence[str]) -> Command:
    """Turn the words of a command line into a Command."""
    words = list(argv)
    text = " ".join(words)

    if text in LITERAL_COMMANDS:
        return LITERAL_COMMANDS[text]()
    if len(words) >= 4 and words[:3] == LIST_IN_PREFIX:
        return ListTasksInList(name=" ".join(words[3:]))
    if len(words) >= 6 and words[:3] == MOVE_PREFIX:
        return _parse_move(words[3:], text)
    raise UnrecognizedCommandError(text)
