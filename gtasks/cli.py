import argparse
import logging
import sys

from gtasks import operations
from gtasks.auth import TokenStore, get_credentials
from gtasks.commands import USAGE, parse_command
from gtasks.config import Settings, get_settings
from gtasks.exceptions import (
    AuthenticationError,
    ConfigurationError,
    IntegrationError,
    RateLimitError,
    TaskListNotFoundError,
    UnrecognizedCommandError,
)
from gtasks.models.commands import (
    Command,
    ListAllTasks,
    ListDefaultTasks,
    ListTasklists,
    ListTasksInList,
    MoveTasks,
)
from gtasks.services.tasks import build_tasks_service

logger = logging.getLogger("gtasks")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

COMMAND_ERRORS = (
    AuthenticationError,
    ConfigurationError,
    IntegrationError,
    RateLimitError,
    TaskListNotFoundError,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gtasks",
        description="List Google Tasks task lists and move tasks between them.",
        epilog=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every API call to stderr.")
    parser.add_argument("words", nargs="*", help="Command words, e.g. 'list tasks in Groceries'.")
    return parser.parse_args(argv)


def _print_titles(header: str, items) -> None:
    print(header)
    for item in items:
        print(f"- {item.title}")


def _step_name(command: Command) -> str:
    if isinstance(command, MoveTasks):
        return f"move tasks from '{command.from_name}' to '{command.to_name}'"
    if isinstance(command, ListTasksInList):
        return f"list tasks in '{command.name}'"
    if isinstance(command, ListDefaultTasks):
        return "list tasks"
    if isinstance(command, ListAllTasks):
        return "list all tasks"
    return "list task lists"


def dispatch(command: Command, service, settings: Settings) -> None:
    """Run a parsed command against an initialized Tasks service."""
    if isinstance(command, ListTasklists):
        _print_titles("Task Lists:", operations.list_tasklists(service, settings))
    elif isinstance(command, ListDefaultTasks):
        tasks = operations.list_default_tasks(service, settings)
        _print_titles(f"Tasks in {settings.default_list_name}:", tasks)
    elif isinstance(command, ListTasksInList):
        _print_titles(f"Tasks in {command.name}:", operations.list_tasks_in_list(service, command.name, settings))
    elif isinstance(command, ListAllTasks):
        for tasklist, tasks in operations.list_all_tasks(service, settings):
            _print_titles(f"Tasks in {tasklist.title}:", tasks)
    elif isinstance(command, MoveTasks):
        result = operations.move_named_lists(service, command.from_name, command.to_name, settings)
        print(f"Moved {len(result.moved)} task(s) from {command.from_name} to {command.to_name}")
    else:
        raise TypeError(f"Unsupported command: {command!r}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        command = parse_command(args.words)
    except UnrecognizedCommandError as e:
        print(f"error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    try:
        credentials = get_credentials(settings, TokenStore(settings.token_file))
        service = build_tasks_service(credentials)
    except COMMAND_ERRORS as e:
        print(f"error: unable to set up Tasks client: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        dispatch(command, service, settings)
    except COMMAND_ERRORS as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: unable to {_step_name(command)}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
