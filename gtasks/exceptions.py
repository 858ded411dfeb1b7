class AuthenticationError(Exception):
    """Raised when OAuth credentials are missing or invalid."""


class ConfigurationError(Exception):
    """Raised when local configuration prevents a command from running."""


class IntegrationError(Exception):
    """Raised when a Tasks API call fails."""


class RateLimitError(Exception):
    """Raised when the Tasks API rate limit is hit."""


class TaskListNotFoundError(Exception):
    """Raised when no task list has the requested title."""

    def __init__(self, name: str):
        super().__init__(f"no task list titled '{name}'")
        self.name = name


class UnrecognizedCommandError(Exception):
    """Raised when the command line matches no known command."""

    def __init__(self, command: str):
        super().__init__(f"unrecognized command: '{command}'")
        self.command = command


class PartialMoveError(IntegrationError):
    """Raised when a move stops partway through the source list.

    Tasks in ``moved`` were inserted into the destination and deleted from the
    source. ``task`` is the task being processed when ``step`` ("insert" or
    "delete") failed; it and every task after it are still in the source list,
    and after a failed delete ``task`` is also present in the destination.
    """

    def __init__(self, step: str, task, moved: list, error: Exception):
        super().__init__(
            f"failed to {step} task '{task.title}' after moving {len(moved)} task(s): {error}"
        )
        self.step = step
        self.task = task
        self.moved = moved
        self.error = error
