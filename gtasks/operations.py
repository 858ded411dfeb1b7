import logging

from gtasks.config import Settings, get_settings
from gtasks.exceptions import ConfigurationError, PartialMoveError
from gtasks.models.tasks import MoveResult, TaskItem, TaskListInfo
from gtasks.resolver import resolve_tasklist_id
from gtasks.services import tasks as tasks_service

logger = logging.getLogger(__name__)


# --- Listing ---


def list_tasklists(service, settings: Settings | None = None) -> list[TaskListInfo]:
    settings = settings or get_settings()
    return tasks_service.list_task_lists(service, settings.tasklists_page_size)


def list_tasks_in_list(service, name: str, settings: Settings | None = None) -> list[TaskItem]:
    """Resolve ``name`` and return the tasks of that list in service order."""
    settings = settings or get_settings()
    tasklist_id = resolve_tasklist_id(service, name, settings.tasklists_page_size)
    return tasks_service.list_tasks(service, tasklist_id, settings.tasks_page_size)


def list_default_tasks(service, settings: Settings | None = None) -> list[TaskItem]:
    settings = settings or get_settings()
    return list_tasks_in_list(service, settings.default_list_name, settings)


def list_all_tasks(service, settings: Settings | None = None) -> list[tuple[TaskListInfo, list[TaskItem]]]:
    """Return every task list paired with its tasks."""
    settings = settings or get_settings()
    return [
        (tasklist, tasks_service.list_tasks(service, tasklist.id, settings.tasks_page_size))
        for tasklist in tasks_service.list_task_lists(service, settings.tasklists_page_size)
    ]


# --- Move ---


def move_tasks(
    service,
    from_list_id: str,
    to_list_id: str,
    settings: Settings | None = None,
) -> MoveResult:
    """Move every task of one list into another, one task at a time.

    Each task is inserted into the destination and then deleted from the
    source. The first failure stops the move: tasks handled before it stay
    moved, the rest stay in the source, and nothing is retried or rolled back.
    Subtasks arrive at the top level of the destination, the API does not
    accept a parent in the insert body.
    """
    settings = settings or get_settings()
    # Read the whole source up front; deleting while paging would shift pages
    pending = tasks_service.list_tasks(service, from_list_id, settings.tasks_page_size)
    logger.info("Moving %d task(s) from %s to %s", len(pending), from_list_id, to_list_id)

    result = MoveResult()
    for task in pending:
        try:
            created = tasks_service.insert_task(service, to_list_id, task.payload())
        except Exception as e:
            raise PartialMoveError("insert", task, result.moved, e) from e
        try:
            tasks_service.delete_task(service, from_list_id, task.id)
        except Exception as e:
            logger.warning("Task '%s' was copied to %s but is still in %s", task.title, to_list_id, from_list_id)
            raise PartialMoveError("delete", task, result.moved, e) from e
        logger.debug("Moved task '%s' (%s -> %s)", task.title, task.id, created.id)
        result.moved.append(created)
    return result


def move_named_lists(service, from_name: str, to_name: str, settings: Settings | None = None) -> MoveResult:
    settings = settings or get_settings()
    from_id = resolve_tasklist_id(service, from_name, settings.tasklists_page_size)
    to_id = resolve_tasklist_id(service, to_name, settings.tasklists_page_size)
    if from_id == to_id:
        raise ConfigurationError(f"Cannot move tasks from '{from_name}' onto itself")
    return move_tasks(service, from_id, to_id, settings)
