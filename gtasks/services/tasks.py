import logging
from collections.abc import Callable, Iterator

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from gtasks.exceptions import AuthenticationError, IntegrationError, RateLimitError
from gtasks.models.tasks import TaskItem, TaskListInfo

logger = logging.getLogger(__name__)

TASKLISTS_PAGE_SIZE = 10
TASKS_PAGE_SIZE = 100


def build_tasks_service(credentials):
    return build("tasks", "v1", credentials=credentials, cache_discovery=False)


def _handle_api_error(e: HttpError):
    if e.resp.status == 429:
        raise RateLimitError("Tasks API rate limit exceeded. Try again shortly.") from e
    if e.resp.status in (401, 403):
        raise AuthenticationError(
            "Tasks credentials expired, revoked or missing write access. "
            "Delete the token file and run again to re-authorize."
        ) from e
    raise IntegrationError(f"Tasks API error: {e}") from e


# Connection failures below the HTTP layer: DNS, refused, timeouts
TRANSPORT_ERRORS = (httplib2.HttpLib2Error, OSError)


def _handle_transport_error(e: Exception):
    raise IntegrationError(f"Tasks API unreachable: {e}") from e


def _parse_task(task: dict) -> TaskItem:
    return TaskItem.model_validate(task)


def _paginate(list_request: Callable, **params) -> Iterator[dict]:
    """Yield every item of a paged ``list`` call, following nextPageToken."""
    page_token = None
    while True:
        if page_token:
            params["pageToken"] = page_token
        try:
            result = list_request(**params).execute(num_retries=3)
        except HttpError as e:
            _handle_api_error(e)
        except TRANSPORT_ERRORS as e:
            _handle_transport_error(e)
        yield from result.get("items", [])
        page_token = result.get("nextPageToken")
        if not page_token:
            return


# --- Task Lists ---


def iter_task_lists(service, page_size: int = TASKLISTS_PAGE_SIZE) -> Iterator[TaskListInfo]:
    """Lazily yield the user's task lists in service order."""
    logger.debug("Listing task lists (page size %d)", page_size)
    for tl in _paginate(service.tasklists().list, maxResults=page_size):
        yield TaskListInfo(id=tl["id"], title=tl.get("title", ""))


def list_task_lists(service, page_size: int = TASKLISTS_PAGE_SIZE) -> list[TaskListInfo]:
    """List all task lists for the authenticated user."""
    return list(iter_task_lists(service, page_size))


# --- Tasks ---


def iter_tasks(
    service,
    tasklist_id: str,
    page_size: int = TASKS_PAGE_SIZE,
    show_completed: bool = True,
    show_hidden: bool = False,
) -> Iterator[TaskItem]:
    """Lazily yield the tasks of a task list in service order."""
    logger.debug("Listing tasks of %s (page size %d)", tasklist_id, page_size)
    for task in _paginate(
        service.tasks().list,
        tasklist=tasklist_id,
        maxResults=page_size,
        showCompleted=show_completed,
        showHidden=show_hidden,
    ):
        yield _parse_task(task)


def list_tasks(
    service,
    tasklist_id: str,
    page_size: int = TASKS_PAGE_SIZE,
    show_completed: bool = True,
    show_hidden: bool = False,
) -> list[TaskItem]:
    """List all tasks in a task list."""
    return list(iter_tasks(service, tasklist_id, page_size, show_completed, show_hidden))


def insert_task(service, tasklist_id: str, body: dict) -> TaskItem:
    """Create a task in a task list. Not retried, a replayed insert duplicates the task."""
    logger.debug("Inserting task %r into %s", body.get("title"), tasklist_id)
    try:
        task = service.tasks().insert(tasklist=tasklist_id, body=body).execute(num_retries=0)
        return _parse_task(task)
    except HttpError as e:
        _handle_api_error(e)
    except TRANSPORT_ERRORS as e:
        _handle_transport_error(e)


def delete_task(service, tasklist_id: str, task_id: str) -> None:
    """Delete a task."""
    logger.debug("Deleting task %s from %s", task_id, tasklist_id)
    try:
        service.tasks().delete(tasklist=tasklist_id, task=task_id).execute(num_retries=0)
    except HttpError as e:
        _handle_api_error(e)
    except TRANSPORT_ERRORS as e:
        _handle_transport_error(e)
