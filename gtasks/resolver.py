from gtasks.exceptions import TaskListNotFoundError
from gtasks.services import tasks as tasks_service


def resolve_tasklist_id(service, name: str, page_size: int = tasks_service.TASKLISTS_PAGE_SIZE) -> str:
    """Return the id of the first task list titled exactly ``name``.

    Titles are matched case-sensitively without trimming. When several lists
    share a title the first one in service order wins.
    """
    for tasklist in tasks_service.iter_task_lists(service, page_size):
        if tasklist.title == name:
            return tasklist.id
    raise TaskListNotFoundError(name)
