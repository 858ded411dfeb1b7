import pytest
from unittest.mock import MagicMock

from googleapiclient.errors import HttpError

from gtasks.config import Settings


# --- Canned API responses ---

TASKLISTS_API_LIST = {
    "kind": "tasks#taskLists",
    "items": [
        {"kind": "tasks#taskList", "id": "list-default", "title": "Default List"},
        {"kind": "tasks#taskList", "id": "list-groceries", "title": "Groceries"},
    ],
}

TASKS_API_TASK = {
    "kind": "tasks#task",
    "id": "task123",
    "etag": '"abc"',
    "selfLink": "https://www.googleapis.com/tasks/v1/lists/list-groceries/tasks/task123",
    "title": "Buy milk",
    "notes": "2 litres",
    "status": "needsAction",
    "due": "2025-01-10T00:00:00.000Z",
    "updated": "2025-01-01T12:00:00.000Z",
    "position": "00000000000000000000",
    "webViewLink": "https://tasks.google.com/task/task123",
}

TASKS_API_LIST = {
    "kind": "tasks#tasks",
    "items": [
        TASKS_API_TASK,
        {"kind": "tasks#task", "id": "task456", "title": "Walk dog", "status": "completed",
         "completed": "2025-01-02T08:00:00.000Z"},
    ],
}


def make_http_error(status: int) -> HttpError:
    resp = MagicMock()
    resp.status = status
    return HttpError(resp=resp, content=b"error")


# --- In-memory Tasks API ---


class _Request:
    def __init__(self, call):
        self._call = call

    def execute(self, num_retries=0):
        return self._call()


class _Resource:
    def __init__(self, **methods):
        for name, method in methods.items():
            setattr(self, name, method)


class FakeTasksService:
    """Stand-in for the discovery client, backed by dicts.

    ``fail(op, title, status)`` makes the next ``op`` ("insert" or "delete")
    touching a task with that title raise an HttpError.
    """

    def __init__(self):
        self.tasklists_data: list[dict] = []
        self.tasks_data: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self._failures: dict[tuple[str, str], int] = {}
        self._next_id = 0

    def add_list(self, list_id: str, title: str, task_titles=()) -> None:
        self.tasklists_data.append({"kind": "tasks#taskList", "id": list_id, "title": title})
        self.tasks_data[list_id] = []
        for task_title in task_titles:
            self.tasks_data[list_id].append(
                {"kind": "tasks#task", "id": self._new_id(), "title": task_title, "status": "needsAction"}
            )

    def fail(self, op: str, title: str, status: int = 500) -> None:
        self._failures[(op, title)] = status

    def titles(self, list_id: str) -> list[str]:
        return [t["title"] for t in self.tasks_data[list_id]]

    def ids(self, list_id: str) -> list[str]:
        return [t["id"] for t in self.tasks_data[list_id]]

    def _new_id(self) -> str:
        self._next_id += 1
        return f"task-{self._next_id}"

    def _maybe_fail(self, op: str, title: str) -> None:
        status = self._failures.pop((op, title), None)
        if status is not None:
            raise make_http_error(status)

    @staticmethod
    def _page(items: list[dict], maxResults: int, pageToken: str | None = None) -> dict:
        start = int(pageToken or 0)
        end = start + maxResults
        page = {}
        if items[start:end]:
            page["items"] = [dict(item) for item in items[start:end]]
        if end < len(items):
            page["nextPageToken"] = str(end)
        return page

    # Discovery resources

    def tasklists(self):
        def list_(maxResults, pageToken=None):
            self.calls.append(("tasklists.list", pageToken))
            return _Request(lambda: self._page(self.tasklists_data, maxResults, pageToken))

        return _Resource(list=list_)

    def tasks(self):
        def list_(tasklist, maxResults, pageToken=None, showCompleted=True, showHidden=False):
            self.calls.append(("tasks.list", tasklist, pageToken))
            return _Request(lambda: self._page(self.tasks_data[tasklist], maxResults, pageToken))

        def insert(tasklist, body):
            self.calls.append(("tasks.insert", tasklist, body.get("title")))

            def run():
                self._maybe_fail("insert", body.get("title"))
                task = {**body, "id": self._new_id()}
                self.tasks_data[tasklist].append(task)
                return dict(task)

            return _Request(run)

        def delete(tasklist, task):
            self.calls.append(("tasks.delete", tasklist, task))

            def run():
                existing = [t for t in self.tasks_data[tasklist] if t["id"] == task]
                if not existing:
                    raise make_http_error(404)
                self._maybe_fail("delete", existing[0]["title"])
                self.tasks_data[tasklist].remove(existing[0])
                return ""

            return _Request(run)

        return _Resource(list=list_, insert=insert, delete=delete)


@pytest.fixture
def fake_service():
    """Two lists: "X" holding two tasks and an empty "Y"."""
    svc = FakeTasksService()
    svc.add_list("list-x", "X", ["Buy milk", "Walk dog"])
    svc.add_list("list-y", "Y")
    return svc


@pytest.fixture
def settings(tmp_path):
    return Settings(
        token_file=tmp_path / "token.json",
        client_secret_file=tmp_path / "credentials.json",
    )


@pytest.fixture
def mock_tasks_service():
    """Fully mocked Tasks API discovery client."""
    return MagicMock()
