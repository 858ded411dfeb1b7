from typing import Literal, Union

from pydantic import BaseModel


class ListDefaultTasks(BaseModel):
    kind: Literal["list_default_tasks"] = "list_default_tasks"


class ListAllTasks(BaseModel):
    kind: Literal["list_all_tasks"] = "list_all_tasks"


class ListTasklists(BaseModel):
    kind: Literal["list_tasklists"] = "list_tasklists"


class ListTasksInList(BaseModel):
    kind: Literal["list_tasks_in_list"] = "list_tasks_in_list"
    name: str


class MoveTasks(BaseModel):
    kind: Literal["move_tasks"] = "move_tasks"
    from_name: str
    to_name: str


Command = Union[ListDefaultTasks, ListAllTasks, ListTasklists, ListTasksInList, MoveTasks]
