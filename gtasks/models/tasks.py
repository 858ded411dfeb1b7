from pydantic import BaseModel, ConfigDict

# Resource bookkeeping that belongs to the original task, not its content
_NON_COPYABLE_FIELDS = {"id", "etag", "selfLink"}


class TaskListInfo(BaseModel):
    id: str
    title: str


class TaskItem(BaseModel):
    """A task as returned by the Tasks API.

    Fields the API adds beyond the ones declared here are kept as extras so a
    moved task carries them over unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: str = ""
    notes: str | None = None
    status: str = "needsAction"  # "needsAction" or "completed"
    due: str | None = None
    completed: str | None = None
    parent: str | None = None
    position: str | None = None

    def payload(self) -> dict:
        """Body for inserting a copy of this task into another list."""
        return self.model_dump(exclude=_NON_COPYABLE_FIELDS, exclude_none=True)


class MoveResult(BaseModel):
    moved: list[TaskItem] = []
