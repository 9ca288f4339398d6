"""
Pydantic schemas for task endpoints.
Request models only check shape and types; value rules live in
taskmanager.services.validation.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from taskmanager.domain import TaskPage, TaskRecord, TaskStatus


class TaskCreateIn(BaseModel):
    """
    Request model for creating a task.
    Status is optional and defaults to PENDING.
    """
    model_config = ConfigDict(extra="forbid")

    title: str
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskStatusIn(BaseModel):
    """Request model for the status-only update."""
    model_config = ConfigDict(extra="forbid")

    status: TaskStatus


class TaskUpdateIn(BaseModel):
    """
    Request model for partial task updates.
    Only fields sent by the client are applied (see model_fields_set).
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskOut(BaseModel):
    """Task as returned to clients."""
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    userId: str  # Owner id

    @classmethod
    def from_record(cls, task: TaskRecord) -> "TaskOut":
        return cls(
            id=str(task.id),
            title=task.title,
            description=task.description,
            status=task.status,
            userId=str(task.owner_id),
        )


class TaskPageOut(BaseModel):
    """
    Response model for the paginated task list.
    """
    data: List[TaskOut]  # Tasks on this page
    total: int  # Total number of the user's tasks
    page: int  # Echoed page number
    limit: int  # Echoed page size

    @classmethod
    def from_page(cls, page: TaskPage) -> "TaskPageOut":
        return cls(
            data=[TaskOut.from_record(t) for t in page.data],
            total=page.total,
            page=page.page,
            limit=page.limit,
        )
