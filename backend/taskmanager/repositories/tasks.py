"""
Task store.

Every query here takes the owner id and filters on it; there is no way to
read or mutate a task without naming its owner.
"""
from typing import Optional
from uuid import UUID

from taskmanager.domain import TaskRecord, TaskStatus, UserProfile
from taskmanager.models.task import Task
from taskmanager.repositories import as_uuid

# status name ascending, then title ascending
LIST_ORDER = ("status", "title")


def _row_to_task(row: Task, with_owner: bool = False) -> TaskRecord:
    owner = None
    if with_owner:
        owner = UserProfile(id=row.user.id, username=row.user.username)
    return TaskRecord(
        id=row.id,
        title=row.title,
        description=row.description,
        status=TaskStatus(row.status),
        owner_id=row.user_id,
        owner=owner,
    )


async def find_by_id(task_id: UUID | str, owner_id: UUID, *, with_owner: bool = False) -> Optional[TaskRecord]:
    tid = as_uuid(task_id)
    if tid is None:
        return None
    query = Task.filter(id=tid, user_id=owner_id)
    if with_owner:
        query = query.prefetch_related("user")
    row = await query.first()
    return _row_to_task(row, with_owner) if row else None


async def find_by_owner(
    owner_id: UUID,
    skip: int,
    limit: int,
    *,
    with_owner: bool = False,
) -> tuple[list[TaskRecord], int]:
    """
    Return one page of the owner's tasks plus the owner's full task count.

    Args:
        owner_id: Only tasks with this user_id are considered
        skip: Number of rows to skip after ordering
        limit: Maximum number of rows to return
        with_owner: Also load the owning user into TaskRecord.owner

    Returns:
        (records, total) where total is counted before slicing
    """
    query = Task.filter(user_id=owner_id)
    total = await query.count()
    page_query = query.order_by(*LIST_ORDER).offset(skip).limit(limit)
    if with_owner:
        page_query = page_query.prefetch_related("user")
    rows = await page_query
    return [_row_to_task(r, with_owner) for r in rows], total


async def create(
    owner_id: UUID,
    title: str,
    description: Optional[str],
    status: TaskStatus,
) -> TaskRecord:
    row = await Task.create(
        user_id=owner_id,
        title=title,
        description=description,
        status=status,
    )
    return _row_to_task(row)


async def save(record: TaskRecord) -> int:
    """
    Write title/description/status back for an existing task.

    Returns:
        Number of rows updated (0 if the task vanished since it was read)
    """
    return await Task.filter(id=record.id, user_id=record.owner_id).update(
        title=record.title,
        description=record.description,
        status=record.status,
    )


async def delete(task_id: UUID, owner_id: UUID) -> int:
    """Delete by id and owner; returns the number of rows removed."""
    return await Task.filter(id=task_id, user_id=owner_id).delete()
