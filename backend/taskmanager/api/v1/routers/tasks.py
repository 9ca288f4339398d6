from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from taskmanager.api.v1.deps import get_current_user, get_task_service
from taskmanager.domain import UserProfile
from taskmanager.schemas.task import TaskCreateIn, TaskOut, TaskPageOut, TaskStatusIn, TaskUpdateIn
from taskmanager.services.task_service import TaskService

# Every route here requires a bearer token
router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskPageOut)
async def list_tasks(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    user: UserProfile = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """
    Get one page of the authenticated user's tasks.

    Tasks are ordered by status, then title. Only tasks belonging to the
    authenticated user are counted or returned.

    Args:
        page: 1-based page number (default 1)
        limit: Page size, 1..100 (default 10)

    Returns:
        TaskPageOut: {"data": [...], "total": int, "page": int, "limit": int}
    """
    result = await tasks.list_tasks(user, page=page, limit=limit)
    return TaskPageOut.from_page(result)


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(
    task_id: UUID,
    user: UserProfile = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """
    Get a single task.

    Raises:
        NotFoundError (404): task does not exist or belongs to another user
    """
    return TaskOut.from_record(await tasks.get_task(user, task_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskOut)
async def create_task(
    body: TaskCreateIn,
    user: UserProfile = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Create a task owned by the authenticated user; status defaults to PENDING."""
    task = await tasks.create_task(user, body.title, body.description, body.status)
    return TaskOut.from_record(task)


@router.patch("/{task_id}/status", response_model=TaskOut)
async def update_task_status(
    task_id: UUID,
    body: TaskStatusIn,
    user: UserProfile = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return TaskOut.from_record(await tasks.update_task_status(user, task_id, body.status))


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: UUID,
    body: TaskUpdateIn,
    user: UserProfile = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """
    Update any of title, description, status.

    Only fields present in the request body are changed; sending
    `"description": null` clears the description.
    """
    return TaskOut.from_record(await tasks.update_task(user, task_id, body.changes()))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    user: UserProfile = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    await tasks.delete_task(user, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
