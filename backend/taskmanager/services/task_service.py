"""
Owner-scoped task operations.

Every method takes the authenticated UserProfile and passes owner.id down to
the task store; a task owned by someone else is reported exactly like a
task that does not exist.
"""
import logging
from typing import Any, Mapping, Optional
from uuid import UUID

from taskmanager.core.errors import NotFoundError, ValidationError
from taskmanager.domain import TaskPage, TaskRecord, TaskStatus, UserProfile
from taskmanager.repositories import tasks as tasks_repo
from taskmanager.services.validation import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    validate_new_task,
    validate_pagination,
    validate_status_change,
    validate_task_changes,
)

logger = logging.getLogger("uvicorn.error")

TASK_NOT_FOUND = "Task not found"


class TaskService:
    def __init__(self, *, tasks=tasks_repo):
        self.tasks = tasks

    async def create_task(
        self,
        owner: UserProfile,
        title: str,
        description: Optional[str] = None,
        status: Optional[TaskStatus | str] = None,
    ) -> TaskRecord:
        errors = validate_new_task(title, description, status)
        if errors:
            raise ValidationError(errors)
        task = await self.tasks.create(
            owner.id,
            title,
            description,
            TaskStatus(status) if status is not None else TaskStatus.PENDING,
        )
        logger.info("[tasks] created task id=%s owner=%s", task.id, owner.id)
        return task

    async def list_tasks(
        self,
        owner: UserProfile,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> TaskPage:
        """
        One page of the owner's tasks, ordered by status then title.

        Args:
            owner: Authenticated user
            page: 1-based page number (default 1)
            limit: Page size, 1..100 (default 10)

        Returns:
            TaskPage with total counted over all of the owner's tasks
        """
        errors = validate_pagination(page, limit)
        if errors:
            raise ValidationError(errors)
        page = DEFAULT_PAGE if page is None else int(page)
        limit = DEFAULT_LIMIT if limit is None else int(limit)
        skip = (page - 1) * limit
        data, total = await self.tasks.find_by_owner(owner.id, skip, limit)
        return TaskPage(data=data, total=total, page=page, limit=limit)

    async def get_task(self, owner: UserProfile, task_id: UUID | str) -> TaskRecord:
        task = await self.tasks.find_by_id(task_id, owner.id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return task

    async def update_task_status(self, owner: UserProfile, task_id: UUID | str, status: TaskStatus | str) -> TaskRecord:
        errors = validate_status_change(status)
        if errors:
            raise ValidationError(errors)
        task = await self.get_task(owner, task_id)
        task.status = TaskStatus(status)
        return await self._save(task)

    async def update_task(self, owner: UserProfile, task_id: UUID | str, changes: Mapping[str, Any]) -> TaskRecord:
        """
        Apply a partial update. Keys absent from `changes` are left alone;
        a key present with a falsy value (e.g. description="") still overwrites.
        """
        errors = validate_task_changes(changes)
        if errors:
            raise ValidationError(errors)
        task = await self.get_task(owner, task_id)
        if "title" in changes:
            task.title = changes["title"]
        if "description" in changes:
            task.description = changes["description"]
        if "status" in changes:
            task.status = TaskStatus(changes["status"])
        return await self._save(task)

    async def delete_task(self, owner: UserProfile, task_id: UUID | str) -> None:
        task = await self.get_task(owner, task_id)
        affected = await self.tasks.delete(task.id, owner.id)
        if affected == 0:
            # Deleted concurrently between the lookup and the delete
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info("[tasks] deleted task id=%s owner=%s", task.id, owner.id)

    async def _save(self, task: TaskRecord) -> TaskRecord:
        affected = await self.tasks.save(task)
        if affected == 0:
            raise NotFoundError(TASK_NOT_FOUND)
        return task
