"""
Unit tests for services.task_service against a fresh in-memory database.
"""
import uuid

import pytest

from taskmanager.core.errors import NotFoundError, ValidationError
from taskmanager.domain import TaskStatus
from taskmanager.repositories import tasks as tasks_repo
from taskmanager.services.task_service import TaskService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service():
    return TaskService()


async def test_create_defaults_to_pending(create_user, service):
    owner, _ = await create_user()
    task = await service.create_task(owner, "Buy milk")
    assert task.status == TaskStatus.PENDING
    assert task.owner_id == owner.id
    assert task.description is None
    assert isinstance(task.id, uuid.UUID)


async def test_create_keeps_explicit_status(create_user, service):
    owner, _ = await create_user()
    task = await service.create_task(owner, "Ship it", "release notes", TaskStatus.IN_PROGRESS)
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.description == "release notes"


async def test_create_rejects_empty_title(create_user, service):
    owner, _ = await create_user()
    with pytest.raises(ValidationError):
        await service.create_task(owner, "")
    page = await service.list_tasks(owner)
    assert page.total == 0


async def test_list_paginates_six_tasks(create_user, service):
    owner, _ = await create_user()
    for i in range(6):
        await service.create_task(owner, f"task {i}")

    first = await service.list_tasks(owner, page=1, limit=5)
    assert len(first.data) == 5
    assert first.total == 6
    assert (first.page, first.limit) == (1, 5)

    second = await service.list_tasks(owner, page=2, limit=5)
    assert len(second.data) == 1
    assert second.total == 6

    seen = {t.id for t in first.data} | {t.id for t in second.data}
    assert len(seen) == 6


async def test_list_defaults(create_user, service):
    owner, _ = await create_user()
    page = await service.list_tasks(owner)
    assert (page.page, page.limit, page.total, page.data) == (1, 10, 0, [])


async def test_list_orders_by_status_then_title(create_user, service):
    owner, _ = await create_user()
    await service.create_task(owner, "b", status=TaskStatus.PENDING)
    await service.create_task(owner, "a", status=TaskStatus.PENDING)
    await service.create_task(owner, "z", status=TaskStatus.DONE)
    await service.create_task(owner, "c", status=TaskStatus.IN_PROGRESS)

    page = await service.list_tasks(owner)
    assert [(t.status.value, t.title) for t in page.data] == [
        ("DONE", "z"),
        ("IN_PROGRESS", "c"),
        ("PENDING", "a"),
        ("PENDING", "b"),
    ]


async def test_list_only_returns_own_tasks(create_user, service):
    alice, _ = await create_user()
    bob, _ = await create_user()
    await service.create_task(alice, "alice's")
    await service.create_task(bob, "bob's")

    page = await service.list_tasks(alice)
    assert page.total == 1
    assert [t.title for t in page.data] == ["alice's"]


async def test_list_rejects_bad_bounds(create_user, service):
    owner, _ = await create_user()
    with pytest.raises(ValidationError):
        await service.list_tasks(owner, page=0)
    with pytest.raises(ValidationError):
        await service.list_tasks(owner, limit=101)


async def test_foreign_task_is_indistinguishable_from_missing(create_user, service):
    alice, _ = await create_user()
    bob, _ = await create_user()
    task = await service.create_task(alice, "private")

    operations = [
        lambda task_id: service.get_task(bob, task_id),
        lambda task_id: service.update_task(bob, task_id, {"title": "hijacked"}),
        lambda task_id: service.update_task_status(bob, task_id, TaskStatus.DONE),
        lambda task_id: service.delete_task(bob, task_id),
    ]
    for op in operations:
        with pytest.raises(NotFoundError) as foreign:
            await op(task.id)
        with pytest.raises(NotFoundError) as missing:
            await op(uuid.uuid4())
        assert foreign.value.message == missing.value.message
        assert foreign.value.code == missing.value.code

    unchanged = await service.get_task(alice, task.id)
    assert unchanged.title == "private"
    assert unchanged.status == TaskStatus.PENDING


async def test_malformed_id_is_not_found(create_user, service):
    owner, _ = await create_user()
    with pytest.raises(NotFoundError):
        await service.get_task(owner, "not-a-uuid")


async def test_update_status_only_changes_status(create_user, service):
    owner, _ = await create_user()
    task = await service.create_task(owner, "Write report", "quarterly")
    updated = await service.update_task_status(owner, task.id, "DONE")
    assert updated.status == TaskStatus.DONE
    assert updated.title == "Write report"
    assert updated.description == "quarterly"
    assert (await service.get_task(owner, task.id)).status == TaskStatus.DONE


async def test_partial_update_leaves_other_fields(create_user, service):
    owner, _ = await create_user()
    task = await service.create_task(owner, "Old", "keep me", TaskStatus.IN_PROGRESS)
    updated = await service.update_task(owner, task.id, {"title": "X"})
    assert updated.title == "X"
    assert updated.description == "keep me"
    assert updated.status == TaskStatus.IN_PROGRESS

    stored = await service.get_task(owner, task.id)
    assert (stored.title, stored.description, stored.status) == ("X", "keep me", TaskStatus.IN_PROGRESS)


async def test_update_with_falsy_value_still_overwrites(create_user, service):
    owner, _ = await create_user()
    task = await service.create_task(owner, "Title", "some text")
    updated = await service.update_task(owner, task.id, {"description": ""})
    assert updated.description == ""
    cleared = await service.update_task(owner, task.id, {"description": None})
    assert cleared.description is None


async def test_update_rejects_null_title(create_user, service):
    owner, _ = await create_user()
    task = await service.create_task(owner, "Title")
    with pytest.raises(ValidationError):
        await service.update_task(owner, task.id, {"title": None})


async def test_delete_twice(create_user, service):
    owner, _ = await create_user()
    task = await service.create_task(owner, "Temp")
    assert await service.delete_task(owner, task.id) is None
    with pytest.raises(NotFoundError):
        await service.delete_task(owner, task.id)
    with pytest.raises(NotFoundError):
        await service.get_task(owner, task.id)


class _VanishingTasks:
    """Task store whose rows disappear between the lookup and the write."""

    def __init__(self):
        self.find_by_id = tasks_repo.find_by_id

    async def delete(self, task_id, owner_id):
        await tasks_repo.delete(task_id, owner_id)
        return 0

    async def save(self, record):
        await tasks_repo.delete(record.id, record.owner_id)
        return await tasks_repo.save(record)


async def test_delete_racing_with_concurrent_delete_is_not_found(create_user):
    owner, _ = await create_user()
    task = await TaskService().create_task(owner, "Racy")
    with pytest.raises(NotFoundError):
        await TaskService(tasks=_VanishingTasks()).delete_task(owner, task.id)


async def test_update_racing_with_concurrent_delete_is_not_found(create_user):
    owner, _ = await create_user()
    task = await TaskService().create_task(owner, "Racy")
    with pytest.raises(NotFoundError):
        await TaskService(tasks=_VanishingTasks()).update_task(owner, task.id, {"title": "late"})


async def test_find_by_owner_can_load_owner(create_user, service):
    owner, _ = await create_user()
    await service.create_task(owner, "with owner")
    records, total = await tasks_repo.find_by_owner(owner.id, 0, 10, with_owner=True)
    assert total == 1
    assert records[0].owner is not None
    assert records[0].owner.username == owner.username

    plain, _ = await tasks_repo.find_by_owner(owner.id, 0, 10)
    assert plain[0].owner is None
