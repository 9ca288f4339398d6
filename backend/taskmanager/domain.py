"""
Plain data records passed between repositories, services and routers.

No ORM or framework types cross this boundary: repositories map Tortoise
rows into these dataclasses and services only ever see them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from uuid import UUID


class TaskStatus(str, Enum):
    """Task lifecycle state; stored and serialized by name."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@dataclass(frozen=True)
class UserProfile:
    """The part of a user that is safe to expose (no password hash)."""

    id: UUID
    username: str


@dataclass
class UserRecord:
    id: UUID
    username: str
    password_hash: str

    def profile(self) -> UserProfile:
        return UserProfile(id=self.id, username=self.username)


@dataclass
class TaskRecord:
    id: UUID
    title: str
    status: TaskStatus
    owner_id: UUID
    description: Optional[str] = None
    # Populated only when the store is asked to load the owner relation
    owner: Optional[UserProfile] = None


@dataclass
class TaskPage:
    data: list[TaskRecord] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
