"""
Credential store.

Persists username/password-hash pairs and maps Tortoise rows into
UserRecord values. Username uniqueness is enforced by the table's unique
constraint; callers check first and treat an IntegrityError as a conflict.
"""
from typing import Optional
from uuid import UUID

from taskmanager.domain import UserRecord
from taskmanager.models.user import User
from taskmanager.repositories import as_uuid


def _row_to_user(row: User) -> UserRecord:
    return UserRecord(id=row.id, username=row.username, password_hash=row.password_hash)


async def find_by_username(username: str) -> Optional[UserRecord]:
    """Exact, case-sensitive lookup used by registration and login."""
    row = await User.get_or_none(username=username)
    return _row_to_user(row) if row else None


async def find_by_id(user_id: UUID | str) -> Optional[UserRecord]:
    """Lookup used to re-resolve a token subject on every request."""
    uid = as_uuid(user_id)
    if uid is None:
        return None
    row = await User.get_or_none(id=uid)
    return _row_to_user(row) if row else None


async def create(username: str, password_hash: str) -> UserRecord:
    """
    Insert a new user.

    Raises:
        tortoise.exceptions.IntegrityError: username already taken
    """
    row = await User.create(username=username, password_hash=password_hash)
    return _row_to_user(row)
