"""
Repository functions over the Tortoise models.
Each submodule takes and returns the plain records from taskmanager.domain.
"""
from typing import Optional
from uuid import UUID


def as_uuid(value) -> Optional[UUID]:
    """Parse an id; anything that is not a UUID cannot match a row."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None
