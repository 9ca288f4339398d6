"""
Database model for tasks.
Each task belongs to exactly one user and is only ever queried through that owner.
"""
import uuid
from tortoise import fields, models

from taskmanager.domain import TaskStatus


class Task(models.Model):
    """
    Task database model.

    Relationships:
    - Belongs to a User (many-to-one, column user_id)
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique task identifier
    title = fields.CharField(max_length=255)
    description = fields.TextField(null=True)
    status = fields.CharEnumField(TaskStatus, max_length=16, default=TaskStatus.PENDING)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="tasks",
        on_delete=fields.RESTRICT,
    )  # Owner; users with tasks cannot be deleted

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "tasks"  # Database table name
