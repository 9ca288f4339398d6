"""
Services Module

Business operations used by the routers:
- Auth: registration, credential checks, token issuance and resolution
- Tasks: owner-scoped task CRUD with pagination
- Validation: per-input-shape rules returning field errors
"""

from .auth_service import AuthService
from .task_service import TaskService

__all__ = [
    "AuthService",
    "TaskService",
]
