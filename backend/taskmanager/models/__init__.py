"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: User account and authentication model
- Task: Task owned by a single user
"""
from .user import User
from .task import Task
