"""
Python client for the task manager API.
"""
from .api import TaskManagerClient
from .session import ClientSession, FileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "TaskManagerClient",
    "ClientSession",
    "FileTokenStore",
    "MemoryTokenStore",
    "TokenStore",
]
