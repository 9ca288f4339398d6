"""
Input validation, one function per input shape.

Each function returns a list of FieldError; an empty list means the input
is acceptable. Services raise ValidationError with the list when it is not
empty, so the same rules apply whether a call comes through HTTP or not.
"""
from typing import Any, Mapping

from taskmanager.core.errors import FieldError
from taskmanager.domain import TaskStatus

TITLE_MAX_LENGTH = 255
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 6
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest row offset a signed 64-bit database integer can hold
MAX_OFFSET = 2**63 - 1

_STATUS_NAMES = ", ".join(s.value for s in TaskStatus)


def _check_title(value: Any, errors: list[FieldError]) -> None:
    if not isinstance(value, str):
        errors.append(FieldError("title", "title must be a string"))
    elif not value:
        errors.append(FieldError("title", "title must not be empty"))
    elif len(value) > TITLE_MAX_LENGTH:
        errors.append(FieldError("title", f"title must be at most {TITLE_MAX_LENGTH} characters"))


def _check_description(value: Any, errors: list[FieldError]) -> None:
    if value is not None and not isinstance(value, str):
        errors.append(FieldError("description", "description must be a string"))


def _check_status(value: Any, errors: list[FieldError]) -> None:
    try:
        TaskStatus(value)
    except ValueError:
        errors.append(FieldError("status", f"status must be one of {_STATUS_NAMES}"))


def validate_registration(username: Any, password: Any) -> list[FieldError]:
    errors: list[FieldError] = []
    if not isinstance(username, str) or not username:
        errors.append(FieldError("username", "username must not be empty"))
    elif len(username) < USERNAME_MIN_LENGTH:
        errors.append(FieldError("username", f"username must be at least {USERNAME_MIN_LENGTH} characters"))
    elif len(username) > USERNAME_MAX_LENGTH:
        errors.append(FieldError("username", f"username must be at most {USERNAME_MAX_LENGTH} characters"))
    if not isinstance(password, str) or not password:
        errors.append(FieldError("password", "password must not be empty"))
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append(FieldError("password", f"password must be at least {PASSWORD_MIN_LENGTH} characters"))
    return errors


def validate_login(username: Any, password: Any) -> list[FieldError]:
    errors: list[FieldError] = []
    if not isinstance(username, str) or not username:
        errors.append(FieldError("username", "username must not be empty"))
    if not isinstance(password, str) or not password:
        errors.append(FieldError("password", "password must not be empty"))
    return errors


def validate_new_task(title: Any, description: Any = None, status: Any = None) -> list[FieldError]:
    errors: list[FieldError] = []
    _check_title(title, errors)
    _check_description(description, errors)
    if status is not None:
        _check_status(status, errors)
    return errors


def validate_status_change(status: Any) -> list[FieldError]:
    errors: list[FieldError] = []
    if status is None:
        errors.append(FieldError("status", "status must not be empty"))
    else:
        _check_status(status, errors)
    return errors


def validate_task_changes(changes: Mapping[str, Any]) -> list[FieldError]:
    """
    Validate a partial update. Only keys present in `changes` are checked;
    description may be cleared with None, title and status may not.
    """
    errors: list[FieldError] = []
    unknown = set(changes) - {"title", "description", "status"}
    for name in sorted(unknown):
        errors.append(FieldError(name, "unknown field"))
    if "title" in changes:
        _check_title(changes["title"], errors)
    if "description" in changes:
        _check_description(changes["description"], errors)
    if "status" in changes:
        errors.extend(validate_status_change(changes["status"]))
    return errors


def validate_pagination(page: Any, limit: Any) -> list[FieldError]:
    errors: list[FieldError] = []
    if page is not None and (isinstance(page, bool) or not isinstance(page, int) or page < 1):
        errors.append(FieldError("page", "page must be an integer >= 1"))
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT):
        errors.append(FieldError("limit", f"limit must be an integer between 1 and {MAX_LIMIT}"))
    if not errors and page is not None:
        size = DEFAULT_LIMIT if limit is None else limit
        if (page - 1) * size > MAX_OFFSET:
            errors.append(FieldError("page", "page is too large"))
    return errors
