from fastapi import Depends, Header

from taskmanager.config import settings
from taskmanager.core.errors import UnauthorizedError
from taskmanager.domain import UserProfile
from taskmanager.services.auth_service import AuthService
from taskmanager.services.task_service import TaskService

_auth_service = AuthService(
    secret=settings.jwt_secret,
    expires_minutes=settings.access_token_expire_minutes,
)
_task_service = TaskService()


def get_auth_service() -> AuthService:
    """Dependency hook; tests override it via app.dependency_overrides."""
    return _auth_service


def get_task_service() -> TaskService:
    return _task_service


async def get_current_user(
    authorization: str | None = Header(default=None),
    auth: AuthService = Depends(get_auth_service),
) -> UserProfile:
    """
    FastAPI dependency to get the current authenticated user.

    Extracts the token from `Authorization: Bearer <token>` and resolves it
    through AuthService.resolve_identity, which re-reads the user record.

    Returns:
        UserProfile: The authenticated user

    Raises:
        UnauthorizedError (401): No bearer token (AUTH_REQUIRED)
        UnauthorizedError (401): Token invalid or expired (AUTH_INVALID_TOKEN)
        UnauthorizedError (401): User not found in database (AUTH_USER_NOT_FOUND)

    Usage:
        @router.get("/protected")
        async def protected_route(user: UserProfile = Depends(get_current_user)):
            return {"user_id": str(user.id)}
    """
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()

    if not token:
        raise UnauthorizedError("Authentication required", code="AUTH_REQUIRED")

    return await auth.resolve_identity(token)
