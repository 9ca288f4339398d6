"""
Authentication service.

Registration, credential checks, token issuance, and resolution of a bearer
token back into the current user. Routers build one instance from settings
(see taskmanager.api.v1.deps) and pass it around explicitly.
"""
import logging
from typing import Optional

import jwt
from fastapi.concurrency import run_in_threadpool
from tortoise.exceptions import IntegrityError

from taskmanager.core import security
from taskmanager.core.errors import ConflictError, UnauthorizedError, ValidationError
from taskmanager.domain import UserProfile
from taskmanager.repositories import users as users_repo
from taskmanager.services.validation import validate_login, validate_registration

logger = logging.getLogger("uvicorn.error")

INVALID_CREDENTIALS = "Invalid credentials"
USERNAME_EXISTS = "Username already exists"


class AuthService:
    def __init__(
        self,
        *,
        secret: Optional[str] = None,
        expires_minutes: Optional[int] = None,
        users=users_repo,
    ):
        self.secret = secret or security.JWT_SECRET
        self.expires_minutes = expires_minutes if expires_minutes is not None else security.ACCESS_TOKEN_EXPIRE_MINUTES
        self.users = users

    async def register(self, username: str, password: str) -> UserProfile:
        """
        Create an account.

        Raises:
            ValidationError: username/password fail the registration rules
            ConflictError: username already exists (exact, case-sensitive match)
        """
        errors = validate_registration(username, password)
        if errors:
            raise ValidationError(errors)
        if await self.users.find_by_username(username):
            raise ConflictError(USERNAME_EXISTS)
        password_hash = await run_in_threadpool(security.hash_password, password)
        try:
            user = await self.users.create(username, password_hash)
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            raise ConflictError(USERNAME_EXISTS)
        logger.info("[auth] registered user id=%s username=%s", user.id, user.username)
        return user.profile()

    async def validate_credentials(self, username: str, password: str) -> Optional[UserProfile]:
        """Return the profile when the password matches; None for unknown user or wrong password alike."""
        user = await self.users.find_by_username(username)
        if user is None:
            return None
        ok = await run_in_threadpool(security.verify_password, password, user.password_hash)
        return user.profile() if ok else None

    def login(self, profile: UserProfile) -> str:
        """Issue a signed access token for an already-validated profile."""
        return security.create_access_token(
            str(profile.id),
            profile.username,
            secret=self.secret,
            expires_minutes=self.expires_minutes,
        )

    async def authenticate(self, username: str, password: str) -> str:
        """validate_credentials + login; the failure message never says which part was wrong."""
        errors = validate_login(username, password)
        if errors:
            raise ValidationError(errors)
        profile = await self.validate_credentials(username, password)
        if profile is None:
            logger.info("[auth] failed login for username=%s", username)
            raise UnauthorizedError(INVALID_CREDENTIALS, code="AUTH_INVALID_CREDENTIALS")
        return self.login(profile)

    async def resolve_identity(self, token: str) -> UserProfile:
        """
        Turn a bearer token into the current user.

        The signature and expiry are checked first, then the subject is
        looked up again so a token for a user that no longer exists is
        rejected rather than trusted.

        Raises:
            UnauthorizedError: token missing, malformed, expired, badly signed,
                or its subject no longer resolves to a user
        """
        if not token:
            raise UnauthorizedError("Authentication required", code="AUTH_REQUIRED")
        try:
            payload = security.decode_access_token(token, secret=self.secret)
        except jwt.ExpiredSignatureError:
            logger.debug("[auth] rejected expired token")
            raise UnauthorizedError("Token expired", code="AUTH_INVALID_TOKEN")
        except jwt.InvalidTokenError as exc:
            logger.debug("[auth] rejected token: %s", exc)
            raise UnauthorizedError("Invalid token", code="AUTH_INVALID_TOKEN")

        user = await self.users.find_by_id(payload.get("sub"))
        if user is None:
            raise UnauthorizedError("User not found", code="AUTH_USER_NOT_FOUND")
        return user.profile()
