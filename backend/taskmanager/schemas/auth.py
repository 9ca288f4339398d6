"""
Pydantic schemas for authentication endpoints.
Defines request/response models for registration, login and user information.
"""
from pydantic import BaseModel, ConfigDict

from taskmanager.domain import UserProfile


class CredentialsIn(BaseModel):
    """
    Request model for register and login endpoints.
    Length rules are applied by the auth service, not here.
    """
    model_config = ConfigDict(extra="forbid")

    username: str  # User login name
    password: str  # User password (plain text, will be hashed server-side)


class UserOut(BaseModel):
    """
    User information returned by the API.
    Contains basic user details without sensitive information.
    """
    id: str  # User unique identifier
    username: str  # User login name

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserOut":
        return cls(id=str(profile.id), username=profile.username)


class TokenOut(BaseModel):
    """
    Response model for successful login.
    """
    access_token: str  # JWT access token for API authentication
