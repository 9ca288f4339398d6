# taskmanager/api/v1/routers/auth.py
from fastapi import APIRouter, Depends, status

from taskmanager.api.v1.deps import get_auth_service, get_current_user
from taskmanager.domain import UserProfile
from taskmanager.schemas.auth import CredentialsIn, TokenOut, UserOut
from taskmanager.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserOut)
async def register(body: CredentialsIn, auth: AuthService = Depends(get_auth_service)):
    """
    Register a new user account.

    The password is hashed before storage; the response never contains it.

    Returns:
        UserOut: id and username of the new account

    Error codes:
        - VALIDATION_ERROR (400): username shorter than 3 or password shorter than 6 characters
        - CONFLICT (409): Username already exists
    """
    profile = await auth.register(body.username, body.password)
    return UserOut.from_profile(profile)


@router.post("/login", response_model=TokenOut)
async def login(body: CredentialsIn, auth: AuthService = Depends(get_auth_service)):
    """
    Authenticate user and create access token.

    Returns:
        TokenOut: {"access_token": "<jwt>"}; send it back as
        `Authorization: Bearer <jwt>`

    Error codes:
        - AUTH_INVALID_CREDENTIALS (401): unknown username or wrong password
          (the two are not distinguished)
    """
    token = await auth.authenticate(body.username, body.password)
    return TokenOut(access_token=token)


@router.get("/me", response_model=UserOut)
async def me(user: UserProfile = Depends(get_current_user)):
    """Return the profile behind the bearer token."""
    return UserOut.from_profile(user)
