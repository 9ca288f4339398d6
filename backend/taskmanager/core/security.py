"""
Security module for authentication.
Handles password hashing, JWT token creation/validation, and cryptographic operations.
"""
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext

from taskmanager.config import settings

# Password hashing context
# Argon2 only: salted, fixed cost (passlib defaults), no bcrypt 72-byte truncation
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

# JWT configuration
JWT_SECRET = settings.jwt_secret  # Secret key for JWT signing (use strong secret in production)
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes  # Token expiration time in minutes
JWT_ALG = settings.jwt_alg  # JWT signing algorithm (HMAC SHA-256 by default)


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)

    Note: Never store plain text passwords. Always use this function before saving.
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Args:
        plain: Plain text password to verify
        hashed: Hashed password from database

    Returns:
        True if password matches, False otherwise (including unrecognised hashes)
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_access_token(
    user_id: str,
    username: str,
    *,
    secret: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    """
    Create a JWT access token for user authentication.

    Args:
        user_id: Unique user identifier (UUID string)
        username: Login name, carried for clients that display it
        secret: Signing secret (defaults to JWT_SECRET)
        expires_minutes: Lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID)
        - username: User login name
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    if expires_minutes is None:
        expires_minutes = ACCESS_TOKEN_EXPIRE_MINUTES
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": user_id,        # Subject (user ID)
        "username": username,
        "iat": now,            # Issued at timestamp
        "exp": now + dt.timedelta(minutes=expires_minutes),  # Expiration timestamp
    }
    return jwt.encode(payload, secret or JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str, *, secret: str | None = None) -> dict:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode
        secret: Verification secret (defaults to JWT_SECRET)

    Returns:
        Decoded token payload dictionary containing sub, username, iat, exp

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid, malformed, or lacks exp/sub

    Note: This function validates the token signature and expiration automatically.
    """
    return jwt.decode(
        token,
        secret or JWT_SECRET,
        algorithms=[JWT_ALG],
        options={"require": ["exp", "sub"]},
    )
