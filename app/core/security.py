"""
Security utilities for JWT tokens and password hashing.

Tokens are HS256-signed and carry the claims the authorization chain reads:
{"username", "isAdmin", "iat", "exp"}. Passwords are hashed using bcrypt.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt
from passlib.context import CryptContext
from app.core.config import settings

# Password hashing context (bcrypt)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return pwd_context.verify(password_bytes, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


def create_token(
    username: str,
    is_admin: bool = False,
    secret_key: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT for a user.

    Args:
        username: The user the token identifies
        is_admin: Stored as the strict boolean isAdmin claim
        secret_key: Signing key (default: settings.SECRET_KEY)
        expires_delta: Optional lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token as a string
    """
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "username": username,
        "isAdmin": bool(is_admin),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_delta).timestamp()),
    }
    return jwt.encode(claims, secret_key or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token to decode
        secret_key: Key the token must be signed with
        algorithm: Expected signing algorithm

    Returns:
        Dictionary containing the token payload

    Raises:
        JWTError: If token is invalid, tampered with or expired
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm])
