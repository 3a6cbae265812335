"""
Authorization chain: token verification plus the claim checks routes rely on.

authenticate_token never fails. A missing or invalid token yields Anonymous,
because being logged out is a legitimate state. The ensure_* checks are the
stages that reject a request, always with UnauthorizedError.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from jose import JWTError

from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token

logger = logging.getLogger(__name__)

BEARER_PATTERN = re.compile(r"^[Bb]earer\s+(?P<token>\S+)\s*$")


@dataclass(frozen=True)
class Principal:
    """Identity decoded from a verified token."""

    username: Optional[str]
    # Kept as the raw claim value; only a literal True grants admin
    is_admin: Any = False
    issued_at: Optional[int] = None

    @classmethod
    def from_claims(cls, claims: dict) -> "Principal":
        return cls(
            username=claims.get("username"),
            is_admin=claims.get("isAdmin"),
            issued_at=claims.get("iat"),
        )


@dataclass(frozen=True)
class Authenticated:
    principal: Principal


@dataclass(frozen=True)
class Anonymous:
    pass


AuthResult = Union[Authenticated, Anonymous]


def authenticate_token(
    authorization: Optional[str],
    secret_key: str,
    algorithm: str = "HS256",
) -> AuthResult:
    """
    Resolve an Authorization header value to a principal.

    Args:
        authorization: Raw header value, e.g. "Bearer eyJ..." (may be None)
        secret_key: Shared secret the token must be signed with
        algorithm: Expected signing algorithm

    Returns:
        Authenticated(principal) for a valid token, Anonymous() otherwise
    """
    if not authorization:
        return Anonymous()

    match = BEARER_PATTERN.match(authorization)
    if not match:
        logger.debug("Ignoring Authorization header without a Bearer token")
        return Anonymous()

    try:
        claims = decode_token(match.group("token"), secret_key, algorithm)
    except JWTError as e:
        logger.debug(f"Token rejected, continuing as anonymous: {e}")
        return Anonymous()

    if not claims.get("username"):
        logger.debug("Token has no username claim, continuing as anonymous")
        return Anonymous()

    return Authenticated(Principal.from_claims(claims))


def ensure_logged_in(user: Optional[Principal]) -> Principal:
    """Require a principal. Raises UnauthorizedError if there is none."""
    if user is None:
        raise UnauthorizedError("Login required")
    return user


def ensure_admin(user: Optional[Principal]) -> Principal:
    """Require a principal whose isAdmin claim is exactly True."""
    if user is None or user.is_admin is not True:
        logger.info(f"Admin access denied for {getattr(user, 'username', None)!r}")
        raise UnauthorizedError("Admin privileges required")
    return user


def check_admin_or_authorized_user(user: Optional[Principal], username: str) -> Principal:
    """
    Require an admin, or the user the route is about.

    A missing principal counts as a non-match rather than an error.
    """
    if user is not None and (user.is_admin is True or user.username == username):
        return user
    logger.info(
        f"Access to user {username!r} denied for {getattr(user, 'username', None)!r}"
    )
    raise UnauthorizedError("Must be an admin or the user in question")
