"""
FastAPI dependencies for authentication and authorization.

Each dependency is one stage of the chain. Routes stack them with Depends,
and they run left to right. authenticate_jwt always runs first and records
the principal (or None) on request.state.user.
"""

from typing import Optional

from fastapi import Depends, Request

from app.core.auth import (
    Authenticated,
    Principal,
    authenticate_token,
    check_admin_or_authorized_user,
    ensure_admin,
    ensure_logged_in,
)
from app.core.config import settings


def authenticate_jwt(request: Request) -> Optional[Principal]:
    """
    Verify the Bearer token if one was sent.

    Never rejects the request: without a valid token the principal is None.
    """
    result = authenticate_token(
        request.headers.get("Authorization"),
        settings.SECRET_KEY,
        settings.ALGORITHM,
    )
    user = result.principal if isinstance(result, Authenticated) else None
    request.state.user = user
    return user


def get_current_user(user: Optional[Principal] = Depends(authenticate_jwt)) -> Principal:
    """
    Require a logged-in user.

    Raises:
        UnauthorizedError (401): If no valid token was supplied
    """
    return ensure_logged_in(user)


def get_admin_user(user: Optional[Principal] = Depends(authenticate_jwt)) -> Principal:
    """
    Require an admin user.

    Raises:
        UnauthorizedError (401): If not logged in or isAdmin is not true
    """
    return ensure_admin(user)


def get_admin_or_authorized_user(
    username: str,
    user: Optional[Principal] = Depends(authenticate_jwt),
) -> Principal:
    """
    Require an admin or the user named by the route's {username} parameter.

    Usage:
        @router.patch("/{username}")
        def update_user(username: str, user: Principal = Depends(get_admin_or_authorized_user)):
            ...
    """
    return check_admin_or_authorized_user(user, username)
