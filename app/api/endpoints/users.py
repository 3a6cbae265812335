"""
User management endpoints.

Listing and creating users is admin only. Reading, updating or deleting a
single user is allowed for an admin or for that user.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import Principal
from app.core.database import get_db
from app.core.deps import get_admin_or_authorized_user, get_admin_user
from app.core.exceptions import UnauthorizedError
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import (
    UserCreateRequest,
    UserCreateResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(get_admin_user)
):
    """
    Add a user (possibly an admin) and return them with a token.

    This is not the registration endpoint; see POST /auth/register.
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    logger.info(f"Admin {admin.username} created user {user['username']}")
    return {"user": user, "token": create_token(user["username"], user["isAdmin"])}


@router.get("/", response_model=list[UserResponse], dependencies=[Depends(get_admin_user)])
def list_users(db: Session = Depends(get_db)):
    """List all users. Admin only."""
    return user_crud.find_all(db)


@router.get(
    "/{username}",
    response_model=UserResponse,
    dependencies=[Depends(get_admin_or_authorized_user)],
)
def get_user(username: str, db: Session = Depends(get_db)):
    return user_crud.get(db, username)


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_admin_or_authorized_user)
):
    """
    Partially update a user.

    Fields can be: {firstName, lastName, password, email, isAdmin}.
    Only admins may change isAdmin.
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    if "isAdmin" in data and current_user.is_admin is not True:
        raise UnauthorizedError("Only admins may change isAdmin")

    return user_crud.update(db, username, data)


@router.delete("/{username}", dependencies=[Depends(get_admin_or_authorized_user)])
def delete_user(username: str, db: Session = Depends(get_db)):
    user_crud.remove(db, username)
    return {"deleted": username}
