"""
CRUD operations for users, plus credential checks.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.core.sql import build_set_clause

logger = logging.getLogger(__name__)

FIELD_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def _normalize(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite hands booleans back as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    rows = execute(
        db,
        f"""SELECT {USER_COLUMNS}, password
           FROM users
           WHERE username = $1""",
        [username],
    )
    if rows:
        user = rows[0]
        hashed = user.pop("password")
        if verify_password(password, hashed):
            return _normalize(user)

    logger.info(f"Failed login for {username!r}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Args:
        data: {username, password, firstName, lastName, email, isAdmin}

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        ValidationError: If the username is taken
    """
    duplicate = execute(db, "SELECT username FROM users WHERE username = $1", [data["username"]])
    if duplicate:
        raise ValidationError(f"Duplicate username: {data['username']}")

    rows = execute(
        db,
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            data["username"],
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ],
    )
    db.commit()

    logger.info(f"Registered user {data['username']}")
    return _normalize(rows[0])


def find_all(db: Session) -> List[Dict[str, Any]]:
    """List all users ordered by username."""
    rows = execute(
        db,
        f"""SELECT {USER_COLUMNS}
           FROM users
           ORDER BY username""",
    )
    return [_normalize(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Get one user.

    Raises:
        NotFoundError: If no such user
    """
    rows = execute(
        db,
        f"""SELECT {USER_COLUMNS}
           FROM users
           WHERE username = $1""",
        [username],
    )
    if not rows:
        raise NotFoundError(f"No user: {username}")
    return _normalize(rows[0])


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user; only fields present in data change.

    Data can include: {firstName, lastName, password, email, isAdmin}.
    A new password is hashed before it is stored.

    Raises:
        ValidationError: If data is empty
        NotFoundError: If no such user
    """
    data = dict(data)
    if "password" in data:
        if not isinstance(data["password"], str):
            raise ValidationError("password must be a string")
        data["password"] = get_password_hash(data["password"])

    set_clause, values = build_set_clause(data, FIELD_NAMES)
    username_idx = f"${len(values) + 1}"

    rows = execute(
        db,
        f"""UPDATE users
            SET {set_clause}
            WHERE username = {username_idx}
            RETURNING {USER_COLUMNS}""",
        [*values, username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return _normalize(rows[0])


def remove(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: If no such user
    """
    rows = execute(
        db,
        """DELETE FROM users
           WHERE username = $1
           RETURNING username""",
        [username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")
