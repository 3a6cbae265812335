"""
CRUD operations for companies.

All statements are parameterized SQL run through database.execute.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import NotFoundError, ValidationError
from app.core.sql import CompanyFilter, build_filter_clause, build_set_clause

logger = logging.getLogger(__name__)

# Client field name -> column name for partial updates
FIELD_NAMES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def _check_name_available(db: Session, name: str, handle: Optional[str] = None) -> None:
    # companies.name is UNIQUE; the row being updated may keep its own name
    taken = execute(
        db,
        "SELECT handle FROM companies WHERE name = $1 AND handle <> $2",
        [name, handle or ""],
    )
    if taken:
        raise ValidationError(f"Duplicate company name: {name}")


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        ValidationError: If the handle or name is already taken
    """
    duplicate = execute(db, "SELECT handle FROM companies WHERE handle = $1", [data["handle"]])
    if duplicate:
        raise ValidationError(f"Duplicate company: {data['handle']}")
    _check_name_available(db, data["name"])

    rows = execute(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            data["handle"],
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    )
    db.commit()

    logger.info(f"Created company {data['handle']}")
    return rows[0]


def find_all(
    db: Session,
    filters: Optional[Union[CompanyFilter, Mapping[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """
    List companies ordered by name.

    Args:
        db: Database session
        filters: Optional search criteria (name, minEmployees, maxEmployees)

    Raises:
        ValidationError: If filters are given but none is recognized,
            or an employee bound is not numeric
    """
    where = ""
    params: List[Any] = []
    if filters is not None:
        where_clause, params = build_filter_clause(filters)
        where = f"WHERE {where_clause}"

    return execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           {where}
           ORDER BY name""",
        params,
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get one company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If no such company
    """
    rows = execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           WHERE handle = $1""",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = execute(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only fields present in data change.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        ValidationError: If data is empty
            or the new name belongs to another company
        NotFoundError: If no such company
    """
    if data.get("name") is not None:
        _check_name_available(db, data["name"], handle)

    set_clause, values = build_set_clause(data, FIELD_NAMES)
    handle_idx = f"${len(values) + 1}"

    rows = execute(
        db,
        f"""UPDATE companies
            SET {set_clause}
            WHERE handle = {handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*values, handle],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no such company
    """
    rows = execute(
        db,
        """DELETE FROM companies
           WHERE handle = $1
           RETURNING handle""",
        [handle],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
