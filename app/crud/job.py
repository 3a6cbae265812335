"""
CRUD operations for jobs.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import NotFoundError, ValidationError
from app.core.sql import build_set_clause

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Fields a job update may never touch
IMMUTABLE_FIELDS = ("id", "companyHandle")


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        NotFoundError: If the company does not exist
    """
    company = execute(
        db, "SELECT handle FROM companies WHERE handle = $1", [data["companyHandle"]]
    )
    if not company:
        raise NotFoundError(f"No company: {data['companyHandle']}")

    rows = execute(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
    )
    db.commit()

    job = rows[0]
    logger.info(f"Created job {job['id']} at {job['companyHandle']}")
    return job


def find_all(db: Session) -> List[Dict[str, Any]]:
    """List all jobs ordered by title."""
    return execute(
        db,
        f"""SELECT {JOB_COLUMNS}
           FROM jobs
           ORDER BY title, id""",
    )


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Get one job with its company.

    Returns:
        {id, title, salary, equity, company}
        where company is {handle, name, description, numEmployees, logoUrl}

    Raises:
        NotFoundError: If no such job
    """
    rows = execute(
        db,
        f"""SELECT {JOB_COLUMNS}
           FROM jobs
           WHERE id = $1""",
        [job_id],
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    job = rows[0]
    companies = execute(
        db,
        """SELECT handle,
                  name,
                  description,
                  num_employees AS "numEmployees",
                  logo_url AS "logoUrl"
           FROM companies
           WHERE handle = $1""",
        [job.pop("companyHandle")],
    )
    job["company"] = companies[0] if companies else None
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job.

    Data can include: {title, salary, equity}

    Raises:
        ValidationError: If data is empty or tries to change id/companyHandle
        NotFoundError: If no such job
    """
    frozen = [field for field in IMMUTABLE_FIELDS if field in data]
    if frozen:
        raise ValidationError(f"Cannot change {', '.join(frozen)}")

    set_clause, values = build_set_clause(data, {})
    id_idx = f"${len(values) + 1}"

    rows = execute(
        db,
        f"""UPDATE jobs
            SET {set_clause}
            WHERE id = {id_idx}
            RETURNING {JOB_COLUMNS}""",
        [*values, job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    rows = execute(
        db,
        """DELETE FROM jobs
           WHERE id = $1
           RETURNING id""",
        [job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
