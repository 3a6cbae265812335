import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobDetailResponse,
    JobResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post(
    "/",
    status_code=201,
    response_model=JobResponse,
    dependencies=[Depends(get_admin_user)],
)
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job posting for an existing company. Admin only.
    """
    return job_crud.create(db, request.model_dump(by_alias=True))


@router.get("/", response_model=list[JobResponse])
def list_jobs(db: Session = Depends(get_db)):
    """List all jobs."""
    return job_crud.find_all(db)


@router.get("/{job_id}", response_model=JobDetailResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job, with its company, by ID."""
    return job_crud.get(db, job_id)


@router.patch(
    "/{job_id}",
    response_model=JobResponse,
    dependencies=[Depends(get_admin_user)],
)
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a job. Admin only.

    Fields can be: {title, salary, equity}
    """
    return job_crud.update(db, job_id, request.model_dump(exclude_unset=True))


@router.delete("/{job_id}", dependencies=[Depends(get_admin_user)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """Delete a job by ID. Admin only."""
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
