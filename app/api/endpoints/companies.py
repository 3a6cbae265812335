import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.core.exceptions import ValidationError
from app.core.sql import CompanyFilter
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post(
    "/",
    status_code=201,
    response_model=CompanyResponse,
    dependencies=[Depends(get_admin_user)],
)
def create_company(request: CompanyCreateRequest, db: Session = Depends(get_db)):
    """Create a company. Admin only."""
    return company_crud.create(db, request.model_dump(by_alias=True))


@router.get("/", response_model=list[CompanyResponse])
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies, optionally filtered.

    Query parameters (all optional):
        name: case-insensitive substring of the company name
        minEmployees: minimum number of employees
        maxEmployees: maximum number of employees
    """
    query = dict(request.query_params)
    if not query:
        return company_crud.find_all(db)

    unknown = sorted(set(query) - set(CompanyFilter.KEYS))
    if unknown:
        raise ValidationError(f"Unknown filter: {', '.join(unknown)}")

    return company_crud.find_all(db, CompanyFilter.from_mapping(query))


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and its jobs."""
    return company_crud.get(db, handle)


@router.patch(
    "/{handle}",
    response_model=CompanyResponse,
    dependencies=[Depends(get_admin_user)],
)
def update_company(handle: str, request: CompanyUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a company. Admin only.

    Fields can be: {name, description, numEmployees, logoUrl}
    """
    return company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))


@router.delete("/{handle}", dependencies=[Depends(get_admin_user)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """Delete a company. Admin only."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
