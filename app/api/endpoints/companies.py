import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import allow_query_params, ensure_admin
from app.core.errors import InvalidRequestError
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
    CompanyDeletedResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a company. Admin only.

    Returns 400 if the handle is already taken.
    """
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get(
    "/",
    response_model=CompanyListEnvelope,
    dependencies=[Depends(allow_query_params("name", "minEmployees", "maxEmployees"))],
)
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Args:
        name: Exact company name
        minEmployees: At least this many employees
        maxEmployees: At most this many employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise InvalidRequestError("minEmployees cannot be greater than maxEmployees")

    companies = company_crud.find_by_filter(
        db,
        name=name,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company with its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a company. Admin only.

    Accepts any of name, description, numEmployees, logoUrl.
    """
    company = company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """Delete a company. Admin only."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
