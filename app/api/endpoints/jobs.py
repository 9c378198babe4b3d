import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import allow_query_params, ensure_admin
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobEnvelope,
    JobDetailEnvelope,
    JobListEnvelope,
    JobDeletedResponse,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a job posting. Admin only.

    The company given by companyHandle must already exist (400 otherwise).
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get(
    "/",
    response_model=JobListEnvelope,
    dependencies=[Depends(allow_query_params("title", "minSalary", "hasEquity"))],
)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Args:
        title: Exact job title
        minSalary: Salary at least this amount
        hasEquity: true restricts to jobs with non-zero equity; false does not filter
    """
    jobs = job_crud.find_by_filter(db, title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job with its company."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a job. Admin only.

    Accepts any of title, salary, equity; id and companyHandle cannot change.
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """Delete a job. Admin only."""
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
