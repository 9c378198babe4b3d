"""
Data access for jobs.

Rows come back as dicts with camelCase aliases (companyHandle); get()
nests the owning company under "company".
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import run_query
from app.core.errors import InvalidRequestError, NotFoundError
from app.core.sql import sql_for_filter_jobs, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job for an existing company.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        InvalidRequestError: If the company does not exist
    """
    company_handle = data["companyHandle"]
    company = run_query(db, "SELECT handle FROM companies WHERE handle = $1", [company_handle])
    if not company:
        raise InvalidRequestError(f"No company: {company_handle}")

    rows = run_query(
        db,
        f"""INSERT INTO jobs
            (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [data["title"], data.get("salary"), data.get("equity"), company_handle],
    )
    db.commit()

    job = rows[0]
    logger.info(f"Created job {job['id']}: {job['title']} at {company_handle}")
    return job


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All jobs ordered by title."""
    return run_query(db, f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY title")


def find_by_filter(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None
) -> List[Dict[str, Any]]:
    """
    Jobs matching every given filter; all jobs if none applies.

    has_equity=False is not a filter: it does not restrict to zero-equity jobs.
    """
    if not title and not min_salary and not has_equity:
        return find_all(db)

    query = sql_for_filter_jobs(
        title=title,
        min_salary=min_salary,
        has_equity=has_equity,
        interpolate=settings.SQL_INTERPOLATE_FILTERS,
    )
    return run_query(db, query.text, query.params)


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job with its company.

    Returns:
        {id, title, salary, equity, company}
        where company is {handle, name, description, numEmployees, logoUrl}

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(
        db,
        """SELECT jobs.id,
                  jobs.title,
                  jobs.salary,
                  jobs.equity,
                  companies.handle AS "companyHandle",
                  companies.name AS "companyName",
                  companies.description AS "companyDescription",
                  companies.num_employees AS "companyNumEmployees",
                  companies.logo_url AS "companyLogoUrl"
           FROM jobs
           LEFT JOIN companies ON jobs.company_handle = companies.handle
           WHERE jobs.id = $1""",
        [job_id],
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    row = rows[0]
    return {
        "id": row["id"],
        "title": row["title"],
        "salary": row["salary"],
        "equity": row["equity"],
        "company": {
            "handle": row["companyHandle"],
            "name": row["companyName"],
            "description": row["companyDescription"],
            "numEmployees": row["companyNumEmployees"],
            "logoUrl": row["companyLogoUrl"],
        },
    }


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the given fields change.

    Field names are column names, so no rename table is needed.

    Args:
        db: Database session
        job_id: Job to update
        data: Any of {title, salary, equity}

    Raises:
        InvalidRequestError: If `data` is empty
        NotFoundError: If no job has this id
    """
    clause = sql_for_partial_update(data, {})
    id_idx = f"${len(clause.values) + 1}"

    rows = run_query(
        db,
        f"""UPDATE jobs
            SET {clause.set_cols}
            WHERE id = {id_idx}
            RETURNING {JOB_COLUMNS}""",
        [*clause.values, job_id],
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Updated job {job_id}: {sorted(data)}")
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Deleted job {job_id}")
