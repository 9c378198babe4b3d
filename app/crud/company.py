"""
Data access for companies.

Every function takes the request's Session and returns plain dicts with the
camelCase keys the API exposes (numEmployees, logoUrl).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import run_query
from app.core.errors import InvalidRequestError, NotFoundError
from app.core.sql import sql_for_filter_companies, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

# API field name -> column name for partial updates
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The created company

    Raises:
        InvalidRequestError: If the handle or name is already taken
    """
    duplicate = run_query(db, "SELECT handle FROM companies WHERE handle = $1", [data["handle"]])
    if duplicate:
        raise InvalidRequestError(f"Duplicate company: {data['handle']}")

    duplicate = run_query(db, "SELECT handle FROM companies WHERE name = $1", [data["name"]])
    if duplicate:
        raise InvalidRequestError(f"Duplicate company name: {data['name']}")

    rows = run_query(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
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


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All companies ordered by name."""
    return run_query(db, f"SELECT {COMPANY_COLUMNS} FROM companies ORDER BY name")


def find_by_filter(
    db: Session,
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Companies matching every given filter; all companies if none is given.
    """
    if not name and not min_employees and not max_employees:
        return find_all(db)

    query = sql_for_filter_companies(
        name=name,
        min_employees=min_employees,
        max_employees=max_employees,
        interpolate=settings.SQL_INTERPOLATE_FILTERS,
    )
    return run_query(db, query.text, query.params)


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company and its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(db, f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = run_query(
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
    Partially update a company; only the given fields change.

    Args:
        db: Database session
        handle: Company to update
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        InvalidRequestError: If `data` is empty
        NotFoundError: If no company has this handle
    """
    clause = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = f"${len(clause.values) + 1}"

    rows = run_query(
        db,
        f"""UPDATE companies
            SET {clause.set_cols}
            WHERE handle = {handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*clause.values, handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info(f"Updated company {handle}: {sorted(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info(f"Deleted company {handle}")
