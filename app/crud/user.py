"""
Data access for users: registration, authentication and profile updates.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.errors import InvalidRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)

# API field name -> column name for partial updates
JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        The user (without password)

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    rows = run_query(
        db,
        f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1",
        [username],
    )
    if rows:
        user = rows[0]
        hashed_password = user.pop("password")
        if verify_password(password, hashed_password):
            return user

    logger.warning(f"Failed login for username {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        data: {username, password, firstName, lastName, email, isAdmin?}

    Raises:
        InvalidRequestError: If the username is taken
    """
    duplicate = run_query(db, "SELECT username FROM users WHERE username = $1", [data["username"]])
    if duplicate:
        raise InvalidRequestError(f"Duplicate username: {data['username']}")

    rows = run_query(
        db,
        f"""INSERT INTO users
            (username, password, first_name, last_name, email, is_admin)
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

    logger.info(f"Registered user {data['username']} (admin: {bool(data.get('isAdmin', False))})")
    return rows[0]


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All users ordered by username."""
    return run_query(db, f"SELECT {USER_COLUMNS} FROM users ORDER BY username")


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: If the user does not exist
    """
    rows = run_query(db, f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")
    return rows[0]


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user; a new password is hashed before storing.

    Args:
        db: Database session
        username: User to update
        data: Any of {password, firstName, lastName, email, isAdmin}

    Raises:
        InvalidRequestError: If `data` is empty
        NotFoundError: If the user does not exist
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    clause = sql_for_partial_update(data, JS_TO_SQL)
    username_idx = f"${len(clause.values) + 1}"

    rows = run_query(
        db,
        f"""UPDATE users
            SET {clause.set_cols}
            WHERE username = {username_idx}
            RETURNING {USER_COLUMNS}""",
        [*clause.values, username],
    )
    if not rows:
        raise NotFoundError(f"No user: {username}")
    db.commit()

    logger.info(f"Updated user {username}: {sorted(k for k in data if k != 'password')}")
    return rows[0]


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: If the user does not exist
    """
    rows = run_query(db, "DELETE FROM users WHERE username = $1 RETURNING username", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")
    db.commit()

    logger.info(f"Deleted user {username}")
