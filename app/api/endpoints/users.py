"""
User management endpoints.

Admins can create and list users; a user can read, update and delete
their own account (admins can do so for anyone).
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, ensure_correct_user_or_admin
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserEnvelope,
    UserCreatedResponse,
    UserListEnvelope,
    UserDeletedResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreatedResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Add a user, optionally as an admin. Admin only.

    Returns the new user and a token for them.
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    logger.info(f"Admin {admin['sub']} created user {user['username']}")
    return {"user": user, "token": create_token(user)}


@router.get("/", response_model=UserListEnvelope)
def list_users(
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """List all users. Admin only."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    caller: dict = Depends(ensure_correct_user_or_admin)
):
    """Retrieve a user."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    caller: dict = Depends(ensure_correct_user_or_admin)
):
    """
    Partially update a user.

    Accepts any of password, firstName, lastName, email.
    """
    user = user_crud.update(db, username, request.model_dump(by_alias=True, exclude_unset=True))
    return {"user": user}


@router.delete("/{username}", response_model=UserDeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    caller: dict = Depends(ensure_correct_user_or_admin)
):
    """Delete a user."""
    user_crud.remove(db, username)
    return {"deleted": username}
