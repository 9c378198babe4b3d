"""
FastAPI dependencies for authentication and authorization.

Tokens are optional on every route: a missing or invalid token simply means
an anonymous caller. The ensure_* dependencies then decide who gets through.
"""

import logging
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Callable, Optional

from app.core.errors import InvalidRequestError, UnauthorizedError
from app.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Decode the Bearer token if one was sent.

    Returns None for anonymous callers and for tokens that fail validation.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None

    if payload.get("sub") is None:
        return None
    return payload


def ensure_logged_in(payload: Optional[dict] = Depends(get_token_payload)) -> dict:
    """
    Require any valid token.

    Raises:
        UnauthorizedError: If no valid token was sent
    """
    if not payload:
        raise UnauthorizedError()
    return payload


def ensure_admin(payload: Optional[dict] = Depends(get_token_payload)) -> dict:
    """
    Require a token whose user is an admin.

    Raises:
        UnauthorizedError: If the caller is anonymous or not an admin
    """
    if not payload or not payload.get("is_admin"):
        raise UnauthorizedError()
    return payload


def ensure_correct_user_or_admin(
    username: str,
    payload: Optional[dict] = Depends(get_token_payload)
) -> dict:
    """
    Require the token to belong to `username` (the path parameter) or an admin.

    Raises:
        UnauthorizedError: Otherwise
    """
    if not payload:
        raise UnauthorizedError()
    if not (payload.get("is_admin") or payload.get("sub") == username):
        raise UnauthorizedError()
    return payload


def allow_query_params(*allowed: str) -> Callable[[Request], None]:
    """
    Build a dependency rejecting query-string keys outside `allowed`.

    Usage:
        @router.get("/", dependencies=[Depends(allow_query_params("title"))])
    """
    def check_query_params(request: Request) -> None:
        unexpected = set(request.query_params.keys()) - set(allowed)
        if unexpected:
            logger.info(f"Unexpected query parameters on {request.url.path}: {sorted(unexpected)}")
            raise InvalidRequestError("query contains unexpected parameters")

    return check_query_params
