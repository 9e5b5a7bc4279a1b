"""Cookie sessions shared across subdomains, plus session dependencies (get_session_user, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from app.api.v1.deps import get_accessor
from app.core.config import get_settings
from app.core.permissions import Permission, has_permissions
from app.core.security import (
    create_session_token,
    decode_session_token,
    session_cookie_name,
    session_cookie_options,
    verify_password,
)
from app.repositories.table import Table, TableAccessor
from app.schemas.auth import SessionResponse, SignInRequest
from app.schemas.user import SessionUser, UsersListResponse
from app.services.users import (
    get_all_users_secure,
    get_user_by_email_no_password,
    normalize_email,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signin", response_model=SessionResponse)
def sign_in(
    body: SignInRequest,
    response: Response,
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> SessionResponse:
    """
    Check email and password against the stored bcrypt hash and set the session cookie.
    Users without a password cannot sign in this way.
    """
    email = normalize_email(body.email)
    row = accessor.find_one(Table.USER, {"where": {"email": email}})
    if row is None or not verify_password(body.password, row.get("password")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    user = get_user_by_email_no_password(accessor, email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Failed to fetch user",
        )
    settings = get_settings()
    response.set_cookie(
        session_cookie_name(settings),
        create_session_token(user.email),
        **session_cookie_options(settings),
    )
    logger.info("User signed in", extra={"user_id": user.id})
    return SessionResponse(user=user)


def get_session_user(
    request: Request,
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> SessionUser:
    """Dependency: require a valid session cookie and return its user. Raises 401 otherwise."""
    token = request.cookies.get(session_cookie_name(get_settings()))
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        payload = decode_session_token(token)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
        )
    email = payload.get("sub")
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session payload",
        )
    user = get_user_by_email_no_password(accessor, email)
    if user is None:
        logger.warning("Session user lookup failed", extra={"reason": "user_not_found"})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Failed to fetch user",
        )
    return user


def require_admin(
    current_user: Annotated[SessionUser, Depends(get_session_user)],
) -> SessionUser:
    """Dependency: require a session user holding ADMIN. Raises 403 otherwise."""
    if not has_permissions(current_user, [Permission.ADMIN]):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid permissions",
        )
    return current_user


@router.get("/session", response_model=SessionResponse)
def get_session(
    current_user: Annotated[SessionUser, Depends(get_session_user)],
) -> SessionResponse:
    """Return the signed-in user, including the secret used as accessToken for RPC mutations."""
    return SessionResponse(user=current_user)


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(response: Response) -> None:
    """Clear the session cookie on the parent domain."""
    settings = get_settings()
    options = session_cookie_options(settings)
    response.delete_cookie(
        session_cookie_name(settings),
        path=options["path"],
        domain=options["domain"],
        secure=options["secure"],
        httponly=options["httponly"],
        samesite=options["samesite"],
    )


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[SessionUser, Depends(require_admin)],
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> UsersListResponse:
    """List all users without password or secret (admin only)."""
    return UsersListResponse(users=get_all_users_secure(accessor))
