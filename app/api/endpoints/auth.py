"""Authentication endpoints for the admin dashboard.

A single shared password unlocks the admin pages; a successful login sets a
signed, time-limited token as an http-only cookie.
"""

import logging
import secrets

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from app.api.auth_guard import create_admin_token
from app.core.config import settings
from app.models.auth import AdminLoginRequest, AuthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/admin",
    status_code=status.HTTP_200_OK,
    summary="Admin login",
    description="Check the shared admin password and set the admin-token cookie.",
    response_model=AuthResponse,
)
async def admin_login(payload: AdminLoginRequest) -> JSONResponse:
    """Authenticate against the shared admin password.

    Args:
        payload: Login body containing the password

    Returns:
        A success response carrying the admin-token cookie

    Raises:
        HTTPException: 401 if the password does not match
    """
    if not secrets.compare_digest(
        payload.password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8")
    ):
        logger.warning("Invalid admin password")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = create_admin_token()
    response = JSONResponse(content=AuthResponse(success=True).model_dump())
    response.set_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        value=token,
        max_age=settings.ADMIN_TOKEN_TTL_HOURS * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("Admin logged in")
    return response


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Admin logout",
    description="Clear the admin-token cookie.",
    response_model=AuthResponse,
)
async def admin_logout() -> JSONResponse:
    """Clear the admin cookie unconditionally."""
    response = JSONResponse(content=AuthResponse(success=True).model_dump())
    response.delete_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("Admin logged out")
    return response
