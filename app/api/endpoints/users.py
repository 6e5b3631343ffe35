"""Admin pages for app users."""

import logging

from fastapi import APIRouter, Form, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.record_pages import handle_delete, listing_url, render_records_page
from app.services.user_service import UserServiceError, user_service

logger = logging.getLogger(__name__)

router = APIRouter()

BASE_URL = "/admin/users"


@router.get("", response_class=HTMLResponse, summary="List users")
async def list_users(
    request: Request,
    q: str = Query("", description="Search term"),
    page: int = Query(1, ge=1, description="Page number"),
):
    return await render_records_page(request, user_service, BASE_URL, q, page)


@router.get("/stats", summary="User statistics")
async def user_stats():
    """Statistics computed by the backend across all users."""
    try:
        return await user_service.get_stats()
    except UserServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.get("/{uid}", summary="Get one user")
async def get_user(uid: str):
    try:
        user = await user_service.get_user(uid)
    except UserServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("/{uid}/delete", summary="Delete a user")
async def delete_user(request: Request, uid: str):
    return await handle_delete(request, user_service, BASE_URL, uid)


@router.post("/{uid}/status", summary="Change a user's status")
async def update_user_status(
    uid: str,
    status_value: str = Form(..., alias="status", description="New account status"),
    q: str = Form("", description="Search term to return to"),
    page: int = Form(1, description="Page to return to"),
):
    try:
        await user_service.update_status(uid, status_value)
    except UserServiceError as e:
        logger.error(f"Failed to update status of user {uid}: {e}")
    return RedirectResponse(listing_url(BASE_URL, q, page), status_code=status.HTTP_303_SEE_OTHER)
