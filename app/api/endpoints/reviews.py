"""Admin pages for review moderation."""

from typing import Any, Dict, Mapping, Optional
import logging

from fastapi import APIRouter, Form, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.record_pages import (
    handle_delete,
    list_state,
    listing_url,
    prepare_table,
    render_records_page,
)
from app.services.review_service import REVIEW_SCOPES, ReviewServiceError, review_service

logger = logging.getLogger(__name__)

router = APIRouter()

BASE_URL = "/admin/reviews"


def review_scope(source: Mapping[str, Any]) -> Dict[str, str]:
    """The first restaurant/dish/user filter present in a query or form, if any."""
    for kind in REVIEW_SCOPES:
        value = source.get(kind)
        if value:
            return {kind: str(value)}
    return {}


@router.get("", response_class=HTMLResponse, summary="List reviews")
async def list_reviews(
    request: Request,
    q: str = Query("", description="Search term"),
    page: int = Query(1, ge=1, description="Page number"),
    restaurant: Optional[str] = Query(None, description="Only reviews of this restaurant"),
    dish: Optional[str] = Query(None, description="Only reviews of this dish"),
    user: Optional[str] = Query(None, description="Only reviews by this user"),
):
    """List every review, or the reviews of one restaurant, dish or user."""
    scope = review_scope({"restaurant": restaurant, "dish": dish, "user": user})
    if not scope:
        return await render_records_page(request, review_service, BASE_URL, q, page)

    kind, target_id = next(iter(scope.items()))
    await review_service.fetch_scoped(kind, target_id)
    table = prepare_table(review_service, q, page)
    return await render_records_page(
        request,
        review_service,
        BASE_URL,
        table=table,
        extra_context={"scope": {"kind": kind, "id": target_id}},
        list_params=scope,
    )


@router.get("/stats", summary="Review statistics")
async def review_stats():
    """Statistics computed by the backend across all reviews."""
    try:
        return await review_service.get_stats()
    except ReviewServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/{review_id}/delete", summary="Delete a review")
async def delete_review(request: Request, review_id: str):
    form = await request.form()
    return await handle_delete(request, review_service, BASE_URL, review_id, review_scope(form))


@router.post("/{review_id}/verify", summary="Verify a review's author")
async def verify_review(request: Request, review_id: str):
    form = await request.form()
    q, page = list_state(form)
    try:
        await review_service.verify(review_id)
    except ReviewServiceError as e:
        logger.error(f"Failed to verify review {review_id}: {e}")
    return RedirectResponse(
        listing_url(BASE_URL, q, page, review_scope(form)), status_code=status.HTTP_303_SEE_OTHER
    )


@router.post("/{review_id}/report", summary="Report a review")
async def report_review(
    request: Request,
    review_id: str,
    reason: str = Form(..., description="Why the review is inappropriate"),
    q: str = Form("", description="Search term to return to"),
    page: int = Form(1, description="Page to return to"),
):
    form = await request.form()
    try:
        await review_service.report(review_id, reason)
    except ReviewServiceError as e:
        logger.error(f"Failed to report review {review_id}: {e}")
    return RedirectResponse(
        listing_url(BASE_URL, q, page, review_scope(form)), status_code=status.HTTP_303_SEE_OTHER
    )
