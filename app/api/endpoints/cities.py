"""Admin pages for cities and their scraping state."""

from typing import Optional
import logging

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.record_pages import (
    handle_add,
    handle_delete,
    handle_update,
    listing_url,
    list_state,
    render_records_page,
)
from app.services.city_service import city_service

logger = logging.getLogger(__name__)

router = APIRouter()

BASE_URL = "/admin/cities"


async def _render_failure(request: Request, table):
    return await render_records_page(request, city_service, BASE_URL, table=table)


@router.get("", response_class=HTMLResponse, summary="List cities")
async def list_cities(
    request: Request,
    q: str = Query("", description="Search term"),
    page: int = Query(1, ge=1, description="Page number"),
    dialog: Optional[str] = Query(None, description="Open the add dialog with 'add'"),
    edit: Optional[str] = Query(None, description="ID of the city to edit"),
):
    return await render_records_page(request, city_service, BASE_URL, q, page, dialog, edit)


@router.post("/add", response_class=HTMLResponse, summary="Add a city")
async def add_city(request: Request):
    return await handle_add(
        request, city_service, BASE_URL, lambda table: _render_failure(request, table)
    )


@router.post("/{city_id}/update", response_class=HTMLResponse, summary="Update a city")
async def update_city(request: Request, city_id: str):
    return await handle_update(
        request, city_service, BASE_URL, city_id, lambda table: _render_failure(request, table)
    )


@router.post("/{city_id}/delete", summary="Delete a city")
async def delete_city(request: Request, city_id: str):
    return await handle_delete(request, city_service, BASE_URL, city_id)


@router.post("/{city_id}/scraping/start", summary="Start scraping a city")
async def start_scraping(request: Request, city_id: str):
    """Start the backend scraper for a city; failures are only logged."""
    form = await request.form()
    q, page = list_state(form)
    await city_service.start_scraping(city_id)
    return RedirectResponse(listing_url(BASE_URL, q, page), status_code=status.HTTP_303_SEE_OTHER)


@router.post("/{city_id}/scraping/stop", summary="Stop scraping a city")
async def stop_scraping(request: Request, city_id: str):
    """Stop the backend scraper for a city; failures are only logged."""
    form = await request.form()
    q, page = list_state(form)
    await city_service.stop_scraping(city_id)
    return RedirectResponse(listing_url(BASE_URL, q, page), status_code=status.HTTP_303_SEE_OTHER)
