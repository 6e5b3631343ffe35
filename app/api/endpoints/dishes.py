"""Admin pages for dishes."""

from typing import Optional
import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from app.api.record_pages import (
    handle_add,
    handle_delete,
    handle_update,
    render_records_page,
)
from app.services.dish_service import dish_service

logger = logging.getLogger(__name__)

router = APIRouter()

BASE_URL = "/admin/dishes"


async def _render_failure(request: Request, table):
    return await render_records_page(request, dish_service, BASE_URL, table=table)


@router.get("", response_class=HTMLResponse, summary="List dishes")
async def list_dishes(
    request: Request,
    q: str = Query("", description="Search term"),
    page: int = Query(1, ge=1, description="Page number"),
    dialog: Optional[str] = Query(None, description="Open the add dialog with 'add'"),
    edit: Optional[str] = Query(None, description="ID of the dish to edit"),
):
    return await render_records_page(request, dish_service, BASE_URL, q, page, dialog, edit)


@router.post("/add", response_class=HTMLResponse, summary="Add a dish")
async def add_dish(request: Request):
    return await handle_add(
        request, dish_service, BASE_URL, lambda table: _render_failure(request, table)
    )


@router.post("/{dish_id}/update", response_class=HTMLResponse, summary="Update a dish")
async def update_dish(request: Request, dish_id: str):
    return await handle_update(
        request, dish_service, BASE_URL, dish_id, lambda table: _render_failure(request, table)
    )


@router.post("/{dish_id}/delete", summary="Delete a dish")
async def delete_dish(request: Request, dish_id: str):
    return await handle_delete(request, dish_service, BASE_URL, dish_id)
