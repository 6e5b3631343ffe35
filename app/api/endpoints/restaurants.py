"""Admin pages for restaurants, their detail view and their menus."""

from typing import List, Optional
import logging

from fastapi import APIRouter, Body, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.record_pages import (
    handle_add,
    handle_delete,
    handle_update,
    list_state,
    listing_url,
    prepare_table,
    render_records_page,
    table_context,
)
from app.api.templating import templates
from app.models.admin import BusinessHoursData, GeoLocation
from app.services.backend_service import BackendServiceError
from app.services.data_table import DataTable
from app.services.dish_service import RestaurantMenuService
from app.services.restaurant_service import (
    RESTAURANT_STATUSES,
    RestaurantServiceError,
    restaurant_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()

BASE_URL = "/admin/restaurants"


async def _render_failure(request: Request, table):
    return await render_records_page(request, restaurant_service, BASE_URL, table=table)


@router.get("", response_class=HTMLResponse, summary="List restaurants")
async def list_restaurants(
    request: Request,
    q: str = Query("", description="Search term"),
    page: int = Query(1, ge=1, description="Page number"),
    dialog: Optional[str] = Query(None, description="Open the add dialog with 'add'"),
    edit: Optional[str] = Query(None, description="ID of the restaurant to edit"),
):
    return await render_records_page(request, restaurant_service, BASE_URL, q, page, dialog, edit)


@router.post("/add", response_class=HTMLResponse, summary="Add a restaurant")
async def add_restaurant(request: Request):
    return await handle_add(
        request, restaurant_service, BASE_URL, lambda table: _render_failure(request, table)
    )


@router.post("/{restaurant_id}/update", response_class=HTMLResponse, summary="Update a restaurant")
async def update_restaurant(request: Request, restaurant_id: str):
    return await handle_update(
        request,
        restaurant_service,
        BASE_URL,
        restaurant_id,
        lambda table: _render_failure(request, table),
    )


@router.post("/{restaurant_id}/delete", summary="Delete a restaurant")
async def delete_restaurant(request: Request, restaurant_id: str):
    return await handle_delete(request, restaurant_service, BASE_URL, restaurant_id)


@router.post("/{restaurant_id}/verify", summary="Verify a restaurant")
async def verify_restaurant(request: Request, restaurant_id: str):
    form = await request.form()
    q, page = list_state(form)
    try:
        await restaurant_service.verify(restaurant_id)
    except RestaurantServiceError as e:
        logger.error(f"Failed to verify restaurant {restaurant_id}: {e}")
    return RedirectResponse(listing_url(BASE_URL, q, page), status_code=status.HTTP_303_SEE_OTHER)


@router.put("/{restaurant_id}/hours", summary="Replace a restaurant's business hours")
async def update_business_hours(
    restaurant_id: str,
    business_hours: List[BusinessHoursData] = Body(..., embed=True, alias="businessHours"),
):
    """Forward new opening hours to the backend.

    Args:
        restaurant_id: ID of the restaurant
        business_hours: One entry per day with open and close times

    Returns:
        The updated restaurant record
    """
    try:
        return await restaurant_service.update_business_hours(restaurant_id, business_hours)
    except RestaurantServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.put("/{restaurant_id}/location", summary="Move a restaurant")
async def update_location(
    restaurant_id: str,
    location: GeoLocation = Body(..., embed=True),
):
    """Forward new coordinates to the backend.

    Args:
        restaurant_id: ID of the restaurant
        location: New latitude and longitude

    Returns:
        The updated restaurant record
    """
    try:
        return await restaurant_service.update_location(
            restaurant_id, location.latitude, location.longitude
        )
    except RestaurantServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


# -- detail page ------------------------------------------------------------


def _detail_url(restaurant_id: str) -> str:
    return f"{BASE_URL}/{restaurant_id}"


async def render_restaurant_detail(
    request: Request,
    restaurant_id: str,
    menu: RestaurantMenuService,
    table: Optional[DataTable] = None,
    q: str = "",
    page: int = 1,
    dialog: Optional[str] = None,
    edit: Optional[str] = None,
):
    await restaurant_service.fetch_all()
    restaurant = restaurant_service.find(restaurant_id)
    if restaurant is None:
        return templates.TemplateResponse(
            request,
            "admin/restaurant_not_found.html",
            {"active_path": BASE_URL},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    if table is None:
        await menu.fetch_all()
        table = prepare_table(menu, q, page, dialog, edit)

    context = {
        "active_path": BASE_URL,
        "restaurant": restaurant,
        "statuses": RESTAURANT_STATUSES,
        "menu": menu,
        **table_context(table, f"{_detail_url(restaurant_id)}/dishes", _detail_url(restaurant_id)),
    }
    return templates.TemplateResponse(request, "admin/restaurant_detail.html", context)


@router.get("/{restaurant_id}", response_class=HTMLResponse, summary="Restaurant detail")
async def restaurant_detail(
    request: Request,
    restaurant_id: str,
    q: str = Query("", description="Menu search term"),
    page: int = Query(1, ge=1, description="Menu page number"),
    dialog: Optional[str] = Query(None, description="Open the add dish dialog with 'add'"),
    edit: Optional[str] = Query(None, description="ID of the dish to edit"),
):
    menu = RestaurantMenuService(restaurant_id)
    return await render_restaurant_detail(request, restaurant_id, menu, q=q, page=page, dialog=dialog, edit=edit)


@router.post("/{restaurant_id}", summary="Save restaurant details")
async def save_restaurant(request: Request, restaurant_id: str):
    """Save the detail form: text fields, status, categories and flags."""
    form = await request.form()
    restaurant = await restaurant_service.fetch_one(restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")

    categories = [c.strip() for c in (form.get("categories") or "").split(",") if c.strip()]
    updated = {
        **restaurant,
        "name": form.get("name", restaurant.get("name")),
        "phone": form.get("phone", restaurant.get("phone")),
        "website": form.get("website", restaurant.get("website")),
        "status": form.get("status") or restaurant.get("status"),
        "addressFull": form.get("addressFull", restaurant.get("addressFull")),
        "categories": categories,
        "is_verified": "is_verified" in form,
        "is_sponsored": "is_sponsored" in form,
    }
    # the listing reads a flat address ahead of addressFull
    if "addressFull" in form and not isinstance(restaurant.get("address"), dict):
        updated["address"] = updated["addressFull"]
    try:
        await restaurant_service.update(updated)
    except (BackendServiceError, ValueError) as e:
        logger.error(f"Error saving restaurant {restaurant_id}: {e}")
    return RedirectResponse(_detail_url(restaurant_id), status_code=status.HTTP_303_SEE_OTHER)


@router.post("/{restaurant_id}/dishes/add", response_class=HTMLResponse, summary="Add a dish to the menu")
async def add_menu_dish(request: Request, restaurant_id: str):
    menu = RestaurantMenuService(restaurant_id)
    await menu.fetch_all()
    return await handle_add(
        request,
        menu,
        _detail_url(restaurant_id),
        lambda table: render_restaurant_detail(request, restaurant_id, menu, table=table),
    )


@router.post("/{restaurant_id}/dishes/{dish_id}/update", response_class=HTMLResponse, summary="Update a menu dish")
async def update_menu_dish(request: Request, restaurant_id: str, dish_id: str):
    menu = RestaurantMenuService(restaurant_id)
    return await handle_update(
        request,
        menu,
        _detail_url(restaurant_id),
        dish_id,
        lambda table: render_restaurant_detail(request, restaurant_id, menu, table=table),
    )


@router.post("/{restaurant_id}/dishes/{dish_id}/delete", summary="Remove a dish from the menu")
async def delete_menu_dish(request: Request, restaurant_id: str, dish_id: str):
    menu = RestaurantMenuService(restaurant_id)
    return await handle_delete(request, menu, _detail_url(restaurant_id), dish_id)
