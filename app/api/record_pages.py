"""Shared request handling for the admin record pages.

Every admin page follows the same flow: load the collection through its page
controller, put it in a DataTable, apply the search/page/dialog state from
the request and render the table. Form posts go through the table's
add/update/delete flows and redirect back to the listing on success.
"""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlencode
import logging

from fastapi import HTTPException, Request, status
from fastapi.responses import RedirectResponse, Response

from app.api.templating import templates
from app.services.data_table import DataTable
from app.services.page_controller import PageController

logger = logging.getLogger(__name__)

RenderFailure = Callable[[DataTable], Awaitable[Response]]


def to_page(value: Any) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return 1


def listing_url(
    base_url: str,
    q: str = "",
    page: int = 1,
    list_params: Optional[Mapping[str, str]] = None,
) -> str:
    """Listing address with its fixed filters, search term and page."""
    params = dict(list_params or {})
    if q:
        params["q"] = q
    if page > 1:
        params["page"] = page
    return f"{base_url}?{urlencode(params)}" if params else base_url


def list_state(form: Mapping[str, Any]) -> tuple:
    """Search term and page carried through a form post as hidden fields."""
    return (form.get("q") or ""), to_page(form.get("page"))


def prepare_table(
    controller: PageController,
    q: str = "",
    page: int = 1,
    dialog: Optional[str] = None,
    edit: Optional[str] = None,
) -> DataTable:
    table = controller.table()
    table.set_search(q)
    table.go_to_page(page)
    if dialog == "add" and table.on_add is not None:
        table.open_add()
    elif edit and table.on_update is not None:
        record = controller.find(edit)
        if record is not None:
            table.open_edit(record)
    return table


def table_context(
    table: DataTable,
    action_base: str,
    base_url: str,
    row_actions: Optional[List[Dict[str, str]]] = None,
    list_params: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    return {
        "table": table.view(),
        "action_base": action_base,
        "base_url": base_url,
        "row_actions": row_actions or [],
        "list_params": dict(list_params or {}),
    }


async def render_records_page(
    request: Request,
    controller: PageController,
    base_url: str,
    q: str = "",
    page: int = 1,
    dialog: Optional[str] = None,
    edit: Optional[str] = None,
    table: Optional[DataTable] = None,
    extra_context: Optional[Dict[str, Any]] = None,
    list_params: Optional[Mapping[str, str]] = None,
) -> Response:
    """Render the standard admin page: title, stat cards and the record table.

    ``list_params`` are filters every link, form and redirect of the listing keeps.
    """
    if table is None:
        await controller.fetch_all()
        table = prepare_table(controller, q, page, dialog, edit)

    context = {
        "controller": controller,
        "active_path": base_url,
        "stats": controller.stats(controller.cache.records),
        **table_context(table, base_url, base_url, controller.row_actions, list_params),
        **(extra_context or {}),
    }
    return templates.TemplateResponse(request, "admin/records.html", context)


async def handle_add(
    request: Request,
    controller: PageController,
    base_url: str,
    render_failure: RenderFailure,
) -> Response:
    """Run the add dialog flow for a posted form."""
    form = await request.form()
    q, page = list_state(form)

    table = controller.table()
    table.set_search(q)
    table.page = page
    table.open_add()
    table.apply_form(form)

    if await table.submit_add():
        return RedirectResponse(listing_url(base_url, q, page), status_code=status.HTTP_303_SEE_OTHER)
    return await render_failure(table)


async def _load_record(controller: PageController, record_id: str) -> Dict[str, Any]:
    record = await controller.fetch_one(record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{controller.slug} record {record_id} not found",
        )
    return record


async def handle_update(
    request: Request,
    controller: PageController,
    base_url: str,
    record_id: str,
    render_failure: RenderFailure,
) -> Response:
    """Run the edit dialog flow for a posted form."""
    form = await request.form()
    q, page = list_state(form)
    record = await _load_record(controller, record_id)

    table = controller.table()
    table.set_search(q)
    table.page = page
    table.open_edit(record)
    table.apply_form(form)

    if await table.submit_update():
        return RedirectResponse(listing_url(base_url, q, page), status_code=status.HTTP_303_SEE_OTHER)
    return await render_failure(table)


async def handle_delete(
    request: Request,
    controller: PageController,
    base_url: str,
    record_id: str,
    list_params: Optional[Mapping[str, str]] = None,
) -> Response:
    """Delete straight from the row menu, then go back to the listing."""
    form = await request.form()
    q, page = list_state(form)
    record = await _load_record(controller, record_id)

    table = controller.table()
    await table.delete(record)
    return RedirectResponse(listing_url(base_url, q, page, list_params), status_code=status.HTTP_303_SEE_OTHER)
