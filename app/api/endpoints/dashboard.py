"""Admin landing page with overview numbers."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.api.templating import templates
from app.models.admin import DashboardStats
from app.services.dashboard_service import dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_class=HTMLResponse, summary="Admin dashboard")
async def dashboard(request: Request):
    stats = await dashboard_service.get_stats()
    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        {"active_path": "/admin", "stats": dashboard_service.cards(stats)},
    )


@router.get("/stats", response_model=DashboardStats, summary="Dashboard statistics")
async def dashboard_stats() -> DashboardStats:
    return await dashboard_service.get_stats()
