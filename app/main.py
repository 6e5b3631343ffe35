from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from contextlib import asynccontextmanager
from pathlib import Path
import uvicorn

from app.api.endpoints import (
    auth,
    dashboard,
    cities,
    dishes,
    restaurants,
    reviews,
    users,
)
from app.api.templating import templates
from app.core.config import settings
from app.core.logging import setup_logging
from app.utils.admin_gate_middleware import AdminGateMiddleware
import logging
import json

logger = logging.getLogger(__name__)

with open(Path(__file__).resolve().parent / "log_config.json", "r") as file:
    LOGGING_CONFIG = json.load(file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"{settings.PROJECT_NAME} started, backend at {settings.BACKEND_API_URL}")
    yield
    logger.info(f"{settings.PROJECT_NAME} stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Admin dashboard for managing Toro Eats cities, restaurants, dishes, reviews and users",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

app.add_middleware(AdminGateMiddleware, prefix="/admin", redirect_to="/")

app.include_router(
    auth.router,
    prefix="/api/auth",
    tags=["authentication"],
)

app.include_router(
    dashboard.router,
    prefix="/admin",
    tags=["dashboard"],
)

app.include_router(
    cities.router,
    prefix="/admin/cities",
    tags=["cities"],
)

app.include_router(
    dishes.router,
    prefix="/admin/dishes",
    tags=["dishes"],
)

app.include_router(
    restaurants.router,
    prefix="/admin/restaurants",
    tags=["restaurants"],
)

app.include_router(
    reviews.router,
    prefix="/admin/reviews",
    tags=["reviews"],
)

app.include_router(
    users.router,
    prefix="/admin/users",
    tags=["users"],
)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def landing(request: Request):
    return templates.TemplateResponse(request, "landing.html", {})


@app.get("/health", tags=["status"])
async def health():
    return {"status": "online", "service": settings.PROJECT_NAME}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "path": str(request.url)},
    )


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_config=LOGGING_CONFIG,
    )
