"""Middleware guarding the admin pages.

Every request under the admin path prefix must carry a valid admin-token
cookie; anything else is sent back to the public landing page.
"""

import logging

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.auth_guard import verify_admin_token
from app.core.config import settings

logger = logging.getLogger(__name__)


class AdminGateMiddleware(BaseHTTPMiddleware):
    """Redirects unauthenticated admin requests to the landing page."""

    def __init__(self, app, prefix: str = "/admin", redirect_to: str = "/"):
        """Initialize the admin gate.

        Args:
            app: FastAPI application instance
            prefix: Path prefix that requires a valid admin token
            redirect_to: Where unauthenticated requests are sent
        """
        super().__init__(app)
        self.prefix = prefix.rstrip("/")
        self.redirect_to = redirect_to

    def is_protected(self, path: str) -> bool:
        return path == self.prefix or path.startswith(f"{self.prefix}/")

    async def dispatch(self, request: Request, call_next):
        if not self.is_protected(request.url.path):
            return await call_next(request)

        token = request.cookies.get(settings.ADMIN_COOKIE_NAME)
        if not token:
            logger.info(f"No admin token for {request.url.path}, redirecting")
            return RedirectResponse(self.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

        if verify_admin_token(token) is None:
            logger.warning(f"Invalid admin token for {request.url.path}, redirecting")
            return RedirectResponse(self.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

        return await call_next(request)
