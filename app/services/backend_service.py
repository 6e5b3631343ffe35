"""
This file defines the BackendService class, a thin async client for the
Toro Eats REST backend.

Every admin page reads and writes its records through this client. The base
URL and timeout come from the application settings.
"""

from typing import Any, Dict, Optional
import logging

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class BackendServiceError(Exception):
    """Raised when a backend call fails or answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BackendService:
    """
    Async client for the Toro Eats REST API.

    Each call opens a short-lived httpx.AsyncClient; a transport can be
    injected for tests.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.BACKEND_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.BACKEND_TIMEOUT
        self.transport = transport

    async def request(
        self, method: str, path: str, json: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Sends a request to the backend and returns the decoded JSON body.

        Args:
            method (str): HTTP verb.
            path (str): Path relative to the backend base URL, e.g. "/cities".
            json (Optional[Dict[str, Any]]): JSON payload for POST/PUT calls.

        Returns:
            Any: Decoded response body, or None for an empty body.

        Raises:
            BackendServiceError: If the request fails or the status is not 2xx.
        """
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {str(e)}")
            raise BackendServiceError(f"Request to {path} failed: {str(e)}")

        if response.status_code >= 400:
            logger.error(f"{method} {url} returned {response.status_code}: {response.text}")
            raise BackendServiceError(
                f"Backend returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise BackendServiceError(f"Backend returned invalid JSON for {path}")

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, json=data)

    async def put(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PUT", path, json=data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


backend_service = BackendService()
