"""
GRAMS API connection manager
Owns the HTTP session and turns every backend reply into either a payload or a DomainError
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from api.auth import AuthContext
from api.config import ApiSettings
from grams.resource_requests.domain.errors import (
    DomainError,
    GatewayError,
    NotFound,
    PermissionDenied,
)

logger = logging.getLogger(__name__)


def create_http_session() -> requests.Session:
    """Create a session shared by every gateway"""
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


class ApiConnector:
    """
    Sends one request and unwraps the ``{success, message, data}`` envelope.
    The blocking call runs in a worker thread so views stay responsive.
    """

    def __init__(
        self,
        session: Any,
        auth: AuthContext,
        settings: ApiSettings,
    ) -> None:
        self._session = session
        self._auth = auth
        self._settings = settings

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    async def call(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        fallback: str = "Request failed",
    ) -> Dict[str, Any]:
        return await asyncio.to_thread(
            self._send, method, url, body, params, files, fallback
        )

    def _send(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        files: Optional[Dict[str, Any]],
        fallback: str,
    ) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "headers": self._auth.headers(),
            "timeout": self._settings.request_timeout,
        }
        if files is not None:
            kwargs["files"] = files
        elif body is not None:
            kwargs["json"] = body
        if params:
            kwargs["params"] = params

        logger.debug(f"API Request: {method} {url}")
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"API No Response: {method} {url}: {e}")
            raise GatewayError(fallback) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            logger.warning(f"API Response Error: {method} {url} -> {response.status_code} (no JSON body)")
            raise GatewayError(fallback, response.status_code)

        status_code = response.status_code
        if status_code >= 400 or not payload.get("success"):
            message = payload.get("message")
            if not isinstance(message, str) or not message.strip():
                message = fallback
            logger.warning(f"API Response Error: {method} {url} -> {status_code}: {message}")
            raise error_for_status(status_code, message)

        return payload

    def close(self) -> None:
        close = getattr(self._session, "close", None)
        if close is not None:
            close()
            logger.info("HTTP session closed")


def error_for_status(status_code: int, message: str) -> DomainError:
    if status_code in (401, 403):
        return PermissionDenied(message)
    if status_code == 404:
        return NotFound(message)
    return GatewayError(message, status_code)
