"""
GRAMS backend access: settings, auth context, HTTP connection and endpoint catalog
"""
from .auth import AuthContext
from .config import ApiSettings, api_settings
from .connection import ApiConnector, create_http_session
from .endpoints import build_url

__all__ = [
    # Config
    "ApiSettings",
    "api_settings",
    # Auth
    "AuthContext",
    # Connection
    "ApiConnector",
    "create_http_session",
    # Endpoints
    "build_url",
]
