"""
Bearer token holder.

One ``AuthContext`` is created at the composition root and handed to every
gateway that talks to the backend; nothing reads the token from a global.
"""
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class AuthContext:
    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    def clear(self) -> None:
        self._token = None

    def headers(self) -> Dict[str, str]:
        if self._token is None:
            logger.debug("No token set; sending request without Authorization header")
            return {}
        return {"Authorization": f"Bearer {self._token}"}
