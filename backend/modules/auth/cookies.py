"""
Session cookie handling.

The session token travels only in an HTTP-only cookie scoped to the whole
origin. Clearing it is the whole of sign-out.
"""

from datetime import timedelta
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response


class SessionCookieManager:
    """Attaches, clears and reads the session cookie."""

    SAMESITE = "lax"
    PATH = "/"

    def __init__(self, name: str, ttl: timedelta, secure: bool = False):
        self.name = name
        self._max_age = int(ttl.total_seconds())
        self._secure = secure

    def attach(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.name,
            value=token,
            max_age=self._max_age,
            path=self.PATH,
            secure=self._secure,
            httponly=True,
            samesite=self.SAMESITE,
        )

    def clear(self, response: Response) -> None:
        """Overwrite the cookie with an empty, already-expired value."""
        response.delete_cookie(
            key=self.name,
            path=self.PATH,
            secure=self._secure,
            httponly=True,
            samesite=self.SAMESITE,
        )

    def extract(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.name) or None
