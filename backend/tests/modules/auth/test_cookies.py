"""Tests for the session cookie manager."""

from datetime import timedelta

from starlette.requests import Request
from starlette.responses import Response

from modules.auth.cookies import SessionCookieManager


def request_with_cookie(header: str) -> Request:
    return Request({"type": "http", "headers": [(b"cookie", header.encode())]})


class TestAttach:
    def test_cookie_attributes(self, cookies):
        """HTTP-only, SameSite=Lax, whole-origin path, max-age = session TTL."""
        response = Response()
        cookies.attach(response, "tok")

        header = response.headers["set-cookie"]
        assert header.startswith("auth-token=tok;")
        assert "HttpOnly" in header
        assert "Max-Age=604800" in header
        assert "Path=/" in header
        assert "samesite=lax" in header.lower()
        assert "Secure" not in header

    def test_secure_flag(self):
        manager = SessionCookieManager("auth-token", timedelta(hours=1), secure=True)
        response = Response()
        manager.attach(response, "tok")

        header = response.headers["set-cookie"]
        assert "Secure" in header
        assert "Max-Age=3600" in header


class TestClear:
    def test_clear_expires_cookie(self, cookies):
        response = Response()
        cookies.clear(response)

        header = response.headers["set-cookie"]
        assert header.startswith("auth-token=")
        assert "Max-Age=0" in header
        assert "Path=/" in header
        assert "HttpOnly" in header


class TestExtract:
    def test_present(self, cookies):
        assert cookies.extract(request_with_cookie("auth-token=abc; theme=dark")) == "abc"

    def test_absent(self, cookies):
        assert cookies.extract(request_with_cookie("theme=dark")) is None

    def test_empty_value(self, cookies):
        assert cookies.extract(request_with_cookie("auth-token=")) is None
