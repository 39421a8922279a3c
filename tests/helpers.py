"""Shared test helper functions for relay tests.

Regular functions and classes (not fixtures), importable from conftest.py
and individual test modules.
"""

from __future__ import annotations

import json
from typing import Any

import requests

TEST_SESSION_SECRET = "test-session-secret-with-enough-bytes-for-hs256"
TEST_ADMIN_TOKEN = "test-admin-token-0001"
TEST_ADMIN_USER = "admin"
TEST_ADMIN_PASS = "s3nha-forte"
TEST_API_KEY = "cg-api-key-SECRETVALUE-9876"

PROVIDER_ENV = {
    "CHATGURU_API_ENDPOINT": "https://s10.chatguru.app/api/v1",
    "CHATGURU_API_KEY": TEST_API_KEY,
    "CHATGURU_ACCOUNT_ID": "acc-123",
    "CHATGURU_PHONE_ID": "phone-456",
}

ADMIN_ENV = {
    "RT_ADMIN_TOKEN": TEST_ADMIN_TOKEN,
    "ADMIN_USER": TEST_ADMIN_USER,
    "ADMIN_PASS": TEST_ADMIN_PASS,
    "SESSION_SECRET": TEST_SESSION_SECRET,
}

TOKEN_HEADERS = {"x-rt-admin-token": TEST_ADMIN_TOKEN}

# Session cookies are Secure, so clients talk https to keep them in the jar
BASE_URL = "https://testserver"


def fake_response(status_code: int = 200, body: Any = None, text: str | None = None) -> requests.Response:
    """Build a requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status_code
    if text is not None:
        resp._content = text.encode("utf-8")
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    return resp


def read_events(path) -> list[dict]:
    """Parse a JSON-lines audit file."""
    with open(path, encoding="utf-8") as fh:
        return [json.loads(line) for line in fh if line.strip()]


class LogRecorder:
    """Simple recorder to capture log calls deterministically."""

    def __init__(self):
        self.calls: list[tuple[str, tuple, dict]] = []

    def _record(self, level: str, *args, **kwargs):
        self.calls.append((level, args, kwargs))

    def info(self, *args, **kwargs):
        self._record("info", *args, **kwargs)

    def warning(self, *args, **kwargs):
        self._record("warning", *args, **kwargs)

    def error(self, *args, **kwargs):
        self._record("error", *args, **kwargs)

    def exception(self, *args, **kwargs):
        self._record("exception", *args, **kwargs)

    def debug(self, *args, **kwargs):
        self._record("debug", *args, **kwargs)

    def get_all_logged_content(self) -> str:
        """Concatenate all args and kwargs from all calls into one string."""
        parts = []
        for _, args, kwargs in self.calls:
            parts.append(str(args))
            parts.append(str(kwargs))
        return " ".join(parts)

    def has_extra_field(self, key: str) -> bool:
        """Check if any call has the given key in extra_fields."""
        for _, _, kwargs in self.calls:
            extra_fields = kwargs.get("extra", {}).get("extra_fields", {})
            if key in extra_fields:
                return True
        return False
