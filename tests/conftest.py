"""
Shared fixtures for the sanicmvc test suite.
"""
import uuid
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from sanic.response import text

from sanicmvc.middleware import Middleware


# ============================================================================
# Request Helpers
# ============================================================================


def make_request(method: str = "GET", path: str = "/", **attributes: Any) -> SimpleNamespace:
    """Minimal stand-in for a Sanic request: method, path and ctx."""
    values: Dict[str, Any] = {
        "method": method,
        "path": path,
        "ctx": SimpleNamespace(),
        "headers": {},
        "cookies": {},
        "args": {},
        "query_string": "",
        "version": "1.1",
        "content_type": "",
        "body": b"",
    }
    values.update(attributes)
    return SimpleNamespace(**values)


class RecordingMiddleware(Middleware):
    """Appends its label to a shared event list; optionally short-circuits."""

    def __init__(self, events: List[str], label: str, respond_with: Optional[int] = None):
        self.events = events
        self.label = label
        self.respond_with = respond_with

    async def before_request(self, request):
        self.events.append(self.label)
        if self.respond_with is not None:
            return text(self.label, status=self.respond_with)
        return None

    async def after_response(self, request, response):
        self.events.append(f"after:{self.label}")
        return response


def handler_returning(body: str, events: Optional[List[str]] = None):
    async def handler(request):
        if events is not None:
            events.append(body)
        return text(body)
    return handler


async def unhandled(request):
    return None


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def app_name() -> str:
    """Sanic keeps a process-wide registry of app names."""
    return f"sanicmvc-test-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def events() -> List[str]:
    return []
