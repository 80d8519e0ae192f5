"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest
import requests

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from todoist_monthly_report.api import ActivityClient  # noqa: E402


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """
    Stands in for requests.Session. `handler(method, url, params)` returns a
    FakeResponse or raises; every call is recorded in `calls`.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.closed = True

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        return self.handler(method, url, kwargs.get("params"))


def make_event(event_id, event_date, content="task", project_id="2"):
    return {
        "id": event_id,
        "object_type": "item",
        "object_id": str(event_id),
        "event_type": "completed",
        "event_date": event_date,
        "parent_project_id": project_id,
        "parent_item_id": None,
        "initiator_id": None,
        "extra_data": {"content": content, "client": "web", "due_date": None, "last_due_date": None},
    }


def activity_handler(pages, projects=None):
    """
    Build a handler serving `pages` ({page_index: [event dicts]}) with
    offset/limit slicing and `projects` on the sync endpoint.
    """
    def handler(method, url, params):
        if method == "POST":
            return FakeResponse({"projects": projects or [], "full_sync": True, "sync_token": "abc"})
        events = pages.get(int(params["page"]), [])
        offset, limit = int(params["offset"]), int(params["limit"])
        return FakeResponse({"events": events[offset:offset + limit], "count": len(events)})
    return handler


@pytest.fixture
def sample_projects():
    return [
        {"id": "1", "name": "Home", "is_archived": False, "is_deleted": False, "parent_id": None},
        {"id": "2", "name": "Work", "is_archived": False, "is_deleted": False, "parent_id": None},
    ]


@pytest.fixture
def make_client():
    def _make(handler):
        session = FakeSession(handler)
        return ActivityClient("secret", session=session), session
    return _make
