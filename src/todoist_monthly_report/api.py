from __future__ import annotations
import datetime as dt
import logging
from typing import Any, Dict, List, Optional

import requests

from .errors import ProjectNotFoundError, RemoteFetchError
from .models import (
    ActivityEvent,
    ActivityPage,
    ActivityResponseDTO,
    EventDTO,
    ExtraData,
    ExtraDataDTO,
    Project,
    ProjectDTO,
    SyncResponseDTO,
)


TODOIST_DEFAULT_BASE = "https://api.todoist.com"
SYNC_PATH = "/sync/v9/sync"
ACTIVITY_PATH = "/sync/v9/activity/get"

log = logging.getLogger(__name__)


# ---------------------------
# Helpers
# ---------------------------

def parse_event_date(value: Any) -> dt.datetime:
    """
    Parse a Todoist timestamp such as 2024-02-05T10:11:12.000000Z.
    Naive values are taken as UTC. Raises ValueError on anything else.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"invalid timestamp: {value!r}")
    s = value[:-1] + "+00:00" if value.endswith("Z") else value
    parsed = dt.datetime.fromisoformat(s)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def _parse_optional_date(value: Any) -> Optional[dt.datetime]:
    # due dates come back as full timestamps, plain dates, or null
    if not value:
        return None
    try:
        return parse_event_date(value)
    except ValueError:
        return None


def project_from_dto(dto: ProjectDTO) -> Project:
    parent = dto.get("parent_id")
    return Project(
        id=str(dto["id"]),
        name=str(dto["name"]),
        is_archived=bool(dto.get("is_archived", False)),
        is_deleted=bool(dto.get("is_deleted", False)),
        parent_id=str(parent) if parent is not None else None,
        color=str(dto.get("color") or ""),
        shared=bool(dto.get("shared", False)),
        inbox_project=bool(dto.get("inbox_project", False)),
        child_order=int(dto.get("child_order") or 0),
        view_style=str(dto.get("view_style") or ""),
    )


def extra_data_from_dto(dto: Optional[ExtraDataDTO]) -> ExtraData:
    dto = dto or {}
    return ExtraData(
        content=str(dto.get("content") or ""),
        due_date=_parse_optional_date(dto.get("due_date")),
        last_due_date=_parse_optional_date(dto.get("last_due_date")),
        client=str(dto.get("client") or ""),
    )


def event_from_dto(dto: EventDTO) -> ActivityEvent:
    return ActivityEvent(
        id=int(dto["id"]),
        object_type=str(dto.get("object_type") or ""),
        object_id=str(dto.get("object_id") or ""),
        event_type=str(dto.get("event_type") or ""),
        event_date=parse_event_date(dto.get("event_date")),
        parent_project_id=str(dto.get("parent_project_id") or ""),
        parent_item_id=dto.get("parent_item_id"),
        initiator_id=dto.get("initiator_id"),
        extra_data=extra_data_from_dto(dto.get("extra_data")),
    )


def page_from_dto(dto: ActivityResponseDTO) -> ActivityPage:
    events = [event_from_dto(e) for e in dto.get("events") or []]
    return ActivityPage(events=events, count=int(dto.get("count") or 0))


# ---------------------------
# Client
# ---------------------------

class ActivityClient:
    """
    Thin wrapper over the two Todoist sync-API calls the report needs.
    Every method issues exactly one HTTP request; nothing is cached.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = TODOIST_DEFAULT_BASE,
        timeout: float = 30,
        session: requests.Session | None = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _request_json(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        log.debug("%s %s %s", method, url, kwargs.get("params") or "")
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise RemoteFetchError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise RemoteFetchError(f"{method} {path} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise RemoteFetchError(f"{method} {path} returned {type(data).__name__}, expected an object")
        return data

    def get_projects(self) -> List[Project]:
        payload = {"sync_token": "*", "resource_types": ["projects"]}
        headers = self._headers()
        headers["Content-Type"] = "application/json"
        data: SyncResponseDTO = self._request_json("POST", SYNC_PATH, json=payload, headers=headers)  # type: ignore[assignment]
        try:
            return [project_from_dto(p) for p in data.get("projects") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RemoteFetchError(f"unexpected projects payload: {e}") from e

    def resolve_project_id(self, name: str) -> str:
        """Return the id of the project whose name equals `name` exactly."""
        for project in self.get_projects():
            if project.name == name:
                return project.id
        raise ProjectNotFoundError(name)

    def fetch_activity_page(
        self,
        project_id: str,
        event_type: str = "completed",
        page: int = 0,
        offset: int = 0,
        limit: int = 100,
    ) -> ActivityPage:
        params = {
            "event_type": event_type,
            "parent_project_id": project_id,
            "page": page,
            "offset": offset,
            "limit": limit,
        }
        data: ActivityResponseDTO = self._request_json(  # type: ignore[assignment]
            "GET", ACTIVITY_PATH, params=params, headers=self._headers()
        )
        try:
            return page_from_dto(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RemoteFetchError(f"unexpected activity payload on page {page}: {e}") from e
