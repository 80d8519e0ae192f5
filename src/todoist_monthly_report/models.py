"""
Domain types for the monthly report and the wire shapes of the two Todoist
endpoints it reads.

The TypedDicts mirror the JSON exactly; api.py maps them onto the dataclasses.
"""
from __future__ import annotations
import datetime as dt
from dataclasses import dataclass, field
from typing import List, Optional, TypedDict


# ---------------------------
# Wire shapes (JSON)
# ---------------------------

class ProjectDTO(TypedDict, total=False):
    id: str
    name: str
    is_archived: bool
    is_deleted: bool
    parent_id: Optional[str]
    color: str
    shared: bool
    inbox_project: bool
    child_order: int
    view_style: str


class SyncResponseDTO(TypedDict, total=False):
    projects: List[ProjectDTO]
    full_sync: bool
    sync_token: str


class ExtraDataDTO(TypedDict, total=False):
    content: str
    due_date: Optional[str]
    last_due_date: Optional[str]
    client: str


class EventDTO(TypedDict, total=False):
    id: int
    object_type: str
    object_id: str
    event_type: str
    event_date: str
    parent_project_id: str
    parent_item_id: Optional[str]
    initiator_id: Optional[str]
    extra_data: ExtraDataDTO


class ActivityResponseDTO(TypedDict, total=False):
    events: List[EventDTO]
    count: int


# ---------------------------
# Domain
# ---------------------------

@dataclass(frozen=True)
class Project:
    id: str
    name: str
    is_archived: bool = False
    is_deleted: bool = False
    parent_id: Optional[str] = None
    color: str = ""
    shared: bool = False
    inbox_project: bool = False
    child_order: int = 0
    view_style: str = ""


@dataclass(frozen=True)
class ExtraData:
    content: str = ""
    due_date: Optional[dt.datetime] = None
    last_due_date: Optional[dt.datetime] = None
    client: str = ""


@dataclass(frozen=True)
class ActivityEvent:
    id: int
    object_type: str
    object_id: str
    event_type: str
    event_date: dt.datetime
    parent_project_id: str
    parent_item_id: Optional[str] = None
    initiator_id: Optional[str] = None
    extra_data: ExtraData = field(default_factory=ExtraData)


@dataclass
class ActivityPage:
    events: List[ActivityEvent]
    count: int


@dataclass(frozen=True)
class ReportLine:
    timestamp: dt.datetime
    content: str
