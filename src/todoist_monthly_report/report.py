from __future__ import annotations
import json
import logging
from typing import Iterable, List

from .api import ActivityClient
from .models import ActivityEvent, ActivityPage, ReportLine
from .window import PageWindow, YearMonth, get_tz


DEFAULT_LIMIT = 100
LINE_FORMAT = "%Y/%m/%d %H:%M:%S"
OUTPUT_FORMATS = ("text", "jsonl")

log = logging.getLogger(__name__)


# ---------------------------
# Fetching
# ---------------------------

def fetch_complete_page(
    client: ActivityClient,
    project_id: str,
    page: int,
    event_type: str = "completed",
    limit: int = DEFAULT_LIMIT,
) -> ActivityPage:
    """
    Fetch every event of one page index, following offsets until the
    server-side count is reached or a batch comes back empty.
    """
    batch = client.fetch_activity_page(project_id, event_type, page, 0, limit)
    events = list(batch.events)
    count = batch.count
    offset = len(events)
    while batch.events and offset < count:
        log.debug("page %d: %d/%d events, fetching offset %d", page, offset, count, offset)
        batch = client.fetch_activity_page(project_id, event_type, page, offset, limit)
        events.extend(batch.events)
        offset += len(batch.events)
    return ActivityPage(events=events, count=count)


# ---------------------------
# Filtering
# ---------------------------

def event_in_month(
    event: ActivityEvent,
    target: YearMonth,
    match_year: bool = True,
    tz: str = "UTC",
) -> bool:
    local = event.event_date.astimezone(get_tz(tz))
    if local.month != target.month:
        return False
    return not match_year or local.year == target.year


def build_report(
    client: ActivityClient,
    project_id: str,
    target: YearMonth,
    window: PageWindow,
    match_year: bool = True,
    limit: int = DEFAULT_LIMIT,
    tz: str = "UTC",
) -> List[ReportLine]:
    """
    Walk the window's pages in ascending order and collect completed events of
    the target month. Lines keep page order then in-page order; there is no
    global sort. Any fetch error aborts the whole report.
    """
    zone = get_tz(tz)
    log.info("Scanning pages %d..%d for %s", window.start_page, window.end_page, target)
    lines: List[ReportLine] = []
    for p in window.pages():
        page = fetch_complete_page(client, project_id, p, "completed", limit)
        kept = [e for e in page.events if event_in_month(e, target, match_year, tz)]
        log.debug("page %d: kept %d of %d events", p, len(kept), len(page.events))
        for e in kept:
            lines.append(ReportLine(timestamp=e.event_date.astimezone(zone), content=e.extra_data.content))
    return lines


# ---------------------------
# Output
# ---------------------------

def format_line(line: ReportLine) -> str:
    return f"{line.timestamp.strftime(LINE_FORMAT)} {line.content}"


def render_lines(lines: Iterable[ReportLine], fmt: str = "text") -> List[str]:
    if fmt == "jsonl":
        return [
            json.dumps({"timestamp": ln.timestamp.isoformat(), "content": ln.content}, ensure_ascii=False)
            for ln in lines
        ]
    return [format_line(ln) for ln in lines]
