from __future__ import annotations
import datetime as dt
import math
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigError


# Todoist activity pages are fixed 7-day windows counted back from now.
WEEK_SECONDS = 7 * 24 * 3600
# A calendar month touches at most 5 such windows.
LOOKBACK_PAGES = 5


def get_tz(name: str) -> dt.tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown time zone: {name!r}") from e


@dataclass(frozen=True)
class YearMonth:
    year: int
    month: int

    @classmethod
    def current(cls, tz: str = "UTC", now: dt.datetime | None = None) -> "YearMonth":
        """The month `now` (default: the current time) falls in, seen from `tz`."""
        if now is None:
            now = dt.datetime.now(dt.timezone.utc)
        now = now.astimezone(get_tz(tz))
        return cls(now.year, now.month)

    def first_day(self, tz: str = "UTC") -> dt.datetime:
        return dt.datetime(self.year, self.month, 1, tzinfo=get_tz(tz))

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}"


@dataclass(frozen=True)
class PageWindow:
    start_page: int
    end_page: int

    def pages(self) -> range:
        return range(self.start_page, self.end_page + 1)


def parse_target(value: str) -> YearMonth:
    """Parse YYYY/MM into a YearMonth."""
    try:
        parsed = dt.datetime.strptime(value.strip(), "%Y/%m")
    except (AttributeError, ValueError) as e:
        raise ConfigError(f"invalid target {value!r}; expected YYYY/MM") from e
    return YearMonth(parsed.year, parsed.month)


def compute_window(target: YearMonth, now: dt.datetime, tz: str = "UTC") -> PageWindow:
    """
    Map a calendar month onto activity-log page indices.

    end_page is the page whose week reaches back to the 1st of the month;
    start_page steps LOOKBACK_PAGES towards the present so the whole month is
    covered. A month that has not started yet collapses to page 0.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=get_tz(tz))
    # same-tzinfo subtraction ignores UTC offsets, so compare in UTC
    utc = dt.timezone.utc
    elapsed = (now.astimezone(utc) - target.first_day(tz).astimezone(utc)).total_seconds()
    end_page = max(math.floor(elapsed / WEEK_SECONDS), 0)
    start_page = max(end_page - LOOKBACK_PAGES, 0)
    return PageWindow(start_page, end_page)
