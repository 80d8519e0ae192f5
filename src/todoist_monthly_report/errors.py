from __future__ import annotations


class ReportError(Exception):
    """Base class for every failure the report run can hit."""


class ConfigError(ReportError):
    """Bad target date, bad config file, or a missing setting."""


class RemoteFetchError(ReportError):
    """Transport failure or undecodable response from the Todoist API."""


class ProjectNotFoundError(ReportError):
    def __init__(self, name: str):
        super().__init__(f"project not found: {name!r}")
        self.name = name
