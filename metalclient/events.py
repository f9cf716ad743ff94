"""Events recorded against accounts, projects and devices."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from metalclient.common import GetOptions, Href, ListOptions, fetch_all, parse_timestamp

EVENT_BASE_PATH = "/events"


@dataclass
class Event:
    """An event."""

    id: str = ""
    state: str = ""
    type: str = ""
    body: str = ""
    relationships: list[Href] = field(default_factory=list)
    interpolated: str = ""
    created_at: datetime | None = None
    href: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Event":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            state=data.get("state") or "",
            type=data.get("type") or "",
            body=data.get("body") or "",
            relationships=[Href.from_dict(item) for item in data.get("relationships") or []],
            interpolated=data.get("interpolated") or "",
            created_at=parse_timestamp(data.get("created_at")),
            href=data.get("href") or "",
        )


def list_events(
    requester: Any, path: str, list_options: ListOptions | None = None
) -> list[Event]:
    """List the events under ``path``, following pages."""
    return [Event.from_dict(item) for item in fetch_all(requester, path, "events", list_options)]


def get_event(requester: Any, path: str, get_options: GetOptions | None = None) -> Event:
    """Fetch the single event at ``path``."""
    params = get_options.query() if get_options is not None else ""
    return Event.from_dict(requester.do_request("GET", f"{path}?{params}", None))


class EventService:
    """Access to account-wide events."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def list(self, list_options: ListOptions | None = None) -> list[Event]:
        return list_events(self._requester, EVENT_BASE_PATH, list_options)

    def get(self, event_id: str, get_options: GetOptions | None = None) -> Event:
        return get_event(self._requester, f"{EVENT_BASE_PATH}/{event_id}", get_options)