"""User notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from metalclient.common import GetOptions, Href, ListOptions, parse_timestamp

NOTIFICATION_BASE_PATH = "/notifications"


@dataclass
class Notification:
    """A notification."""

    id: str = ""
    type: str = ""
    body: str = ""
    severity: str = ""
    read: bool = False
    context: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: Href = field(default_factory=Href)
    href: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Notification":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            body=data.get("body") or "",
            severity=data.get("severity") or "",
            read=bool(data.get("read")),
            context=data.get("context") or "",
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
            user=Href.from_dict(data.get("user")),
            href=data.get("href") or "",
        )


class NotificationService:
    """Access to the current user's notifications."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def list(self, list_options: ListOptions | None = None) -> list[Notification]:
        params = list_options.query() if list_options is not None else ""
        path = f"{NOTIFICATION_BASE_PATH}?{params}"
        document = self._requester.do_request("GET", path, None) or {}
        return [Notification.from_dict(item) for item in document.get("notifications") or []]

    def get(self, notification_id: str, get_options: GetOptions | None = None) -> Notification:
        params = get_options.query() if get_options is not None else ""
        path = f"{NOTIFICATION_BASE_PATH}/{notification_id}?{params}"
        return Notification.from_dict(self._requester.do_request("GET", path, None))

    def mark_as_read(self, notification_id: str) -> Notification:
        path = f"{NOTIFICATION_BASE_PATH}/{notification_id}"
        return Notification.from_dict(self._requester.do_request("PUT", path, None))