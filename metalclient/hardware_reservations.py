"""Hardware reservations of projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from metalclient.common import GetOptions, ListOptions, parse_timestamp
from metalclient.devices import Device
from metalclient.facilities import Facility

HARDWARE_RESERVATION_BASE_PATH = "/hardware-reservations"
PROJECT_BASE_PATH = "/projects"


@dataclass
class HardwareReservation:
    """A hardware reservation; plan and project are kept as returned documents."""

    id: str = ""
    short_id: str = ""
    facility: Facility = field(default_factory=Facility)
    plan: dict[str, Any] = field(default_factory=dict)
    href: str = ""
    project: dict[str, Any] = field(default_factory=dict)
    device: Device | None = None
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> "HardwareReservation":
        data = data or {}
        device = data.get("device")
        return cls(
            id=data.get("id") or "",
            short_id=data.get("short_id") or "",
            facility=Facility.from_dict(data.get("facility")),
            plan=dict(data.get("plan") or {}),
            href=data.get("href") or "",
            project=dict(data.get("project") or {}),
            device=Device.from_dict(device) if device else None,
            created_at=parse_timestamp(data.get("created_at")),
        )


class HardwareReservationService:
    """Access to hardware reservations."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def get(
        self, reservation_id: str, get_options: GetOptions | None = None
    ) -> HardwareReservation:
        params = get_options.query() if get_options is not None else ""
        path = f"{HARDWARE_RESERVATION_BASE_PATH}/{reservation_id}?{params}"
        return HardwareReservation.from_dict(self._requester.do_request("GET", path, None))

    def list(
        self, project_id: str, list_options: ListOptions | None = None
    ) -> list[HardwareReservation]:
        """List the reservations of a project; only the first page is fetched."""
        params = list_options.query() if list_options is not None else ""
        path = f"{PROJECT_BASE_PATH}/{project_id}{HARDWARE_RESERVATION_BASE_PATH}?{params}"
        document = self._requester.do_request("GET", path, None) or {}
        return [
            HardwareReservation.from_dict(item)
            for item in document.get("hardware_reservations") or []
        ]

    def move(self, reservation_id: str, project_id: str) -> HardwareReservation:
        """Move a reservation to another project."""
        path = f"{HARDWARE_RESERVATION_BASE_PATH}/{reservation_id}/move"
        document = self._requester.do_request("POST", path, {"project_id": project_id})
        return HardwareReservation.from_dict(document)