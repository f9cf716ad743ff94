"""Batches of devices created together."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from metalclient.common import GetOptions, Href, ListOptions, parse_timestamp
from metalclient.devices import Device, DeviceCreateRequest

BATCH_BASE_PATH = "/batches"
PROJECT_BASE_PATH = "/projects"


@dataclass
class Batch:
    """A batch of device instances."""

    id: str = ""
    state: str = ""
    quantity: int = 0
    created_at: datetime | None = None
    href: str = ""
    project: Href = field(default_factory=Href)
    devices: list[Device] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "Batch":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            state=data.get("state") or "",
            quantity=int(data.get("quantity") or 0),
            created_at=parse_timestamp(data.get("created_at")),
            href=data.get("href") or "",
            project=Href.from_dict(data.get("project")),
            devices=[Device.from_dict(item) for item in data.get("devices") or []],
        )


@dataclass
class BatchCreateDevice:
    """A group of identical devices within a batch request."""

    device: DeviceCreateRequest = field(default_factory=DeviceCreateRequest)
    quantity: int = 0
    facility_diversity_level: int = 0

    def to_dict(self) -> dict:
        body = self.device.to_dict()
        body["quantity"] = self.quantity
        if self.facility_diversity_level:
            body["facility_diversity_level"] = self.facility_diversity_level
        return body


@dataclass
class BatchCreateRequest:
    """The body of a request to create batches of devices."""

    batches: list[BatchCreateDevice] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"batches": [batch.to_dict() for batch in self.batches]}


class BatchService:
    """Access to device batches."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def get(self, batch_id: str, get_options: GetOptions | None = None) -> Batch:
        params = get_options.query() if get_options is not None else ""
        path = f"{BATCH_BASE_PATH}/{batch_id}?{params}"
        return Batch.from_dict(self._requester.do_request("GET", path, None))

    def list(self, project_id: str, list_options: ListOptions | None = None) -> list[Batch]:
        params = list_options.query() if list_options is not None else ""
        path = f"{PROJECT_BASE_PATH}/{project_id}{BATCH_BASE_PATH}?{params}"
        document = self._requester.do_request("GET", path, None) or {}
        return [Batch.from_dict(item) for item in document.get("batches") or []]

    def create(self, project_id: str, request: BatchCreateRequest) -> list[Batch]:
        path = f"{PROJECT_BASE_PATH}/{project_id}/devices/batch"
        document = self._requester.do_request("POST", path, request.to_dict()) or {}
        return [Batch.from_dict(item) for item in document.get("batches") or []]

    def delete(self, batch_id: str, remove_devices: bool) -> None:
        flag = "true" if remove_devices else "false"
        path = f"{BATCH_BASE_PATH}/{batch_id}?remove_associated_instances={flag}"
        self._requester.do_request("DELETE", path, None)