"""Facilities (data centres)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from metalclient.common import ListOptions

FACILITY_BASE_PATH = "/facilities"


@dataclass
class Address:
    """The physical address of a facility."""

    id: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Address":
        data = data or {}
        return cls(id=data.get("id") or "")


@dataclass
class Facility:
    """A facility."""

    id: str = ""
    name: str = ""
    code: str = ""
    features: list[str] = field(default_factory=list)
    address: Address | None = None
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Facility":
        data = data or {}
        address = data.get("address")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            code=data.get("code") or "",
            features=list(data.get("features") or []),
            address=Address.from_dict(address) if address else None,
            url=data.get("href") or "",
        )


class FacilityService:
    """Access to facilities."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def list(self, list_options: ListOptions | None = None) -> list[Facility]:
        params = list_options.query() if list_options is not None else ""
        document = self._requester.do_request("GET", f"{FACILITY_BASE_PATH}?{params}", None) or {}
        return [Facility.from_dict(item) for item in document.get("facilities") or []]