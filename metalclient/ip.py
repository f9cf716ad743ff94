"""IP address reservations for projects and their assignment to devices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from metalclient.common import GetOptions, Href
from metalclient.facilities import Facility

IP_BASE_PATH = "/ips"
DEVICE_BASE_PATH = "/devices"
PROJECT_BASE_PATH = "/projects"


def _common_fields(data: dict) -> dict[str, Any]:
    global_ip = data.get("global_ip")
    return {
        "id": data.get("id") or "",
        "address": data.get("address") or "",
        "gateway": data.get("gateway") or "",
        "network": data.get("network") or "",
        "address_family": int(data.get("address_family") or 0),
        "netmask": data.get("netmask") or "",
        "public": bool(data.get("public")),
        "cidr": int(data.get("cidr") or 0),
        "created": data.get("created_at") or "",
        "updated": data.get("updated_at") or "",
        "href": data.get("href") or "",
        "management": bool(data.get("management")),
        "manageable": bool(data.get("manageable")),
        "project": Href.from_dict(data.get("project")),
        "global_ip": None if global_ip is None else bool(global_ip),
    }


@dataclass
class _IPAddressCommon:
    id: str = ""
    address: str = ""
    gateway: str = ""
    network: str = ""
    address_family: int = 0
    netmask: str = ""
    public: bool = False
    cidr: int = 0
    created: str = ""
    updated: str = ""
    href: str = ""
    management: bool = False
    manageable: bool = False
    project: Href = field(default_factory=Href)
    global_ip: bool | None = None


@dataclass
class IPAddressReservation(_IPAddressCommon):
    """A block of addresses reserved for a project."""

    assignments: list[Href] = field(default_factory=list)
    facility: Facility | None = None
    available: str = ""
    addon: bool = False
    bill: bool = False

    @classmethod
    def from_dict(cls, data: dict | None) -> "IPAddressReservation":
        data = data or {}
        facility = data.get("facility")
        return cls(
            **_common_fields(data),
            assignments=[Href.from_dict(item) for item in data.get("assignments") or []],
            facility=Facility.from_dict(facility) if facility else None,
            available=data.get("available") or "",
            addon=bool(data.get("addon")),
            bill=bool(data.get("bill")),
        )


@dataclass
class IPAddressAssignment(_IPAddressCommon):
    """An address from a reserved block assigned to a device."""

    assigned_to: Href = field(default_factory=Href)

    @classmethod
    def from_dict(cls, data: dict | None) -> "IPAddressAssignment":
        data = data or {}
        return cls(**_common_fields(data), assigned_to=Href.from_dict(data.get("assigned_to")))


@dataclass
class IPReservationRequest:
    """The body of a request for more address space."""

    type: str = ""
    quantity: int = 0
    comments: str = ""
    facility: str | None = None

    def to_dict(self) -> dict:
        body: dict[str, Any] = {
            "type": self.type,
            "quantity": self.quantity,
            "comments": self.comments,
        }
        if self.facility is not None:
            body["facility"] = self.facility
        return body


@dataclass
class AddressStruct:
    """A body of the form {"address": ...}."""

    address: str = ""

    def to_dict(self) -> dict:
        return {"address": self.address}


@dataclass
class AvailableRequest:
    """Asks for the addresses of a given prefix length still free in a block."""

    cidr: int = 0

    def to_dict(self) -> dict:
        return {"cidr": self.cidr}


def _delete_from_ip(requester: Any, resource_id: str) -> None:
    requester.do_request("DELETE", f"{IP_BASE_PATH}/{resource_id}", None)


def _params(get_options: GetOptions | None) -> str:
    return get_options.query() if get_options is not None else ""


class DeviceIPService:
    """Assignment of reserved addresses to devices."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def assign(self, device_id: str, assign_request: AddressStruct) -> IPAddressAssignment:
        path = f"{DEVICE_BASE_PATH}/{device_id}{IP_BASE_PATH}"
        document = self._requester.do_request("POST", path, assign_request.to_dict())
        return IPAddressAssignment.from_dict(document)

    def unassign(self, assignment_id: str) -> None:
        _delete_from_ip(self._requester, assignment_id)

    def get(
        self, assignment_id: str, get_options: GetOptions | None = None
    ) -> IPAddressAssignment:
        path = f"{IP_BASE_PATH}/{assignment_id}?{_params(get_options)}"
        return IPAddressAssignment.from_dict(self._requester.do_request("GET", path, None))


class ProjectIPService:
    """Reservation of address blocks for projects."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def get(
        self, reservation_id: str, get_options: GetOptions | None = None
    ) -> IPAddressReservation:
        path = f"{IP_BASE_PATH}/{reservation_id}?{_params(get_options)}"
        return IPAddressReservation.from_dict(self._requester.do_request("GET", path, None))

    def list(self, project_id: str) -> list[IPAddressReservation]:
        path = f"{PROJECT_BASE_PATH}/{project_id}{IP_BASE_PATH}"
        document = self._requester.do_request("GET", path, None) or {}
        return [IPAddressReservation.from_dict(item) for item in document.get("ip_addresses") or []]

    def request(
        self, project_id: str, reservation_request: IPReservationRequest
    ) -> IPAddressReservation:
        path = f"{PROJECT_BASE_PATH}/{project_id}{IP_BASE_PATH}"
        document = self._requester.do_request("POST", path, reservation_request.to_dict())
        return IPAddressReservation.from_dict(document)

    def remove(self, reservation_id: str) -> None:
        _delete_from_ip(self._requester, reservation_id)

    def available_addresses(
        self, reservation_id: str, available_request: AvailableRequest
    ) -> list[str]:
        path = f"{IP_BASE_PATH}/{reservation_id}/available?cidr={available_request.cidr}"
        document = self._requester.do_request("GET", path, available_request.to_dict()) or {}
        return list(document.get("available") or [])