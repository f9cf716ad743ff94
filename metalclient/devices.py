"""Devices: provisioning, updating, power actions and listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from metalclient.bgp_sessions import BGP_SESSION_BASE_PATH, BGPSession
from metalclient.common import (
    GetOptions,
    Href,
    ListOptions,
    ensure_get_include,
    ensure_list_include,
    fetch_all,
    format_timestamp,
    parse_timestamp,
)
from metalclient.events import EVENT_BASE_PATH, Event, list_events
from metalclient.facilities import Facility
from metalclient.ip import IPAddressAssignment
from metalclient.operatingsystems import OperatingSystem

DEVICE_BASE_PATH = "/devices"
PROJECT_BASE_PATH = "/projects"


class NetworkTypeError(ValueError):
    """Raised when the network type of a device cannot be determined."""


def get_network_type(network_ports: list[dict] | None) -> str:
    """Return the network type of the bonded port ``bond0``."""
    if not network_ports:
        raise NetworkTypeError("Device has no network ports listed")
    for port in network_ports:
        if (port or {}).get("name") == "bond0":
            return port.get("network_type") or ""
    raise NetworkTypeError("Bound port not found")


@dataclass
class Device:
    """A device as described by the API."""

    id: str = ""
    href: str = ""
    hostname: str = ""
    state: str = ""
    created: str = ""
    updated: str = ""
    locked: bool = False
    billing_cycle: str = ""
    storage: dict[str, Any] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    network: list[IPAddressAssignment] = field(default_factory=list)
    volumes: list[dict[str, Any]] = field(default_factory=list)
    os: OperatingSystem | None = None
    plan: dict[str, Any] | None = None
    facility: Facility | None = None
    project: dict[str, Any] | None = None
    provision_events: list[Event] = field(default_factory=list)
    provision_per: float = 0.0
    user_data: str = ""
    root_password: str = ""
    ipxe_script_url: str = ""
    always_pxe: bool = False
    hardware_reservation: Href = field(default_factory=Href)
    spot_instance: bool = False
    spot_price_max: float = 0.0
    termination_time: datetime | None = None
    network_ports: list[dict[str, Any]] = field(default_factory=list)
    custom_data: dict[str, Any] = field(default_factory=dict)
    ssh_keys: list[dict[str, Any]] = field(default_factory=list)
    network_type: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Device":
        """Decode a device; a document without an id gives an empty device.

        Raises NetworkTypeError when the device has no bonded port.
        """
        data = data or {}
        if not data.get("id"):
            return cls()
        ports = [dict(port) for port in data.get("network_ports") or []]
        network_type = get_network_type(ports)
        os_data = data.get("operating_system")
        facility = data.get("facility")
        plan = data.get("plan")
        project = data.get("project")
        return cls(
            id=data["id"],
            href=data.get("href") or "",
            hostname=data.get("hostname") or "",
            state=data.get("state") or "",
            created=data.get("created_at") or "",
            updated=data.get("updated_at") or "",
            locked=bool(data.get("locked")),
            billing_cycle=data.get("billing_cycle") or "",
            storage=dict(data.get("storage") or {}),
            tags=list(data.get("tags") or []),
            network=[IPAddressAssignment.from_dict(item) for item in data.get("ip_addresses") or []],
            volumes=[dict(item) for item in data.get("volumes") or []],
            os=OperatingSystem.from_dict(os_data) if os_data else None,
            plan=dict(plan) if plan else None,
            facility=Facility.from_dict(facility) if facility else None,
            project=dict(project) if project else None,
            provision_events=[
                Event.from_dict(item) for item in data.get("provisioning_events") or []
            ],
            provision_per=float(data.get("provisioning_percentage") or 0),
            user_data=data.get("userdata") or "",
            root_password=data.get("root_password") or "",
            ipxe_script_url=data.get("ipxe_script_url") or "",
            always_pxe=bool(data.get("always_pxe")),
            hardware_reservation=Href.from_dict(data.get("hardware_reservation")),
            spot_instance=bool(data.get("spot_instance")),
            spot_price_max=float(data.get("spot_price_max") or 0),
            termination_time=parse_timestamp(data.get("termination_time")),
            network_ports=ports,
            custom_data=dict(data.get("customdata") or {}),
            ssh_keys=[dict(item) for item in data.get("ssh_keys") or []],
            network_type=network_type,
        )


def _float_text(value: float) -> str:
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(float(value))


@dataclass
class DeviceCreateRequest:
    """The body of a request to create a device."""

    hostname: str = ""
    plan: str = ""
    facility: list[str] = field(default_factory=list)
    os: str = ""
    billing_cycle: str = ""
    project_id: str = ""
    user_data: str = ""
    storage: str = ""
    tags: list[str] = field(default_factory=list)
    ipxe_script_url: str = ""
    public_ipv4_subnet_size: int = 0
    always_pxe: bool = False
    hardware_reservation_id: str = ""
    spot_instance: bool = False
    spot_price_max: float = 0.0
    termination_time: datetime | None = None
    custom_data: str = ""
    user_ssh_keys: list[str] = field(default_factory=list)
    project_ssh_keys: list[str] = field(default_factory=list)
    features: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        body: dict[str, Any] = {
            "hostname": self.hostname,
            "plan": self.plan,
            "facility": list(self.facility),
            "operating_system": self.os,
            "billing_cycle": self.billing_cycle,
            "project_id": self.project_id,
            "userdata": self.user_data,
            "tags": list(self.tags),
        }
        optional: dict[str, Any] = {
            "storage": self.storage,
            "ipxe_script_url": self.ipxe_script_url,
            "public_ipv4_subnet_size": self.public_ipv4_subnet_size,
            "always_pxe": self.always_pxe,
            "hardware_reservation_id": self.hardware_reservation_id,
            "spot_instance": self.spot_instance,
            "spot_price_max": _float_text(self.spot_price_max) if self.spot_price_max else None,
            "termination_time": format_timestamp(self.termination_time),
            "customdata": self.custom_data,
            "user_ssh_keys": list(self.user_ssh_keys),
            "project_ssh_keys": list(self.project_ssh_keys),
            "features": dict(self.features),
        }
        body.update({name: value for name, value in optional.items() if value})
        return body


@dataclass
class DeviceUpdateRequest:
    """The body of a request to update a device; unset fields are left alone."""

    hostname: str | None = None
    description: str | None = None
    user_data: str | None = None
    locked: bool | None = None
    tags: list[str] | None = None
    always_pxe: bool | None = None
    ipxe_script_url: str | None = None
    custom_data: str | None = None

    def to_dict(self) -> dict:
        fields = {
            "hostname": self.hostname,
            "description": self.description,
            "userdata": self.user_data,
            "locked": self.locked,
            "tags": list(self.tags) if self.tags is not None else None,
            "always_pxe": self.always_pxe,
            "ipxe_script_url": self.ipxe_script_url,
            "customdata": self.custom_data,
        }
        return {name: value for name, value in fields.items() if value is not None}


class DeviceService:
    """Access to devices."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def list(self, project_id: str, list_options: ListOptions | None = None) -> list[Device]:
        """List the devices of a project, following pages."""
        options = ensure_list_include(list_options, "facility")
        path = f"{PROJECT_BASE_PATH}/{project_id}{DEVICE_BASE_PATH}"
        return [Device.from_dict(item) for item in fetch_all(self._requester, path, "devices", options)]

    def get(self, device_id: str, get_options: GetOptions | None = None) -> Device:
        options = ensure_get_include(get_options, "facility")
        path = f"{DEVICE_BASE_PATH}/{device_id}?{options.query()}"
        return Device.from_dict(self._requester.do_request("GET", path, None))

    def create(self, create_request: DeviceCreateRequest) -> Device:
        path = f"{PROJECT_BASE_PATH}/{create_request.project_id}{DEVICE_BASE_PATH}"
        return Device.from_dict(self._requester.do_request("POST", path, create_request.to_dict()))

    def update(self, device_id: str, update_request: DeviceUpdateRequest) -> Device:
        path = f"{DEVICE_BASE_PATH}/{device_id}?include=facility"
        return Device.from_dict(self._requester.do_request("PUT", path, update_request.to_dict()))

    def delete(self, device_id: str) -> None:
        self._requester.do_request("DELETE", f"{DEVICE_BASE_PATH}/{device_id}", None)

    def _action(self, device_id: str, action: str) -> None:
        path = f"{DEVICE_BASE_PATH}/{device_id}/actions"
        self._requester.do_request("POST", path, {"type": action})

    def reboot(self, device_id: str) -> None:
        self._action(device_id, "reboot")

    def power_off(self, device_id: str) -> None:
        self._action(device_id, "power_off")

    def power_on(self, device_id: str) -> None:
        self._action(device_id, "power_on")

    def lock(self, device_id: str) -> None:
        self._requester.do_request("PATCH", f"{DEVICE_BASE_PATH}/{device_id}", {"locked": True})

    def unlock(self, device_id: str) -> None:
        self._requester.do_request("PATCH", f"{DEVICE_BASE_PATH}/{device_id}", {"locked": False})

    def list_bgp_sessions(
        self, device_id: str, list_options: ListOptions | None = None
    ) -> list[BGPSession]:
        path = f"{DEVICE_BASE_PATH}/{device_id}{BGP_SESSION_BASE_PATH}"
        items = fetch_all(self._requester, path, "bgp_sessions", list_options)
        return [BGPSession.from_dict(item) for item in items]

    def list_events(self, device_id: str, list_options: ListOptions | None = None) -> list[Event]:
        path = f"{DEVICE_BASE_PATH}/{device_id}{EVENT_BASE_PATH}"
        return list_events(self._requester, path, list_options)