"""Reading the metadata a device is given about itself."""

from __future__ import annotations

import enum
import ipaddress
import json
import string
from dataclasses import dataclass, field
from typing import Any
from urllib.error import HTTPError
from urllib.request import urlopen

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


class MetadataError(Exception):
    """Raised when the metadata service reports an error."""


class AddressFamily(enum.IntEnum):
    IPV4 = 4
    IPV6 = 6


class BondingMode(enum.IntEnum):
    BALANCE_RR = 0
    ACTIVE_BACKUP = 1
    BALANCE_XOR = 2
    BROADCAST = 3
    LACP = 4
    BALANCE_TLB = 5
    BALANCE_ALB = 6

    @classmethod
    def _missing_(cls, value: object) -> "BondingMode | None":
        if isinstance(value, int) and not isinstance(value, bool):
            member = int.__new__(cls, value)
            member._name_ = str(value)
            member._value_ = value
            return member
        return None

    def __str__(self) -> str:
        return _BONDING_LABELS.get(int(self), str(int(self)))


_BONDING_LABELS = {
    0: "balance-rr",
    1: "active-backup",
    2: "balance-xor",
    3: "broadcast",
    4: "802.3ad",
    5: "balance-tlb",
    6: "balance-alb",
}


def _ip(value: str | None) -> IPAddress | None:
    if not value:
        return None
    return ipaddress.ip_address(value)


def _family(value: Any) -> AddressFamily | int:
    number = int(value or 0)
    try:
        return AddressFamily(number)
    except ValueError:
        return number


@dataclass
class AddressInfo:
    """An address configured on the device."""

    id: str = ""
    family: AddressFamily | int = 0
    public: bool = False
    management: bool = False
    address: IPAddress | None = None
    netmask: IPAddress | None = None
    gateway: IPAddress | None = None
    network_bits: int = 0

    @classmethod
    def from_dict(cls, data: dict | None) -> "AddressInfo":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            family=_family(data.get("address_family")),
            public=bool(data.get("public")),
            management=bool(data.get("management")),
            address=_ip(data.get("address")),
            netmask=_ip(data.get("netmask")),
            gateway=_ip(data.get("gateway")),
            network_bits=int(data.get("cidr") or 0),
        )


def _parse_mac(text: str) -> bytes:
    if len(text) >= 14 and text[2] in ":-":
        groups, width = text.split(text[2]), 2
    elif len(text) >= 14 and text[4] == ".":
        groups, width = text.split("."), 4
    else:
        raise ValueError(f"invalid MAC address: {text!r}")
    if any(len(group) != width or not all(c in string.hexdigits for c in group) for group in groups):
        raise ValueError(f"invalid MAC address: {text!r}")
    result = bytes.fromhex("".join(groups))
    if len(result) not in (6, 8, 20):
        raise ValueError(f"invalid MAC address: {text!r}")
    return result


@dataclass
class InterfaceInfo:
    """A network interface of the device."""

    name: str = ""
    mac: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "InterfaceInfo":
        data = data or {}
        return cls(name=data.get("name") or "", mac=data.get("mac") or "")

    def parse_mac(self) -> bytes:
        """Return the hardware address as bytes; raise ValueError if malformed."""
        return _parse_mac(self.mac)


@dataclass
class NetworkInfo:
    """Network configuration of the device."""

    interfaces: list[InterfaceInfo] = field(default_factory=list)
    addresses: list[AddressInfo] = field(default_factory=list)
    bonding: BondingMode = BondingMode.BALANCE_RR

    @classmethod
    def from_dict(cls, data: dict | None) -> "NetworkInfo":
        data = data or {}
        bonding = data.get("bonding") or {}
        return cls(
            interfaces=[InterfaceInfo.from_dict(item) for item in data.get("interfaces") or []],
            addresses=[AddressInfo.from_dict(item) for item in data.get("addresses") or []],
            bonding=BondingMode(int(bonding.get("mode") or 0)),
        )

    def bonding_mode(self) -> BondingMode:
        return self.bonding


@dataclass
class OperatingSystemInfo:
    """The operating system installed on the device."""

    slug: str = ""
    distro: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "OperatingSystemInfo":
        data = data or {}
        return cls(
            slug=data.get("slug") or "",
            distro=data.get("distro") or "",
            version=data.get("version") or "",
        )


@dataclass
class VolumeInfo:
    """A storage volume attached to the device."""

    name: str = ""
    iqn: str = ""
    ips: list[IPAddress] = field(default_factory=list)
    capacity_size: int = 0
    capacity_unit: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "VolumeInfo":
        data = data or {}
        capacity = data.get("capacity") or {}
        size = capacity.get("size")
        return cls(
            name=data.get("name") or "",
            iqn=data.get("iqn") or "",
            ips=[ipaddress.ip_address(item) for item in data.get("ips") or []],
            capacity_size=int(size) if size not in (None, "") else 0,
            capacity_unit=capacity.get("unit") or "",
        )


@dataclass
class CurrentDevice:
    """Everything the metadata service says about this device."""

    id: str = ""
    hostname: str = ""
    iqn: str = ""
    plan: str = ""
    facility: str = ""
    tags: list[str] = field(default_factory=list)
    ssh_keys: list[str] = field(default_factory=list)
    os: OperatingSystemInfo = field(default_factory=OperatingSystemInfo)
    network: NetworkInfo = field(default_factory=NetworkInfo)
    volumes: list[VolumeInfo] = field(default_factory=list)
    custom_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict | None) -> "CurrentDevice":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            hostname=data.get("hostname") or "",
            iqn=data.get("iqn") or "",
            plan=data.get("plan") or "",
            facility=data.get("facility") or "",
            tags=list(data.get("tags") or []),
            ssh_keys=list(data.get("ssh_keys") or []),
            os=OperatingSystemInfo.from_dict(data.get("operating_system")),
            network=NetworkInfo.from_dict(data.get("network")),
            volumes=[VolumeInfo.from_dict(item) for item in data.get("volumes") or []],
            custom_data=dict(data.get("customdata") or {}),
        )


def _fetch(url: str) -> tuple[int, str, bytes]:
    try:
        with urlopen(url) as response:
            return response.status, response.reason, response.read()
    except HTTPError as exc:
        try:
            return exc.code, exc.reason, exc.read()
        finally:
            exc.close()


def get_metadata(base_url: str) -> CurrentDevice:
    """Fetch and decode the device metadata from the service at ``base_url``."""
    status, reason, body = _fetch(base_url.rstrip("/") + "/metadata")
    try:
        document = json.loads(body)
        if not isinstance(document, dict):
            raise ValueError("metadata document is not a JSON object")
    except ValueError:
        if status >= 400:
            raise MetadataError(f"{status} {reason}") from None
        raise
    error = document.get("error")
    if error:
        raise MetadataError(str(error))
    return CurrentDevice.from_dict(document)


def get_user_data(base_url: str) -> bytes:
    """Fetch the raw user data from the service at ``base_url``."""
    return _fetch(base_url.rstrip("/") + "/userdata")[2]