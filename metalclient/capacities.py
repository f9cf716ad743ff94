"""Capacity of facilities for each plan."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CAPACITY_BASE_PATH = "/capacity"


@dataclass
class ServerInfo:
    """A number of servers of a plan in a facility."""

    facility: str = ""
    plan: str = ""
    quantity: int = 0
    available: bool = False

    def to_dict(self) -> dict:
        fields = {
            "facility": self.facility,
            "plan": self.plan,
            "quantity": self.quantity,
            "available": self.available,
        }
        return {name: value for name, value in fields.items() if value}

    @classmethod
    def from_dict(cls, data: dict | None) -> "ServerInfo":
        data = data or {}
        return cls(
            facility=data.get("facility") or "",
            plan=data.get("plan") or "",
            quantity=int(data.get("quantity") or 0),
            available=bool(data.get("available")),
        )


@dataclass
class CapacityInput:
    """The servers whose deployment is to be checked."""

    servers: list[ServerInfo] = field(default_factory=list)

    def to_dict(self) -> dict:
        if not self.servers:
            return {}
        return {"servers": [server.to_dict() for server in self.servers]}

    @classmethod
    def from_dict(cls, data: dict | None) -> "CapacityInput":
        data = data or {}
        return cls(servers=[ServerInfo.from_dict(item) for item in data.get("servers") or []])


@dataclass
class CapacityPerBaremetal:
    """The capacity level of one plan in one facility."""

    level: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "CapacityPerBaremetal":
        data = data or {}
        return cls(level=data.get("level") or "")


CapacityReport = dict[str, dict[str, CapacityPerBaremetal]]


class CapacityService:
    """Access to capacity reports and deployment checks."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def list(self) -> CapacityReport:
        """Return capacity levels by facility and then by plan."""
        document = self._requester.do_request("GET", CAPACITY_BASE_PATH, None) or {}
        return {
            facility: {
                plan: CapacityPerBaremetal.from_dict(level) for plan, level in (plans or {}).items()
            }
            for facility, plans in (document.get("capacity") or {}).items()
        }

    def check(self, capacity_input: CapacityInput) -> CapacityInput:
        """Ask whether the given servers could be deployed."""
        document = self._requester.do_request("POST", CAPACITY_BASE_PATH, capacity_input.to_dict())
        return CapacityInput.from_dict(document)