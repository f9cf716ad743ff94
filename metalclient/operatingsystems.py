"""Operating systems available for provisioning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

OS_BASE_PATH = "/operating-systems"


@dataclass
class OperatingSystem:
    """An operating system."""

    name: str = ""
    slug: str = ""
    distro: str = ""
    version: str = ""
    provisionable_on: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "OperatingSystem":
        data = data or {}
        return cls(
            name=data.get("name") or "",
            slug=data.get("slug") or "",
            distro=data.get("distro") or "",
            version=data.get("version") or "",
            provisionable_on=list(data.get("provisionable_on") or []),
        )


class OSService:
    """Access to operating systems."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def list(self) -> list[OperatingSystem]:
        document = self._requester.do_request("GET", OS_BASE_PATH, None) or {}
        return [OperatingSystem.from_dict(item) for item in document.get("operating_systems") or []]