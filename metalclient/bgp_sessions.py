"""BGP sessions of devices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from metalclient.common import GetOptions

BGP_SESSION_BASE_PATH = "/bgp/sessions"
DEVICE_BASE_PATH = "/devices"


@dataclass
class BGPSession:
    """A BGP session; ``device`` holds the device document as returned."""

    id: str = ""
    status: str = ""
    learned_routes: list[str] = field(default_factory=list)
    address_family: str = ""
    device: dict[str, Any] = field(default_factory=dict)
    href: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "BGPSession":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            status=data.get("status") or "",
            learned_routes=list(data.get("learned_routes") or []),
            address_family=data.get("address_family") or "",
            device=dict(data.get("device") or {}),
            href=data.get("href") or "",
        )


@dataclass
class CreateBGPSessionRequest:
    """The body of a request to open a BGP session."""

    address_family: str = ""

    def to_dict(self) -> dict:
        return {"address_family": self.address_family}


class BGPSessionService:
    """Access to BGP sessions."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def create(self, device_id: str, request: CreateBGPSessionRequest) -> BGPSession:
        path = f"{DEVICE_BASE_PATH}/{device_id}{BGP_SESSION_BASE_PATH}"
        return BGPSession.from_dict(self._requester.do_request("POST", path, request.to_dict()))

    def delete(self, session_id: str) -> None:
        self._requester.do_request("DELETE", f"{BGP_SESSION_BASE_PATH}/{session_id}", None)

    def get(self, session_id: str, get_options: GetOptions | None = None) -> BGPSession:
        params = get_options.query() if get_options is not None else ""
        path = f"{BGP_SESSION_BASE_PATH}/{session_id}?{params}"
        return BGPSession.from_dict(self._requester.do_request("GET", path, None))