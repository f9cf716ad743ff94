"""BGP configuration of projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from metalclient.bgp_sessions import BGPSession
from metalclient.common import GetOptions, parse_timestamp

BGP_CONFIG_BASE_PATH = "/bgp-config"
PROJECT_BASE_PATH = "/projects"


@dataclass
class CreateBGPConfigRequest:
    """The body of a request to enable BGP on a project."""

    deployment_type: str = ""
    asn: int = 0
    md5: str = ""
    use_case: str = ""

    def to_dict(self) -> dict:
        fields = {
            "deployment_type": self.deployment_type,
            "asn": self.asn,
            "md5": self.md5,
            "use_case": self.use_case,
        }
        return {name: value for name, value in fields.items() if value}


@dataclass
class BGPConfig:
    """The BGP configuration of a project; ``project`` holds the project document."""

    id: str = ""
    status: str = ""
    deployment_type: str = ""
    asn: int = 0
    route_object: str = ""
    md5: str = ""
    max_prefix: int = 0
    project: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    requested_at: datetime | None = None
    sessions: list[BGPSession] = field(default_factory=list)
    href: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "BGPConfig":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            status=data.get("status") or "",
            deployment_type=data.get("deployment_type") or "",
            asn=int(data.get("asn") or 0),
            route_object=data.get("route_object") or "",
            md5=data.get("md5") or "",
            max_prefix=int(data.get("max_prefix") or 0),
            project=dict(data.get("project") or {}),
            created_at=parse_timestamp(data.get("created_at")),
            requested_at=parse_timestamp(data.get("requested_at")),
            sessions=[BGPSession.from_dict(item) for item in data.get("sessions") or []],
            href=data.get("href") or "",
        )


class BGPConfigService:
    """Access to project BGP configuration."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def get(self, project_id: str, get_options: GetOptions | None = None) -> BGPConfig:
        params = get_options.query() if get_options is not None else ""
        path = f"{PROJECT_BASE_PATH}/{project_id}{BGP_CONFIG_BASE_PATH}?{params}"
        return BGPConfig.from_dict(self._requester.do_request("GET", path, None))

    def create(self, project_id: str, request: CreateBGPConfigRequest) -> None:
        path = f"{PROJECT_BASE_PATH}/{project_id}{BGP_CONFIG_BASE_PATH}s"
        self._requester.do_request("POST", path, request.to_dict())