"""E-mail addresses of the current user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from metalclient.common import GetOptions

EMAIL_BASE_PATH = "/emails"


@dataclass
class EmailRequest:
    """The body of a request to add or change an e-mail address."""

    address: str = ""
    default: bool | None = None

    def to_dict(self) -> dict:
        body: dict[str, Any] = {}
        if self.address:
            body["address"] = self.address
        if self.default is not None:
            body["default"] = self.default
        return body


@dataclass
class Email:
    """An e-mail address of the user."""

    id: str = ""
    address: str = ""
    default: bool = False
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Email":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            address=data.get("address") or "",
            default=bool(data.get("default")),
            url=data.get("href") or "",
        )


class EmailService:
    """Access to the current user's e-mail addresses."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def get(self, email_id: str, get_options: GetOptions | None = None) -> Email:
        params = get_options.query() if get_options is not None else ""
        path = f"{EMAIL_BASE_PATH}/{email_id}?{params}"
        return Email.from_dict(self._requester.do_request("GET", path, None))

    def create(self, request: EmailRequest) -> Email:
        return Email.from_dict(self._requester.do_request("POST", EMAIL_BASE_PATH, request.to_dict()))

    def update(self, email_id: str, request: EmailRequest) -> Email:
        path = f"{EMAIL_BASE_PATH}/{email_id}"
        return Email.from_dict(self._requester.do_request("PUT", path, request.to_dict()))

    def delete(self, email_id: str) -> None:
        self._requester.do_request("DELETE", f"{EMAIL_BASE_PATH}/{email_id}", None)