"""Shared plumbing: the HTTP requester, request options, pagination and timestamps."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

AUTH_HEADER = "X-Auth-Token"


class APIError(Exception):
    """Raised when the API answers a request with an error status."""

    def __init__(self, status: int, errors: list[str], method: str = "", url: str = "") -> None:
        self.status = status
        self.errors = list(errors)
        self.method = method
        self.url = url
        detail = ", ".join(self.errors) or "request failed"
        super().__init__(f"{method} {url}: {status} {detail}".strip())


def _error_messages(raw: bytes, reason: str) -> list[str]:
    try:
        document = json.loads(raw) if raw.strip() else None
    except ValueError:
        document = None
    if isinstance(document, dict):
        errors = document.get("errors")
        if isinstance(errors, list) and errors:
            return [str(error) for error in errors]
        error = document.get("error")
        if error:
            return [str(error)]
    return [str(reason)] if reason else []


class Requester:
    """Sends JSON requests to the API and decodes JSON answers."""

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        *,
        timeout: float = 30.0,
        user_agent: str = "metalclient",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = timeout
        self.user_agent = user_agent

    def _url(self, path: str) -> str:
        if "://" in path:
            return path
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    def do_request(self, method: str, path: str, body: Any = None) -> Any:
        """Send a request; return the decoded JSON answer, or None if it is empty."""
        url = self._url(path)
        headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        if self.auth_token:
            headers[AUTH_HEADER] = self.auth_token
        data = None
        if body is not None:
            payload = body.to_dict() if hasattr(body, "to_dict") else body
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        request = Request(url, data=data, headers=headers, method=method)
        try:
            with urlopen(request, timeout=self.timeout) as response:
                raw = response.read()
        except HTTPError as exc:
            try:
                raw = exc.read()
            finally:
                exc.close()
            raise APIError(exc.code, _error_messages(raw, exc.reason), method, url) from None
        if not raw.strip():
            return None
        return json.loads(raw)


def _encode(params: list[tuple[str, Any]]) -> str:
    return urlencode(params, safe=",")


@dataclass
class ListOptions:
    """Query options for listing requests."""

    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)
    page: int = 0
    per_page: int = 0

    def query(self) -> str:
        params: list[tuple[str, Any]] = []
        if self.includes:
            params.append(("include", ",".join(self.includes)))
        if self.excludes:
            params.append(("exclude", ",".join(self.excludes)))
        if self.page:
            params.append(("page", self.page))
        if self.per_page:
            params.append(("per_page", self.per_page))
        return _encode(params)


@dataclass
class GetOptions:
    """Query options for single-resource requests."""

    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)

    def query(self) -> str:
        params: list[tuple[str, Any]] = []
        if self.includes:
            params.append(("include", ",".join(self.includes)))
        if self.excludes:
            params.append(("exclude", ",".join(self.excludes)))
        return _encode(params)


def ensure_list_include(options: ListOptions | None, name: str) -> ListOptions:
    """Return list options that include ``name``, leaving the given ones untouched."""
    if options is None:
        return ListOptions(includes=[name])
    if name in options.includes:
        return options
    return replace(options, includes=[*options.includes, name])


def ensure_get_include(options: GetOptions | None, name: str) -> GetOptions:
    """Return get options that include ``name``, leaving the given ones untouched."""
    if options is None:
        return GetOptions(includes=[name])
    if name in options.includes:
        return options
    return replace(options, includes=[*options.includes, name])


@dataclass
class Href:
    """A reference to another resource."""

    href: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Href":
        if not data:
            return cls()
        return cls(href=data.get("href") or "")


def fetch_all(
    requester: Any, path: str, key: str, list_options: ListOptions | None = None
) -> list[dict]:
    """GET ``path`` and follow ``meta.next`` links, collecting the items under ``key``.

    Links are followed only when no explicit page was asked for.
    """
    params = list_options.query() if list_options is not None else ""
    path = f"{path}?{params}"
    items: list[dict] = []
    while True:
        document = requester.do_request("GET", path, None) or {}
        items.extend(document.get(key) or [])
        next_link = (document.get("meta") or {}).get("next")
        if next_link and (list_options is None or not list_options.page):
            path = next_link.get("href") or ""
            if params:
                path = f"{path}&{params}"
            continue
        return items


_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an RFC 3339 timestamp; empty values give None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {value!r}") from exc


def format_timestamp(value: datetime | None) -> str | None:
    """Format a datetime as RFC 3339; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


@dataclass
class BillingAddress:
    """A billing address."""

    street_address: str = ""
    postal_code: str = ""
    country_code: str = ""

    def to_dict(self) -> dict:
        fields = {
            "street_address": self.street_address,
            "postal_code": self.postal_code,
            "country_code_alpha2": self.country_code,
        }
        return {name: value for name, value in fields.items() if value}

    @classmethod
    def from_dict(cls, data: dict | None) -> "BillingAddress":
        data = data or {}
        return cls(
            street_address=data.get("street_address") or "",
            postal_code=data.get("postal_code") or "",
            country_code=data.get("country_code_alpha2") or "",
        )