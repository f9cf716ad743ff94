"""Organizations and their payment methods and events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from metalclient.common import GetOptions, ListOptions, fetch_all
from metalclient.events import EVENT_BASE_PATH, Event, list_events
from metalclient.facilities import Address

ORGANIZATION_BASE_PATH = "/organizations"
PAYMENT_METHOD_BASE_PATH = "/payment-methods"


@dataclass
class Organization:
    """An organization; projects and members are kept as returned documents."""

    id: str = ""
    name: str = ""
    description: str = ""
    website: str = ""
    twitter: str = ""
    created: str = ""
    updated: str = ""
    address: Address = field(default_factory=Address)
    tax_id: str = ""
    main_phone: str = ""
    billing_phone: str = ""
    credit_amount: float = 0.0
    logo: str = ""
    logo_thumb: str = ""
    projects: list[dict[str, Any]] = field(default_factory=list)
    url: str = ""
    users: list[dict[str, Any]] = field(default_factory=list)
    owners: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "Organization":
        data = data or {}
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            description=data.get("description") or "",
            website=data.get("website") or "",
            twitter=data.get("twitter") or "",
            created=data.get("created_at") or "",
            updated=data.get("updated_at") or "",
            address=Address.from_dict(data.get("address")),
            tax_id=data.get("tax_id") or "",
            main_phone=data.get("main_phone") or "",
            billing_phone=data.get("billing_phone") or "",
            credit_amount=float(data.get("credit_amount") or 0),
            logo=data.get("logo") or "",
            logo_thumb=data.get("logo_thumb") or "",
            projects=[dict(item) for item in data.get("projects") or []],
            url=data.get("href") or "",
            users=[dict(item) for item in data.get("members") or []],
            owners=[dict(item) for item in data.get("owners") or []],
        )


@dataclass
class OrganizationCreateRequest:
    """The body of a request to create an organization."""

    name: str = ""
    description: str = ""
    website: str = ""
    twitter: str = ""
    logo: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "website": self.website,
            "twitter": self.twitter,
            "logo": self.logo,
        }


@dataclass
class OrganizationUpdateRequest:
    """The body of a request to update an organization; unset fields are left alone."""

    name: str | None = None
    description: str | None = None
    website: str | None = None
    twitter: str | None = None
    logo: str | None = None

    def to_dict(self) -> dict:
        fields = {
            "name": self.name,
            "description": self.description,
            "website": self.website,
            "twitter": self.twitter,
            "logo": self.logo,
        }
        return {name: value for name, value in fields.items() if value is not None}


class OrganizationService:
    """Access to organizations."""

    def __init__(self, requester: Any) -> None:
        self._requester = requester

    def list(self, list_options: ListOptions | None = None) -> list[Organization]:
        """List the user's organizations, following pages."""
        items = fetch_all(self._requester, ORGANIZATION_BASE_PATH, "organizations", list_options)
        return [Organization.from_dict(item) for item in items]

    def get(self, organization_id: str, get_options: GetOptions | None = None) -> Organization:
        params = get_options.query() if get_options is not None else ""
        path = f"{ORGANIZATION_BASE_PATH}/{organization_id}?{params}"
        return Organization.from_dict(self._requester.do_request("GET", path, None))

    def create(self, create_request: OrganizationCreateRequest) -> Organization:
        document = self._requester.do_request(
            "POST", ORGANIZATION_BASE_PATH, create_request.to_dict()
        )
        return Organization.from_dict(document)

    def update(
        self, organization_id: str, update_request: OrganizationUpdateRequest
    ) -> Organization:
        path = f"{ORGANIZATION_BASE_PATH}/{organization_id}"
        return Organization.from_dict(
            self._requester.do_request("PATCH", path, update_request.to_dict())
        )

    def delete(self, organization_id: str) -> None:
        self._requester.do_request("DELETE", f"{ORGANIZATION_BASE_PATH}/{organization_id}", None)

    def list_payment_methods(self, organization_id: str) -> list[dict[str, Any]]:
        """Return the payment method documents of an organization."""
        path = f"{ORGANIZATION_BASE_PATH}/{organization_id}{PAYMENT_METHOD_BASE_PATH}"
        document = self._requester.do_request("GET", path, None) or {}
        return [dict(item) for item in document.get("payment_methods") or []]

    def list_events(
        self, organization_id: str, list_options: ListOptions | None = None
    ) -> list[Event]:
        path = f"{ORGANIZATION_BASE_PATH}/{organization_id}{EVENT_BASE_PATH}"
        return list_events(self._requester, path, list_options)