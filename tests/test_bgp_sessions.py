import pytest

from metalclient.bgp_sessions import BGPSession, BGPSessionService, CreateBGPSessionRequest
from metalclient.common import APIError, GetOptions


class FakeRequester:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def do_request(self, method, path, body):
        self.calls.append((method, path, body))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_create_get_delete_session():
    session_doc = {
        "id": "s1",
        "status": "up",
        "address_family": "ipv4",
        "learned_routes": ["10.0.0.0/8"],
        "device": {"id": "d1", "href": "/devices/d1"},
        "href": "/bgp/sessions/s1",
    }
    fake = FakeRequester(session_doc, session_doc, None, APIError(404, ["Not found"]))
    service = BGPSessionService(fake)

    session = service.create("d1", CreateBGPSessionRequest(address_family="ipv4"))
    assert session.id == "s1"
    assert session.device["id"] == "d1"
    assert session.learned_routes == ["10.0.0.0/8"]

    assert service.get("s1", GetOptions(includes=["device"])).status == "up"
    service.delete("s1")
    with pytest.raises(APIError):
        service.get("s1")

    assert fake.calls == [
        ("POST", "/devices/d1/bgp/sessions", {"address_family": "ipv4"}),
        ("GET", "/bgp/sessions/s1?include=device", None),
        ("DELETE", "/bgp/sessions/s1", None),
        ("GET", "/bgp/sessions/s1?", None),
    ]


def test_session_from_empty_document():
    session = BGPSession.from_dict(None)
    assert session.id == ""
    assert session.device == {}
    assert session.learned_routes == []


def test_create_request_always_has_family():
    assert CreateBGPSessionRequest().to_dict() == {"address_family": ""}