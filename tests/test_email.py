import pytest

from metalclient.common import APIError
from metalclient.email import Email, EmailRequest, EmailService


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


def test_create_get_update_delete_email():
    original = "first@example.com"
    updated = "second@example.com"
    fake = FakeRequester(
        {"id": "e1", "address": original, "href": "/emails/e1"},
        {"id": "e1", "address": original},
        {"id": "e1", "address": updated, "default": True},
        None,
    )
    service = EmailService(fake)

    req = EmailRequest(address=original)
    ret = service.create(req)
    assert ret.address == req.address
    assert ret.url == "/emails/e1"

    email = service.get(ret.id)
    assert email.id == "e1"

    req.address = updated
    ret = service.update(email.id, req)
    assert ret.address == updated
    assert ret.default is True

    service.delete(email.id)
    assert fake.calls == [
        ("POST", "/emails", {"address": original}),
        ("GET", "/emails/e1?", None),
        ("PUT", "/emails/e1", {"address": updated}),
        ("DELETE", "/emails/e1", None),
    ]


def test_request_default_flag_included_only_when_set():
    assert EmailRequest(address="a@example.com", default=False).to_dict() == {
        "address": "a@example.com",
        "default": False,
    }
    assert EmailRequest().to_dict() == {}


def test_email_from_empty_document():
    assert Email.from_dict(None) == Email()


def test_get_error_propagates():
    with pytest.raises(APIError) as info:
        EmailService(FakeRequester(APIError(404, ["Not found"]))).get("missing")
    assert info.value.errors == ["Not found"]