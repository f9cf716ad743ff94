import pytest

from metalclient.capacities import (
    CapacityInput,
    CapacityPerBaremetal,
    CapacityService,
    ServerInfo,
)
from metalclient.common import APIError


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


def test_check_capacity_flow():
    fake = FakeRequester(
        {"servers": [{"facility": "ams1", "plan": "baremetal_0", "quantity": 1, "available": True}]},
        {
            "capacity": {
                "ams1": {"baremetal_0": {"level": "normal"}, "baremetal_2a2": {"level": "normal"}},
                "sjc1": {"baremetal_2a2": {"level": "unavailable"}},
            }
        },
        {"servers": [{"facility": "sjc1", "plan": "baremetal_2a2", "quantity": 1}]},
    )
    service = CapacityService(fake)
    capacity_input = CapacityInput(servers=[ServerInfo(facility="ams1", plan="baremetal_0", quantity=1)])

    result = service.check(capacity_input)
    assert all(server.available for server in result.servers)
    assert fake.calls[0] == (
        "POST",
        "/capacity",
        {"servers": [{"facility": "ams1", "plan": "baremetal_0", "quantity": 1}]},
    )

    report = service.list()
    assert report["ams1"]["baremetal_0"] == CapacityPerBaremetal(level="normal")
    for facility, plans in report.items():
        if plans.get("baremetal_2a2", CapacityPerBaremetal()).level == "unavailable":
            capacity_input.servers[0].plan = "baremetal_2a2"
            capacity_input.servers[0].facility = facility
            break
    assert capacity_input.servers[0].facility == "sjc1"

    result = service.check(capacity_input)
    assert not any(server.available for server in result.servers)
    assert fake.calls[1] == ("GET", "/capacity", None)


def test_empty_input_serialises_to_empty_object():
    assert CapacityInput().to_dict() == {}


def test_server_info_round_trip():
    server = ServerInfo(facility="ewr1", plan="c1.small.x86", quantity=3, available=True)
    assert ServerInfo.from_dict(server.to_dict()) == server


def test_list_with_no_capacity():
    assert CapacityService(FakeRequester(None)).list() == {}


def test_check_error_propagates():
    with pytest.raises(APIError) as info:
        CapacityService(FakeRequester(APIError(500, ["boom"]))).check(CapacityInput())
    assert info.value.status == 500