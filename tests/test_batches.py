from datetime import datetime, timezone

from metalclient.batches import Batch, BatchCreateDevice, BatchCreateRequest, BatchService
from metalclient.common import GetOptions
from metalclient.devices import DeviceCreateRequest


class FakeRequester:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def do_request(self, method, path, body):
        self.calls.append((method, path, body))
        return self.responses.pop(0) if self.responses else None


PORTS = [{"name": "bond0", "network_type": "layer3"}]


def make_request():
    return BatchCreateRequest(
        batches=[
            BatchCreateDevice(
                device=DeviceCreateRequest(
                    hostname="test1",
                    plan="baremetal_0",
                    os="ubuntu_16_04",
                    facility=["ewr1"],
                    billing_cycle="hourly",
                    tags=["abc"],
                ),
                quantity=3,
            )
        ]
    )


def test_create_request_body_is_flat():
    body = make_request().to_dict()
    entry = body["batches"][0]
    assert entry["hostname"] == "test1"
    assert entry["plan"] == "baremetal_0"
    assert entry["operating_system"] == "ubuntu_16_04"
    assert entry["facility"] == ["ewr1"]
    assert entry["billing_cycle"] == "hourly"
    assert entry["tags"] == ["abc"]
    assert entry["quantity"] == 3
    assert "facility_diversity_level" not in entry


def test_facility_diversity_level_included_when_set():
    entry = BatchCreateDevice(quantity=2, facility_diversity_level=1).to_dict()
    assert entry["facility_diversity_level"] == 1
    assert entry["quantity"] == 2


def test_create():
    requester = FakeRequester({"batches": [{"id": "batch-1", "quantity": 3}]})
    batches = BatchService(requester).create("proj-1", make_request())
    assert [b.id for b in batches] == ["batch-1"]
    assert batches[0].quantity == 3
    method, path, body = requester.calls[0]
    assert (method, path) == ("POST", "/projects/proj-1/devices/batch")
    assert body["batches"][0]["quantity"] == 3


def test_list():
    requester = FakeRequester({"batches": [{"id": "b1"}, {"id": "b2"}]})
    batches = BatchService(requester).list("proj-1")
    assert [b.id for b in batches] == ["b1", "b2"]
    assert requester.calls[0][:2] == ("GET", "/projects/proj-1/batches?")


def test_get_with_devices():
    doc = {
        "id": "batch-1",
        "state": "completed",
        "created_at": "2019-01-02T03:04:05Z",
        "project": {"href": "/projects/proj-1"},
        "devices": [
            {"id": "d1", "network_ports": PORTS},
            {"id": "d2", "network_ports": PORTS},
        ],
    }
    requester = FakeRequester(doc)
    batch = BatchService(requester).get("batch-1", GetOptions(includes=["devices"]))
    assert requester.calls[0][:2] == ("GET", "/batches/batch-1?include=devices")
    assert batch.state == "completed"
    assert batch.created_at == datetime(2019, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert batch.project.href == "/projects/proj-1"
    assert [d.id for d in batch.devices] == ["d1", "d2"]
    assert batch.devices[0].network_type == "layer3"


def test_delete_flag():
    requester = FakeRequester()
    service = BatchService(requester)
    service.delete("batch-1", True)
    service.delete("batch-2", False)
    assert requester.calls == [
        ("DELETE", "/batches/batch-1?remove_associated_instances=true", None),
        ("DELETE", "/batches/batch-2?remove_associated_instances=false", None),
    ]


def test_empty_batch_document():
    assert Batch.from_dict(None) == Batch()