import ipaddress
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from metalclient.metadata import (
    AddressFamily,
    BondingMode,
    CurrentDevice,
    InterfaceInfo,
    MetadataError,
    NetworkInfo,
    get_metadata,
    get_user_data,
)

DEVICE_DOCUMENT = {
    "id": "00000000-0000-4000-8000-000000000001",
    "hostname": "spcqvzylz6-worker-2409003",
    "iqn": "iqn.2019-01.com.example:device.00000001",
    "operating_system": {"slug": "ubuntu_18_04", "distro": "ubuntu", "version": "18.04"},
    "plan": "baremetal_0",
    "facility": "ewr1",
    "tags": ["worker"],
    "ssh_keys": ["ssh-rsa placeholder"],
    "network": {
        "bonding": {"mode": 4},
        "interfaces": [{"name": "eth0", "mac": "02:00:00:00:00:01"}],
        "addresses": [
            {
                "id": "addr-1",
                "address_family": 4,
                "netmask": "255.255.255.254",
                "public": True,
                "management": True,
                "address": "192.0.2.1",
                "gateway": "192.0.2.0",
                "cidr": 31,
            }
        ],
    },
    "volumes": [
        {
            "name": "volume-b7f8e13c",
            "iqn": "iqn.2013-05.com.example:tc:01:sn:0000000000000001",
            "ips": ["10.144.35.132", "10.144.51.11"],
            "capacity": {"size": "10", "unit": "gb"},
        }
    ],
    "customdata": {"hello": "world"},
}


def _server(routes):
    class Handler(BaseHTTPRequestHandler):
        def log_message(self, *args):
            pass

        def do_GET(self):
            status, body = routes.get(self.path, (404, b"404 page not found"))
            self.send_response(status)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    server.daemon_threads = True
    threading.Thread(target=server.serve_forever, daemon=True).start()
    return server


@pytest.fixture
def serve():
    servers = []

    def start(routes):
        server = _server(routes)
        servers.append(server)
        return f"http://127.0.0.1:{server.server_address[1]}"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


def test_deserialization(serve):
    base_url = serve({"/metadata": (200, json.dumps(DEVICE_DOCUMENT).encode())})
    device = get_metadata(base_url)
    assert device.id == "00000000-0000-4000-8000-000000000001"
    assert device.hostname == "spcqvzylz6-worker-2409003"
    volumes = device.volumes
    assert len(volumes) == 1
    assert volumes[0].name == "volume-b7f8e13c"
    assert volumes[0].iqn == "iqn.2013-05.com.example:tc:01:sn:0000000000000001"
    assert len(volumes[0].ips) == 2
    assert str(volumes[0].ips[0]) == "10.144.35.132"
    assert str(volumes[0].ips[1]) == "10.144.51.11"
    assert volumes[0].capacity_size == 10
    assert volumes[0].capacity_unit == "gb"


def test_network_details(serve):
    base_url = serve({"/metadata": (200, json.dumps(DEVICE_DOCUMENT).encode())})
    device = get_metadata(base_url)
    address = device.network.addresses[0]
    assert address.family is AddressFamily.IPV4
    assert address.address == ipaddress.ip_address("192.0.2.1")
    assert address.network_bits == 31
    assert device.network.bonding_mode() is BondingMode.LACP
    assert device.os.distro == "ubuntu"
    assert device.custom_data == {"hello": "world"}


def test_error_field_raises(serve):
    base_url = serve({"/metadata": (200, json.dumps({"error": "Not found"}).encode())})
    with pytest.raises(MetadataError, match="Not found"):
        get_metadata(base_url)


def test_http_error_without_json(serve):
    base_url = serve({})
    with pytest.raises(MetadataError) as info:
        get_metadata(base_url)
    assert str(info.value) == "404 Not Found"


def test_invalid_json_with_ok_status(serve):
    base_url = serve({"/metadata": (200, b"not json")})
    with pytest.raises(ValueError):
        get_metadata(base_url)


def test_user_data(serve):
    base_url = serve({"/userdata": (200, b"#!/bin/sh\necho hi\n")})
    assert get_user_data(base_url) == b"#!/bin/sh\necho hi\n"


def test_bonding_mode_strings():
    assert str(BondingMode.LACP) == "802.3ad"
    assert str(BondingMode.BALANCE_RR) == "balance-rr"
    assert str(BondingMode(9)) == "9"
    assert NetworkInfo.from_dict({"bonding": {"mode": 1}}).bonding_mode() == BondingMode.ACTIVE_BACKUP


def test_parse_mac():
    assert InterfaceInfo("eth0", "02:00:00:00:00:01").parse_mac() == bytes([2, 0, 0, 0, 0, 1])
    assert InterfaceInfo("eth0", "0200.0000.0001").parse_mac() == bytes([2, 0, 0, 0, 0, 1])
    with pytest.raises(ValueError):
        InterfaceInfo("eth0", "not-a-mac").parse_mac()
    with pytest.raises(ValueError):
        InterfaceInfo("eth0", "02:00:00:00:00:zz").parse_mac()


def test_empty_document_defaults():
    device = CurrentDevice.from_dict({})
    assert device.volumes == []
    assert device.network.bonding_mode() is BondingMode.BALANCE_RR