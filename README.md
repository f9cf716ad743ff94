# metalclient

A Python client for a bare-metal cloud REST API: devices, device batches,
IP reservations and assignments, BGP configs and sessions, capacity,
e-mail addresses, events, facilities, hardware reservations,
notifications, operating systems and organizations. It also reads the
instance metadata service from inside a running machine.

It has no runtime dependencies outside the standard library.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## How it fits together

Every service class takes a *requester*: any object with a
`do_request(method, path, body)` method that sends one API call and returns
the decoded JSON reply (or `None` for an empty reply).
`metalclient.common.Requester` is the one that comes with the package. It
sends JSON over `urllib`, puts the API token in the `X-Auth-Token` header,
and raises `metalclient.common.APIError` (with `status`, `errors`,
`method` and `url`) when the API answers with an error status.

```python
from metalclient.common import Requester, ListOptions
from metalclient.devices import DeviceService, DeviceCreateRequest

requester = Requester("https://api.example.com", auth_token="token")
devices = DeviceService(requester)

for device in devices.list("project-id", ListOptions(per_page=50)):
    print(device.hostname, device.state, device.network_type)

created = devices.create(DeviceCreateRequest(
    hostname="worker-1",
    plan="baremetal_0",
    facility=["ewr1"],
    os="ubuntu_16_04",
    billing_cycle="hourly",
    project_id="project-id",
))
devices.reboot(created.id)
```

Service methods return the decoded objects (dataclasses) directly; calls
that only act, such as `delete`, `reboot` or `lock`, return `None`.

`DeviceService.list`, `DeviceService.list_bgp_sessions`,
`DeviceService.list_events`, `EventService.list` and
`OrganizationService.list` follow the `meta.next` links of paged replies
until the last page, unless a particular page was asked for with
`ListOptions(page=...)`. Other list calls fetch a single page.
`GetOptions(includes=[...], excludes=[...])` and
`ListOptions(includes=[...], excludes=[...])` ask the API to embed or leave
out related resources. Device `get` and `list` always include `facility`.

Decoding a device works out its network type from the port named `bond0`;
a device document without such a port raises
`metalclient.devices.NetworkTypeError`.

The services, by module:

- `metalclient.devices`: `DeviceService`
- `metalclient.batches`: `BatchService`
- `metalclient.ip`: `DeviceIPService`, `ProjectIPService`
- `metalclient.bgp_configs`: `BGPConfigService`
- `metalclient.bgp_sessions`: `BGPSessionService`
- `metalclient.capacities`: `CapacityService`
- `metalclient.email`: `EmailService`
- `metalclient.events`: `EventService`
- `metalclient.facilities`: `FacilityService`
- `metalclient.hardware_reservations`: `HardwareReservationService`
- `metalclient.notifications`: `NotificationService`
- `metalclient.operatingsystems`: `OSService`
- `metalclient.organizations`: `OrganizationService`

`metalclient.common` also has `parse_timestamp` and `format_timestamp`
for RFC 3339 times, and `BillingAddress`.

## Instance metadata

From inside a machine, pass the address of the metadata service:

```python
from metalclient.metadata import get_metadata, get_user_data

device = get_metadata("http://metadata.example.com")
print(device.hostname, device.network.bonding_mode())
raw = get_user_data("http://metadata.example.com")
```

`get_metadata` returns a `CurrentDevice` with its operating system,
network interfaces and addresses (as `ipaddress` objects), bonding mode and
volumes. An error reported by the service, or an error status with a body
that is not JSON, is raised as `metalclient.metadata.MetadataError`.
`get_user_data` returns the raw bytes.

## What it does not do

There are no services for projects, users, SSH keys, volumes, plans,
payment methods or two-factor authentication. Where the API embeds such
resources in a reply (a device's plan, project, volumes and SSH keys, an
organization's projects and members, a BGP session's device, the result of
`OrganizationService.list_payment_methods`), they are kept as plain
dictionaries. There is no command-line tool.