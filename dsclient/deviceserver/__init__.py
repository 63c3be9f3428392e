"""
Device Server Client.

Authorized hypermedia client for the device server API.

Components:
- signer:  short-lived bearer tokens (JWT, HMAC)
- hateoas: relation name to URL resolution
- cache:   time-bounded response cache
- client:  request pipeline (auth, status handling, JSON decoding)
- keys:    access key operations

Usage:
    from dsclient.deviceserver import ClientConfig, DeviceServerClient
    from dsclient.deviceserver.keys import create_access_key

    async with DeviceServerClient(ClientConfig(base_url=url, psk=psk)) as client:
        key = await create_access_key(client, "ci-runner")
"""

from dsclient.deviceserver.client import ClientConfig, DeviceServerClient

__all__ = [
    "ClientConfig",
    "DeviceServerClient",
]
