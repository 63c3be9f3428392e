"""
Integration Test Fixtures.

A stateful in-memory device server: access keys created through it can be
listed and deleted again, so whole workflows run against one server.
"""

import itertools
import json
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from jose import JWTError, jwt

from dsclient.deviceserver.client import ClientConfig, DeviceServerClient
from tests.fakes import TEST_BASE_URL, TEST_PSK


class InMemoryDeviceServer:
    """
    Serves the entry point and the access key collection.

    Requests without a valid bearer token signed with TEST_PSK get a 401.
    """

    def __init__(self, base_url: str = TEST_BASE_URL) -> None:
        self.base_url = base_url
        self.keys: dict[int, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)
        self.transport = httpx.MockTransport(self._handle)

    def _key_url(self, key_id: int) -> str:
        return f"{self.base_url}keys/{key_id}"

    def _public(self, key_id: int) -> dict[str, Any]:
        key = self.keys[key_id]
        return {
            "Name": key["Name"],
            "Key": key["Key"],
            "Links": [{"rel": "self", "href": self._key_url(key_id)}],
        }

    def _authorized(self, request: httpx.Request) -> bool:
        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        if scheme != "Bearer":
            return False
        try:
            jwt.decode(token, TEST_PSK, algorithms=["HS256"])
        except JWTError:
            return False
        return True

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._authorized(request):
            return httpx.Response(401, json={"error": "unauthorized"})

        path = request.url.path
        if request.method == "GET" and path == "/":
            return httpx.Response(200, json={
                "Links": [
                    {"rel": "self", "href": self.base_url},
                    {"rel": "accesskeys", "href": "/keys", "methods": ["GET", "POST"]},
                ]
            })
        if path == "/keys":
            if request.method == "GET":
                return httpx.Response(200, json={"Items": [self._public(i) for i in self.keys]})
            if request.method == "POST":
                body = json.loads(request.content)
                key_id = next(self._ids)
                self.keys[key_id] = {"Name": body["Name"], "Key": f"key-{key_id}", "Secret": f"secret-{key_id}"}
                return httpx.Response(201, json={**self._public(key_id), "Secret": f"secret-{key_id}"})
        if path.startswith("/keys/") and request.method == "DELETE":
            key_id = int(path.rsplit("/", 1)[1])
            if self.keys.pop(key_id, None) is None:
                return httpx.Response(404, json={"error": "no such key"})
            return httpx.Response(204)
        if request.method == "GET" and path == "/broken":
            return httpx.Response(500, json={"error": "internal"})
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def device_server() -> InMemoryDeviceServer:
    return InMemoryDeviceServer()


@pytest.fixture
async def server_client(
    device_server: InMemoryDeviceServer,
) -> AsyncGenerator[DeviceServerClient, None]:
    config = ClientConfig(base_url=TEST_BASE_URL, psk=TEST_PSK, cache_sweep_interval_seconds=0)
    client = DeviceServerClient(config, transport=device_server.transport)
    yield client
    await client.aclose()
