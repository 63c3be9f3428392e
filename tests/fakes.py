"""
Test Doubles.

FakeDeviceServer is an in-process device server mounted on
httpx.MockTransport. It records every request so tests can assert on
methods, URLs, headers and bodies without any network access.
"""

from typing import Any

import httpx

TEST_BASE_URL = "http://ds.test/"
TEST_PSK = "test-psk-that-is-long-enough-for-hs256-signing"


class FakeDeviceServer:
    """
    Routes (method, absolute URL) pairs to canned JSON responses.

    Unrouted requests get a 404.

    Usage:
        server = FakeDeviceServer()
        server.add("GET", "http://ds.test/", json={"Links": [...]})
        client = DeviceServerClient(config, transport=server.transport)
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], dict[str, Any]] = {}
        self.transport = httpx.MockTransport(self._handle)

    def add(
        self,
        method: str,
        url: str,
        status_code: int = 200,
        json: Any = None,
        content: bytes | None = None,
        error: Exception | None = None,
    ) -> None:
        self._routes[(method, url)] = {
            "status_code": status_code,
            "json": json,
            "content": content,
            "error": error,
        }

    def calls(self, method: str | None = None) -> list[httpx.Request]:
        if method is None:
            return list(self.requests)
        return [r for r in self.requests if r.method == method]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if route["error"] is not None:
            raise route["error"]
        if route["content"] is not None:
            return httpx.Response(route["status_code"], content=route["content"])
        if route["json"] is None:
            return httpx.Response(route["status_code"])
        return httpx.Response(route["status_code"], json=route["json"])


def entry_point_document(base_url: str = TEST_BASE_URL) -> dict[str, Any]:
    """Entry point as the device server sends it: links in list form."""
    return {
        "Links": [
            {"rel": "self", "href": base_url},
            {"rel": "accesskeys", "href": f"{base_url}keys"},
        ]
    }


def access_key_document(name: str, key_id: int = 1, base_url: str = TEST_BASE_URL) -> dict[str, Any]:
    return {
        "Name": name,
        "Key": f"key-{key_id}",
        "Secret": f"secret-{key_id}",
        "Links": [{"rel": "self", "href": f"{base_url}keys/{key_id}"}],
    }
