"""
Access Key Operations.

Access key lifecycle built on hypermedia navigation: each operation starts
at the entry point, resolves the `accesskeys` relation, and acts on the URL
it finds there. Errors propagate unchanged; no partial results are returned.
"""

import json
from urllib.parse import SplitResult, urlsplit

from dsclient.core.exceptions import ValidationError
from dsclient.deviceserver.client import DeviceServerClient
from dsclient.deviceserver.models import AccessKey, AccessKeys

ACCESS_KEYS_REL = "accesskeys"
SELF_REL = "self"


async def create_access_key(client: DeviceServerClient, name: str) -> AccessKey:
    """
    Create a named access key.

    Raises:
        MissingRelationError: If the entry point has no `accesskeys` relation.
        ApplicationError: Any failure of the underlying GET or POST.
    """
    entry = await client.entry_point()
    access_keys = entry.links.get_link(ACCESS_KEYS_REL)

    body = json.dumps({"Name": name}, separators=(",", ":"))
    return await client.post(access_keys.href, AccessKey, body)


async def get_access_keys(client: DeviceServerClient) -> AccessKeys:
    """List the access keys known to the device server."""
    entry = await client.entry_point()
    access_keys = entry.links.get_link(ACCESS_KEYS_REL)
    return await client.get(access_keys.href, AccessKeys)


async def delete_access_key(client: DeviceServerClient, self_url: str) -> None:
    """Delete the access key addressed by its self link."""
    await client.delete(self_url)


def _split(url: str) -> SplitResult:
    try:
        return urlsplit(url)
    except ValueError as e:
        raise ValidationError(f"malformed URL {url!r}: {e}", details={"url": url}) from e


def _host_and_port(url: str) -> tuple[str | None, int | None]:
    parts = _split(url)
    try:
        port = parts.port
    except ValueError as e:
        raise ValidationError(f"invalid port in {url!r}", details={"url": url}) from e
    hostname = parts.hostname.lower() if parts.hostname else None
    return hostname, port


def validate_self_link(self_url: str, base_url: str) -> str:
    """
    Check that a self link points at the configured device server.

    The scheme must be http or https and the host (including any explicit
    port) must equal the base URL's.

    Returns:
        The self link, unchanged.

    Raises:
        ValidationError: If either URL is malformed or the link targets
            another host.
    """
    scheme = _split(self_url).scheme
    if scheme not in ("http", "https"):
        raise ValidationError(
            "Invalid scheme for self link",
            details={"self_url": self_url, "scheme": scheme},
        )
    if _host_and_port(self_url) != _host_and_port(base_url):
        raise ValidationError(
            "self link is not for this deviceserver",
            details={"self_url": self_url, "base_url": base_url},
        )
    return self_url
