"""
Device Server HTTP Client.

Executes authorized requests against the device server and decodes the JSON
responses into typed results.

Every request follows the same pipeline:
    1. Build the request and merge caller headers over the verb defaults
    2. Sign a fresh organization claim and attach it as a bearer token
    3. Send it (network failures become TransportError, never retried)
    4. Treat any status >= 400 as HTTPStatusError
    5. Decode the body as JSON into the caller's result type
    6. GET only: remember a copy of the decoded document in the response cache;
       POST and DELETE drop the cached documents they make stale

Each attempt is reported to the logger with its method, URL and outcome.

Usage:
    config = ClientConfig(base_url="https://deviceserver.example/", psk=psk)
    async with DeviceServerClient(config) as client:
        entry = await client.entry_point()
        keys = await client.get(entry.links.get_link("accesskeys").href, AccessKeys)
"""

import copy
import json
from datetime import timedelta
from functools import lru_cache
from typing import Any, TypeVar

import httpx
import pydantic
from pydantic import BaseModel, ConfigDict, Field

from dsclient.core.exceptions import (
    AuthError,
    ConfigError,
    DecodeError,
    HTTPStatusError,
    TransportError,
)
from dsclient.core.logging import get_logger, log_with_source
from dsclient.deviceserver.cache import ResponseCache
from dsclient.deviceserver.models import EntryPoint
from dsclient.deviceserver.signer import OrgClaim, TokenSigner

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


class ClientConfig(BaseModel):
    """Everything a DeviceServerClient needs, supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(min_length=1)
    psk: str = Field(default="", repr=False)
    algorithm: str = "HS256"
    org_id: int = 0
    token_lifetime_minutes: int = Field(default=60, gt=0)
    skip_tls_verify: bool = False
    timeout_seconds: float = Field(default=30.0, gt=0)
    cache_ttl_seconds: float = Field(default=120.0, gt=0)
    cache_sweep_interval_seconds: float = Field(default=30.0, ge=0)
    read_through_cache: bool = False


@lru_cache(maxsize=None)
def _adapter(result_type: Any) -> pydantic.TypeAdapter:
    return pydantic.TypeAdapter(result_type)


class DeviceServerClient:
    """
    Authorized JSON client bound to one device server and one signing key.

    The HTTP transport is opened at construction and released by `aclose()`
    (or leaving `async with`). Request execution shares no mutable state
    apart from the lock-protected response cache, so concurrent requests
    on one client are safe.

    Args:
        config: Connection, signing and cache settings.
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        logger: Optional logger receiving one record per request attempt.

    Raises:
        ConfigError: If the signing key or algorithm is invalid.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: Any = None,
    ) -> None:
        self._signer = TokenSigner(config.algorithm, config.psk)
        self._token_lifetime = timedelta(minutes=config.token_lifetime_minutes)
        self._org_id = config.org_id
        self._logger = logger if logger is not None else get_logger(__name__)

        try:
            self._base = httpx.URL(config.base_url)
        except httpx.InvalidURL as e:
            raise ConfigError(f"invalid base URL {config.base_url!r}: {e}") from e
        if self._base.scheme not in ("http", "https"):
            raise ConfigError(f"base URL must be http or https: {config.base_url!r}")

        self.base_url = config.base_url
        self.read_through_cache = config.read_through_cache
        self.get_headers = {"Accept": JSON_CONTENT_TYPE}
        self.post_headers = {"Accept": JSON_CONTENT_TYPE, "Content-Type": JSON_CONTENT_TYPE}

        self._client = httpx.AsyncClient(
            transport=transport,
            verify=not config.skip_tls_verify,
            timeout=config.timeout_seconds,
        )
        self.cache = ResponseCache(
            default_ttl=config.cache_ttl_seconds,
            sweep_interval=config.cache_sweep_interval_seconds,
        )
        self._closed = False

    async def __aenter__(self) -> "DeviceServerClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        return self._closed

    async def aclose(self) -> None:
        """Stop the cache sweeper and release the transport. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self.cache.close()
        await self._client.aclose()

    def authorize(self, request: httpx.Request) -> None:
        """
        Attach a freshly signed bearer token to the request.

        Raises:
            AuthError: If the claim cannot be signed.
        """
        claim = OrgClaim.issue(self._org_id, self._token_lifetime)
        token = self._signer.sign_serialize(claim)
        request.headers["Authorization"] = f"Bearer {token}"

    def resolve_url(self, url: str) -> str:
        """Resolve a link href against the base URL. Absolute URLs pass through."""
        return str(self._base.join(url))

    def invalidate(self, url: str, *, include_parent: bool = False) -> None:
        """
        Drop the cached document for a URL.

        With `include_parent`, the enclosing collection (the URL with its last
        path segment removed, e.g. /keys for /keys/7) is dropped as well.
        """
        self.cache.delete(url)
        if include_parent:
            target = httpx.URL(url)
            parent_path = target.path.rstrip("/").rsplit("/", 1)[0] or "/"
            self.cache.delete(str(target.join(parent_path)))

    async def entry_point(self) -> EntryPoint:
        """Fetch the root resource of the device server."""
        return await self.get(self.base_url, EntryPoint)

    async def get(
        self,
        url: str,
        result_type: type[T],
        headers: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> T:
        """
        GET a resource and decode it into `result_type`.

        With read-through caching enabled, a fresh cached document for the
        URL is returned without touching the network.
        """
        url = self._resolve("GET", url)
        if self.read_through_cache:
            document, found = self.cache.lookup(url)
            if found:
                result = self._validate("GET", url, copy.deepcopy(document), result_type)
                self._report("GET", url, "cache_hit")
                return result

        response = await self._execute("GET", url, self.get_headers, headers, timeout=timeout)
        document = self._decode("GET", url, response)
        result = self._validate("GET", url, document, result_type)

        self.cache.set(url, copy.deepcopy(document))
        self._report("GET", url, "ok", status_code=response.status_code)
        return result

    async def post(
        self,
        url: str,
        result_type: type[T],
        body: bytes | str,
        headers: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> T:
        """POST a JSON body and decode the response into `result_type`."""
        url = self._resolve("POST", url)
        response = await self._execute(
            "POST", url, self.post_headers, headers, content=body, timeout=timeout
        )
        document = self._decode("POST", url, response)
        result = self._validate("POST", url, document, result_type)

        self.invalidate(url)
        self._report("POST", url, "ok", status_code=response.status_code)
        return result

    async def delete(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        """DELETE a resource. The response body, if any, is ignored."""
        url = self._resolve("DELETE", url)
        response = await self._execute("DELETE", url, self.get_headers, headers, timeout=timeout)

        self.invalidate(url, include_parent=True)
        self._report("DELETE", url, "ok", status_code=response.status_code)

    async def _execute(
        self,
        method: str,
        url: str,
        default_headers: dict[str, str],
        headers: dict[str, str] | None,
        *,
        content: bytes | str | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Build, authorize and send one request; classify the outcome."""
        request_kwargs: dict[str, Any] = {}
        if timeout is not None:
            request_kwargs["timeout"] = timeout

        request = self._client.build_request(
            method,
            url,
            content=content,
            headers={**default_headers, **(headers or {})},
            **request_kwargs,
        )

        try:
            self.authorize(request)
        except AuthError as e:
            self._report(method, url, "failed", stage="authorize", error=e.message)
            raise

        try:
            response = await self._client.send(request)
        except httpx.TransportError as e:
            detail = str(e) or type(e).__name__
            self._report(method, url, "failed", stage="send", error=detail)
            raise TransportError(f"{method} {url}: {detail}") from e

        if response.status_code >= 400:
            self._report(
                method,
                url,
                "failed",
                stage="status",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            raise HTTPStatusError(response.status_code, response.reason_phrase)

        return response

    def _resolve(self, method: str, url: str) -> str:
        try:
            return self.resolve_url(url)
        except httpx.InvalidURL as e:
            self._report(method, url, "failed", stage="build", error=str(e))
            raise TransportError(f"invalid request URL {url!r}: {e}") from e

    def _decode(self, method: str, url: str, response: httpx.Response) -> Any:
        try:
            return json.loads(response.content)
        except ValueError as e:
            self._report(method, url, "failed", stage="decode", error=str(e))
            raise DecodeError(f"{method} {url}: response is not valid JSON: {e}") from e

    def _validate(self, method: str, url: str, document: Any, result_type: type[T]) -> T:
        try:
            return _adapter(result_type).validate_python(document)
        except pydantic.ValidationError as e:
            self._report(method, url, "failed", stage="decode", error=str(e))
            raise DecodeError(
                f"{method} {url}: response does not match {getattr(result_type, '__name__', result_type)}: "
                f"{e.error_count()} validation error(s)"
            ) from e

    def _report(self, method: str, url: str, outcome: str, **fields: Any) -> None:
        level = "info" if outcome in ("ok", "cache_hit") else "warning"
        log_with_source(
            self._logger,
            "deviceserver",
            level,
            "Device server request",
            method=method,
            url=url,
            outcome=outcome,
            **fields,
        )
