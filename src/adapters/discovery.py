"""HTTP discovery adapter.

Validates a homeserver/identity server pair against the Matrix client and
identity APIs using `httpx.AsyncClient`, and turns every failure into a
`DiscoveryError` with a user-facing message.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional
from urllib.parse import urlsplit

import httpx

from core.config import ValidationConfig
from core.errors import DiscoveryError
from core.models import ServerConfig

LOGGER = logging.getLogger(__name__)

HS_VERSIONS_PATH = "/_matrix/client/versions"
# Identity servers answer on v2; older deployments only expose api/v1.
IS_PROBE_PATHS = ("/_matrix/identity/v2", "/_matrix/identity/api/v1")

INVALID_HS_URL = "Homeserver URL must be a valid http(s) URL"
INVALID_IS_URL = "Identity server URL must be a valid http(s) URL"
NOT_A_HOMESERVER = "Homeserver URL does not appear to be a valid Matrix homeserver"
NOT_AN_IDENTITY_SERVER = "Identity server URL does not appear to be a valid identity server"
HS_UNREACHABLE = "Cannot reach homeserver"
IS_UNREACHABLE = "Cannot reach identity server"


def build_async_client(config: Optional[ValidationConfig] = None) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the configured timeout and agent."""

    config = config or ValidationConfig()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": config.user_agent, "Accept": "application/json"},
    )


def normalize_base_url(raw_url: str) -> Optional[str]:
    """Return the URL without surrounding spaces or trailing slashes.

    Returns None when the value is not an absolute http(s) URL.
    """

    url = raw_url.strip()
    parts = urlsplit(url)
    if parts.scheme not in {"http", "https"} or not parts.hostname:
        return None
    return url.rstrip("/")


class HttpDiscoveryClient:
    """Discovery collaborator backed by live HTTP probes."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[ValidationConfig] = None,
        translate: Optional[Callable[[str], str]] = None,
    ) -> None:
        self._config = config or ValidationConfig()
        self._client = client
        self._translate = translate or (lambda text: text)

    async def validate(self, hs_url: str, is_url: str) -> ServerConfig:
        """Probe both servers and return the validated config."""

        if self._client is not None:
            return await self._validate_with(self._client, hs_url, is_url)
        async with build_async_client(self._config) as client:
            return await self._validate_with(client, hs_url, is_url)

    async def _validate_with(self, client: httpx.AsyncClient, hs_url: str, is_url: str) -> ServerConfig:
        hs_base = normalize_base_url(hs_url)
        if hs_base is None:
            raise self._error(f"invalid homeserver url: {hs_url!r}", INVALID_HS_URL)

        is_base = ""
        if is_url.strip():
            is_base = normalize_base_url(is_url) or ""
            if not is_base:
                raise self._error(f"invalid identity server url: {is_url!r}", INVALID_IS_URL)

        await self._check_homeserver(client, hs_base)
        if is_base:
            await self._check_identity_server(client, is_base)

        LOGGER.info("Validated homeserver %s (identity server: %s)", hs_base, is_base or "none")
        return ServerConfig(
            hs_url=hs_base,
            is_url=is_base,
            hs_name=urlsplit(hs_base).hostname or hs_base,
            hs_name_is_different=False,
            identity_enabled=bool(is_base),
        )

    async def _check_homeserver(self, client: httpx.AsyncClient, hs_base: str) -> None:
        try:
            response = await client.get(f"{hs_base}{HS_VERSIONS_PATH}")
        except httpx.HTTPError as exc:
            raise self._error(f"homeserver request failed: {exc}", HS_UNREACHABLE) from exc

        if response.status_code != 200:
            raise self._error(
                f"homeserver versions returned {response.status_code}",
                NOT_A_HOMESERVER,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise self._error("homeserver versions is not JSON", NOT_A_HOMESERVER) from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("versions"), list):
            raise self._error("homeserver versions has no versions list", NOT_A_HOMESERVER)

    async def _check_identity_server(self, client: httpx.AsyncClient, is_base: str) -> None:
        last_error: Optional[httpx.HTTPError] = None
        for path in IS_PROBE_PATHS:
            try:
                response = await client.get(f"{is_base}{path}")
            except httpx.HTTPError as exc:
                last_error = exc
                continue
            if response.status_code == 200:
                return
            LOGGER.debug("Identity probe %s%s returned %s", is_base, path, response.status_code)

        if last_error is not None:
            raise self._error(f"identity server request failed: {last_error}", IS_UNREACHABLE) from last_error
        raise self._error("identity server probes were rejected", NOT_AN_IDENTITY_SERVER)

    def _error(self, message: str, user_message: str) -> DiscoveryError:
        return DiscoveryError(message, translated_message=self._translate(user_message))
