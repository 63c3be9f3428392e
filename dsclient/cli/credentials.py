"""
CLI Credentials.

Builds the ClientConfig for a CLI invocation from config/settings/deviceserver.yaml,
the DEVICESERVER_PSK secret in config/.env (or the environment), and any base URL
given on the command line.
"""

from dataclasses import dataclass

from dsclient.core.config import get_app_config, get_settings
from dsclient.core.exceptions import ConfigError
from dsclient.deviceserver.client import ClientConfig


@dataclass(frozen=True)
class CliOptions:
    """Global CLI options, passed to every command through the typer context."""

    base_url: str | None = None


def read_credentials(base_url: str | None = None) -> ClientConfig:
    """
    Assemble the client configuration.

    Args:
        base_url: Device server URL overriding the configured one.

    Returns:
        ClientConfig ready to construct a DeviceServerClient.

    Raises:
        ConfigError: If the settings files are missing or invalid.
    """
    try:
        deviceserver = get_app_config().deviceserver
        settings = get_settings()

        return ClientConfig(
            base_url=base_url or deviceserver.base_url,
            psk=settings.deviceserver_psk,
            algorithm=deviceserver.token.algorithm,
            org_id=deviceserver.token.org_id,
            token_lifetime_minutes=deviceserver.token.lifetime_minutes,
            skip_tls_verify=deviceserver.skip_tls_verify,
            timeout_seconds=deviceserver.timeout_seconds,
            cache_ttl_seconds=deviceserver.cache.ttl_seconds,
            cache_sweep_interval_seconds=deviceserver.cache.sweep_interval_seconds,
            read_through_cache=deviceserver.cache.read_through,
        )
    except (FileNotFoundError, RuntimeError, ValueError) as e:
        raise ConfigError(str(e)) from e
