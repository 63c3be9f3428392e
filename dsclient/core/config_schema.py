"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    DeviceServerSchema → deviceserver.yaml
    LoggingSchema      → logging.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# deviceserver.yaml
# =============================================================================


class TokenSchema(_StrictBase):
    algorithm: str = "HS256"
    org_id: int = 0
    lifetime_minutes: int = Field(default=60, gt=0)


class CacheSchema(_StrictBase):
    ttl_seconds: float = Field(default=120.0, gt=0)
    sweep_interval_seconds: float = Field(default=30.0, ge=0)
    read_through: bool = False


class DeviceServerSchema(_StrictBase):
    base_url: str
    skip_tls_verify: bool = False
    timeout_seconds: float = Field(default=30.0, gt=0)
    token: TokenSchema = TokenSchema()
    cache: CacheSchema = CacheSchema()


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class LoggingHandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: LoggingHandlersSchema
