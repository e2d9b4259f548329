"""Configuration management for Hookshot."""

import logging
import warnings
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings

from hookshot.exceptions import ConfigurationError
from hookshot.models import Environment, Hook

logger = logging.getLogger(__name__)

# Shorter production secrets are accepted but flagged
MIN_PRODUCTION_SECRET_LENGTH = 16

# RFC 9110 token characters, so X-<name>-Signature stays a valid header name
HEADER_TOKEN_PATTERN = r"^[A-Za-z0-9!#$%&'*+.^_`|~-]+$"


class ClientConfig(BaseModel):
    """Validated options for a single WebhookClient.

    Attributes:
        api_version: Version tag copied into every envelope.
        secret: Shared secret for HMAC-SHA256 signatures.
        hooks: Initial subscribers.
        mode: Operating mode sent as X-Environment.
        name: Instance name; switches the signature header to X-<name>-Signature.
            An empty name is the same as no name.
        timeout_seconds: Per-request deadline. None waits forever.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_version: str = Field(min_length=1, description="API version tag")
    secret: str = Field(min_length=1, description="Shared secret for signatures")
    hooks: list[Hook] = Field(default_factory=list, description="Initial subscribers")
    mode: Environment = Field(default="sandbox", description="Operating mode")
    name: str | None = Field(
        default=None,
        pattern=HEADER_TOKEN_PATTERN,
        description="Instance name used in the signature header",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="HTTP request timeout (None for no deadline)",
    )

    @field_validator("name", mode="before")
    @classmethod
    def _empty_name_is_unset(cls, value: Any) -> Any:
        """An empty name means no name."""
        return None if value == "" else value

    def _warn_on_weak_production_secret(self, stacklevel: int) -> None:
        """Warn when a production client uses a short secret."""
        if self.mode == "production" and len(self.secret) < MIN_PRODUCTION_SECRET_LENGTH:
            warnings.warn(
                f"Webhook secret is {len(self.secret)} characters in production mode; "
                f"use at least {MIN_PRODUCTION_SECRET_LENGTH}. "
                "Generate one with hookshot.generate_secret().",
                UserWarning,
                stacklevel=stacklevel,
            )
            logger.warning("Short webhook secret used in production mode")

    @classmethod
    def parse(cls, *, stacklevel: int = 2, **options: Any) -> "ClientConfig":
        """Validate options, raising ConfigurationError instead of pydantic errors.

        Production configs with a short secret are accepted with a UserWarning.
        ``stacklevel`` selects the frame the warning is attributed to, as in
        ``warnings.warn``; the default points at the caller of ``parse``.
        """
        try:
            config = cls(**options)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or None
            raise ConfigurationError(first["msg"], field=field) from e
        config._warn_on_weak_production_secret(stacklevel=stacklevel + 1)
        return config

    @property
    def signature_header(self) -> str:
        """Header carrying the signature for this configuration."""
        return f"X-{self.name}-Signature" if self.name else "X-Signature"


class Settings(BaseSettings):
    """Hookshot configuration loaded from environment variables.

    All settings can be overridden via environment variables with the
    HOOKSHOT_ prefix, for example:
        HOOKSHOT_API_VERSION=2020-08-27
        HOOKSHOT_SECRET=...
        HOOKSHOT_MODE=production
    """

    # Client
    api_version: str | None = Field(
        default=None,
        description="API version tag for envelopes",
    )
    secret: str | None = Field(
        default=None,
        description="Shared webhook secret",
    )
    mode: Environment = Field(
        default="sandbox",
        description="Operating mode: sandbox or production",
    )
    name: str | None = Field(
        default=None,
        description="Instance name for the signature header",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="HTTP request timeout in seconds (unset for no deadline)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="json",
        pattern=r"^(json|text)$",
        description="Log output format: json or text",
    )

    model_config = {
        "env_prefix": "HOOKSHOT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def client_options(self) -> dict[str, Any]:
        """Options for ClientConfig drawn from these settings."""
        return {
            "api_version": self.api_version,
            "secret": self.secret,
            "mode": self.mode,
            "name": self.name,
            "timeout_seconds": self.timeout_seconds,
        }


__all__ = ["ClientConfig", "Settings"]
