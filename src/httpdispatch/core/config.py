"""Configuration models for core components and adapters.

This module provides Pydantic-based configuration classes that consolidate
settings for the transport and the dispatcher, enabling dependency injection
and testability without touching environment variables.
"""

from typing import Dict, Optional
from pydantic import BaseModel, Field


class TransportConfig(BaseModel):
    """Configuration for the aiohttp transport adapter.

    Attributes:
        timeout_total: Upper bound for one whole request, connect to last byte
        timeout_sock_connect: Upper bound for establishing the connection
        timeout_sock_read: Upper bound between two reads of the response
        default_headers: Headers sent with every request; descriptor headers win
    """

    timeout_total: Optional[float] = Field(
        default=10.0,
        gt=0,
        description="Total seconds allowed for one request (None disables the limit)"
    )

    timeout_sock_connect: Optional[float] = Field(
        default=5.0,
        gt=0,
        description="Seconds allowed to connect to the remote peer"
    )

    timeout_sock_read: Optional[float] = Field(
        default=10.0,
        gt=0,
        description="Seconds allowed between reads of the response body"
    )

    default_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Headers merged under every descriptor's headers"
    )

    @classmethod
    def from_app_settings(cls, settings) -> "TransportConfig":
        """Create config from DispatchSettings instance."""
        return cls(
            timeout_total=settings.HTTPDISPATCH_TIMEOUT_TOTAL,
            timeout_sock_connect=settings.HTTPDISPATCH_TIMEOUT_SOCK_CONNECT,
            timeout_sock_read=settings.HTTPDISPATCH_TIMEOUT_SOCK_READ,
            default_headers=dict(settings.HTTPDISPATCH_DEFAULT_HEADERS),
        )


class DispatcherConfig(BaseModel):
    """Configuration for the Dispatcher and the JSON decoder wired into it.

    Attributes:
        strict_decoding: Reject type coercion (e.g. "123" for an int field) when decoding JSON
        log_body_preview: Number of body bytes quoted in failure log lines
    """

    strict_decoding: bool = Field(
        default=True,
        description="Validate JSON bodies in pydantic strict mode"
    )

    log_body_preview: int = Field(
        default=200,
        ge=0,
        description="Maximum number of body bytes quoted in warning logs"
    )

    @classmethod
    def from_app_settings(cls, settings) -> "DispatcherConfig":
        """Create config from DispatchSettings instance."""
        return cls(strict_decoding=settings.HTTPDISPATCH_STRICT_DECODING)
