from __future__ import annotations

from typing import Literal, Optional

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .urls import DOCUMENT_CREATE_URL


class AppConfig(BaseSettings):
    """Client configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_API_ prefix.
    For example:
        - CRPT_API_ENDPOINT=https://markirovka.sandbox.crptech.ru/api/v3/lk/documents/create
        - CRPT_API_CAPACITY=10
        - CRPT_API_INTERVAL_SECONDS=60
        - CRPT_API_WINDOW_POLICY=fixed

    Alternatively, settings can be provided programmatically when creating the client:
        client = CrptApiClient(capacity=10, interval_seconds=60.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_API_",
        case_sensitive=False,
        extra="forbid",
    )

    endpoint: str = Field(
        default=DOCUMENT_CREATE_URL,
        min_length=1,
        description="URL that receives document create requests",
    )

    capacity: int = Field(
        default=5,
        ge=1,
        description="Maximum number of requests that may start within one interval",
    )

    interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Length of the rate limiting interval in seconds",
    )

    window_policy: Literal["fixed", "sliding"] = Field(
        default="sliding",
        description="'sliding' bounds every interval-long span; 'fixed' bounds each window with atomic rollover",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="HTTP timeout for a single request",
    )

    signature_header: Optional[str] = Field(
        default=None,
        description="If set, the document signature is forwarded verbatim in this request header",
    )

    acquire_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Give up waiting for a rate permit after this many seconds. None waits indefinitely",
    )

    @field_validator("endpoint")
    @classmethod
    def check_endpoint(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid endpoint URL {value!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"endpoint must be an absolute http(s) URL, got {value!r}")
        return value
