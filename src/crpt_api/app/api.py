from __future__ import annotations

import logging
from threading import Event

from dependency_injector import providers
from pydantic import ValidationError

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.errors import ConfigurationError
from ..core.domain.models import Document, SubmissionResult
from ..core.ports.serializer_port import SerializerPort
from ..core.ports.transport_port import TransportPort

logger = logging.getLogger(__name__)

_UNIT_SECONDS = {
    "second": 1.0,
    "minute": 60.0,
    "hour": 3600.0,
    "day": 86400.0,
}


class CrptApiClient:
    """Client for the document create endpoint with a built-in rate gate.

    At most `capacity` requests start within any `interval_seconds`, no matter
    how many threads share one client instance. Each client owns its own gate.

    Example:
        # 5 requests per second, configuration completed from CRPT_API_* variables
        with CrptApiClient(capacity=5, interval_seconds=1.0) as client:
            result = client.submit(document, signature)
            if not result.ok:
                print(result.status_code, result.text)

        # Same limit expressed per time unit
        client = CrptApiClient.per("minute", 100)
        try:
            client.submit(document, signature)
        finally:
            client.close()
    """

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        capacity: int | None = None,
        interval_seconds: float | None = None,
        window_policy: str | None = None,
        timeout_seconds: float | None = None,
        signature_header: str | None = None,
        acquire_timeout_seconds: float | None = None,
        transport: TransportPort | None = None,
        serializer: SerializerPort | None = None,
    ):
        """Initialize the client.

        Args:
            endpoint: Target URL. If None, uses CRPT_API_ENDPOINT or the production URL.
            capacity: Requests allowed per interval. If None, uses CRPT_API_CAPACITY or 5.
            interval_seconds: Interval length. If None, uses CRPT_API_INTERVAL_SECONDS or 1.0.
            window_policy: "sliding" (default) or "fixed".
            timeout_seconds: HTTP timeout per request.
            signature_header: Header name used to forward the signature. Not sent when None.
            acquire_timeout_seconds: Upper bound on waiting for a permit. None waits indefinitely.
            transport: Replacement for the httpx transport (e.g. a test double).
            serializer: Replacement for the JSON serializer.

        Raises:
            ConfigurationError: If any setting is invalid.
        """
        # Build config dict with only provided values
        config_dict = {
            key: value
            for key, value in {
                "endpoint": endpoint,
                "capacity": capacity,
                "interval_seconds": interval_seconds,
                "window_policy": window_policy,
                "timeout_seconds": timeout_seconds,
                "signature_header": signature_header,
                "acquire_timeout_seconds": acquire_timeout_seconds,
            }.items()
            if value is not None
        }
        try:
            config = AppConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

        self._config = config
        self._container = Container()
        self._container.config.from_pydantic(config)
        if transport is not None:
            self._container.transport.override(providers.Object(transport))
        if serializer is not None:
            self._container.serializer.override(providers.Object(serializer))

        # Resolve the gate first so a bad limit fails before any resource is opened
        self._gate = self._container.gate()
        self._container.init_resources()
        self._submit_uc = self._container.submit_uc()
        logger.debug(f"CrptApiClient ready for {config.endpoint}")

    @classmethod
    def per(cls, unit: str | float, limit: int, **kwargs) -> CrptApiClient:
        """Create a client allowing `limit` requests per time unit.

        Args:
            unit: "second", "minute", "hour" or "day" (plural accepted), or a length in seconds.
            limit: Requests allowed per unit.
        """
        if isinstance(unit, str):
            seconds = _UNIT_SECONDS.get(unit.strip().lower().rstrip("s"))
            if seconds is None:
                raise ConfigurationError(f"Unknown time unit {unit!r}; expected one of {sorted(_UNIT_SECONDS)}")
        else:
            seconds = float(unit)
        return cls(capacity=limit, interval_seconds=seconds, **kwargs)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def gate(self):
        """The rate gate shared by every submit() on this client."""
        return self._gate

    def submit(self, document: Document, signature: str, *, cancel: Event | None = None) -> SubmissionResult:
        """Submit one document, waiting for a rate permit first.

        Args:
            document: Fully populated document. Nothing is defaulted.
            signature: Opaque signature, forwarded unvalidated.
            cancel: Optional event that aborts the wait for a permit.

        Returns:
            SubmissionResult with the endpoint's status code and body. A non-2xx
            status is returned, not raised.

        Raises:
            CancellationError: The permit wait was cancelled or timed out.
            SerializationError: The document could not be encoded.
            TransportError: The endpoint could not be reached.
        """
        return self._submit_uc.execute(document, signature, cancel=cancel)

    def create_document(self, document: Document, signature: str) -> SubmissionResult:
        """Alias of submit()."""
        return self.submit(document, signature)

    def close(self) -> None:
        """Close the client and release resources.

        This method should be called when the client is no longer needed,
        or use the context manager (with statement) for automatic cleanup.
        """
        self._container.shutdown_resources()

    def __enter__(self) -> CrptApiClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "CrptApiClient",
    "AppConfig",
]
