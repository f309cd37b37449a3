from __future__ import annotations


class CrptApiError(Exception):
    """Base class for every error raised by crpt_api."""


class ConfigurationError(CrptApiError, ValueError):
    """Invalid client or rate gate settings, raised at construction time."""


class CancellationError(CrptApiError):
    """A pending permit acquisition was cancelled or timed out. No permit was granted."""


class SerializationError(CrptApiError):
    """A document could not be encoded to, or decoded from, the wire format."""


class TransportError(CrptApiError):
    """The endpoint could not be reached (network or IO failure)."""
