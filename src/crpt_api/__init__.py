"""crpt_api package: app/core/infra/config.

Expose the rate-gated document client and domain values at the package level.
"""

from .app.api import AppConfig, CrptApiClient
from .core.domain.errors import (
    CancellationError,
    ConfigurationError,
    CrptApiError,
    SerializationError,
    TransportError,
)
from .core.domain.models import Description, Document, Product, SubmissionResult

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CrptApiClient",
    "AppConfig",
    "Description",
    "Document",
    "Product",
    "SubmissionResult",
    "CrptApiError",
    "ConfigurationError",
    "CancellationError",
    "SerializationError",
    "TransportError",
]
