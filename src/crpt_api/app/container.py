from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..core.usecases.submit_document import SubmitDocumentUseCase
from ..infra.http_client import HttpTransport
from ..infra.rate_limiter import build_rate_gate
from ..infra.serializer import JsonDocumentSerializer

logger = logging.getLogger(__name__)


def transport_resource(timeout_seconds):
	logger.info(f"Initializing HTTP transport (timeout: {timeout_seconds}s)")
	with HttpTransport(timeout_seconds=timeout_seconds) as transport:
		yield transport
	logger.debug("HTTP transport closed")


class Container(containers.DeclarativeContainer):
	# Filled from an AppConfig instance by the client; nothing is read at import time
	config = providers.Configuration()

	# One gate per container: every submit through this client shares its window
	gate = providers.Singleton(
		build_rate_gate,
		policy=config.window_policy,
		capacity=config.capacity,
		interval_seconds=config.interval_seconds,
	)

	serializer = providers.Singleton(JsonDocumentSerializer)

	transport = providers.Resource(
		transport_resource,
		timeout_seconds=config.timeout_seconds,
	)

	submit_uc = providers.Factory(
		SubmitDocumentUseCase,
		gate=gate,
		serializer=serializer,
		transport=transport,
		endpoint=config.endpoint,
		signature_header=config.signature_header,
		acquire_timeout=config.acquire_timeout_seconds,
	)
