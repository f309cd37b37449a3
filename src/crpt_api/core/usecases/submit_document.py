from __future__ import annotations

import logging
from threading import Event

from ..domain.models import Document, SubmissionResult
from ..ports.rate_limiter_port import RateLimiterPort
from ..ports.serializer_port import SerializerPort
from ..ports.transport_port import TransportPort

logger = logging.getLogger(__name__)


class SubmitDocumentUseCase:
    """Send one document to the create endpoint under a rate gate permit.

    The permit is held from before encoding until the transport returns or
    fails, and is released on every exit path.
    """

    def __init__(
        self,
        gate: RateLimiterPort,
        serializer: SerializerPort,
        transport: TransportPort,
        endpoint: str,
        signature_header: str | None = None,
        acquire_timeout: float | None = None,
    ) -> None:
        self._gate = gate
        self._serializer = serializer
        self._transport = transport
        self._endpoint = endpoint
        self._signature_header = signature_header
        self._acquire_timeout = acquire_timeout

    def _headers(self, signature: str) -> dict[str, str]:
        headers = {"Content-Type": self._serializer.content_type}
        if self._signature_header:
            headers[self._signature_header] = signature
        return headers

    def execute(self, document: Document, signature: str, *, cancel: Event | None = None) -> SubmissionResult:
        logger.debug(f"Waiting for permit to POST {self._endpoint}")
        with self._gate.permit(timeout=self._acquire_timeout, cancel=cancel):
            body = self._serializer.encode(document)
            resp = self._transport.send("POST", self._endpoint, self._headers(signature), body)
        logger.info(f"Document {document.doc_id} submitted: HTTP {resp.status_code}")
        return SubmissionResult(status_code=resp.status_code, body=resp.body)
