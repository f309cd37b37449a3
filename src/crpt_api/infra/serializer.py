from __future__ import annotations

import logging

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..core.domain.errors import SerializationError
from ..core.domain.models import Document
from ..core.ports.serializer_port import SerializerPort
from .schemas import DocumentSchema

logger = logging.getLogger(__name__)


class JsonDocumentSerializer(SerializerPort):
    """Encode documents as JSON using the camelCase wire keys and YYYY-MM-DD dates."""

    content_type = "application/json"

    def __init__(self, indent: int | None = None) -> None:
        self._indent = indent

    def encode(self, document: Document) -> bytes:
        try:
            schema = DocumentSchema.from_domain(document)
            data = schema.model_dump_json(by_alias=True, indent=self._indent)
        except (ValidationError, PydanticSerializationError, AttributeError, TypeError) as e:
            raise SerializationError(f"Cannot encode document: {e}") from e
        logger.debug(f"Encoded document {document.doc_id} ({len(data)} chars)")
        return data.encode("utf-8")

    def decode(self, raw: bytes) -> Document:
        try:
            schema = DocumentSchema.model_validate_json(raw)
        except ValidationError as e:
            raise SerializationError(f"Cannot decode document: {e}") from e
        return schema.to_domain()
