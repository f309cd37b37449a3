from __future__ import annotations

from typing import Protocol

from ..domain.models import Document


class SerializerPort(Protocol):
    content_type: str

    def encode(self, document: Document) -> bytes:
        """Render a document in the wire format. Raises SerializationError on unencodable input."""
        ...

    def decode(self, raw: bytes) -> Document:
        """Parse wire bytes back into a Document. Raises SerializationError on malformed input."""
        ...
