from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes


class TransportPort(Protocol):
    def send(self, method: str, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """Perform one HTTP exchange and return the raw status and body.

        Non-2xx statuses are returned, not raised. Network/IO failures raise TransportError.
        """
        ...
