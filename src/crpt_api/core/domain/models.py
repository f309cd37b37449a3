from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Description:
    participant_inn: str


@dataclass(frozen=True)
class Product:
    certificate_document: str
    certificate_document_date: date
    certificate_document_number: str
    owner_inn: str
    producer_inn: str
    production_date: date
    tnved_code: str
    uit_code: str
    uitu_code: str


@dataclass(frozen=True)
class Document:
    description: Description
    doc_id: str
    doc_status: str
    doc_type: str
    import_request: bool
    owner_inn: str
    participant_inn: str
    producer_inn: str
    production_date: date
    production_type: str
    products: tuple[Product, ...]
    reg_date: date
    reg_number: str

    def __post_init__(self) -> None:
        # Accept any sequence from callers but keep the value immutable
        if not isinstance(self.products, tuple):
            object.__setattr__(self, "products", tuple(self.products))


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submission as reported by the endpoint.

    A non-2xx status is carried as data; interpreting it is up to the caller.
    """

    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
