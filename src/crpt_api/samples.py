from __future__ import annotations

from datetime import date

from .core.domain.models import Description, Document, Product

SAMPLE_SIGNATURE = "13151345314513"


def sample_document() -> Document:
    """Return a fully populated import document with two products."""
    products = (
        Product(
            certificate_document="CertificateDocument1",
            certificate_document_date=date(2022, 5, 15),
            certificate_document_number="CertDocNum1234",
            owner_inn="987654321098",
            producer_inn="765432109876",
            production_date=date(2022, 3, 20),
            tnved_code="1234567890",
            uit_code="UITCODE1",
            uitu_code="UITUCODE1",
        ),
        Product(
            certificate_document="CertificateDocument2",
            certificate_document_date=date(2021, 11, 1),
            certificate_document_number="CertDocNum5678",
            owner_inn="543216789012",
            producer_inn="321098765432",
            production_date=date(2021, 9, 25),
            tnved_code="9876543210",
            uit_code="UITCODE2",
            uitu_code="UITUCODE2",
        ),
    )
    return Document(
        description=Description(participant_inn="123456789012"),
        doc_id="DOC123",
        doc_status="Registered",
        doc_type="ImportDocument",
        import_request=True,
        owner_inn="123456789012",
        participant_inn="987654321098",
        producer_inn="765432109876",
        production_date=date(2022, 4, 10),
        production_type="ImportType",
        products=products,
        reg_date=date(2022, 4, 15),
        reg_number="RegNum456789",
    )
