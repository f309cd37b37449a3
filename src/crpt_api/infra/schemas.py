from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ..core.domain.models import Description, Document, Product


# Wire models for the document create endpoint. Field order is the wire key order.
_WIRE_CONFIG = ConfigDict(populate_by_name=True, strict=True, extra="forbid", frozen=True)


class DescriptionSchema(BaseModel):
	model_config = _WIRE_CONFIG

	participant_inn: str = Field(alias="participantInn")

	@classmethod
	def from_domain(cls, d: Description) -> "DescriptionSchema":
		return cls(participant_inn=d.participant_inn)

	def to_domain(self) -> Description:
		return Description(participant_inn=self.participant_inn)


class ProductSchema(BaseModel):
	model_config = _WIRE_CONFIG

	certificate_document: str = Field(alias="certificateDocument")
	certificate_document_date: date = Field(alias="certificateDocumentDate")
	certificate_document_number: str = Field(alias="certificateDocumentNumber")
	owner_inn: str = Field(alias="ownerInn")
	producer_inn: str = Field(alias="producerInn")
	production_date: date = Field(alias="productionDate")
	tnved_code: str = Field(alias="tnvedCode")
	uit_code: str = Field(alias="uitCode")
	uitu_code: str = Field(alias="uituCode")

	@classmethod
	def from_domain(cls, p: Product) -> "ProductSchema":
		return cls(
			certificate_document=p.certificate_document,
			certificate_document_date=p.certificate_document_date,
			certificate_document_number=p.certificate_document_number,
			owner_inn=p.owner_inn,
			producer_inn=p.producer_inn,
			production_date=p.production_date,
			tnved_code=p.tnved_code,
			uit_code=p.uit_code,
			uitu_code=p.uitu_code,
		)

	def to_domain(self) -> Product:
		return Product(
			certificate_document=self.certificate_document,
			certificate_document_date=self.certificate_document_date,
			certificate_document_number=self.certificate_document_number,
			owner_inn=self.owner_inn,
			producer_inn=self.producer_inn,
			production_date=self.production_date,
			tnved_code=self.tnved_code,
			uit_code=self.uit_code,
			uitu_code=self.uitu_code,
		)


class DocumentSchema(BaseModel):
	"""Top-level body of a document create request."""
	model_config = _WIRE_CONFIG

	description: DescriptionSchema
	doc_id: str = Field(alias="docID")
	doc_status: str = Field(alias="docStatus")
	doc_type: str = Field(alias="docType")
	import_request: bool = Field(alias="importRequest")
	owner_inn: str = Field(alias="ownerInn")
	participant_inn: str = Field(alias="participantInn")
	producer_inn: str = Field(alias="producerInn")
	production_date: date = Field(alias="productionDate")
	production_type: str = Field(alias="productionType")
	products: list[ProductSchema]
	reg_date: date = Field(alias="regDate")
	reg_number: str = Field(alias="regNumber")

	@classmethod
	def from_domain(cls, d: Document) -> "DocumentSchema":
		return cls(
			description=DescriptionSchema.from_domain(d.description),
			doc_id=d.doc_id,
			doc_status=d.doc_status,
			doc_type=d.doc_type,
			import_request=d.import_request,
			owner_inn=d.owner_inn,
			participant_inn=d.participant_inn,
			producer_inn=d.producer_inn,
			production_date=d.production_date,
			production_type=d.production_type,
			products=[ProductSchema.from_domain(p) for p in d.products],
			reg_date=d.reg_date,
			reg_number=d.reg_number,
		)

	def to_domain(self) -> Document:
		return Document(
			description=self.description.to_domain(),
			doc_id=self.doc_id,
			doc_status=self.doc_status,
			doc_type=self.doc_type,
			import_request=self.import_request,
			owner_inn=self.owner_inn,
			participant_inn=self.participant_inn,
			producer_inn=self.producer_inn,
			production_date=self.production_date,
			production_type=self.production_type,
			products=tuple(p.to_domain() for p in self.products),
			reg_date=self.reg_date,
			reg_number=self.reg_number,
		)
