"""Pydantic schemas for companies endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from analise_tributaria.db.models.company import Company


class CompanyResponse(BaseModel):
    """Public company representation."""

    id: int
    name: str
    address: str | None
    cnpj: str

    @classmethod
    def from_model(cls, company: Company) -> CompanyResponse:
        return cls(
            id=company.id,
            name=company.name,
            address=company.address,
            cnpj=company.cnpj,
        )


class CreateCompanyRequest(BaseModel):
    name: str = Field(max_length=255)
    cnpj: str = Field(max_length=32)
    address: str | None = Field(default=None, max_length=500)
