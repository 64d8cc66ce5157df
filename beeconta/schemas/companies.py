"""
Pydantic schemas for company CRUD endpoints.

Companies are the tenants of BeeConta. Every bank account, card, category and
transaction belongs to one company.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

CompanyStatus = Literal["ativo", "inativo", "pendente"]
DocumentType = Literal["CNPJ", "CPF", "ESTRANGEIRO"]
TaxRegime = Literal["SIMPLES", "LUCRO_PRESUMIDO", "LUCRO_REAL"]


class Address(BaseModel):
    """Postal address stored as JSON on empresas.endereco."""
    logradouro: Optional[str] = None
    numero: Optional[str] = None
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    pais: Optional[str] = None
    cep: Optional[str] = None


class Contact(BaseModel):
    """Contact data stored as JSON on empresas.contato."""
    email: Optional[str] = None
    telefone: Optional[str] = None
    website: Optional[str] = None
    nome_contato: Optional[str] = None


# --- Company response models ---

class CompanyResponse(BaseModel):
    """
    Company details.

    Companies reached through an access grant carry only the embedded
    column subset (id, nome, nome_fantasia, url_logo, status, cnpj_cpf,
    tipo_documento); the remaining fields are then null.
    """
    id: str = Field(..., description="Company UUID")
    nome: str = Field(..., description="Legal name")
    nome_fantasia: Optional[str] = Field(None, description="Trade name")
    cnpj_cpf: Optional[str] = Field(None, description="Document number")
    tipo_documento: Optional[DocumentType] = Field(None, description="Document type")
    regime_tributario: Optional[TaxRegime] = Field(None, description="Tax regime")
    url_logo: Optional[str] = Field(None, description="Public URL of the logo")
    endereco: Optional[Address] = Field(None, description="Postal address")
    contato: Optional[Contact] = Field(None, description="Contact information")
    status: CompanyStatus = Field("ativo", description="Lifecycle status")
    data_criacao: Optional[str] = Field(None, description="ISO-8601 creation timestamp")
    data_atualizacao: Optional[str] = Field(None, description="ISO-8601 last update timestamp")


class CompanyListResponse(BaseModel):
    """
    Companies the user can reach: direct grants first, then group grants.
    """
    companies: List[CompanyResponse] = Field(..., description="Reachable companies")
    count: int = Field(..., description="Number of companies returned")


# --- Company create/update models ---

class CompanyCreateRequest(BaseModel):
    """
    Request to create a company. The creator becomes its ADMIN.
    """
    nome: str = Field(
        ...,
        description="Legal name",
        min_length=1,
        max_length=200,
        examples=["Colmeia Comercio de Mel LTDA"]
    )
    nome_fantasia: Optional[str] = Field(None, max_length=200, examples=["Colmeia Mel"])
    cnpj_cpf: str = Field(..., min_length=1, max_length=20, description="Document number")
    tipo_documento: DocumentType = Field(..., description="Document type")
    regime_tributario: Optional[TaxRegime] = Field(None, description="Tax regime")
    url_logo: Optional[str] = Field(None, description="Public URL of the logo")
    endereco: Optional[Address] = None
    contato: Optional[Contact] = None


class CompanyUpdateRequest(BaseModel):
    """
    Request to update a company. Only provided fields are changed.
    Requires ADMIN access on the company.
    """
    nome: Optional[str] = Field(None, min_length=1, max_length=200)
    nome_fantasia: Optional[str] = Field(None, max_length=200)
    cnpj_cpf: Optional[str] = Field(None, min_length=1, max_length=20)
    tipo_documento: Optional[DocumentType] = None
    regime_tributario: Optional[TaxRegime] = None
    url_logo: Optional[str] = None
    endereco: Optional[Address] = None
    contato: Optional[Contact] = None
    status: Optional[CompanyStatus] = None


class CompanyMutationResponse(BaseModel):
    """
    Response after creating or updating a company.
    """
    status: str = Field(..., description="CREATED or UPDATED")
    company: CompanyResponse = Field(..., description="The saved company")
    message: str = Field(..., examples=["Company created successfully"])


class DeleteResponse(BaseModel):
    """
    Response after a soft delete. The record is kept with an inactive status.
    """
    status: str = Field("DELETED", description="Indicates successful deletion")
    message: str = Field(..., examples=["Company deleted successfully"])
