"""
Pydantic schemas for economic group endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from beeconta.schemas.companies import CompanyResponse

GroupStatus = Literal["ativo", "inativo"]


class GroupResponse(BaseModel):
    """Economic group details."""
    id: str = Field(..., description="Group UUID")
    nome: str = Field(..., description="Group name")
    descricao: Optional[str] = Field(None, description="Description")
    url_logo: Optional[str] = Field(None, description="Public URL of the logo")
    status: GroupStatus = Field("ativo", description="Lifecycle status")
    data_criacao: Optional[str] = None
    data_atualizacao: Optional[str] = None


class GroupListResponse(BaseModel):
    groups: List[GroupResponse]
    count: int


class GroupCreateRequest(BaseModel):
    """Request to create a group. The creator becomes its ADMIN."""
    nome: str = Field(..., min_length=1, max_length=200, examples=["Grupo Colmeia"])
    descricao: Optional[str] = Field(None, max_length=500)
    url_logo: Optional[str] = None


class GroupUpdateRequest(BaseModel):
    """Request to update a group. Requires ADMIN access on the group."""
    nome: Optional[str] = Field(None, min_length=1, max_length=200)
    descricao: Optional[str] = Field(None, max_length=500)
    url_logo: Optional[str] = None
    status: Optional[GroupStatus] = None


class GroupMutationResponse(BaseModel):
    status: str = Field(..., description="CREATED or UPDATED")
    group: GroupResponse
    message: str


class GroupCompanyResponse(BaseModel):
    """Membership of a company in a group."""
    grupo_id: str
    empresa_id: str
    empresa_principal: bool = Field(False, description="Primary company of the group")
    status: GroupStatus = "ativo"
    empresa: Optional[CompanyResponse] = Field(
        None,
        description="The associated company; null if it is not active"
    )


class GroupCompanyListResponse(BaseModel):
    associations: List[GroupCompanyResponse]
    count: int


class GroupCompanyAddRequest(BaseModel):
    """Request to associate (or reactivate) a company in a group."""
    empresa_id: str = Field(..., description="Company UUID")
    empresa_principal: bool = Field(False, description="Mark as the group's primary company")
