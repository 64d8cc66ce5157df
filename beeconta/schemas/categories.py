"""
Pydantic schemas for category endpoints.

Categories with a null empresa_id are global and visible to every company.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

CategoryType = Literal["RECEITA", "DESPESA", "AMBOS"]


class CategoryResponse(BaseModel):
    id: str = Field(..., description="Category UUID")
    empresa_id: Optional[str] = Field(None, description="Owning company; null for global categories")
    nome: str
    tipo: CategoryType
    cor: Optional[str] = Field(None, description="Display color", examples=["#F5B700"])
    icone: Optional[str] = None
    categoria_pai_id: Optional[str] = None
    categoria_pai: Optional[Dict[str, Any]] = Field(None, description="Parent category")
    status: str = "ativa"
    data_criacao: Optional[str] = None
    data_atualizacao: Optional[str] = None


class CategoryListResponse(BaseModel):
    categories: List[CategoryResponse]
    count: int


class CategoryCreateRequest(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100, examples=["Fornecedores"])
    tipo: CategoryType = Field(..., examples=["DESPESA"])
    cor: Optional[str] = Field(None, max_length=20)
    icone: Optional[str] = Field(None, max_length=50)
    categoria_pai_id: Optional[str] = None


class CategoryMutationResponse(BaseModel):
    status: str = Field("CREATED")
    category: CategoryResponse
    message: str
