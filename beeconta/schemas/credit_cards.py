"""
Pydantic schemas for credit card endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from beeconta.schemas.bank_accounts import BankResponse, CurrencyResponse

CreditCardStatus = Literal["ativo", "inativo", "bloqueado", "cancelado"]


class CreditCardResponse(BaseModel):
    id: str = Field(..., description="Credit card UUID")
    empresa_id: str
    banco_id: Optional[str] = None
    descricao: str
    bandeira: str = Field(..., description="Card network", examples=["VISA", "MASTERCARD"])
    ultimos_digitos: str = Field(..., description="Last four digits")
    nome_titular: str
    data_fechamento: int = Field(..., description="Statement closing day of month")
    data_vencimento: int = Field(..., description="Due day of month")
    limite: float
    moeda_id: str
    internacional: bool
    status: CreditCardStatus
    data_criacao: Optional[str] = None
    data_atualizacao: Optional[str] = None
    banco: Optional[BankResponse] = None
    moeda: Optional[CurrencyResponse] = None


class CreditCardListResponse(BaseModel):
    cards: List[CreditCardResponse]
    count: int


class CreditCardCreateRequest(BaseModel):
    banco_id: Optional[str] = None
    descricao: str = Field(..., min_length=1, max_length=200)
    bandeira: str = Field(..., min_length=1, max_length=30)
    ultimos_digitos: str = Field(..., pattern=r'^\d{4}$', examples=["4321"])
    nome_titular: str = Field(..., min_length=1, max_length=200)
    data_fechamento: int = Field(..., ge=1, le=31)
    data_vencimento: int = Field(..., ge=1, le=31)
    limite: float = Field(..., ge=0)
    moeda_id: str
    internacional: bool = False


class CreditCardUpdateRequest(BaseModel):
    banco_id: Optional[str] = None
    descricao: Optional[str] = Field(None, min_length=1, max_length=200)
    bandeira: Optional[str] = Field(None, min_length=1, max_length=30)
    ultimos_digitos: Optional[str] = Field(None, pattern=r'^\d{4}$')
    nome_titular: Optional[str] = Field(None, min_length=1, max_length=200)
    data_fechamento: Optional[int] = Field(None, ge=1, le=31)
    data_vencimento: Optional[int] = Field(None, ge=1, le=31)
    limite: Optional[float] = Field(None, ge=0)
    moeda_id: Optional[str] = None
    internacional: Optional[bool] = None
    status: Optional[CreditCardStatus] = None


class CreditCardMutationResponse(BaseModel):
    status: str = Field(..., description="CREATED or UPDATED")
    card: CreditCardResponse
    message: str
