"""
Pydantic schemas for transaction endpoints.

A transaction is an income (RECEITA), expense (DESPESA) or transfer
(TRANSFERENCIA) of a company, paid through a bank account or a credit card.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

TransactionType = Literal["RECEITA", "DESPESA", "TRANSFERENCIA"]
TransactionStatus = Literal["pendente", "efetivada", "cancelada"]

ISO_DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


class TransactionResponse(BaseModel):
    """
    Transaction details with account, card and category embedded.
    """
    id: str = Field(..., description="Transaction UUID")
    empresa_id: str
    tipo: TransactionType
    descricao: str
    valor: float = Field(..., description="Amount, always positive")
    data_transacao: str = Field(..., description="Transaction date (YYYY-MM-DD)")
    data_competencia: Optional[str] = Field(None, description="Accrual date")
    conta_bancaria_id: Optional[str] = None
    cartao_credito_id: Optional[str] = None
    categoria_id: Optional[str] = None
    status: TransactionStatus
    recorrente: bool = False
    parcela_atual: Optional[int] = Field(None, description="Installment number")
    total_parcelas: Optional[int] = Field(None, description="Number of installments")
    transacao_pai_id: Optional[str] = Field(None, description="Parent of an installment series")
    observacoes: Optional[str] = None
    anexos: Optional[List[str]] = Field(None, description="Attachment URLs")
    data_criacao: Optional[str] = None
    data_atualizacao: Optional[str] = None
    conta_bancaria: Optional[Dict[str, Any]] = None
    cartao_credito: Optional[Dict[str, Any]] = None
    categoria: Optional[Dict[str, Any]] = None


class TransactionListResponse(BaseModel):
    transactions: List[TransactionResponse] = Field(..., description="Newest first")
    count: int


class TransactionCreateRequest(BaseModel):
    """
    Request to record a transaction.
    """
    tipo: TransactionType = Field(..., examples=["DESPESA"])
    descricao: str = Field(..., min_length=1, max_length=300, examples=["Compra de embalagens"])
    valor: float = Field(..., gt=0, examples=[152.9])
    data_transacao: str = Field(..., pattern=ISO_DATE_PATTERN, examples=["2025-03-14"])
    data_competencia: Optional[str] = Field(None, pattern=ISO_DATE_PATTERN)
    conta_bancaria_id: Optional[str] = None
    cartao_credito_id: Optional[str] = None
    categoria_id: Optional[str] = None
    status: TransactionStatus = "pendente"
    recorrente: bool = False
    parcela_atual: Optional[int] = Field(None, ge=1)
    total_parcelas: Optional[int] = Field(None, ge=1)
    transacao_pai_id: Optional[str] = None
    observacoes: Optional[str] = Field(None, max_length=1000)
    anexos: Optional[List[str]] = None


class TransactionUpdateRequest(BaseModel):
    """
    Request to update a transaction. The installment parent link cannot be changed.
    """
    tipo: Optional[TransactionType] = None
    descricao: Optional[str] = Field(None, min_length=1, max_length=300)
    valor: Optional[float] = Field(None, gt=0)
    data_transacao: Optional[str] = Field(None, pattern=ISO_DATE_PATTERN)
    data_competencia: Optional[str] = Field(None, pattern=ISO_DATE_PATTERN)
    conta_bancaria_id: Optional[str] = None
    cartao_credito_id: Optional[str] = None
    categoria_id: Optional[str] = None
    status: Optional[TransactionStatus] = None
    recorrente: Optional[bool] = None
    parcela_atual: Optional[int] = Field(None, ge=1)
    total_parcelas: Optional[int] = Field(None, ge=1)
    observacoes: Optional[str] = Field(None, max_length=1000)
    anexos: Optional[List[str]] = None


class TransactionMutationResponse(BaseModel):
    status: str = Field(..., description="CREATED or UPDATED")
    transaction: TransactionResponse
    message: str
