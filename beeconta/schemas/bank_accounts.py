"""
Pydantic schemas for bank account endpoints and the bank/currency catalogs.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

BankAccountType = Literal["CORRENTE", "POUPANCA", "INVESTIMENTO", "PAGAMENTO"]
BankAccountStatus = Literal["ativa", "inativa", "encerrada"]

ISO_DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


# --- Catalogs ---

class BankResponse(BaseModel):
    id: str
    codigo: str = Field(..., description="Bank code (e.g. '001')")
    nome: str
    url_logo: Optional[str] = None
    pais: Optional[str] = None
    status: str = "ativo"


class CurrencyResponse(BaseModel):
    id: str
    codigo: str = Field(..., description="ISO currency code", examples=["BRL"])
    nome: str
    simbolo: str = Field(..., examples=["R$"])
    pais: Optional[str] = None
    status: str = "ativa"


class BankListResponse(BaseModel):
    banks: List[BankResponse]
    count: int


class CurrencyListResponse(BaseModel):
    currencies: List[CurrencyResponse]
    count: int


# --- Bank account models ---

class BankAccountResponse(BaseModel):
    """
    Bank account details with the bank and currency embedded.
    """
    id: str = Field(..., description="Bank account UUID")
    empresa_id: str = Field(..., description="Owning company UUID")
    banco_id: str
    agencia: str = Field(..., description="Branch number")
    conta: str = Field(..., description="Account number")
    digito: Optional[str] = Field(None, description="Check digit")
    tipo_conta: BankAccountType
    descricao: str
    saldo_inicial: float = Field(..., description="Opening balance")
    data_saldo_inicial: str = Field(..., description="Date of the opening balance")
    moeda_id: str
    status: BankAccountStatus
    data_criacao: Optional[str] = None
    data_atualizacao: Optional[str] = None
    banco: Optional[BankResponse] = None
    moeda: Optional[CurrencyResponse] = None


class BankAccountListResponse(BaseModel):
    accounts: List[BankAccountResponse] = Field(..., description="Active accounts of the company")
    count: int


class BankAccountCreateRequest(BaseModel):
    """
    Request to open a bank account for a company.
    """
    banco_id: str = Field(..., description="Bank UUID")
    agencia: str = Field(..., min_length=1, max_length=20)
    conta: str = Field(..., min_length=1, max_length=30)
    digito: Optional[str] = Field(None, max_length=5)
    tipo_conta: BankAccountType = "CORRENTE"
    descricao: str = Field(..., min_length=1, max_length=200, examples=["Conta movimento"])
    saldo_inicial: float = Field(0.0, description="Opening balance")
    data_saldo_inicial: str = Field(
        ...,
        pattern=ISO_DATE_PATTERN,
        examples=["2025-01-01"]
    )
    moeda_id: str = Field(..., description="Currency UUID")


class BankAccountUpdateRequest(BaseModel):
    """
    Request to update a bank account. The opening balance cannot be changed.
    """
    banco_id: Optional[str] = None
    agencia: Optional[str] = Field(None, min_length=1, max_length=20)
    conta: Optional[str] = Field(None, min_length=1, max_length=30)
    digito: Optional[str] = Field(None, max_length=5)
    tipo_conta: Optional[BankAccountType] = None
    descricao: Optional[str] = Field(None, min_length=1, max_length=200)
    moeda_id: Optional[str] = None
    status: Optional[BankAccountStatus] = None


class BankAccountMutationResponse(BaseModel):
    status: str = Field(..., description="CREATED or UPDATED")
    account: BankAccountResponse
    message: str
