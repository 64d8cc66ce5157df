"""
Pydantic schemas for the dashboard financial summary.
"""

from pydantic import BaseModel, Field


class FinancialSummaryResponse(BaseModel):
    """
    Month-over-month summary of settled transactions.

    Variations are percentages. When the previous month is zero or negative
    the variation is reported as 100.
    """
    saldo_total: float = Field(..., description="Sum of opening balances of active accounts")
    receitas_mes_atual: float
    despesas_mes_atual: float
    saldo_mes_atual: float
    receitas_mes_anterior: float
    despesas_mes_anterior: float
    saldo_mes_anterior: float
    variacao_receitas: float
    variacao_despesas: float
    variacao_saldo: float

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "saldo_total": 15000.0,
                    "receitas_mes_atual": 8200.0,
                    "despesas_mes_atual": 5100.0,
                    "saldo_mes_atual": 3100.0,
                    "receitas_mes_anterior": 7600.0,
                    "despesas_mes_anterior": 5300.0,
                    "saldo_mes_anterior": 2300.0,
                    "variacao_receitas": 7.89,
                    "variacao_despesas": -3.77,
                    "variacao_saldo": 34.78
                }
            ]
        }
    }
