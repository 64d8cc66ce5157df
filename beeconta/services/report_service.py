"""
Financial report service.

Builds the dashboard summary of a company: total balance of its active bank
accounts plus income, expense and balance for two months, with the
percentage variation between them.

Only settled transactions (status 'efetivada') count.
"""

import calendar
import logging
from typing import Any, Dict, List, Tuple, cast

from supabase import Client

from beeconta.services.result import service_operation
from beeconta.utils.constants import STATUS_ACTIVE_F, TABLES, TRANSACTION_SETTLED

logger = logging.getLogger(__name__)


def month_bounds(month: str) -> Tuple[str, str]:
    """
    Return the first and last ISO dates of a 'YYYY-MM' month.

    Raises:
        ValueError: If month is not in YYYY-MM format
    """
    try:
        year_str, month_str = month.split("-")
        year, month_number = int(year_str), int(month_str)
    except ValueError:
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")

    if not 1 <= month_number <= 12:
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")

    last_day = calendar.monthrange(year, month_number)[1]
    return (
        f"{year:04d}-{month_number:02d}-01",
        f"{year:04d}-{month_number:02d}-{last_day:02d}",
    )


def variation(current: float, previous: float) -> float:
    """Percentage change from previous to current; 100 when previous <= 0."""
    if previous > 0:
        return ((current - previous) / previous) * 100
    return 100.0


def _sum_by_type(transactions: List[Dict[str, Any]], transaction_type: str) -> float:
    return sum(
        float(t.get("valor") or 0)
        for t in transactions
        if t.get("tipo") == transaction_type
    )


async def _month_totals(
    supabase_client: Client,
    company_id: str,
    month: str
) -> Tuple[float, float]:
    start, end = month_bounds(month)

    result = (
        supabase_client.table(TABLES['TRANSACTIONS'])
        .select("tipo, valor")
        .eq("empresa_id", company_id)
        .eq("status", TRANSACTION_SETTLED)
        .gte("data_transacao", start)
        .lte("data_transacao", end)
        .execute()
    )

    transactions = cast(List[Dict[str, Any]], result.data or [])
    return _sum_by_type(transactions, "RECEITA"), _sum_by_type(transactions, "DESPESA")


@service_operation("build financial summary")
async def get_financial_summary(
    supabase_client: Client,
    company_id: str,
    current_month: str,
    previous_month: str
) -> Dict[str, float]:
    """
    Build the financial summary of a company.

    Args:
        supabase_client: Authenticated Supabase client
        company_id: Company to report on
        current_month: 'YYYY-MM'
        previous_month: 'YYYY-MM'

    Returns:
        Dict with saldo_total, receitas/despesas/saldo for both months and
        variacao_receitas / variacao_despesas / variacao_saldo (percent)
    """
    logger.info(
        f"Building financial summary for company {company_id}: "
        f"{previous_month} -> {current_month}"
    )

    accounts_result = (
        supabase_client.table(TABLES['BANK_ACCOUNTS'])
        .select("saldo_inicial")
        .eq("empresa_id", company_id)
        .eq("status", STATUS_ACTIVE_F)
        .execute()
    )
    accounts = cast(List[Dict[str, Any]], accounts_result.data or [])
    total_balance = sum(float(a.get("saldo_inicial") or 0) for a in accounts)

    current_income, current_expense = await _month_totals(
        supabase_client, company_id, current_month
    )
    previous_income, previous_expense = await _month_totals(
        supabase_client, company_id, previous_month
    )

    current_balance = current_income - current_expense
    previous_balance = previous_income - previous_expense

    return {
        "saldo_total": total_balance,
        "receitas_mes_atual": current_income,
        "despesas_mes_atual": current_expense,
        "saldo_mes_atual": current_balance,
        "receitas_mes_anterior": previous_income,
        "despesas_mes_anterior": previous_expense,
        "saldo_mes_anterior": previous_balance,
        "variacao_receitas": variation(current_income, previous_income),
        "variacao_despesas": variation(current_expense, previous_expense),
        "variacao_saldo": variation(current_balance, previous_balance),
    }
