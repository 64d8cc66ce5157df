"""
Transaction persistence service.

Transactions belong to a company and may reference a bank account, a credit
card and a category (all embedded on reads).

Deleting a transaction sets its status to 'cancelada'; the row is kept.
"""

import logging
from typing import Any, Dict, List, Optional, cast

from supabase import Client

from beeconta.services.errors import NotFoundError
from beeconta.services.result import service_operation
from beeconta.utils.constants import TABLES, TRANSACTION_CANCELLED, TRANSACTION_PENDING

logger = logging.getLogger(__name__)

TRANSACTION_SELECT = (
    "*, "
    "conta_bancaria:conta_bancaria_id (*), "
    "cartao_credito:cartao_credito_id (*), "
    "categoria:categoria_id (*)"
)

TRANSACTION_FIELDS = (
    "tipo",
    "descricao",
    "valor",
    "data_transacao",
    "data_competencia",
    "conta_bancaria_id",
    "cartao_credito_id",
    "categoria_id",
    "status",
    "recorrente",
    "parcela_atual",
    "total_parcelas",
    "observacoes",
    "anexos",
)

# Equality filters accepted by list_company_transactions
TRANSACTION_EQ_FILTERS = (
    "tipo",
    "conta_bancaria_id",
    "cartao_credito_id",
    "categoria_id",
    "status",
)


@service_operation("fetch transaction")
async def get_transaction_by_id(
    supabase_client: Client,
    transaction_id: str
) -> Dict[str, Any]:
    result = (
        supabase_client.table(TABLES['TRANSACTIONS'])
        .select(TRANSACTION_SELECT)
        .eq("id", transaction_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Transaction {transaction_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("list transactions")
async def list_company_transactions(
    supabase_client: Client,
    company_id: str,
    filters: Optional[Dict[str, Any]] = None
) -> List[Dict[str, Any]]:
    """
    List a company's transactions, newest first.

    Args:
        supabase_client: Authenticated Supabase client
        company_id: Owning company
        filters: Optional filters:
            - data_inicio: ISO date, inclusive lower bound on data_transacao
            - data_fim: ISO date, inclusive upper bound on data_transacao
            - tipo, conta_bancaria_id, cartao_credito_id, categoria_id, status:
              equality filters

    Returns:
        List of transaction dicts with embedded account, card and category
    """
    filters = filters or {}

    query = (
        supabase_client.table(TABLES['TRANSACTIONS'])
        .select(TRANSACTION_SELECT)
        .eq("empresa_id", company_id)
    )

    if filters.get("data_inicio"):
        query = query.gte("data_transacao", filters["data_inicio"])

    if filters.get("data_fim"):
        query = query.lte("data_transacao", filters["data_fim"])

    for column in TRANSACTION_EQ_FILTERS:
        if filters.get(column):
            query = query.eq(column, filters[column])

    result = query.order("data_transacao", desc=True).execute()

    transactions = cast(List[Dict[str, Any]], result.data or [])
    logger.info(
        f"Found {len(transactions)} transactions for company {company_id} "
        f"(filters={sorted(k for k, v in filters.items() if v)})"
    )

    return transactions


@service_operation("create transaction")
async def create_transaction(
    supabase_client: Client,
    transaction: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Create a transaction.

    Defaults: status 'pendente', recorrente False. transacao_pai_id links an
    installment to its parent and can only be set here.
    """
    transaction_data = {
        key: transaction[key] for key in TRANSACTION_FIELDS if key in transaction
    }
    transaction_data["empresa_id"] = transaction.get("empresa_id")
    transaction_data["status"] = transaction.get("status") or TRANSACTION_PENDING
    transaction_data["recorrente"] = bool(transaction.get("recorrente") or False)
    if transaction.get("transacao_pai_id"):
        transaction_data["transacao_pai_id"] = transaction["transacao_pai_id"]

    logger.info(
        f"Creating transaction for company {transaction_data['empresa_id']}: "
        f"tipo={transaction_data.get('tipo')}, status={transaction_data['status']}"
    )

    result = supabase_client.table(TABLES['TRANSACTIONS']).insert(transaction_data).execute()

    if not result.data:
        raise Exception("Failed to create transaction: no data returned")

    created_transaction = cast(Dict[str, Any], result.data[0])
    logger.info(f"Transaction created successfully: id={created_transaction.get('id')}")

    return created_transaction


@service_operation("update transaction")
async def update_transaction(
    supabase_client: Client,
    transaction_id: str,
    transaction: Dict[str, Any]
) -> Dict[str, Any]:
    updates = {
        key: transaction[key] for key in TRANSACTION_FIELDS if key in transaction
    }

    logger.info(f"Updating transaction {transaction_id}: {list(updates.keys())}")

    result = (
        supabase_client.table(TABLES['TRANSACTIONS'])
        .update(updates)
        .eq("id", transaction_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Transaction {transaction_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("delete transaction")
async def delete_transaction(
    supabase_client: Client,
    transaction_id: str
) -> None:
    logger.info(f"Cancelling transaction {transaction_id}")

    (
        supabase_client.table(TABLES['TRANSACTIONS'])
        .update({"status": TRANSACTION_CANCELLED})
        .eq("id", transaction_id)
        .execute()
    )

    return None
