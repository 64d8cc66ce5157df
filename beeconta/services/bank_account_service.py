"""
Bank account service.

Bank accounts belong to a company. Each one references a bank (bancos) and a
currency (moedas); both are embedded on reads.

Deleting an account never removes the row: its status becomes 'encerrada',
so it disappears from the active listing but stays fetchable by id.
"""

import logging
from typing import Any, Dict, List, cast

from supabase import Client

from beeconta.services.errors import NotFoundError
from beeconta.services.result import service_operation
from beeconta.utils.constants import (
    BANK_ACCOUNT_CLOSED,
    STATUS_ACTIVE,
    STATUS_ACTIVE_F,
    TABLES,
)

logger = logging.getLogger(__name__)

BANK_ACCOUNT_SELECT = "*, banco:banco_id (*), moeda:moeda_id (*)"

BANK_ACCOUNT_CREATE_FIELDS = (
    "empresa_id",
    "banco_id",
    "agencia",
    "conta",
    "digito",
    "tipo_conta",
    "descricao",
    "saldo_inicial",
    "data_saldo_inicial",
    "moeda_id",
)

# Opening balance and owning company are fixed after creation
BANK_ACCOUNT_UPDATE_FIELDS = (
    "banco_id",
    "agencia",
    "conta",
    "digito",
    "tipo_conta",
    "descricao",
    "moeda_id",
    "status",
)


@service_operation("fetch bank account")
async def get_bank_account_by_id(
    supabase_client: Client,
    account_id: str
) -> Dict[str, Any]:
    """
    Fetch a bank account by ID, whatever its status.
    """
    logger.debug(f"Fetching bank account {account_id}")

    result = (
        supabase_client.table(TABLES['BANK_ACCOUNTS'])
        .select(BANK_ACCOUNT_SELECT)
        .eq("id", account_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Bank account {account_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("list bank accounts")
async def list_company_bank_accounts(
    supabase_client: Client,
    company_id: str
) -> List[Dict[str, Any]]:
    """
    List the company's active bank accounts ordered by description.
    """
    result = (
        supabase_client.table(TABLES['BANK_ACCOUNTS'])
        .select(BANK_ACCOUNT_SELECT)
        .eq("empresa_id", company_id)
        .eq("status", STATUS_ACTIVE_F)
        .order("descricao")
        .execute()
    )

    accounts = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Found {len(accounts)} bank accounts for company {company_id}")

    return accounts


@service_operation("create bank account")
async def create_bank_account(
    supabase_client: Client,
    account: Dict[str, Any]
) -> Dict[str, Any]:
    account_data = {
        key: account[key] for key in BANK_ACCOUNT_CREATE_FIELDS if key in account
    }
    account_data["status"] = STATUS_ACTIVE_F

    logger.info(
        f"Creating bank account for company {account_data.get('empresa_id')}: "
        f"tipo_conta={account_data.get('tipo_conta')}"
    )

    result = supabase_client.table(TABLES['BANK_ACCOUNTS']).insert(account_data).execute()

    if not result.data:
        raise Exception("Failed to create bank account: no data returned")

    created_account = cast(Dict[str, Any], result.data[0])
    logger.info(f"Bank account created successfully: {created_account.get('id')}")

    return created_account


@service_operation("update bank account")
async def update_bank_account(
    supabase_client: Client,
    account_id: str,
    account: Dict[str, Any]
) -> Dict[str, Any]:
    updates = {
        key: account[key] for key in BANK_ACCOUNT_UPDATE_FIELDS if key in account
    }

    logger.info(f"Updating bank account {account_id}: {list(updates.keys())}")

    result = (
        supabase_client.table(TABLES['BANK_ACCOUNTS'])
        .update(updates)
        .eq("id", account_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Bank account {account_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("delete bank account")
async def delete_bank_account(
    supabase_client: Client,
    account_id: str
) -> None:
    """
    Soft-delete a bank account (status -> 'encerrada').
    """
    logger.info(f"Closing bank account {account_id}")

    (
        supabase_client.table(TABLES['BANK_ACCOUNTS'])
        .update({"status": BANK_ACCOUNT_CLOSED})
        .eq("id", account_id)
        .execute()
    )

    return None


@service_operation("list banks")
async def list_banks(supabase_client: Client) -> List[Dict[str, Any]]:
    result = (
        supabase_client.table(TABLES['BANKS'])
        .select("*")
        .eq("status", STATUS_ACTIVE)
        .order("nome")
        .execute()
    )
    return cast(List[Dict[str, Any]], result.data or [])


@service_operation("list currencies")
async def list_currencies(supabase_client: Client) -> List[Dict[str, Any]]:
    result = (
        supabase_client.table(TABLES['CURRENCIES'])
        .select("*")
        .eq("status", STATUS_ACTIVE_F)
        .order("nome")
        .execute()
    )
    return cast(List[Dict[str, Any]], result.data or [])
