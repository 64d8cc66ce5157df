"""
Credit card service.

Cards belong to a company and optionally reference the issuing bank.
Deleting a card sets its status to 'cancelado'.
"""

import logging
from typing import Any, Dict, List, cast

from supabase import Client

from beeconta.services.errors import NotFoundError
from beeconta.services.result import service_operation
from beeconta.utils.constants import CREDIT_CARD_CANCELLED, STATUS_ACTIVE, TABLES

logger = logging.getLogger(__name__)

CREDIT_CARD_SELECT = "*, banco:banco_id (*), moeda:moeda_id (*)"

CREDIT_CARD_FIELDS = (
    "banco_id",
    "descricao",
    "bandeira",
    "ultimos_digitos",
    "nome_titular",
    "data_fechamento",
    "data_vencimento",
    "limite",
    "moeda_id",
    "internacional",
)


@service_operation("fetch credit card")
async def get_credit_card_by_id(
    supabase_client: Client,
    card_id: str
) -> Dict[str, Any]:
    result = (
        supabase_client.table(TABLES['CREDIT_CARDS'])
        .select(CREDIT_CARD_SELECT)
        .eq("id", card_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Credit card {card_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("list credit cards")
async def list_company_credit_cards(
    supabase_client: Client,
    company_id: str
) -> List[Dict[str, Any]]:
    result = (
        supabase_client.table(TABLES['CREDIT_CARDS'])
        .select(CREDIT_CARD_SELECT)
        .eq("empresa_id", company_id)
        .eq("status", STATUS_ACTIVE)
        .order("descricao")
        .execute()
    )

    cards = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Found {len(cards)} credit cards for company {company_id}")

    return cards


@service_operation("create credit card")
async def create_credit_card(
    supabase_client: Client,
    card: Dict[str, Any]
) -> Dict[str, Any]:
    card_data = {key: card[key] for key in CREDIT_CARD_FIELDS if key in card}
    card_data["empresa_id"] = card.get("empresa_id")
    card_data["status"] = STATUS_ACTIVE

    logger.info(
        f"Creating credit card for company {card_data['empresa_id']}: "
        f"bandeira={card_data.get('bandeira')}"
    )

    result = supabase_client.table(TABLES['CREDIT_CARDS']).insert(card_data).execute()

    if not result.data:
        raise Exception("Failed to create credit card: no data returned")

    return cast(Dict[str, Any], result.data[0])


@service_operation("update credit card")
async def update_credit_card(
    supabase_client: Client,
    card_id: str,
    card: Dict[str, Any]
) -> Dict[str, Any]:
    updates = {
        key: card[key] for key in CREDIT_CARD_FIELDS + ("status",) if key in card
    }

    logger.info(f"Updating credit card {card_id}: {list(updates.keys())}")

    result = (
        supabase_client.table(TABLES['CREDIT_CARDS'])
        .update(updates)
        .eq("id", card_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Credit card {card_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("delete credit card")
async def delete_credit_card(
    supabase_client: Client,
    card_id: str
) -> None:
    logger.info(f"Cancelling credit card {card_id}")

    (
        supabase_client.table(TABLES['CREDIT_CARDS'])
        .update({"status": CREDIT_CARD_CANCELLED})
        .eq("id", card_id)
        .execute()
    )

    return None
