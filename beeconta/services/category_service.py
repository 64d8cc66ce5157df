"""
Category persistence service.

Categories classify transactions. A category either belongs to a company
(empresa_id set) or is global (empresa_id IS NULL) and visible to every
company. Type 'AMBOS' matches both income (RECEITA) and expense (DESPESA).
"""

import logging
from typing import Any, Dict, List, Optional, cast

from supabase import Client

from beeconta.services.result import service_operation
from beeconta.utils.constants import STATUS_ACTIVE_F, TABLES

logger = logging.getLogger(__name__)

CATEGORY_SELECT = "*, categoria_pai:categoria_pai_id (*)"

CATEGORY_FIELDS = ("empresa_id", "nome", "tipo", "cor", "icone", "categoria_pai_id")


@service_operation("list categories")
async def list_company_categories(
    supabase_client: Client,
    company_id: str,
    category_type: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    List active categories available to a company.

    Args:
        supabase_client: Authenticated Supabase client
        company_id: Company whose own categories are included with the globals
        category_type: Optional 'RECEITA' / 'DESPESA' / 'AMBOS'; 'AMBOS'
                       categories always match

    Returns:
        Categories ordered by name, each with its parent embedded
    """
    logger.debug(f"Fetching categories for company {company_id} (tipo={category_type})")

    query = (
        supabase_client.table(TABLES['CATEGORIES'])
        .select(CATEGORY_SELECT)
        .eq("status", STATUS_ACTIVE_F)
        .or_(f"empresa_id.eq.{company_id},empresa_id.is.null")
    )

    if category_type:
        query = query.or_(f"tipo.eq.{category_type},tipo.eq.AMBOS")

    result = query.order("nome").execute()

    categories = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(categories)} categories for company {company_id}")

    return categories


@service_operation("create category")
async def create_category(
    supabase_client: Client,
    category: Dict[str, Any]
) -> Dict[str, Any]:
    category_data = {key: category[key] for key in CATEGORY_FIELDS if key in category}
    category_data["status"] = STATUS_ACTIVE_F

    logger.info(
        f"Creating category for company {category_data.get('empresa_id')}: "
        f"name='{category_data.get('nome')}', tipo={category_data.get('tipo')}"
    )

    result = supabase_client.table(TABLES['CATEGORIES']).insert(category_data).execute()

    if not result.data:
        raise Exception("Failed to create category: no data returned")

    return cast(Dict[str, Any], result.data[0])
