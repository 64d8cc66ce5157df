"""
Company service.

Handles company CRUD and the resolution of which companies a user can reach.

A user reaches a company either directly (acessos_usuario_empresa) or through
an economic group (acessos_usuario_grupo -> associacoes_empresa_grupo). Only
rows with status 'ativo' participate, on the grant and on the company.

Deletes are soft: the company status becomes 'inativo'.
"""

import logging
from typing import Any, Dict, List, Optional, Set, cast

from supabase import Client

from beeconta.services.errors import NotFoundError, PermissionDeniedError
from beeconta.services.joins import unwrap_company
from beeconta.services.result import service_operation
from beeconta.utils.constants import (
    ACCESS_ADMIN,
    COMPANY_EMBED_COLUMNS,
    STATUS_ACTIVE,
    STATUS_INACTIVE,
    TABLES,
)

logger = logging.getLogger(__name__)

COMPANY_WRITABLE_FIELDS = (
    "nome",
    "nome_fantasia",
    "cnpj_cpf",
    "tipo_documento",
    "regime_tributario",
    "url_logo",
    "endereco",
    "contato",
)


def _pick(record: Dict[str, Any], fields: tuple) -> Dict[str, Any]:
    return {key: record[key] for key in fields if key in record}


async def require_admin_access(
    supabase_client: Client,
    user_id: str,
    company_id: str,
    denied_message: str
) -> None:
    """
    Verify the user holds an active ADMIN grant on the company.

    Raises:
        PermissionDeniedError: No active grant, or a grant below ADMIN
    """
    result = (
        supabase_client.table(TABLES['DIRECT_ACCESS'])
        .select("nivel_acesso")
        .eq("usuario_id", user_id)
        .eq("empresa_id", company_id)
        .eq("status", STATUS_ACTIVE)
        .limit(1)
        .execute()
    )

    rows = cast(List[Dict[str, Any]], result.data or [])
    if not rows or rows[0].get("nivel_acesso") != ACCESS_ADMIN:
        logger.warning(f"User {user_id} denied admin action on company {company_id}")
        raise PermissionDeniedError(denied_message)


@service_operation("fetch company")
async def get_company_by_id(
    supabase_client: Client,
    company_id: str
) -> Dict[str, Any]:
    """
    Fetch a single active company by ID.

    Raises (inside the envelope):
        NotFoundError: No active company with this id
    """
    logger.debug(f"Fetching company {company_id}")

    result = (
        supabase_client.table(TABLES['COMPANIES'])
        .select("*")
        .eq("id", company_id)
        .eq("status", STATUS_ACTIVE)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Company {company_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("list user companies")
async def list_user_companies(
    supabase_client: Client,
    user_id: str
) -> List[Dict[str, Any]]:
    """
    Resolve every company the user can reach.

    Steps:
    1. Active direct grants joined with active companies (kept in returned order)
    2. Active group grants -> group ids
    3. Active associations of those groups joined with active companies
    4. Direct companies first, then group companies not seen yet

    Any failed query fails the whole operation; partial results are discarded.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID

    Returns:
        Ordered list of company dicts without duplicate ids
    """
    logger.debug(f"Resolving companies for user {user_id}")

    direct_result = (
        supabase_client.table(TABLES['DIRECT_ACCESS'])
        .select(f"empresa_id, empresas:empresa_id ({COMPANY_EMBED_COLUMNS})")
        .eq("usuario_id", user_id)
        .eq("status", STATUS_ACTIVE)
        .eq("empresas.status", STATUS_ACTIVE)
        .execute()
    )

    companies: List[Dict[str, Any]] = []
    for grant in direct_result.data or []:
        company = unwrap_company(grant.get("empresas"))
        if company is not None:
            companies.append(company)

    group_result = (
        supabase_client.table(TABLES['GROUP_ACCESS'])
        .select("grupo_id")
        .eq("usuario_id", user_id)
        .eq("status", STATUS_ACTIVE)
        .execute()
    )

    group_ids = [
        grant["grupo_id"]
        for grant in group_result.data or []
        if grant.get("grupo_id") is not None
    ]

    seen_ids: Set[Any] = {company["id"] for company in companies}
    direct_count = len(companies)

    if group_ids:
        association_result = (
            supabase_client.table(TABLES['GROUP_ASSOCIATIONS'])
            .select(f"empresa_id, empresas:empresa_id ({COMPANY_EMBED_COLUMNS})")
            .in_("grupo_id", group_ids)
            .eq("status", STATUS_ACTIVE)
            .eq("empresas.status", STATUS_ACTIVE)
            .execute()
        )

        for association in association_result.data or []:
            company = unwrap_company(association.get("empresas"))
            if company is not None and company["id"] not in seen_ids:
                companies.append(company)
                seen_ids.add(company["id"])

    logger.info(
        f"User {user_id} reaches {len(companies)} companies "
        f"({direct_count} direct, {len(companies) - direct_count} via groups)"
    )

    return companies


@service_operation("create company")
async def create_company(
    supabase_client: Client,
    company: Dict[str, Any],
    user_id: str
) -> Dict[str, Any]:
    """
    Create a company and grant its creator ADMIN access.

    Args:
        supabase_client: Authenticated Supabase client
        company: Company fields (nome, cnpj_cpf, tipo_documento, ...)
        user_id: The creating user's ID

    Returns:
        The created company dict
    """
    company_data = _pick(company, COMPANY_WRITABLE_FIELDS)
    company_data["status"] = STATUS_ACTIVE

    logger.info(f"Creating company for user {user_id}: nome='{company_data.get('nome')}'")

    result = supabase_client.table(TABLES['COMPANIES']).insert(company_data).execute()

    if not result.data:
        raise Exception("Failed to create company: no data returned")

    created_company = cast(Dict[str, Any], result.data[0])

    supabase_client.table(TABLES['DIRECT_ACCESS']).insert({
        "usuario_id": user_id,
        "empresa_id": created_company["id"],
        "nivel_acesso": ACCESS_ADMIN,
        "status": STATUS_ACTIVE,
    }).execute()

    logger.info(f"Company created successfully: {created_company['id']}")

    return created_company


@service_operation("update company")
async def update_company(
    supabase_client: Client,
    company_id: str,
    company: Dict[str, Any],
    user_id: str
) -> Dict[str, Any]:
    """
    Update a company. Requires an active ADMIN grant.

    Args:
        company: Fields to change; `status` is accepted in addition to the
                 writable company fields
    """
    await require_admin_access(
        supabase_client,
        user_id,
        company_id,
        "User does not have permission to update this company"
    )

    updates = _pick(company, COMPANY_WRITABLE_FIELDS + ("status",))

    logger.info(f"Updating company {company_id}: {list(updates.keys())}")

    result = (
        supabase_client.table(TABLES['COMPANIES'])
        .update(updates)
        .eq("id", company_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Company {company_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("delete company")
async def delete_company(
    supabase_client: Client,
    company_id: str,
    user_id: str
) -> None:
    """
    Soft-delete a company (status -> 'inativo'). Requires an active ADMIN grant.
    """
    await require_admin_access(
        supabase_client,
        user_id,
        company_id,
        "User does not have permission to delete this company"
    )

    logger.info(f"Marking company {company_id} as inactive")

    (
        supabase_client.table(TABLES['COMPANIES'])
        .update({"status": STATUS_INACTIVE})
        .eq("id", company_id)
        .execute()
    )

    return None


def find_company(
    companies: List[Dict[str, Any]],
    company_id: str
) -> Optional[Dict[str, Any]]:
    """Return the company with this id from an already-resolved list."""
    for company in companies:
        if company.get("id") == company_id:
            return company
    return None
