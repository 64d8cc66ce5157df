"""
Economic group service.

An economic group bundles companies. Users holding an active group grant
(acessos_usuario_grupo) reach every company actively associated with the
group (associacoes_empresa_grupo).

Deletes are soft: groups and associations move to status 'inativo'.
"""

import logging
from typing import Any, Dict, List, Optional, cast

from supabase import Client

from beeconta.services.errors import NotFoundError, PermissionDeniedError
from beeconta.services.joins import normalize_association, unwrap_group
from beeconta.services.result import service_operation
from beeconta.utils.constants import (
    ACCESS_ADMIN,
    COMPANY_EMBED_COLUMNS,
    STATUS_ACTIVE,
    STATUS_INACTIVE,
    TABLES,
)

logger = logging.getLogger(__name__)

GROUP_WRITABLE_FIELDS = ("nome", "descricao", "url_logo")


async def _require_group_admin(
    supabase_client: Client,
    user_id: str,
    group_id: str,
    denied_message: str
) -> None:
    result = (
        supabase_client.table(TABLES['GROUP_ACCESS'])
        .select("nivel_acesso")
        .eq("usuario_id", user_id)
        .eq("grupo_id", group_id)
        .eq("status", STATUS_ACTIVE)
        .limit(1)
        .execute()
    )

    rows = cast(List[Dict[str, Any]], result.data or [])
    if not rows or rows[0].get("nivel_acesso") != ACCESS_ADMIN:
        logger.warning(f"User {user_id} denied admin action on group {group_id}")
        raise PermissionDeniedError(denied_message)


@service_operation("fetch economic group")
async def get_group_by_id(
    supabase_client: Client,
    group_id: str
) -> Dict[str, Any]:
    result = (
        supabase_client.table(TABLES['GROUPS'])
        .select("*")
        .eq("id", group_id)
        .eq("status", STATUS_ACTIVE)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Economic group {group_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("list user groups")
async def list_user_groups(
    supabase_client: Client,
    user_id: str
) -> List[Dict[str, Any]]:
    """
    List the active groups the user holds an active grant on.
    """
    result = (
        supabase_client.table(TABLES['GROUP_ACCESS'])
        .select("grupos_economicos:grupo_id (id, nome, descricao, url_logo, status)")
        .eq("usuario_id", user_id)
        .eq("status", STATUS_ACTIVE)
        .eq("grupos_economicos.status", STATUS_ACTIVE)
        .execute()
    )

    groups: List[Dict[str, Any]] = []
    for grant in result.data or []:
        group = unwrap_group(grant.get("grupos_economicos"))
        if group is not None:
            groups.append(group)

    logger.info(f"Found {len(groups)} groups for user {user_id}")

    return groups


@service_operation("create economic group")
async def create_group(
    supabase_client: Client,
    group: Dict[str, Any],
    user_id: str
) -> Dict[str, Any]:
    """
    Create a group and grant its creator ADMIN access on it.
    """
    group_data = {key: group[key] for key in GROUP_WRITABLE_FIELDS if key in group}
    group_data["status"] = STATUS_ACTIVE

    logger.info(f"Creating economic group for user {user_id}: nome='{group_data.get('nome')}'")

    result = supabase_client.table(TABLES['GROUPS']).insert(group_data).execute()

    if not result.data:
        raise Exception("Failed to create economic group: no data returned")

    created_group = cast(Dict[str, Any], result.data[0])

    supabase_client.table(TABLES['GROUP_ACCESS']).insert({
        "usuario_id": user_id,
        "grupo_id": created_group["id"],
        "nivel_acesso": ACCESS_ADMIN,
        "status": STATUS_ACTIVE,
    }).execute()

    logger.info(f"Economic group created successfully: {created_group['id']}")

    return created_group


@service_operation("update economic group")
async def update_group(
    supabase_client: Client,
    group_id: str,
    group: Dict[str, Any],
    user_id: str
) -> Dict[str, Any]:
    await _require_group_admin(
        supabase_client,
        user_id,
        group_id,
        "User does not have permission to update this group"
    )

    updates = {
        key: group[key]
        for key in GROUP_WRITABLE_FIELDS + ("status",)
        if key in group
    }

    logger.info(f"Updating economic group {group_id}: {list(updates.keys())}")

    result = (
        supabase_client.table(TABLES['GROUPS'])
        .update(updates)
        .eq("id", group_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"Economic group {group_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("delete economic group")
async def delete_group(
    supabase_client: Client,
    group_id: str,
    user_id: str
) -> None:
    await _require_group_admin(
        supabase_client,
        user_id,
        group_id,
        "User does not have permission to delete this group"
    )

    logger.info(f"Marking economic group {group_id} as inactive")

    (
        supabase_client.table(TABLES['GROUPS'])
        .update({"status": STATUS_INACTIVE})
        .eq("id", group_id)
        .execute()
    )

    return None


@service_operation("list group companies")
async def list_group_companies(
    supabase_client: Client,
    group_id: str
) -> List[Dict[str, Any]]:
    """
    List the active associations of a group, each with its embedded company.

    Rows missing grupo_id/empresa_id are dropped.
    """
    result = (
        supabase_client.table(TABLES['GROUP_ASSOCIATIONS'])
        .select(
            "grupo_id, empresa_id, empresa_principal, status, "
            f"empresa:empresa_id ({COMPANY_EMBED_COLUMNS})"
        )
        .eq("grupo_id", group_id)
        .eq("status", STATUS_ACTIVE)
        .eq("empresa.status", STATUS_ACTIVE)
        .execute()
    )

    associations: List[Dict[str, Any]] = []
    for row in result.data or []:
        association = normalize_association(row)
        if association is not None:
            associations.append(association)

    return associations


@service_operation("add company to group")
async def add_company_to_group(
    supabase_client: Client,
    group_id: str,
    company_id: str,
    is_primary: bool = False
) -> Dict[str, Any]:
    """
    Associate a company with a group.

    An existing association (of any status) is reactivated and its primary
    flag updated; otherwise a new one is inserted.
    """
    existing = (
        supabase_client.table(TABLES['GROUP_ASSOCIATIONS'])
        .select("*")
        .eq("grupo_id", group_id)
        .eq("empresa_id", company_id)
        .limit(1)
        .execute()
    )

    if existing.data:
        logger.info(f"Reactivating association of company {company_id} with group {group_id}")
        result = (
            supabase_client.table(TABLES['GROUP_ASSOCIATIONS'])
            .update({"empresa_principal": is_primary, "status": STATUS_ACTIVE})
            .eq("grupo_id", group_id)
            .eq("empresa_id", company_id)
            .execute()
        )
    else:
        logger.info(f"Associating company {company_id} with group {group_id}")
        result = (
            supabase_client.table(TABLES['GROUP_ASSOCIATIONS'])
            .insert({
                "grupo_id": group_id,
                "empresa_id": company_id,
                "empresa_principal": is_primary,
                "status": STATUS_ACTIVE,
            })
            .execute()
        )

    if not result.data:
        raise Exception("Failed to save group association: no data returned")

    return cast(Dict[str, Any], result.data[0])


@service_operation("remove company from group")
async def remove_company_from_group(
    supabase_client: Client,
    group_id: str,
    company_id: str
) -> Optional[Dict[str, Any]]:
    logger.info(f"Deactivating association of company {company_id} with group {group_id}")

    (
        supabase_client.table(TABLES['GROUP_ASSOCIATIONS'])
        .update({"status": STATUS_INACTIVE})
        .eq("grupo_id", group_id)
        .eq("empresa_id", company_id)
        .execute()
    )

    return None
