"""
Economic group API endpoints.

Groups bundle companies; a grant on a group reaches every active company
associated with it. Changes to a group require ADMIN access on the group.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.companies import DeleteResponse
from beeconta.schemas.groups import (
    GroupCompanyAddRequest,
    GroupCompanyListResponse,
    GroupCompanyResponse,
    GroupCreateRequest,
    GroupListResponse,
    GroupMutationResponse,
    GroupResponse,
    GroupUpdateRequest,
)
from beeconta.services.group_service import (
    add_company_to_group,
    create_group,
    delete_group,
    get_group_by_id,
    list_group_companies,
    list_user_groups,
    remove_company_from_group,
    update_group,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get(
    "",
    response_model=GroupListResponse,
    status_code=status.HTTP_200_OK,
    summary="List the user's economic groups"
)
async def list_groups(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> GroupListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_user_groups(supabase_client, auth_user.user_id)
    groups = raise_for_result(result, "fetch_error", "Failed to load economic groups") or []

    group_responses = [GroupResponse(**group) for group in groups]

    return GroupListResponse(groups=group_responses, count=len(group_responses))


@router.post(
    "",
    response_model=GroupMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create economic group"
)
async def create_group_endpoint(
    request: GroupCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> GroupMutationResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await create_group(
        supabase_client,
        request.model_dump(exclude_none=True),
        auth_user.user_id
    )
    group = raise_for_result(result, "create_error", "Failed to create economic group")

    return GroupMutationResponse(
        status="CREATED",
        group=GroupResponse(**group),
        message="Economic group created successfully"
    )


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    status_code=status.HTTP_200_OK,
    summary="Get economic group"
)
async def get_group(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    group_id: str = Path(..., description="Group UUID")
) -> GroupResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await get_group_by_id(supabase_client, group_id)
    group = raise_for_result(result, "fetch_error", "Failed to retrieve economic group")

    return GroupResponse(**group)


@router.patch(
    "/{group_id}",
    response_model=GroupMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Update economic group"
)
async def update_group_endpoint(
    request: GroupUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    group_id: str = Path(..., description="Group UUID")
) -> GroupMutationResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await update_group(
        supabase_client,
        group_id,
        request.model_dump(exclude_unset=True),
        auth_user.user_id
    )
    group = raise_for_result(result, "update_error", "Failed to update economic group")

    return GroupMutationResponse(
        status="UPDATED",
        group=GroupResponse(**group),
        message="Economic group updated successfully"
    )


@router.delete(
    "/{group_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete economic group"
)
async def delete_group_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    group_id: str = Path(..., description="Group UUID")
) -> DeleteResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await delete_group(supabase_client, group_id, auth_user.user_id)
    raise_for_result(result, "delete_error", "Failed to delete economic group")

    return DeleteResponse(status="DELETED", message="Economic group deleted successfully")


@router.get(
    "/{group_id}/companies",
    response_model=GroupCompanyListResponse,
    status_code=status.HTTP_200_OK,
    summary="List companies of a group",
    description="""
    List the group's active associations.

    An association whose company is not active is still returned, with a
    null `empresa`.
    """
)
async def list_group_companies_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    group_id: str = Path(..., description="Group UUID")
) -> GroupCompanyListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_group_companies(supabase_client, group_id)
    associations = raise_for_result(
        result, "fetch_error", "Failed to load group companies"
    ) or []

    responses = [GroupCompanyResponse(**association) for association in associations]

    return GroupCompanyListResponse(associations=responses, count=len(responses))


@router.post(
    "/{group_id}/companies",
    response_model=GroupCompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add company to group"
)
async def add_group_company(
    request: GroupCompanyAddRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    group_id: str = Path(..., description="Group UUID")
) -> GroupCompanyResponse:
    """Associate a company with the group, reactivating a removed association."""
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await add_company_to_group(
        supabase_client,
        group_id,
        request.empresa_id,
        is_primary=request.empresa_principal
    )
    association = raise_for_result(result, "create_error", "Failed to add company to group")

    return GroupCompanyResponse(**association)


@router.delete(
    "/{group_id}/companies/{company_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Remove company from group"
)
async def remove_group_company(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    group_id: str = Path(..., description="Group UUID"),
    company_id: str = Path(..., description="Company UUID")
) -> DeleteResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await remove_company_from_group(supabase_client, group_id, company_id)
    raise_for_result(result, "delete_error", "Failed to remove company from group")

    return DeleteResponse(status="DELETED", message="Company removed from group")
