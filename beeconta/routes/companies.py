"""
Company CRUD API endpoints.

Listing returns every company the user can reach, directly or through an
economic group. Updates and deletes require ADMIN access on the company.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.companies import (
    CompanyCreateRequest,
    CompanyListResponse,
    CompanyMutationResponse,
    CompanyResponse,
    CompanyUpdateRequest,
    DeleteResponse,
)
from beeconta.services.company_service import (
    create_company,
    delete_company,
    get_company_by_id,
    list_user_companies,
    update_company,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get(
    "",
    response_model=CompanyListResponse,
    status_code=status.HTTP_200_OK,
    summary="List reachable companies",
    description="""
    Retrieve every active company the authenticated user can reach.

    Companies granted directly come first, followed by companies reached
    through economic groups. A company reachable both ways appears once.
    """
)
async def list_companies(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> CompanyListResponse:
    """
    List companies for the authenticated user.

    **6-STEP ENDPOINT FLOW:**

    Auth
    - Handled by get_authenticated_user dependency

    Parse/Validate Request
    - No parameters

    Call Service
    - list_user_companies() resolves direct and group grants

    Map Output -> ResponseModel
    - Convert company dicts to CompanyListResponse
    """
    logger.info(f"Listing companies for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_user_companies(supabase_client, auth_user.user_id)
    companies = raise_for_result(result, "fetch_error", "Failed to load available companies") or []

    company_responses = [CompanyResponse(**company) for company in companies]

    return CompanyListResponse(companies=company_responses, count=len(company_responses))


@router.post(
    "",
    response_model=CompanyMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create company"
)
async def create_company_endpoint(
    request: CompanyCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> CompanyMutationResponse:
    """Create a company; the caller is granted ADMIN access on it."""
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await create_company(
        supabase_client,
        request.model_dump(mode="json", exclude_none=True),
        auth_user.user_id
    )
    company = raise_for_result(result, "create_error", "Failed to create company")

    return CompanyMutationResponse(
        status="CREATED",
        company=CompanyResponse(**company),
        message="Company created successfully"
    )


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    status_code=status.HTTP_200_OK,
    summary="Get company"
)
async def get_company(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> CompanyResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await get_company_by_id(supabase_client, company_id)
    company = raise_for_result(result, "fetch_error", "Failed to retrieve company")

    return CompanyResponse(**company)


@router.patch(
    "/{company_id}",
    response_model=CompanyMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Update company"
)
async def update_company_endpoint(
    request: CompanyUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> CompanyMutationResponse:
    """Update a company. Requires ADMIN access (403 otherwise)."""
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await update_company(
        supabase_client,
        company_id,
        request.model_dump(mode="json", exclude_unset=True),
        auth_user.user_id
    )
    company = raise_for_result(result, "update_error", "Failed to update company")

    return CompanyMutationResponse(
        status="UPDATED",
        company=CompanyResponse(**company),
        message="Company updated successfully"
    )


@router.delete(
    "/{company_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete company",
    description="Soft-delete a company (status becomes 'inativo'). Requires ADMIN access."
)
async def delete_company_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> DeleteResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await delete_company(supabase_client, company_id, auth_user.user_id)
    raise_for_result(result, "delete_error", "Failed to delete company")

    return DeleteResponse(status="DELETED", message="Company deleted successfully")
