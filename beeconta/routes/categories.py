"""
Category API endpoints.

Listing returns the global categories plus the company's own.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.categories import (
    CategoryCreateRequest,
    CategoryListResponse,
    CategoryMutationResponse,
    CategoryResponse,
)
from beeconta.services.category_service import create_category, list_company_categories

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies/{company_id}/categories", tags=["categories"])


@router.get(
    "",
    response_model=CategoryListResponse,
    status_code=status.HTTP_200_OK,
    summary="List categories",
    description="""
    Active categories visible to the company: global ones (no owner) and the
    company's own. With `tipo`, only categories of that type or AMBOS.
    """
)
async def list_categories(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID"),
    tipo: Optional[str] = Query(None, pattern="^(RECEITA|DESPESA)$", description="Category type")
) -> CategoryListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_company_categories(supabase_client, company_id, tipo)
    categories = raise_for_result(result, "fetch_error", "Failed to retrieve categories") or []

    category_responses = [CategoryResponse(**category) for category in categories]

    return CategoryListResponse(categories=category_responses, count=len(category_responses))


@router.post(
    "",
    response_model=CategoryMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category"
)
async def create_category_endpoint(
    request: CategoryCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> CategoryMutationResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    category = request.model_dump(exclude_none=True)
    category["empresa_id"] = company_id

    result = await create_category(supabase_client, category)
    created = raise_for_result(result, "create_error", "Failed to create category")

    return CategoryMutationResponse(
        status="CREATED",
        category=CategoryResponse(**created),
        message="Category created successfully"
    )
