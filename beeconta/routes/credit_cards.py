"""
Credit card API endpoints.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.companies import DeleteResponse
from beeconta.schemas.credit_cards import (
    CreditCardCreateRequest,
    CreditCardListResponse,
    CreditCardMutationResponse,
    CreditCardResponse,
    CreditCardUpdateRequest,
)
from beeconta.services.credit_card_service import (
    create_credit_card,
    delete_credit_card,
    get_credit_card_by_id,
    list_company_credit_cards,
    update_credit_card,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["credit-cards"])


@router.get(
    "/companies/{company_id}/credit-cards",
    response_model=CreditCardListResponse,
    status_code=status.HTTP_200_OK,
    summary="List credit cards of a company"
)
async def list_credit_cards(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> CreditCardListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_company_credit_cards(supabase_client, company_id)
    cards = raise_for_result(result, "fetch_error", "Failed to retrieve credit cards") or []

    card_responses = [CreditCardResponse(**card) for card in cards]

    return CreditCardListResponse(cards=card_responses, count=len(card_responses))


@router.post(
    "/companies/{company_id}/credit-cards",
    response_model=CreditCardMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create credit card"
)
async def create_credit_card_endpoint(
    request: CreditCardCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> CreditCardMutationResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    card = request.model_dump(exclude_none=True)
    card["empresa_id"] = company_id

    result = await create_credit_card(supabase_client, card)
    created = raise_for_result(result, "create_error", "Failed to create credit card")

    return CreditCardMutationResponse(
        status="CREATED",
        card=CreditCardResponse(**created),
        message="Credit card created successfully"
    )


@router.get(
    "/credit-cards/{card_id}",
    response_model=CreditCardResponse,
    status_code=status.HTTP_200_OK,
    summary="Get credit card"
)
async def get_credit_card(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    card_id: str = Path(..., description="Credit card UUID")
) -> CreditCardResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await get_credit_card_by_id(supabase_client, card_id)
    card = raise_for_result(result, "fetch_error", "Failed to retrieve credit card")

    return CreditCardResponse(**card)


@router.patch(
    "/credit-cards/{card_id}",
    response_model=CreditCardMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Update credit card"
)
async def update_credit_card_endpoint(
    request: CreditCardUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    card_id: str = Path(..., description="Credit card UUID")
) -> CreditCardMutationResponse:
    updates = request.model_dump(exclude_unset=True)

    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_request", "details": "No fields to update"}
        )

    supabase_client = get_supabase_client(auth_user.access_token)

    result = await update_credit_card(supabase_client, card_id, updates)
    card = raise_for_result(result, "update_error", "Failed to update credit card")

    return CreditCardMutationResponse(
        status="UPDATED",
        card=CreditCardResponse(**card),
        message="Credit card updated successfully"
    )


@router.delete(
    "/credit-cards/{card_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Cancel credit card",
    description="Soft-delete: the card status becomes 'cancelado'."
)
async def delete_credit_card_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    card_id: str = Path(..., description="Credit card UUID")
) -> DeleteResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await delete_credit_card(supabase_client, card_id)
    raise_for_result(result, "delete_error", "Failed to cancel credit card")

    return DeleteResponse(status="DELETED", message="Credit card cancelled successfully")
