"""
Transaction API endpoints.

Provides endpoints for recording and querying company transactions
(RECEITA / DESPESA / TRANSFERENCIA). Deleting a transaction cancels it.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.companies import DeleteResponse
from beeconta.schemas.transactions import (
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionMutationResponse,
    TransactionResponse,
    TransactionStatus,
    TransactionType,
    TransactionUpdateRequest,
)
from beeconta.services.transaction_service import (
    create_transaction,
    delete_transaction,
    get_transaction_by_id,
    list_company_transactions,
    update_transaction,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transactions"])

DATE_QUERY_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


@router.get(
    "/companies/{company_id}/transactions",
    response_model=TransactionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List transactions of a company",
    description="""
    Retrieve the company's transactions, newest first.

    Optional filters:
    - data_inicio / data_fim: inclusive date range on data_transacao
    - tipo, status, conta_bancaria_id, cartao_credito_id, categoria_id
    """
)
async def list_transactions(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID"),
    data_inicio: Optional[str] = Query(None, pattern=DATE_QUERY_PATTERN, description="From date (inclusive)"),
    data_fim: Optional[str] = Query(None, pattern=DATE_QUERY_PATTERN, description="To date (inclusive)"),
    tipo: Optional[TransactionType] = Query(None, description="Filter by type"),
    transaction_status: Optional[TransactionStatus] = Query(None, alias="status", description="Filter by status"),
    conta_bancaria_id: Optional[str] = Query(None, description="Filter by bank account"),
    cartao_credito_id: Optional[str] = Query(None, description="Filter by credit card"),
    categoria_id: Optional[str] = Query(None, description="Filter by category")
) -> TransactionListResponse:
    """
    List transactions for a company.

    **6-STEP ENDPOINT FLOW:**

    Auth
    - Handled by get_authenticated_user dependency

    Parse/Validate Request
    - Query parameters validated by FastAPI

    Call Service
    - list_company_transactions() with the collected filters

    Map Output -> ResponseModel
    - Convert transaction dicts to TransactionListResponse
    """
    filters = {
        "data_inicio": data_inicio,
        "data_fim": data_fim,
        "tipo": tipo,
        "status": transaction_status,
        "conta_bancaria_id": conta_bancaria_id,
        "cartao_credito_id": cartao_credito_id,
        "categoria_id": categoria_id,
    }

    logger.info(f"Listing transactions for company {company_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_company_transactions(supabase_client, company_id, filters)
    transactions = raise_for_result(
        result, "fetch_error", "Failed to retrieve transactions"
    ) or []

    transaction_responses = [TransactionResponse(**t) for t in transactions]

    return TransactionListResponse(
        transactions=transaction_responses,
        count=len(transaction_responses)
    )


@router.post(
    "/companies/{company_id}/transactions",
    response_model=TransactionMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction"
)
async def create_transaction_endpoint(
    request: TransactionCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> TransactionMutationResponse:
    """Record a transaction; status defaults to 'pendente'."""
    supabase_client = get_supabase_client(auth_user.access_token)

    transaction = request.model_dump(exclude_none=True)
    transaction["empresa_id"] = company_id

    result = await create_transaction(supabase_client, transaction)
    created = raise_for_result(result, "create_error", "Failed to create transaction")

    return TransactionMutationResponse(
        status="CREATED",
        transaction=TransactionResponse(**created),
        message="Transaction created successfully"
    )


@router.get(
    "/transactions/{transaction_id}",
    response_model=TransactionResponse,
    status_code=status.HTTP_200_OK,
    summary="Get transaction"
)
async def get_transaction(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    transaction_id: str = Path(..., description="Transaction UUID")
) -> TransactionResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await get_transaction_by_id(supabase_client, transaction_id)
    transaction = raise_for_result(result, "fetch_error", "Failed to retrieve transaction")

    return TransactionResponse(**transaction)


@router.patch(
    "/transactions/{transaction_id}",
    response_model=TransactionMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Update transaction"
)
async def update_transaction_endpoint(
    request: TransactionUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    transaction_id: str = Path(..., description="Transaction UUID")
) -> TransactionMutationResponse:
    updates = request.model_dump(exclude_unset=True)

    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_request", "details": "No fields to update"}
        )

    supabase_client = get_supabase_client(auth_user.access_token)

    result = await update_transaction(supabase_client, transaction_id, updates)
    transaction = raise_for_result(result, "update_error", "Failed to update transaction")

    return TransactionMutationResponse(
        status="UPDATED",
        transaction=TransactionResponse(**transaction),
        message="Transaction updated successfully"
    )


@router.delete(
    "/transactions/{transaction_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Cancel transaction",
    description="Soft-delete: the transaction status becomes 'cancelada'."
)
async def delete_transaction_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    transaction_id: str = Path(..., description="Transaction UUID")
) -> DeleteResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await delete_transaction(supabase_client, transaction_id)
    raise_for_result(result, "delete_error", "Failed to cancel transaction")

    return DeleteResponse(status="DELETED", message="Transaction cancelled successfully")
