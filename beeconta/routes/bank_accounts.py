"""
Bank account API endpoints, plus the bank and currency catalogs.

Accounts are listed and created under their company; single accounts are
addressed directly by id. Row Level Security limits both to companies the
user can reach.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.bank_accounts import (
    BankAccountCreateRequest,
    BankAccountListResponse,
    BankAccountMutationResponse,
    BankAccountResponse,
    BankAccountUpdateRequest,
    BankListResponse,
    BankResponse,
    CurrencyListResponse,
    CurrencyResponse,
)
from beeconta.schemas.companies import DeleteResponse
from beeconta.services.bank_account_service import (
    create_bank_account,
    delete_bank_account,
    get_bank_account_by_id,
    list_banks,
    list_company_bank_accounts,
    list_currencies,
    update_bank_account,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bank-accounts"])


@router.get(
    "/companies/{company_id}/bank-accounts",
    response_model=BankAccountListResponse,
    status_code=status.HTTP_200_OK,
    summary="List bank accounts of a company",
    description="Active accounts of the company, ordered by description."
)
async def list_bank_accounts(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> BankAccountListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_company_bank_accounts(supabase_client, company_id)
    accounts = raise_for_result(result, "fetch_error", "Failed to retrieve bank accounts") or []

    account_responses = [BankAccountResponse(**account) for account in accounts]

    return BankAccountListResponse(accounts=account_responses, count=len(account_responses))


@router.post(
    "/companies/{company_id}/bank-accounts",
    response_model=BankAccountMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create bank account"
)
async def create_bank_account_endpoint(
    request: BankAccountCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID")
) -> BankAccountMutationResponse:
    """
    Open a bank account for the company.

    **6-STEP ENDPOINT FLOW:**

    Auth
    - Handled by get_authenticated_user dependency

    Parse/Validate Request
    - BankAccountCreateRequest validated by FastAPI

    Call Service
    - create_bank_account() with the path company as owner

    Map Output -> ResponseModel
    - Wrap the created row in BankAccountMutationResponse
    """
    supabase_client = get_supabase_client(auth_user.access_token)

    account = request.model_dump(exclude_none=True)
    account["empresa_id"] = company_id

    result = await create_bank_account(supabase_client, account)
    created = raise_for_result(result, "create_error", "Failed to create bank account")

    logger.info(f"Bank account created for company {company_id}")

    return BankAccountMutationResponse(
        status="CREATED",
        account=BankAccountResponse(**created),
        message="Bank account created successfully"
    )


@router.get(
    "/bank-accounts/{account_id}",
    response_model=BankAccountResponse,
    status_code=status.HTTP_200_OK,
    summary="Get bank account",
    description="Fetch an account by id, whatever its status."
)
async def get_bank_account(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    account_id: str = Path(..., description="Bank account UUID")
) -> BankAccountResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await get_bank_account_by_id(supabase_client, account_id)
    account = raise_for_result(result, "fetch_error", "Failed to retrieve bank account")

    return BankAccountResponse(**account)


@router.patch(
    "/bank-accounts/{account_id}",
    response_model=BankAccountMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Update bank account"
)
async def update_bank_account_endpoint(
    request: BankAccountUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    account_id: str = Path(..., description="Bank account UUID")
) -> BankAccountMutationResponse:
    updates = request.model_dump(exclude_unset=True)

    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_request", "details": "No fields to update"}
        )

    supabase_client = get_supabase_client(auth_user.access_token)

    result = await update_bank_account(supabase_client, account_id, updates)
    account = raise_for_result(result, "update_error", "Failed to update bank account")

    return BankAccountMutationResponse(
        status="UPDATED",
        account=BankAccountResponse(**account),
        message="Bank account updated successfully"
    )


@router.delete(
    "/bank-accounts/{account_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Close bank account",
    description="Soft-delete: the account status becomes 'encerrada'."
)
async def delete_bank_account_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    account_id: str = Path(..., description="Bank account UUID")
) -> DeleteResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await delete_bank_account(supabase_client, account_id)
    raise_for_result(result, "delete_error", "Failed to close bank account")

    return DeleteResponse(status="DELETED", message="Bank account closed successfully")


@router.get(
    "/banks",
    response_model=BankListResponse,
    status_code=status.HTTP_200_OK,
    summary="List banks"
)
async def list_banks_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> BankListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_banks(supabase_client)
    banks = raise_for_result(result, "fetch_error", "Failed to retrieve banks") or []

    return BankListResponse(banks=[BankResponse(**bank) for bank in banks], count=len(banks))


@router.get(
    "/currencies",
    response_model=CurrencyListResponse,
    status_code=status.HTTP_200_OK,
    summary="List currencies"
)
async def list_currencies_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> CurrencyListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await list_currencies(supabase_client)
    currencies = raise_for_result(result, "fetch_error", "Failed to retrieve currencies") or []

    return CurrencyListResponse(
        currencies=[CurrencyResponse(**currency) for currency in currencies],
        count=len(currencies)
    )
