"""
Dashboard report endpoint.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.reports import FinancialSummaryResponse
from beeconta.services.report_service import get_financial_summary, month_bounds

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies/{company_id}/reports", tags=["reports"])

MONTH_PATTERN = r'^\d{4}-\d{2}$'


@router.get(
    "/summary",
    response_model=FinancialSummaryResponse,
    status_code=status.HTTP_200_OK,
    summary="Financial summary",
    description="""
    Compare settled income and expenses of two months (YYYY-MM).

    saldo_total is the sum of the opening balances of the company's active
    bank accounts.
    """
)
async def financial_summary(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    company_id: str = Path(..., description="Company UUID"),
    current_month: str = Query(..., pattern=MONTH_PATTERN, examples=["2025-03"]),
    previous_month: str = Query(..., pattern=MONTH_PATTERN, examples=["2025-02"])
) -> FinancialSummaryResponse:
    for month in (current_month, previous_month):
        try:
            month_bounds(month)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "invalid_month", "details": f"Invalid month: {month}"}
            )

    supabase_client = get_supabase_client(auth_user.access_token)

    result = await get_financial_summary(
        supabase_client, company_id, current_month, previous_month
    )
    summary = raise_for_result(result, "report_error", "Failed to build financial summary")

    return FinancialSummaryResponse(**summary)
