"""
Service layer for BeeConta backend.

Each service function:
- Receives an explicit Supabase client (per-request, user-scoped)
- Issues filtered queries against one named table of the remote schema
- Returns a ServiceResult envelope: data on success, error on failure
- Never raises past this layer; failures are logged where they happen

Deletes are always soft (a status column flips to an inactive value).
"""

from .auth_service import (
    get_current_user,
    login,
    login_with_google,
    logout,
    recover_password,
    register,
    reset_password,
    update_user,
)
from .bank_account_service import (
    create_bank_account,
    delete_bank_account,
    get_bank_account_by_id,
    list_banks,
    list_company_bank_accounts,
    list_currencies,
    update_bank_account,
)
from .category_service import create_category, list_company_categories
from .company_service import (
    create_company,
    delete_company,
    get_company_by_id,
    list_user_companies,
    update_company,
)
from .credit_card_service import (
    create_credit_card,
    delete_credit_card,
    get_credit_card_by_id,
    list_company_credit_cards,
    update_credit_card,
)
from .errors import NotFoundError, PermissionDeniedError, ServiceError
from .group_service import (
    add_company_to_group,
    create_group,
    delete_group,
    get_group_by_id,
    list_group_companies,
    list_user_groups,
    remove_company_from_group,
    update_group,
)
from .report_service import get_financial_summary
from .result import ServiceResult
from .transaction_service import (
    create_transaction,
    delete_transaction,
    get_transaction_by_id,
    list_company_transactions,
    update_transaction,
)

__all__ = [
    "ServiceResult",
    "ServiceError",
    "PermissionDeniedError",
    "NotFoundError",
    "get_current_user",
    "login",
    "login_with_google",
    "logout",
    "register",
    "update_user",
    "recover_password",
    "reset_password",
    "get_company_by_id",
    "list_user_companies",
    "create_company",
    "update_company",
    "delete_company",
    "get_group_by_id",
    "list_user_groups",
    "create_group",
    "update_group",
    "delete_group",
    "list_group_companies",
    "add_company_to_group",
    "remove_company_from_group",
    "get_bank_account_by_id",
    "list_company_bank_accounts",
    "create_bank_account",
    "update_bank_account",
    "delete_bank_account",
    "list_banks",
    "list_currencies",
    "get_credit_card_by_id",
    "list_company_credit_cards",
    "create_credit_card",
    "update_credit_card",
    "delete_credit_card",
    "get_transaction_by_id",
    "list_company_transactions",
    "create_transaction",
    "update_transaction",
    "delete_transaction",
    "list_company_categories",
    "create_category",
    "get_financial_summary",
]
