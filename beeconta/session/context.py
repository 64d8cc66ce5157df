"""
Session context: current user, reachable companies and the active company.

The active company is either none or resolved to one company. It changes only
through set_active_company, which accepts a company from the reachable set or,
failing that, one that can be fetched directly by id.

SessionContext is not safe to mutate from concurrent tasks; SessionActor owns
one instance and serializes every call.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from supabase import Client

from beeconta.services.auth_service import get_current_user, update_user
from beeconta.services.company_service import (
    find_company,
    get_company_by_id,
    list_user_companies,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Snapshot of a user's session."""
    user: Optional[Dict[str, Any]] = None
    companies: List[Dict[str, Any]] = field(default_factory=list)
    active_company: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def active_company_id(self) -> Optional[str]:
        if self.active_company is None:
            return None
        return self.active_company.get("id")


class SessionContext:
    """
    Holds and mutates one user's session state.

    Usage:
        >>> context = SessionContext()
        >>> await context.load(client, access_token)
        >>> await context.set_active_company(client, "company-id")
    """

    def __init__(self) -> None:
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    def snapshot(self) -> SessionState:
        """Return a copy safe to hand out of the owning task."""
        return SessionState(
            user=dict(self._state.user) if self._state.user else None,
            companies=[dict(company) for company in self._state.companies],
            active_company=(
                dict(self._state.active_company) if self._state.active_company else None
            ),
            error=self._state.error,
        )

    def clear(self) -> SessionState:
        """Forget everything (sign-out)."""
        self._state = SessionState()
        return self.snapshot()

    def apply_user_update(self, user: Dict[str, Any]) -> SessionState:
        """
        Merge a freshly saved profile row into the cached user.

        Ignored when no user is loaded or the row belongs to someone else.
        """
        current = self._state.user
        if current is not None and current.get("id") == user.get("id"):
            self._state.user = {**current, **user}
        return self.snapshot()

    async def load(self, supabase_client: Client, access_token: str) -> SessionState:
        """
        Load the session for the user behind the token.

        Resets the active company to none, reloads the reachable companies and
        then tries the user's default company, or the first reachable company
        when no default is stored.
        """
        self._state.error = None

        user_result = await get_current_user(supabase_client, access_token)
        if not user_result.ok:
            self._state.error = "Failed to load user data"
            return self.snapshot()

        user = user_result.data
        if user is None:
            return self.clear()

        self._state.user = user
        self._state.active_company = None

        await self.reload_companies(supabase_client)

        initial_company_id = user.get("empresa_padrao_id")
        if not initial_company_id and self._state.companies:
            initial_company_id = self._state.companies[0].get("id")

        if initial_company_id:
            await self.set_active_company(supabase_client, initial_company_id)

        return self.snapshot()

    async def reload_companies(self, supabase_client: Client) -> SessionState:
        """
        Recompute the reachable companies. On failure the previous list is kept
        and the error recorded.
        """
        if self._state.user is None:
            return self.snapshot()

        result = await list_user_companies(supabase_client, self._state.user["id"])
        if not result.ok:
            self._state.error = "Failed to load available companies"
            return self.snapshot()

        self._state.companies = list(result.data or [])
        return self.snapshot()

    async def set_active_company(self, supabase_client: Client, company_id: str) -> bool:
        """
        Make company_id the active company.

        Returns:
            True on success. False if the company is neither reachable nor
            fetchable; the state is then left unchanged.

        On success, a differing stored default company is updated once. A
        failure of that update is logged and does not undo the transition.
        """
        company = find_company(self._state.companies, company_id)

        if company is None:
            result = await get_company_by_id(supabase_client, company_id)
            if not result.ok or not result.data:
                logger.error(f"Company {company_id} not found, active company unchanged")
                return False
            company = result.data

        self._state.active_company = company

        user = self._state.user
        if user is not None and user.get("empresa_padrao_id") != company_id:
            update_result = await update_user(
                supabase_client,
                user["id"],
                {"empresa_padrao_id": company_id}
            )
            if update_result.ok:
                self._state.user = {**user, "empresa_padrao_id": company_id}
            else:
                logger.warning(
                    f"Could not store default company {company_id} for user {user['id']}"
                )

        logger.info(f"Active company set to {company_id}")
        return True
