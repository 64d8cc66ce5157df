"""
Session API endpoints.

The session holds the signed-in user, the companies the user can reach and
the active company. It lives in the user's SessionActor; every mutation goes
through the actor so concurrent requests are applied one at a time.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.db.client import get_supabase_client
from beeconta.schemas.session import ActiveCompanyRequest, SessionResponse
from beeconta.session.actor import SessionActor, SessionRegistry, get_session_registry
from beeconta.session.context import SessionState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


def _to_response(state: SessionState) -> SessionResponse:
    return SessionResponse(
        user=state.user,
        companies=state.companies,
        active_company=state.active_company,
        error=state.error,
    )


async def _ensure_loaded(
    registry: SessionRegistry,
    auth_user: AuthenticatedUser
) -> SessionActor:
    """Load the session on first use, e.g. after a server restart."""
    if auth_user.user_id not in registry:
        logger.info(f"No session for user {auth_user.user_id}, loading")
        await registry.sign_in(
            auth_user.user_id,
            get_supabase_client(auth_user.access_token),
            auth_user.access_token
        )
    return registry.get(auth_user.user_id)


@router.get(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Get the current session"
)
async def get_session(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)]
) -> SessionResponse:
    actor = await _ensure_loaded(registry, auth_user)
    state = await actor.snapshot()

    return _to_response(state)


@router.put(
    "/active-company",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Switch the active company",
    description="""
    Make a company the active one.

    The company must be reachable by the user or fetchable by id. When it
    differs from the user's default company, the default is updated too so
    the choice survives the next sign-in.
    """
)
async def set_active_company(
    request: ActiveCompanyRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)]
) -> SessionResponse:
    actor = await _ensure_loaded(registry, auth_user)
    supabase_client = get_supabase_client(auth_user.access_token)

    switched = await actor.set_active_company(supabase_client, request.empresa_id)

    if not switched:
        logger.warning(
            f"User {auth_user.user_id} could not activate company {request.empresa_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "company_unavailable",
                "details": "Company not found or not accessible"
            }
        )

    return _to_response(await actor.snapshot())


@router.post(
    "/reload",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Reload the reachable companies"
)
async def reload_session(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)]
) -> SessionResponse:
    """
    Re-resolve the user's companies. On failure the previous list is kept and
    the error is reported in the response.
    """
    actor = await _ensure_loaded(registry, auth_user)
    state = await actor.reload_companies(get_supabase_client(auth_user.access_token))

    return _to_response(state)
