"""
Supabase client accessors.

Two kinds of handles are used by the backend:

1. Long-lived handles owned by a SupabaseClients instance: an anonymous-role
   client (respects RLS, used for public catalogs) and a service-role client
   (bypasses RLS, used only for privileged bookkeeping such as creating the
   `usuarios` row at registration). Both are created lazily on first use and
   reused afterwards.
2. Short-lived handles created per request:
   - get_supabase_client(access_token): PostgREST calls carry the user's JWT,
     so RLS policies see auth.uid() = user id.
   - create_auth_client(): a fresh anonymous client for sign-in / sign-up
     flows, so auth session state is never shared between requests.

CRITICAL SECURITY RULES:
1. NEVER use the service_role client for user-initiated reads or writes
2. ALWAYS use the user's JWT for company-scoped data
"""

import logging
from typing import Optional

from beeconta.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


class SupabaseClients:
    """
    Explicitly constructed holder of the long-lived Supabase handles.

    An instance is created once per application (see get_supabase_clients)
    and passed to the code that needs it. Tests build their own instance or
    override the FastAPI dependency.
    """

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        service_role_key: Optional[str] = None
    ) -> None:
        self._supabase_url = supabase_url
        self._anon_key = anon_key
        self._service_role_key = service_role_key
        self._client: Optional[Client] = None
        self._admin_client: Optional[Client] = None

    def get_client(self) -> Client:
        """
        Return the anonymous-role client, creating it on first call.

        Returns:
            The cached Supabase client (RLS enforced, no user session).
        """
        if self._client is None:
            logger.info("Creating anonymous-role Supabase client")
            self._client = create_client(
                supabase_url=self._supabase_url,
                supabase_key=self._anon_key
            )
        return self._client

    def get_admin_client(self) -> Client:
        """
        Return the service-role client, creating it on first call.

        WARNING: This bypasses RLS. Never use it for user-initiated requests.

        Raises:
            ValueError: If SUPABASE_SERVICE_ROLE_KEY is not configured.
        """
        if self._admin_client is None:
            if not self._service_role_key:
                raise ValueError(
                    "SUPABASE_SERVICE_ROLE_KEY is not configured. "
                    "Cannot create the service-role Supabase client."
                )
            logger.info("Creating service-role Supabase client")
            self._admin_client = create_client(
                supabase_url=self._supabase_url,
                supabase_key=self._service_role_key
            )
        return self._admin_client


_supabase_clients: Optional[SupabaseClients] = None


def get_supabase_clients() -> SupabaseClients:
    """
    Get the application's SupabaseClients, building it from settings on first use.

    Usable as a FastAPI dependency:
        >>> @router.get("/banks")
        >>> async def banks(clients: SupabaseClients = Depends(get_supabase_clients)):
        ...     client = clients.get_client()
    """
    global _supabase_clients

    if _supabase_clients is None:
        _supabase_clients = SupabaseClients(
            supabase_url=settings.SUPABASE_URL,
            anon_key=settings.SUPABASE_ANON_KEY,
            service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY or None,
        )

    return _supabase_clients


def get_supabase_client(access_token: str) -> Client:
    """
    Create an authenticated Supabase client for a specific user.

    All table queries issued through this client send the user's JWT in the
    Authorization header, so Row Level Security policies apply.

    Args:
        access_token: The user's JWT access token from Supabase Auth.
                     This is the token verified in beeconta/auth/dependencies.py.

    Returns:
        An authenticated Supabase client that enforces RLS.

    Example:
        >>> client = get_supabase_client(auth_user.access_token)
        >>> result = client.table("empresas").select("*").execute()
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_ANON_KEY
    )

    # Scope PostgREST calls to the user; the token carries user id in 'sub'
    client.postgrest.auth(access_token)

    logger.debug(
        "Created authenticated Supabase client with user token "
        "(RLS enforced)"
    )

    return client


def create_auth_client() -> Client:
    """
    Create a fresh anonymous client for Supabase Auth flows.

    Sign-in and sign-up store a session on the client they run on; using a
    new client per request keeps one user's session off everyone else's.
    """
    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_ANON_KEY
    )
