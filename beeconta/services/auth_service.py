"""
Authentication and user service.

Wraps Supabase Auth (sign-in, sign-up, OAuth, password recovery) and the
`usuarios` table that stores the user's profile and default company.

Session-bound Auth calls (sign-in, sign-up, OAuth) run on a fresh anonymous
client created per request. Calls that act on a user identified only by a
JWT (sign-out, password reset) go through the service-role admin API.
"""

import logging
from typing import Any, Dict, Optional, cast

from supabase import Client

from beeconta.services.errors import NotFoundError
from beeconta.services.result import service_operation
from beeconta.utils.constants import TABLES

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    "id, nome, sobrenome, nome_exibicao, url_avatar, empresa_padrao_id, admin_sistema"
)

USER_UPDATABLE_FIELDS = (
    "nome",
    "sobrenome",
    "nome_exibicao",
    "url_avatar",
    "empresa_padrao_id",
)


def _user_from_auth(auth_user: Any) -> Dict[str, Any]:
    """Build a user dict from Supabase Auth metadata alone."""
    metadata = getattr(auth_user, "user_metadata", None) or {}
    email = getattr(auth_user, "email", None) or ""

    return {
        "id": auth_user.id,
        "email": email,
        "nome": metadata.get("nome", ""),
        "sobrenome": metadata.get("sobrenome", ""),
        "nome_exibicao": metadata.get("nome_exibicao") or email,
        "url_avatar": None,
        "empresa_padrao_id": None,
        "admin_sistema": False,
    }


@service_operation("fetch current user")
async def get_current_user(
    supabase_client: Client,
    access_token: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch the user behind an access token.

    The `usuarios` row provides the profile and default company. If that row
    cannot be read, the user is built from the Auth metadata instead.

    Args:
        supabase_client: Client scoped to the user's token
        access_token: The user's JWT

    Returns:
        User dict, or None when Supabase Auth knows no user for the token
    """
    user_response = supabase_client.auth.get_user(access_token)
    auth_user = getattr(user_response, "user", None)

    if auth_user is None:
        logger.info("No authenticated user for the supplied token")
        return None

    try:
        result = (
            supabase_client.table(TABLES['USERS'])
            .select(USER_COLUMNS)
            .eq("id", auth_user.id)
            .execute()
        )
    except Exception as e:
        logger.warning(f"Could not read usuarios row for user {auth_user.id}: {e}")
        return _user_from_auth(auth_user)

    if not result.data:
        logger.warning(f"No usuarios row for user {auth_user.id}, using auth metadata")
        return _user_from_auth(auth_user)

    user = dict(cast(Dict[str, Any], result.data[0]))
    user["email"] = getattr(auth_user, "email", None) or ""
    user["admin_sistema"] = bool(user.get("admin_sistema") or False)

    return user


@service_operation("sign in")
async def login(
    supabase_client: Client,
    email: str,
    password: str
) -> Dict[str, Any]:
    """
    Sign in with email and password.

    Returns:
        Dict with user_id, access_token, refresh_token, expires_in, token_type
    """
    response = supabase_client.auth.sign_in_with_password({
        "email": email,
        "password": password,
    })

    session = response.session
    if session is None or response.user is None:
        raise Exception("Sign-in returned no session")

    logger.info(f"User {response.user.id} signed in")

    return {
        "user_id": response.user.id,
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_in": session.expires_in,
        "token_type": session.token_type,
    }


@service_operation("start Google sign-in")
async def login_with_google(
    supabase_client: Client,
    redirect_url: str
) -> str:
    """
    Start the Google OAuth flow.

    Returns:
        The provider URL the browser must be sent to
    """
    response = supabase_client.auth.sign_in_with_oauth({
        "provider": "google",
        "options": {"redirect_to": redirect_url},
    })

    return str(response.url)


@service_operation("sign out")
async def logout(admin_client: Client, access_token: str) -> None:
    """Revoke the session behind an access token."""
    admin_client.auth.admin.sign_out(access_token)
    return None


@service_operation("register user")
async def register(
    supabase_client: Client,
    admin_client: Client,
    email: str,
    password: str,
    nome: str,
    sobrenome: str
) -> Dict[str, Any]:
    """
    Register a new user.

    The sign-up stores nome/sobrenome/nome_exibicao as Auth metadata. The
    `usuarios` row is then upserted through the service-role client, since a
    user awaiting e-mail confirmation has no session to satisfy RLS.

    Returns:
        Dict with user_id and email
    """
    display_name = f"{nome} {sobrenome}"

    response = supabase_client.auth.sign_up({
        "email": email,
        "password": password,
        "options": {
            "data": {
                "nome": nome,
                "sobrenome": sobrenome,
                "nome_exibicao": display_name,
            }
        },
    })

    if response.user is None:
        raise Exception("Sign-up returned no user")

    user_id = response.user.id
    logger.info(f"Registered user {user_id}")

    admin_client.table(TABLES['USERS']).upsert({
        "id": user_id,
        "nome": nome,
        "sobrenome": sobrenome,
        "nome_exibicao": display_name,
    }).execute()

    return {"user_id": user_id, "email": email}


@service_operation("update user")
async def update_user(
    supabase_client: Client,
    user_id: str,
    updates: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Update the user's profile fields and default company.

    Only nome, sobrenome, nome_exibicao, url_avatar and empresa_padrao_id are
    written; anything else in `updates` is ignored.
    """
    user_data = {key: updates[key] for key in USER_UPDATABLE_FIELDS if key in updates}

    logger.info(f"Updating user {user_id}: {list(user_data.keys())}")

    result = (
        supabase_client.table(TABLES['USERS'])
        .update(user_data)
        .eq("id", user_id)
        .execute()
    )

    if not result.data:
        raise NotFoundError(f"User {user_id} not found")

    return cast(Dict[str, Any], result.data[0])


@service_operation("send password recovery e-mail")
async def recover_password(
    supabase_client: Client,
    email: str,
    redirect_url: str
) -> None:
    supabase_client.auth.reset_password_for_email(email, {"redirect_to": redirect_url})
    logger.info("Password recovery e-mail requested")
    return None


@service_operation("reset password")
async def reset_password(
    admin_client: Client,
    user_id: str,
    new_password: str
) -> None:
    """
    Set a new password for the user identified by a verified recovery token.
    """
    admin_client.auth.admin.update_user_by_id(user_id, {"password": new_password})
    logger.info(f"Password reset for user {user_id}")
    return None
