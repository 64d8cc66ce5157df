"""
Auth API endpoints.

Provides endpoints for authentication-related operations:
- POST /auth/login - Email/password sign-in (starts the user's session)
- POST /auth/login/google - Google OAuth authorization URL
- POST /auth/logout - Revoke the token and drop the session
- POST /auth/register - Sign-up
- POST /auth/password/recover - Send the recovery e-mail
- POST /auth/password/reset - Set a new password (recovery token required)
- GET /auth/me - Current user profile
- PATCH /auth/me - Update the current user profile

Sign-in and sign-up are public; the remaining endpoints require a valid
Bearer token.
"""

import logging
from typing import Annotated, Any, Dict, cast

from fastapi import APIRouter, Depends, HTTPException, status

from beeconta.auth.dependencies import AuthenticatedUser, get_authenticated_user
from beeconta.config import settings
from beeconta.db.client import (
    SupabaseClients,
    create_auth_client,
    get_supabase_client,
    get_supabase_clients,
)
from beeconta.routes.errors import raise_for_result
from beeconta.schemas.auth import (
    GoogleLoginResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PasswordRecoverRequest,
    PasswordResetRequest,
    RegisterRequest,
    RegisterResponse,
    UserProfile,
    UserUpdateRequest,
)
from beeconta.services.auth_service import (
    get_current_user,
    login,
    login_with_google,
    logout,
    recover_password,
    register,
    reset_password,
    update_user,
)
from beeconta.session.actor import SessionRegistry, get_session_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _admin_client(clients: SupabaseClients):
    try:
        return clients.get_admin_client()
    except ValueError as e:
        logger.error(f"Service-role client unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "configuration_error",
                "details": "Service-role access is not configured"
            }
        )


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with e-mail and password",
    description="""
    Authenticate with Supabase Auth and start the user's session.

    On success the user's session (profile, reachable companies and the
    default active company) is loaded before the tokens are returned.
    """
)
async def login_endpoint(
    request: LoginRequest,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)]
) -> LoginResponse:
    """
    Sign in and load the session.

    **6-STEP ENDPOINT FLOW:**

    Auth
    - Public endpoint

    Parse/Validate Request
    - LoginRequest validated by FastAPI

    Call Service
    - login() on a fresh auth client

    Persistence
    - The SIGNED_IN event is posted to the user's session actor
    """
    result = await login(create_auth_client(), request.email, request.password)

    if not result.ok or result.data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "invalid_credentials",
                "details": "Invalid e-mail or password"
            }
        )

    tokens = result.data
    user_client = get_supabase_client(tokens["access_token"])
    await registry.sign_in(tokens["user_id"], user_client, tokens["access_token"])

    logger.info(f"User {tokens['user_id']} signed in")

    return LoginResponse(**tokens)


@router.post(
    "/login/google",
    response_model=GoogleLoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Start Google sign-in"
)
async def login_google_endpoint() -> GoogleLoginResponse:
    """Return the Google OAuth URL; the provider redirects back to the web client."""
    result = await login_with_google(create_auth_client(), settings.AUTH_REDIRECT_URL)
    url = raise_for_result(result, "oauth_error", "Failed to start Google sign-in")

    return GoogleLoginResponse(url=str(url))


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign out"
)
async def logout_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    clients: Annotated[SupabaseClients, Depends(get_supabase_clients)]
) -> MessageResponse:
    """
    Drop the user's session, then revoke the token.

    The session is cleared even when revocation fails.
    """
    await registry.sign_out(auth_user.user_id)

    result = await logout(_admin_client(clients), auth_user.access_token)
    raise_for_result(result, "logout_error", "Failed to sign out")

    logger.info(f"User {auth_user.user_id} signed out")

    return MessageResponse(status="OK", message="Signed out successfully")


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user"
)
async def register_endpoint(
    request: RegisterRequest,
    clients: Annotated[SupabaseClients, Depends(get_supabase_clients)]
) -> RegisterResponse:
    """
    Create the auth user and its profile row.

    Depending on the project settings the user may need to confirm the
    e-mail before the first sign-in.
    """
    result = await register(
        create_auth_client(),
        _admin_client(clients),
        request.email,
        request.password,
        request.nome,
        request.sobrenome or ""
    )
    data = cast(
        Dict[str, Any],
        raise_for_result(result, "registration_error", "Failed to register user")
    )

    return RegisterResponse(
        status="CREATED",
        user_id=str(data["user_id"]),
        email=str(data["email"]),
        message="User registered successfully"
    )


@router.post(
    "/password/recover",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Send a password recovery e-mail"
)
async def recover_password_endpoint(request: PasswordRecoverRequest) -> MessageResponse:
    redirect_url = f"{settings.AUTH_REDIRECT_URL.rstrip('/')}/reset-password"
    result = await recover_password(create_auth_client(), request.email, redirect_url)
    raise_for_result(result, "recovery_error", "Failed to send recovery e-mail")

    return MessageResponse(status="OK", message="Recovery e-mail sent")


@router.post(
    "/password/reset",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Set a new password",
    description="""
    Set a new password for the user behind the Bearer token.

    The token is the one delivered by the recovery e-mail link.
    """
)
async def reset_password_endpoint(
    request: PasswordResetRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    clients: Annotated[SupabaseClients, Depends(get_supabase_clients)]
) -> MessageResponse:
    result = await reset_password(_admin_client(clients), auth_user.user_id, request.password)
    raise_for_result(result, "reset_error", "Failed to reset password")

    return MessageResponse(status="OK", message="Password updated successfully")


@router.get(
    "/me",
    response_model=UserProfile,
    status_code=status.HTTP_200_OK,
    summary="Get current user"
)
async def get_me(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> UserProfile:
    """
    Return the authenticated user's profile.

    Falls back to the auth metadata when the profile row is unavailable.
    """
    supabase_client = get_supabase_client(auth_user.access_token)

    result = await get_current_user(supabase_client, auth_user.access_token)
    user = raise_for_result(result, "fetch_error", "Failed to load user data")

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "not_found", "details": "User not found"}
        )

    return UserProfile(**user)


@router.patch(
    "/me",
    response_model=UserProfile,
    status_code=status.HTTP_200_OK,
    summary="Update current user"
)
async def update_me(
    request: UserUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)]
) -> UserProfile:
    """
    Update the profile and refresh the user cached in the session, so a
    changed default company is seen by the next company switch.
    """
    updates = request.model_dump(exclude_unset=True)

    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_request", "details": "No fields to update"}
        )

    supabase_client = get_supabase_client(auth_user.access_token)

    result = await update_user(supabase_client, auth_user.user_id, updates)
    user = cast(
        Dict[str, Any],
        raise_for_result(result, "update_error", "Failed to update user")
    )

    if auth_user.user_id in registry:
        state = await registry.get(auth_user.user_id).update_user(user)
        if state.user is not None:
            user = state.user

    return UserProfile(**user)
