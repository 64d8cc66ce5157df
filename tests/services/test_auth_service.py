"""
Tests for the auth service.

Supabase Auth is mocked on fake_supabase.auth; the usuarios table lives in
the in-memory fake.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

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
from beeconta.services.errors import NotFoundError


def _auth_user(user_id: str = "user-1", email: str = "ana@colmeia.com.br") -> SimpleNamespace:
    return SimpleNamespace(
        id=user_id,
        email=email,
        user_metadata={"nome": "Ana", "sobrenome": "Souza", "nome_exibicao": "Ana Souza"},
    )


class TestGetCurrentUser:

    @pytest.mark.asyncio
    async def test_profile_row_with_email(self, fake_supabase):
        fake_supabase.auth.get_user.return_value = SimpleNamespace(user=_auth_user())
        fake_supabase.seed("usuarios", [{
            "id": "user-1",
            "nome": "Ana",
            "sobrenome": "Souza",
            "nome_exibicao": "Ana S.",
            "url_avatar": None,
            "empresa_padrao_id": "a",
        }])

        result = await get_current_user(fake_supabase, "token")

        assert result.ok
        assert result.data["nome_exibicao"] == "Ana S."
        assert result.data["empresa_padrao_id"] == "a"
        assert result.data["email"] == "ana@colmeia.com.br"
        assert result.data["admin_sistema"] is False
        fake_supabase.auth.get_user.assert_called_once_with("token")

    @pytest.mark.asyncio
    async def test_missing_row_falls_back_to_metadata(self, fake_supabase):
        fake_supabase.auth.get_user.return_value = SimpleNamespace(user=_auth_user())

        result = await get_current_user(fake_supabase, "token")

        assert result.ok
        assert result.data["id"] == "user-1"
        assert result.data["nome"] == "Ana"
        assert result.data["empresa_padrao_id"] is None

    @pytest.mark.asyncio
    async def test_unreadable_row_falls_back_to_metadata(self, fake_supabase):
        fake_supabase.auth.get_user.return_value = SimpleNamespace(user=_auth_user())
        fake_supabase.fail_on("usuarios")

        result = await get_current_user(fake_supabase, "token")

        assert result.ok
        assert result.data["nome_exibicao"] == "Ana Souza"

    @pytest.mark.asyncio
    async def test_no_user_for_token(self, fake_supabase):
        fake_supabase.auth.get_user.return_value = SimpleNamespace(user=None)

        result = await get_current_user(fake_supabase, "token")

        assert result.ok
        assert result.data is None

    @pytest.mark.asyncio
    async def test_auth_error_is_a_failure(self, fake_supabase):
        fake_supabase.auth.get_user.side_effect = Exception("invalid JWT")

        result = await get_current_user(fake_supabase, "token")

        assert not result.ok


class TestLogin:

    @pytest.mark.asyncio
    async def test_returns_tokens(self, supabase_client):
        supabase_client.auth.sign_in_with_password.return_value = SimpleNamespace(
            user=SimpleNamespace(id="user-1"),
            session=SimpleNamespace(
                access_token="access",
                refresh_token="refresh",
                expires_in=3600,
                token_type="bearer",
            ),
        )

        result = await login(supabase_client, "ana@colmeia.com.br", "secret")

        assert result.data == {
            "user_id": "user-1",
            "access_token": "access",
            "refresh_token": "refresh",
            "expires_in": 3600,
            "token_type": "bearer",
        }

    @pytest.mark.asyncio
    async def test_invalid_credentials(self, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")

        result = await login(supabase_client, "ana@colmeia.com.br", "wrong")

        assert not result.ok
        assert result.data is None

    @pytest.mark.asyncio
    async def test_google_url(self, supabase_client):
        supabase_client.auth.sign_in_with_oauth.return_value = SimpleNamespace(
            provider="google", url="https://accounts.google.com/o/oauth2"
        )

        result = await login_with_google(supabase_client, "http://localhost:3000")

        assert result.data == "https://accounts.google.com/o/oauth2"
        args = supabase_client.auth.sign_in_with_oauth.call_args[0][0]
        assert args["provider"] == "google"
        assert args["options"]["redirect_to"] == "http://localhost:3000"


class TestRegister:

    @pytest.mark.asyncio
    async def test_creates_profile_row(self, supabase_client, fake_supabase):
        supabase_client.auth.sign_up.return_value = SimpleNamespace(
            user=SimpleNamespace(id="user-9"), session=None
        )

        result = await register(
            supabase_client, fake_supabase, "bia@colmeia.com.br", "secret1", "Bia", "Lima"
        )

        assert result.data == {"user_id": "user-9", "email": "bia@colmeia.com.br"}
        metadata = supabase_client.auth.sign_up.call_args[0][0]["options"]["data"]
        assert metadata["nome_exibicao"] == "Bia Lima"
        assert fake_supabase.row("usuarios", "user-9")["nome"] == "Bia"

    @pytest.mark.asyncio
    async def test_sign_up_without_user_fails(self, supabase_client, fake_supabase):
        supabase_client.auth.sign_up.return_value = SimpleNamespace(user=None, session=None)

        result = await register(
            supabase_client, fake_supabase, "bia@colmeia.com.br", "secret1", "Bia", "Lima"
        )

        assert not result.ok
        assert fake_supabase.calls_for("usuarios") == []


class TestUpdateUser:

    @pytest.mark.asyncio
    async def test_only_profile_fields_written(self, fake_supabase):
        fake_supabase.seed("usuarios", [{"id": "user-1", "nome": "Ana", "admin_sistema": False}])

        result = await update_user(
            fake_supabase, "user-1", {"empresa_padrao_id": "a", "admin_sistema": True}
        )

        assert result.ok
        assert result.data["empresa_padrao_id"] == "a"
        assert result.data["admin_sistema"] is False

    @pytest.mark.asyncio
    async def test_unknown_user(self, fake_supabase):
        result = await update_user(fake_supabase, "missing", {"nome": "X"})

        assert isinstance(result.error, NotFoundError)


class TestPasswordAndLogout:

    @pytest.mark.asyncio
    async def test_recover_password_sends_redirect(self, supabase_client):
        result = await recover_password(
            supabase_client, "ana@colmeia.com.br", "http://localhost:3000/reset-password"
        )

        assert result.ok
        supabase_client.auth.reset_password_for_email.assert_called_once_with(
            "ana@colmeia.com.br", {"redirect_to": "http://localhost:3000/reset-password"}
        )

    @pytest.mark.asyncio
    async def test_reset_password_uses_admin_api(self):
        admin_client = MagicMock()

        result = await reset_password(admin_client, "user-1", "new-secret")

        assert result.ok
        admin_client.auth.admin.update_user_by_id.assert_called_once_with(
            "user-1", {"password": "new-secret"}
        )

    @pytest.mark.asyncio
    async def test_logout_failure_is_reported(self):
        admin_client = MagicMock()
        admin_client.auth.admin.sign_out.side_effect = Exception("network down")

        result = await logout(admin_client, "token")

        assert not result.ok
