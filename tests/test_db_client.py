"""
Tests for the Supabase client accessors.

create_client is patched so no network client is built.
"""

from unittest.mock import MagicMock, patch

import pytest

from beeconta.db.client import SupabaseClients, create_auth_client, get_supabase_client


@pytest.fixture
def mock_create_client():
    with patch("beeconta.db.client.create_client") as mock:
        mock.side_effect = lambda **kwargs: MagicMock(name=kwargs["supabase_key"])
        yield mock


class TestSupabaseClients:

    def test_anonymous_client_is_built_once(self, mock_create_client):
        clients = SupabaseClients("http://localhost:54321", "anon-key", "service-key")

        first = clients.get_client()
        second = clients.get_client()

        assert first is second
        mock_create_client.assert_called_once_with(
            supabase_url="http://localhost:54321", supabase_key="anon-key"
        )

    def test_admin_client_is_built_once(self, mock_create_client):
        clients = SupabaseClients("http://localhost:54321", "anon-key", "service-key")

        first = clients.get_admin_client()
        second = clients.get_admin_client()

        assert first is second
        mock_create_client.assert_called_once_with(
            supabase_url="http://localhost:54321", supabase_key="service-key"
        )

    def test_roles_get_separate_clients(self, mock_create_client):
        clients = SupabaseClients("http://localhost:54321", "anon-key", "service-key")

        assert clients.get_client() is not clients.get_admin_client()
        assert mock_create_client.call_count == 2

    @pytest.mark.parametrize("service_role_key", [None, ""])
    def test_admin_client_requires_service_role_key(self, service_role_key, mock_create_client):
        clients = SupabaseClients("http://localhost:54321", "anon-key", service_role_key)

        with pytest.raises(ValueError):
            clients.get_admin_client()

        mock_create_client.assert_not_called()


class TestPerRequestClients:

    def test_user_client_carries_token(self, mock_create_client):
        client = get_supabase_client("user-jwt")

        client.postgrest.auth.assert_called_once_with("user-jwt")

    def test_auth_clients_are_not_shared(self, mock_create_client):
        assert create_auth_client() is not create_auth_client()
        assert mock_create_client.call_count == 2
