"""
Tests for company CRUD endpoints.

Tests cover:
- Listing reachable companies
- Company creation (caller becomes ADMIN)
- Retrieval, update and soft delete
- Mapping of permission and not-found failures to 403/404
- Request validation
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch, MagicMock
from beeconta.main import app
from beeconta.auth.dependencies import get_authenticated_user, AuthenticatedUser
from beeconta.services.errors import NotFoundError, PermissionDeniedError
from beeconta.services.result import ServiceResult

client = TestClient(app)


async def mock_get_authenticated_user_dependency():
    """Mock dependency that returns test AuthenticatedUser."""
    return AuthenticatedUser(
        user_id="test-user-id",
        access_token="test-access-token"
    )


@pytest.fixture
def mock_auth():
    """Override get_authenticated_user dependency."""
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def mock_company():
    return {
        "id": "company-123",
        "nome": "Colmeia Embalagens LTDA",
        "nome_fantasia": "Colmeia",
        "cnpj_cpf": "12.345.678/0001-90",
        "tipo_documento": "CNPJ",
        "regime_tributario": "SIMPLES",
        "status": "ativo",
    }


@pytest.fixture
def mock_get_supabase_client():
    with patch("beeconta.routes.companies.get_supabase_client") as mock:
        mock.return_value = MagicMock()
        yield mock


class TestListCompanies:
    """Tests for GET /companies"""

    @patch("beeconta.routes.companies.list_user_companies")
    def test_list_companies_success(self, mock_list, mock_auth, mock_get_supabase_client, mock_company):
        mock_list.return_value = ServiceResult.success([mock_company])

        response = client.get("/companies")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["companies"][0]["id"] == "company-123"
        assert data["companies"][0]["nome_fantasia"] == "Colmeia"
        mock_get_supabase_client.assert_called_once_with("test-access-token")
        assert mock_list.call_args[0][1] == "test-user-id"

    @patch("beeconta.routes.companies.list_user_companies")
    def test_list_companies_empty(self, mock_list, mock_auth, mock_get_supabase_client):
        mock_list.return_value = ServiceResult.success([])

        response = client.get("/companies")

        assert response.status_code == 200
        assert response.json() == {"companies": [], "count": 0}

    @patch("beeconta.routes.companies.list_user_companies")
    def test_list_companies_failure(self, mock_list, mock_auth, mock_get_supabase_client):
        mock_list.return_value = ServiceResult.failure(Exception("connection reset"))

        response = client.get("/companies")

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["error"] == "fetch_error"
        assert detail["details"] == "Failed to load available companies"

    def test_list_companies_requires_auth(self):
        response = client.get("/companies")

        assert response.status_code == 401
        assert response.json()["detail"]["error"] == "unauthorized"


class TestCreateCompany:
    """Tests for POST /companies"""

    @patch("beeconta.routes.companies.create_company")
    def test_create_company_success(self, mock_create, mock_auth, mock_get_supabase_client, mock_company):
        mock_create.return_value = ServiceResult.success(mock_company)

        response = client.post("/companies", json={
            "nome": "Colmeia Embalagens LTDA",
            "cnpj_cpf": "12.345.678/0001-90",
            "tipo_documento": "CNPJ",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "CREATED"
        assert data["company"]["id"] == "company-123"

        _, payload, user_id = mock_create.call_args[0]
        assert payload["nome"] == "Colmeia Embalagens LTDA"
        assert "nome_fantasia" not in payload
        assert user_id == "test-user-id"

    def test_create_company_invalid_document_type(self, mock_auth, mock_get_supabase_client):
        response = client.post("/companies", json={
            "nome": "Colmeia",
            "cnpj_cpf": "123",
            "tipo_documento": "RG",
        })

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "validation_error"
        assert any(error["loc"][-1] == "tipo_documento" for error in body["details"])


class TestGetCompany:
    """Tests for GET /companies/{company_id}"""

    @patch("beeconta.routes.companies.get_company_by_id")
    def test_get_company_success(self, mock_get, mock_auth, mock_get_supabase_client, mock_company):
        mock_get.return_value = ServiceResult.success(mock_company)

        response = client.get("/companies/company-123")

        assert response.status_code == 200
        assert response.json()["nome"] == "Colmeia Embalagens LTDA"

    @patch("beeconta.routes.companies.get_company_by_id")
    def test_get_company_not_found(self, mock_get, mock_auth, mock_get_supabase_client):
        mock_get.return_value = ServiceResult.failure(NotFoundError("Company nope not found"))

        response = client.get("/companies/nope")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"


class TestUpdateCompany:
    """Tests for PATCH /companies/{company_id}"""

    @patch("beeconta.routes.companies.update_company")
    def test_update_company_sends_only_set_fields(self, mock_update, mock_auth, mock_get_supabase_client, mock_company):
        mock_update.return_value = ServiceResult.success({**mock_company, "nome_fantasia": "Colmeia Sul"})

        response = client.patch("/companies/company-123", json={"nome_fantasia": "Colmeia Sul"})

        assert response.status_code == 200
        assert response.json()["status"] == "UPDATED"
        assert response.json()["company"]["nome_fantasia"] == "Colmeia Sul"
        _, company_id, updates, user_id = mock_update.call_args[0]
        assert company_id == "company-123"
        assert updates == {"nome_fantasia": "Colmeia Sul"}
        assert user_id == "test-user-id"

    @patch("beeconta.routes.companies.update_company")
    def test_update_company_without_admin_access(self, mock_update, mock_auth, mock_get_supabase_client):
        mock_update.return_value = ServiceResult.failure(
            PermissionDeniedError("ADMIN access required on company company-123")
        )

        response = client.patch("/companies/company-123", json={"nome": "Outra"})

        assert response.status_code == 403
        detail = response.json()["detail"]
        assert detail["error"] == "forbidden"
        assert "ADMIN" in detail["details"]


class TestDeleteCompany:
    """Tests for DELETE /companies/{company_id}"""

    @patch("beeconta.routes.companies.delete_company")
    def test_delete_company_success(self, mock_delete, mock_auth, mock_get_supabase_client):
        mock_delete.return_value = ServiceResult.success()

        response = client.delete("/companies/company-123")

        assert response.status_code == 200
        assert response.json()["status"] == "DELETED"

    @patch("beeconta.routes.companies.delete_company")
    def test_delete_company_backend_failure(self, mock_delete, mock_auth, mock_get_supabase_client):
        mock_delete.return_value = ServiceResult.failure(Exception("timeout"))

        response = client.delete("/companies/company-123")

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "delete_error"
