"""
Tests for bank account, credit card and catalog endpoints.

Tests cover:
- Listing and creating accounts/cards under a company
- Retrieval, partial update and soft delete by id
- Bank and currency catalogs
- Request validation (dates, card digits, billing days)
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch, MagicMock
from beeconta.main import app
from beeconta.auth.dependencies import get_authenticated_user, AuthenticatedUser
from beeconta.services.errors import NotFoundError
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
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def mock_bank():
    return {"id": "bank-1", "codigo": "001", "nome": "Banco do Brasil", "status": "ativo"}


@pytest.fixture
def mock_currency():
    return {"id": "brl", "codigo": "BRL", "nome": "Real", "simbolo": "R$", "status": "ativa"}


@pytest.fixture
def mock_account(mock_bank, mock_currency):
    return {
        "id": "account-123",
        "empresa_id": "company-123",
        "banco_id": "bank-1",
        "agencia": "1234",
        "conta": "56789",
        "digito": "0",
        "tipo_conta": "CORRENTE",
        "descricao": "Conta movimento",
        "saldo_inicial": 1500.0,
        "data_saldo_inicial": "2025-01-01",
        "moeda_id": "brl",
        "status": "ativa",
        "banco": mock_bank,
        "moeda": mock_currency,
    }


@pytest.fixture
def mock_card():
    return {
        "id": "card-1",
        "empresa_id": "company-123",
        "descricao": "Corporativo",
        "bandeira": "VISA",
        "ultimos_digitos": "4321",
        "nome_titular": "Colmeia Embalagens",
        "data_fechamento": 5,
        "data_vencimento": 15,
        "limite": 10000.0,
        "moeda_id": "brl",
        "internacional": False,
        "status": "ativo",
    }


@pytest.fixture
def mock_accounts_client():
    with patch("beeconta.routes.bank_accounts.get_supabase_client") as mock:
        mock.return_value = MagicMock()
        yield mock


@pytest.fixture
def mock_cards_client():
    with patch("beeconta.routes.credit_cards.get_supabase_client") as mock:
        mock.return_value = MagicMock()
        yield mock


class TestBankAccounts:

    @patch("beeconta.routes.bank_accounts.list_company_bank_accounts")
    def test_list_accounts(self, mock_list, mock_auth, mock_accounts_client, mock_account):
        mock_list.return_value = ServiceResult.success([mock_account])

        response = client.get("/companies/company-123/bank-accounts")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["accounts"][0]["banco"]["codigo"] == "001"
        assert data["accounts"][0]["moeda"]["simbolo"] == "R$"
        assert mock_list.call_args[0][1] == "company-123"

    @patch("beeconta.routes.bank_accounts.create_bank_account")
    def test_create_account_uses_path_company(self, mock_create, mock_auth, mock_accounts_client, mock_account):
        mock_create.return_value = ServiceResult.success(mock_account)

        response = client.post("/companies/company-123/bank-accounts", json={
            "banco_id": "bank-1",
            "agencia": "1234",
            "conta": "56789",
            "descricao": "Conta movimento",
            "saldo_inicial": 1500.0,
            "data_saldo_inicial": "2025-01-01",
            "moeda_id": "brl",
        })

        assert response.status_code == 201
        assert response.json()["status"] == "CREATED"
        payload = mock_create.call_args[0][1]
        assert payload["empresa_id"] == "company-123"
        assert payload["tipo_conta"] == "CORRENTE"

    def test_create_account_rejects_bad_date(self, mock_auth, mock_accounts_client):
        response = client.post("/companies/company-123/bank-accounts", json={
            "banco_id": "bank-1",
            "agencia": "1234",
            "conta": "56789",
            "descricao": "Conta movimento",
            "data_saldo_inicial": "01/01/2025",
            "moeda_id": "brl",
        })

        assert response.status_code == 422

    @patch("beeconta.routes.bank_accounts.get_bank_account_by_id")
    def test_get_account_not_found(self, mock_get, mock_auth, mock_accounts_client):
        mock_get.return_value = ServiceResult.failure(NotFoundError("Bank account missing not found"))

        response = client.get("/bank-accounts/missing")

        assert response.status_code == 404

    @patch("beeconta.routes.bank_accounts.update_bank_account")
    def test_update_account(self, mock_update, mock_auth, mock_accounts_client, mock_account):
        mock_update.return_value = ServiceResult.success({**mock_account, "descricao": "Folha"})

        response = client.patch("/bank-accounts/account-123", json={"descricao": "Folha"})

        assert response.status_code == 200
        assert response.json()["account"]["descricao"] == "Folha"
        assert mock_update.call_args[0][2] == {"descricao": "Folha"}

    def test_update_account_with_empty_body(self, mock_auth, mock_accounts_client):
        response = client.patch("/bank-accounts/account-123", json={})

        assert response.status_code == 400

    @patch("beeconta.routes.bank_accounts.delete_bank_account")
    def test_delete_account(self, mock_delete, mock_auth, mock_accounts_client):
        mock_delete.return_value = ServiceResult.success()

        response = client.delete("/bank-accounts/account-123")

        assert response.status_code == 200
        assert response.json()["status"] == "DELETED"


class TestCatalogs:

    @patch("beeconta.routes.bank_accounts.list_banks")
    def test_list_banks(self, mock_banks, mock_auth, mock_accounts_client, mock_bank):
        mock_banks.return_value = ServiceResult.success([mock_bank])

        response = client.get("/banks")

        assert response.status_code == 200
        assert response.json()["banks"][0]["nome"] == "Banco do Brasil"

    @patch("beeconta.routes.bank_accounts.list_currencies")
    def test_list_currencies_failure(self, mock_currencies, mock_auth, mock_accounts_client):
        mock_currencies.return_value = ServiceResult.failure(Exception("boom"))

        response = client.get("/currencies")

        assert response.status_code == 500


class TestCreditCards:

    @patch("beeconta.routes.credit_cards.list_company_credit_cards")
    def test_list_cards(self, mock_list, mock_auth, mock_cards_client, mock_card):
        mock_list.return_value = ServiceResult.success([mock_card])

        response = client.get("/companies/company-123/credit-cards")

        assert response.status_code == 200
        assert response.json()["cards"][0]["ultimos_digitos"] == "4321"

    @patch("beeconta.routes.credit_cards.create_credit_card")
    def test_create_card(self, mock_create, mock_auth, mock_cards_client, mock_card):
        mock_create.return_value = ServiceResult.success(mock_card)

        response = client.post("/companies/company-123/credit-cards", json={
            "descricao": "Corporativo",
            "bandeira": "VISA",
            "ultimos_digitos": "4321",
            "nome_titular": "Colmeia Embalagens",
            "data_fechamento": 5,
            "data_vencimento": 15,
            "limite": 10000.0,
            "moeda_id": "brl",
        })

        assert response.status_code == 201
        assert mock_create.call_args[0][1]["empresa_id"] == "company-123"

    @pytest.mark.parametrize("field,value", [
        ("ultimos_digitos", "12a4"),
        ("limite", -1),
        ("data_fechamento", 0),
        ("data_vencimento", 32),
    ])
    def test_create_card_validation(self, field, value, mock_auth, mock_cards_client):
        body = {
            "descricao": "Corporativo",
            "bandeira": "VISA",
            "ultimos_digitos": "4321",
            "nome_titular": "Colmeia Embalagens",
            "data_fechamento": 5,
            "data_vencimento": 15,
            "limite": 10000.0,
            "moeda_id": "brl",
        }
        body[field] = value

        response = client.post("/companies/company-123/credit-cards", json=body)

        assert response.status_code == 422

    @patch("beeconta.routes.credit_cards.delete_credit_card")
    def test_delete_card(self, mock_delete, mock_auth, mock_cards_client):
        mock_delete.return_value = ServiceResult.success()

        response = client.delete("/credit-cards/card-1")

        assert response.status_code == 200
