"""
Tests for the financial summary.
"""

import pytest

from beeconta.services.report_service import get_financial_summary, month_bounds, variation


class TestMonthBounds:

    @pytest.mark.parametrize("month,expected", [
        ("2025-01", ("2025-01-01", "2025-01-31")),
        ("2025-02", ("2025-02-01", "2025-02-28")),
        ("2024-02", ("2024-02-01", "2024-02-29")),
        ("2025-04", ("2025-04-01", "2025-04-30")),
    ])
    def test_last_day_of_month(self, month, expected):
        assert month_bounds(month) == expected

    @pytest.mark.parametrize("month", ["2025-13", "2025", "abc-01", "2025-00"])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError):
            month_bounds(month)


class TestVariation:

    def test_percentage_change(self):
        assert variation(150.0, 100.0) == pytest.approx(50.0)
        assert variation(50.0, 100.0) == pytest.approx(-50.0)

    def test_zero_or_negative_previous_reports_100(self):
        assert variation(10.0, 0.0) == 100.0
        assert variation(10.0, -20.0) == 100.0


class TestFinancialSummary:

    @pytest.mark.asyncio
    async def test_summary(self, fake_supabase):
        fake_supabase.seed("contas_bancarias", [
            {"empresa_id": "a", "saldo_inicial": 1000.0, "status": "ativa"},
            {"empresa_id": "a", "saldo_inicial": 500.0, "status": "ativa"},
            {"empresa_id": "a", "saldo_inicial": 9999.0, "status": "encerrada"},
        ])
        fake_supabase.seed("transacoes", [
            {"empresa_id": "a", "tipo": "RECEITA", "valor": 300.0, "data_transacao": "2025-03-31", "status": "efetivada"},
            {"empresa_id": "a", "tipo": "DESPESA", "valor": 100.0, "data_transacao": "2025-03-01", "status": "efetivada"},
            {"empresa_id": "a", "tipo": "DESPESA", "valor": 999.0, "data_transacao": "2025-03-10", "status": "pendente"},
            {"empresa_id": "a", "tipo": "RECEITA", "valor": 200.0, "data_transacao": "2025-02-28", "status": "efetivada"},
            {"empresa_id": "a", "tipo": "DESPESA", "valor": 200.0, "data_transacao": "2025-02-15", "status": "efetivada"},
            {"empresa_id": "b", "tipo": "RECEITA", "valor": 777.0, "data_transacao": "2025-03-15", "status": "efetivada"},
        ])

        result = await get_financial_summary(fake_supabase, "a", "2025-03", "2025-02")

        assert result.ok
        summary = result.data
        assert summary["saldo_total"] == 1500.0
        assert summary["receitas_mes_atual"] == 300.0
        assert summary["despesas_mes_atual"] == 100.0
        assert summary["saldo_mes_atual"] == 200.0
        assert summary["receitas_mes_anterior"] == 200.0
        assert summary["despesas_mes_anterior"] == 200.0
        assert summary["saldo_mes_anterior"] == 0.0
        assert summary["variacao_receitas"] == pytest.approx(50.0)
        assert summary["variacao_despesas"] == pytest.approx(-50.0)
        assert summary["variacao_saldo"] == 100.0

    @pytest.mark.asyncio
    async def test_invalid_month_is_a_failure(self, fake_supabase):
        result = await get_financial_summary(fake_supabase, "a", "2025-13", "2025-02")

        assert isinstance(result.error, ValueError)
