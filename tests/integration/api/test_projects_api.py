"""Integration tests for Project and Financial Health API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from config import ApplicationConfig

API = ApplicationConfig.API_PREFIX


class TestProjectVisibilityAPI:
    @pytest.mark.asyncio
    async def test_financial_fields_hidden_by_default(self, client: AsyncClient, seeded):
        response = await client.get(f"{API}/projects/{seeded['project'].id}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Lakeside Villa"
        assert data["stage"] == "TENDER"
        assert data["total_fee"] is None
        assert data["production_budget"] is None
        assert data["actual_cost"] is None

    @pytest.mark.asyncio
    async def test_financial_fields_with_header(self, client: AsyncClient, seeded):
        response = await client.get(
            f"{API}/projects/{seeded['project'].id}", headers={"X-View-Financials": "true"}
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_fee"]) == Decimal("1000000")
        assert Decimal(data["production_budget"]) == Decimal("800000")

    @pytest.mark.asyncio
    async def test_phases(self, client: AsyncClient, seeded):
        project_id = seeded["project"].id

        hidden = await client.get(f"{API}/projects/{project_id}/phases")
        shown = await client.get(f"{API}/projects/{project_id}/phases", headers={"X-View-Financials": "true"})

        assert hidden.status_code == 200
        phases = hidden.json()
        assert [p["name"] for p in phases] == ["Concept", "Drawings"]
        assert all(p["contract_amount"] is None for p in phases)
        assert [s["name"] for s in phases[0]["substages"]] == ["Site survey", "Client brief"]
        assert phases[0]["completion"]["completed"] == 1
        assert phases[0]["completion"]["all_complete"] is False
        assert Decimal(shown.json()[0]["contract_amount"]) == Decimal("400000")

    @pytest.mark.asyncio
    async def test_project_not_found(self, client: AsyncClient):
        response = await client.get(f"{API}/projects/9999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PROJECT_NOT_FOUND"


class TestBurnRateAPI:
    @pytest.mark.asyncio
    async def test_burn_rate(self, client: AsyncClient, seeded):
        """
        Given: Fee 1,000,000 at 20% margin with 400,000 booked
        When: Burn rate is requested
        Then: 50% of the 800,000 production budget, healthy
        """
        response = await client.get(f"{API}/projects/{seeded['project'].id}/burn-rate")

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["production_budget"]) == Decimal("800000")
        assert Decimal(data["current_burn"]) == Decimal("400000")
        assert Decimal(data["burn_percentage"]) == Decimal("50")
        assert data["status"] == "healthy"
        assert data["over_budget"] is False
        assert len(data["phase_breakdown"]) == 2

    @pytest.mark.asyncio
    async def test_phase_availability(self, client: AsyncClient, seeded):
        phase_id = seeded["phases"][0].id

        response = await client.get(f"{API}/phases/{phase_id}/availability", params={"burn_rate": "300"})

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["remaining_budget"]) == Decimal("100000")
        assert data["max_hours_by_budget"] == 333


class TestFinancialHealthAPI:
    @pytest.mark.asyncio
    async def test_dashboard(self, client: AsyncClient, seeded):
        org_id = seeded["organization"].id
        await client.post(
            f"{API}/invoices",
            json={"organization_id": org_id, "project_id": seeded["project"].id,
                  "target_cumulative_percentage": "0.10"},
        )

        response = await client.get(f"{API}/financial-health", params={"organization_id": org_id})

        assert response.status_code == 200
        data = response.json()
        assert data["overall"]["total_invoices"] == 1
        assert data["overall"]["total_active_projects"] == 1
        assert data["overall"]["collection_rate"] == 0.0
        assert data["all_invoices"]["total_invoices"] == 1
        assert [m["key"] for m in data["by_invoice_status"]] == ["DRAFT"]
        assert [m["key"] for m in data["by_charge_type"]] == ["REGULAR"]
        assert data["by_project_stage"][0]["display_name"] == "Working Drawings & Tender"

    @pytest.mark.asyncio
    async def test_unknown_organization(self, client: AsyncClient):
        response = await client.get(f"{API}/financial-health", params={"organization_id": 9999})

        assert response.status_code == 404
