from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestClinicSettings:
    """Clinic settings and the public branding endpoint."""

    async def test_defaults_created_on_first_read(self, admin_client: AsyncClient) -> None:
        """Test the default settings row."""
        response = await admin_client.get("/api/settings")
        assert response.status_code == 200
        data = response.json()
        assert data["clinic_name"] == "My Clinic"
        assert data["currency"] == "USD"
        assert data["invoice_prefix"] == "INV"

    async def test_update_merges_fields(self, admin_client: AsyncClient) -> None:
        """Test that omitted fields keep their stored values."""
        await admin_client.put("/api/settings", json={"currency": "EUR"})
        response = await admin_client.put("/api/settings", json={"clinic_name": "Riverside Clinic"})

        data = response.json()
        assert data["clinic_name"] == "Riverside Clinic"
        assert data["currency"] == "EUR"

        response = await admin_client.get("/api/activity-logs")
        assert response.json()[0]["description"] == "Clinic settings updated"

    async def test_tax_rate_bounds(self, admin_client: AsyncClient) -> None:
        """Test that the tax rate is a percentage."""
        response = await admin_client.put("/api/settings", json={"tax_rate": "150"})
        assert response.status_code == 400

    async def test_remove_logo(self, admin_client: AsyncClient) -> None:
        """Test clearing the clinic logo."""
        await admin_client.put("/api/settings", json={"logo": "data:image/png;base64,AAAA"})

        response = await admin_client.delete("/api/settings/logo")
        assert response.status_code == 200
        assert response.json()["logo"] is None

    async def test_public_settings(self, client: AsyncClient, admin_client: AsyncClient) -> None:
        """Test branding before and after the clinic is configured."""
        response = await client.get("/api/public/settings")
        assert response.json()["app_name"] == "ClinicPOS"
        assert response.json()["clinic_name"] == "My Clinic"

        await admin_client.put("/api/settings", json={"clinic_name": "Riverside Clinic", "phone": "555-0100"})

        response = await client.get("/api/public/settings")
        data = response.json()
        assert data["clinic_name"] == "Riverside Clinic"
        assert data["phone"] == "555-0100"
        assert "tax_rate" not in data


@pytest.mark.integration
class TestIntegrations:
    """Peripheral device records."""

    async def test_create_and_toggle(self, admin_client: AsyncClient) -> None:
        """Test that devices start disconnected and toggling stamps the connect time."""
        response = await admin_client.post("/api/integrations", json={
            "device_name": "Receipt Printer",
            "device_type": "printer",
            "connection_type": "usb",
        })
        assert response.status_code == 201
        device = response.json()
        assert device["status"] == "disconnected"
        assert device["last_connected"] is None

        response = await admin_client.post(f"/api/integrations/{device['id']}/toggle")
        assert response.json()["status"] == "connected"
        assert response.json()["last_connected"] is not None

        response = await admin_client.post(f"/api/integrations/{device['id']}/toggle")
        assert response.json()["status"] == "disconnected"

    async def test_patch_and_missing(self, admin_client: AsyncClient) -> None:
        """Test updating connection details and the 404 for unknown devices."""
        response = await admin_client.post("/api/integrations", json={
            "device_name": "Analyzer", "device_type": "lab", "connection_type": "network"
        })
        device = response.json()

        response = await admin_client.patch(f"/api/integrations/{device['id']}", json={
            "ip_address": "10.0.0.12", "port": "9100"
        })
        assert response.json()["ip_address"] == "10.0.0.12"

        response = await admin_client.patch(f"/api/integrations/{device['id']}", json={"status": "broken"})
        assert response.status_code == 400

        assert (await admin_client.post("/api/integrations/42/toggle")).status_code == 404


@pytest.mark.integration
class TestDashboardAndReports:
    """Aggregates over bills, expenses and the catalogs."""

    async def _seed(self, client: AsyncClient, patient: dict) -> None:
        response = await client.post("/api/bills", json={
            "patient_id": patient["id"],
            "items": [{"name": "Consultation", "type": "service", "quantity": 1, "unit_price": 40}],
            "paid_amount": "40",
        })
        assert response.status_code == 201

        response = await client.post("/api/expenses", json={
            "category": "Supplies", "description": "Gloves", "amount": "15", "date": date.today().isoformat()
        })
        assert response.status_code == 201

        for name, category, price in (
            ("Consultation", "General", "25"),
            ("Follow-up", "General", "15"),
            ("X-Ray", "Imaging", "40"),
        ):
            await client.post("/api/services", json={"name": name, "category": category, "price": price})

        response = await client.post("/api/opd-visits", json={"patient_id": patient["id"], "doctor_name": "Dr. Jones"})
        assert response.status_code == 201

    async def test_dashboard(self, admin_client: AsyncClient, patient: dict) -> None:
        """Test the dashboard stats, charts and recent visits."""
        await self._seed(admin_client, patient)

        response = await admin_client.get("/api/dashboard/stats")
        stats = response.json()
        assert stats["total_patients"] == 1
        assert stats["active_opd"] == 1
        assert stats["total_bills"] == 1
        assert stats["today_bills"] == 1
        assert Decimal(stats["today_revenue"]) == Decimal("40.00")
        assert Decimal(stats["month_expenses"]) == Decimal("15.00")

        response = await admin_client.get("/api/dashboard/revenue-chart")
        chart = response.json()
        assert len(chart) == 7
        assert chart[-1] == {"date": date.today().strftime("%a"), "revenue": 40.0}

        response = await admin_client.get("/api/dashboard/service-breakdown")
        assert response.json() == [{"name": "General", "count": 2}, {"name": "Imaging", "count": 1}]

        response = await admin_client.get("/api/dashboard/recent-visits")
        assert response.json()[0]["patient_name"] == "John Doe"

    async def test_reports(self, admin_client: AsyncClient, patient: dict) -> None:
        """Test the summary, monthly series and ranked lists."""
        await self._seed(admin_client, patient)

        response = await admin_client.get("/api/reports/summary")
        summary = response.json()
        assert Decimal(summary["total_revenue"]) == Decimal("40.00")
        assert Decimal(summary["total_expenses"]) == Decimal("15.00")
        assert Decimal(summary["net_profit"]) == Decimal("25.00")
        assert summary["total_services"] == 3

        response = await admin_client.get("/api/reports/summary", params={
            "period": "custom", "from": "2000-01-01", "to": "2000-01-31"
        })
        summary = response.json()
        assert summary["total_bills"] == 0
        assert summary["total_patients"] == 0

        response = await admin_client.get("/api/reports/monthly-revenue")
        months = response.json()
        assert len(months) == 6
        assert months[-1]["revenue"] == 40.0
        assert months[-1]["expenses"] == 15.0

        response = await admin_client.get("/api/reports/expenses-by-category")
        assert [(c["category"], Decimal(c["total"])) for c in response.json()] == [("Supplies", Decimal("15.00"))]

        response = await admin_client.get("/api/reports/top-services")
        assert [s["name"] for s in response.json()] == ["X-Ray", "Consultation", "Follow-up"]
