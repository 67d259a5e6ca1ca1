from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestExpenses:
    """Expense tracking with date-range filters."""

    async def _create(self, client: AsyncClient, day: str, amount: str, category: str = "Supplies") -> dict:
        response = await client.post("/api/expenses", json={
            "category": category,
            "description": f"{category} on {day}",
            "amount": amount,
            "date": day,
        })
        assert response.status_code == 201
        return response.json()

    async def test_list_newest_first_with_filters(self, admin_client: AsyncClient) -> None:
        """Test ordering and the custom and month_year periods."""
        await self._create(admin_client, "2024-01-05", "10")
        await self._create(admin_client, "2024-02-10", "20")
        await self._create(admin_client, "2024-02-20", "30", category="Rent")

        response = await admin_client.get("/api/expenses")
        assert [e["date"] for e in response.json()] == ["2024-02-20", "2024-02-10", "2024-01-05"]

        response = await admin_client.get("/api/expenses", params={"period": "month_year", "month": "2024-02"})
        assert len(response.json()) == 2

        response = await admin_client.get("/api/expenses", params={"period": "custom", "from": "2024-01-05"})
        assert [e["date"] for e in response.json()] == ["2024-01-05"]

    async def test_patch_and_delete(self, admin_client: AsyncClient) -> None:
        """Test approving and removing an expense."""
        expense = await self._create(admin_client, "2024-01-05", "10")
        assert expense["status"] == "pending"

        response = await admin_client.patch(f"/api/expenses/{expense['id']}", json={
            "status": "approved", "approved_by": "Admin"
        })
        assert response.json()["status"] == "approved"

        assert (await admin_client.delete(f"/api/expenses/{expense['id']}")).json() == {"success": True}
        assert (await admin_client.patch(f"/api/expenses/{expense['id']}", json={})).status_code == 404

    async def test_bulk_delete(self, admin_client: AsyncClient) -> None:
        """Test bulk deletion of expenses."""
        first = await self._create(admin_client, "2024-01-05", "10")
        second = await self._create(admin_client, "2024-01-06", "10")

        response = await admin_client.post("/api/expenses/bulk-delete", json={"ids": [first["id"], second["id"]]})
        assert response.json()["deleted"] == 2


@pytest.mark.integration
class TestBankTransactions:
    """Deposits, withdrawals and the running balance."""

    async def test_summary(self, admin_client: AsyncClient) -> None:
        """Test deposit and withdrawal totals and the resulting balance."""
        today = date.today().isoformat()
        for kind, amount in (("deposit", "1000"), ("deposit", "250.50"), ("withdrawal", "300")):
            response = await admin_client.post("/api/bank-transactions", json={
                "type": kind, "amount": amount, "bank_name": "City Bank", "date": today
            })
            assert response.status_code == 201

        response = await admin_client.get("/api/bank-transactions/summary")
        summary = response.json()
        assert Decimal(summary["deposits"]) == Decimal("1250.50")
        assert Decimal(summary["withdrawals"]) == Decimal("300.00")
        assert Decimal(summary["balance"]) == Decimal("950.50")

    async def test_empty_summary(self, admin_client: AsyncClient) -> None:
        """Test the summary with no transactions."""
        response = await admin_client.get("/api/bank-transactions/summary")
        assert {k: Decimal(v) for k, v in response.json().items()} == {
            "deposits": Decimal("0"), "withdrawals": Decimal("0"), "balance": Decimal("0")
        }

    async def test_invalid_type_and_delete(self, admin_client: AsyncClient) -> None:
        """Test transaction type validation and deletion."""
        response = await admin_client.post("/api/bank-transactions", json={
            "type": "transfer", "amount": "5", "bank_name": "City Bank", "date": "2024-01-01"
        })
        assert response.status_code == 400

        response = await admin_client.post("/api/bank-transactions", json={
            "type": "deposit", "amount": "5", "bank_name": "City Bank", "date": "2024-01-01"
        })
        transaction = response.json()

        assert (await admin_client.delete(f"/api/bank-transactions/{transaction['id']}")).status_code == 200
        assert (await admin_client.get("/api/bank-transactions")).json() == []
