from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.domain.billing.service import BillingService, compute_bill_totals, derive_status
from clinicpos.domain.catalog.service import MedicineService


@pytest.mark.unit
class TestBillTotals:
    """Subtotal, discount, tax and status arithmetic."""

    def test_amount_discount_and_tax(self) -> None:
        """Test tax charged on the discounted subtotal."""
        items = [{"quantity": 2, "unit_price": 10}, {"quantity": 1, "unit_price": 5}]
        totals = compute_bill_totals(items, discount=5, discount_type="amount", tax_rate=10)
        assert totals == {
            "subtotal": Decimal("25.00"),
            "discount_amount": Decimal("5.00"),
            "tax": Decimal("2.00"),
            "total": Decimal("22.00"),
        }

    def test_percentage_discount(self) -> None:
        """Test a percentage discount taken from the subtotal."""
        totals = compute_bill_totals([{"quantity": 4, "unit_price": "12.50"}], discount=10,
                                     discount_type="percentage")
        assert totals["discount_amount"] == Decimal("5.00")
        assert totals["total"] == Decimal("45.00")

    def test_explicit_line_total_wins(self) -> None:
        """Test that a line's own total overrides quantity times price."""
        totals = compute_bill_totals([{"quantity": 3, "unit_price": 10, "total": 25}])
        assert totals["subtotal"] == Decimal("25.00")

    def test_total_is_never_negative(self) -> None:
        """Test that oversized discounts are capped at the subtotal."""
        totals = compute_bill_totals([{"quantity": 1, "unit_price": 20}], discount=50)
        assert totals["discount_amount"] == Decimal("20.00")
        assert totals["total"] == Decimal("0.00")

    def test_derive_status(self) -> None:
        """Test paid, partial and unpaid states."""
        assert derive_status(Decimal("30"), Decimal("30")) == "paid"
        assert derive_status(Decimal("30"), Decimal("40")) == "paid"
        assert derive_status(Decimal("30"), Decimal("10")) == "partial"
        assert derive_status(Decimal("30"), 0) == "unpaid"


@pytest.mark.integration
class TestBills:
    """Bill endpoints, including stock deduction for sold medicines."""

    async def _create_bill(self, client: AsyncClient, patient: dict, medicine: dict, **overrides) -> dict:
        payload = {
            "patient_id": patient["id"],
            "items": [
                {"name": "General Consultation", "type": "service", "quantity": 1, "unit_price": 25},
                {
                    "name": medicine["name"],
                    "type": "medicine",
                    "medicine_id": medicine["id"],
                    "quantity": 3,
                    "unit_price": 0.5,
                },
            ],
            "payment_method": "cash",
        }
        payload.update(overrides)
        response = await client.post("/api/bills", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    async def test_create_bill_derives_totals(
        self,
        admin_client: AsyncClient,
        patient: dict,
        medicine: dict
    ) -> None:
        """Test that omitted totals, status and bill number are filled in."""
        bill = await self._create_bill(admin_client, patient, medicine, paid_amount="10")

        assert bill["bill_no"] == "INV-0001"
        assert Decimal(bill["subtotal"]) == Decimal("26.50")
        assert Decimal(bill["tax"]) == Decimal("0")
        assert Decimal(bill["total"]) == Decimal("26.50")
        assert bill["status"] == "partial"
        assert len(bill["items"]) == 2

    async def test_create_bill_deducts_stock(
        self,
        admin_client: AsyncClient,
        patient: dict,
        medicine: dict
    ) -> None:
        """Test that sold medicine leaves stock and is written to the stock history."""
        bill = await self._create_bill(admin_client, patient, medicine)

        response = await admin_client.get("/api/medicines")
        stocked = next(m for m in response.json() if m["id"] == medicine["id"])
        assert stocked["stock_count"] == 97
        assert stocked["quantity"] == 97

        response = await admin_client.get(f"/api/medicines/{medicine['id']}/stock-history")
        history = response.json()
        assert len(history) == 1
        assert history[0]["previous_stock"] == 100
        assert history[0]["new_stock"] == 97
        assert history[0]["adjustment_type"] == "subtract"
        assert history[0]["reason"] == f"Bill {bill['bill_no']} - sold 3 pc"

    async def test_stock_never_goes_negative(
        self,
        admin_client: AsyncClient,
        patient: dict,
        medicine: dict
    ) -> None:
        """Test that overselling floors stock at zero."""
        await self._create_bill(admin_client, patient, medicine, items=[{
            "name": medicine["name"],
            "type": "medicine",
            "medicine_id": medicine["id"],
            "quantity": 250,
            "unit_price": 0.5,
        }])

        response = await admin_client.get("/api/medicines/low-stock")
        low = response.json()
        assert [m["id"] for m in low] == [medicine["id"]]
        assert low[0]["stock_count"] == 0

    async def test_failed_deduction_rolls_back_bill(
        self,
        admin_client: AsyncClient,
        db_session: AsyncSession,
        patient: dict,
        medicine: dict,
        monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the bill and its stock movements are saved together or not at all."""
        original = MedicineService.deduct_stock

        async def deduct_then_fail(self, medicine_id, quantity, reason):
            await original(self, medicine_id, quantity, reason)
            raise RuntimeError("stock ledger unavailable")

        monkeypatch.setattr(MedicineService, "deduct_stock", deduct_then_fail)

        with pytest.raises(RuntimeError):
            await BillingService(db_session).create_bill({
                "patient_id": patient["id"],
                "items": [{
                    "name": medicine["name"],
                    "type": "medicine",
                    "medicine_id": medicine["id"],
                    "quantity": 3,
                    "unit_price": 0.5,
                }],
            })

        assert (await admin_client.get("/api/bills")).json() == []

        response = await admin_client.get("/api/medicines")
        stocked = next(m for m in response.json() if m["id"] == medicine["id"])
        assert stocked["stock_count"] == 100

        response = await admin_client.get(f"/api/medicines/{medicine['id']}/stock-history")
        assert response.json() == []

    async def test_missing_medicine_is_skipped(self, admin_client: AsyncClient, patient: dict) -> None:
        """Test that a bill referencing a deleted medicine still saves."""
        response = await admin_client.post("/api/bills", json={
            "patient_id": patient["id"],
            "items": [{"name": "Ghost", "type": "medicine", "medicine_id": 999, "quantity": 1, "unit_price": 2}],
        })
        assert response.status_code == 201

    async def test_create_bill_requires_items(self, admin_client: AsyncClient, patient: dict) -> None:
        """Test that an empty bill is rejected."""
        response = await admin_client.post("/api/bills", json={"patient_id": patient["id"], "items": []})
        assert response.status_code == 400
        assert "message" in response.json()

    async def test_search_and_status_filters(
        self,
        admin_client: AsyncClient,
        patient: dict,
        medicine: dict
    ) -> None:
        """Test loose bill-number search, patient-name search and status filtering."""
        await self._create_bill(admin_client, patient, medicine, paid_amount="100")
        await self._create_bill(admin_client, patient, medicine)

        response = await admin_client.get("/api/bills", params={"search": "inv2"})
        assert [b["bill_no"] for b in response.json()] == ["INV-0002"]

        response = await admin_client.get("/api/bills", params={"search": "john"})
        bills = response.json()
        assert len(bills) == 2
        assert all(b["patient_name"] == "John Doe" for b in bills)

        response = await admin_client.get("/api/bills", params={"status": "paid"})
        assert [b["bill_no"] for b in response.json()] == ["INV-0001"]

        response = await admin_client.get("/api/bills", params={"period": "custom", "from": "2000-01-01",
                                                                "to": "2000-12-31"})
        assert response.json() == []

    async def test_update_and_delete_bill(
        self,
        admin_client: AsyncClient,
        patient: dict,
        medicine: dict
    ) -> None:
        """Test payment updates and deletion."""
        bill = await self._create_bill(admin_client, patient, medicine)

        response = await admin_client.put(f"/api/bills/{bill['id']}", json={
            "paid_amount": bill["total"],
            "status": "paid",
        })
        assert response.status_code == 200
        assert response.json()["status"] == "paid"

        response = await admin_client.delete(f"/api/bills/{bill['id']}")
        assert response.json() == {"success": True}

        response = await admin_client.get(f"/api/bills/{bill['id']}")
        assert response.status_code == 404

    async def test_bulk_delete(self, admin_client: AsyncClient, patient: dict, medicine: dict) -> None:
        """Test bulk deletion and the empty-list error."""
        first = await self._create_bill(admin_client, patient, medicine)
        second = await self._create_bill(admin_client, patient, medicine)

        response = await admin_client.post("/api/bills/bulk-delete", json={"ids": [first["id"], second["id"]]})
        assert response.json() == {"success": True, "deleted": 2}

        response = await admin_client.post("/api/bills/bulk-delete", json={"ids": []})
        assert response.status_code == 400
        assert response.json()["message"] == "No IDs provided"
