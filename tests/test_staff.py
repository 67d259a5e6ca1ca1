from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestDoctors:
    """Doctor directory endpoints."""

    async def test_doctor_ids_are_generated(self, admin_client: AsyncClient) -> None:
        """Test the next-id preview and the generated doctor code."""
        response = await admin_client.get("/api/doctors/next-id")
        assert response.json() == {"id": "DOC-0001"}

        response = await admin_client.post("/api/doctors", json={
            "name": "Dr. Jones", "specialization": "General Medicine", "consultation_fee": "30"
        })
        assert response.status_code == 201
        doctor = response.json()
        assert doctor["doctor_id"] == "DOC-0001"
        assert doctor["status"] == "active"

        response = await admin_client.get("/api/doctors/next-id")
        assert response.json() == {"id": "DOC-0002"}

    async def test_update_and_delete(self, admin_client: AsyncClient) -> None:
        """Test doctor patch and removal."""
        response = await admin_client.post("/api/doctors", json={
            "doctor_id": "DR-7", "name": "Dr. Grey", "specialization": "Surgery"
        })
        doctor = response.json()
        assert doctor["doctor_id"] == "DR-7"

        response = await admin_client.patch(f"/api/doctors/{doctor['id']}", json={"status": "on_leave"})
        assert response.json()["status"] == "on_leave"

        assert (await admin_client.delete(f"/api/doctors/{doctor['id']}")).status_code == 200
        assert (await admin_client.delete(f"/api/doctors/{doctor['id']}")).status_code == 404


@pytest.mark.integration
class TestSalariesAndLoans:
    """Salary records and salary loans."""

    async def test_net_salary_is_derived(self, admin_client: AsyncClient) -> None:
        """Test the default net salary and an explicit override."""
        payload = {
            "staff_name": "Nurse Joy",
            "base_salary": "1500",
            "allowances": "200",
            "deductions": "50",
            "payment_date": "2024-01-31",
            "month": "January",
            "year": "2024",
        }
        response = await admin_client.post("/api/salaries", json=payload)
        assert response.status_code == 201
        assert Decimal(response.json()["net_salary"]) == Decimal("1650.00")

        response = await admin_client.post("/api/salaries", json={**payload, "net_salary": "1600"})
        assert Decimal(response.json()["net_salary"]) == Decimal("1600")

    async def test_loan_defaults(self, admin_client: AsyncClient) -> None:
        """Test that outstanding and installment default from principal and term."""
        response = await admin_client.post("/api/salary-loans", json={
            "staff_name": "Nurse Joy",
            "principal": "1000",
            "term_months": 3,
            "start_date": "2024-01-01",
        })
        assert response.status_code == 201
        loan = response.json()
        assert Decimal(loan["outstanding"]) == Decimal("1000")
        assert Decimal(loan["installment_amount"]) == Decimal("333.33")
        assert loan["status"] == "active"

    async def test_loan_requires_positive_principal(self, admin_client: AsyncClient) -> None:
        """Test principal validation."""
        response = await admin_client.post("/api/salary-loans", json={
            "staff_name": "Nurse Joy", "principal": "0", "start_date": "2024-01-01"
        })
        assert response.status_code == 400

    async def test_record_installment(self, admin_client: AsyncClient) -> None:
        """Test recording an installment by hand and the 404 for an unknown loan."""
        response = await admin_client.post("/api/salary-loans", json={
            "staff_name": "Nurse Joy", "principal": "600", "term_months": 2, "start_date": "2024-01-01"
        })
        loan = response.json()

        response = await admin_client.post("/api/loan-installments", json={
            "loan_id": loan["id"], "due_date": "2024-02-01", "amount": "300"
        })
        assert response.status_code == 201
        assert response.json()["status"] == "due"

        response = await admin_client.get(f"/api/loan-installments/{loan['id']}")
        assert [Decimal(i["amount"]) for i in response.json()] == [Decimal("300")]

        response = await admin_client.post("/api/loan-installments", json={
            "loan_id": 999, "due_date": "2024-02-01", "amount": "300"
        })
        assert response.status_code == 404


@pytest.mark.integration
class TestPayroll:
    """Payroll runs and payslip generation."""

    async def _profile(self, client: AsyncClient, name: str, status: str = "active") -> dict:
        response = await client.post("/api/salary-profiles", json={
            "staff_name": name,
            "department": "Nursing",
            "base_salary": "2000",
            "housing_allowance": "300",
            "transport_allowance": "100",
            "meal_allowance": "50",
            "status": status,
        })
        assert response.status_code == 201
        return response.json()

    async def _loan(self, client: AsyncClient, profile: dict, **fields) -> dict:
        payload = {
            "profile_id": profile["id"],
            "staff_name": profile["staff_name"],
            "start_date": "2024-01-01",
        }
        payload.update(fields)
        response = await client.post("/api/salary-loans", json=payload)
        assert response.status_code == 201
        return response.json()

    async def test_generate_payslips(self, admin_client: AsyncClient) -> None:
        """Test gross pay, loan deductions, loan closure and run totals."""
        joy = await self._profile(admin_client, "Nurse Joy")
        await self._profile(admin_client, "Former Staff", status="inactive")
        long_loan = await self._loan(admin_client, joy, principal="1000", term_months=3)
        short_loan = await self._loan(admin_client, joy, principal="100", installment_amount="150")

        response = await admin_client.post("/api/payroll-runs", json={"month": "January", "year": "2024"})
        assert response.status_code == 201
        run = response.json()
        assert run["status"] == "draft"
        assert run["run_date"]

        response = await admin_client.post(f"/api/payroll-runs/{run['id']}/generate")
        assert response.status_code == 201
        generated = response.json()
        assert generated["employee_count"] == 1

        payslip = generated["payslips"][0]
        assert payslip["staff_name"] == "Nurse Joy"
        assert Decimal(payslip["allowances"]) == Decimal("450.00")
        assert Decimal(payslip["gross_pay"]) == Decimal("2450.00")
        assert Decimal(payslip["loan_deductions"]) == Decimal("433.33")
        assert Decimal(payslip["net_pay"]) == Decimal("2016.67")

        response = await admin_client.get(f"/api/payroll-runs/{run['id']}")
        run = response.json()
        assert run["status"] == "generated"
        assert run["employee_count"] == 1
        assert Decimal(run["total_gross"]) == Decimal("2450.00")
        assert Decimal(run["total_deductions"]) == Decimal("433.33")
        assert Decimal(run["total_net"]) == Decimal("2016.67")

        response = await admin_client.get(f"/api/salary-loans/{short_loan['id']}")
        assert response.json()["status"] == "closed"
        assert Decimal(response.json()["outstanding"]) == Decimal("0")

        response = await admin_client.get(f"/api/salary-loans/{long_loan['id']}")
        assert Decimal(response.json()["outstanding"]) == Decimal("666.67")
        assert response.json()["status"] == "active"

        response = await admin_client.get(f"/api/loan-installments/{long_loan['id']}")
        installments = response.json()
        assert len(installments) == 1
        assert installments[0]["status"] == "paid"
        assert Decimal(installments[0]["amount"]) == Decimal("333.33")

    async def test_generate_missing_run(self, admin_client: AsyncClient) -> None:
        """Test generating payslips for an unknown run."""
        response = await admin_client.post("/api/payroll-runs/99/generate")
        assert response.status_code == 404
        assert response.json()["message"] == "Payroll run not found"

    async def test_payslip_list_patch_and_create(self, admin_client: AsyncClient) -> None:
        """Test listing payslips by run, marking one paid and adding one by hand."""
        await self._profile(admin_client, "Nurse Joy")
        run = (await admin_client.post("/api/payroll-runs", json={"month": "February", "year": "2024"})).json()
        await admin_client.post(f"/api/payroll-runs/{run['id']}/generate")

        response = await admin_client.get(f"/api/payslips/{run['id']}")
        payslips = response.json()
        assert len(payslips) == 1

        response = await admin_client.patch(f"/api/payslips/{payslips[0]['id']}", json={
            "status": "paid", "paid_date": "2024-02-29"
        })
        assert response.json()["status"] == "paid"

        response = await admin_client.post("/api/payslips", json={
            "payroll_run_id": run["id"],
            "staff_name": "Locum",
            "base_salary": "500",
            "gross_pay": "500",
            "net_pay": "500",
        })
        assert response.status_code == 201

        response = await admin_client.get(f"/api/payslips/{run['id']}")
        assert [p["staff_name"] for p in response.json()] == ["Nurse Joy", "Locum"]

        assert (await admin_client.patch("/api/payslips/999", json={"status": "paid"})).status_code == 404
