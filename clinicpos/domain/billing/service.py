from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError, ValidationError
from clinicpos.domain.base import bulk_delete, model_to_dict
from clinicpos.domain.billing.models import Bill, BillStatus
from clinicpos.domain.billing.repository import BillRepository
from clinicpos.domain.catalog.service import MedicineService
from clinicpos.domain.settings.service import SettingsService
from clinicpos.utils.bill_numbers import bill_no_matches
from clinicpos.utils.date_range import DateRange, is_date_in_range
from clinicpos.utils.formatting import money, next_code, to_decimal


def item_total(item: Dict[str, Any]) -> Decimal:
    if item.get("total") is not None:
        return to_decimal(item["total"])
    return to_decimal(item.get("quantity")) * to_decimal(item.get("unit_price"))


def compute_bill_totals(
    items: Iterable[Dict[str, Any]],
    discount: Any = 0,
    discount_type: Optional[str] = "amount",
    tax_rate: Any = 0
) -> Dict[str, Decimal]:
    """
    Subtotal, discount amount, tax and total for a set of bill lines.

    A ``percentage`` discount is taken from the subtotal; tax is charged on
    the discounted amount. The total never goes below zero.
    """
    subtotal = sum((item_total(item) for item in items), Decimal("0"))

    discount_value = to_decimal(discount)
    if discount_type == "percentage":
        discount_amount = subtotal * discount_value / Decimal("100")
    else:
        discount_amount = discount_value
    discount_amount = min(max(discount_amount, Decimal("0")), subtotal)

    taxable = subtotal - discount_amount
    tax = taxable * to_decimal(tax_rate) / Decimal("100")
    total = max(taxable + tax, Decimal("0"))

    return {
        "subtotal": money(subtotal),
        "discount_amount": money(discount_amount),
        "tax": money(tax),
        "total": money(total),
    }


def derive_status(total: Any, paid_amount: Any) -> str:
    total = to_decimal(total)
    paid = to_decimal(paid_amount)
    if paid >= total:
        return BillStatus.PAID
    if paid > 0:
        return BillStatus.PARTIAL
    return BillStatus.UNPAID


class BillingService:
    """Service layer for bills and the stock they consume"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BillRepository(db)
        self.medicines = MedicineService(db)
        self.settings = SettingsService(db)

    async def list_bills(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        date_range: Optional[DateRange] = None
    ) -> List[Dict[str, Any]]:
        rows = await self.repo.get_all_with_patient()
        search = (search or "").strip()
        bills = []
        for bill, patient_name in rows:
            if status and bill.status != status:
                continue
            if not is_date_in_range(bill.created_at, date_range):
                continue
            if search and not (
                bill_no_matches(search, bill.bill_no)
                or search.lower() in (patient_name or "").lower()
            ):
                continue
            bills.append(model_to_dict(bill, patient_name=patient_name))
        return bills

    async def get_bill(self, bill_id: int) -> Bill:
        bill = await self.repo.get_by_id(bill_id)
        if not bill:
            raise NotFoundError("Bill not found")
        return bill

    async def generate_bill_no(self) -> str:
        prefix = await self.settings.prefix("invoice_prefix", "INV")
        return next_code(prefix, await self.repo.max_id() + 1)

    async def create_bill(self, data: Dict[str, Any]) -> Bill:
        data = dict(data)
        items = data.get("items") or []
        if not items:
            raise ValidationError("Bill must contain at least one item")

        totals = compute_bill_totals(
            items,
            discount=data.get("discount"),
            discount_type=data.get("discount_type"),
            tax_rate=await self.settings.tax_rate() if data.get("tax") is None else 0,
        )
        if data.get("subtotal") is None:
            data["subtotal"] = totals["subtotal"]
        if data.get("tax") is None:
            data["tax"] = totals["tax"]
        if data.get("total") is None:
            data["total"] = max(
                money(to_decimal(data["subtotal"]) - totals["discount_amount"] + to_decimal(data["tax"])),
                Decimal("0"),
            )
        data["discount"] = to_decimal(data.get("discount"))
        data["paid_amount"] = to_decimal(data.get("paid_amount"))
        if not data.get("status"):
            data["status"] = derive_status(data["total"], data["paid_amount"])
        if not data.get("bill_no"):
            data["bill_no"] = await self.generate_bill_no()

        try:
            bill = await self.repo.add(data)
            await self.deduct_medicine_stock(bill)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(bill)
        logger.info(f"Created bill {bill.bill_no} total={bill.total} status={bill.status}")
        return bill

    async def deduct_medicine_stock(self, bill: Bill) -> None:
        for item in bill.items or []:
            if item.get("type") != "medicine" or item.get("medicine_id") is None:
                continue
            quantity = int(item.get("quantity") or 0)
            if quantity <= 0:
                continue
            await self.medicines.deduct_stock(
                int(item["medicine_id"]),
                quantity,
                f"Bill {bill.bill_no} - sold {quantity} pc",
            )

    async def update_bill(self, bill_id: int, data: Dict[str, Any]) -> Bill:
        bill = await self.get_bill(bill_id)
        return await self.repo.update(bill, data)

    async def delete_bill(self, bill_id: int) -> None:
        await self.repo.delete(await self.get_bill(bill_id))

    async def bulk_delete(self, ids: List[int]) -> int:
        return await bulk_delete(self.repo, ids)
