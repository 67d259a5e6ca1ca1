from sqlalchemy import Column, Date, Integer, Numeric, String, Text

from clinicpos.infrastructure.database import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50), default="cash")
    date = Column(Date, nullable=False, index=True)
    notes = Column(Text)
    status = Column(String(20), default="pending")
    approved_by = Column(String(255))
    receipt_url = Column(Text)


class TransactionType:
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class BankTransaction(Base):
    __tablename__ = "bank_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(20), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    bank_name = Column(String(255), nullable=False)
    account_no = Column(String(100))
    reference_no = Column(String(100))
    description = Column(Text)
    date = Column(Date, nullable=False, index=True)
