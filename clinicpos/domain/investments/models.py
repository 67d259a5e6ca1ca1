from datetime import datetime

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text

from clinicpos.infrastructure.database import Base


class Investor(Base):
    __tablename__ = "investors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(50))
    notes = Column(Text)
    share_percentage = Column(Numeric(5, 2), default=100)
    created_at = Column(DateTime, default=datetime.now)


class Investment(Base):
    """
    Capital put into the clinic.

    ``investors`` holds the shareholder split as a list of
    ``{investor_id, name, share_percentage, amount}``; ``investor_name`` is
    the comma-joined names for display.
    """
    __tablename__ = "investments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    return_amount = Column(Numeric(10, 2), default=0)
    investor_name = Column(Text)
    investors = Column(JSON, default=list)
    payment_method = Column(String(50), default="cash")
    status = Column(String(20), nullable=False, default="active")
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date)
    notes = Column(Text)


class Contribution(Base):
    __tablename__ = "contributions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    investment_id = Column(Integer, ForeignKey("investments.id", ondelete="CASCADE"), nullable=False, index=True)
    investor_name = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False)
    category = Column(String(100))
    payment_slip = Column(Text)
    images = Column(JSON)
    note = Column(Text)
    created_at = Column(DateTime, default=datetime.now)
