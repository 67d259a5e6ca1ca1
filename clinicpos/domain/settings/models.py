from sqlalchemy import Column, Integer, Numeric, String, Text

from clinicpos.infrastructure.database import Base


class ClinicSettings(Base):
    """Single-row clinic configuration"""
    __tablename__ = "clinic_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    clinic_name = Column(String(255), nullable=False, default="My Clinic")
    address = Column(Text)
    phone = Column(String(50))
    email = Column(String(255))
    logo = Column(Text)

    currency = Column(String(10), default="USD")
    secondary_currency = Column(String(10))
    exchange_rate = Column(Numeric(12, 4), default=1)
    currency_display = Column(String(20), default="symbol")
    date_format = Column(String(20), default="MM/DD/YYYY")
    timezone = Column(String(64), default="UTC")
    tax_rate = Column(Numeric(5, 2), default=0)

    invoice_prefix = Column(String(20), default="INV")
    visit_prefix = Column(String(20), default="VIS")
    patient_prefix = Column(String(20), default="PAT")

    company_name = Column(String(255))
    company_address = Column(Text)
    company_phone = Column(String(50))
    company_email = Column(String(255))
    company_website = Column(String(255))
    company_tax_id = Column(String(100))
    receipt_footer = Column(Text)
    receipt_logo = Column(Text)

    app_name = Column(String(100), default="ClinicPOS")
    app_tagline = Column(String(255))
    app_version = Column(String(20), default="1.0.0")
