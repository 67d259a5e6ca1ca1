from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate


class ClinicSettingsBase(BaseModel):
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    logo: Optional[str] = None

    currency: Optional[str] = None
    secondary_currency: Optional[str] = None
    exchange_rate: Optional[Decimal] = Field(None, gt=0)
    currency_display: Optional[str] = None
    date_format: Optional[str] = None
    timezone: Optional[str] = None
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=100)

    invoice_prefix: Optional[str] = None
    visit_prefix: Optional[str] = None
    patient_prefix: Optional[str] = None

    company_name: Optional[str] = None
    company_address: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    company_website: Optional[str] = None
    company_tax_id: Optional[str] = None
    receipt_footer: Optional[str] = None
    receipt_logo: Optional[str] = None

    app_name: Optional[str] = None
    app_tagline: Optional[str] = None
    app_version: Optional[str] = None


class ClinicSettingsUpdate(ClinicSettingsBase, PartialUpdate):
    non_nullable = ("clinic_name",)

    clinic_name: Optional[str] = Field(None, min_length=1)


class ClinicSettingsResponse(ClinicSettingsBase, ORMModel):
    id: int
    clinic_name: str


class PublicSettingsResponse(BaseModel):
    """Branding shown on the login screen before anyone signs in"""
    app_name: str
    app_tagline: Optional[str] = None
    app_version: str
    logo: Optional[str] = None
    clinic_name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
