"""
Demo data for a fresh database.

Runs at startup when ``SEED_DEMO_DATA`` is enabled and the patients table
is empty. Role permissions are written in the older read/write/delete form;
they are upgraded on read by ``merge_permissions``.
"""

from datetime import date
from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.permissions import PERMISSION_MODULES
from clinicpos.core.security import get_password_hash
from clinicpos.domain.auth.repository import RoleRepository, UserRepository
from clinicpos.domain.catalog.repository import MedicineRepository, ServiceRepository
from clinicpos.domain.patients.repository import PatientRepository
from clinicpos.utils.formatting import next_code

FULL_ACCESS = {"read": True, "write": True, "delete": True}
READ_WRITE = {"read": True, "write": True, "delete": False}
READ_ONLY = {"read": True, "write": False, "delete": False}

DEMO_ROLES = [
    {
        "name": "Admin",
        "description": "Full access to every module",
        "permissions": {key: dict(FULL_ACCESS) for key, _ in PERMISSION_MODULES},
    },
    {
        "name": "Doctor",
        "description": "Clinical work: patients, OPD and lab tests",
        "permissions": {
            "dashboard": dict(READ_ONLY),
            "patients": dict(READ_WRITE),
            "opd": dict(READ_WRITE),
            "appointments": dict(READ_WRITE),
            "lab_tests": dict(READ_WRITE),
            "medicines": dict(READ_ONLY),
            "services": dict(READ_ONLY),
        },
    },
    {
        "name": "Receptionist",
        "description": "Front desk: registration, appointments and billing",
        "permissions": {
            "dashboard": dict(READ_ONLY),
            "patients": dict(READ_WRITE),
            "appointments": dict(READ_WRITE),
            "billing": dict(READ_WRITE),
            "services": dict(READ_ONLY),
            "medicines": dict(READ_ONLY),
        },
    },
]

DEMO_USERS = [
    ("admin", "admin123", "Administrator", "Admin"),
    ("drjones", "doctor123", "Dr. Sarah Jones", "Doctor"),
    ("reception", "reception123", "Front Desk", "Receptionist"),
]

DEMO_PATIENTS = [
    {"name": "John Smith", "age": 45, "gender": "male", "phone": "555-0101", "blood_group": "O+"},
    {"name": "Maria Garcia", "age": 32, "gender": "female", "phone": "555-0102", "blood_group": "A+"},
    {"name": "David Lee", "age": 58, "gender": "male", "phone": "555-0103", "blood_group": "B+"},
    {"name": "Aisha Khan", "age": 27, "gender": "female", "phone": "555-0104", "blood_group": "AB-"},
    {"name": "Tom Becker", "age": 8, "gender": "male", "phone": "555-0105", "blood_group": "O-"},
]

DEMO_SERVICES = [
    ("General Consultation", "Consultation", "25.00"),
    ("Specialist Consultation", "Consultation", "50.00"),
    ("Complete Blood Count", "Laboratory", "15.00"),
    ("Blood Sugar Test", "Laboratory", "8.00"),
    ("Chest X-Ray", "Radiology", "40.00"),
    ("Ultrasound", "Radiology", "60.00"),
    ("Wound Dressing", "Procedure", "12.00"),
    ("ECG", "Cardiology", "30.00"),
]

DEMO_MEDICINES = [
    ("Paracetamol 500mg", "Paracetamol", "Analgesic", "PCM-2401", "0.10", 500),
    ("Amoxicillin 250mg", "Amoxicillin", "Antibiotic", "AMX-2402", "0.35", 200),
    ("Ibuprofen 400mg", "Ibuprofen", "Analgesic", "IBU-2403", "0.20", 300),
    ("Omeprazole 20mg", "Omeprazole", "Antacid", "OMP-2404", "0.25", 8),
    ("Cetirizine 10mg", "Cetirizine", "Antihistamine", "CTZ-2405", "0.15", 150),
]


async def seed_demo_data(db: AsyncSession) -> bool:
    """Insert the demo rows; returns False when the database already has patients"""
    patients = PatientRepository(db)
    if await patients.count() > 0:
        return False

    roles = RoleRepository(db)
    role_ids = {}
    for role_data in DEMO_ROLES:
        role = await roles.get_by_name(role_data["name"])
        if role is None:
            role = await roles.create(dict(role_data))
        role_ids[role.name] = role.id

    users = UserRepository(db)
    for username, password, full_name, role_name in DEMO_USERS:
        if await users.get_by_username(username) is None:
            await users.create({
                "username": username,
                "password": get_password_hash(password),
                "full_name": full_name,
                "role_id": role_ids[role_name],
                "is_active": True,
            })

    for n, patient in enumerate(DEMO_PATIENTS, start=1):
        await patients.create({**patient, "patient_id": next_code("PAT", n)})

    services = ServiceRepository(db)
    for name, category, price in DEMO_SERVICES:
        await services.create({
            "name": name,
            "category": category,
            "price": Decimal(price),
            "is_lab_test": category == "Laboratory",
        })

    medicines = MedicineRepository(db)
    expiry = date(date.today().year + 2, 12, 31)
    for name, generic, category, batch_no, price, stock in DEMO_MEDICINES:
        await medicines.create({
            "name": name,
            "generic_name": generic,
            "category": category,
            "batch_no": batch_no,
            "expiry_date": expiry,
            "unit": "Tablet",
            "selling_price": Decimal(price),
            "selling_price_local": Decimal(price),
            "unit_price": Decimal(price),
            "stock_count": stock,
            "quantity": stock,
            "total_stock": stock,
        })

    logger.info(
        f"Seeded demo data: {len(DEMO_ROLES)} roles, {len(DEMO_USERS)} users, "
        f"{len(DEMO_PATIENTS)} patients, {len(DEMO_SERVICES)} services, {len(DEMO_MEDICINES)} medicines"
    )
    return True
