from typing import AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import clinicpos.domain.models  # noqa: F401
from clinicpos.core.permissions import PERMISSION_ACTIONS, PERMISSION_MODULES
from clinicpos.core.security import create_access_token, get_password_hash
from clinicpos.domain.auth.models import Role, User
from clinicpos.infrastructure.database import Base, get_db
from clinicpos.main import app

# In-memory SQLite shared by every connection of the test engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database dependency override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def session_factory(db_session: AsyncSession) -> async_sessionmaker:
    """Session maker bound to the test database, for code that opens its own sessions."""
    return TestSessionLocal


async def _create_user(db: AsyncSession, username: str, password: str, role: Role) -> User:
    user = User(
        username=username,
        password=get_password_hash(password),
        full_name=username.title(),
        email=f"{username}@example.com",
        role_id=role.id,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture(scope="function")
async def admin_user(db_session: AsyncSession) -> User:
    """Create a user in the admin role, which bypasses permission checks."""
    role = Role(
        name="admin",
        description="Administrator role",
        permissions={key: {a: True for a in PERMISSION_ACTIONS} for key, _ in PERMISSION_MODULES},
    )
    db_session.add(role)
    await db_session.commit()
    await db_session.refresh(role)
    return await _create_user(db_session, "admin", "admin123", role)


@pytest.fixture(scope="function")
async def cashier_user(db_session: AsyncSession) -> User:
    """Create a user whose role may only view patients and create bills (legacy permission keys)."""
    role = Role(
        name="Cashier",
        description="Front desk billing",
        permissions={
            "patients": {"read": True},
            "billing": {"read": True, "write": True},
        },
    )
    db_session.add(role)
    await db_session.commit()
    await db_session.refresh(role)
    return await _create_user(db_session, "cashier", "cashier123", role)


def _auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token(str(user.id), {"username": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
async def admin_client(client: AsyncClient, admin_user: User) -> AsyncGenerator[AsyncClient, None]:
    """Create an admin authenticated test client."""
    client.headers.update(_auth_headers(admin_user))
    yield client


@pytest.fixture(scope="function")
async def cashier_client(client: AsyncClient, cashier_user: User) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client authenticated with the limited cashier role."""
    client.headers.update(_auth_headers(cashier_user))
    yield client


@pytest.fixture(scope="function")
def sample_patient_data() -> dict:
    """Sample patient data for testing."""
    return {
        "name": "John Doe",
        "first_name": "John",
        "last_name": "Doe",
        "age": 34,
        "gender": "male",
        "phone": "+1234567890",
        "email": "john.doe@example.com",
        "address": "123 Main St",
        "city": "Springfield",
        "blood_group": "O+",
        "date_of_birth": "1990-01-01",
        "allergies": "Penicillin",
    }


@pytest.fixture(scope="function")
async def patient(admin_client: AsyncClient, sample_patient_data: dict) -> dict:
    """A registered patient, as returned by the API."""
    response = await admin_client.post("/api/patients", json=sample_patient_data)
    assert response.status_code == 201
    return response.json()


@pytest.fixture(scope="function")
async def medicine(admin_client: AsyncClient) -> dict:
    """A stocked medicine, as returned by the API."""
    response = await admin_client.post("/api/medicines", json={
        "name": "Paracetamol 500mg",
        "generic_name": "Paracetamol",
        "category": "Analgesic",
        "batch_no": "PCM-2401",
        "expiry_date": "2030-12-31",
        "selling_price": "0.50",
        "stock_count": 100,
        "quantity": 100,
        "stock_alert": 10,
    })
    assert response.status_code == 201
    return response.json()
