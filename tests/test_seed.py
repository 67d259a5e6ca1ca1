import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clinicpos.core.permissions import PERMISSION_MODULES
from clinicpos.core.security import verify_password
from clinicpos.domain.auth.models import Role, User
from clinicpos.domain.auth.repository import RoleRepository, UserRepository
from clinicpos.domain.catalog.repository import MedicineRepository, ServiceRepository
from clinicpos.domain.patients.repository import PatientRepository
from clinicpos.scripts import create_super_admin as admin_script
from clinicpos.seed import seed_demo_data


@pytest.mark.integration
class TestDemoSeed:
    """Demo rows for a fresh database."""

    async def test_seed_empty_database(self, db_session: AsyncSession) -> None:
        """Test that an empty database receives the demo roles, users and catalogs."""
        assert await seed_demo_data(db_session) is True

        assert await PatientRepository(db_session).count() == 5
        assert await ServiceRepository(db_session).count() == 8
        assert await MedicineRepository(db_session).count() == 5

        users = UserRepository(db_session)
        for username in ("admin", "drjones", "reception"):
            assert await users.get_by_username(username) is not None

        doctor_role = await RoleRepository(db_session).get_by_name("Doctor")
        assert doctor_role.permissions["opd"]["write"] is True

        admin = await users.get_by_username("admin")
        assert verify_password("admin123", admin.password)

    async def test_seed_runs_once(self, db_session: AsyncSession) -> None:
        """Test that a database with patients is left untouched."""
        assert await seed_demo_data(db_session) is True
        assert await seed_demo_data(db_session) is False

        assert await PatientRepository(db_session).count() == 5
        assert await RoleRepository(db_session).count() == 3


@pytest.mark.integration
class TestCreateSuperAdmin:
    """The administrator bootstrap command."""

    @pytest.fixture(autouse=True)
    def use_test_database(self, monkeypatch: pytest.MonkeyPatch, session_factory: async_sessionmaker) -> None:
        async def init_db() -> None:
            return None

        monkeypatch.setattr(admin_script, "init_db", init_db)
        monkeypatch.setattr(admin_script, "AsyncSessionLocal", session_factory)

    async def test_creates_admin(self, session_factory: async_sessionmaker) -> None:
        """Test that a missing user and role are both created."""
        user = await admin_script.create_super_admin("root", "s3cret-pass", "Root User")
        assert user.username == "root"

        async with session_factory() as db:
            stored = await UserRepository(db).get_by_username("root")
            role = await RoleRepository(db).get_by_name("admin")

        assert stored.role_id == role.id
        assert stored.is_active is True
        assert stored.full_name == "Root User"
        assert verify_password("s3cret-pass", stored.password)
        assert set(role.permissions) == {key for key, _ in PERMISSION_MODULES}

    async def test_resets_existing_user(self, cashier_user: User, session_factory: async_sessionmaker) -> None:
        """Test that an existing user gets the new password, is re-activated and moved to the admin role."""
        async with session_factory() as db:
            users = UserRepository(db)
            await users.update(await users.get_by_username("cashier"), {"is_active": False})

        await admin_script.create_super_admin("cashier", "n3w-pass", "Head Cashier")
        await admin_script.create_super_admin("cashier", "n3w-pass", "Head Cashier")

        async with session_factory() as db:
            stored = await UserRepository(db).get_by_username("cashier")
            role = await RoleRepository(db).get_by_name("admin")
            admin_roles = await RoleRepository(db).count(Role.name == "admin")

        assert stored.id == cashier_user.id
        assert stored.is_active is True
        assert stored.role_id == role.id
        assert verify_password("n3w-pass", stored.password)
        assert not verify_password("cashier123", stored.password)
        assert admin_roles == 1
