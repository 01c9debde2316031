"""Service test fixtures — async DB + FastAPI test client + seeded callers.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use test DB sessions
    - Three users (admin, staff, viewer) exist in every database; tokens are signed
      with the configured secret so the real identity dependency runs

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - StaticPool: one shared connection so every session sees the same database
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

from zakat_ledger.config import get_settings
from zakat_ledger.db.base import Base
from zakat_ledger.infrastructure.database import enable_sqlite_foreign_keys, get_db
from zakat_ledger.infrastructure.identity import issue_access_token
from zakat_ledger.main import app
from zakat_ledger.models import Beneficiary, Category, Donor, Program, User


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Callers ─────────────────────────────────────────────────────

@pytest.fixture
async def users(test_db):
    """One persisted user per role, keyed by role name."""
    seeded = {
        role: User(email=f"{role}@ledger.test", name=f"{role.title()} User", role=role)
        for role in ("admin", "staff", "viewer")
    }
    test_db.add_all(seeded.values())
    await test_db.commit()
    return seeded


@pytest.fixture
def auth_headers(users):
    """auth_headers("staff") → Authorization header for the seeded staff user."""
    settings = get_settings()

    def _headers(role: str = "admin") -> dict:
        user = users[role]
        token = issue_access_token(
            user.id, user.role, settings.jwt_secret, settings.jwt_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ─── Master data ─────────────────────────────────────────────────

@pytest.fixture
async def donor(test_db):
    row = Donor(name="Ahmad Fauzi", phone="081234567890", address="Jl. Melati 1")
    test_db.add(row)
    await test_db.commit()
    return row


@pytest.fixture
async def category(test_db):
    row = Category(name="Fakir", description="No means of livelihood")
    test_db.add(row)
    await test_db.commit()
    return row


@pytest.fixture
async def beneficiaries(test_db, category):
    rows = [
        Beneficiary(
            name=name, phone=phone, address="Kampung Baru",
            category_id=category.id, status="active",
        )
        for name, phone in (("Siti Aminah", "085200000001"), ("Budi Santoso", "085200000002"))
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows


@pytest.fixture
async def program(test_db):
    row = Program(name="Ramadan Food Parcels", type="food", active=True)
    test_db.add(row)
    await test_db.commit()
    return row
