"""Shared test fixtures — async DB, client, factories.

Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from hr_leave.common.constants import LeaveStatus
from hr_leave.database import Base, get_db
from hr_leave.main import create_app

# Import ALL model modules so SQLAlchemy can resolve cross-module relationships
import hr_leave.core_hr.models  # noqa: F401
import hr_leave.leave.models  # noqa: F401

# ── SQLite compat: compile PG-specific types ────────────────────────

from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.ext.compiler import compiles


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine.sync_engine, "connect")
def _register_sqlite_functions(dbapi_conn, connection_record):
    """Register NOW() as a SQLite custom function."""
    dbapi_conn.create_function(
        "NOW", 0, lambda: datetime.now(timezone.utc).isoformat(),
    )


TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from hr_leave.common.rate_limit import limiter
    try:
        limiter.reset()
    except Exception:
        pass
    yield


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    """Create a fresh app instance with DB dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Database session (for direct DB operations in tests) ────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


# ── Model factories ─────────────────────────────────────────────────

COMPANY_ID = uuid.UUID("7c1d7d4e-51c6-4d3b-9a0e-2f0c7d0b1a11")


def _make_department(
    *,
    name: str = "Engineering",
    company_id: uuid.UUID = COMPANY_ID,
) -> dict:
    return dict(
        id=uuid.uuid4(),
        company_id=company_id,
        name=name,
        created_at=datetime.now(timezone.utc),
    )


def _make_employee(
    *,
    first_name: str = "Test",
    last_name: str = "User",
    join_date: date = date(2024, 1, 15),
    department_id: Optional[uuid.UUID] = None,
    company_id: uuid.UUID = COMPANY_ID,
    employee_code: Optional[str] = None,
) -> dict:
    return dict(
        id=uuid.uuid4(),
        company_id=company_id,
        employee_code=employee_code or f"EMP-{uuid.uuid4().hex[:6].upper()}",
        first_name=first_name,
        last_name=last_name,
        department_id=department_id,
        join_date=join_date,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )


def _make_company_settings(
    *,
    company_id: uuid.UUID = COMPANY_ID,
    annual: Decimal = Decimal("21"),
    sick: Decimal = Decimal("15"),
    emergency: Decimal = Decimal("3"),
) -> dict:
    return dict(
        id=uuid.uuid4(),
        company_id=company_id,
        annual_leave_days_per_year=annual,
        sick_leave_days_per_year=sick,
        emergency_leave_days_per_year=emergency,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )


def _make_leave_request(
    employee_id: uuid.UUID,
    *,
    leave_type: str = "Annual Leave",
    start_date: date,
    end_date: date,
    status: LeaveStatus = LeaveStatus.approved,
    reason: Optional[str] = None,
) -> dict:
    return dict(
        id=uuid.uuid4(),
        employee_id=employee_id,
        leave_type=leave_type,
        start_date=start_date,
        end_date=end_date,
        status=status,
        reason=reason,
        created_at=datetime.now(timezone.utc),
    )


@pytest.fixture
async def test_department(db) -> dict:
    """Insert a test department for COMPANY_ID."""
    from hr_leave.core_hr.models import Department

    data = _make_department()
    db.add(Department(**data))
    await db.flush()
    return data


@pytest.fixture
async def test_employee(db, test_department) -> dict:
    """Insert an employee in test_department."""
    from hr_leave.core_hr.models import Employee

    data = _make_employee(department_id=test_department["id"])
    db.add(Employee(**data))
    await db.flush()
    return data


@pytest.fixture
async def test_company_settings(db) -> dict:
    """Insert leave settings for COMPANY_ID (21 annual / 15 sick / 3 emergency)."""
    from hr_leave.core_hr.models import CompanySettings

    data = _make_company_settings()
    db.add(CompanySettings(**data))
    await db.flush()
    return data
