"""
Fixtures de base de datos para tests de integración.

SQLite in-memory (aiosqlite) con el mismo esquema que producción.
"""

from datetime import timedelta
from decimal import Decimal
from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import Settings
from app.domain.entities.car import ApprovalStatus, Car
from app.domain.entities.partner import Partner
from app.domain.entities.user import User, UserRole
from app.domain.value_objects.api_key_secret import hash_secret
from app.infrastructure.db.engine import build_engine, build_sessionmaker, create_schema
from app.infrastructure.db.repositories.car_repo_sql import CarRepoSQL
from app.infrastructure.db.repositories.partner_repo_sql import PartnerRepoSQL
from app.infrastructure.db.repositories.user_repo_sql import UserRepoSQL

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = build_engine(
        Settings(_env_file=None, database_url=TEST_DATABASE_URL, use_in_memory=False)
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(test_engine)


@pytest_asyncio.fixture
async def seeded_db(session_maker, clock) -> async_sessionmaker[AsyncSession]:
    """Partners A/B, un admin de A con sesión y dos autos aprobados."""
    now = clock.now()
    async with session_maker() as session:
        async with session.begin():
            partners = PartnerRepoSQL(session)
            await partners.add(Partner(id="partner-a", name="Bangkok Wheels", commission_rate=Decimal("10.00"), created_at=now))
            await partners.add(Partner(id="partner-b", name="Phuket Rent", commission_rate=Decimal("12.50"), created_at=now))

            users = UserRepoSQL(session)
            await users.add(User(id="user-admin-a", role=UserRole.PARTNER_ADMIN, partner_id="partner-a"))
            await users.add_session("user-admin-a", hash_secret("token-admin-a"), now + timedelta(days=1))
            await users.add(User(id="user-owner", role=UserRole.PLATFORM_OWNER))
            await users.add_session("user-owner", hash_secret("token-owner"), now + timedelta(days=1))

            cars = CarRepoSQL(session)
            await cars.add(
                Car(
                    id="car-a1",
                    partner_id="partner-a",
                    brand="Toyota",
                    model="Yaris",
                    price_per_day=Decimal("1000.00"),
                    approval_status=ApprovalStatus.APPROVED,
                    created_at=now - timedelta(days=2),
                )
            )
            await cars.add(
                Car(
                    id="car-b1",
                    partner_id="partner-b",
                    brand="Toyota",
                    model="Fortuner",
                    price_per_day=Decimal("2500.00"),
                    approval_status=ApprovalStatus.APPROVED,
                    created_at=now - timedelta(days=1),
                )
            )
    return session_maker
