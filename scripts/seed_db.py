import asyncio
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from app.config import get_settings  # noqa: E402
from app.domain.entities.car import ApprovalStatus, Car, CarCategory, FuelType  # noqa: E402
from app.domain.entities.partner import Partner  # noqa: E402
from app.domain.entities.user import User, UserRole  # noqa: E402
from app.domain.value_objects.api_key_secret import hash_secret  # noqa: E402
from app.infrastructure.db.engine import build_engine, build_sessionmaker, create_schema  # noqa: E402
from app.infrastructure.db.repositories.car_repo_sql import CarRepoSQL  # noqa: E402
from app.infrastructure.db.repositories.partner_repo_sql import PartnerRepoSQL  # noqa: E402
from app.infrastructure.db.repositories.user_repo_sql import UserRepoSQL  # noqa: E402

DEMO_SESSIONS = {
    "user-owner": "demo-owner-token",
    "user-partner-bkk": "demo-partner-token",
}


async def seed():
    settings = get_settings()
    engine = build_engine(settings)
    await create_schema(engine)
    print("Created all tables.")

    now = datetime.now(timezone.utc)
    session_maker = build_sessionmaker(engine)
    async with session_maker() as session:
        async with session.begin():
            await PartnerRepoSQL(session).add(
                Partner(id="partner-bkk", name="Bangkok Wheels", commission_rate=Decimal("10.00"), created_at=now)
            )

            users = UserRepoSQL(session)
            await users.add(User(id="user-owner", role=UserRole.PLATFORM_OWNER, first_name="Platform"))
            await users.add(
                User(id="user-partner-bkk", role=UserRole.PARTNER_ADMIN, first_name="Niran", partner_id="partner-bkk")
            )
            for user_id, token in DEMO_SESSIONS.items():
                await users.add_session(user_id, hash_secret(token), now + timedelta(days=30))

            cars = CarRepoSQL(session)
            await cars.add(
                Car(
                    id="car-yaris",
                    partner_id="partner-bkk",
                    brand="Toyota",
                    model="Yaris Ativ",
                    year=2023,
                    price_per_day=Decimal("990.00"),
                    category=CarCategory.COMPACT,
                    seats=5,
                    approval_status=ApprovalStatus.APPROVED,
                    created_at=now,
                )
            )
            await cars.add(
                Car(
                    id="car-crv",
                    partner_id="partner-bkk",
                    brand="Honda",
                    model="CR-V",
                    year=2022,
                    price_per_day=Decimal("1800.00"),
                    category=CarCategory.SUV,
                    fuel_type=FuelType.HYBRID,
                    seats=7,
                    approval_status=ApprovalStatus.APPROVED,
                    created_at=now,
                )
            )

    print("Seeded demo data.")
    for user_id, token in DEMO_SESSIONS.items():
        print(f"  {user_id}: Bearer {token}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
