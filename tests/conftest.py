"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Reloj controlable (FakeClock) para vencimiento de reservas temporales
- Repositorios in-memory limpios por test
- Cliente HTTP de prueba (FastAPI TestClient)
- Datos de prueba: partners A/B, usuarios con sesión, autos
"""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_clock, get_in_memory_bundle
from app.application.interfaces.clock import FakeClock
from app.config import Settings, get_settings
from app.domain.entities.car import (
    ApprovalStatus,
    Car,
    CarCategory,
    FuelType,
    RentalStatus,
    Transmission,
)
from app.domain.entities.partner import Partner
from app.domain.entities.user import User, UserRole
from app.domain.value_objects.api_key_secret import hash_secret
from app.main import app

NOW = datetime(2024, 5, 30, 8, 0, tzinfo=timezone.utc)

PARTNER_A = "partner-a"
PARTNER_B = "partner-b"

TOKENS = {
    "owner": "token-owner",
    "admin_a": "token-admin-a",
    "admin_b": "token-admin-b",
    "customer": "token-customer",
    "other_customer": "token-other-customer",
    "suspended": "token-suspended",
}


def auth(role: str) -> dict:
    return {"Authorization": f"Bearer {TOKENS[role]}"}


def booking_payload(car_id: str = "car-a1", **overrides) -> dict:
    payload = {
        "car_id": car_id,
        "customer_name": "Somchai Jaidee",
        "customer_phone": "+66812345678",
        "customer_email": "somchai@example.com",
        "pickup_datetime": "2024-06-01T10:00:00Z",
        "return_datetime": "2024-06-03T10:00:00Z",
        "pickup_location": "Suvarnabhumi Airport",
    }
    payload.update(overrides)
    return payload


# ============================================================================
# FIXTURES DE INFRAESTRUCTURA
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def bundle() -> Generator[dict, None, None]:
    """Repositorios in-memory nuevos para cada test."""
    get_in_memory_bundle.cache_clear()
    yield get_in_memory_bundle()
    get_in_memory_bundle.cache_clear()


async def _seed(bundle: dict, now: datetime) -> None:
    partner_repo = bundle["partner_repo"]
    await partner_repo.add(Partner(id=PARTNER_A, name="Bangkok Wheels", commission_rate=Decimal("10.00")))
    await partner_repo.add(Partner(id=PARTNER_B, name="Phuket Rent", commission_rate=Decimal("12.50")))

    user_repo = bundle["user_repo"]
    users = {
        "owner": User(id="user-owner", role=UserRole.PLATFORM_OWNER, first_name="Platform"),
        "admin_a": User(id="user-admin-a", role=UserRole.PARTNER_ADMIN, partner_id=PARTNER_A),
        "admin_b": User(id="user-admin-b", role=UserRole.PARTNER_ADMIN, partner_id=PARTNER_B),
        "customer": User(id="user-customer", role=UserRole.CUSTOMER, first_name="Somchai"),
        "other_customer": User(id="user-other", role=UserRole.CUSTOMER),
        "suspended": User(id="user-suspended", role=UserRole.CUSTOMER, is_blacklisted=True),
    }
    for role, user in users.items():
        await user_repo.add(user)
        await user_repo.add_session(user.id, hash_secret(TOKENS[role]), now + timedelta(days=30))

    car_repo = bundle["car_repo"]
    cars = [
        Car(
            id="car-a1",
            partner_id=PARTNER_A,
            brand="Toyota",
            model="Yaris",
            price_per_day=Decimal("1000.00"),
            category=CarCategory.COMPACT,
            approval_status=ApprovalStatus.APPROVED,
            created_at=now - timedelta(days=3),
        ),
        Car(
            id="car-a2",
            partner_id=PARTNER_A,
            brand="Honda",
            model="CR-V",
            price_per_day=Decimal("1800.00"),
            category=CarCategory.SUV,
            fuel_type=FuelType.HYBRID,
            approval_status=ApprovalStatus.APPROVED,
            created_at=now - timedelta(days=2),
        ),
        Car(
            id="car-b1",
            partner_id=PARTNER_B,
            brand="Toyota",
            model="Fortuner",
            price_per_day=Decimal("2500.00"),
            category=CarCategory.SUV,
            transmission=Transmission.MANUAL,
            fuel_type=FuelType.DIESEL,
            approval_status=ApprovalStatus.APPROVED,
            created_at=now - timedelta(days=1),
        ),
        Car(
            id="car-pending",
            partner_id=PARTNER_A,
            brand="Mazda",
            model="2",
            price_per_day=Decimal("900.00"),
            approval_status=ApprovalStatus.PENDING,
            created_at=now,
        ),
        Car(
            id="car-maintenance",
            partner_id=PARTNER_B,
            brand="Isuzu",
            model="D-Max",
            price_per_day=Decimal("1200.00"),
            category=CarCategory.PICKUP,
            approval_status=ApprovalStatus.APPROVED,
            rental_status=RentalStatus.MAINTENANCE,
            created_at=now,
        ),
    ]
    for car in cars:
        await car_repo.add(car)


@pytest.fixture
def seeded(bundle: dict, clock: FakeClock) -> dict:
    asyncio.run(_seed(bundle, clock.now()))
    return bundle


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================


@pytest.fixture
def client(seeded: dict, clock: FakeClock) -> Generator[TestClient, None, None]:
    """
    TestClient en modo in-memory con reloj controlable.
    """
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, use_in_memory=True)
    app.dependency_overrides[get_clock] = lambda: clock

    yield TestClient(app)

    # Limpiar overrides
    app.dependency_overrides.clear()


@pytest.fixture
def create_booking(client: TestClient):
    """Crea una reserva vía API y retorna el JSON del booking."""

    def _create(car_id: str = "car-a1", headers: dict | None = None, **overrides) -> dict:
        response = client.post(
            "/api/bookings",
            json=booking_payload(car_id, **overrides),
            headers=headers or {},
        )
        assert response.status_code == 201, response.json()
        return response.json()["booking"]

    return _create


def advance(client: TestClient, booking_id: str, *statuses: str, role: str = "admin_a") -> dict:
    """Avanza un lead por varios estados y retorna el último booking."""
    booking = None
    for status in statuses:
        response = client.patch(
            f"/api/partner/leads/{booking_id}/status",
            json={"status": status},
            headers=auth(role),
        )
        assert response.status_code == 200, response.json()
        booking = response.json()["booking"]
    return booking


COMPLETE_PIPELINE = ("CLAIMED", "PICKUP", "ACTIVE", "RETURN", "COMPLETED")
