from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()


def utc(value: datetime | None) -> datetime | None:
    """SQLite devuelve datetimes naive: se reinterpretan como UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


partners = Table(
    "partners",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("phone", String(50)),
    Column("commission_rate", Numeric(5, 2), nullable=False),
    Column("status", String(32), nullable=False),
    Column("created_at", DateTime(timezone=True)),
)

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("role", String(32), nullable=False),
    Column("first_name", String(150), nullable=False),
    Column("last_name", String(150), nullable=False),
    Column("email", String(255), unique=True),
    Column("phone", String(50)),
    Column("partner_id", String(36), ForeignKey("partners.id")),
    Column("is_blacklisted", Boolean, nullable=False, default=False),
)

sessions = Table(
    "sessions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("token_hash", String(64), nullable=False, unique=True),
    Column("expires_at", DateTime(timezone=True), nullable=False),
)

cars = Table(
    "cars",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("partner_id", String(36), ForeignKey("partners.id"), nullable=False),
    Column("brand", String(100), nullable=False),
    Column("model", String(100), nullable=False),
    Column("year", Integer),
    Column("license_plate", String(20)),
    Column("category", String(32), nullable=False),
    Column("transmission", String(16), nullable=False),
    Column("fuel_type", String(16), nullable=False),
    Column("seats", Integer),
    Column("price_per_day", Numeric(12, 2), nullable=False),
    Column("approval_status", String(32), nullable=False),
    Column("rental_status", String(32), nullable=False),
    Column("locked_until", DateTime(timezone=True)),
    Column("locked_by_session", String(64)),
    Column("created_at", DateTime(timezone=True)),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("booking_number", String(20), nullable=False, unique=True),
    Column("car_id", String(36), ForeignKey("cars.id"), nullable=False),
    Column("partner_id", String(36), ForeignKey("partners.id"), nullable=False),
    Column("user_id", String(36), ForeignKey("users.id")),
    Column("customer_name", String(255), nullable=False),
    Column("customer_phone", String(50), nullable=False),
    Column("customer_email", String(255), nullable=False, default=""),
    Column("customer_note", Text),
    Column("pickup_datetime", DateTime(timezone=True), nullable=False),
    Column("return_datetime", DateTime(timezone=True), nullable=False),
    Column("pickup_location", String(255), nullable=False, default=""),
    Column("return_location", String(255), nullable=False, default=""),
    Column("total_price", Numeric(12, 2), nullable=False),
    Column("lead_status", String(32), nullable=False),
    Column("reserved_until", DateTime(timezone=True)),
    Column("claimed_by_id", String(36)),
    Column("claimed_at", DateTime(timezone=True)),
    Column("pickup_confirmed_by_id", String(36)),
    Column("pickup_confirmed_at", DateTime(timezone=True)),
    Column("return_confirmed_by_id", String(36)),
    Column("return_confirmed_at", DateTime(timezone=True)),
    Column("cancellation_reason", Text),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
    Index("ix_bookings_car_status", "car_id", "lead_status"),
    Index("ix_bookings_partner_created", "partner_id", "created_at"),
)

commission_logs = Table(
    "commission_logs",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("partner_id", String(36), ForeignKey("partners.id"), nullable=False),
    Column("booking_id", String(36), ForeignKey("bookings.id"), nullable=False, unique=True),
    Column("booking_amount", Numeric(12, 2), nullable=False),
    Column("commission_rate", Numeric(5, 2), nullable=False),
    Column("commission_amount", Numeric(12, 2), nullable=False),
    Column("status", String(16), nullable=False),
    Column("paid_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True)),
)

api_keys = Table(
    "api_keys",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(100), nullable=False),
    Column("key_hash", String(64), nullable=False, unique=True),
    Column("prefix", String(16), nullable=False),
    Column("permissions", JSON, nullable=False),
    Column("partner_id", String(36), ForeignKey("partners.id")),
    Column("expires_at", DateTime(timezone=True)),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("last_used_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True)),
)
