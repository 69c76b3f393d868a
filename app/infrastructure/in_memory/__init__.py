"""Implementaciones in-memory para desarrollo y testing."""

from app.infrastructure.in_memory.api_key_repo import InMemoryApiKeyRepo
from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from app.infrastructure.in_memory.car_repo import InMemoryCarRepo
from app.infrastructure.in_memory.commission_repo import InMemoryCommissionRepo
from app.infrastructure.in_memory.partner_repo import InMemoryPartnerRepo
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager as InMemoryTransactionManager
from app.infrastructure.in_memory.user_repo import InMemoryUserRepo

__all__ = [
    # Repositories
    "InMemoryApiKeyRepo",
    "InMemoryBookingRepo",
    "InMemoryCarRepo",
    "InMemoryCommissionRepo",
    "InMemoryPartnerRepo",
    "InMemoryUserRepo",
    # Infrastructure
    "InMemoryTransactionManager",
]
