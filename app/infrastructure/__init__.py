"""
Capa de Infraestructura - Reservas, leads y comisiones.

Esta capa contiene las implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: Tablas, engine, repositorios SQL y transaction manager
- in_memory/: Implementaciones in-memory para desarrollo y testing
"""

# Database
from app.infrastructure.db.engine import build_engine, build_sessionmaker, create_schema
from app.infrastructure.db.repositories.api_key_repo_sql import ApiKeyRepoSQL
from app.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from app.infrastructure.db.repositories.car_repo_sql import CarRepoSQL
from app.infrastructure.db.repositories.commission_repo_sql import CommissionRepoSQL
from app.infrastructure.db.repositories.partner_repo_sql import PartnerRepoSQL
from app.infrastructure.db.repositories.user_repo_sql import UserRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

# In-Memory
from app.infrastructure.in_memory import (
    InMemoryApiKeyRepo,
    InMemoryBookingRepo,
    InMemoryCarRepo,
    InMemoryCommissionRepo,
    InMemoryPartnerRepo,
    InMemoryTransactionManager,
    InMemoryUserRepo,
)

__all__ = [
    # Database - Engine
    "build_engine",
    "build_sessionmaker",
    "create_schema",
    # Database - Repositories SQL
    "ApiKeyRepoSQL",
    "BookingRepoSQL",
    "CarRepoSQL",
    "CommissionRepoSQL",
    "PartnerRepoSQL",
    "UserRepoSQL",
    "SQLAlchemyTransactionManager",
    # In-Memory Implementations
    "InMemoryApiKeyRepo",
    "InMemoryBookingRepo",
    "InMemoryCarRepo",
    "InMemoryCommissionRepo",
    "InMemoryPartnerRepo",
    "InMemoryUserRepo",
    "InMemoryTransactionManager",
]
