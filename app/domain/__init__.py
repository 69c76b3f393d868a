"""
Capa de Dominio - Reservas de autos entre clientes y partners.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Booking (lead), Car, Partner, CommissionLog, ApiKey, User
- value_objects/: RentalPeriod, Money, BookingNumber, ApiKeySecret
- pricing.py: cálculo del precio total
- errors.py: excepciones del dominio
"""

from app.domain.entities import (
    ApiKey,
    ApiKeyPermission,
    ApprovalStatus,
    Booking,
    BookingChanges,
    Car,
    CommissionLog,
    CommissionStatus,
    LeadStatus,
    Partner,
    RentalStatus,
    User,
    UserRole,
)
from app.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
    UnauthorizedError,
    ValidationError,
)
from app.domain.pricing import compute_total
from app.domain.value_objects import ApiKeySecret, BookingNumber, Money, RentalPeriod

__all__ = [
    # Entities
    "ApiKey",
    "ApiKeyPermission",
    "ApprovalStatus",
    "Booking",
    "BookingChanges",
    "Car",
    "CommissionLog",
    "CommissionStatus",
    "LeadStatus",
    "Partner",
    "RentalStatus",
    "User",
    "UserRole",
    # Value Objects
    "ApiKeySecret",
    "BookingNumber",
    "Money",
    "RentalPeriod",
    # Pricing
    "compute_total",
    # Errors
    "DomainError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "PreconditionFailedError",
]
