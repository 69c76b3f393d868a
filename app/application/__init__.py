"""
Capa de Aplicación - Reservas, leads y comisiones.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso del sistema
- dtos/: Data Transfer Objects (paginación)
- interfaces/: Puertos (contratos para adaptadores)
- access_control.py: Guard de propiedad por partner / usuario
"""

from app.application.dtos import Page, PageRequest
from app.application.interfaces import (
    ApiKeyRepo,
    BookingRepo,
    CarRepo,
    CarSearch,
    CarSort,
    Clock,
    CommissionRepo,
    FakeClock,
    PartnerRepo,
    SystemClock,
    TransactionManager,
    UserRepo,
)

__all__ = [
    # DTOs
    "Page",
    "PageRequest",
    # Interfaces - Repositories
    "ApiKeyRepo",
    "BookingRepo",
    "CarRepo",
    "CarSearch",
    "CarSort",
    "CommissionRepo",
    "PartnerRepo",
    "UserRepo",
    # Interfaces - Infrastructure
    "TransactionManager",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
