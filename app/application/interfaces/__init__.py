"""Interfaces (Puertos) de la capa de aplicación."""

from app.application.interfaces.api_key_repo import ApiKeyRepo
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.car_repo import CarRepo, CarSearch, CarSort
from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.commission_repo import CommissionRepo
from app.application.interfaces.partner_repo import PartnerRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.user_repo import UserRepo

__all__ = [
    # Repositories
    "ApiKeyRepo",
    "BookingRepo",
    "CarRepo",
    "CarSearch",
    "CarSort",
    "CommissionRepo",
    "PartnerRepo",
    "UserRepo",
    # Services
    "Clock",
    "SystemClock",
    "FakeClock",
    # Infrastructure
    "TransactionManager",
]
