"""Entidad User - identidad del llamador autenticado."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """Roles de la plataforma."""

    CUSTOMER = "CUSTOMER"
    PARTNER_ADMIN = "PARTNER_ADMIN"
    PLATFORM_OWNER = "PLATFORM_OWNER"


@dataclass
class User:
    """
    Usuario registrado.

    Para PARTNER_ADMIN, `partner_id` es el partner (rentadora) que administra.
    """

    id: str
    role: UserRole = UserRole.CUSTOMER
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    partner_id: str | None = None
    is_blacklisted: bool = False
