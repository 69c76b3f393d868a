"""DTOs de la capa de aplicación."""

from app.application.dtos.pagination import Page, PageRequest

__all__ = [
    "Page",
    "PageRequest",
]
