from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, condecimal

from app.application.dtos.pagination import Page

Money = condecimal(max_digits=12, decimal_places=2)

DECIMAL_ENCODERS = {Decimal: lambda v: format(v, ".2f")}


def as_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "Pagination":
        return cls(page=page.page, limit=page.limit, total=page.total, total_pages=page.total_pages)


class ErrorResponse(BaseModel):
    error: str
    code: str | None = None
