import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def clamp(cls, page: int | None, limit: int | None, default_limit: int, max_limit: int) -> "PageRequest":
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else default_limit
        return cls(page=page, limit=min(limit, max_limit))
