from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class TransactionManager(Protocol):
    """Cada mutación de varios pasos (lectura + validación + escritura) corre dentro de `start()`."""

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
