"""Value Object BookingNumber - número legible de reserva."""

import re
import secrets
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BookingNumber:
    """
    Value Object inmutable con el número de reserva mostrado al cliente.

    Formato: JR-YYYYMMDD-NNNN (ej: JR-20240601-0427).
    """

    value: str

    PREFIX = "JR"
    PATTERN = re.compile(r"^JR-\d{8}-\d{4}$")

    def __post_init__(self) -> None:
        if not self.PATTERN.match(self.value):
            raise ValueError(f"booking_number con formato inválido: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, at: datetime) -> "BookingNumber":
        """Genera un número para la fecha `at` con sufijo aleatorio de 4 dígitos."""
        suffix = secrets.randbelow(10_000)
        return cls(value=f"{cls.PREFIX}-{at:%Y%m%d}-{suffix:04d}")
