"""Value Object RentalPeriod - rango pickup/return de una reserva."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.domain.errors import InvalidDateRangeError

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class RentalPeriod:
    """
    Value Object inmutable que representa el periodo de renta.

    Attributes:
        start: Fecha/hora de recogida (pickup).
        end: Fecha/hora de devolución (return).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidDateRangeError(
                f"return_datetime must not be before pickup_datetime: {self.end} < {self.start}"
            )

    @property
    def duration(self) -> timedelta:
        """Retorna la duración del periodo."""
        return self.end - self.start

    @property
    def rental_days(self) -> int:
        """
        Calcula los días de renta.

        Regla de negocio: cualquier fracción de día cuenta como día completo.
        Ejemplo: 25 horas = 2 días. Un periodo vacío son 0 días.
        """
        return math.ceil(self.duration / ONE_DAY)

    def overlaps_with(self, other: "RentalPeriod") -> bool:
        """Verifica si este periodo se superpone con otro."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
