"""Entidad CommissionLog - comisión que un partner debe a la plataforma."""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.domain.errors import CommissionAlreadyPaidError
from app.domain.value_objects.money import Money


class CommissionStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"


@dataclass
class CommissionLog:
    """
    Registro derivado de una reserva completada.

    Inmutable salvo la transición PENDING -> PAID, que es de un solo sentido.
    """

    id: str | None = None
    partner_id: str = ""
    booking_id: str = ""
    booking_amount: Decimal = Decimal("0")
    commission_rate: Decimal = Decimal("0")
    commission_amount: Decimal = Decimal("0")
    status: CommissionStatus = CommissionStatus.PENDING
    paid_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == CommissionStatus.PAID

    def paid(self, at: datetime) -> "CommissionLog":
        """
        Retorna la comisión marcada como pagada en `at`.

        Raises:
            CommissionAlreadyPaidError: ya estaba pagada; `paid_at` no cambia.
        """
        if self.is_paid:
            raise CommissionAlreadyPaidError(self.id)
        return replace(self, status=CommissionStatus.PAID, paid_at=at)

    @classmethod
    def for_completed_booking(
        cls,
        booking_id: str,
        partner_id: str,
        booking_amount: Decimal,
        commission_rate: Decimal,
        at: datetime,
    ) -> "CommissionLog":
        """commission_amount = total de la reserva * tasa / 100."""
        amount = Money(amount=booking_amount).percentage(commission_rate).amount
        return cls(
            partner_id=partner_id,
            booking_id=booking_id,
            booking_amount=booking_amount,
            commission_rate=commission_rate,
            commission_amount=amount,
            status=CommissionStatus.PENDING,
            created_at=at,
        )
