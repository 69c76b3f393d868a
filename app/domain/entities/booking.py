"""Entidad Booking (lead) - Agregado raíz del dominio."""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.domain.errors import (
    BookingNotEditableError,
    InvalidLeadTransitionError,
    ReturnDateShortenedError,
)
from app.domain.pricing import compute_total
from app.domain.value_objects.rental_period import RentalPeriod


class LeadStatus(str, Enum):
    """
    Estados del pipeline de un lead.

    NEW -> CLAIMED -> PICKUP -> ACTIVE -> RETURN -> COMPLETED, o -> CANCELLED
    desde cualquier estado no terminal.
    """

    NEW = "NEW"
    CLAIMED = "CLAIMED"
    PICKUP = "PICKUP"
    ACTIVE = "ACTIVE"
    RETURN = "RETURN"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def next_statuses(self) -> frozenset["LeadStatus"]:
        return _TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    @property
    def is_editable(self) -> bool:
        """Los datos de la reserva solo se editan antes de la entrega del auto."""
        return self in EDITABLE_STATUSES

    def can_transition_to(self, target: "LeadStatus") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[LeadStatus, frozenset[LeadStatus]] = {
    LeadStatus.NEW: frozenset({LeadStatus.CLAIMED, LeadStatus.CANCELLED}),
    LeadStatus.CLAIMED: frozenset({LeadStatus.PICKUP, LeadStatus.CANCELLED}),
    LeadStatus.PICKUP: frozenset({LeadStatus.ACTIVE, LeadStatus.CANCELLED}),
    LeadStatus.ACTIVE: frozenset({LeadStatus.RETURN, LeadStatus.CANCELLED}),
    LeadStatus.RETURN: frozenset({LeadStatus.COMPLETED, LeadStatus.CANCELLED}),
    LeadStatus.COMPLETED: frozenset(),
    LeadStatus.CANCELLED: frozenset(),
}

EDITABLE_STATUSES = frozenset({LeadStatus.NEW, LeadStatus.CLAIMED})


@dataclass(frozen=True)
class BookingChanges:
    """Campos editables de una reserva; None significa "sin cambio"."""

    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_note: str | None = None
    pickup_location: str | None = None
    return_location: str | None = None
    pickup_datetime: datetime | None = None
    return_datetime: datetime | None = None

    @property
    def changes_dates(self) -> bool:
        return self.pickup_datetime is not None or self.return_datetime is not None


@dataclass
class Booking:
    """
    Solicitud de renta de un cliente (lead) sobre un auto de un partner.

    Los datos del cliente son copias desnormalizadas: pueden existir sin
    usuario registrado (`user_id` None).
    """

    # Identificadores
    id: str | None = None
    booking_number: str = ""

    # Referencias
    car_id: str = ""
    partner_id: str = ""
    user_id: str | None = None

    # Cliente
    customer_name: str = ""
    customer_phone: str = ""
    customer_email: str = ""
    customer_note: str | None = None

    # Fechas y lugares
    pickup_datetime: datetime | None = None
    return_datetime: datetime | None = None
    pickup_location: str = ""
    return_location: str = ""

    # Financieros
    total_price: Decimal = Decimal("0")

    # Estado
    lead_status: LeadStatus = LeadStatus.NEW
    reserved_until: datetime | None = None

    # Auditoría del pipeline
    claimed_by_id: str | None = None
    claimed_at: datetime | None = None
    pickup_confirmed_by_id: str | None = None
    pickup_confirmed_at: datetime | None = None
    return_confirmed_by_id: str | None = None
    return_confirmed_at: datetime | None = None
    cancellation_reason: str | None = None

    # Control de concurrencia
    lock_version: int = 0

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades calculadas ===

    @property
    def period(self) -> RentalPeriod:
        return RentalPeriod(start=self.pickup_datetime, end=self.return_datetime)

    @property
    def rental_days(self) -> int:
        return self.period.rental_days

    def holds_car(self, now: datetime) -> bool:
        """
        Reserva temporal vigente: solo un lead NEW con `reserved_until` futuro
        retiene el auto. Pasado NEW, `reserved_until` deja de importar.
        """
        return (
            self.lead_status == LeadStatus.NEW
            and self.reserved_until is not None
            and self.reserved_until > now
        )

    def blocks_calendar(self) -> bool:
        """Un lead no terminal ocupa sus fechas en el calendario del auto."""
        return not self.lead_status.is_terminal

    # === Métodos de negocio ===
    # Retornan una copia nueva: la instancia original no cambia si hay error.

    def edited(self, changes: BookingChanges, price_per_day: Decimal, at: datetime) -> "Booking":
        """
        Aplica una edición del partner.

        Raises:
            BookingNotEditableError: el lead ya pasó de CLAIMED.
            ReturnDateShortenedError: la nueva devolución es anterior a la guardada.
            InvalidDateRangeError: la devolución queda antes de la recogida.
        """
        if not self.lead_status.is_editable:
            raise BookingNotEditableError(self.id, self.lead_status.value)

        values: dict = {}
        if changes.customer_name:
            values["customer_name"] = changes.customer_name
        if changes.customer_phone:
            values["customer_phone"] = changes.customer_phone
        if changes.customer_email is not None:
            values["customer_email"] = changes.customer_email
        if changes.customer_note is not None:
            values["customer_note"] = changes.customer_note
        if changes.pickup_location:
            values["pickup_location"] = changes.pickup_location
        if changes.return_location is not None:
            values["return_location"] = changes.return_location

        if changes.return_datetime is not None:
            if changes.return_datetime < self.return_datetime:
                raise ReturnDateShortenedError(self.id)
            values["return_datetime"] = changes.return_datetime
        if changes.pickup_datetime is not None:
            values["pickup_datetime"] = changes.pickup_datetime

        if changes.changes_dates:
            values["total_price"] = compute_total(
                values.get("pickup_datetime", self.pickup_datetime),
                values.get("return_datetime", self.return_datetime),
                price_per_day,
            )

        return replace(self, **values, updated_at=at)

    def advanced_to(
        self,
        status: LeadStatus,
        actor_id: str | None,
        at: datetime,
        note: str | None = None,
    ) -> "Booking":
        """
        Avanza el lead en el pipeline registrando quién y cuándo.

        Raises:
            InvalidLeadTransitionError: la transición no está en la tabla.
        """
        if not self.lead_status.can_transition_to(status):
            raise InvalidLeadTransitionError(self.lead_status.value, status.value)

        values: dict = {"lead_status": status, "updated_at": at}
        if status == LeadStatus.CLAIMED:
            values.update(claimed_by_id=actor_id, claimed_at=at)
        elif status == LeadStatus.PICKUP:
            values.update(pickup_confirmed_by_id=actor_id, pickup_confirmed_at=at)
        elif status == LeadStatus.RETURN:
            values.update(return_confirmed_by_id=actor_id, return_confirmed_at=at)
        elif status == LeadStatus.CANCELLED:
            if note:
                values["cancellation_reason"] = note
        elif status in (LeadStatus.ACTIVE, LeadStatus.COMPLETED):
            pass
        else:
            raise InvalidLeadTransitionError(self.lead_status.value, status.value)
        return replace(self, **values)
