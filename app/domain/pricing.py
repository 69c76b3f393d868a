"""Cálculo de precio total de una renta."""

from datetime import datetime
from decimal import Decimal

from app.domain.value_objects.money import Money
from app.domain.value_objects.rental_period import RentalPeriod


def compute_total(pickup: datetime, return_: datetime, price_per_day: Decimal) -> Decimal:
    """
    Precio total = ceil(días) * precio por día.

    Cualquier fracción de día se cobra como día completo. Es determinista:
    recalcular con las mismas fechas siempre da el mismo total.

    Raises:
        InvalidDateRangeError: si `return_` es anterior a `pickup`.
    """
    period = RentalPeriod(start=pickup, end=return_)
    return Money(amount=price_per_day).times(period.rental_days).amount
