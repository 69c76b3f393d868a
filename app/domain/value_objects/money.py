"""Value Object Money - representa un valor monetario con su moneda."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """
    Value Object inmutable que representa un monto monetario.

    Attributes:
        amount: Monto decimal (hasta 2 decimales).
        currency_code: Código ISO 4217 de la moneda (por defecto THB).
    """

    amount: Decimal
    currency_code: str = "THB"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if len(self.currency_code) != 3:
            raise ValueError(f"currency_code debe ser de 3 caracteres: {self.currency_code}")

        if self.amount < 0:
            raise ValueError(f"amount no puede ser negativo: {self.amount}")

    def times(self, quantity: int) -> "Money":
        """Multiplica por una cantidad entera (ej: días de renta)."""
        if quantity < 0:
            raise ValueError(f"quantity no puede ser negativa: {quantity}")
        return Money(amount=(self.amount * quantity).quantize(CENTS), currency_code=self.currency_code)

    def percentage(self, rate: Decimal) -> "Money":
        """Retorna `rate` por ciento del monto, redondeado a centavos."""
        value = (self.amount * Decimal(str(rate)) / Decimal("100")).quantize(
            CENTS, rounding=ROUND_HALF_UP
        )
        return Money(amount=value, currency_code=self.currency_code)
