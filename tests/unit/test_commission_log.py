from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.entities.commission_log import CommissionLog, CommissionStatus
from app.domain.errors import CommissionAlreadyPaidError

AT = datetime(2024, 6, 5, 12, 0, tzinfo=timezone.utc)


def test_commission_amount_is_total_times_rate():
    log = CommissionLog.for_completed_booking("b-1", "partner-a", Decimal("4000.00"), Decimal("10.00"), AT)
    assert log.commission_amount == Decimal("400.00")
    assert log.status == CommissionStatus.PENDING
    assert log.paid_at is None


def test_commission_amount_rounds_to_cents():
    log = CommissionLog.for_completed_booking("b-1", "partner-b", Decimal("1999.99"), Decimal("12.50"), AT)
    assert log.commission_amount == Decimal("250.00")


def test_paid_only_once():
    log = CommissionLog(id="c-1", commission_amount=Decimal("200.00"))
    paid = log.paid(AT)
    assert paid.status == CommissionStatus.PAID
    assert paid.paid_at == AT

    with pytest.raises(CommissionAlreadyPaidError):
        paid.paid(AT + timedelta(days=1))
    assert paid.paid_at == AT
