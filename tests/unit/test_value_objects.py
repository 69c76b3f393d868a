import hashlib
import re
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.domain.value_objects import ApiKeySecret, BookingNumber, Money, hash_secret


def test_generated_api_key_format():
    secret = ApiKeySecret.generate()
    assert re.fullmatch(r"jgr_[0-9a-f]{64}", secret.plaintext)
    assert secret.prefix == secret.plaintext[:12]
    assert secret.hash == hashlib.sha256(secret.plaintext.encode()).hexdigest()
    assert secret.plaintext not in repr(secret)


def test_generated_api_keys_are_unique():
    assert ApiKeySecret.generate().plaintext != ApiKeySecret.generate().plaintext


def test_hash_secret_is_deterministic():
    assert hash_secret("token") == hash_secret("token")
    assert len(hash_secret("token")) == 64


def test_booking_number_format():
    number = BookingNumber.generate(datetime(2024, 5, 30, 8, 0, tzinfo=timezone.utc))
    assert re.fullmatch(r"JR-20240530-\d{4}", number.value)


def test_money_rejects_negative_amounts():
    with pytest.raises(ValueError):
        Money(amount=Decimal("-1"))
    assert Money(amount=Decimal("100")).percentage(Decimal("12.5")).amount == Decimal("12.50")
