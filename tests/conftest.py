import itertools
from datetime import datetime, timedelta, timezone

import pytest

from payment_gateway.config import FraudConfig
from payment_gateway.models import Transaction


class FixedRandom:
    """random.Random stand-in that always draws the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_txn(n: int = 0, status: str = "success", provider: str = "stripe",
             email: str = "user@example.com", amount: float = 100.0,
             risk_score: float = 0.1, ts: datetime = None) -> Transaction:
    return Transaction(
        id=f"txn-{n}",
        timestamp=ts or (T0 + timedelta(minutes=n)),
        amount=amount,
        currency="USD",
        email=email,
        risk_score=risk_score,
        provider=provider,
        status=status,
        explanation="test",
    )


@pytest.fixture
def cfg():
    return FraudConfig(processing_delay_seconds=0.0)


@pytest.fixture
def ids():
    counter = itertools.count(1)
    return lambda: f"txn-{next(counter)}"


@pytest.fixture
def clock():
    ticks = itertools.count()
    return lambda: T0 + timedelta(seconds=next(ticks))
