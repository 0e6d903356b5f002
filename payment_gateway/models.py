from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"
STATUS_BLOCKED = "blocked"
STATUSES = (STATUS_SUCCESS, STATUS_FAILED, STATUS_BLOCKED)

PROVIDER_STRIPE = "stripe"
PROVIDER_PAYPAL = "paypal"
PROVIDERS = (PROVIDER_STRIPE, PROVIDER_PAYPAL)


def utcnow():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RiskFactors:
    large_amount: bool = False
    suspicious_domain: bool = False
    test_email: bool = False

    def to_dict(self) -> dict:
        return {
            "largeAmount": self.large_amount,
            "suspiciousDomain": self.suspicious_domain,
            "testEmail": self.test_email,
        }


@dataclass(frozen=True)
class Decision:
    blocked: bool
    provider: str  # placeholder when blocked


@dataclass(frozen=True)
class Outcome:
    provider: str
    status: str
    succeeded: Optional[bool] = None  # None when the charge never reached a processor

    @property
    def blocked(self) -> bool:
        return self.status == STATUS_BLOCKED


@dataclass(frozen=True)
class RiskSummary:
    """Everything an explainer may look at for one decided charge."""
    risk_score: float
    factors: RiskFactors
    amount: float
    email: str
    provider: str
    status: str


@dataclass(frozen=True)
class Transaction:
    id: str
    timestamp: datetime
    amount: float
    currency: str
    email: str
    risk_score: float
    provider: str
    status: str
    explanation: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "amount": self.amount,
            "currency": self.currency,
            "email": self.email,
            "riskScore": self.risk_score,
            "provider": self.provider,
            "status": self.status,
            "explanation": self.explanation,
        }
