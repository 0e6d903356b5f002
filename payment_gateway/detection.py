from typing import Tuple

from payment_gateway.config import FraudConfig
from payment_gateway.models import RiskFactors


def split_email(email: str) -> Tuple[str, str]:
    """Return (local_part, domain), lower-cased; both empty when there is no '@'."""
    if "@" not in email:
        return "", ""
    parts = email.lower().split("@")
    return parts[0], parts[1]


class RiskScorer:
    def __init__(self, config: FraudConfig):
        self.config = config

    def score(self, amount: float, email: str) -> Tuple[float, RiskFactors]:
        cfg = self.config
        local, domain = split_email(email or "")

        factors = RiskFactors(
            large_amount=amount > cfg.large_amount_threshold,
            suspicious_domain=any(s in domain for s in cfg.suspicious_domains),
            test_email=any(t in local for t in cfg.test_email_indicators),
        )

        score = 0.0

        if factors.large_amount:
            score += cfg.weight_large_amount
        if factors.suspicious_domain:
            score += cfg.weight_suspicious_domain
        if factors.test_email:
            score += cfg.weight_test_email

        # Amount-based risk grows with the amount up to a cap
        score += min(amount / cfg.amount_normalization, cfg.amount_max_contribution)

        return min(score, 1.0), factors
