import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

PORT = int(os.getenv("PORT", "4000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SERVICE_NAME = "mini-payment-gateway"

# Optional natural-language explanations (OpenAI-compatible chat completions)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY") or None
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "5.0"))


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


def _env_list(name: str, default: str) -> Tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(x.strip().lower() for x in raw.split(",") if x.strip())


@dataclass(frozen=True)
class FraudConfig:
    large_amount_threshold: float = 10000.0
    suspicious_domains: Tuple[str, ...] = (".ru", ".cn", "test.com")
    test_email_indicators: Tuple[str, ...] = ("test", "admin", "root")

    weight_large_amount: float = 0.4
    weight_suspicious_domain: float = 0.3
    weight_test_email: float = 0.2

    # amount / amount_normalization, capped at amount_max_contribution
    amount_normalization: float = 50000.0
    amount_max_contribution: float = 0.3

    block_threshold: float = 0.5         # block at or above
    stripe_preferred_below: float = 0.3  # stripe below, paypal otherwise
    low_risk_cutoff: float = 0.2         # explanation wording only

    # simulated processors
    success_probability: float = 0.9
    processing_delay_seconds: float = 0.1


def load_fraud_config() -> FraudConfig:
    """Build the fraud configuration once at startup from the environment."""
    return FraudConfig(
        large_amount_threshold=_env_float("FRAUD_LARGE_AMOUNT_THRESHOLD", "10000"),
        suspicious_domains=_env_list("FRAUD_SUSPICIOUS_DOMAINS", ".ru,.cn,test.com"),
        test_email_indicators=_env_list("FRAUD_TEST_EMAIL_INDICATORS", "test,admin,root"),
        weight_large_amount=_env_float("FRAUD_WEIGHT_LARGE_AMOUNT", "0.4"),
        weight_suspicious_domain=_env_float("FRAUD_WEIGHT_SUSPICIOUS_DOMAIN", "0.3"),
        weight_test_email=_env_float("FRAUD_WEIGHT_TEST_EMAIL", "0.2"),
        amount_normalization=_env_float("FRAUD_AMOUNT_NORMALIZATION", "50000"),
        amount_max_contribution=_env_float("FRAUD_AMOUNT_MAX_CONTRIBUTION", "0.3"),
        block_threshold=_env_float("FRAUD_BLOCK_THRESHOLD", "0.5"),
        stripe_preferred_below=_env_float("FRAUD_STRIPE_PREFERRED_BELOW", "0.3"),
        low_risk_cutoff=_env_float("FRAUD_LOW_RISK_CUTOFF", "0.2"),
        success_probability=_env_float("PAYMENT_SUCCESS_PROBABILITY", "0.9"),
        processing_delay_seconds=_env_float("PAYMENT_PROCESSING_DELAY_SECONDS", "0.1"),
    )
