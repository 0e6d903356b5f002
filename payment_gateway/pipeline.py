import logging
import random
from typing import Callable, Optional
from uuid import uuid4

from payment_gateway import config
from payment_gateway.config import FraudConfig
from payment_gateway.decision import DecisionPolicy
from payment_gateway.detection import RiskScorer
from payment_gateway.llm import build_explainer
from payment_gateway.models import RiskSummary, Transaction, utcnow
from payment_gateway.processors import make_processors
from payment_gateway.repo import TransactionStore
from payment_gateway.schemas import ChargeRequest

logger = logging.getLogger(__name__)


def make_transaction_id() -> str:
    return str(uuid4())


class ChargePipeline:
    def __init__(self, scorer: RiskScorer, policy: DecisionPolicy, explainer,
                 store: TransactionStore,
                 id_factory: Callable[[], str] = make_transaction_id,
                 clock=utcnow):
        self.scorer = scorer
        self.policy = policy
        self.explainer = explainer
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

    async def process_charge(self, charge: ChargeRequest) -> dict:
        risk_score, factors = self.scorer.score(charge.amount, charge.email)
        outcome = await self.policy.decide(risk_score, charge)

        explanation = await self.explainer.explain(RiskSummary(
            risk_score=risk_score,
            factors=factors,
            amount=charge.amount,
            email=charge.email,
            provider=outcome.provider,
            status=outcome.status,
        ))

        txn = Transaction(
            id=self.id_factory(),
            timestamp=self.clock(),
            amount=charge.amount,
            currency=charge.currency,
            email=charge.email,
            risk_score=risk_score,
            provider=outcome.provider,
            status=outcome.status,
            explanation=explanation,
        )
        self.store.append(txn)

        logger.info("[charge] %s status=%s provider=%s risk=%.3f factors=%s",
                    txn.id, txn.status, txn.provider, risk_score, factors.to_dict())

        return {
            "transactionId": txn.id,
            "provider": txn.provider,
            "status": txn.status,
            "riskScore": risk_score,
            "explanation": explanation,
        }


def build_pipeline(fraud_config: Optional[FraudConfig] = None,
                   store: Optional[TransactionStore] = None,
                   rng: Optional[random.Random] = None,
                   api_key: Optional[str] = config.OPENAI_API_KEY,
                   llm_model: str = config.OPENAI_MODEL,
                   llm_base_url: str = config.OPENAI_BASE_URL,
                   llm_timeout: float = config.LLM_TIMEOUT_SECONDS,
                   llm_transport=None) -> ChargePipeline:
    """Wire the production graph; every setting is resolved here and passed down."""
    cfg = fraud_config or config.load_fraud_config()
    explainer = build_explainer(
        api_key,
        low_risk_cutoff=cfg.low_risk_cutoff,
        model=llm_model,
        base_url=llm_base_url,
        timeout=llm_timeout,
        transport=llm_transport,
    )
    return ChargePipeline(
        scorer=RiskScorer(cfg),
        policy=DecisionPolicy(cfg, make_processors(cfg, rng=rng)),
        explainer=explainer,
        store=store if store is not None else TransactionStore(),
    )
