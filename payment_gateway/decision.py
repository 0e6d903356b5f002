from typing import Dict

from payment_gateway.config import FraudConfig
from payment_gateway.models import (
    Decision,
    Outcome,
    PROVIDER_PAYPAL,
    PROVIDER_STRIPE,
    STATUS_BLOCKED,
    STATUS_FAILED,
    STATUS_SUCCESS,
)
from payment_gateway.processors import SimulatedProcessor
from payment_gateway.schemas import ChargeRequest


class DecisionPolicy:
    def __init__(self, config: FraudConfig, processors: Dict[str, SimulatedProcessor]):
        self.config = config
        self.processors = processors

    def route(self, score: float) -> Decision:
        if score >= self.config.block_threshold:
            # provider is never used for a blocked charge
            return Decision(blocked=True, provider=PROVIDER_STRIPE)

        provider = PROVIDER_STRIPE if score < self.config.stripe_preferred_below else PROVIDER_PAYPAL
        return Decision(blocked=False, provider=provider)

    async def decide(self, score: float, charge: ChargeRequest) -> Outcome:
        dec = self.route(score)
        if dec.blocked:
            return Outcome(provider=dec.provider, status=STATUS_BLOCKED)

        processor = self.processors[dec.provider]
        ok = await processor.process_payment(charge.amount, charge.currency, charge.source)
        return Outcome(
            provider=dec.provider,
            status=STATUS_SUCCESS if ok else STATUS_FAILED,
            succeeded=ok,
        )
