import asyncio
import logging
import random
from typing import Dict, Optional

from payment_gateway.config import FraudConfig
from payment_gateway.models import PROVIDERS

logger = logging.getLogger(__name__)


class SimulatedProcessor:
    """
    Stand-in for a card processor. Nothing is settled: after a short
    artificial latency the charge succeeds with `success_probability`.
    """

    def __init__(self, name: str, success_probability: float = 0.9,
                 delay_seconds: float = 0.1, rng: Optional[random.Random] = None):
        self.name = name
        self.success_probability = success_probability
        self.delay_seconds = delay_seconds
        self.rng = rng or random.Random()

    async def process_payment(self, amount: float, currency: str, source: str) -> bool:
        await asyncio.sleep(self.delay_seconds)
        ok = self.rng.random() < self.success_probability
        logger.debug("[%s] charge %.2f %s -> %s", self.name, amount, currency, "ok" if ok else "declined")
        return ok


def make_processors(config: FraudConfig, rng: Optional[random.Random] = None) -> Dict[str, SimulatedProcessor]:
    rng = rng or random.Random()
    return {
        name: SimulatedProcessor(
            name,
            success_probability=config.success_probability,
            delay_seconds=config.processing_delay_seconds,
            rng=rng,
        )
        for name in PROVIDERS
    }
