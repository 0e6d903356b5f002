import asyncio
import json
import logging
from typing import Optional

import httpx

from payment_gateway.models import RiskSummary
from payment_gateway.reporting import TemplateExplainer, format_amount

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful risk analyst. Respond in 1-3 concise sentences in plain English "
    "for non-technical users. No JSON."
)


def build_prompt(summary: RiskSummary) -> str:
    return "\n".join([
        "Payment decision:",
        f"- status: {summary.status}",
        f"- provider: {summary.provider}",
        f"- riskScore: {summary.risk_score:.2f}",
        f"- amount: ${format_amount(summary.amount)}",
        f"- email: {summary.email}",
        f"- factors: {json.dumps(summary.factors.to_dict())}",
        "",
        "Write a short explanation of why this decision was made. Mention only relevant factors.",
    ])


class LLMExplainer:
    """
    Natural-language explanations from an OpenAI-compatible chat completions API.

    The call is bounded by `timeout` seconds. On any failure, timeout or empty
    answer the template explanation is returned instead; callers never see an
    error from here.
    """

    def __init__(self, api_key: str, fallback: TemplateExplainer,
                 model: str = "gpt-4o-mini",
                 base_url: str = "https://api.openai.com/v1",
                 timeout: float = 5.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.fallback = fallback
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _complete(self, summary: RiskSummary) -> str:
        payload = {
            "model": self.model,
            "temperature": 0.2,
            "max_tokens": 160,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(summary)},
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(f"{self.base_url}/chat/completions", json=payload, headers=headers)
            r.raise_for_status()
            data = r.json()

        choices = data.get("choices") or []
        if not choices:
            return ""
        content = (choices[0].get("message") or {}).get("content") or ""
        return str(content).strip()

    async def explain(self, summary: RiskSummary) -> str:
        try:
            text = await asyncio.wait_for(self._complete(summary), timeout=self.timeout)
        except Exception as e:
            logger.warning("[llm] explanation failed, using template: %r", e)
            text = ""

        if not text:
            return await self.fallback.explain(summary)
        return text


def build_explainer(api_key: Optional[str] = None, low_risk_cutoff: float = 0.2,
                    model: str = "gpt-4o-mini",
                    base_url: str = "https://api.openai.com/v1",
                    timeout: float = 5.0,
                    transport: Optional[httpx.AsyncBaseTransport] = None):
    """Pick the explanation capability once, at construction time."""
    template = TemplateExplainer(low_risk_cutoff=low_risk_cutoff)
    if not api_key:
        logger.info("[llm] no API key configured, template explanations only")
        return template

    return LLMExplainer(api_key, fallback=template, model=model, base_url=base_url,
                        timeout=timeout, transport=transport)
