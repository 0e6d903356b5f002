# tests/test_llm.py
import asyncio
import json

import httpx

from payment_gateway.llm import LLMExplainer, build_explainer, build_prompt
from payment_gateway.models import RiskFactors, RiskSummary
from payment_gateway.reporting import TemplateExplainer, make_explanation

SUMMARY = RiskSummary(risk_score=0.7, factors=RiskFactors(suspicious_domain=True), amount=100.0,
                      email="user@test.ru", provider="stripe", status="blocked")
TEMPLATE_TEXT = make_explanation(SUMMARY)


def _explainer(handler, timeout=1.0):
    return LLMExplainer("sk-test", fallback=TemplateExplainer(), base_url="https://llm.local/v1/",
                        timeout=timeout, transport=httpx.MockTransport(handler))


def test_uses_model_answer():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "  Blocked: risky domain.  "}}]})

    text = asyncio.run(_explainer(handler).explain(SUMMARY))
    assert text == "Blocked: risky domain."
    assert seen["url"] == "https://llm.local/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "gpt-4o-mini"
    assert seen["body"]["messages"][0]["role"] == "system"
    assert "riskScore: 0.70" in seen["body"]["messages"][1]["content"]


def test_http_error_falls_back_to_template():
    text = asyncio.run(_explainer(lambda r: httpx.Response(500, json={"error": "boom"})).explain(SUMMARY))
    assert text == TEMPLATE_TEXT


def test_empty_answer_falls_back_to_template():
    text = asyncio.run(_explainer(lambda r: httpx.Response(200, json={"choices": []})).explain(SUMMARY))
    assert text == TEMPLATE_TEXT


def test_connection_error_falls_back_to_template():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert asyncio.run(_explainer(handler).explain(SUMMARY)) == TEMPLATE_TEXT


def test_slow_model_is_cut_off():
    async def handler(request):
        await asyncio.sleep(2)
        return httpx.Response(200, json={"choices": [{"message": {"content": "too late"}}]})

    text = asyncio.run(_explainer(handler, timeout=0.05).explain(SUMMARY))
    assert text == TEMPLATE_TEXT


def test_build_explainer_picks_capability_once():
    assert isinstance(build_explainer(None), TemplateExplainer)
    assert isinstance(build_explainer(""), TemplateExplainer)

    llm = build_explainer("sk-test", low_risk_cutoff=0.1, timeout=2.0)
    assert isinstance(llm, LLMExplainer)
    assert llm.timeout == 2.0
    assert llm.fallback.low_risk_cutoff == 0.1


def test_prompt_mentions_factors():
    prompt = build_prompt(SUMMARY)
    assert "status: blocked" in prompt
    assert '"suspiciousDomain": true' in prompt
