# tests/test_reporting.py
import asyncio

from payment_gateway.models import RiskFactors, RiskSummary
from payment_gateway.reporting import TemplateExplainer, format_amount, make_explanation


def _summary(**kw):
    base = dict(risk_score=0.02, factors=RiskFactors(), amount=1000.0,
                email="donor@example.com", provider="stripe", status="success")
    base.update(kw)
    return RiskSummary(**base)


def test_low_risk_success():
    text = make_explanation(_summary())
    assert text.startswith("This payment was successfully routed to stripe with a risk score of 0.02.")
    assert "Due to the low risk score" in text
    assert "suspicious" not in text


def test_success_above_low_risk_cutoff():
    text = make_explanation(_summary(risk_score=0.35, provider="paypal"))
    assert "Despite some risk factors, the payment was approved and routed to paypal." in text


def test_blocked_lists_every_factor():
    s = _summary(risk_score=1.0, amount=15000.0, email="test@test.ru", status="blocked",
                 factors=RiskFactors(large_amount=True, suspicious_domain=True, test_email=True))
    text = make_explanation(s)
    assert text.startswith("This payment was blocked due to a high fraud risk score of 1.00.")
    assert "The transaction amount of $15000 exceeds our threshold" in text
    assert '"test@test.ru" is flagged as potentially suspicious' in text
    assert "appears to be a test account" in text
    assert "routed" not in text


def test_failed_has_no_routing_rationale():
    text = make_explanation(_summary(status="failed", risk_score=0.25))
    assert text == "This payment failed to process with a risk score of 0.25."


def test_cutoff_is_configurable():
    text = asyncio.run(TemplateExplainer(low_risk_cutoff=0.01).explain(_summary()))
    assert "Despite some risk factors" in text


def test_format_amount():
    assert format_amount(15000.0) == "15000"
    assert format_amount(1000000) == "1000000"
    assert format_amount(99.5) == "99.5"
