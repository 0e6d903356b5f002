from payment_gateway.models import RiskSummary, STATUS_BLOCKED, STATUS_SUCCESS


def format_amount(amount: float) -> str:
    """15000.0 -> '15000', 99.5 -> '99.5'"""
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def make_explanation(summary: RiskSummary, low_risk_cutoff: float = 0.2) -> str:
    f = summary.factors
    score = f"{summary.risk_score:.2f}"

    lines = []
    if summary.status == STATUS_BLOCKED:
        lines.append(f"This payment was blocked due to a high fraud risk score of {score}.")
    elif summary.status == STATUS_SUCCESS:
        lines.append(f"This payment was successfully routed to {summary.provider} with a risk score of {score}.")
    else:
        lines.append(f"This payment failed to process with a risk score of {score}.")

    if f.large_amount:
        lines.append(f"The transaction amount of ${format_amount(summary.amount)} exceeds our threshold for large transactions.")
    if f.suspicious_domain:
        lines.append(f'The email domain from "{summary.email}" is flagged as potentially suspicious.')
    if f.test_email:
        lines.append(f'The email address "{summary.email}" appears to be a test account.')

    # Routing rationale, successful charges only
    if summary.status == STATUS_SUCCESS:
        if summary.risk_score < low_risk_cutoff:
            lines.append(f"Due to the low risk score, the payment was routed to {summary.provider} for processing.")
        else:
            lines.append(f"Despite some risk factors, the payment was approved and routed to {summary.provider}.")

    return " ".join(lines)


class TemplateExplainer:
    """Deterministic explanations built from the decision alone. Always available."""

    def __init__(self, low_risk_cutoff: float = 0.2):
        self.low_risk_cutoff = low_risk_cutoff

    async def explain(self, summary: RiskSummary) -> str:
        return make_explanation(summary, low_risk_cutoff=self.low_risk_cutoff)
