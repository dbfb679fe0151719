"""Risk score buckets shared by ``types`` and ``validator``."""

# Upper bounds, inclusive
RISK_LOW = 20
RISK_MEDIUM = 50
RISK_HIGH = 80


def risk_level(score: int) -> str:
    """Bucket a risk score: low / medium / high / critical."""
    if score <= RISK_LOW:
        return "low"
    if score <= RISK_MEDIUM:
        return "medium"
    if score <= RISK_HIGH:
        return "high"
    return "critical"
