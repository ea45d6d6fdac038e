import re

from models import UserProfile

RISK_TIERS = ["Low", "Low", "Medium", "Medium", "High"]
LAST_INTERACTION = "2017-01-30"

_LEADING_DIGITS = re.compile(r"^\s*(\d+)")


def numeric_id(user_id: str) -> int:
    """Leading digits of the identifier, 0 when there are none."""
    match = _LEADING_DIGITS.match(user_id or "")
    return int(match.group(1)) if match else 0


def generate_profile(user_id: str) -> UserProfile:
    """
    Deterministic stand-in for a customer lookup: every field is derived
    from the identifier, so the same id always gives the same profile.
    """
    n = numeric_id(user_id)
    # "07" prefix + right-padded subscriber digits; see DESIGN.md "Phone number format"
    subscriber = str(n * 1234)[:8].ljust(8, "0")

    return UserProfile(
        user_id=user_id,
        name=f"Customer {user_id}",
        phone_number=f"07{subscriber}",
        loan_balance=(n * 13) % 50000,
        credit_score=300 + (n % 550),
        risk_tier=RISK_TIERS[n % len(RISK_TIERS)],
        last_interaction=LAST_INTERACTION,
    )
