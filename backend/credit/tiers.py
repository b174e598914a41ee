from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

# Months a borrower can choose from, whatever the tier.
LOAN_TERM_OPTIONS: List[int] = [3, 6, 12, 24]


@dataclass(frozen=True)
class TierConfig:
    name: str
    min_score: int
    max_loan_amount: float
    apr_min: float
    apr_max: float


TIER_CONFIG: Dict[str, TierConfig] = {
    "A": TierConfig(name="Excellent", min_score=800, max_loan_amount=500_000, apr_min=8, apr_max=12),
    "B": TierConfig(name="Good", min_score=650, max_loan_amount=250_000, apr_min=12, apr_max=18),
    "C": TierConfig(name="Fair", min_score=500, max_loan_amount=100_000, apr_min=18, apr_max=24),
    "D": TierConfig(name="Limited", min_score=0, max_loan_amount=50_000, apr_min=24, apr_max=36),
}

# Best first; D is the fallback for anything below C.
TIER_ORDER = ("A", "B", "C", "D")


def resolve_tier(score: int) -> str:
    for tier in TIER_ORDER[:-1]:
        if score >= TIER_CONFIG[tier].min_score:
            return tier
    return TIER_ORDER[-1]
