from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import List, Tuple

FACTOR_MAX_SCORE = 200


@dataclass(frozen=True)
class CreditSignals:
    """Raw inputs gathered from the social, analysis and analytics features."""

    connection_count: int = 0
    total_followers: int = 0
    engagement_score: int = 0  # 0-100
    consistency_score: int = 0  # 0-100
    conversions: int = 0
    products_in_shop: int = 0


@dataclass
class CreditFactor:
    name: str
    description: str
    impact: str  # positive | neutral | negative
    score: int
    max_score: int = FACTOR_MAX_SCORE

    def to_dict(self) -> dict:
        d = asdict(self)
        d["maxScore"] = d.pop("max_score")
        return d


def _cap(value: float) -> int:
    return int(max(0, min(value, FACTOR_MAX_SCORE)))


def _impact(score: int, neutral_above: int) -> str:
    if score > 100:
        return "positive"
    if score > neutral_above:
        return "neutral"
    return "negative"


def _connections_factor(s: CreditSignals) -> CreditFactor:
    score = _cap(s.connection_count * 70)
    if score > 100:
        impact = "positive"
    elif s.connection_count > 0:
        impact = "neutral"
    else:
        impact = "negative"
    return CreditFactor(
        name="Platform Connections",
        description=f"{s.connection_count} verified platform(s) connected",
        impact=impact,
        score=score,
    )


def _audience_factor(s: CreditSignals) -> CreditFactor:
    score = _cap(s.total_followers // 500)
    return CreditFactor(
        name="Audience Size",
        description=f"{s.total_followers:,} total followers",
        impact=_impact(score, 50),
        score=score,
    )


def _engagement_factor(s: CreditSignals) -> CreditFactor:
    # upstream promises 0-100 but is not trusted, hence the cap
    score = _cap(s.engagement_score * 2)
    return CreditFactor(
        name="Engagement Quality",
        description=f"{s.engagement_score}% engagement score",
        impact=_impact(score, 50),
        score=score,
    )


def _consistency_factor(s: CreditSignals) -> CreditFactor:
    score = _cap(s.consistency_score * 2)
    return CreditFactor(
        name="Content Consistency",
        description=f"{s.consistency_score}% consistency",
        impact=_impact(score, 50),
        score=score,
    )


def _performance_factor(s: CreditSignals) -> CreditFactor:
    score = _cap(s.conversions * 20 + s.products_in_shop * 10)
    return CreditFactor(
        name="Affiliate Performance",
        description=f"{s.conversions} conversions, {s.products_in_shop} products",
        impact=_impact(score, 30),
        score=score,
    )


FACTOR_BUILDERS = (
    _connections_factor,
    _audience_factor,
    _engagement_factor,
    _consistency_factor,
    _performance_factor,
)


def compute_score(signals: CreditSignals) -> Tuple[int, List[CreditFactor]]:
    """
    Composite creditworthiness score.

    Five sub-scores, each clamped to [0, 200], summed into a total in
    [0, 1000]. The factor list always comes back in the same order so the
    breakdown can be rendered as-is.
    """
    factors = [build(signals) for build in FACTOR_BUILDERS]
    total = sum(f.score for f in factors)
    return total, factors
