"""Tests for the composite score and the tier table."""

import pytest

from credit.scoring import CreditSignals, compute_score
from credit.tiers import LOAN_TERM_OPTIONS, TIER_CONFIG, TIER_ORDER, resolve_tier


def _by_name(factors):
    return {f.name: f for f in factors}


def _rank(tier):
    # D=0 ... A=3
    return len(TIER_ORDER) - 1 - TIER_ORDER.index(tier)


class TestComputeScore:

    def test_reference_creator(self) -> None:
        signals = CreditSignals(
            connection_count=3,
            total_followers=60000,
            engagement_score=80,
            consistency_score=85,
            conversions=12,
            products_in_shop=6,
        )
        total, factors = compute_score(signals)
        scores = {f.name: f.score for f in factors}

        assert scores == {
            "Platform Connections": 200,
            "Audience Size": 120,
            "Engagement Quality": 160,
            "Content Consistency": 170,
            "Affiliate Performance": 200,
        }
        assert total == 850
        assert resolve_tier(total) == "A"

    def test_factor_order_is_fixed(self) -> None:
        _, factors = compute_score(CreditSignals())
        assert [f.name for f in factors] == [
            "Platform Connections",
            "Audience Size",
            "Engagement Quality",
            "Content Consistency",
            "Affiliate Performance",
        ]

    def test_empty_signals_score_zero(self) -> None:
        total, factors = compute_score(CreditSignals())
        assert total == 0
        assert all(f.impact == "negative" for f in factors)
        assert all(f.max_score == 200 for f in factors)

    @pytest.mark.parametrize(
        "signals",
        [
            CreditSignals(connection_count=50, total_followers=10_000_000, engagement_score=100,
                          consistency_score=100, conversions=1000, products_in_shop=1000),
            CreditSignals(engagement_score=250, consistency_score=130),
            CreditSignals(engagement_score=-20, consistency_score=-1),
        ],
    )
    def test_factors_stay_within_bounds(self, signals) -> None:
        total, factors = compute_score(signals)
        for f in factors:
            assert 0 <= f.score <= 200
        assert 0 <= total <= 1000

    def test_engagement_above_100_is_clamped(self) -> None:
        _, factors = compute_score(CreditSignals(engagement_score=140, consistency_score=101))
        f = _by_name(factors)
        assert f["Engagement Quality"].score == 200
        assert f["Content Consistency"].score == 200

    def test_deterministic(self) -> None:
        signals = CreditSignals(connection_count=2, total_followers=12345, engagement_score=33,
                                consistency_score=44, conversions=3, products_in_shop=2)
        first = compute_score(signals)
        second = compute_score(signals)
        assert first[0] == second[0]
        assert [f.to_dict() for f in first[1]] == [f.to_dict() for f in second[1]]

    def test_audience_floors_division(self) -> None:
        _, factors = compute_score(CreditSignals(total_followers=999))
        assert _by_name(factors)["Audience Size"].score == 1

    def test_descriptions(self) -> None:
        _, factors = compute_score(CreditSignals(connection_count=3, total_followers=60000,
                                                 engagement_score=80, consistency_score=85,
                                                 conversions=12, products_in_shop=6))
        f = _by_name(factors)
        assert f["Platform Connections"].description == "3 verified platform(s) connected"
        assert f["Audience Size"].description == "60,000 total followers"
        assert f["Engagement Quality"].description == "80% engagement score"
        assert f["Content Consistency"].description == "85% consistency"
        assert f["Affiliate Performance"].description == "12 conversions, 6 products"

    def test_to_dict_uses_camel_case_max_score(self) -> None:
        _, factors = compute_score(CreditSignals(connection_count=1))
        d = factors[0].to_dict()
        assert d == {
            "name": "Platform Connections",
            "description": "1 verified platform(s) connected",
            "impact": "neutral",
            "score": 70,
            "maxScore": 200,
        }


class TestImpactLabels:

    @pytest.mark.parametrize("count,impact", [(0, "negative"), (1, "neutral"), (2, "positive")])
    def test_connections(self, count, impact) -> None:
        _, factors = compute_score(CreditSignals(connection_count=count))
        assert _by_name(factors)["Platform Connections"].impact == impact

    @pytest.mark.parametrize(
        "followers,impact",
        [(25_000, "negative"), (25_500, "neutral"), (50_000, "neutral"), (50_500, "positive")],
    )
    def test_audience(self, followers, impact) -> None:
        _, factors = compute_score(CreditSignals(total_followers=followers))
        assert _by_name(factors)["Audience Size"].impact == impact

    @pytest.mark.parametrize("value,impact", [(25, "negative"), (26, "neutral"), (50, "neutral"), (51, "positive")])
    def test_engagement_and_consistency(self, value, impact) -> None:
        _, factors = compute_score(CreditSignals(engagement_score=value, consistency_score=value))
        f = _by_name(factors)
        assert f["Engagement Quality"].impact == impact
        assert f["Content Consistency"].impact == impact

    @pytest.mark.parametrize(
        "conversions,products,impact",
        [(1, 1, "negative"), (1, 2, "neutral"), (5, 0, "neutral"), (5, 1, "positive")],
    )
    def test_performance(self, conversions, products, impact) -> None:
        _, factors = compute_score(CreditSignals(conversions=conversions, products_in_shop=products))
        assert _by_name(factors)["Affiliate Performance"].impact == impact


class TestTiers:

    @pytest.mark.parametrize(
        "score,tier",
        [(1000, "A"), (800, "A"), (799, "B"), (650, "B"), (649, "C"), (500, "C"), (499, "D"), (0, "D")],
    )
    def test_thresholds(self, score, tier) -> None:
        assert resolve_tier(score) == tier

    def test_negative_score_falls_back_to_d(self) -> None:
        assert resolve_tier(-5) == "D"

    def test_monotonic(self) -> None:
        ranks = [_rank(resolve_tier(s)) for s in range(0, 1001)]
        assert ranks == sorted(ranks)

    def test_table(self) -> None:
        assert {t: (c.min_score, c.max_loan_amount, c.apr_min, c.apr_max) for t, c in TIER_CONFIG.items()} == {
            "A": (800, 500_000, 8, 12),
            "B": (650, 250_000, 12, 18),
            "C": (500, 100_000, 18, 24),
            "D": (0, 50_000, 24, 36),
        }
        assert LOAN_TERM_OPTIONS == [3, 6, 12, 24]
