from __future__ import annotations

from typing import Tuple

from models import db
from models.creator_models import (
    AnalysisSummary,
    AnalyticsEvent,
    CreatorProduct,
    SocialConnection,
)

from .scoring import CreditSignals


def _connection_stats(user_id: int) -> Tuple[int, int]:
    count, followers = (
        db.session.query(
            db.func.count(SocialConnection.id),
            db.func.coalesce(db.func.sum(SocialConnection.followers), 0),
        )
        .filter(SocialConnection.user_id == user_id, SocialConnection.status == "connected")
        .one()
    )
    return int(count), int(followers)


def _conversion_count(user_id: int) -> int:
    return AnalyticsEvent.query.filter_by(user_id=user_id, event_type="conversion").count()


def _product_count(user_id: int) -> int:
    return CreatorProduct.query.filter_by(user_id=user_id).count()


def gather_signals(user_id: int) -> CreditSignals:
    """
    Collect the raw scoring inputs for one user.

    Read-only. Consent is NOT checked here; callers go through the consent
    gate first. Missing analysis means engagement/consistency of 0.
    """

    connections, followers = _connection_stats(user_id)
    summary = AnalysisSummary.query.filter_by(user_id=user_id).first()

    return CreditSignals(
        connection_count=connections,
        total_followers=followers,
        engagement_score=(summary.engagement_score or 0) if summary else 0,
        consistency_score=(summary.consistency_score or 0) if summary else 0,
        conversions=_conversion_count(user_id),
        products_in_shop=_product_count(user_id),
    )


def count_tip_inputs(user_id: int) -> Tuple[int, int, int]:
    """(connected platforms, products in shop, conversions) for improvement tips."""
    connections, _ = _connection_stats(user_id)
    return connections, _product_count(user_id), _conversion_count(user_id)
