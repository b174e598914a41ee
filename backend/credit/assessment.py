from __future__ import annotations

import json
import logging
from typing import Optional

from models import db
from models.credit_models import CreditAssessment, utcnow

from .consent import require_consent
from .errors import ScoreRequired
from .scoring import compute_score
from .signals import gather_signals
from .tiers import LOAN_TERM_OPTIONS, TIER_CONFIG, resolve_tier

logger = logging.getLogger(__name__)


def calculate_assessment(user_id: int) -> CreditAssessment:
    """
    Score the user and store the result, replacing any previous assessment.

    Concurrent recalculations for the same user are last-write-wins.
    """

    require_consent(user_id)

    signals = gather_signals(user_id)
    total, factors = compute_score(signals)
    tier = resolve_tier(total)
    config = TIER_CONFIG[tier]

    assessment = CreditAssessment.query.filter_by(user_id=user_id).first()
    if assessment is None:
        assessment = CreditAssessment(user_id=user_id)
        db.session.add(assessment)

    assessment.tier = tier
    assessment.score = total
    assessment.max_loan_amount = config.max_loan_amount
    assessment.apr_min = config.apr_min
    assessment.apr_max = config.apr_max
    assessment.term_options = json.dumps(LOAN_TERM_OPTIONS)
    assessment.factors = json.dumps([f.to_dict() for f in factors])
    assessment.calculated_at = utcnow()

    db.session.commit()
    logger.info("credit score for user %s: %s (tier %s)", user_id, total, tier)
    return assessment


def get_assessment(user_id: int) -> Optional[CreditAssessment]:
    return CreditAssessment.query.filter_by(user_id=user_id).first()


def require_assessment(user_id: int, message: str | None = None) -> CreditAssessment:
    assessment = get_assessment(user_id)
    if assessment is None:
        raise ScoreRequired(message)
    return assessment
