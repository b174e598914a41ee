from __future__ import annotations

from typing import Iterable, List

from models.credit_models import CreditAssessment, LoanOffer

from .assessment import require_assessment
from .consent import require_consent
from .underwriting import max_allowed_amount, payment_summary


def customize_offer(offer: LoanOffer, assessment: CreditAssessment) -> dict:
    """
    Narrow a partner offer to what the user's tier allows. The tier's APR
    floor can raise the partner's rate but never lower it.
    """

    amount = max_allowed_amount(offer, assessment)
    apr = max(offer.apr, assessment.apr_min)
    term_months = offer.term_months

    return {
        "id": offer.id,
        "partnerId": offer.partner_id,
        "partnerName": offer.partner_name,
        "partnerLogoUrl": offer.partner_logo_url,
        "amount": amount,
        "apr": apr,
        "termMonths": term_months,
        **payment_summary(amount, apr, term_months),
        "requirements": offer.requirement_list,
    }


def customize_offers(assessment: CreditAssessment, offers: Iterable[LoanOffer]) -> List[dict]:
    return [customize_offer(o, assessment) for o in offers]


def list_offers_for_user(user_id: int) -> dict:
    # consent is checked before the assessment, even when both are missing
    require_consent(user_id)
    assessment = require_assessment(user_id)

    offers = LoanOffer.query.order_by(LoanOffer.created_at, LoanOffer.partner_name).all()
    return {
        "assessment": {"tier": assessment.tier, "score": assessment.score},
        "offers": customize_offers(assessment, offers),
    }
