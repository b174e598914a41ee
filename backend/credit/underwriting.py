from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional

from models import db
from models.credit_models import (
    CreditAssessment,
    LoanApplication,
    LoanOffer,
    to_iso,
    utcnow,
)

from .assessment import require_assessment
from .errors import OfferNotFound

logger = logging.getLogger(__name__)

REJECTION_REASON = "Amount exceeds eligible limit or KYC incomplete"

# Installments are spaced by fixed 30 day steps, not calendar months.
INSTALLMENT_INTERVAL_DAYS = 30


class LoanStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    # reserved; nothing moves an application into these yet
    ACTIVE = "active"
    COMPLETED = "completed"


class RepaymentStatus(str, Enum):
    UPCOMING = "upcoming"
    PAID = "paid"
    OVERDUE = "overdue"


def round_money(value: float) -> float:
    """Round half-up to cents."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Fixed amortized monthly payment (unrounded). annual_rate is a percentage."""

    P = float(principal)
    r = float(annual_rate) / 100 / 12
    n = int(term_months)

    if r == 0:
        return P / n

    growth = (1 + r) ** n
    return P * r * growth / (growth - 1)


def payment_summary(principal: float, annual_rate: float, term_months: int) -> dict:
    """Display figures: rounded monthly payment and the total of all installments."""
    monthly = round_money(monthly_payment(principal, annual_rate, term_months))
    return {
        "monthlyPayment": monthly,
        "totalRepayment": round_money(monthly * term_months),
    }


def max_allowed_amount(offer: LoanOffer, assessment: CreditAssessment) -> float:
    return min(offer.max_amount, assessment.max_loan_amount)


@dataclass
class Decision:
    approved: bool
    max_allowed: float
    rejected_reason: Optional[str] = None

    @property
    def status(self) -> LoanStatus:
        return LoanStatus.APPROVED if self.approved else LoanStatus.REJECTED


def decide(amount: float, kyc_completed: bool, offer: LoanOffer, assessment: CreditAssessment) -> Decision:
    """
    Approve iff the amount fits under both the partner's and the tier's
    ceiling and KYC is done. Both failure causes share one reason string.
    """

    limit = max_allowed_amount(offer, assessment)
    if amount <= limit and kyc_completed is True:
        return Decision(approved=True, max_allowed=limit)
    return Decision(approved=False, max_allowed=limit, rejected_reason=REJECTION_REASON)


def build_repayment_schedule(
    principal: float, annual_rate: float, term_months: int, start: datetime
) -> List[dict]:
    installment = round_money(monthly_payment(principal, annual_rate, term_months))
    return [
        {
            "dueDate": to_iso(start + timedelta(days=INSTALLMENT_INTERVAL_DAYS * (i + 1))),
            "amount": installment,
            "status": RepaymentStatus.UPCOMING.value,
        }
        for i in range(term_months)
    ]


def submit_application(user_id: int, data) -> LoanApplication:
    """
    Decide and record a loan application in one step.

    `data` is a validated LoanApplicationSchema.
    Raises OfferNotFound before ScoreRequired.
    """

    offer = db.session.get(LoanOffer, data.offer_id)
    if offer is None:
        raise OfferNotFound()

    assessment = require_assessment(user_id, "Credit assessment required")

    decision = decide(data.amount, data.kyc_completed, offer, assessment)
    now = utcnow()

    schedule = None
    if decision.approved:
        # installments use the partner's stated rate
        schedule = build_repayment_schedule(data.amount, offer.apr, offer.term_months, now)

    application = LoanApplication(
        user_id=user_id,
        offer_id=offer.id,
        amount=data.amount,
        purpose=data.purpose,
        legal_name=data.legal_name,
        email=data.email,
        phone=data.phone,
        country=data.country,
        payout_account=data.payout_account,
        kyc_completed=data.kyc_completed,
        status=decision.status.value,
        approved_at=now if decision.approved else None,
        rejected_reason=decision.rejected_reason,
        repayment_schedule=json.dumps(schedule) if schedule is not None else None,
        created_at=now,
    )
    db.session.add(application)
    db.session.commit()

    logger.info(
        "loan application %s for user %s on offer %s: %s",
        application.id, user_id, offer.id, application.status,
    )
    return application


def list_applications(user_id: int) -> List[LoanApplication]:
    return (
        LoanApplication.query.filter_by(user_id=user_id)
        .order_by(LoanApplication.created_at.desc())
        .all()
    )
