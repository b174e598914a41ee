import json
import uuid
from datetime import datetime, timezone

from models import db


def _uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_iso(value) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"


class CreditConsent(db.Model):
    """
    Whether a user allows their performance data to be used for scoring.
    Exactly one row per user, created lazily on first read.
    """

    __tablename__ = "credit_consents"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    has_consented = db.Column(db.Boolean, nullable=False, default=False)
    consented_at = db.Column(db.DateTime, nullable=True)
    revoked_at = db.Column(db.DateTime, nullable=True)
    data_explanation = db.Column(db.Text, nullable=True)  # JSON list
    not_used = db.Column(db.Text, nullable=True)  # JSON list

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "hasConsented": self.has_consented,
            "consentedAt": to_iso(self.consented_at),
            "revokedAt": to_iso(self.revoked_at),
            "dataExplanation": json.loads(self.data_explanation or "[]"),
            "notUsed": json.loads(self.not_used or "[]"),
        }


class CreditAssessment(db.Model):
    """Latest computed score for a user (recalculation overwrites)."""

    __tablename__ = "credit_assessments"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    tier = db.Column(db.String(1), nullable=False)  # A | B | C | D
    score = db.Column(db.Integer, nullable=False)
    max_loan_amount = db.Column(db.Float, nullable=False)
    apr_min = db.Column(db.Float, nullable=False)
    apr_max = db.Column(db.Float, nullable=False)
    term_options = db.Column(db.Text, nullable=False)  # JSON list of months
    factors = db.Column(db.Text, nullable=False)  # JSON list of factor dicts
    calculated_at = db.Column(db.DateTime, nullable=False)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "tier": self.tier,
            "score": self.score,
            "maxLoanAmount": self.max_loan_amount,
            "aprRange": {"min": self.apr_min, "max": self.apr_max},
            "termOptions": json.loads(self.term_options or "[]"),
            "factors": json.loads(self.factors or "[]"),
            "calculatedAt": to_iso(self.calculated_at),
        }


class LoanOffer(db.Model):
    """Partner-supplied base offer. Not user specific."""

    __tablename__ = "loan_offers"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    partner_id = db.Column(db.String(64), nullable=True)
    partner_name = db.Column(db.String(120), nullable=False)
    partner_logo_url = db.Column(db.String(500), nullable=False, default="")
    min_amount = db.Column(db.Float, nullable=False, default=0)
    max_amount = db.Column(db.Float, nullable=False)
    apr = db.Column(db.Float, nullable=False)
    term_months = db.Column(db.Integer, nullable=False)
    requirements = db.Column(db.Text, nullable=True)  # JSON list
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    __table_args__ = (
        db.CheckConstraint("term_months > 0", name="ck_loan_offer_term_positive"),
    )

    @property
    def requirement_list(self) -> list:
        return json.loads(self.requirements or "[]")


class LoanApplication(db.Model):
    """
    A submitted application. Decided (approved / rejected) at submission
    time and not modified afterwards.
    """

    __tablename__ = "loan_applications"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)
    offer_id = db.Column(db.String(36), db.ForeignKey("loan_offers.id"), nullable=False)

    amount = db.Column(db.Float, nullable=False)
    purpose = db.Column(db.String(500), nullable=False)

    # Applicant details
    legal_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(150), nullable=False)
    phone = db.Column(db.String(40), nullable=False)
    country = db.Column(db.String(80), nullable=False)
    payout_account = db.Column(db.String(120), nullable=True)
    kyc_completed = db.Column(db.Boolean, nullable=False, default=False)

    # Decision
    status = db.Column(db.String(20), nullable=False)  # see credit.underwriting.LoanStatus
    approved_at = db.Column(db.DateTime, nullable=True)
    rejected_reason = db.Column(db.String(255), nullable=True)
    repayment_schedule = db.Column(db.Text, nullable=True)  # JSON list, NULL when rejected

    created_at = db.Column(db.DateTime, nullable=False)

    offer = db.relationship("LoanOffer", lazy="joined")

    def schedule(self) -> list | None:
        if self.repayment_schedule is None:
            return None
        return json.loads(self.repayment_schedule)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "offer": {
                "partnerName": self.offer.partner_name,
                "partnerLogoUrl": self.offer.partner_logo_url,
            },
            "amount": self.amount,
            "purpose": self.purpose,
            "status": self.status,
            "createdAt": to_iso(self.created_at),
            "approvedAt": to_iso(self.approved_at),
            "rejectedReason": self.rejected_reason,
            "repaymentSchedule": self.schedule(),
        }
