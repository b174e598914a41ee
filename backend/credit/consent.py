from __future__ import annotations

import json
import logging

from models import db
from models.credit_models import CreditConsent, utcnow

from .errors import ConsentRequired

logger = logging.getLogger(__name__)

DATA_EXPLANATION = [
    "Connected social account metrics (followers, engagement)",
    "Content analysis results (categories, consistency)",
    "Affiliate performance (conversions, earnings history)",
    "Account age and verification status",
]

NOT_USED = [
    "Your personal messages or DMs",
    "Your browsing history",
    "Your location data",
    "Any data from non-connected platforms",
]


def _new_consent(user_id: int) -> CreditConsent:
    return CreditConsent(
        user_id=user_id,
        has_consented=False,
        data_explanation=json.dumps(DATA_EXPLANATION),
        not_used=json.dumps(NOT_USED),
    )


def get_or_create_consent(user_id: int) -> CreditConsent:
    """Return the user's consent row, creating an ungranted one if missing."""

    consent = CreditConsent.query.filter_by(user_id=user_id).first()
    if consent is None:
        consent = _new_consent(user_id)
        db.session.add(consent)
        db.session.commit()
    return consent


def set_consent(user_id: int, granted: bool) -> CreditConsent:
    """
    Grant or revoke. Granting stamps consented_at and clears revoked_at;
    revoking stamps revoked_at and keeps the earlier consented_at.
    Existing assessments and applications are left alone either way.
    """

    consent = CreditConsent.query.filter_by(user_id=user_id).first()
    if consent is None:
        consent = _new_consent(user_id)
        db.session.add(consent)

    now = utcnow()
    consent.has_consented = granted
    if granted:
        consent.consented_at = now
        consent.revoked_at = None
    else:
        consent.revoked_at = now

    db.session.commit()
    logger.info("credit consent %s for user %s", "granted" if granted else "revoked", user_id)
    return consent


def has_consent(user_id: int) -> bool:
    consent = CreditConsent.query.filter_by(user_id=user_id).first()
    return consent is not None and consent.has_consented is True


def require_consent(user_id: int) -> None:
    if not has_consent(user_id):
        raise ConsentRequired()
