from __future__ import annotations

from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user
from pydantic import ValidationError

from models.credit_models import to_iso
from responses import ok, fail, validation_failed

from .assessment import calculate_assessment
from .consent import get_or_create_consent, set_consent
from .errors import CreditError
from .offers import list_offers_for_user
from .schemas import LoanApplicationSchema, UpdateConsentSchema
from .signals import count_tip_inputs
from .tips import improvement_tips
from .underwriting import list_applications, submit_application


credit_bp = Blueprint("credit", __name__, url_prefix="/credit")


@credit_bp.errorhandler(CreditError)
def _credit_error(e: CreditError):
    return fail(e.code, e.message, e.status)


@credit_bp.route("/consent", methods=["GET"])
@jwt_required()
def get_consent():
    consent = get_or_create_consent(current_user.id)
    return ok(consent.to_dict())


@credit_bp.route("/consent", methods=["POST"])
@jwt_required()
def update_consent():
    try:
        data = UpdateConsentSchema.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_failed(e)

    set_consent(current_user.id, data.consent)
    return ok()


@credit_bp.route("/score", methods=["POST"])
@jwt_required()
def calculate_score():
    assessment = calculate_assessment(current_user.id)
    return ok(assessment.to_dict())


@credit_bp.route("/loans/offers", methods=["GET"])
@jwt_required()
def loan_offers():
    return ok(list_offers_for_user(current_user.id))


@credit_bp.route("/loans/apply", methods=["POST"])
@jwt_required()
def apply_for_loan():
    """
    Submit an application against one catalog offer. The decision is made
    immediately; the response carries the outcome but not the schedule
    (see /loans/status for that).
    """
    try:
        data = LoanApplicationSchema.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_failed(e)

    application = submit_application(current_user.id, data)
    return ok({
        "id": application.id,
        "status": application.status,
        "approvedAt": to_iso(application.approved_at),
        "rejectedReason": application.rejected_reason,
    })


@credit_bp.route("/loans/status", methods=["GET"])
@jwt_required()
def loan_status():
    return ok([a.to_dict() for a in list_applications(current_user.id)])


@credit_bp.route("/tips", methods=["GET"])
@jwt_required()
def tips():
    connections, products, conversions = count_tip_inputs(current_user.id)
    return ok(improvement_tips(connections, products, conversions))
