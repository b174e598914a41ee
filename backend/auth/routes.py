# backend/auth/routes.py

from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user
from pydantic import ValidationError

from auth.schemas import SessionSchema
from auth.services import start_session
from responses import ok, validation_failed

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.route("/session", methods=["POST"])
def create_session():

    try:
        data = SessionSchema.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_failed(e)

    return ok(start_session(data))


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return ok(current_user.to_dict())
