# backend/auth/services.py

import re
import uuid

from flask_jwt_extended import create_access_token
from models.user_model import User
from models import db


def _unique_username(email):
    base = re.sub(r"[^a-z0-9]", "", email.split("@")[0].lower()) or "user"
    return f"{base}{uuid.uuid4().hex[:6]}"


def start_session(data):
    """
    Stub login: find the user by email or create one, then issue a token.
    No password or identity verification happens here.
    """

    user = User.query.filter_by(email=data.email).first()

    if not user:
        user = User(
            email=data.email,
            name=data.name or data.email.split("@")[0] or "Creator",
            username=_unique_username(data.email),
        )
        db.session.add(user)
        db.session.commit()

    token = create_access_token(identity=str(user.id))

    return {
        "user": user.to_dict(),
        "token": token,
    }


def load_user(identity):
    try:
        return db.session.get(User, int(identity))
    except (TypeError, ValueError):
        return None
