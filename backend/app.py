import logging
from datetime import timedelta

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

from models import db
from auth.routes import auth_bp
from auth.services import load_user
from credit.routes import credit_bp
from credit.seed import register_cli, seed_loan_offers
from config import Config
from logging_setup import configure_logging
from responses import fail

# imported for their tables
from models import user_model, creator_models, credit_models  # noqa: F401

logger = logging.getLogger(__name__)


def _register_jwt_handlers(jwt):

    @jwt.user_lookup_loader
    def _user_lookup(_jwt_header, jwt_data):
        return load_user(jwt_data["sub"])

    @jwt.user_lookup_error_loader
    def _user_missing(_jwt_header, _jwt_data):
        return fail("UNAUTHORIZED", "Not authenticated", 401)

    @jwt.unauthorized_loader
    def _no_token(reason):
        return fail("UNAUTHORIZED", "Not authenticated", 401)

    @jwt.invalid_token_loader
    def _bad_token(reason):
        return fail("UNAUTHORIZED", "Invalid session", 401)

    @jwt.expired_token_loader
    def _expired(_jwt_header, _jwt_data):
        return fail("UNAUTHORIZED", "Session expired", 401)


def _register_error_handlers(app):

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return fail(e.name.upper().replace(" ", "_"), e.description, e.code)

    @app.errorhandler(Exception)
    def _unhandled(e):
        logger.exception("unhandled error")
        db.session.rollback()
        return fail("INTERNAL_ERROR", "Internal server error", 500)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(hours=app.config["JWT_ACCESS_TOKEN_HOURS"])

    configure_logging(app.config["LOG_LEVEL"])

    CORS(app, origins=app.config["CORS_ORIGINS"])

    db.init_app(app)
    with app.app_context():
        db.create_all()
        if app.config.get("SEED_LOAN_OFFERS"):
            seed_loan_offers()

    jwt = JWTManager(app)
    _register_jwt_handlers(jwt)
    _register_error_handlers(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(credit_bp)

    register_cli(app)

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
