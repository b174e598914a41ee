"""Pytest configuration and fixtures."""

import pytest

from app import create_app
from config import TestConfig
from credit.seed import seed_loan_offers
from models import db
from models.creator_models import (
    AnalysisSummary,
    AnalyticsEvent,
    CreatorProduct,
    SocialConnection,
)
from models.credit_models import LoanOffer


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session_data(client):
    """Logs in a fresh creator and returns the /auth/session payload."""
    resp = client.post("/auth/session", json={"email": "creator@creatr.app", "name": "Modern Mulan"})
    assert resp.status_code == 200
    return resp.get_json()["data"]


@pytest.fixture
def user_id(session_data) -> int:
    return session_data["user"]["id"]


@pytest.fixture
def auth_headers(session_data) -> dict:
    return {"Authorization": f"Bearer {session_data['token']}"}


@pytest.fixture
def offers(app):
    """The default partner catalog (CreatorBank 500k/12%/12m, InfluencerFund 250k/15%/6m)."""
    seed_loan_offers()
    return {o.partner_name: o for o in LoanOffer.query.all()}


@pytest.fixture
def make_signals(app):
    """Factory writing collaborator rows that feed the credit score."""

    def _make(
        user_id,
        followers=(),
        engagement=None,
        consistency=None,
        conversions=0,
        products=0,
        disconnected_followers=(),
    ):
        for i, count in enumerate(followers):
            db.session.add(SocialConnection(
                user_id=user_id, platform=f"platform-{i}", status="connected", followers=count,
            ))
        for i, count in enumerate(disconnected_followers):
            db.session.add(SocialConnection(
                user_id=user_id, platform=f"old-{i}", status="disconnected", followers=count,
            ))
        if engagement is not None or consistency is not None:
            db.session.add(AnalysisSummary(
                user_id=user_id,
                engagement_score=engagement or 0,
                consistency_score=consistency or 0,
            ))
        for _ in range(conversions):
            db.session.add(AnalyticsEvent(user_id=user_id, event_type="conversion", amount=250))
        # clicks never count towards the score
        db.session.add(AnalyticsEvent(user_id=user_id, event_type="click"))
        for i in range(products):
            db.session.add(CreatorProduct(user_id=user_id, product_id=f"prod-{i}"))
        db.session.commit()

    return _make


@pytest.fixture
def strong_creator(user_id, make_signals):
    """Signals worth 850 points (tier A)."""
    make_signals(
        user_id,
        followers=(30000, 20000, 10000),
        engagement=80,
        consistency=85,
        conversions=12,
        products=6,
    )
    return user_id
