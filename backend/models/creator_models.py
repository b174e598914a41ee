"""
Tables owned by the social / analysis / analytics features.

The credit engine only reads them; they are the raw inputs to scoring.
"""

from models import db


class SocialConnection(db.Model):
    __tablename__ = "social_connections"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)
    platform = db.Column(db.String(32), nullable=False)  # instagram | tiktok | youtube | ...
    handle = db.Column(db.String(120), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="connected")  # connected | disconnected | pending
    followers = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())


class AnalysisSummary(db.Model):
    __tablename__ = "analysis_summaries"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    # both on a 0-100 scale
    engagement_score = db.Column(db.Integer, nullable=False, default=0)
    consistency_score = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, server_default=db.func.now())


class AnalyticsEvent(db.Model):
    __tablename__ = "analytics_events"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)
    event_type = db.Column(db.String(20), nullable=False)  # click | conversion
    amount = db.Column(db.Numeric(12, 2), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())


class CreatorProduct(db.Model):
    __tablename__ = "creator_products"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)
    product_id = db.Column(db.String(64), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
