"""Partner loan-offer catalog used by local setups and demos."""

from __future__ import annotations

import json
import logging

import click
from flask import Flask

from models import db
from models.credit_models import LoanOffer

logger = logging.getLogger(__name__)

DEFAULT_LOAN_OFFERS = [
    {
        "partner_id": "partner-1",
        "partner_name": "CreatorBank",
        "partner_logo_url": "https://images.unsplash.com/photo-1560472354-b33ff0c44a43?w=100&h=100&fit=crop",
        "min_amount": 10000,
        "max_amount": 500000,
        "apr": 12,
        "term_months": 12,
        "requirements": [
            "Valid government ID",
            "Connected social accounts",
            "Active for 6+ months",
        ],
    },
    {
        "partner_id": "partner-2",
        "partner_name": "InfluencerFund",
        "partner_logo_url": "https://images.unsplash.com/photo-1611974789855-9c2a0a7236a3?w=100&h=100&fit=crop",
        "min_amount": 5000,
        "max_amount": 250000,
        "apr": 15,
        "term_months": 6,
        "requirements": [
            "Valid government ID",
            "Minimum 5,000 followers",
            "Bank account verification",
        ],
    },
]


def seed_loan_offers(offers=None, replace: bool = False) -> int:
    """
    Insert the catalog. Does nothing when offers already exist unless
    replace=True. Returns the number of offers inserted.
    Raises ValueError before touching the table if any offer has a
    non-positive term.
    """

    offers = DEFAULT_LOAN_OFFERS if offers is None else offers
    for raw in offers:
        if int(raw.get("term_months") or 0) <= 0:
            raise ValueError(f"loan offer {raw.get('partner_name')!r} needs a positive term_months")

    if LoanOffer.query.first() is not None:
        if not replace:
            return 0
        LoanOffer.query.delete()

    for raw in offers:
        fields = dict(raw)
        fields["requirements"] = json.dumps(fields.get("requirements") or [])
        db.session.add(LoanOffer(**fields))
    db.session.commit()

    logger.info("seeded %d loan offers", len(offers))
    return len(offers)


def register_cli(app: Flask) -> None:
    @app.cli.command("seed-offers")
    @click.option("--replace", is_flag=True, help="Drop the existing catalog first.")
    def seed_offers_command(replace):
        """Load the partner loan-offer catalog."""
        inserted = seed_loan_offers(replace=replace)
        click.echo(f"Inserted {inserted} loan offer(s)")
