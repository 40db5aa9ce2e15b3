#!/usr/bin/env python3
# backend/scripts/seed_sample_data.py
"""
Seed a demo fund: three participants, November 2025 as the current period,
the default trading calendar and a handful of fund returns.

Safe to re-run: existing participants and returns are left alone.
"""
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Setup path to import fundtracker modules
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from fundtracker.database import SessionLocal
from fundtracker.services import (
    FundSettingsService,
    ParticipantService,
    ReturnsService,
    SqlAlchemyFundStorage,
    TradingCalendarService,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PARTICIPANTS = [
    {"username": "alice", "first_name": "Alice", "last_name": "Walker", "beginning_value": Decimal("50000")},
    {"username": "bob", "first_name": "Bob", "last_name": "Chen", "beginning_value": Decimal("30000")},
    {"username": "carol", "first_name": "Carol", "last_name": "Diaz", "beginning_value": Decimal("20000")},
]

# (date, dollar change) against a 100,000 fund
FUND_RETURNS = [
    (date(2025, 11, 3), Decimal("1200")),
    (date(2025, 11, 4), Decimal("-450")),
    (date(2025, 11, 5), Decimal("800")),
    (date(2025, 11, 6), Decimal("300")),
]

TOTAL_FUND_VALUE = Decimal("100000")
DEMO_PASSWORD = "demo-password"


def seed():
    db = SessionLocal()
    storage = SqlAlchemyFundStorage(db)
    participants = ParticipantService()
    returns = ReturnsService()
    try:
        logger.info("Starting database seeding...")

        FundSettingsService().update_settings(
            storage,
            total_fund_value=TOTAL_FUND_VALUE,
            current_year=2025,
            current_month=11,
        )
        logger.info("Fund settings: 2025-11, total 100,000")

        inserted = TradingCalendarService().seed_defaults(storage)
        logger.info(f"Trading days inserted: {inserted}")

        for data in PARTICIPANTS:
            if storage.get_participant_by_username(data["username"]) is not None:
                logger.info(f"Participant exists: {data['username']}")
                continue

            participant = participants.create_participant(
                storage,
                username=data["username"],
                password=DEMO_PASSWORD,
                first_name=data["first_name"],
                last_name=data["last_name"],
            )
            # Rebalances ownership to beginning_value / total
            participants.update_participant(storage, participant.id, beginning_value=data["beginning_value"])
            logger.info(f"Created participant: {participant.username}")

        for day, dollar_change in FUND_RETURNS:
            if storage.get_fund_return_by_date(day) is not None:
                continue
            returns.add_fund_return(storage, day, dollar_change, TOTAL_FUND_VALUE)
            logger.info(f"Fund return {day.isoformat()}: {dollar_change}")

        logger.info("Seeding complete")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
