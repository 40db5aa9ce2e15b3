#!/usr/bin/env python3
# backend/init_db.py
"""
Database initialization script.

Creates all tables, the admin account (when ADMIN_PASSWORD is set and the
username is free) and the default trading calendar (when the calendar is empty).

This script can be run from any directory:
    python backend/init_db.py
    cd backend && python init_db.py
"""
import sys
from pathlib import Path

# Add the backend directory to Python path so 'fundtracker' package is importable
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

from fundtracker.config import settings
from fundtracker.database import engine, SessionLocal
from fundtracker.models import Base
from fundtracker.services.auth import AuthService
from fundtracker.services.storage import SqlAlchemyFundStorage
from fundtracker.services.trading_calendar import TradingCalendarService


def init_db() -> None:
    """Create all database tables defined in models, then the admin and calendar."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")

    db = SessionLocal()
    try:
        storage = SqlAlchemyFundStorage(db)

        if settings.admin_password is None:
            print("ADMIN_PASSWORD not set, skipping admin account")
        elif storage.get_participant_by_username(settings.admin_username) is not None:
            print(f"Admin '{settings.admin_username}' already exists")
        else:
            AuthService().create_admin(storage, settings.admin_username, settings.admin_password)
            print(f"Admin '{settings.admin_username}' created")

        calendar = TradingCalendarService()
        if calendar.calendar_status(storage).is_initialized:
            print("Trading calendar already seeded")
        else:
            inserted = calendar.seed_defaults(storage)
            print(f"Seeded {inserted} default trading days")
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
