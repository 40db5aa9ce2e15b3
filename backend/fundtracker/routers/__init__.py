# backend/fundtracker/routers/__init__.py
"""
API routers for the Fund Tracker.

Each router handles a specific domain:
- auth: Login and the current participant
- participants: Participant CRUD and monthly value overrides
- fund_returns: Fund-level daily dollar changes
- daily_returns: Participant-level daily percentage returns
- calendar: Trading calendar
- ledger: Month ledgers for a participant and the whole fund
- ownership: Ownership split and rebalancing
- fund_settings: Fund-wide settings
"""

from fundtracker.routers.auth import router as auth_router
from fundtracker.routers.calendar import router as calendar_router
from fundtracker.routers.daily_returns import router as daily_returns_router
from fundtracker.routers.fund_returns import router as fund_returns_router
from fundtracker.routers.fund_settings import router as fund_settings_router
from fundtracker.routers.ledger import router as ledger_router
from fundtracker.routers.ownership import router as ownership_router
from fundtracker.routers.participants import router as participants_router

__all__ = [
    "auth_router",
    "participants_router",
    "fund_returns_router",
    "daily_returns_router",
    "calendar_router",
    "ledger_router",
    "ownership_router",
    "fund_settings_router",
]
