# backend/fundtracker/services/valuation/__init__.py
"""
Valuation package: the allocation engine and the ledger service on top of it.

Usage:
    from fundtracker.services.valuation import LedgerService

    service = LedgerService()
    ledger = service.participant_ledger(storage, participant_id=2, year=2025, month=11)
    summary = service.fund_summary(storage, year=2025, month=11)

Architecture:
    valuation/
    ├── __init__.py      # This file - package exports
    ├── types.py         # Frozen value objects
    ├── engine.py        # Pure allocation / compounding logic
    ├── basis.py         # Period basis resolution
    └── service.py       # LedgerService (orchestrator)
"""

from fundtracker.services.valuation.basis import resolve_period_basis
from fundtracker.services.valuation.engine import (
    LedgerCalculator,
    calculate_account_value,
    compound_percentages,
    derive_fund_percentage,
    resolve_returns,
)
from fundtracker.services.valuation.service import LedgerService
from fundtracker.services.valuation.types import (
    AccountSummary,
    AccountValue,
    FundDollarReturn,
    FundSummary,
    LedgerRow,
    MonthLedger,
    ParticipantLedger,
    PercentageReturn,
    PeriodBasis,
    ResolvedReturn,
    TradingDay,
)

__all__ = [
    # Main service
    "LedgerService",
    "resolve_period_basis",

    # Engine
    "LedgerCalculator",
    "calculate_account_value",
    "compound_percentages",
    "derive_fund_percentage",
    "resolve_returns",

    # Data types
    "AccountSummary",
    "AccountValue",
    "FundDollarReturn",
    "FundSummary",
    "LedgerRow",
    "MonthLedger",
    "ParticipantLedger",
    "PercentageReturn",
    "PeriodBasis",
    "ResolvedReturn",
    "TradingDay",
]
