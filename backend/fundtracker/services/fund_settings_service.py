# backend/fundtracker/services/fund_settings_service.py
"""
Fund Settings Service for the single fund-wide settings row.

Stores the total fund value (used to derive beginning values from ownership)
and the current period (the month participant profiles describe).

When no row exists yet, reads return defaults: unknown total fund value and
today's month as the current period. The first update creates the row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from fundtracker.services.exceptions import ValidationError
from fundtracker.services.constants import ZERO
from fundtracker.services.periods import current_period, validate_period
from fundtracker.services.protocols import FundStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FundSettingsView:
    """Fund settings as seen by callers, whether or not a row is stored."""

    total_fund_value: Decimal | None
    current_year: int
    current_month: int
    updated_at: datetime | None = None
    is_default: bool = False


class FundSettingsService:
    """Read and update fund-wide settings."""

    def get_settings(self, storage: FundStorage, today: date | None = None) -> FundSettingsView:
        stored = storage.get_fund_settings()
        if stored is None:
            year, month = current_period(storage, today=today)
            return FundSettingsView(
                total_fund_value=None,
                current_year=year,
                current_month=month,
                is_default=True,
            )

        return FundSettingsView(
            total_fund_value=stored.total_fund_value,
            current_year=stored.current_year,
            current_month=stored.current_month,
            updated_at=stored.updated_at,
        )

    def update_settings(
            self,
            storage: FundStorage,
            total_fund_value: Decimal | None = None,
            current_year: int | None = None,
            current_month: int | None = None,
    ) -> FundSettingsView:
        """
        Update any subset of the settings; omitted fields keep their value.

        Raises:
            ValidationError: If the total fund value is negative
            InvalidPeriodError: If the resulting period is not a real month
        """
        existing = self.get_settings(storage)

        total = existing.total_fund_value if total_fund_value is None else total_fund_value
        year = existing.current_year if current_year is None else current_year
        month = existing.current_month if current_month is None else current_month

        if total is not None and total < ZERO:
            raise ValidationError("Total fund value cannot be negative", field="total_fund_value")
        validate_period(year, month)

        storage.save_fund_settings(total_fund_value=total, current_year=year, current_month=month)
        storage.commit()

        logger.info(f"Fund settings updated: total={total}, current period={year}-{month:02d}")
        return self.get_settings(storage)
