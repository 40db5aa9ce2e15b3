# backend/fundtracker/services/returns_service.py
"""
Returns Service - fund-level and participant-level daily entries.

Fund returns are dollar changes measured against the fund total, one per
date. Participant daily returns are percentages, one per participant and
date; adding a second one for the same date replaces the first.

Entries on dates outside the trading calendar are accepted: the ledger
shows them but leaves them out of compounding.
"""

import logging
from datetime import date
from decimal import Decimal

from fundtracker.models import DailyReturn, FundReturn
from fundtracker.services.constants import ZERO
from fundtracker.services.exceptions import (
    DailyReturnNotFoundError,
    DuplicateReturnError,
    FundReturnNotFoundError,
    ParticipantNotFoundError,
    ValidationError,
)
from fundtracker.services.periods import validate_period
from fundtracker.services.protocols import FundStorage
from fundtracker.utils.date_utils import month_bounds

logger = logging.getLogger(__name__)

# A day can lose at most everything
MIN_DAILY_PERCENTAGE = Decimal("-100")


def _check_total(total_fund_value: Decimal) -> None:
    if total_fund_value < ZERO:
        raise ValidationError("Total fund value cannot be negative", field="total_fund_value")


def _check_percentage(percentage: Decimal) -> None:
    if percentage < MIN_DAILY_PERCENTAGE:
        raise ValidationError("A daily return cannot be below -100%", field="percentage")


class ReturnsService:
    """Create, read, update and delete daily return entries."""

    # =========================================================================
    # FUND RETURNS
    # =========================================================================

    def list_fund_returns(self, storage: FundStorage, year: int, month: int) -> list[FundReturn]:
        validate_period(year, month)
        start, end = month_bounds(year, month)
        return storage.list_fund_returns(start, end)

    def add_fund_return(
            self,
            storage: FundStorage,
            day: date,
            dollar_change: Decimal,
            total_fund_value: Decimal,
    ) -> FundReturn:
        """
        Record the fund's dollar change for a date.

        Raises:
            ValidationError: If the total fund value is negative
            DuplicateReturnError: If the date already has a fund return
        """
        _check_total(total_fund_value)
        if storage.get_fund_return_by_date(day) is not None:
            raise DuplicateReturnError(day)

        fund_return = storage.add_fund_return(day, dollar_change, total_fund_value)
        storage.commit()
        logger.info(f"Fund return recorded for {day.isoformat()}: {dollar_change} of {total_fund_value}")
        return fund_return

    def update_fund_return(
            self,
            storage: FundStorage,
            return_id: int,
            dollar_change: Decimal | None = None,
            total_fund_value: Decimal | None = None,
    ) -> FundReturn:
        """
        Raises:
            FundReturnNotFoundError: If the entry doesn't exist
            ValidationError: If the total fund value is negative
        """
        fund_return = storage.get_fund_return(return_id)
        if fund_return is None:
            raise FundReturnNotFoundError(return_id)

        fields = {}
        if dollar_change is not None:
            fields["dollar_change"] = dollar_change
        if total_fund_value is not None:
            _check_total(total_fund_value)
            fields["total_fund_value"] = total_fund_value

        storage.update_fund_return(fund_return, **fields)
        storage.commit()
        return fund_return

    def delete_fund_return(self, storage: FundStorage, return_id: int) -> None:
        """
        Raises:
            FundReturnNotFoundError: If the entry doesn't exist
        """
        fund_return = storage.get_fund_return(return_id)
        if fund_return is None:
            raise FundReturnNotFoundError(return_id)

        storage.delete_fund_return(fund_return)
        storage.commit()
        logger.info(f"Fund return {return_id} deleted")

    # =========================================================================
    # PARTICIPANT DAILY RETURNS
    # =========================================================================

    def list_daily_returns(
            self,
            storage: FundStorage,
            participant_id: int,
            year: int,
            month: int,
    ) -> list[DailyReturn]:
        """
        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
        """
        validate_period(year, month)
        if storage.get_participant(participant_id) is None:
            raise ParticipantNotFoundError(participant_id)

        start, end = month_bounds(year, month)
        return storage.list_daily_returns(participant_id, start, end)

    def add_daily_return(
            self,
            storage: FundStorage,
            participant_id: int,
            day: date,
            percentage: Decimal,
    ) -> DailyReturn:
        """
        Record (or replace) a participant's percentage return for a date.

        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
            ValidationError: If the percentage is below -100
        """
        _check_percentage(percentage)
        if storage.get_participant(participant_id) is None:
            raise ParticipantNotFoundError(participant_id)

        daily_return = storage.add_daily_return(participant_id, day, percentage)
        storage.commit()
        logger.info(f"Daily return for participant {participant_id} on {day.isoformat()}: {percentage}%")
        return daily_return

    def update_daily_return(self, storage: FundStorage, return_id: int, percentage: Decimal) -> DailyReturn:
        """
        Raises:
            DailyReturnNotFoundError: If the entry doesn't exist
            ValidationError: If the percentage is below -100
        """
        _check_percentage(percentage)
        daily_return = storage.get_daily_return(return_id)
        if daily_return is None:
            raise DailyReturnNotFoundError(return_id)

        storage.update_daily_return(daily_return, percentage=percentage)
        storage.commit()
        return daily_return

    def delete_daily_return(self, storage: FundStorage, return_id: int) -> None:
        """
        Raises:
            DailyReturnNotFoundError: If the entry doesn't exist
        """
        daily_return = storage.get_daily_return(return_id)
        if daily_return is None:
            raise DailyReturnNotFoundError(return_id)

        storage.delete_daily_return(daily_return)
        storage.commit()
        logger.info(f"Daily return {return_id} deleted")
