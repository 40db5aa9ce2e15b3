# backend/fundtracker/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- SqlAlchemyFundStorage satisfies FundStorage without inheriting from it
- Tests can wrap or fake storage without touching the services
- The services state exactly which persistence calls they need

Write methods only stage changes; callers decide when to commit() or
rollback(), which is what lets a rebalance run as one transaction.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from fundtracker.models import (
        DailyReturn,
        FundReturn,
        FundSettings,
        MonthlyValue,
        Participant,
        TradingDay,
    )


class FundStorage(Protocol):
    """Persistence operations required by the calendar, ledger and ownership services."""

    # -- participants --------------------------------------------------------

    def get_participant(self, participant_id: int) -> Participant | None:
        ...

    def get_participant_by_username(self, username: str) -> Participant | None:
        ...

    def list_participants(self, include_admins: bool = False) -> list[Participant]:
        ...

    def create_participant(
        self,
        username: str,
        hashed_password: str,
        first_name: str,
        last_name: str,
        beginning_value: Decimal | None = None,
        ownership_percentage: Decimal = Decimal("0"),
        is_admin: bool = False,
    ) -> Participant:
        ...

    def update_participant(self, participant: Participant, **fields: Any) -> Participant:
        ...

    def delete_participant(self, participant: Participant) -> None:
        ...

    # -- monthly values ------------------------------------------------------

    def get_monthly_value(self, participant_id: int, year: int, month: int) -> MonthlyValue | None:
        ...

    def list_monthly_values(
        self,
        participant_id: int | None = None,
        year: int | None = None,
        month: int | None = None,
    ) -> list[MonthlyValue]:
        ...

    def set_monthly_value(
        self,
        participant_id: int,
        year: int,
        month: int,
        beginning_value: Decimal,
        ownership_percentage: Decimal,
    ) -> MonthlyValue:
        ...

    def delete_monthly_value(self, monthly_value: MonthlyValue) -> None:
        ...

    # -- fund returns --------------------------------------------------------

    def list_fund_returns(self, start_date: date, end_date: date) -> list[FundReturn]:
        ...

    def get_fund_return(self, return_id: int) -> FundReturn | None:
        ...

    def get_fund_return_by_date(self, day: date) -> FundReturn | None:
        ...

    def add_fund_return(self, day: date, dollar_change: Decimal, total_fund_value: Decimal) -> FundReturn:
        ...

    def update_fund_return(self, fund_return: FundReturn, **fields: Any) -> FundReturn:
        ...

    def delete_fund_return(self, fund_return: FundReturn) -> None:
        ...

    # -- participant daily returns -------------------------------------------

    def list_daily_returns(self, participant_id: int, start_date: date, end_date: date) -> list[DailyReturn]:
        ...

    def get_daily_return(self, return_id: int) -> DailyReturn | None:
        ...

    def add_daily_return(self, participant_id: int, day: date, percentage: Decimal) -> DailyReturn:
        ...

    def update_daily_return(self, daily_return: DailyReturn, **fields: Any) -> DailyReturn:
        ...

    def delete_daily_return(self, daily_return: DailyReturn) -> None:
        ...

    # -- trading calendar ----------------------------------------------------

    def list_trading_days(self, start_date: date, end_date: date) -> list[TradingDay]:
        ...

    def count_trading_days(self) -> int:
        ...

    def get_trading_day(self, day: date) -> TradingDay | None:
        ...

    def upsert_trading_day(self, day: date, is_half_day: bool) -> TradingDay:
        ...

    def delete_trading_day(self, trading_day: TradingDay) -> None:
        ...

    # -- fund settings -------------------------------------------------------

    def get_fund_settings(self) -> FundSettings | None:
        ...

    def save_fund_settings(
        self,
        total_fund_value: Decimal | None,
        current_year: int,
        current_month: int,
    ) -> FundSettings:
        ...

    # -- unit of work --------------------------------------------------------

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
