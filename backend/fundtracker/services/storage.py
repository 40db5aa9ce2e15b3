# backend/fundtracker/services/storage.py
"""
SQLAlchemy implementation of the FundStorage protocol.

Every method runs against the session it was built with. Writes are flushed
(so constraint violations surface immediately and new rows get ids) but not
committed; commit() and rollback() are left to the calling service.

Any SQLAlchemyError is re-raised as StorageError so that services and HTTP
handlers never see driver-specific exceptions.
"""

import functools
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fundtracker.models import (
    DailyReturn,
    FundReturn,
    FundSettings,
    MonthlyValue,
    Participant,
    TradingDay,
)
from fundtracker.services.exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# FundSettings is a single-row table
FUND_SETTINGS_ID = 1


def _wrap_errors(method: Callable[..., T]) -> Callable[..., T]:
    """Translate SQLAlchemy failures raised by a storage method into StorageError."""

    @functools.wraps(method)
    def wrapper(self: "SqlAlchemyFundStorage", *args: Any, **kwargs: Any) -> T:
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Storage operation {method.__name__} failed: {e}")
            raise StorageError(method.__name__, str(e.__class__.__name__)) from e

    return wrapper


class SqlAlchemyFundStorage:
    """FundStorage backed by a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    @property
    def session(self) -> Session:
        return self._db

    def _update(self, instance: T, fields: dict[str, Any]) -> T:
        for key, value in fields.items():
            setattr(instance, key, value)
        self._db.flush()
        return instance

    def _delete(self, instance: Any) -> None:
        self._db.delete(instance)
        self._db.flush()

    # =========================================================================
    # PARTICIPANTS
    # =========================================================================

    @_wrap_errors
    def get_participant(self, participant_id: int) -> Participant | None:
        return self._db.get(Participant, participant_id)

    @_wrap_errors
    def get_participant_by_username(self, username: str) -> Participant | None:
        return self._db.scalar(select(Participant).where(Participant.username == username))

    @_wrap_errors
    def list_participants(self, include_admins: bool = False) -> list[Participant]:
        stmt = select(Participant).order_by(Participant.id)
        if not include_admins:
            stmt = stmt.where(Participant.is_admin.is_(False))
        return list(self._db.scalars(stmt).all())

    @_wrap_errors
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
        participant = Participant(
            username=username,
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            beginning_value=beginning_value,
            ownership_percentage=ownership_percentage,
            is_admin=is_admin,
        )
        self._db.add(participant)
        self._db.flush()
        return participant

    @_wrap_errors
    def update_participant(self, participant: Participant, **fields: Any) -> Participant:
        return self._update(participant, fields)

    @_wrap_errors
    def delete_participant(self, participant: Participant) -> None:
        self._delete(participant)

    # =========================================================================
    # MONTHLY VALUES
    # =========================================================================

    @_wrap_errors
    def get_monthly_value(self, participant_id: int, year: int, month: int) -> MonthlyValue | None:
        return self._db.scalar(
            select(MonthlyValue).where(
                MonthlyValue.participant_id == participant_id,
                MonthlyValue.year == year,
                MonthlyValue.month == month,
            )
        )

    @_wrap_errors
    def list_monthly_values(
        self,
        participant_id: int | None = None,
        year: int | None = None,
        month: int | None = None,
    ) -> list[MonthlyValue]:
        stmt = select(MonthlyValue)
        if participant_id is not None:
            stmt = stmt.where(MonthlyValue.participant_id == participant_id)
        if year is not None:
            stmt = stmt.where(MonthlyValue.year == year)
        if month is not None:
            stmt = stmt.where(MonthlyValue.month == month)
        stmt = stmt.order_by(MonthlyValue.year.desc(), MonthlyValue.month.desc(), MonthlyValue.participant_id)
        return list(self._db.scalars(stmt).all())

    @_wrap_errors
    def set_monthly_value(
        self,
        participant_id: int,
        year: int,
        month: int,
        beginning_value: Decimal,
        ownership_percentage: Decimal,
    ) -> MonthlyValue:
        monthly_value = self.get_monthly_value(participant_id, year, month)
        if monthly_value is None:
            monthly_value = MonthlyValue(participant_id=participant_id, year=year, month=month)
            self._db.add(monthly_value)

        monthly_value.beginning_value = beginning_value
        monthly_value.ownership_percentage = ownership_percentage
        self._db.flush()
        return monthly_value

    @_wrap_errors
    def delete_monthly_value(self, monthly_value: MonthlyValue) -> None:
        self._delete(monthly_value)

    # =========================================================================
    # FUND RETURNS
    # =========================================================================

    @_wrap_errors
    def list_fund_returns(self, start_date: date, end_date: date) -> list[FundReturn]:
        stmt = (
            select(FundReturn)
            .where(FundReturn.date >= start_date, FundReturn.date <= end_date)
            .order_by(FundReturn.date)
        )
        return list(self._db.scalars(stmt).all())

    @_wrap_errors
    def get_fund_return(self, return_id: int) -> FundReturn | None:
        return self._db.get(FundReturn, return_id)

    @_wrap_errors
    def get_fund_return_by_date(self, day: date) -> FundReturn | None:
        return self._db.scalar(select(FundReturn).where(FundReturn.date == day))

    @_wrap_errors
    def add_fund_return(self, day: date, dollar_change: Decimal, total_fund_value: Decimal) -> FundReturn:
        fund_return = FundReturn(date=day, dollar_change=dollar_change, total_fund_value=total_fund_value)
        self._db.add(fund_return)
        self._db.flush()
        return fund_return

    @_wrap_errors
    def update_fund_return(self, fund_return: FundReturn, **fields: Any) -> FundReturn:
        return self._update(fund_return, fields)

    @_wrap_errors
    def delete_fund_return(self, fund_return: FundReturn) -> None:
        self._delete(fund_return)

    # =========================================================================
    # PARTICIPANT DAILY RETURNS
    # =========================================================================

    @_wrap_errors
    def list_daily_returns(self, participant_id: int, start_date: date, end_date: date) -> list[DailyReturn]:
        stmt = (
            select(DailyReturn)
            .where(
                DailyReturn.participant_id == participant_id,
                DailyReturn.date >= start_date,
                DailyReturn.date <= end_date,
            )
            .order_by(DailyReturn.date)
        )
        return list(self._db.scalars(stmt).all())

    @_wrap_errors
    def get_daily_return(self, return_id: int) -> DailyReturn | None:
        return self._db.get(DailyReturn, return_id)

    @_wrap_errors
    def add_daily_return(self, participant_id: int, day: date, percentage: Decimal) -> DailyReturn:
        daily_return = self._db.scalar(
            select(DailyReturn).where(
                DailyReturn.participant_id == participant_id,
                DailyReturn.date == day,
            )
        )
        if daily_return is None:
            daily_return = DailyReturn(participant_id=participant_id, date=day)
            self._db.add(daily_return)

        daily_return.percentage = percentage
        self._db.flush()
        return daily_return

    @_wrap_errors
    def update_daily_return(self, daily_return: DailyReturn, **fields: Any) -> DailyReturn:
        return self._update(daily_return, fields)

    @_wrap_errors
    def delete_daily_return(self, daily_return: DailyReturn) -> None:
        self._delete(daily_return)

    # =========================================================================
    # TRADING CALENDAR
    # =========================================================================

    @_wrap_errors
    def list_trading_days(self, start_date: date, end_date: date) -> list[TradingDay]:
        stmt = (
            select(TradingDay)
            .where(TradingDay.date >= start_date, TradingDay.date <= end_date)
            .order_by(TradingDay.date)
        )
        return list(self._db.scalars(stmt).all())

    @_wrap_errors
    def count_trading_days(self) -> int:
        return self._db.scalar(select(func.count()).select_from(TradingDay)) or 0

    @_wrap_errors
    def get_trading_day(self, day: date) -> TradingDay | None:
        return self._db.scalar(select(TradingDay).where(TradingDay.date == day))

    @_wrap_errors
    def upsert_trading_day(self, day: date, is_half_day: bool) -> TradingDay:
        trading_day = self.get_trading_day(day)
        if trading_day is None:
            trading_day = TradingDay(date=day)
            self._db.add(trading_day)

        trading_day.is_half_day = is_half_day
        self._db.flush()
        return trading_day

    @_wrap_errors
    def delete_trading_day(self, trading_day: TradingDay) -> None:
        self._delete(trading_day)

    # =========================================================================
    # FUND SETTINGS
    # =========================================================================

    @_wrap_errors
    def get_fund_settings(self) -> FundSettings | None:
        return self._db.get(FundSettings, FUND_SETTINGS_ID)

    @_wrap_errors
    def save_fund_settings(
        self,
        total_fund_value: Decimal | None,
        current_year: int,
        current_month: int,
    ) -> FundSettings:
        fund_settings = self.get_fund_settings()
        if fund_settings is None:
            fund_settings = FundSettings(id=FUND_SETTINGS_ID)
            self._db.add(fund_settings)

        fund_settings.total_fund_value = total_fund_value
        fund_settings.current_year = current_year
        fund_settings.current_month = current_month
        self._db.flush()
        return fund_settings

    # =========================================================================
    # UNIT OF WORK
    # =========================================================================

    @_wrap_errors
    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()
