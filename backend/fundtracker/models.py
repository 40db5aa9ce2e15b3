# backend/fundtracker/models.py
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, ForeignKey, Numeric, UniqueConstraint, Boolean, Integer, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Participant(Base):
    """
    An investor (or the admin) with an account in the fund.

    Profile-level beginning_value / ownership_percentage describe the
    designated current period (see FundSettings). Other months are described
    by MonthlyValue overrides.

    beginning_value is nullable: when unset, the period basis is derived as
    ownership_percentage / 100 x FundSettings.total_fund_value.
    """
    __tablename__ = "participants"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))

    # Numeric(18, 8) supports values up to 9,999,999,999.99999999
    beginning_value: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    ownership_percentage: Mapped[Decimal] = mapped_column(Numeric(12, 8), default=Decimal("0"))

    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Owned records are removed together with the participant
    monthly_values: Mapped[list["MonthlyValue"]] = relationship(
        back_populates="participant",
        cascade="all, delete-orphan",
    )
    daily_returns: Mapped[list["DailyReturn"]] = relationship(
        back_populates="participant",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class MonthlyValue(Base):
    """
    Per-month override of a participant's beginning value and ownership.

    Lets the ledger reconstruct "what was the split at the start of month M"
    without rewriting other months when people join or the fund grows.
    """
    __tablename__ = "monthly_values"
    __table_args__ = (
        UniqueConstraint('participant_id', 'year', 'month', name='uq_monthly_value_participant_period'),
        # Rebalancing reads every override of one period
        Index('ix_monthly_value_period', 'year', 'month'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    participant_id: Mapped[int] = mapped_column(ForeignKey("participants.id", ondelete="CASCADE"), index=True)
    year: Mapped[int] = mapped_column(Integer)
    month: Mapped[int] = mapped_column(Integer)
    beginning_value: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    ownership_percentage: Mapped[Decimal] = mapped_column(Numeric(12, 8))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    participant: Mapped["Participant"] = relationship(back_populates="monthly_values")


class FundReturn(Base):
    """
    Fund-level daily change: a dollar amount measured against the fund total.

    The percentage return is derived (dollar_change / total_fund_value x 100)
    and applied uniformly to every participant.
    """
    __tablename__ = "fund_returns"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    date: Mapped[date] = mapped_column(Date, unique=True, index=True)
    dollar_change: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    total_fund_value: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class DailyReturn(Base):
    """Participant-level daily percentage return."""
    __tablename__ = "daily_returns"
    __table_args__ = (
        UniqueConstraint('participant_id', 'date', name='uq_daily_return_participant_date'),
        Index('ix_daily_return_participant_date', 'participant_id', 'date'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    participant_id: Mapped[int] = mapped_column(ForeignKey("participants.id", ondelete="CASCADE"), index=True)
    date: Mapped[date] = mapped_column(Date, index=True)
    percentage: Mapped[Decimal] = mapped_column(Numeric(12, 8))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    participant: Mapped["Participant"] = relationship(back_populates="daily_returns")


class TradingDay(Base):
    """
    A date on which returns are valid for compounding.

    Entries recorded on dates outside this table are shown but not compounded.
    """
    __tablename__ = "trading_days"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    date: Mapped[date] = mapped_column(Date, unique=True, index=True)
    is_half_day: Mapped[bool] = mapped_column(Boolean, default=False)


class FundSettings(Base):
    """
    Fund-wide settings (single row).

    Stores:
    - total_fund_value: used to derive a participant's beginning value from ownership
    - current_year / current_month: the period described by participant profiles
    """
    __tablename__ = "fund_settings"

    id: Mapped[int] = mapped_column(primary_key=True)
    total_fund_value: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    current_year: Mapped[int] = mapped_column(Integer)
    current_month: Mapped[int] = mapped_column(Integer)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )
