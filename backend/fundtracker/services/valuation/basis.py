# backend/fundtracker/services/valuation/basis.py
"""
Period basis resolution.

Decides the beginning value and ownership a participant starts a month with:

1. A stored MonthlyValue for (participant, year, month)     -> "monthly_value"
2. The current period: the participant's profile values      -> "profile"
   (beginning value derived as ownership% of the fund total
   when the profile has none and the total is known)          -> "derived"
3. Anything else: zero                                        -> "none"

Months before a participant joined therefore start from zero and are not
recalculated when later months are edited.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fundtracker.services.constants import HUNDRED
from fundtracker.services.periods import current_period
from fundtracker.services.protocols import FundStorage
from fundtracker.services.valuation.types import PeriodBasis, ZERO

if TYPE_CHECKING:
    from fundtracker.models import Participant


def resolve_period_basis(
        storage: FundStorage,
        participant: Participant,
        year: int,
        month: int,
) -> PeriodBasis:
    """
    Resolve the basis of one participant for one month.

    Args:
        storage: Storage to read overrides and fund settings from
        participant: The participant (profile values are read from it)
        year, month: The period

    Returns:
        PeriodBasis naming which rule produced the values
    """
    override = storage.get_monthly_value(participant.id, year, month)
    if override is not None:
        return PeriodBasis(
            year=year,
            month=month,
            beginning_value=override.beginning_value,
            ownership_percentage=override.ownership_percentage,
            source="monthly_value",
        )

    if current_period(storage) != (year, month):
        return PeriodBasis(
            year=year,
            month=month,
            beginning_value=ZERO,
            ownership_percentage=ZERO,
            source="none",
        )

    ownership = participant.ownership_percentage or ZERO

    if participant.beginning_value is not None:
        return PeriodBasis(
            year=year,
            month=month,
            beginning_value=participant.beginning_value,
            ownership_percentage=ownership,
            source="profile",
        )

    fund_settings = storage.get_fund_settings()
    if fund_settings is not None and fund_settings.total_fund_value is not None:
        return PeriodBasis(
            year=year,
            month=month,
            beginning_value=ownership / HUNDRED * fund_settings.total_fund_value,
            ownership_percentage=ownership,
            source="derived",
        )

    return PeriodBasis(
        year=year,
        month=month,
        beginning_value=ZERO,
        ownership_percentage=ownership,
        source="profile",
    )
