# tests/services/test_fund_settings_service.py
"""Tests for FundSettingsService defaults and partial updates."""

from datetime import date
from decimal import Decimal

import pytest

from fundtracker.services.exceptions import InvalidPeriodError, ValidationError
from fundtracker.services.fund_settings_service import FundSettingsService


@pytest.fixture
def service() -> FundSettingsService:
    return FundSettingsService()


class TestFundSettings:

    def test_defaults_without_row(self, storage, service):
        view = service.get_settings(storage, today=date(2026, 2, 14))

        assert view.is_default is True
        assert view.total_fund_value is None
        assert (view.current_year, view.current_month) == (2026, 2)

    def test_first_update_creates_row(self, storage, service):
        view = service.update_settings(
            storage, total_fund_value=Decimal("50000"), current_year=2025, current_month=11,
        )

        assert view.is_default is False
        assert view.total_fund_value == Decimal("50000")
        assert (view.current_year, view.current_month) == (2025, 11)
        assert view.updated_at is not None

    def test_partial_update_keeps_other_fields(self, storage, service, november):
        view = service.update_settings(storage, current_month=12)

        assert view.total_fund_value == Decimal("10000")
        assert (view.current_year, view.current_month) == (2025, 12)

    def test_negative_total_rejected(self, storage, service, november):
        with pytest.raises(ValidationError):
            service.update_settings(storage, total_fund_value=Decimal("-1"))

    def test_invalid_month_rejected(self, storage, service, november):
        with pytest.raises(InvalidPeriodError):
            service.update_settings(storage, current_month=13)

        assert service.get_settings(storage).current_month == 11
