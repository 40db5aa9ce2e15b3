"""Initial schema

This migration creates the complete database schema for the Fund Tracker.

Tables:
    - participants: Investor and admin accounts with current-period ownership
    - monthly_values: Per-month beginning value / ownership overrides
    - fund_returns: Fund-level daily dollar changes
    - daily_returns: Participant-level daily percentage returns
    - trading_days: Trading calendar
    - fund_settings: Fund-wide settings (single row)

Revision ID: 001
Revises: None
Create Date: 2025-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ==========================================================================
    # PARTICIPANTS
    # ==========================================================================
    op.create_table(
        'participants',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('username', sa.String(50), nullable=False, unique=True, index=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('beginning_value', sa.Numeric(18, 8), nullable=True),
        sa.Column('ownership_percentage', sa.Numeric(12, 8), nullable=False, server_default='0'),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # ==========================================================================
    # MONTHLY VALUES
    # ==========================================================================
    op.create_table(
        'monthly_values',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column(
            'participant_id',
            sa.Integer(),
            sa.ForeignKey('participants.id', ondelete='CASCADE'),
            nullable=False,
            index=True,
        ),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('beginning_value', sa.Numeric(18, 8), nullable=False),
        sa.Column('ownership_percentage', sa.Numeric(12, 8), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('participant_id', 'year', 'month', name='uq_monthly_value_participant_period'),
    )
    op.create_index('ix_monthly_value_period', 'monthly_values', ['year', 'month'])

    # ==========================================================================
    # FUND RETURNS
    # ==========================================================================
    op.create_table(
        'fund_returns',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('date', sa.Date(), nullable=False, unique=True, index=True),
        sa.Column('dollar_change', sa.Numeric(18, 8), nullable=False),
        sa.Column('total_fund_value', sa.Numeric(18, 8), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    # ==========================================================================
    # DAILY RETURNS
    # ==========================================================================
    op.create_table(
        'daily_returns',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column(
            'participant_id',
            sa.Integer(),
            sa.ForeignKey('participants.id', ondelete='CASCADE'),
            nullable=False,
            index=True,
        ),
        sa.Column('date', sa.Date(), nullable=False, index=True),
        sa.Column('percentage', sa.Numeric(12, 8), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('participant_id', 'date', name='uq_daily_return_participant_date'),
    )
    op.create_index('ix_daily_return_participant_date', 'daily_returns', ['participant_id', 'date'])

    # ==========================================================================
    # TRADING DAYS
    # ==========================================================================
    op.create_table(
        'trading_days',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('date', sa.Date(), nullable=False, unique=True, index=True),
        sa.Column('is_half_day', sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    # ==========================================================================
    # FUND SETTINGS
    # ==========================================================================
    op.create_table(
        'fund_settings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('total_fund_value', sa.Numeric(18, 8), nullable=True),
        sa.Column('current_year', sa.Integer(), nullable=False),
        sa.Column('current_month', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('fund_settings')
    op.drop_table('trading_days')
    op.drop_index('ix_daily_return_participant_date', table_name='daily_returns')
    op.drop_table('daily_returns')
    op.drop_table('fund_returns')
    op.drop_index('ix_monthly_value_period', table_name='monthly_values')
    op.drop_table('monthly_values')
    op.drop_table('participants')
