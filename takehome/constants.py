"""
Global constants for TakeHome.

Purpose
-------
Centralizes period counts, regulatory limits and fixed rates used
throughout the TakeHome codebase. Using constants instead of hardcoded
values keeps the conversion rules in one place and makes the calendar
assumptions explicit.

Usage
-----
>>> from takehome.constants import MONTHS_PER_YEAR, WORK_HOURS_PER_YEAR
>>>
>>> monthly = annual / MONTHS_PER_YEAR
>>> hourly = annual / WORK_HOURS_PER_YEAR

Categories
----------
- Time: months, weeks, work days and work hours per year
- Limits: 2024 IRS contribution limits and catch-up allowances
- Scenarios: flat marginal-rate proxy for what-if tax changes
- Household: default split ratio
"""

from decimal import Decimal

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    "WEEKS_PER_YEAR",
    "BI_WEEKLY_PERIODS_PER_YEAR",
    "SEMI_MONTHLY_PERIODS_PER_YEAR",
    "WORK_DAYS_PER_YEAR",
    "WORK_HOURS_PER_YEAR",
    "DEFAULT_HOURS_PER_WEEK",
    "DEFAULT_DAYS_PER_WEEK",
    # Limits
    "LIMIT_401K",
    "LIMIT_HSA",
    "LIMIT_FSA",
    "LIMIT_DEPENDENT_CARE_FSA",
    "LIMIT_COMMUTER",
    "CATCH_UP_401K",
    "CATCH_UP_HSA",
    # Scenarios
    "SCENARIO_MARGINAL_RATE",
    # Household
    "EQUAL_SPLIT_RATIO",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year."""

WEEKS_PER_YEAR: int = 52
"""Number of weeks in a year (pay-calendar convention)."""

BI_WEEKLY_PERIODS_PER_YEAR: int = 26
"""Number of bi-weekly pay periods in a year."""

SEMI_MONTHLY_PERIODS_PER_YEAR: int = 24
"""Number of semi-monthly pay periods in a year."""

WORK_DAYS_PER_YEAR: int = 260
"""Standard working days per year (52 weeks x 5 days)."""

WORK_HOURS_PER_YEAR: int = 2080
"""Standard working hours per year (52 weeks x 40 hours)."""

DEFAULT_HOURS_PER_WEEK: int = 40
"""Full-time hours per week."""

DEFAULT_DAYS_PER_WEEK: int = 5
"""Full-time working days per week."""


# =============================================================================
# Contribution Limits (2024)
# =============================================================================

LIMIT_401K: Decimal = Decimal("23000")
"""Employee deferral limit for 401(k), 403(b) and 457(b) plans (under 50)."""

LIMIT_HSA: Decimal = Decimal("4150")
"""Individual HSA contribution limit."""

LIMIT_FSA: Decimal = Decimal("3200")
"""Health FSA salary-reduction limit."""

LIMIT_DEPENDENT_CARE_FSA: Decimal = Decimal("5000")
"""Dependent care FSA limit (married filing jointly)."""

LIMIT_COMMUTER: Decimal = Decimal("3150")
"""Qualified transit / parking limit ($315/month x 12, rounded down)."""

CATCH_UP_401K: Decimal = Decimal("7500")
"""Additional deferral allowed from age 50. Informational only."""

CATCH_UP_HSA: Decimal = Decimal("1000")
"""Additional HSA contribution allowed from age 55. Informational only."""


# =============================================================================
# Scenario Projection
# =============================================================================

SCENARIO_MARGINAL_RATE: Decimal = Decimal("0.22")
"""Flat rate applied to scenario tax deductions and exemptions.

Stands in for the household's real marginal rate so what-if feedback does
not need a round trip through the tax engine.
"""


# =============================================================================
# Household
# =============================================================================

EQUAL_SPLIT_RATIO: Decimal = Decimal("0.5")
"""Primary share used for equal splits and as the zero-income fallback."""
