"""
Period conversion module for TakeHome.

Purpose
-------
Converts monetary amounts between time units. Every figure TakeHome shows
(salary, deductions, take-home pay, scenario impacts) passes through these
helpers so that all views agree on what "monthly" or "per paycheck" means.

Key components
--------------
- PayFrequency:
    How often a paycheck arrives (weekly, bi-weekly, semi-monthly, monthly).
    Used to resolve "per paycheck" amounts.

- DeductionFrequency:
    Unit in which a deduction amount is entered (annual, monthly,
    per paycheck), with to_annual / from_annual conversions.

- Timeframe / TimeframeIncome:
    The canonical presentation periods. TimeframeIncome derives every
    period from the annual figure with its own fixed divisor.

Design principles
-----------------
- Pure functions over Decimal; no rounding (presentation rounds).
- Negative amounts pass through unchanged (expense reductions).
- Bi-weekly, weekly, daily and hourly figures come from the annual amount,
  not from the monthly one, so monthly * 12 / 26 need not equal bi_weekly
  after rounding.

Example
-------
>>> from decimal import Decimal
>>> from takehome.timeframe import DeductionFrequency, PayFrequency, TimeframeIncome
>>> DeductionFrequency.PER_PAYCHECK.to_annual(Decimal("500"), PayFrequency.BI_WEEKLY)
Decimal('13000')
>>> TimeframeIncome.from_annual(104000).hourly
Decimal('50')
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union

import pandas as pd

from .constants import (
    BI_WEEKLY_PERIODS_PER_YEAR,
    DEFAULT_DAYS_PER_WEEK,
    DEFAULT_HOURS_PER_WEEK,
    MONTHS_PER_YEAR,
    SEMI_MONTHLY_PERIODS_PER_YEAR,
    WEEKS_PER_YEAR,
    WORK_DAYS_PER_YEAR,
    WORK_HOURS_PER_YEAR,
)
from .types import TimeframeIncomeDict
from .utils import Number, to_decimal

__all__ = [
    "PayFrequency",
    "DeductionFrequency",
    "Timeframe",
    "TimeframeIncome",
    "to_annual",
    "from_annual",
    "timeframe_to_annual",
    "convert",
    "hours_to_earn",
    "days_to_earn",
]

ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Frequencies
# ---------------------------------------------------------------------------

class PayFrequency(str, Enum):
    """How often the employee is paid."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi_weekly"
    SEMI_MONTHLY = "semi_monthly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        """Number of paychecks per year."""
        return _PAY_PERIODS[self]

    @property
    def display_name(self) -> str:
        return _PAY_DISPLAY[self]


_PAY_PERIODS = {
    PayFrequency.WEEKLY: WEEKS_PER_YEAR,
    PayFrequency.BI_WEEKLY: BI_WEEKLY_PERIODS_PER_YEAR,
    PayFrequency.SEMI_MONTHLY: SEMI_MONTHLY_PERIODS_PER_YEAR,
    PayFrequency.MONTHLY: MONTHS_PER_YEAR,
}

_PAY_DISPLAY = {
    PayFrequency.WEEKLY: "Weekly",
    PayFrequency.BI_WEEKLY: "Bi-Weekly",
    PayFrequency.SEMI_MONTHLY: "Semi-Monthly",
    PayFrequency.MONTHLY: "Monthly",
}


def _periods(pay_frequency: Union[PayFrequency, int]) -> Decimal:
    if isinstance(pay_frequency, PayFrequency):
        return Decimal(pay_frequency.periods_per_year)
    return Decimal(int(pay_frequency))


class DeductionFrequency(str, Enum):
    """
    Unit in which a deduction amount is specified.

    Methods
    -------
    to_annual(amount, pay_frequency)
        Annualize an amount entered in this unit.
    from_annual(annual, pay_frequency)
        Express an annual amount in this unit.
    """

    ANNUAL = "annual"
    MONTHLY = "monthly"
    PER_PAYCHECK = "per_paycheck"

    @property
    def display_name(self) -> str:
        return {
            DeductionFrequency.ANNUAL: "Annual",
            DeductionFrequency.MONTHLY: "Monthly",
            DeductionFrequency.PER_PAYCHECK: "Per Check",
        }[self]

    @property
    def short_name(self) -> str:
        return {
            DeductionFrequency.ANNUAL: "/yr",
            DeductionFrequency.MONTHLY: "/mo",
            DeductionFrequency.PER_PAYCHECK: "/check",
        }[self]

    def to_annual(self, amount: Number, pay_frequency: Union[PayFrequency, int]) -> Decimal:
        amount = to_decimal(amount)
        if self is DeductionFrequency.ANNUAL:
            return amount
        elif self is DeductionFrequency.MONTHLY:
            return amount * MONTHS_PER_YEAR
        elif self is DeductionFrequency.PER_PAYCHECK:
            return amount * _periods(pay_frequency)
        raise ValueError(f"Unknown frequency: {self}")

    def from_annual(self, annual: Number, pay_frequency: Union[PayFrequency, int]) -> Decimal:
        annual = to_decimal(annual)
        if self is DeductionFrequency.ANNUAL:
            return annual
        elif self is DeductionFrequency.MONTHLY:
            return annual / MONTHS_PER_YEAR
        elif self is DeductionFrequency.PER_PAYCHECK:
            return annual / _periods(pay_frequency)
        raise ValueError(f"Unknown frequency: {self}")


def to_annual(
    amount: Number,
    frequency: DeductionFrequency,
    pay_frequency: Union[PayFrequency, int] = PayFrequency.BI_WEEKLY,
) -> Decimal:
    """Annualize *amount* expressed in *frequency*.

    ``pay_frequency`` may be a PayFrequency or a raw periods-per-year count
    and is only consulted for per-paycheck amounts.
    """
    return frequency.to_annual(amount, pay_frequency)


def from_annual(
    annual: Number,
    frequency: DeductionFrequency,
    pay_frequency: Union[PayFrequency, int] = PayFrequency.BI_WEEKLY,
) -> Decimal:
    """Inverse of :func:`to_annual`."""
    return frequency.from_annual(annual, pay_frequency)


# ---------------------------------------------------------------------------
# Canonical presentation periods
# ---------------------------------------------------------------------------

class Timeframe(str, Enum):
    """Presentation periods, each with a fixed divisor from annual."""

    ANNUAL = "annual"
    MONTHLY = "monthly"
    BI_WEEKLY = "bi_weekly"
    SEMI_MONTHLY = "semi_monthly"
    WEEKLY = "weekly"
    DAILY = "daily"
    HOURLY = "hourly"

    @property
    def divisor(self) -> Decimal:
        return Decimal(_TIMEFRAME_DIVISORS[self])

    @property
    def display_name(self) -> str:
        return self.value.replace("_", "-").title()


_TIMEFRAME_DIVISORS = {
    Timeframe.ANNUAL: 1,
    Timeframe.MONTHLY: MONTHS_PER_YEAR,
    Timeframe.BI_WEEKLY: BI_WEEKLY_PERIODS_PER_YEAR,
    Timeframe.SEMI_MONTHLY: SEMI_MONTHLY_PERIODS_PER_YEAR,
    Timeframe.WEEKLY: WEEKS_PER_YEAR,
    Timeframe.DAILY: WORK_DAYS_PER_YEAR,
    Timeframe.HOURLY: WORK_HOURS_PER_YEAR,
}


@dataclass(frozen=True)
class TimeframeIncome:
    """
    An annual amount broken down into the six canonical periods.

    Parameters
    ----------
    annual, monthly, bi_weekly, weekly, daily, hourly : Decimal
        Amount per period. Build with :meth:`from_annual` rather than by hand.

    Notes
    -----
    Each period is ``annual / divisor`` with its own divisor (12, 26, 52,
    260, 2080). They are not chained through ``monthly``.

    Example
    -------
    >>> tf = TimeframeIncome.from_annual(104000)
    >>> tf.bi_weekly, tf.weekly, tf.daily, tf.hourly
    (Decimal('4000'), Decimal('2000'), Decimal('400'), Decimal('50'))
    """

    annual: Decimal
    monthly: Decimal
    bi_weekly: Decimal
    weekly: Decimal
    daily: Decimal
    hourly: Decimal

    @classmethod
    def from_annual(cls, annual: Number) -> "TimeframeIncome":
        """Break down *annual* assuming 40 hours and 5 days per week."""
        annual = to_decimal(annual)
        return cls(
            annual=annual,
            monthly=annual / MONTHS_PER_YEAR,
            bi_weekly=annual / BI_WEEKLY_PERIODS_PER_YEAR,
            weekly=annual / WEEKS_PER_YEAR,
            daily=annual / WORK_DAYS_PER_YEAR,
            hourly=annual / WORK_HOURS_PER_YEAR,
        )

    @classmethod
    def from_annual_custom(
        cls,
        annual: Number,
        hours_per_week: Number = DEFAULT_HOURS_PER_WEEK,
        days_per_week: Number = DEFAULT_DAYS_PER_WEEK,
    ) -> "TimeframeIncome":
        """
        Break down *annual* for a non-standard working schedule.

        Daily and hourly figures use ``52 * days_per_week`` and
        ``52 * hours_per_week`` as divisors; the other periods are unchanged.
        A zero schedule value yields a zero daily or hourly figure.
        """
        annual = to_decimal(annual)
        day_count = WEEKS_PER_YEAR * to_decimal(days_per_week)
        hour_count = WEEKS_PER_YEAR * to_decimal(hours_per_week)
        return cls(
            annual=annual,
            monthly=annual / MONTHS_PER_YEAR,
            bi_weekly=annual / BI_WEEKLY_PERIODS_PER_YEAR,
            weekly=annual / WEEKS_PER_YEAR,
            daily=annual / day_count if day_count > 0 else ZERO,
            hourly=annual / hour_count if hour_count > 0 else ZERO,
        )

    @classmethod
    def zero(cls) -> "TimeframeIncome":
        return cls.from_annual(ZERO)

    def to_dict(self) -> TimeframeIncomeDict:
        return {
            "annual": self.annual,
            "monthly": self.monthly,
            "bi_weekly": self.bi_weekly,
            "weekly": self.weekly,
            "daily": self.daily,
            "hourly": self.hourly,
        }

    def to_series(self, name: str = "amount") -> pd.Series:
        """Return the breakdown as a float Series indexed by period name."""
        data = {k: float(v) for k, v in self.to_dict().items()}
        return pd.Series(data, name=name)


# ---------------------------------------------------------------------------
# Conversions between presentation periods
# ---------------------------------------------------------------------------

def timeframe_to_annual(amount: Number, timeframe: Timeframe) -> Decimal:
    """Annualize an amount expressed per *timeframe*."""
    return to_decimal(amount) * timeframe.divisor


def convert(amount: Number, source: Timeframe, target: Timeframe) -> Decimal:
    """Convert between presentation periods via the annual amount.

    >>> convert(4000, Timeframe.BI_WEEKLY, Timeframe.ANNUAL)
    Decimal('104000')
    """
    return timeframe_to_annual(amount, source) / target.divisor


def hours_to_earn(hourly_rate: Number, target_amount: Number) -> Decimal:
    """Hours of work needed to earn *target_amount*; 0 for a non-positive rate."""
    rate = to_decimal(hourly_rate)
    if rate <= 0:
        return ZERO
    return to_decimal(target_amount) / rate


def days_to_earn(daily_rate: Number, target_amount: Number) -> Decimal:
    """Days of work needed to earn *target_amount*; 0 for a non-positive rate."""
    rate = to_decimal(daily_rate)
    if rate <= 0:
        return ZERO
    return to_decimal(target_amount) / rate
