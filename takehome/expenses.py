"""
Budget expense module for TakeHome.

Purpose
-------
Models the recurring expenses a household tracks against its take-home
pay. Each expense is entered in its natural frequency (weekly groceries,
quarterly insurance, an annual subscription) and normalized to monthly and
annual figures for the budget views.

Key components
--------------
- ExpenseFrequency: entry frequency, with to_monthly / to_annual rules.
- Expense: one budget line, optionally shared with a partner.
- ExpenseModel: aggregate over a list of expenses (totals, shared portion,
  per-category breakdown as a pandas Series).
- ExpenseMetrics: summary returned by ExpenseModel.summary().

Design principles
-----------------
- Frozen dataclasses for immutability
- Decimal amounts, no rounding
- One-time expenses are amortized over 12 months in monthly views

Example
-------
>>> from takehome.expenses import Expense, ExpenseFrequency, ExpenseModel
>>> rent = Expense("Rent", 2000, is_shared=True)
>>> gym = Expense("Gym", 120, ExpenseFrequency.QUARTERLY)
>>> model = ExpenseModel([rent, gym])
>>> model.total_monthly
Decimal('2040')
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional

import pandas as pd

from .constants import BI_WEEKLY_PERIODS_PER_YEAR, MONTHS_PER_YEAR, WEEKS_PER_YEAR
from .scenario import ExpenseCategory
from .utils import Number, decimal_sum, to_decimal

__all__ = [
    "ExpenseFrequency",
    "Expense",
    "ExpenseModel",
    "ExpenseMetrics",
]

QUARTERS_PER_YEAR = 4


class ExpenseFrequency(str, Enum):
    ONE_TIME = "one_time"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi_weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"

    @property
    def display_name(self) -> str:
        return {
            ExpenseFrequency.ONE_TIME: "One-Time",
            ExpenseFrequency.WEEKLY: "Weekly",
            ExpenseFrequency.BI_WEEKLY: "Bi-Weekly",
            ExpenseFrequency.MONTHLY: "Monthly",
            ExpenseFrequency.QUARTERLY: "Quarterly",
            ExpenseFrequency.ANNUAL: "Annual",
        }[self]

    def to_monthly(self, amount: Number) -> Decimal:
        amount = to_decimal(amount)
        if self is ExpenseFrequency.ONE_TIME:
            return amount / MONTHS_PER_YEAR
        elif self is ExpenseFrequency.WEEKLY:
            return amount * WEEKS_PER_YEAR / MONTHS_PER_YEAR
        elif self is ExpenseFrequency.BI_WEEKLY:
            return amount * BI_WEEKLY_PERIODS_PER_YEAR / MONTHS_PER_YEAR
        elif self is ExpenseFrequency.MONTHLY:
            return amount
        elif self is ExpenseFrequency.QUARTERLY:
            return amount / 3
        elif self is ExpenseFrequency.ANNUAL:
            return amount / MONTHS_PER_YEAR
        raise ValueError(f"Unknown frequency: {self}")

    def to_annual(self, amount: Number) -> Decimal:
        amount = to_decimal(amount)
        if self is ExpenseFrequency.ONE_TIME:
            return amount
        elif self is ExpenseFrequency.WEEKLY:
            return amount * WEEKS_PER_YEAR
        elif self is ExpenseFrequency.BI_WEEKLY:
            return amount * BI_WEEKLY_PERIODS_PER_YEAR
        elif self is ExpenseFrequency.MONTHLY:
            return amount * MONTHS_PER_YEAR
        elif self is ExpenseFrequency.QUARTERLY:
            return amount * QUARTERS_PER_YEAR
        elif self is ExpenseFrequency.ANNUAL:
            return amount
        raise ValueError(f"Unknown frequency: {self}")


# ---------------------------------------------------------------------------
# Budget lines
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Expense:
    """
    A single budget expense.

    Parameters
    ----------
    name : str
    amount : Decimal
        Amount per ``frequency``.
    frequency : ExpenseFrequency, default MONTHLY
    category : ExpenseCategory, default OTHER
    is_shared : bool, default False
        Whether the expense is split with a partner (see household.py).
    notes : str, optional
    id : str
        Generated identifier; not part of equality.

    Examples
    --------
    >>> Expense("Groceries", 150, ExpenseFrequency.WEEKLY).monthly_amount
    Decimal('650')
    """

    name: str
    amount: Decimal
    frequency: ExpenseFrequency = ExpenseFrequency.MONTHLY
    category: ExpenseCategory = ExpenseCategory.OTHER
    is_shared: bool = False
    notes: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))

    @property
    def monthly_amount(self) -> Decimal:
        return self.frequency.to_monthly(self.amount)

    @property
    def annual_amount(self) -> Decimal:
        return self.frequency.to_annual(self.amount)


@dataclass(frozen=True)
class ExpenseMetrics:
    """Summary metrics for a set of expenses."""
    count: int
    total_monthly: Decimal
    total_annual: Decimal
    shared_monthly: Decimal
    personal_monthly: Decimal
    largest: Optional[str]


@dataclass(frozen=True)
class ExpenseModel:
    """
    Aggregate view over a household's expenses.

    Parameters
    ----------
    expenses : iterable of Expense
        Stored as a tuple.

    Methods
    -------
    by_category()
        Monthly totals per category as a pandas Series.
    summary()
        ExpenseMetrics snapshot.
    """
    expenses: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "expenses", tuple(self.expenses))

    @property
    def total_monthly(self) -> Decimal:
        return decimal_sum(e.monthly_amount for e in self.expenses)

    @property
    def total_annual(self) -> Decimal:
        return decimal_sum(e.annual_amount for e in self.expenses)

    @property
    def shared_monthly(self) -> Decimal:
        return decimal_sum(e.monthly_amount for e in self.expenses if e.is_shared)

    @property
    def personal_monthly(self) -> Decimal:
        return decimal_sum(e.monthly_amount for e in self.expenses if not e.is_shared)

    def filter(self, category: ExpenseCategory) -> List[Expense]:
        return [e for e in self.expenses if e.category is category]

    def by_category(self) -> pd.Series:
        """Monthly totals per category, largest first, omitting empty categories."""
        totals = {}
        for e in self.expenses:
            totals[e.category.value] = totals.get(e.category.value, 0.0) + float(e.monthly_amount)
        series = pd.Series(totals, dtype=float, name="monthly")
        return series.sort_values(ascending=False)

    def to_frame(self) -> pd.DataFrame:
        """One row per expense with monthly and annual amounts as floats."""
        columns = ["name", "category", "frequency", "monthly", "annual", "shared"]
        rows = [
            {
                "name": e.name,
                "category": e.category.value,
                "frequency": e.frequency.value,
                "monthly": float(e.monthly_amount),
                "annual": float(e.annual_amount),
                "shared": e.is_shared,
            }
            for e in self.expenses
        ]
        return pd.DataFrame(rows, columns=columns)

    def summary(self) -> ExpenseMetrics:
        largest = max(self.expenses, key=lambda e: e.monthly_amount, default=None)
        return ExpenseMetrics(
            count=len(self.expenses),
            total_monthly=self.total_monthly,
            total_annual=self.total_annual,
            shared_monthly=self.shared_monthly,
            personal_monthly=self.personal_monthly,
            largest=largest.name if largest is not None else None,
        )
