"""
Scenario impact engine for TakeHome

Purpose
-------
Projects a "what-if" life event onto the household budget. A scenario
bundles income, expense, tax and savings changes, each with its own
frequency and optional duration; the engine reduces them to one comparable
net monthly / annual figure.

Key components
--------------
- EventDuration:
    months(n), years(n) or ongoing. Ongoing has no month count (None),
    never a sentinel number.

- IncomeChange / ExpenseChange / TaxChange / SavingsChange:
    The four change kinds. Each knows its own contribution rule.

- LifeEventScenario / LifeEventImpact:
    The bundle and the projected result.

- calculate_impact:
    income - expenses + taxes / 12, with one-time costs tracked apart and
    savings changes carried for display only.

Amortization policy
-------------------
An income change whose duration is shorter than 12 months is spread over a
full year: its total first-year effect is divided by 12, so a 3-month
benefit shows as a smaller monthly figure rather than a large one that
stops. Changes lasting 12 months or more, ongoing, or without duration use
their plain monthly rate. Duration never changes a change's frequency.

Tax changes
-----------
Credits reduce tax one for one. Deductions and exemptions are valued at a
flat 22% (SCENARIO_MARGINAL_RATE) rather than the household's real marginal
rate.

Example
-------
>>> from takehome.templates import first_child
>>> impact = calculate_impact(first_child(), base_salary=100_000, current_net_monthly=5_000)
>>> impact.monthly_expense_change
Decimal('1825')
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence, Tuple

import pandas as pd

from .constants import MONTHS_PER_YEAR, SCENARIO_MARGINAL_RATE
from .types import ImpactDict
from .utils import Number, decimal_sum, summary_frame, to_decimal

__all__ = [
    # Catalogs
    "LifeEventCategory",
    "IncomeChangeType",
    "ExpenseCategory",
    "TaxChangeType",
    "SavingsChangeType",
    "ChangeFrequency",
    "DurationUnit",
    "EventDuration",
    # Changes
    "IncomeChange",
    "ExpenseChange",
    "TaxChange",
    "SavingsChange",
    # Scenario
    "LifeEventScenario",
    "LifeEventImpact",
    "calculate_impact",
    "impact_table",
]

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

class LifeEventCategory(str, Enum):
    FAMILY = "family"
    CAREER = "career"
    HOUSING = "housing"
    RETIREMENT = "retirement"
    EDUCATION = "education"
    HEALTH = "health"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return self.value.title()


class IncomeChangeType(str, Enum):
    RAISE = "raise"
    REDUCTION = "reduction"
    BONUS = "bonus"
    SIDE_INCOME = "side_income"
    PASSIVE_INCOME = "passive_income"
    UNEMPLOYMENT_BENEFITS = "unemployment_benefits"
    SOCIAL_SECURITY = "social_security"
    PENSION = "pension"
    DISABILITY = "disability"


class ExpenseCategory(str, Enum):
    DEBT = "debt"
    HOME = "home"
    NECESSITIES = "necessities"
    TECH = "tech"
    ENTERTAINMENT = "entertainment"
    VEHICLE = "vehicle"
    EDUCATION = "education"
    FINANCE = "finance"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return self.value.title()


class TaxChangeType(str, Enum):
    CREDIT = "credit"        # reduces tax owed
    DEDUCTION = "deduction"  # reduces taxable income
    EXEMPTION = "exemption"  # dependent exemption


class SavingsChangeType(str, Enum):
    EMERGENCY = "emergency"
    RETIREMENT = "retirement"
    COLLEGE_529 = "college_529"
    HSA = "hsa"
    GENERAL = "general"
    WITHDRAWAL = "withdrawal"


class ChangeFrequency(str, Enum):
    ONE_TIME = "one_time"
    MONTHLY = "monthly"
    ANNUAL = "annual"

    @property
    def display_name(self) -> str:
        return "One-time" if self is ChangeFrequency.ONE_TIME else self.value.title()


class DurationUnit(str, Enum):
    MONTHS = "months"
    YEARS = "years"
    ONGOING = "ongoing"


@dataclass(frozen=True)
class EventDuration:
    """
    How long a change lasts.

    Build with :meth:`months`, :meth:`years` or :meth:`ongoing`.

    Examples
    --------
    >>> EventDuration.years(1).total_months
    12
    >>> EventDuration.ongoing().total_months is None
    True
    """

    unit: DurationUnit
    count: int = 0

    @classmethod
    def months(cls, n: int) -> "EventDuration":
        return cls(DurationUnit.MONTHS, int(n))

    @classmethod
    def years(cls, n: int) -> "EventDuration":
        return cls(DurationUnit.YEARS, int(n))

    @classmethod
    def ongoing(cls) -> "EventDuration":
        return cls(DurationUnit.ONGOING, 0)

    @property
    def total_months(self) -> Optional[int]:
        """Length in months, or None for an open-ended duration."""
        if self.unit is DurationUnit.MONTHS:
            return self.count
        elif self.unit is DurationUnit.YEARS:
            return self.count * MONTHS_PER_YEAR
        elif self.unit is DurationUnit.ONGOING:
            return None
        raise ValueError(f"Unknown duration unit: {self.unit}")

    @property
    def display_name(self) -> str:
        if self.unit is DurationUnit.ONGOING:
            return "Ongoing"
        noun = "month" if self.unit is DurationUnit.MONTHS else "year"
        return f"{self.count} {noun}{'' if self.count == 1 else 's'}"


# ---------------------------------------------------------------------------
# Changes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IncomeChange:
    """
    A change to household income.

    Parameters
    ----------
    type : IncomeChangeType
    amount : Decimal
        Dollars per ``frequency``, or percent of annual base salary when
        ``is_percentage`` (negative for reductions).
    is_percentage : bool, default False
    frequency : ChangeFrequency, default MONTHLY
    duration : EventDuration, optional
        Only affects amortization, see :meth:`monthly_impact`.
    reason : str
    """

    type: IncomeChangeType
    amount: Decimal
    is_percentage: bool = False
    frequency: ChangeFrequency = ChangeFrequency.MONTHLY
    duration: Optional[EventDuration] = None
    reason: str = ""
    id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))

    def resolved_amount(self, base_salary: Number) -> Decimal:
        """Dollar amount: percent of *base_salary* or the literal amount."""
        if self.is_percentage:
            return to_decimal(base_salary) * (self.amount / HUNDRED)
        return self.amount

    def monthly_impact(self, base_salary: Number) -> Decimal:
        """
        Average monthly effect over the first year.

        Durations under 12 months are amortized: the total effect
        (one-time or annual: the amount once; monthly: amount x months) is
        divided by 12. Otherwise one-time and annual amounts are divided by
        12 and monthly amounts are used as-is.
        """
        base = self.resolved_amount(base_salary)
        months = self.duration.total_months if self.duration is not None else None

        if months is not None and months < MONTHS_PER_YEAR:
            if self.frequency is ChangeFrequency.ONE_TIME:
                total = base
            elif self.frequency is ChangeFrequency.MONTHLY:
                total = base * months
            elif self.frequency is ChangeFrequency.ANNUAL:
                total = base
            else:
                raise ValueError(f"Unknown frequency: {self.frequency}")
            return total / MONTHS_PER_YEAR

        if self.frequency is ChangeFrequency.ONE_TIME:
            return base / MONTHS_PER_YEAR
        elif self.frequency is ChangeFrequency.MONTHLY:
            return base
        elif self.frequency is ChangeFrequency.ANNUAL:
            return base / MONTHS_PER_YEAR
        raise ValueError(f"Unknown frequency: {self.frequency}")


@dataclass(frozen=True)
class ExpenseChange:
    """
    A change to household spending (negative amounts are savings).

    One-time costs (``is_one_time``) never enter the monthly figure; they
    are totalled separately by :func:`calculate_impact`.
    """

    name: str
    amount: Decimal
    frequency: ChangeFrequency = ChangeFrequency.MONTHLY
    category: ExpenseCategory = ExpenseCategory.NECESSITIES
    is_one_time: bool = False
    duration: Optional[EventDuration] = None
    id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))

    @property
    def monthly_amount(self) -> Decimal:
        if self.is_one_time:
            return ZERO
        if self.frequency is ChangeFrequency.ONE_TIME:
            return ZERO
        elif self.frequency is ChangeFrequency.MONTHLY:
            return self.amount
        elif self.frequency is ChangeFrequency.ANNUAL:
            return self.amount / MONTHS_PER_YEAR
        raise ValueError(f"Unknown frequency: {self.frequency}")


@dataclass(frozen=True)
class TaxChange:
    """A change to annual taxes: a credit, deduction or exemption."""

    type: TaxChangeType
    name: str
    amount: Decimal
    is_percentage: bool = False
    id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))

    @property
    def annual_tax_effect(self) -> Decimal:
        """Annual tax delta; negative means lower taxes."""
        if self.type is TaxChangeType.CREDIT:
            return -self.amount
        elif self.type is TaxChangeType.DEDUCTION:
            return -(self.amount * SCENARIO_MARGINAL_RATE)
        elif self.type is TaxChangeType.EXEMPTION:
            return -(self.amount * SCENARIO_MARGINAL_RATE)
        raise ValueError(f"Unknown tax change: {self.type}")


@dataclass(frozen=True)
class SavingsChange:
    """A reallocation into or out of savings. Shown, never netted."""

    type: SavingsChangeType
    amount: Decimal
    is_percentage: bool = False
    reason: str = ""
    id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))


# ---------------------------------------------------------------------------
# Scenario and impact
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LifeEventScenario:
    """
    A named bundle of hypothetical changes.

    Parameters
    ----------
    name : str
    description : str
    icon : str
        Symbol name used by presentation layers.
    category : LifeEventCategory
    income_changes, expense_changes, tax_changes, savings_changes : tuple
        Zero or more changes of each kind.
    duration : EventDuration, optional
        Overall event length, for display. Each change carries its own
        duration for the arithmetic.
    id : str
    """

    name: str
    description: str = ""
    icon: str = "sparkles"
    category: LifeEventCategory = LifeEventCategory.OTHER
    income_changes: Tuple[IncomeChange, ...] = ()
    expense_changes: Tuple[ExpenseChange, ...] = ()
    tax_changes: Tuple[TaxChange, ...] = ()
    savings_changes: Tuple[SavingsChange, ...] = ()
    duration: Optional[EventDuration] = None
    id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self) -> None:
        for name in ("income_changes", "expense_changes", "tax_changes", "savings_changes"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def calculate_impact(self, base_salary: Number, current_net_monthly: Number) -> "LifeEventImpact":
        return calculate_impact(self, base_salary, current_net_monthly)


@dataclass(frozen=True)
class LifeEventImpact:
    """Projected effect of a scenario on the household budget."""

    scenario: LifeEventScenario
    monthly_income_change: Decimal
    monthly_expense_change: Decimal
    annual_tax_change: Decimal
    one_time_expenses: Decimal
    net_monthly_impact: Decimal
    net_annual_impact: Decimal
    current_net_monthly: Decimal = ZERO

    @property
    def is_positive(self) -> bool:
        return self.net_monthly_impact >= 0

    @property
    def savings_changes(self) -> Tuple[SavingsChange, ...]:
        return self.scenario.savings_changes

    @property
    def projected_net_monthly(self) -> Decimal:
        """Current net monthly income after the scenario."""
        return self.current_net_monthly + self.net_monthly_impact

    def to_dict(self) -> ImpactDict:
        return {
            "scenario": self.scenario.name,
            "monthly_income_change": self.monthly_income_change,
            "monthly_expense_change": self.monthly_expense_change,
            "annual_tax_change": self.annual_tax_change,
            "one_time_expenses": self.one_time_expenses,
            "net_monthly_impact": self.net_monthly_impact,
            "net_annual_impact": self.net_annual_impact,
            "is_positive": self.is_positive,
        }


def calculate_impact(
    scenario: LifeEventScenario,
    base_salary: Number,
    current_net_monthly: Number,
) -> LifeEventImpact:
    """
    Project *scenario* onto a household with the given salary and net pay.

    Parameters
    ----------
    scenario : LifeEventScenario
    base_salary : Decimal
        Annual gross salary; base for percentage income changes.
    current_net_monthly : Decimal
        Current monthly take-home. Carried on the result for
        ``projected_net_monthly``; it does not enter the impact arithmetic.

    Returns
    -------
    LifeEventImpact
        net_monthly = income - expenses + annual_tax / 12,
        net_annual = net_monthly * 12.
    """
    monthly_income = decimal_sum(c.monthly_impact(base_salary) for c in scenario.income_changes)
    monthly_expense = decimal_sum(c.monthly_amount for c in scenario.expense_changes)
    one_time = decimal_sum(c.amount for c in scenario.expense_changes if c.is_one_time)
    annual_tax = decimal_sum(c.annual_tax_effect for c in scenario.tax_changes)

    net_monthly = monthly_income - monthly_expense + annual_tax / MONTHS_PER_YEAR
    logger.debug(
        "Impact of %r: income=%s expense=%s tax=%s net_monthly=%s",
        scenario.name, monthly_income, monthly_expense, annual_tax, net_monthly,
    )
    return LifeEventImpact(
        scenario=scenario,
        monthly_income_change=monthly_income,
        monthly_expense_change=monthly_expense,
        annual_tax_change=annual_tax,
        one_time_expenses=one_time,
        net_monthly_impact=net_monthly,
        net_annual_impact=net_monthly * MONTHS_PER_YEAR,
        current_net_monthly=to_decimal(current_net_monthly),
    )


def impact_table(
    scenarios: Sequence[LifeEventScenario],
    base_salary: Number,
    current_net_monthly: Number,
) -> pd.DataFrame:
    """Build a comparison table with one row per scenario, indexed by name."""
    rows = [
        calculate_impact(s, base_salary, current_net_monthly).to_dict()
        for s in scenarios
    ]
    return summary_frame(
        rows,
        index="scenario",
        columns=[
            "monthly_income_change",
            "monthly_expense_change",
            "annual_tax_change",
            "one_time_expenses",
            "net_monthly_impact",
            "net_annual_impact",
            "is_positive",
        ],
    )
