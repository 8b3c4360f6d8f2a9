"""
Type definitions for TakeHome.

Purpose
-------
Provides TypedDict definitions for the plain-dictionary views returned by
``to_dict()`` methods. Presentation layers (CLI, reports) consume these
instead of reaching into the dataclasses.

Type Definitions
----------------
TimeframeIncomeDict
    Canonical period amounts: {"annual", "monthly", "bi_weekly", ...}

ImpactDict
    Scenario impact summary: {"monthly_income_change", ..., "is_positive"}

DeductionSummaryDict
    Deduction totals handed to the tax engine request.

HouseholdSplitDict
    Shared-expense allocation between two incomes.
"""

from decimal import Decimal

from typing_extensions import TypedDict

__all__ = [
    "TimeframeIncomeDict",
    "ImpactDict",
    "DeductionSummaryDict",
    "HouseholdSplitDict",
]


class TimeframeIncomeDict(TypedDict):
    """
    Amounts for the six canonical periods.

    Examples
    --------
    >>> tf: TimeframeIncomeDict = TimeframeIncome.from_annual(104000).to_dict()
    >>> tf["bi_weekly"]
    Decimal('4000')
    """

    annual: Decimal
    monthly: Decimal
    bi_weekly: Decimal
    weekly: Decimal
    daily: Decimal
    hourly: Decimal


class ImpactDict(TypedDict):
    """
    Scenario impact summary from LifeEventImpact.to_dict().

    Attributes
    ----------
    scenario : str
        Scenario name.
    monthly_income_change : Decimal
        Sum of income-change monthly impacts.
    monthly_expense_change : Decimal
        Sum of recurring expense-change monthly amounts.
    annual_tax_change : Decimal
        Estimated annual tax delta (negative = lower taxes).
    one_time_expenses : Decimal
        Total of one-time costs, tracked outside the monthly figure.
    net_monthly_impact : Decimal
        income - expenses + tax / 12.
    net_annual_impact : Decimal
        net_monthly_impact * 12.
    is_positive : bool
        True when net_monthly_impact >= 0.
    """

    scenario: str
    monthly_income_change: Decimal
    monthly_expense_change: Decimal
    annual_tax_change: Decimal
    one_time_expenses: Decimal
    net_monthly_impact: Decimal
    net_annual_impact: Decimal
    is_positive: bool


class DeductionSummaryDict(TypedDict):
    pre_tax_total: Decimal
    post_tax_total: Decimal
    traditional_401k: Decimal
    roth_401k: Decimal
    total: Decimal


class HouseholdSplitDict(TypedDict):
    primary_ratio: Decimal
    partner_ratio: Decimal
    primary_monthly_amount: Decimal
    partner_monthly_amount: Decimal
