"""
Retirement contribution planning for TakeHome.

Purpose
-------
Checks a household's 401(k) elections against the combined IRS limit,
values the employer match, and measures what the contributions cost in
take-home pay once the tax engine has priced them.

Key components
--------------
- contribution_limit:
    Combined traditional + Roth 401(k) limit, with the age-50 catch-up
    taken from the deduction catalog.

- EmployerMatch:
    Match rate, the salary percentage it applies up to, and vesting.

- RetirementContributions:
    Employee elections plus derived figures: remaining room, excess over
    the limit, employer and vested employer contribution, total.

- RetirementTaxImpact / calculate_tax_impact:
    Four engine calls (current elections, none, all traditional, all Roth)
    reduced to tax savings, take-home reduction and the traditional vs Roth
    difference in monthly net pay.

Example
-------
>>> plan = RetirementContributions(
...     gross_salary=100_000, traditional_401k=6_000,
...     employer_match=EmployerMatch(match_percentage=50, cap_percentage=6),
... )
>>> plan.employer_contribution == 3000
True
>>> plan.remaining_room
Decimal('17000')
>>> impact = calculate_tax_impact(my_engine, plan, request)  # any TaxEngine
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from .constants import MONTHS_PER_YEAR
from .deductions import DeductionType
from .tax_engine import (
    ScenarioComparison,
    TaxCalculationInput,
    TaxEngine,
    compare_scenarios,
)
from .utils import to_decimal

__all__ = [
    "contribution_limit",
    "EmployerMatch",
    "RetirementContributions",
    "RetirementTaxImpact",
    "calculate_tax_impact",
]

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def contribution_limit(is_over_50: bool = False) -> Decimal:
    """Combined employee 401(k) limit: 23,000, or 30,500 with the catch-up."""
    kind = DeductionType.TRADITIONAL_401K
    if is_over_50:
        return kind.annual_limit + kind.catch_up_limit
    return kind.annual_limit


# ---------------------------------------------------------------------------
# Contributions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmployerMatch:
    """
    Employer matching formula.

    Parameters
    ----------
    match_percentage : Decimal
        Share of the employee's contribution matched (50 means 50 cents per
        dollar).
    cap_percentage : Decimal, default 6
        Employee contributions are matched up to this percent of salary.
    vesting_percentage : Decimal, default 100
        Portion of the match the employee owns.
    """

    match_percentage: Decimal
    cap_percentage: Decimal = Decimal("6")
    vesting_percentage: Decimal = HUNDRED

    def __post_init__(self) -> None:
        for name in ("match_percentage", "cap_percentage", "vesting_percentage"):
            value = to_decimal(getattr(self, name))
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
            object.__setattr__(self, name, value)
        if self.vesting_percentage > HUNDRED:
            raise ValueError(
                f"vesting_percentage must be at most 100, got {self.vesting_percentage}"
            )


@dataclass(frozen=True)
class RetirementContributions:
    """Annual employee 401(k) elections and the employer match on top."""

    gross_salary: Decimal
    traditional_401k: Decimal = ZERO
    roth_401k: Decimal = ZERO
    is_over_50: bool = False
    employer_match: Optional[EmployerMatch] = None

    def __post_init__(self) -> None:
        for name in ("gross_salary", "traditional_401k", "roth_401k"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @property
    def total_employee_contribution(self) -> Decimal:
        return self.traditional_401k + self.roth_401k

    @property
    def contribution_limit(self) -> Decimal:
        return contribution_limit(self.is_over_50)

    @property
    def remaining_room(self) -> Decimal:
        return max(ZERO, self.contribution_limit - self.total_employee_contribution)

    @property
    def is_over_limit(self) -> bool:
        return self.total_employee_contribution > self.contribution_limit

    @property
    def excess_amount(self) -> Decimal:
        return max(ZERO, self.total_employee_contribution - self.contribution_limit)

    @property
    def contribution_percent(self) -> Decimal:
        """Employee contributions as a percent of gross salary."""
        if self.gross_salary <= 0:
            return ZERO
        return self.total_employee_contribution / self.gross_salary * HUNDRED

    @property
    def employer_contribution(self) -> Decimal:
        """Match on contributions up to the cap percent of salary."""
        match = self.employer_match
        if match is None or self.gross_salary <= 0:
            return ZERO
        matchable = min(self.contribution_percent, match.cap_percentage)
        return self.gross_salary * (matchable / HUNDRED) * (match.match_percentage / HUNDRED)

    @property
    def vested_employer_contribution(self) -> Decimal:
        if self.employer_match is None:
            return ZERO
        return self.employer_contribution * (self.employer_match.vesting_percentage / HUNDRED)

    @property
    def total_retirement_contribution(self) -> Decimal:
        return self.total_employee_contribution + self.vested_employer_contribution

    def max_traditional(self) -> "RetirementContributions":
        """Fill the remaining limit with traditional contributions."""
        return replace(
            self, traditional_401k=max(ZERO, self.contribution_limit - self.roth_401k)
        )

    def max_roth(self) -> "RetirementContributions":
        """Fill the remaining limit with Roth contributions."""
        return replace(
            self, roth_401k=max(ZERO, self.contribution_limit - self.traditional_401k)
        )


# ---------------------------------------------------------------------------
# Tax impact
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RetirementTaxImpact:
    """
    Engine-priced effect of the contributions.

    ``current`` compares no contributions (base) with the current
    elections; ``strategy`` compares all-Roth (base) with all-traditional
    for the same total.
    """

    traditional_401k: Decimal
    current: ScenarioComparison
    strategy: ScenarioComparison

    @property
    def annual_tax_savings(self) -> Decimal:
        return self.current.base.total_taxes - self.current.scenario.total_taxes

    @property
    def monthly_tax_savings(self) -> Decimal:
        return self.annual_tax_savings / MONTHS_PER_YEAR

    @property
    def effective_cost(self) -> Decimal:
        """Traditional contributions net of the tax they save."""
        return self.traditional_401k - self.annual_tax_savings

    @property
    def take_home_reduction(self) -> Decimal:
        return -self.current.net_difference

    @property
    def monthly_take_home_reduction(self) -> Decimal:
        return self.take_home_reduction / MONTHS_PER_YEAR

    @property
    def traditional_net_monthly(self) -> Decimal:
        return self.strategy.scenario.net_monthly

    @property
    def roth_net_monthly(self) -> Decimal:
        return self.strategy.base.net_monthly

    @property
    def traditional_vs_roth_difference(self) -> Decimal:
        """Positive when all-traditional leaves more monthly take-home pay."""
        return self.traditional_net_monthly - self.roth_net_monthly


def calculate_tax_impact(
    engine: TaxEngine,
    contributions: RetirementContributions,
    request: TaxCalculationInput,
) -> Optional[RetirementTaxImpact]:
    """
    Price *contributions* through *engine*.

    Parameters
    ----------
    engine : TaxEngine
    contributions : RetirementContributions
    request : TaxCalculationInput
        Household request supplying filing status, state and the other
        deductions. Its gross income and 401(k) fields are overridden.

    Returns
    -------
    RetirementTaxImpact or None
        None when gross salary is not positive; the engine is not called.

    Raises
    ------
    TaxEngineError
        Relayed from the engine, as in :func:`compute_taxes`.
    """
    if contributions.gross_salary <= 0:
        return None

    base = replace(
        request,
        gross_income=contributions.gross_salary,
        traditional_401k=ZERO,
        roth_401k=ZERO,
    )
    total = contributions.total_employee_contribution
    logger.debug(
        "Pricing 401(k) elections traditional=%s roth=%s",
        contributions.traditional_401k, contributions.roth_401k,
    )

    current = compare_scenarios(
        engine,
        base,
        replace(
            base,
            traditional_401k=contributions.traditional_401k,
            roth_401k=contributions.roth_401k,
        ),
    )
    strategy = compare_scenarios(
        engine,
        replace(base, roth_401k=total),
        replace(base, traditional_401k=total),
    )
    return RetirementTaxImpact(
        traditional_401k=contributions.traditional_401k,
        current=current,
        strategy=strategy,
    )
