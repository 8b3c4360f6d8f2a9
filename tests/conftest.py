"""
Pytest configuration and fixtures for the TakeHome test suite.

This module provides reusable fixtures for testing all TakeHome components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

from decimal import Decimal
from typing import List

import pytest

from takehome.deductions import DeductionEntry, DeductionInputType, DeductionType
from takehome.onboarding import DeductionSetupMode, HouseholdType, OnboardingContext
from takehome.scenario import (
    ChangeFrequency,
    EventDuration,
    ExpenseChange,
    IncomeChange,
    IncomeChangeType,
    LifeEventScenario,
    TaxChange,
    TaxChangeType,
)
from takehome.tax_engine import TaxCalculationInput, TaxCalculationResult
from takehome.timeframe import DeductionFrequency, TimeframeIncome


# ---------------------------------------------------------------------------
# Salary Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def salary() -> Decimal:
    """Standard annual gross salary for tests."""
    return Decimal("100000")


@pytest.fixture
def net_monthly() -> Decimal:
    """Standard monthly take-home pay for tests."""
    return Decimal("5000")


# ---------------------------------------------------------------------------
# Deduction Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def detailed_entries() -> List[DeductionEntry]:
    """
    A detailed-mode deduction setup.

    Traditional 401(k): 6% of salary
    Roth 401(k): $200/month
    HSA: $500/paycheck (over the limit)
    Health insurance: $150/month
    Union dues: $40/month
    FSA: disabled
    """
    return [
        DeductionEntry(
            DeductionType.TRADITIONAL_401K, 6,
            input_type=DeductionInputType.PERCENTAGE_OF_SALARY, enabled=True,
        ),
        DeductionEntry(
            DeductionType.ROTH_401K, 200,
            frequency=DeductionFrequency.MONTHLY, enabled=True,
        ),
        DeductionEntry(
            DeductionType.HSA, 500,
            frequency=DeductionFrequency.PER_PAYCHECK, enabled=True,
        ),
        DeductionEntry(
            DeductionType.HEALTH_INSURANCE, 150,
            frequency=DeductionFrequency.MONTHLY, enabled=True,
        ),
        DeductionEntry(
            DeductionType.UNION_DUES, 40,
            frequency=DeductionFrequency.MONTHLY, enabled=True,
        ),
        DeductionEntry(DeductionType.FSA, 1000, enabled=False),
    ]


# ---------------------------------------------------------------------------
# Scenario Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def simple_scenario() -> LifeEventScenario:
    """
    Small hand-built scenario with one change of each kind.

    Income: +$1,000/month side income
    Expense: $300/month, plus a $1,200 one-time cost
    Tax: $500 credit
    """
    return LifeEventScenario(
        name="Side Business",
        description="Freelance work on weekends",
        income_changes=(IncomeChange(IncomeChangeType.SIDE_INCOME, 1000),),
        expense_changes=(
            ExpenseChange("Software", 300),
            ExpenseChange(
                "Laptop", 1200,
                frequency=ChangeFrequency.ONE_TIME, is_one_time=True,
            ),
        ),
        tax_changes=(TaxChange(TaxChangeType.CREDIT, "Home office", 500),),
        duration=EventDuration.years(2),
    )


# ---------------------------------------------------------------------------
# Onboarding Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def single_quick() -> OnboardingContext:
    """Single earner, quick deduction setup (the default flow)."""
    return OnboardingContext()


@pytest.fixture
def couple_detailed() -> OnboardingContext:
    """Two incomes, detailed deduction setup (every step visible)."""
    return OnboardingContext(
        household_type=HouseholdType.TWO_INCOMES,
        deduction_setup_mode=DeductionSetupMode.DETAILED,
    )


# ---------------------------------------------------------------------------
# Tax Engine Fixtures
# ---------------------------------------------------------------------------

class FlatTaxEngine:
    """
    Fake engine charging a flat 25% on income after pre-tax deductions.

    Records every request it receives.
    """

    rate = Decimal("0.25")

    def __init__(self):
        self.requests: List[TaxCalculationInput] = []

    def compute_taxes(self, request: TaxCalculationInput) -> TaxCalculationResult:
        self.requests.append(request)
        taxable = request.gross_income - request.pre_tax_deductions - request.traditional_401k
        federal = taxable * self.rate
        net = taxable - federal - request.post_tax_deductions - request.roth_401k
        return TaxCalculationResult(
            gross_annual=request.gross_income,
            net_annual=net,
            timeframes=TimeframeIncome.from_annual(net),
            federal_tax=federal,
            federal_marginal_rate=Decimal("25"),
            state_code=request.state,
        )


class FailingTaxEngine:
    """Fake engine that raises a preset exception."""

    def __init__(self, error: Exception):
        self.error = error

    def compute_taxes(self, request: TaxCalculationInput) -> TaxCalculationResult:
        raise self.error


@pytest.fixture
def flat_engine() -> FlatTaxEngine:
    return FlatTaxEngine()


@pytest.fixture
def failing_engine():
    """Factory for engines raising the given exception."""
    def _make(error: Exception) -> FailingTaxEngine:
        return FailingTaxEngine(error)
    return _make
