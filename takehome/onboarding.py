"""
Onboarding step visibility for TakeHome

Purpose
-------
The onboarding flow is a fixed, ordered list of steps. Some steps only
apply to two-income households and some only to detailed deduction setup.
This module decides which steps are visible and where "next" and "back"
lead, as pure functions of (current step, context, step list).

Key components
--------------
- HouseholdType, DeductionSetupMode:
    The two flags that gate step visibility.
- OnboardingContext:
    Immutable snapshot of those flags, passed explicitly to every call.
- OnboardingStep:
    The ordered steps, with titles and a should_show predicate.
- next_step / previous_step:
    Linear scans forward / backward for the nearest visible step. Return
    None at either end instead of wrapping.

Navigation is recomputed on every call. Changing the context mid-flow
changes which steps are reachable next; it never invalidates the step the
user is on.

Example
-------
>>> ctx = OnboardingContext(household_type=HouseholdType.SINGLE)
>>> next_step(OnboardingStep.INCOME, ctx)
<OnboardingStep.LOCATION: 'location'>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

__all__ = [
    "HouseholdType",
    "DeductionSetupMode",
    "OnboardingContext",
    "OnboardingStep",
    "visible_steps",
    "next_step",
    "previous_step",
    "progress",
    "first_step",
    "is_terminal",
    "skip_step",
]

logger = logging.getLogger(__name__)


class HouseholdType(str, Enum):
    SINGLE = "single"
    TWO_INCOMES = "two_incomes"
    PAIRED = "paired"  # linked accounts, not available yet

    @property
    def display_name(self) -> str:
        return {
            HouseholdType.SINGLE: "Single",
            HouseholdType.TWO_INCOMES: "Two Incomes",
            HouseholdType.PAIRED: "Paired Accounts",
        }[self]

    @property
    def description(self) -> str:
        return {
            HouseholdType.SINGLE: "Track your finances individually",
            HouseholdType.TWO_INCOMES: (
                "Enter your partner's income for proportional expense splitting"
            ),
            HouseholdType.PAIRED: "Link accounts for real-time household sync",
        }[self]

    @property
    def is_available(self) -> bool:
        return self is not HouseholdType.PAIRED


class DeductionSetupMode(str, Enum):
    QUICK = "quick"        # 401k + health insurance only
    DETAILED = "detailed"  # full itemized pre-tax / post-tax lists


@dataclass(frozen=True)
class OnboardingContext:
    household_type: HouseholdType = HouseholdType.SINGLE
    deduction_setup_mode: DeductionSetupMode = DeductionSetupMode.QUICK


class OnboardingStep(str, Enum):
    """Onboarding steps in flow order."""

    WELCOME = "welcome"
    HOUSEHOLD_TYPE = "household_type"
    INCOME = "income"
    PARTNER_INCOME = "partner_income"
    HOUSEHOLD_SUMMARY = "household_summary"
    LOCATION = "location"
    DEDUCTION_SETUP = "deduction_setup"
    DEDUCTIONS_PRE_TAX = "deductions_pre_tax"
    DEDUCTIONS_POST_TAX = "deductions_post_tax"
    REVEAL = "reveal"
    EXPENSES = "expenses"
    COMPLETE = "complete"

    @property
    def position(self) -> int:
        return _ORDER.index(self)

    @property
    def title(self) -> str:
        return _TITLES[self][0]

    @property
    def subtitle(self) -> str:
        return _TITLES[self][1]

    def should_show(self, context: OnboardingContext) -> bool:
        if self in (OnboardingStep.PARTNER_INCOME, OnboardingStep.HOUSEHOLD_SUMMARY):
            return context.household_type is HouseholdType.TWO_INCOMES
        if self in (OnboardingStep.DEDUCTIONS_PRE_TAX, OnboardingStep.DEDUCTIONS_POST_TAX):
            return context.deduction_setup_mode is DeductionSetupMode.DETAILED
        return True


_ORDER: List[OnboardingStep] = list(OnboardingStep)

_TITLES = {
    OnboardingStep.WELCOME: ("Welcome", "Let's calculate your real take-home pay"),
    OnboardingStep.HOUSEHOLD_TYPE: ("Household", "Who's in your household?"),
    OnboardingStep.INCOME: ("Income", "Enter your salary"),
    OnboardingStep.PARTNER_INCOME: ("Partner Income", "Enter your partner's income"),
    OnboardingStep.HOUSEHOLD_SUMMARY: ("Your Household", "Your combined income"),
    OnboardingStep.LOCATION: ("Location", "Where do you live?"),
    OnboardingStep.DEDUCTION_SETUP: ("Deductions", "How detailed do you want to go?"),
    OnboardingStep.DEDUCTIONS_PRE_TAX: ("Pre-Tax Deductions", "Deductions before taxes"),
    OnboardingStep.DEDUCTIONS_POST_TAX: ("Post-Tax Deductions", "Deductions after taxes"),
    OnboardingStep.REVEAL: ("Your Take-Home", "Here's what you actually take home"),
    OnboardingStep.EXPENSES: ("Expenses", "Add your expenses to track spending"),
    OnboardingStep.COMPLETE: ("All Set!", "You're ready to manage your finances"),
}


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

def visible_steps(
    context: OnboardingContext,
    steps: Optional[Sequence[OnboardingStep]] = None,
) -> List[OnboardingStep]:
    """Steps shown for *context*, in order."""
    steps = _ORDER if steps is None else steps
    return [s for s in steps if s.should_show(context)]


def next_step(
    current: OnboardingStep,
    context: OnboardingContext,
    steps: Optional[Sequence[OnboardingStep]] = None,
) -> Optional[OnboardingStep]:
    """
    First visible step after *current*.

    Parameters
    ----------
    current : OnboardingStep
        Need not itself be visible under *context*.
    context : OnboardingContext
    steps : sequence of OnboardingStep, optional
        Step order to scan; defaults to the full flow.

    Returns
    -------
    OnboardingStep or None
        None when no later step is visible, or *current* is not in *steps*.
    """
    steps = _ORDER if steps is None else list(steps)
    if current not in steps:
        return None
    for candidate in steps[steps.index(current) + 1:]:
        if candidate.should_show(context):
            logger.debug("Advancing from %s to %s", current.value, candidate.value)
            return candidate
    return None


def previous_step(
    current: OnboardingStep,
    context: OnboardingContext,
    steps: Optional[Sequence[OnboardingStep]] = None,
) -> Optional[OnboardingStep]:
    """Nearest visible step before *current*, or None. Mirror of :func:`next_step`."""
    steps = _ORDER if steps is None else list(steps)
    if current not in steps:
        return None
    for candidate in reversed(steps[:steps.index(current)]):
        if candidate.should_show(context):
            logger.debug("Going back from %s to %s", current.value, candidate.value)
            return candidate
    return None


def progress(current: OnboardingStep, context: OnboardingContext) -> float:
    """Fraction of the visible flow completed at *current* (0.0 to 1.0).

    Returns 0.0 when *current* is hidden under *context*.
    """
    steps = visible_steps(context)
    if current not in steps:
        return 0.0
    return steps.index(current) / max(len(steps) - 1, 1)


def first_step() -> OnboardingStep:
    return _ORDER[0]


def is_terminal(step: OnboardingStep) -> bool:
    return step is _ORDER[-1]


def skip_step(current: OnboardingStep) -> OnboardingStep:
    """Skip an optional step. Only expenses can be skipped; it jumps to complete."""
    if current is OnboardingStep.EXPENSES:
        return OnboardingStep.COMPLETE
    return current
