"""
TakeHome - Household take-home pay modeling

Normalizes pay, payroll deductions, budget expenses and hypothetical life
events into comparable monthly and annual figures. Tax bracket computation
is delegated to an external engine (see tax_engine).

Modules
-------
- timeframe   : Period conversion (annual, monthly, per paycheck, hourly...)
- deductions  : Deduction catalog and annualizer with IRS limits
- scenario    : Life-event impact projection
- templates   : Built-in life-event scenarios
- onboarding  : Onboarding step visibility and navigation
- expenses    : Recurring budget expenses
- household   : Shared-expense splitting between two earners
- retirement  : 401(k) limits, employer match and contribution tax impact
- tax_engine  : Request assembly and error relaying for the tax engine
- config      : Pydantic configs and application settings
- utils       : Shared utilities (decimals, enum parsing, reporting)

"""

from .timeframe import PayFrequency, DeductionFrequency, TimeframeIncome
from .deductions import DeductionType, DeductionEntry, annual_amount
from .scenario import LifeEventScenario, calculate_impact
from .onboarding import OnboardingContext, OnboardingStep, next_step, previous_step
from .retirement import RetirementContributions, calculate_tax_impact
from . import utils
