"""
Configuration management module for TakeHome.

Purpose
-------
Pydantic models for everything TakeHome reads from files or the
environment: saved life-event scenarios, a household profile and global
application settings. The models validate and coerce raw input, then
convert to the frozen dataclasses the calculation modules use.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: model_dump(mode="json") writes Decimals as strings
- Environment-aware: AppSettings reads TAKEHOME_* variables and .env files
- Boundary only: the calculation core never imports this module

Example
-------
>>> from takehome.config import LifeEventScenarioConfig
>>> cfg = LifeEventScenarioConfig.model_validate({
...     "name": "Side gig",
...     "income_changes": [{"type": "side_income", "amount": "800"}],
... })
>>> scenario = cfg.to_domain()
>>> scenario.income_changes[0].amount
Decimal('800')
"""

from __future__ import annotations
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from .deductions import (
    DeductionEntry,
    DeductionInputType,
    DeductionSummary,
    DeductionType,
    quick_deductions,
    summarize_deductions,
)
from .onboarding import DeductionSetupMode, HouseholdType
from .scenario import (
    ChangeFrequency,
    DurationUnit,
    EventDuration,
    ExpenseCategory,
    ExpenseChange,
    IncomeChange,
    IncomeChangeType,
    LifeEventCategory,
    LifeEventScenario,
    SavingsChange,
    SavingsChangeType,
    TaxChange,
    TaxChangeType,
)
from .tax_engine import FilingStatus, TaxCalculationInput, build_tax_request
from .timeframe import DeductionFrequency, PayFrequency

__all__ = [
    "EventDurationConfig",
    "IncomeChangeConfig",
    "ExpenseChangeConfig",
    "TaxChangeConfig",
    "SavingsChangeConfig",
    "LifeEventScenarioConfig",
    "DeductionEntryConfig",
    "ProfileConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Scenario Configuration
# ---------------------------------------------------------------------------

class EventDurationConfig(BaseModel):
    """
    Duration of a change or event.

    Attributes
    ----------
    unit : {"months", "years", "ongoing"}
    count : int
        Number of months or years. Ignored for "ongoing".

    Examples
    --------
    >>> EventDurationConfig(unit="months", count=6).to_domain().total_months
    6
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    unit: DurationUnit = Field(description="months, years or ongoing")
    count: int = Field(default=0, ge=0, le=1200, description="Length in units")

    def to_domain(self) -> EventDuration:
        if self.unit is DurationUnit.MONTHS:
            return EventDuration.months(self.count)
        elif self.unit is DurationUnit.YEARS:
            return EventDuration.years(self.count)
        return EventDuration.ongoing()

    @classmethod
    def from_domain(cls, duration: EventDuration) -> "EventDurationConfig":
        return cls(unit=duration.unit, count=duration.count)


def _duration(cfg: Optional[EventDurationConfig]) -> Optional[EventDuration]:
    return cfg.to_domain() if cfg is not None else None


def _duration_cfg(duration: Optional[EventDuration]) -> Optional[EventDurationConfig]:
    return EventDurationConfig.from_domain(duration) if duration is not None else None


class IncomeChangeConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: IncomeChangeType
    amount: Decimal = Field(description="Dollars, or percent of salary if is_percentage")
    is_percentage: bool = False
    frequency: ChangeFrequency = ChangeFrequency.MONTHLY
    duration: Optional[EventDurationConfig] = None
    reason: str = Field(default="", max_length=200)

    def to_domain(self) -> IncomeChange:
        return IncomeChange(
            type=self.type,
            amount=self.amount,
            is_percentage=self.is_percentage,
            frequency=self.frequency,
            duration=_duration(self.duration),
            reason=self.reason,
        )

    @classmethod
    def from_domain(cls, change: IncomeChange) -> "IncomeChangeConfig":
        return cls(
            type=change.type,
            amount=change.amount,
            is_percentage=change.is_percentage,
            frequency=change.frequency,
            duration=_duration_cfg(change.duration),
            reason=change.reason,
        )


class ExpenseChangeConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    amount: Decimal = Field(description="Dollars per frequency; negative for savings")
    frequency: ChangeFrequency = ChangeFrequency.MONTHLY
    category: ExpenseCategory = ExpenseCategory.NECESSITIES
    is_one_time: bool = False
    duration: Optional[EventDurationConfig] = None

    def to_domain(self) -> ExpenseChange:
        return ExpenseChange(
            name=self.name,
            amount=self.amount,
            frequency=self.frequency,
            category=self.category,
            is_one_time=self.is_one_time,
            duration=_duration(self.duration),
        )

    @classmethod
    def from_domain(cls, change: ExpenseChange) -> "ExpenseChangeConfig":
        return cls(
            name=change.name,
            amount=change.amount,
            frequency=change.frequency,
            category=change.category,
            is_one_time=change.is_one_time,
            duration=_duration_cfg(change.duration),
        )


class TaxChangeConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: TaxChangeType
    name: str = Field(min_length=1, max_length=100)
    amount: Decimal
    is_percentage: bool = False

    def to_domain(self) -> TaxChange:
        return TaxChange(
            type=self.type,
            name=self.name,
            amount=self.amount,
            is_percentage=self.is_percentage,
        )

    @classmethod
    def from_domain(cls, change: TaxChange) -> "TaxChangeConfig":
        return cls(
            type=change.type,
            name=change.name,
            amount=change.amount,
            is_percentage=change.is_percentage,
        )


class SavingsChangeConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: SavingsChangeType
    amount: Decimal
    is_percentage: bool = False
    reason: str = Field(default="", max_length=200)

    def to_domain(self) -> SavingsChange:
        return SavingsChange(
            type=self.type,
            amount=self.amount,
            is_percentage=self.is_percentage,
            reason=self.reason,
        )

    @classmethod
    def from_domain(cls, change: SavingsChange) -> "SavingsChangeConfig":
        return cls(
            type=change.type,
            amount=change.amount,
            is_percentage=change.is_percentage,
            reason=change.reason,
        )


class LifeEventScenarioConfig(BaseModel):
    """
    A saved life-event scenario.

    Attributes
    ----------
    name : str
        Scenario name (1-100 characters).
    description : str
    icon : str
    category : LifeEventCategory
    income_changes, expense_changes, tax_changes, savings_changes : list
        Change configurations; each may be empty.
    duration : EventDurationConfig, optional
        Overall event duration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100, description="Scenario name")
    description: str = Field(default="", max_length=500)
    icon: str = Field(default="sparkles")
    category: LifeEventCategory = LifeEventCategory.OTHER
    income_changes: List[IncomeChangeConfig] = Field(default_factory=list)
    expense_changes: List[ExpenseChangeConfig] = Field(default_factory=list)
    tax_changes: List[TaxChangeConfig] = Field(default_factory=list)
    savings_changes: List[SavingsChangeConfig] = Field(default_factory=list)
    duration: Optional[EventDurationConfig] = None

    def to_domain(self) -> LifeEventScenario:
        return LifeEventScenario(
            name=self.name,
            description=self.description,
            icon=self.icon,
            category=self.category,
            income_changes=tuple(c.to_domain() for c in self.income_changes),
            expense_changes=tuple(c.to_domain() for c in self.expense_changes),
            tax_changes=tuple(c.to_domain() for c in self.tax_changes),
            savings_changes=tuple(c.to_domain() for c in self.savings_changes),
            duration=_duration(self.duration),
        )

    @classmethod
    def from_domain(cls, scenario: LifeEventScenario) -> "LifeEventScenarioConfig":
        return cls(
            name=scenario.name,
            description=scenario.description,
            icon=scenario.icon,
            category=scenario.category,
            income_changes=[IncomeChangeConfig.from_domain(c) for c in scenario.income_changes],
            expense_changes=[ExpenseChangeConfig.from_domain(c) for c in scenario.expense_changes],
            tax_changes=[TaxChangeConfig.from_domain(c) for c in scenario.tax_changes],
            savings_changes=[SavingsChangeConfig.from_domain(c) for c in scenario.savings_changes],
            duration=_duration_cfg(scenario.duration),
        )


# ---------------------------------------------------------------------------
# Profile Configuration
# ---------------------------------------------------------------------------

class DeductionEntryConfig(BaseModel):
    """
    One payroll deduction in a saved profile.

    ``frequency`` is kept for percentage entries even though it has no
    effect on their annual amount.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: DeductionType
    amount: Decimal = Decimal("0")
    frequency: DeductionFrequency = DeductionFrequency.ANNUAL
    input_type: DeductionInputType = DeductionInputType.DOLLAR_AMOUNT
    enabled: bool = True

    @field_validator("input_type")
    @classmethod
    def validate_percentage(cls, v, info):
        """Percent-of-salary amounts cannot exceed 100."""
        amount = info.data.get("amount", Decimal("0"))
        if v is DeductionInputType.PERCENTAGE_OF_SALARY and amount > 100:
            raise ValueError(f"percentage amount ({amount}) must be <= 100")
        return v

    def to_domain(self) -> DeductionEntry:
        return DeductionEntry(
            type=self.type,
            amount=self.amount,
            frequency=self.frequency,
            input_type=self.input_type,
            enabled=self.enabled,
        )


class ProfileConfig(BaseModel):
    """
    A household profile: salary, location and payroll deductions.

    Attributes
    ----------
    name : str
    gross_salary : Decimal
        Annual gross salary (>= 0).
    pay_frequency : PayFrequency
    filing_status : FilingStatus
    state : str
        Two-letter state code.
    household_type : HouseholdType
    deduction_setup_mode : DeductionSetupMode
        "quick" uses traditional_401k / health_insurance; "detailed" uses
        the itemized ``deductions`` list.
    traditional_401k, health_insurance : Decimal
        Quick-mode values, dollars per year or percent of salary.
    deductions : list of DeductionEntryConfig
        Detailed-mode entries.
    current_net_monthly : Decimal, optional
        Known monthly take-home pay, used for scenario projections.

    Examples
    --------
    >>> profile = ProfileConfig(gross_salary=100_000, state="ny")
    >>> profile.state
    'NY'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="My Profile", min_length=1, max_length=100)
    gross_salary: Decimal = Field(ge=0, description="Annual gross salary")
    pay_frequency: PayFrequency = PayFrequency.BI_WEEKLY
    filing_status: FilingStatus = FilingStatus.SINGLE
    state: str = Field(default="CA", min_length=2, max_length=2)
    household_type: HouseholdType = HouseholdType.SINGLE
    deduction_setup_mode: DeductionSetupMode = DeductionSetupMode.QUICK
    traditional_401k: Decimal = Field(default=Decimal("0"), ge=0)
    traditional_401k_input: DeductionInputType = DeductionInputType.PERCENTAGE_OF_SALARY
    health_insurance: Decimal = Field(default=Decimal("0"), ge=0)
    health_insurance_input: DeductionInputType = DeductionInputType.DOLLAR_AMOUNT
    deductions: List[DeductionEntryConfig] = Field(default_factory=list)
    current_net_monthly: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("state")
    @classmethod
    def validate_state(cls, v):
        """Normalize state codes to upper case letters."""
        if not v.isalpha():
            raise ValueError(f"state must be a two-letter code, got '{v}'")
        return v.upper()

    def deduction_entries(self) -> List[DeductionEntry]:
        return [d.to_domain() for d in self.deductions]

    def deduction_summary(self) -> DeductionSummary:
        """Annualized deductions for the configured setup mode."""
        if self.deduction_setup_mode is DeductionSetupMode.QUICK:
            return quick_deductions(
                self.gross_salary,
                self.traditional_401k,
                self.health_insurance,
                traditional_401k_input=self.traditional_401k_input,
                health_insurance_input=self.health_insurance_input,
            )
        return summarize_deductions(self.deduction_entries(), self.gross_salary, self.pay_frequency)

    def tax_request(self) -> TaxCalculationInput:
        return build_tax_request(
            self.gross_salary,
            self.deduction_summary(),
            filing_status=self.filing_status,
            state=self.state,
        )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    should be prefixed with TAKEHOME_ (e.g., TAKEHOME_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging)
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    default_pay_frequency : PayFrequency
        Pay frequency used by the CLI when none is given
    default_state : str
        State code used when a profile does not specify one

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = ConfigDict(
        env_prefix="TAKEHOME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    default_pay_frequency: PayFrequency = Field(
        default=PayFrequency.BI_WEEKLY,
        description="Default pay frequency for per-paycheck amounts"
    )
    default_state: str = Field(
        default="CA",
        min_length=2,
        max_length=2,
        description="Default state code"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
