"""
Boundary to the external tax engine.

Purpose
-------
TakeHome does not compute income tax brackets. It assembles a request from
the deduction annualizer's outputs, hands it to an external engine and
relays the engine's result or error unchanged.

Key components
--------------
- FilingStatus: the filing statuses the engine understands.
- TaxCalculationInput: request payload.
- TaxCalculationResult: engine response (gross/net, per-period net pay,
  federal/state/FICA amounts, rates).
- TaxEngine: protocol any engine implementation satisfies.
- build_tax_request: request assembly from a DeductionSummary.
- compute_taxes: single call into the engine with error relaying.
- compare_scenarios: two engine calls and the difference in net pay.

Error relaying
--------------
Errors the engine raises as TaxEngineError subclasses propagate untouched.
Anything else is wrapped in UnknownTaxEngineError with the original chained
as ``__cause__``. There are no retries.

Example
-------
>>> summary = quick_deductions(
...     100_000, traditional_401k=6,
...     traditional_401k_input=DeductionInputType.PERCENTAGE_OF_SALARY,
... )
>>> request = build_tax_request(100_000, summary, FilingStatus.SINGLE, "CA")
>>> result = compute_taxes(my_engine, request)  # any TaxEngine implementation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict

from typing_extensions import Protocol

from .constants import MONTHS_PER_YEAR
from .deductions import DeductionSummary
from .exceptions import TaxEngineError, UnknownTaxEngineError
from .timeframe import TimeframeIncome
from .utils import Number, to_decimal

__all__ = [
    "FilingStatus",
    "TaxCalculationInput",
    "TaxCalculationResult",
    "TaxEngine",
    "build_tax_request",
    "compute_taxes",
    "ScenarioComparison",
    "compare_scenarios",
]

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class FilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "married_filing_jointly"
    MARRIED_FILING_SEPARATELY = "married_filing_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_WIDOWER = "qualifying_widower"

    @property
    def display_name(self) -> str:
        return {
            FilingStatus.SINGLE: "Single",
            FilingStatus.MARRIED_FILING_JOINTLY: "Married Filing Jointly",
            FilingStatus.MARRIED_FILING_SEPARATELY: "Married Filing Separately",
            FilingStatus.HEAD_OF_HOUSEHOLD: "Head of Household",
            FilingStatus.QUALIFYING_WIDOWER: "Qualifying Widow(er)",
        }[self]

    @property
    def short_name(self) -> str:
        return {
            FilingStatus.SINGLE: "Single",
            FilingStatus.MARRIED_FILING_JOINTLY: "MFJ",
            FilingStatus.MARRIED_FILING_SEPARATELY: "MFS",
            FilingStatus.HEAD_OF_HOUSEHOLD: "HoH",
            FilingStatus.QUALIFYING_WIDOWER: "QW",
        }[self]


# ---------------------------------------------------------------------------
# Request / response
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaxCalculationInput:
    """
    Request handed to the tax engine. All amounts are annual.

    Parameters
    ----------
    gross_income : Decimal
    filing_status : FilingStatus
    state : str
        Two-letter state code, upper-cased on construction.
    pre_tax_deductions : Decimal
        Pre-tax deductions other than the 401(k) kinds.
    post_tax_deductions : Decimal
        Post-tax deductions other than the Roth 401(k).
    traditional_401k, roth_401k : Decimal
    """

    gross_income: Decimal
    filing_status: FilingStatus = FilingStatus.SINGLE
    state: str = "CA"
    pre_tax_deductions: Decimal = ZERO
    post_tax_deductions: Decimal = ZERO
    traditional_401k: Decimal = ZERO
    roth_401k: Decimal = ZERO

    def __post_init__(self) -> None:
        for name in (
            "gross_income",
            "pre_tax_deductions",
            "post_tax_deductions",
            "traditional_401k",
            "roth_401k",
        ):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(self, "state", self.state.strip().upper())

    def to_request_dict(self) -> Dict[str, str]:
        """Wire form: every value as a string, decimals without rounding."""
        return {
            "gross_income": str(self.gross_income),
            "filing_status": self.filing_status.value,
            "state": self.state,
            "pre_tax_deductions": str(self.pre_tax_deductions),
            "post_tax_deductions": str(self.post_tax_deductions),
            "traditional_401k": str(self.traditional_401k),
            "roth_401k": str(self.roth_401k),
        }


@dataclass(frozen=True)
class TaxCalculationResult:
    """Engine response. Rates are percentages (22 means 22%)."""

    gross_annual: Decimal
    net_annual: Decimal
    timeframes: TimeframeIncome
    federal_tax: Decimal = ZERO
    federal_effective_rate: Decimal = ZERO
    federal_marginal_rate: Decimal = ZERO
    state_code: str = ""
    state_income_tax: Decimal = ZERO
    state_local_tax: Decimal = ZERO
    state_sdi: Decimal = ZERO
    social_security: Decimal = ZERO
    medicare: Decimal = ZERO
    additional_medicare: Decimal = ZERO

    @property
    def state_total_tax(self) -> Decimal:
        return self.state_income_tax + self.state_local_tax + self.state_sdi

    @property
    def fica_total(self) -> Decimal:
        return self.social_security + self.medicare + self.additional_medicare

    @property
    def total_taxes(self) -> Decimal:
        return self.federal_tax + self.state_total_tax + self.fica_total

    @property
    def total_effective_rate(self) -> Decimal:
        if self.gross_annual <= 0:
            return ZERO
        return self.total_taxes / self.gross_annual * HUNDRED

    @property
    def take_home_percentage(self) -> Decimal:
        if self.gross_annual <= 0:
            return ZERO
        return self.net_annual / self.gross_annual * HUNDRED

    @property
    def net_monthly(self) -> Decimal:
        return self.timeframes.monthly


class TaxEngine(Protocol):
    """Anything that can turn a request into a result.

    Implementations signal malformed requests by raising a TaxEngineError
    subclass (InvalidDecimalError, InvalidFilingStatusError,
    InvalidStateError, CalculationError).
    """

    def compute_taxes(self, request: TaxCalculationInput) -> TaxCalculationResult:
        ...


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def build_tax_request(
    gross_income: Number,
    deductions: DeductionSummary,
    filing_status: FilingStatus = FilingStatus.SINGLE,
    state: str = "CA",
) -> TaxCalculationInput:
    """
    Assemble an engine request from annualized deductions.

    *deductions* comes from ``summarize_deductions`` (detailed setup) or
    ``quick_deductions`` (quick setup); both keep the 401(k) kinds out of the
    pre-/post-tax totals so they are never counted twice.
    """
    return TaxCalculationInput(
        gross_income=to_decimal(gross_income),
        filing_status=filing_status,
        state=state,
        pre_tax_deductions=deductions.pre_tax_total,
        post_tax_deductions=deductions.post_tax_total,
        traditional_401k=deductions.traditional_401k,
        roth_401k=deductions.roth_401k,
    )


def compute_taxes(engine: TaxEngine, request: TaxCalculationInput) -> TaxCalculationResult:
    """
    Call *engine* once and relay its outcome.

    Raises
    ------
    TaxEngineError
        Re-raised as-is when the engine raises one.
    UnknownTaxEngineError
        For any other exception, chained from the original.
    """
    logger.debug("Computing taxes for %s", request.to_request_dict())
    try:
        return engine.compute_taxes(request)
    except TaxEngineError:
        raise
    except Exception as exc:
        raise UnknownTaxEngineError(str(exc)) from exc


@dataclass(frozen=True)
class ScenarioComparison:
    """Net pay of a modified request against a base request."""

    base: TaxCalculationResult
    scenario: TaxCalculationResult
    net_difference: Decimal
    monthly_difference: Decimal

    @property
    def is_positive(self) -> bool:
        return self.net_difference > 0

    @property
    def net_difference_percent(self) -> Decimal:
        if self.base.net_annual <= 0:
            return ZERO
        return self.net_difference / self.base.net_annual * HUNDRED


def compare_scenarios(
    engine: TaxEngine,
    base: TaxCalculationInput,
    scenario: TaxCalculationInput,
) -> ScenarioComparison:
    """Compute both requests and the change in annual and monthly net pay."""
    base_result = compute_taxes(engine, base)
    scenario_result = compute_taxes(engine, scenario)
    difference = scenario_result.net_annual - base_result.net_annual
    return ScenarioComparison(
        base=base_result,
        scenario=scenario_result,
        net_difference=difference,
        monthly_difference=difference / MONTHS_PER_YEAR,
    )
