"""
Deduction modeling module for TakeHome.

Purpose
-------
Turns payroll deduction entries into annual dollar amounts. An entry may be
a dollar amount (per year, month or paycheck) or a percentage of salary;
tax-advantaged kinds are capped at their IRS annual limit.

Key components
--------------
- DeductionType:
    Closed catalog of supported deductions. Each kind knows whether it is
    pre-tax and carries its annual limit and catch-up allowance, if any.

- DeductionEntry:
    One user-entered deduction (kind, amount, frequency, input type,
    enabled flag).

- annual_amount / exceeds_limit:
    The annualizer. Disabled or non-positive entries contribute nothing;
    percentages are always of annual salary; limits cap the result.

- DeductionSummary / summarize_deductions / quick_deductions:
    Totals in the shape the tax engine request expects (pre-tax, post-tax,
    traditional and Roth 401(k) reported separately).

Design principles
-----------------
- Pure and total: malformed amounts normalize to 0 or pass through;
  nothing raises.
- Catch-up limits are informational. They are never added to the cap;
  callers that want them must add them explicitly.
- In percentage mode the stored frequency is kept (so entries round-trip
  unchanged when the user flips modes) but never consulted.

Example
-------
>>> from takehome.deductions import DeductionEntry, DeductionType
>>> from takehome.timeframe import DeductionFrequency, PayFrequency
>>> hsa = DeductionEntry(DeductionType.HSA, amount=500,
...                      frequency=DeductionFrequency.PER_PAYCHECK, enabled=True)
>>> hsa.annual_amount(100_000, PayFrequency.BI_WEEKLY)
Decimal('4150')
>>> hsa.exceeds_limit(100_000, PayFrequency.BI_WEEKLY)
True
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional, Union

from .constants import (
    CATCH_UP_401K,
    CATCH_UP_HSA,
    LIMIT_401K,
    LIMIT_COMMUTER,
    LIMIT_DEPENDENT_CARE_FSA,
    LIMIT_FSA,
    LIMIT_HSA,
)
from .timeframe import DeductionFrequency, PayFrequency
from .types import DeductionSummaryDict
from .utils import Number, decimal_sum, to_decimal

__all__ = [
    "DeductionType",
    "DeductionInputType",
    "DeductionEntry",
    "DeductionSummary",
    "annual_amount",
    "exceeds_limit",
    "create_default_entries",
    "summarize_deductions",
    "quick_deductions",
]

ZERO = Decimal("0")
HUNDRED = Decimal("100")


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class DeductionType(str, Enum):
    """All supported payroll deduction kinds."""

    # Retirement
    TRADITIONAL_401K = "traditional_401k"
    ROTH_401K = "roth_401k"
    TRADITIONAL_403B = "traditional_403b"
    TRADITIONAL_457B = "traditional_457b"
    # Insurance
    HEALTH_INSURANCE = "health_insurance"
    DENTAL_INSURANCE = "dental_insurance"
    VISION_INSURANCE = "vision_insurance"
    # Savings accounts
    HSA = "hsa"
    FSA = "fsa"
    DEPENDENT_CARE_FSA = "dependent_care_fsa"
    # Benefits
    COMMUTER_TRANSIT = "commuter_transit"
    COMMUTER_PARKING = "commuter_parking"
    LIFE_INSURANCE = "life_insurance"
    # Post-tax
    UNION_DUES = "union_dues"
    GARNISHMENTS = "garnishments"
    CHARITABLE_DONATIONS = "charitable_donations"
    OTHER_PRE_TAX = "other_pre_tax"
    OTHER_POST_TAX = "other_post_tax"

    @property
    def is_pre_tax(self) -> bool:
        return self not in _POST_TAX

    @property
    def display_name(self) -> str:
        return _CATALOG[self][0]

    @property
    def description(self) -> str:
        return _CATALOG[self][1]

    @property
    def annual_limit(self) -> Optional[Decimal]:
        """IRS annual limit for 2024, or None when the kind has no limit."""
        return _ANNUAL_LIMITS.get(self)

    @property
    def catch_up_limit(self) -> Optional[Decimal]:
        """Additional age-based allowance. Shown to the user, never auto-applied."""
        return _CATCH_UP_LIMITS.get(self)

    @property
    def is_retirement_401k(self) -> bool:
        return self in (DeductionType.TRADITIONAL_401K, DeductionType.ROTH_401K)

    @classmethod
    def pre_tax_types(cls) -> List["DeductionType"]:
        return [t for t in cls if t.is_pre_tax]

    @classmethod
    def post_tax_types(cls) -> List["DeductionType"]:
        return [t for t in cls if not t.is_pre_tax]


_POST_TAX = frozenset({
    DeductionType.ROTH_401K,
    DeductionType.UNION_DUES,
    DeductionType.GARNISHMENTS,
    DeductionType.CHARITABLE_DONATIONS,
    DeductionType.OTHER_POST_TAX,
})

_CATALOG = {
    DeductionType.TRADITIONAL_401K: (
        "Traditional 401(k)",
        "Reduces taxable income now; taxed on withdrawal in retirement"),
    DeductionType.ROTH_401K: (
        "Roth 401(k)",
        "Contributed after-tax; grows and withdraws tax-free"),
    DeductionType.TRADITIONAL_403B: (
        "403(b)",
        "Retirement plan for nonprofit, education, and government workers"),
    DeductionType.TRADITIONAL_457B: (
        "457(b)",
        "Deferred compensation plan for state/local government employees"),
    DeductionType.HEALTH_INSURANCE: (
        "Health Insurance",
        "Your portion of employer-sponsored health insurance premiums"),
    DeductionType.DENTAL_INSURANCE: (
        "Dental Insurance", "Dental coverage premiums"),
    DeductionType.VISION_INSURANCE: (
        "Vision Insurance", "Vision coverage premiums"),
    DeductionType.HSA: (
        "HSA", "Health Savings Account - triple tax advantaged"),
    DeductionType.FSA: (
        "FSA", "Flexible Spending Account for medical expenses"),
    DeductionType.DEPENDENT_CARE_FSA: (
        "Dependent Care FSA", "FSA for childcare and dependent care expenses"),
    DeductionType.COMMUTER_TRANSIT: (
        "Commuter Transit", "Pre-tax transit passes and vanpooling"),
    DeductionType.COMMUTER_PARKING: (
        "Commuter Parking", "Pre-tax qualified parking expenses"),
    DeductionType.LIFE_INSURANCE: (
        "Life Insurance",
        "Group term life insurance premiums (may have pre-tax limit)"),
    DeductionType.UNION_DUES: (
        "Union Dues", "Union membership fees"),
    DeductionType.GARNISHMENTS: (
        "Garnishments", "Court-ordered wage garnishments"),
    DeductionType.CHARITABLE_DONATIONS: (
        "Charitable Donations", "Payroll deductions for charitable giving"),
    DeductionType.OTHER_PRE_TAX: (
        "Other Pre-Tax", "Other pre-tax deductions not listed"),
    DeductionType.OTHER_POST_TAX: (
        "Other Post-Tax", "Other post-tax deductions not listed"),
}

_ANNUAL_LIMITS = {
    DeductionType.TRADITIONAL_401K: LIMIT_401K,
    DeductionType.ROTH_401K: LIMIT_401K,
    DeductionType.TRADITIONAL_403B: LIMIT_401K,
    DeductionType.TRADITIONAL_457B: LIMIT_401K,
    DeductionType.HSA: LIMIT_HSA,
    DeductionType.FSA: LIMIT_FSA,
    DeductionType.DEPENDENT_CARE_FSA: LIMIT_DEPENDENT_CARE_FSA,
    DeductionType.COMMUTER_TRANSIT: LIMIT_COMMUTER,
    DeductionType.COMMUTER_PARKING: LIMIT_COMMUTER,
}

_CATCH_UP_LIMITS = {
    DeductionType.TRADITIONAL_401K: CATCH_UP_401K,
    DeductionType.ROTH_401K: CATCH_UP_401K,
    DeductionType.TRADITIONAL_403B: CATCH_UP_401K,
    DeductionType.TRADITIONAL_457B: CATCH_UP_401K,
    DeductionType.HSA: CATCH_UP_HSA,
}


class DeductionInputType(str, Enum):
    """How a deduction amount is specified."""

    DOLLAR_AMOUNT = "dollar_amount"
    PERCENTAGE_OF_SALARY = "percentage_of_salary"

    @property
    def display_name(self) -> str:
        return "$" if self is DeductionInputType.DOLLAR_AMOUNT else "%"


# ---------------------------------------------------------------------------
# Annualizer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeductionEntry:
    """
    A single deduction as entered by the user.

    Parameters
    ----------
    type : DeductionType
        Deduction kind.
    amount : Decimal, default 0
        Dollars (in ``frequency`` units) or percent of annual salary,
        depending on ``input_type``.
    frequency : DeductionFrequency, default ANNUAL
        Unit of a dollar amount. Stored but ignored in percentage mode.
    input_type : DeductionInputType, default DOLLAR_AMOUNT
    enabled : bool, default False
        Disabled entries never contribute.
    id : str
        Identifier used by owning records for lookup.
    """

    type: DeductionType
    amount: Decimal = ZERO
    frequency: DeductionFrequency = DeductionFrequency.ANNUAL
    input_type: DeductionInputType = DeductionInputType.DOLLAR_AMOUNT
    enabled: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))

    def annual_amount(
        self,
        gross_salary: Number,
        pay_frequency: Union[PayFrequency, int],
        respect_limit: bool = True,
    ) -> Decimal:
        return annual_amount(self, gross_salary, pay_frequency, respect_limit)

    def exceeds_limit(self, gross_salary: Number, pay_frequency: Union[PayFrequency, int]) -> bool:
        return exceeds_limit(self, gross_salary, pay_frequency)


def annual_amount(
    entry: DeductionEntry,
    gross_salary: Number,
    pay_frequency: Union[PayFrequency, int],
    respect_limit: bool = True,
) -> Decimal:
    """
    Annual dollar amount of *entry*.

    Parameters
    ----------
    entry : DeductionEntry
    gross_salary : Decimal
        Annual gross salary, used for percentage entries.
    pay_frequency : PayFrequency or int
        Used to annualize per-paycheck dollar entries.
    respect_limit : bool, default True
        Cap the result at the kind's annual limit.

    Returns
    -------
    Decimal
        0 for disabled or non-positive entries; otherwise the annualized
        amount, capped when requested.
    """
    if not entry.enabled or entry.amount <= 0:
        return ZERO

    if entry.input_type is DeductionInputType.DOLLAR_AMOUNT:
        raw = entry.frequency.to_annual(entry.amount, pay_frequency)
    elif entry.input_type is DeductionInputType.PERCENTAGE_OF_SALARY:
        raw = to_decimal(gross_salary) * (entry.amount / HUNDRED)
    else:
        raise ValueError(f"Unknown input type: {entry.input_type}")

    limit = entry.type.annual_limit
    if respect_limit and limit is not None:
        return min(raw, limit)
    return raw


def exceeds_limit(
    entry: DeductionEntry,
    gross_salary: Number,
    pay_frequency: Union[PayFrequency, int],
) -> bool:
    """True when the uncapped annual amount is strictly above the kind's limit."""
    limit = entry.type.annual_limit
    if limit is None:
        return False
    return annual_amount(entry, gross_salary, pay_frequency, respect_limit=False) > limit


def create_default_entries() -> List[DeductionEntry]:
    """One disabled, zero-amount entry per catalog kind, in catalog order."""
    return [DeductionEntry(type=t) for t in DeductionType]


# ---------------------------------------------------------------------------
# Totals for the tax engine request
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeductionSummary:
    """Annual deduction totals as consumed by the tax engine request."""

    pre_tax_total: Decimal = ZERO
    post_tax_total: Decimal = ZERO
    traditional_401k: Decimal = ZERO
    roth_401k: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.pre_tax_total + self.post_tax_total + self.traditional_401k + self.roth_401k

    def to_dict(self) -> DeductionSummaryDict:
        return {
            "pre_tax_total": self.pre_tax_total,
            "post_tax_total": self.post_tax_total,
            "traditional_401k": self.traditional_401k,
            "roth_401k": self.roth_401k,
            "total": self.total,
        }


def _first_enabled(entries: List[DeductionEntry], kind: DeductionType) -> Optional[DeductionEntry]:
    return next((e for e in entries if e.type is kind and e.enabled), None)


def summarize_deductions(
    entries: Iterable[DeductionEntry],
    gross_salary: Number,
    pay_frequency: Union[PayFrequency, int],
) -> DeductionSummary:
    """
    Aggregate detailed-mode entries into request totals.

    Traditional and Roth 401(k) are reported on their own lines (taken from
    the first enabled entry of each kind) and excluded from the pre-tax and
    post-tax totals. All amounts respect annual limits.
    """
    entries = list(entries)

    def total(selected: Iterable[DeductionEntry]) -> Decimal:
        return decimal_sum(annual_amount(e, gross_salary, pay_frequency) for e in selected)

    pre_tax = total(e for e in entries if e.type.is_pre_tax and not e.type.is_retirement_401k)
    post_tax = total(e for e in entries if not e.type.is_pre_tax and not e.type.is_retirement_401k)

    trad = _first_enabled(entries, DeductionType.TRADITIONAL_401K)
    roth = _first_enabled(entries, DeductionType.ROTH_401K)
    return DeductionSummary(
        pre_tax_total=pre_tax,
        post_tax_total=post_tax,
        traditional_401k=annual_amount(trad, gross_salary, pay_frequency) if trad else ZERO,
        roth_401k=annual_amount(roth, gross_salary, pay_frequency) if roth else ZERO,
    )


def quick_deductions(
    gross_salary: Number,
    traditional_401k: Number = 0,
    health_insurance: Number = 0,
    *,
    traditional_401k_input: DeductionInputType = DeductionInputType.DOLLAR_AMOUNT,
    health_insurance_input: DeductionInputType = DeductionInputType.DOLLAR_AMOUNT,
) -> DeductionSummary:
    """
    Totals for quick setup: a traditional 401(k) and health insurance only.

    Both values are annual dollars or percent of salary. The 401(k) is capped
    at its annual limit; health insurance has no cap. Non-positive inputs
    contribute nothing.
    """
    def resolve(kind: DeductionType, value: Number, input_type: DeductionInputType) -> Decimal:
        entry = DeductionEntry(type=kind, amount=to_decimal(value), input_type=input_type, enabled=True)
        return annual_amount(entry, gross_salary, PayFrequency.MONTHLY)

    return DeductionSummary(
        pre_tax_total=resolve(DeductionType.HEALTH_INSURANCE, health_insurance, health_insurance_input),
        traditional_401k=resolve(DeductionType.TRADITIONAL_401K, traditional_401k, traditional_401k_input),
    )
