"""
Household expense splitting.

Shares monthly shared expenses between two earners. The default split is
proportional to each partner's net income.

>>> split = calculate_split(8000, 2000, 1000)
>>> split.primary_monthly_amount, split.partner_monthly_amount
(Decimal('800.0'), Decimal('200.0'))
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from .constants import EQUAL_SPLIT_RATIO
from .exceptions import ConfigurationError
from .types import HouseholdSplitDict
from .utils import Number, parse_enum, to_decimal

__all__ = [
    "SplitMethod",
    "PartnerProfile",
    "HouseholdSplit",
    "calculate_split",
    "parse_split_method",
]

ONE = Decimal("1")
HUNDRED = Decimal("100")


class SplitMethod(str, Enum):
    PROPORTIONAL = "proportional"  # by net income ratio
    EQUAL = "equal"                # 50/50
    CUSTOM = "custom"              # fixed primary ratio


@dataclass(frozen=True)
class PartnerProfile:
    """Second earner in a two-income household."""
    name: str
    gross_income: Decimal
    net_income: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "gross_income", to_decimal(self.gross_income))
        object.__setattr__(self, "net_income", to_decimal(self.net_income))


@dataclass(frozen=True)
class HouseholdSplit:
    """Shares of a monthly shared expense. Ratios are fractions summing to 1."""
    primary_ratio: Decimal
    partner_ratio: Decimal
    primary_monthly_amount: Decimal
    partner_monthly_amount: Decimal

    @property
    def primary_percent(self) -> Decimal:
        return self.primary_ratio * HUNDRED

    @property
    def partner_percent(self) -> Decimal:
        return self.partner_ratio * HUNDRED

    def to_dict(self) -> HouseholdSplitDict:
        return {
            "primary_ratio": self.primary_ratio,
            "partner_ratio": self.partner_ratio,
            "primary_monthly_amount": self.primary_monthly_amount,
            "partner_monthly_amount": self.partner_monthly_amount,
        }


def calculate_split(
    primary_net: Number,
    partner_net: Number,
    shared_expense: Number,
    method: SplitMethod = SplitMethod.PROPORTIONAL,
    custom_ratio: Optional[Number] = None,
) -> HouseholdSplit:
    """
    Split *shared_expense* between the primary earner and the partner.

    Parameters
    ----------
    primary_net, partner_net : Decimal
        Monthly net incomes.
    shared_expense : Decimal
        Monthly shared expense total.
    method : SplitMethod, default PROPORTIONAL
        PROPORTIONAL falls back to 50/50 when combined net income is not
        positive.
    custom_ratio : Decimal, optional
        Primary's fraction (0.7 for 70%) for CUSTOM. Treated as 50/50 when
        omitted.

    Returns
    -------
    HouseholdSplit
    """
    primary_net = to_decimal(primary_net)
    partner_net = to_decimal(partner_net)
    shared_expense = to_decimal(shared_expense)
    total_net = primary_net + partner_net

    if method is SplitMethod.PROPORTIONAL:
        primary_ratio = primary_net / total_net if total_net > 0 else EQUAL_SPLIT_RATIO
    elif method is SplitMethod.EQUAL:
        primary_ratio = EQUAL_SPLIT_RATIO
    elif method is SplitMethod.CUSTOM:
        primary_ratio = to_decimal(custom_ratio) if custom_ratio is not None else EQUAL_SPLIT_RATIO
    else:
        raise ValueError(f"Unknown split method: {method}")

    partner_ratio = ONE - primary_ratio
    return HouseholdSplit(
        primary_ratio=primary_ratio,
        partner_ratio=partner_ratio,
        primary_monthly_amount=shared_expense * primary_ratio,
        partner_monthly_amount=shared_expense * partner_ratio,
    )


def parse_split_method(text: str) -> Tuple[SplitMethod, Optional[Decimal]]:
    """Parse "proportional", "equal" or "custom:0.7" into (method, ratio).

    Raises
    ------
    ConfigurationError
        Unknown method, or a custom ratio outside [0, 1].
    """
    name, _, ratio_text = text.partition(":")
    method = parse_enum(SplitMethod, name, name="split method")
    if method is not SplitMethod.CUSTOM:
        return method, None
    try:
        ratio = Decimal(ratio_text.strip())
    except ArithmeticError:
        raise ConfigurationError(f"Invalid custom split ratio '{ratio_text}'.") from None
    if not 0 <= ratio <= 1:
        raise ConfigurationError(f"Custom split ratio must be between 0 and 1, got {ratio}.")
    return method, ratio
