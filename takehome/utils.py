"""General utilities for TakeHome

Contents
--------
- Decimal helpers (to_decimal, decimal_sum)
- Enum helpers (parse_enum)
- Reporting helpers (summary_frame)
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Iterable, Mapping, Sequence, Type, TypeVar, Union

import pandas as pd

from .exceptions import ConfigurationError

__all__ = [
    # Decimals
    "Number",
    "to_decimal",
    "decimal_sum",
    # Enums
    "parse_enum",
    # Reporting
    "summary_frame",
]

Number = Union[Decimal, int, float, str]
E = TypeVar("E", bound=Enum)

ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Decimal helpers
# ---------------------------------------------------------------------------

def to_decimal(value: Number) -> Decimal:
    """Coerce *value* to Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimals starting from ``Decimal("0")`` (``sum`` starts at int 0)."""
    return sum(values, ZERO)


# ---------------------------------------------------------------------------
# Enum helpers
# ---------------------------------------------------------------------------

def parse_enum(enum_cls: Type[E], value: Union[E, str], *, name: str = "value") -> E:
    """Resolve *value* to a member of *enum_cls* by value or member name.

    Accepts hyphens in place of underscores ("bi-weekly") and is
    case-insensitive. Raises ConfigurationError listing the valid choices.
    """
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower().replace("-", "_")
    for member in enum_cls:
        if key in (str(member.value).lower(), member.name.lower()):
            return member
    choices = ", ".join(str(m.value) for m in enum_cls)
    raise ConfigurationError(f"Unknown {name} '{value}'. Use one of: {choices}.")


# ---------------------------------------------------------------------------
# Reporting helpers
# ---------------------------------------------------------------------------

def summary_frame(
    rows: Sequence[Mapping[str, object]],
    *,
    index: str,
    columns: Sequence[str],
) -> pd.DataFrame:
    """Build a reporting table from a list of row dicts.

    Decimal values are converted to float for display; the index column is
    kept in insertion order. Returns an empty frame with *columns* when
    *rows* is empty.
    """
    if not rows:
        return pd.DataFrame(columns=list(columns))
    records = [
        {k: (float(v) if isinstance(v, Decimal) else v) for k, v in row.items()}
        for row in rows
    ]
    return pd.DataFrame(records).set_index(index)[list(columns)]
