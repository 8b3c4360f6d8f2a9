"""
Custom exceptions for TakeHome.

Purpose
-------
Provides a unified exception hierarchy for TakeHome. The calculation core
(timeframes, deductions, scenario impact, onboarding) is total over its
numeric inputs and raises nothing; exceptions come from configuration
loading and from the external tax engine boundary.

Exception Hierarchy
-------------------
TakeHomeError (base)
├── ConfigurationError - Invalid configuration, files or CLI arguments
│   └── TemplateNotFoundError - Unknown life-event template key
└── TaxEngineError - Failures reported by the external tax engine
    ├── InvalidDecimalError - A monetary value could not be parsed
    ├── InvalidFilingStatusError - Filing status not recognized
    ├── InvalidStateError - State code not recognized
    ├── CalculationError - Engine failed while computing
    └── UnknownTaxEngineError - Anything the engine did not categorize

Usage
-----
>>> from takehome.exceptions import TaxEngineError
>>>
>>> try:
...     result = compute_taxes(engine, request)
... except TaxEngineError as e:
...     show_message(e.user_message)
"""

__all__ = [
    "TakeHomeError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "TaxEngineError",
    "InvalidDecimalError",
    "InvalidFilingStatusError",
    "InvalidStateError",
    "CalculationError",
    "UnknownTaxEngineError",
]


class TakeHomeError(Exception):
    """
    Base exception for all TakeHome errors.

    Examples
    --------
    >>> try:
    ...     scenario = load_scenario(path)
    ... except TakeHomeError as e:
    ...     click.echo(f"Error: {e}", err=True)
    """
    pass


class ConfigurationError(TakeHomeError):
    """
    Invalid configuration or parameters.

    Raised when user-supplied configuration cannot be turned into model
    objects, such as:
    - Malformed scenario or profile files
    - Unknown enum values passed on the command line

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Unknown pay frequency 'daily'. "
    ...     "Use one of: weekly, bi_weekly, semi_monthly, monthly."
    ... )
    """
    pass


class TemplateNotFoundError(ConfigurationError):
    """
    Unknown life-event template key.

    Examples
    --------
    >>> raise TemplateNotFoundError(
    ...     "No life-event template named 'lottery'. "
    ...     "Available: first_child, retirement, job_loss, ..."
    ... )
    """
    pass


class TaxEngineError(TakeHomeError):
    """
    Error reported by the external tax engine.

    The engine signals failures through a closed set of kinds. TakeHome
    relays them untouched: it never retries, never swallows and never maps
    one kind onto another.

    Parameters
    ----------
    message : str
        Detail supplied by the engine.

    Attributes
    ----------
    kind : str
        Stable tag for the error kind ("invalid_decimal", ...).
    message : str
        Engine-supplied detail.
    """

    kind: str = "tax_engine"
    label: str = "Tax engine error"

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(f"{self.label}: {message}" if message else self.label)

    @property
    def user_message(self) -> str:
        """Message suitable for display to the user."""
        return str(self)


class InvalidDecimalError(TaxEngineError):
    """A monetary value in the request could not be parsed."""

    kind = "invalid_decimal"
    label = "Invalid decimal"


class InvalidFilingStatusError(TaxEngineError):
    """The filing status in the request is not recognized."""

    kind = "invalid_filing_status"
    label = "Invalid filing status"


class InvalidStateError(TaxEngineError):
    """The state code in the request is not recognized."""

    kind = "invalid_state"
    label = "Invalid state"


class CalculationError(TaxEngineError):
    """The engine failed while computing taxes."""

    kind = "calculation_error"
    label = "Calculation error"


class UnknownTaxEngineError(TaxEngineError):
    """Failure the engine did not categorize."""

    kind = "unknown"
    label = "Unknown error"
