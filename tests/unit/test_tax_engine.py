"""
Unit tests for tax_engine.py module.

Tests request assembly, result arithmetic, error relaying and scenario
comparison against fake engines.
"""

import pytest
from decimal import Decimal

from takehome.deductions import (
    DeductionEntry,
    DeductionInputType,
    DeductionSummary,
    DeductionType,
    quick_deductions,
    summarize_deductions,
)
from takehome.exceptions import (
    CalculationError,
    InvalidDecimalError,
    InvalidFilingStatusError,
    InvalidStateError,
    TaxEngineError,
    UnknownTaxEngineError,
)
from takehome.tax_engine import (
    FilingStatus,
    TaxCalculationInput,
    TaxCalculationResult,
    build_tax_request,
    compute_taxes,
    compare_scenarios,
)
from takehome.timeframe import DeductionFrequency, PayFrequency, TimeframeIncome


class TestFilingStatus:
    """Tests for FilingStatus names."""

    def test_display_names(self):
        assert FilingStatus.MARRIED_FILING_JOINTLY.display_name == "Married Filing Jointly"
        assert FilingStatus.HEAD_OF_HOUSEHOLD.short_name == "HoH"
        assert len(FilingStatus) == 5


class TestTaxCalculationInput:
    """Tests for the request payload."""

    def test_coercion(self):
        request = TaxCalculationInput(gross_income=100_000, state=" ny ")

        assert request.gross_income == Decimal("100000")
        assert request.state == "NY"
        assert request.pre_tax_deductions == 0

    def test_request_dict_all_strings(self):
        request = TaxCalculationInput(
            gross_income=Decimal("100000.50"),
            filing_status=FilingStatus.HEAD_OF_HOUSEHOLD,
            traditional_401k=Decimal("6000"),
        )
        data = request.to_request_dict()

        assert data["gross_income"] == "100000.50"
        assert data["filing_status"] == "head_of_household"
        assert data["traditional_401k"] == "6000"
        assert all(isinstance(v, str) for v in data.values())


class TestBuildTaxRequest:
    """Tests for build_tax_request."""

    def test_from_quick_deductions(self):
        summary = quick_deductions(
            100_000, traditional_401k=6, health_insurance=2400,
            traditional_401k_input=DeductionInputType.PERCENTAGE_OF_SALARY,
        )
        request = build_tax_request(100_000, summary, FilingStatus.SINGLE, "ca")

        assert request.pre_tax_deductions == Decimal("2400")
        assert request.traditional_401k == Decimal("6000")
        assert request.post_tax_deductions == 0
        assert request.roth_401k == 0
        assert request.state == "CA"

    def test_from_detailed_entries(self, detailed_entries):
        summary = summarize_deductions(detailed_entries, 100_000, PayFrequency.BI_WEEKLY)
        request = build_tax_request(100_000, summary, FilingStatus.MARRIED_FILING_JOINTLY, "TX")

        assert request.roth_401k == Decimal("2400")
        assert request.post_tax_deductions == Decimal("480")
        assert request.filing_status is FilingStatus.MARRIED_FILING_JOINTLY

    def test_roth_reaches_engine_once(self, flat_engine):
        """A Roth-only setup lands in roth_401k, not in post-tax deductions."""
        entries = [
            DeductionEntry(
                DeductionType.ROTH_401K, 500,
                frequency=DeductionFrequency.MONTHLY, enabled=True,
            ),
        ]
        summary = summarize_deductions(entries, 100_000, PayFrequency.MONTHLY)
        request = build_tax_request(100_000, summary)

        assert request.post_tax_deductions == 0
        assert request.roth_401k == Decimal("6000")
        # 100,000 taxed at 25%, less 6,000 of Roth contributions
        assert compute_taxes(flat_engine, request).net_annual == Decimal("69000")


class TestTaxCalculationResult:
    """Tests for result arithmetic."""

    @pytest.fixture
    def result(self):
        return TaxCalculationResult(
            gross_annual=Decimal("100000"),
            net_annual=Decimal("70000"),
            timeframes=TimeframeIncome.from_annual(70000),
            federal_tax=Decimal("15000"),
            state_income_tax=Decimal("5000"),
            state_sdi=Decimal("1000"),
            social_security=Decimal("6200"),
            medicare=Decimal("1450"),
        )

    def test_totals(self, result):
        assert result.state_total_tax == Decimal("6000")
        assert result.fica_total == Decimal("7650")
        assert result.total_taxes == Decimal("28650")

    def test_rates(self, result):
        assert result.total_effective_rate == Decimal("28.65")
        assert result.take_home_percentage == Decimal("70")

    def test_net_monthly(self, result):
        assert result.net_monthly == result.timeframes.monthly

    def test_zero_gross_rates(self):
        result = TaxCalculationResult(
            gross_annual=Decimal("0"),
            net_annual=Decimal("0"),
            timeframes=TimeframeIncome.zero(),
        )
        assert result.total_effective_rate == 0
        assert result.take_home_percentage == 0


class TestComputeTaxes:
    """Tests for compute_taxes and error relaying."""

    def test_success(self, flat_engine):
        request = TaxCalculationInput(gross_income=100_000)
        result = compute_taxes(flat_engine, request)

        assert result.net_annual == Decimal("75000")
        assert flat_engine.requests == [request]

    @pytest.mark.parametrize("error", [
        InvalidDecimalError("gross_income"),
        InvalidFilingStatusError("bogus"),
        InvalidStateError("ZZ"),
        CalculationError("overflow"),
    ])
    def test_engine_errors_relayed_untouched(self, failing_engine, error):
        """Categorized errors propagate as the same object."""
        engine = failing_engine(error)
        with pytest.raises(TaxEngineError) as exc_info:
            compute_taxes(engine, TaxCalculationInput(gross_income=1))
        assert exc_info.value is error

    def test_other_errors_wrapped(self, failing_engine):
        original = RuntimeError("engine crashed")
        engine = failing_engine(original)

        with pytest.raises(UnknownTaxEngineError) as exc_info:
            compute_taxes(engine, TaxCalculationInput(gross_income=1))

        assert exc_info.value.__cause__ is original
        assert exc_info.value.kind == "unknown"
        assert "engine crashed" in exc_info.value.user_message

    def test_single_attempt(self):
        """No retries."""
        calls = []

        class CountingEngine:
            def compute_taxes(self, request):
                calls.append(request)
                raise CalculationError("nope")

        with pytest.raises(CalculationError):
            compute_taxes(CountingEngine(), TaxCalculationInput(gross_income=1))
        assert len(calls) == 1


class TestCompareScenarios:
    """Tests for compare_scenarios."""

    def test_raise(self, flat_engine):
        base = TaxCalculationInput(gross_income=100_000)
        raise_ = TaxCalculationInput(gross_income=120_000)

        comparison = compare_scenarios(flat_engine, base, raise_)

        assert comparison.net_difference == Decimal("15000")
        assert comparison.monthly_difference == Decimal("1250")
        assert comparison.net_difference_percent == Decimal("20")
        assert comparison.is_positive
        assert len(flat_engine.requests) == 2

    def test_more_deductions_reduce_net(self, flat_engine):
        base = build_tax_request(100_000, DeductionSummary())
        scenario = build_tax_request(100_000, DeductionSummary(post_tax_total=Decimal("1200")))

        comparison = compare_scenarios(flat_engine, base, scenario)

        assert comparison.net_difference == Decimal("-1200")
        assert not comparison.is_positive

    def test_error_propagates(self, failing_engine):
        engine = failing_engine(InvalidStateError("ZZ"))
        base = TaxCalculationInput(gross_income=1)
        with pytest.raises(InvalidStateError):
            compare_scenarios(engine, base, base)
