"""
Unit tests for deductions.py module.

Tests the deduction catalog, the annualizer with IRS limits, and the
totals assembled for tax engine requests.
"""

import pytest
from decimal import Decimal

from takehome.deductions import (
    DeductionType,
    DeductionInputType,
    DeductionEntry,
    DeductionSummary,
    annual_amount,
    exceeds_limit,
    create_default_entries,
    summarize_deductions,
    quick_deductions,
)
from takehome.timeframe import DeductionFrequency, PayFrequency


class TestDeductionType:
    """Tests for the deduction catalog."""

    def test_catalog_size(self):
        assert len(DeductionType) == 18

    @pytest.mark.parametrize("kind", [
        DeductionType.ROTH_401K,
        DeductionType.UNION_DUES,
        DeductionType.GARNISHMENTS,
        DeductionType.CHARITABLE_DONATIONS,
        DeductionType.OTHER_POST_TAX,
    ])
    def test_post_tax_kinds(self, kind):
        assert not kind.is_pre_tax

    def test_pre_and_post_partition_catalog(self):
        pre = DeductionType.pre_tax_types()
        post = DeductionType.post_tax_types()
        assert len(pre) + len(post) == len(DeductionType)
        assert not set(pre) & set(post)

    @pytest.mark.parametrize("kind,limit", [
        (DeductionType.TRADITIONAL_401K, Decimal("23000")),
        (DeductionType.ROTH_401K, Decimal("23000")),
        (DeductionType.TRADITIONAL_403B, Decimal("23000")),
        (DeductionType.TRADITIONAL_457B, Decimal("23000")),
        (DeductionType.HSA, Decimal("4150")),
        (DeductionType.FSA, Decimal("3200")),
        (DeductionType.DEPENDENT_CARE_FSA, Decimal("5000")),
        (DeductionType.COMMUTER_TRANSIT, Decimal("3150")),
        (DeductionType.COMMUTER_PARKING, Decimal("3150")),
    ])
    def test_annual_limits(self, kind, limit):
        assert kind.annual_limit == limit

    def test_unlimited_kinds(self):
        assert DeductionType.HEALTH_INSURANCE.annual_limit is None
        assert DeductionType.UNION_DUES.annual_limit is None

    def test_catch_up_limits(self):
        assert DeductionType.TRADITIONAL_401K.catch_up_limit == Decimal("7500")
        assert DeductionType.HSA.catch_up_limit == Decimal("1000")
        assert DeductionType.FSA.catch_up_limit is None

    def test_display_metadata(self):
        assert DeductionType.TRADITIONAL_401K.display_name == "Traditional 401(k)"
        assert DeductionType.HSA.description


class TestAnnualAmount:
    """Tests for the deduction annualizer."""

    def test_disabled_contributes_nothing(self):
        entry = DeductionEntry(DeductionType.HEALTH_INSURANCE, 500, enabled=False)
        assert annual_amount(entry, 100_000, PayFrequency.BI_WEEKLY) == 0

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_contributes_nothing(self, amount):
        entry = DeductionEntry(DeductionType.HEALTH_INSURANCE, amount, enabled=True)
        assert annual_amount(entry, 100_000, PayFrequency.BI_WEEKLY) == 0

    def test_per_paycheck_capped(self):
        """$500 per paycheck bi-weekly is $13,000, capped at the HSA limit."""
        entry = DeductionEntry(
            DeductionType.HSA, 500,
            frequency=DeductionFrequency.PER_PAYCHECK, enabled=True,
        )
        assert entry.annual_amount(100_000, PayFrequency.BI_WEEKLY) == Decimal("4150")
        assert entry.annual_amount(100_000, PayFrequency.BI_WEEKLY, respect_limit=False) == Decimal("13000")
        assert entry.exceeds_limit(100_000, PayFrequency.BI_WEEKLY)

    def test_percentage_of_salary(self):
        entry = DeductionEntry(
            DeductionType.TRADITIONAL_401K, 10,
            input_type=DeductionInputType.PERCENTAGE_OF_SALARY, enabled=True,
        )
        assert entry.annual_amount(100_000, PayFrequency.BI_WEEKLY) == Decimal("10000")

    def test_percentage_ignores_frequency(self):
        """Stored frequency has no effect in percentage mode."""
        monthly = DeductionEntry(
            DeductionType.TRADITIONAL_401K, 10,
            frequency=DeductionFrequency.MONTHLY,
            input_type=DeductionInputType.PERCENTAGE_OF_SALARY, enabled=True,
        )
        per_check = DeductionEntry(
            DeductionType.TRADITIONAL_401K, 10,
            frequency=DeductionFrequency.PER_PAYCHECK,
            input_type=DeductionInputType.PERCENTAGE_OF_SALARY, enabled=True,
        )
        assert monthly.annual_amount(100_000, PayFrequency.WEEKLY) == \
            per_check.annual_amount(100_000, PayFrequency.WEEKLY)

    def test_percentage_capped(self):
        """20% of $200k is $40k, capped at the 401(k) limit."""
        entry = DeductionEntry(
            DeductionType.TRADITIONAL_401K, 20,
            input_type=DeductionInputType.PERCENTAGE_OF_SALARY, enabled=True,
        )
        assert entry.annual_amount(200_000, PayFrequency.MONTHLY) == Decimal("23000")

    def test_catch_up_not_added(self):
        """Catch-up allowances never raise the cap."""
        entry = DeductionEntry(DeductionType.TRADITIONAL_401K, 30000, enabled=True)
        assert entry.annual_amount(200_000, PayFrequency.MONTHLY) == Decimal("23000")

    def test_no_limit_kind_uncapped(self):
        entry = DeductionEntry(
            DeductionType.HEALTH_INSURANCE, 5000,
            frequency=DeductionFrequency.MONTHLY, enabled=True,
        )
        assert entry.annual_amount(100_000, PayFrequency.MONTHLY) == Decimal("60000")
        assert not exceeds_limit(entry, 100_000, PayFrequency.MONTHLY)

    def test_exactly_at_limit_does_not_exceed(self):
        entry = DeductionEntry(DeductionType.HSA, 4150, enabled=True)
        assert not entry.exceeds_limit(100_000, PayFrequency.MONTHLY)

    def test_amount_coerced_to_decimal(self):
        entry = DeductionEntry(DeductionType.FSA, 0.1)
        assert entry.amount == Decimal("0.1")

    def test_ids_not_part_of_equality(self):
        a = DeductionEntry(DeductionType.FSA, 100)
        b = DeductionEntry(DeductionType.FSA, 100)
        assert a.id != b.id
        assert a == b


class TestDefaultEntries:
    """Tests for create_default_entries."""

    def test_one_per_kind_all_disabled(self):
        entries = create_default_entries()

        assert [e.type for e in entries] == list(DeductionType)
        assert all(not e.enabled for e in entries)
        assert all(e.amount == 0 for e in entries)


class TestSummaries:
    """Tests for request totals."""

    def test_summarize_detailed(self, detailed_entries):
        """401(k) kinds are reported apart from the pre/post totals."""
        summary = summarize_deductions(detailed_entries, 100_000, PayFrequency.BI_WEEKLY)

        # HSA capped at 4150 + health 1800; disabled FSA ignored
        assert summary.pre_tax_total == Decimal("5950")
        # Union dues 480
        assert summary.post_tax_total == Decimal("480")
        assert summary.traditional_401k == Decimal("6000")
        assert summary.roth_401k == Decimal("2400")
        assert summary.total == Decimal("14830")

    def test_summarize_empty(self):
        summary = summarize_deductions([], 100_000, PayFrequency.BI_WEEKLY)
        assert summary == DeductionSummary()
        assert summary.total == 0

    def test_quick_dollar(self):
        summary = quick_deductions(100_000, traditional_401k=6000, health_insurance=2400)

        assert summary.traditional_401k == Decimal("6000")
        assert summary.pre_tax_total == Decimal("2400")
        assert summary.post_tax_total == 0
        assert summary.roth_401k == 0

    def test_quick_percentage(self):
        summary = quick_deductions(
            100_000, traditional_401k=6,
            traditional_401k_input=DeductionInputType.PERCENTAGE_OF_SALARY,
        )
        assert summary.traditional_401k == Decimal("6000")

    def test_quick_401k_capped(self):
        summary = quick_deductions(100_000, traditional_401k=50_000)
        assert summary.traditional_401k == Decimal("23000")

    def test_to_dict(self):
        data = DeductionSummary(pre_tax_total=Decimal("100"), roth_401k=Decimal("50")).to_dict()
        assert data["total"] == Decimal("150")
        assert set(data) == {
            "pre_tax_total", "post_tax_total", "traditional_401k", "roth_401k", "total",
        }
