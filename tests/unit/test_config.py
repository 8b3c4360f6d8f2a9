"""
Unit tests for config.py module.

Tests Pydantic validation of scenario and profile configurations, domain
conversion and environment-driven AppSettings.
"""

import pytest
from decimal import Decimal

from takehome.config import (
    AppSettings,
    DeductionEntryConfig,
    EventDurationConfig,
    ExpenseChangeConfig,
    IncomeChangeConfig,
    LifeEventScenarioConfig,
    ProfileConfig,
)
from takehome.deductions import DeductionInputType, DeductionType
from takehome.onboarding import DeductionSetupMode
from takehome.scenario import ChangeFrequency, IncomeChangeType
from takehome.templates import all_templates, job_loss
from takehome.timeframe import DeductionFrequency, PayFrequency


class TestEventDurationConfig:
    """Tests for EventDurationConfig."""

    @pytest.mark.parametrize("unit,count,months", [
        ("months", 6, 6),
        ("years", 2, 24),
        ("ongoing", 0, None),
    ])
    def test_to_domain(self, unit, count, months):
        cfg = EventDurationConfig(unit=unit, count=count)
        assert cfg.to_domain().total_months == months

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            EventDurationConfig(unit="months", count=-1)

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValueError):
            EventDurationConfig(unit="decades", count=1)


class TestChangeConfigs:
    """Tests for the change configurations."""

    def test_income_change_defaults(self):
        cfg = IncomeChangeConfig(type="side_income", amount="800")
        change = cfg.to_domain()

        assert change.type is IncomeChangeType.SIDE_INCOME
        assert change.amount == Decimal("800")
        assert change.frequency is ChangeFrequency.MONTHLY
        assert change.duration is None

    def test_income_change_with_duration(self):
        cfg = IncomeChangeConfig(
            type="unemployment_benefits",
            amount=2000,
            duration={"unit": "months", "count": 6},
        )
        assert cfg.to_domain().duration.total_months == 6

    def test_expense_change_requires_name(self):
        with pytest.raises(ValueError):
            ExpenseChangeConfig(name="", amount=100)

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            ExpenseChangeConfig(name="Rent", amount=100, colour="red")

    def test_frozen(self):
        cfg = ExpenseChangeConfig(name="Rent", amount=100)
        with pytest.raises(ValueError):
            cfg.amount = Decimal("200")


class TestLifeEventScenarioConfig:
    """Tests for LifeEventScenarioConfig."""

    def test_minimal(self):
        cfg = LifeEventScenarioConfig(name="Side gig")
        scenario = cfg.to_domain()

        assert scenario.name == "Side gig"
        assert scenario.income_changes == ()
        assert scenario.icon == "sparkles"

    def test_from_dict(self):
        cfg = LifeEventScenarioConfig.model_validate({
            "name": "Side gig",
            "category": "career",
            "income_changes": [{"type": "side_income", "amount": "800"}],
            "tax_changes": [{"type": "deduction", "name": "Home office", "amount": 1000}],
        })
        scenario = cfg.to_domain()

        assert scenario.income_changes[0].amount == Decimal("800")
        assert scenario.tax_changes[0].annual_tax_effect == Decimal("-220")

    def test_name_length(self):
        with pytest.raises(ValueError):
            LifeEventScenarioConfig(name="x" * 101)

    @pytest.mark.parametrize("scenario", all_templates(), ids=lambda s: s.name)
    def test_domain_round_trip(self, scenario):
        """from_domain then to_domain preserves every template."""
        assert LifeEventScenarioConfig.from_domain(scenario).to_domain() == scenario

    def test_json_dump_uses_strings_for_decimals(self):
        data = LifeEventScenarioConfig.from_domain(job_loss()).model_dump(mode="json")

        assert data["income_changes"][0]["amount"] == "2000"
        assert data["duration"] == {"unit": "months", "count": 6}


class TestDeductionEntryConfig:
    """Tests for DeductionEntryConfig."""

    def test_defaults(self):
        cfg = DeductionEntryConfig(type="hsa", amount=1000)
        entry = cfg.to_domain()

        assert entry.type is DeductionType.HSA
        assert entry.enabled
        assert entry.frequency is DeductionFrequency.ANNUAL
        assert entry.input_type is DeductionInputType.DOLLAR_AMOUNT

    def test_percentage_over_100_rejected(self):
        with pytest.raises(ValueError, match="percentage"):
            DeductionEntryConfig(
                type="traditional_401k",
                amount=150,
                input_type="percentage_of_salary",
            )

    def test_large_dollar_amount_allowed(self):
        cfg = DeductionEntryConfig(type="health_insurance", amount=15000)
        assert cfg.amount == Decimal("15000")


class TestProfileConfig:
    """Tests for ProfileConfig."""

    def test_defaults(self):
        profile = ProfileConfig(gross_salary=100_000)

        assert profile.pay_frequency is PayFrequency.BI_WEEKLY
        assert profile.state == "CA"
        assert profile.deduction_setup_mode is DeductionSetupMode.QUICK
        assert profile.current_net_monthly is None

    def test_state_normalized(self):
        assert ProfileConfig(gross_salary=1, state="ny").state == "NY"

    @pytest.mark.parametrize("state", ["C", "CAL", "1A"])
    def test_invalid_state(self, state):
        with pytest.raises(ValueError):
            ProfileConfig(gross_salary=1, state=state)

    def test_negative_salary_rejected(self):
        with pytest.raises(ValueError):
            ProfileConfig(gross_salary=-1)

    def test_quick_summary(self):
        """Quick mode: 401(k) as percent of salary, health insurance in dollars."""
        profile = ProfileConfig(
            gross_salary=100_000,
            traditional_401k=6,
            health_insurance=2400,
        )
        summary = profile.deduction_summary()

        assert summary.traditional_401k == Decimal("6000")
        assert summary.pre_tax_total == Decimal("2400")

    def test_quick_mode_ignores_detailed_entries(self):
        profile = ProfileConfig(
            gross_salary=100_000,
            deductions=[{"type": "union_dues", "amount": 480}],
        )
        assert profile.deduction_summary().post_tax_total == 0

    def test_detailed_summary(self):
        profile = ProfileConfig(
            gross_salary=100_000,
            pay_frequency="bi_weekly",
            deduction_setup_mode="detailed",
            deductions=[
                {"type": "hsa", "amount": 500, "frequency": "per_paycheck"},
                {"type": "roth_401k", "amount": 200, "frequency": "monthly"},
                {"type": "union_dues", "amount": 480},
                {"type": "fsa", "amount": 1000, "enabled": False},
            ],
        )
        summary = profile.deduction_summary()

        assert summary.pre_tax_total == Decimal("4150")
        assert summary.post_tax_total == Decimal("480")
        assert summary.roth_401k == Decimal("2400")
        assert len(profile.deduction_entries()) == 4

    def test_tax_request(self):
        profile = ProfileConfig(
            gross_salary=100_000,
            filing_status="married_filing_jointly",
            state="tx",
            traditional_401k=6,
        )
        request = profile.tax_request()

        assert request.gross_income == Decimal("100000")
        assert request.state == "TX"
        assert request.traditional_401k == Decimal("6000")


class TestAppSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("TAKEHOME_DEBUG", "TAKEHOME_LOG_LEVEL", "TAKEHOME_DEFAULT_PAY_FREQUENCY"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.effective_log_level == "WARNING"
        assert settings.default_pay_frequency is PayFrequency.BI_WEEKLY

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TAKEHOME_LOG_LEVEL", "INFO")
        monkeypatch.setenv("TAKEHOME_DEFAULT_PAY_FREQUENCY", "monthly")
        settings = AppSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.default_pay_frequency is PayFrequency.MONTHLY

    def test_debug_forces_debug_level(self, monkeypatch):
        monkeypatch.setenv("TAKEHOME_DEBUG", "true")
        settings = AppSettings(_env_file=None)
        assert settings.effective_log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("TAKEHOME_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError):
            AppSettings(_env_file=None)
