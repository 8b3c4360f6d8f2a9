"""
Integration test for full TakeHome workflow.

Tests the complete pipeline from a saved household profile through the tax
engine boundary and life-event projections to verify all components work
together correctly.
"""

import json
from decimal import Decimal

import pytest

from takehome.deductions import DeductionEntry, DeductionType, summarize_deductions
from takehome.expenses import Expense, ExpenseFrequency, ExpenseModel
from takehome.household import calculate_split
from takehome.onboarding import (
    DeductionSetupMode,
    HouseholdType,
    OnboardingContext,
    OnboardingStep,
    next_step,
    skip_step,
    visible_steps,
)
from takehome.scenario import LifeEventScenario, calculate_impact, impact_table
from takehome.serialization import load_profile, load_scenario, save_scenario
from takehome.tax_engine import build_tax_request, compare_scenarios, compute_taxes
from takehome.templates import all_templates
from takehome.timeframe import DeductionFrequency, PayFrequency


@pytest.mark.integration
class TestFullWorkflow:
    """Integration tests for the profile to projection workflow."""

    def test_profile_to_take_home(self, tmp_path, flat_engine):
        """
        Test complete workflow from a profile file to take-home pay.

        This is a smoke test to ensure all components integrate properly.
        """
        # 1. Save a detailed profile
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({
            "schema_version": "1.0.0",
            "profile": {
                "name": "Integration",
                "gross_salary": "100000",
                "pay_frequency": "bi_weekly",
                "state": "ca",
                "deduction_setup_mode": "detailed",
                "deductions": [
                    {"type": "traditional_401k", "amount": 6,
                     "input_type": "percentage_of_salary"},
                    {"type": "hsa", "amount": 500, "frequency": "per_paycheck"},
                    {"type": "union_dues", "amount": 40, "frequency": "monthly"},
                ],
            },
        }))

        # 2. Load and build the request
        profile = load_profile(path)
        request = profile.tax_request()

        assert request.traditional_401k == Decimal("6000")
        assert request.pre_tax_deductions == Decimal("4150")
        assert request.post_tax_deductions == Decimal("480")

        # 3. Hand off to the engine
        result = compute_taxes(flat_engine, request)

        # (100000 - 4150 - 6000) * 0.75 - 480
        assert result.net_annual == Decimal("66907.50")
        assert result.timeframes.bi_weekly == result.net_annual / 26

    def test_raise_versus_current(self, flat_engine, detailed_entries):
        """A raise compared through the engine increases net pay."""
        current = build_tax_request(
            100_000, summarize_deductions(detailed_entries, 100_000, PayFrequency.BI_WEEKLY),
        )
        raised = build_tax_request(
            110_000, summarize_deductions(detailed_entries, 110_000, PayFrequency.BI_WEEKLY),
        )

        comparison = compare_scenarios(flat_engine, current, raised)

        # 401(k) grows from 6000 to 6600 with the salary
        assert comparison.net_difference == Decimal("7050")
        assert comparison.is_positive

    def test_scenario_file_round_trip_projection(self, tmp_path, salary, net_monthly):
        """Saved and reloaded scenarios project identically."""
        for scenario in all_templates():
            path = tmp_path / f"{scenario.name}.json"
            save_scenario(scenario, path)
            loaded = load_scenario(path)

            original = calculate_impact(scenario, salary, net_monthly)
            reloaded = calculate_impact(loaded, salary, net_monthly)
            assert reloaded.net_monthly_impact == original.net_monthly_impact
            assert reloaded.one_time_expenses == original.one_time_expenses

    def test_template_comparison(self, salary, net_monthly):
        df = impact_table(all_templates(), salary, net_monthly)

        assert len(df) == 7
        assert df["net_monthly_impact"].idxmax() == "Retirement"
        assert df.loc["Job Loss", "net_monthly_impact"] == pytest.approx(650.0)

    def test_onboarding_walk(self):
        """Walk a two-income household through the flow, skipping expenses."""
        context = OnboardingContext(
            household_type=HouseholdType.TWO_INCOMES,
            deduction_setup_mode=DeductionSetupMode.QUICK,
        )
        step = OnboardingStep.WELCOME
        visited = [step]
        while step is not OnboardingStep.EXPENSES:
            step = next_step(step, context)
            visited.append(step)
        visited.append(skip_step(step))

        assert visited == visible_steps(context)
        assert OnboardingStep.PARTNER_INCOME in visited
        assert OnboardingStep.DEDUCTIONS_PRE_TAX not in visited

    def test_shared_budget_split(self):
        """Shared expenses split proportionally to net pay."""
        budget = ExpenseModel([
            Expense("Rent", 2400, is_shared=True),
            Expense("Groceries", 150, ExpenseFrequency.WEEKLY, is_shared=True),
            Expense("Gym", 50),
        ])

        split = calculate_split(6000, 4000, budget.shared_monthly)

        assert budget.shared_monthly == Decimal("3050")
        assert split.primary_monthly_amount == Decimal("1830")
        assert split.partner_monthly_amount == Decimal("1220")


@pytest.mark.integration
class TestEdgeCases:
    """Edge cases across module boundaries."""

    def test_zero_salary_profile(self):
        deductions = [
            DeductionEntry(
                DeductionType.HEALTH_INSURANCE, 100,
                frequency=DeductionFrequency.MONTHLY, enabled=True,
            ),
        ]
        summary = summarize_deductions(deductions, 0, PayFrequency.MONTHLY)
        assert summary.pre_tax_total == Decimal("1200")

    def test_empty_scenario_projection(self, salary, net_monthly):
        impact = calculate_impact(LifeEventScenario(name="Nothing"), salary, net_monthly)
        assert impact.projected_net_monthly == net_monthly
