"""
Life-event templates.

Ready-made scenarios for common life events. Each factory builds fresh
objects with new ids on every call; callers may customize the result with
``dataclasses.replace``.

Available templates
-------------------
first_child, retirement, job_loss, getting_married, buying_car,
back_to_school, disability

Example
-------
>>> scenario = get_template("job_loss")
>>> scenario.duration.total_months
6
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .exceptions import TemplateNotFoundError
from .scenario import (
    ChangeFrequency,
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

__all__ = [
    "first_child",
    "retirement",
    "job_loss",
    "getting_married",
    "buying_car",
    "back_to_school",
    "disability",
    "TEMPLATES",
    "all_templates",
    "get_template",
]


def first_child() -> LifeEventScenario:
    return LifeEventScenario(
        name="Having a Baby",
        description="First child - includes parental leave, childcare, and ongoing expenses",
        icon="figure.and.child.holdinghands",
        category=LifeEventCategory.FAMILY,
        income_changes=(
            IncomeChange(
                type=IncomeChangeType.REDUCTION,
                amount=-10,
                is_percentage=True,
                frequency=ChangeFrequency.ANNUAL,
                duration=EventDuration.years(1),
                reason="Unpaid parental leave (6 weeks)",
            ),
        ),
        expense_changes=(
            ExpenseChange("Childcare/Daycare", 1500, duration=EventDuration.years(5)),
            ExpenseChange("Diapers & Supplies", 100, duration=EventDuration.years(3)),
            ExpenseChange("Baby Food/Formula", 150, duration=EventDuration.years(1)),
            ExpenseChange("Pediatrician & Health", 75),
            ExpenseChange(
                "Baby Gear & Furniture", 3000,
                frequency=ChangeFrequency.ONE_TIME, is_one_time=True,
            ),
            ExpenseChange(
                "Hospital/Birth Costs (after insurance)", 2000,
                frequency=ChangeFrequency.ONE_TIME, is_one_time=True,
            ),
        ),
        tax_changes=(
            TaxChange(TaxChangeType.CREDIT, "Child Tax Credit", 2000),
            TaxChange(TaxChangeType.DEDUCTION, "Dependent Care FSA", 5000),
        ),
        savings_changes=(
            SavingsChange(SavingsChangeType.COLLEGE_529, 200, reason="Start college fund"),
        ),
        duration=EventDuration.ongoing(),
    )


def retirement() -> LifeEventScenario:
    return LifeEventScenario(
        name="Retirement",
        description="Transition to fixed income - Social Security and retirement distributions",
        icon="sunset.fill",
        category=LifeEventCategory.RETIREMENT,
        income_changes=(
            IncomeChange(
                IncomeChangeType.SOCIAL_SECURITY, 2200,
                reason="Social Security benefits",
            ),
            IncomeChange(IncomeChangeType.PENSION, 1800, reason="Pension/401k distributions"),
        ),
        expense_changes=(
            ExpenseChange("Medicare Premiums", 175),
            ExpenseChange("Medicare Supplement", 200),
            ExpenseChange("Prescription Drugs", 100),
            ExpenseChange("Commuting (eliminated)", -350, category=ExpenseCategory.VEHICLE),
            ExpenseChange("Work Clothes (eliminated)", -75),
        ),
        tax_changes=(
            TaxChange(TaxChangeType.DEDUCTION, "Standard Deduction (65+)", 1850),
        ),
        duration=EventDuration.ongoing(),
    )


def job_loss() -> LifeEventScenario:
    return LifeEventScenario(
        name="Job Loss",
        description="Unexpected unemployment - budget adjustments and job search",
        icon="briefcase.fill",
        category=LifeEventCategory.CAREER,
        income_changes=(
            IncomeChange(
                IncomeChangeType.UNEMPLOYMENT_BENEFITS, 2000,
                duration=EventDuration.months(6),
                reason="Unemployment benefits (~$500/week)",
            ),
        ),
        expense_changes=(
            ExpenseChange("COBRA Health Insurance", 700, duration=EventDuration.months(6)),
            ExpenseChange(
                "Job Search Costs", 150,
                category=ExpenseCategory.OTHER, duration=EventDuration.months(3),
            ),
            ExpenseChange("Commuting (eliminated)", -300, category=ExpenseCategory.VEHICLE),
            ExpenseChange("Work Lunches (eliminated)", -200),
        ),
        savings_changes=(
            SavingsChange(SavingsChangeType.WITHDRAWAL, 5000, reason="Emergency fund usage"),
        ),
        duration=EventDuration.months(6),
    )


def getting_married() -> LifeEventScenario:
    return LifeEventScenario(
        name="Getting Married",
        description="Combining finances with a partner",
        icon="heart.fill",
        category=LifeEventCategory.FAMILY,
        income_changes=(
            IncomeChange(
                IncomeChangeType.SIDE_INCOME, 0,
                reason="Spouse's income contribution",
            ),
        ),
        expense_changes=(
            ExpenseChange(
                "Wedding Costs", 25000,
                frequency=ChangeFrequency.ONE_TIME,
                category=ExpenseCategory.OTHER, is_one_time=True,
            ),
            ExpenseChange(
                "Honeymoon", 5000,
                frequency=ChangeFrequency.ONE_TIME,
                category=ExpenseCategory.ENTERTAINMENT, is_one_time=True,
            ),
            ExpenseChange("Housing (shared)", -500, category=ExpenseCategory.HOME),
            ExpenseChange("Insurance (combined)", -100),
        ),
        tax_changes=(
            TaxChange(TaxChangeType.DEDUCTION, "Married Filing Jointly", 13850),
        ),
        duration=EventDuration.ongoing(),
    )


def buying_car() -> LifeEventScenario:
    return LifeEventScenario(
        name="Buying a Car",
        description="New vehicle purchase with financing",
        icon="car.fill",
        category=LifeEventCategory.OTHER,
        expense_changes=(
            ExpenseChange(
                "Car Payment", 500,
                category=ExpenseCategory.VEHICLE, duration=EventDuration.years(5),
            ),
            ExpenseChange("Full Coverage Insurance", 150, category=ExpenseCategory.VEHICLE),
            ExpenseChange(
                "Down Payment", 5000,
                frequency=ChangeFrequency.ONE_TIME,
                category=ExpenseCategory.VEHICLE, is_one_time=True,
            ),
            ExpenseChange(
                "Registration & Taxes", 1500,
                frequency=ChangeFrequency.ONE_TIME,
                category=ExpenseCategory.VEHICLE, is_one_time=True,
            ),
        ),
        duration=EventDuration.years(5),
    )


def back_to_school() -> LifeEventScenario:
    return LifeEventScenario(
        name="Going Back to School",
        description="Pursuing additional education while working",
        icon="graduationcap.fill",
        category=LifeEventCategory.EDUCATION,
        income_changes=(
            IncomeChange(
                IncomeChangeType.REDUCTION, -20,
                is_percentage=True,
                duration=EventDuration.years(2),
                reason="Reduced hours while studying",
            ),
        ),
        expense_changes=(
            ExpenseChange(
                "Tuition", 15000,
                frequency=ChangeFrequency.ANNUAL,
                category=ExpenseCategory.OTHER, duration=EventDuration.years(2),
            ),
            ExpenseChange(
                "Books & Supplies", 500,
                frequency=ChangeFrequency.ANNUAL,
                category=ExpenseCategory.OTHER, duration=EventDuration.years(2),
            ),
        ),
        tax_changes=(
            TaxChange(TaxChangeType.CREDIT, "Lifetime Learning Credit", 2000),
        ),
        duration=EventDuration.years(2),
    )


def disability() -> LifeEventScenario:
    return LifeEventScenario(
        name="Disability",
        description="Long-term disability affecting income",
        icon="figure.roll",
        category=LifeEventCategory.HEALTH,
        income_changes=(
            IncomeChange(
                IncomeChangeType.REDUCTION, -100,
                is_percentage=True, reason="Unable to work",
            ),
            IncomeChange(
                IncomeChangeType.DISABILITY, 2000,
                reason="Disability benefits (60% of salary typical)",
            ),
        ),
        expense_changes=(
            ExpenseChange("Medical Expenses", 500),
            ExpenseChange(
                "Home Modifications", 10000,
                frequency=ChangeFrequency.ONE_TIME,
                category=ExpenseCategory.HOME, is_one_time=True,
            ),
            ExpenseChange("Commuting (eliminated)", -300, category=ExpenseCategory.VEHICLE),
        ),
        duration=EventDuration.ongoing(),
    )


TEMPLATES: Dict[str, Callable[[], LifeEventScenario]] = {
    "first_child": first_child,
    "retirement": retirement,
    "job_loss": job_loss,
    "getting_married": getting_married,
    "buying_car": buying_car,
    "back_to_school": back_to_school,
    "disability": disability,
}
"""Template factories keyed by slug, in display order."""


def all_templates() -> List[LifeEventScenario]:
    """Build every template, in registry order."""
    return [factory() for factory in TEMPLATES.values()]


def get_template(key: str) -> LifeEventScenario:
    """Build the template registered under *key*.

    Hyphens are accepted in place of underscores.

    Raises
    ------
    TemplateNotFoundError
        If no template is registered under *key*.
    """
    slug = key.strip().lower().replace("-", "_")
    try:
        factory = TEMPLATES[slug]
    except KeyError:
        available = ", ".join(TEMPLATES)
        raise TemplateNotFoundError(
            f"No life-event template named '{key}'. Available: {available}."
        ) from None
    return factory()
