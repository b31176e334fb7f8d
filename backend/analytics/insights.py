"""
Insight generation for a financial summary.
Each insight is a plain dict with at least ``type`` and ``message``.
"""

from typing import Mapping, Optional

from extractors.financial_rules import Category

# Food & Dining above this share of expenses triggers a recommendation
DINING_SHARE_THRESHOLD = 0.20
# Share of the Food & Dining total proposed as a saving
DINING_SAVING_RATE = 0.15


def savings_rate(income: float, expenses: float) -> Optional[float]:
    """Savings rate in percent rounded to one decimal, None without income."""
    if income <= 0:
        return None
    return round((income - expenses) / income * 100, 1)


def savings_rate_insight(income: float, expenses: float) -> dict:
    rate = savings_rate(income, expenses)
    if rate is None:
        return {
            "type": "savings_rate",
            "message": "Savings rate unavailable: no income was found in this statement.",
            "rate": 0.0,
            "available": False,
        }
    return {
        "type": "savings_rate",
        "message": (
            f"Your savings rate is {rate:.1f}%. "
            f"You're saving ${income - expenses:.2f} per month."
        ),
        "rate": rate,
        "available": True,
    }


def top_category_insight(category_totals: Mapping[str, float]) -> dict:
    """
    Name the category with the highest spending.

    Ties go to the category listed first, so a batch without spending
    names the first category at $0.00.
    """
    totals = iter(category_totals.items())
    top_name, top_amount = next(totals, (Category.OTHER.value, 0.0))
    for name, amount in totals:
        if amount > top_amount:
            top_name, top_amount = name, amount

    return {
        "type": "top_category",
        "message": f"Your highest spending category is {top_name} at ${top_amount:.2f}.",
        "category": top_name,
        "amount": top_amount,
    }


def dining_recommendation(category_totals: Mapping[str, float], expenses: float) -> Optional[dict]:
    dining = category_totals.get(Category.FOOD_AND_DINING.value, 0.0)
    if dining <= expenses * DINING_SHARE_THRESHOLD:
        return None

    saving = round(dining * DINING_SAVING_RATE, 2)
    return {
        "type": "recommendation",
        "message": (
            f"Consider reducing dining expenses by {DINING_SAVING_RATE:.0%} "
            f"to save an additional ${saving:.2f}/month."
        ),
        "category": Category.FOOD_AND_DINING.value,
        "potentialSavings": saving,
    }


def generate_insights(income: float, expenses: float, category_totals: Mapping[str, float]) -> list[dict]:
    """
    Build the ordered insight list: savings rate, top category,
    then the optional dining recommendation.
    """
    insights = [
        savings_rate_insight(income, expenses),
        top_category_insight(category_totals),
    ]

    recommendation = dining_recommendation(category_totals, expenses)
    if recommendation is not None:
        insights.append(recommendation)

    return insights
