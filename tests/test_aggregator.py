from datetime import date

import pytest

from analytics.aggregator import TREND_MONTHS, aggregate
from analytics.insights import savings_rate
from errors import UnreadableInputError
from extractors.financial_rules import Category, Polarity
from extractors.tabular_extractor import extract_transactions_from_csv


def _insight(summary, kind):
    matches = [i for i in summary.insights if i["type"] == kind]
    return matches[0] if matches else None


def test_scenario_summary(scenario_csv):
    summary = aggregate(extract_transactions_from_csv(scenario_csv))

    assert summary.monthlyIncome == 5200.0
    assert summary.monthlySpending == 150.0
    assert summary.totalBalance == 5050.0
    assert summary.categoryTotals["Food & Dining"] == 150.0
    assert list(summary.categoryTotals) == [c.value for c in Category]

    june = summary.monthlyTrend[-1]
    assert june == {"month": "Jun", "income": 5200.0, "spending": 150.0}


def test_balance_and_category_identities(make_txn):
    transactions = [
        make_txn("Payroll", 3100.10, Polarity.CREDIT),
        make_txn("Starbucks", 4.35),
        make_txn("Uber", 17.21),
        make_txn("Netflix", 15.49),
        make_txn("Electric bill", 88.08),
        make_txn("Target", 63.33),
        make_txn("CVS", 9.99),
        make_txn("Mystery charge", 0.1),
        make_txn("Refund from Amazon", 20.2, Polarity.CREDIT),
    ]
    summary = aggregate(transactions)

    assert summary.totalBalance == summary.monthlyIncome - summary.monthlySpending
    assert sum(summary.categoryTotals.values()) == summary.monthlySpending
    # Credits never reach category totals
    assert summary.categoryTotals["Shopping"] == pytest.approx(63.33)


def test_aggregate_is_idempotent(make_txn):
    transactions = [make_txn("Pizza", 12.5), make_txn("Salary", 900.0, Polarity.CREDIT)]
    assert aggregate(transactions) == aggregate(transactions)
    assert aggregate(transactions).to_dict() == aggregate(list(transactions)).to_dict()


def test_zero_income_savings_rate_is_unavailable(make_txn):
    summary = aggregate([make_txn("Rent", 1200.0), make_txn("Groceries", 80.0)])

    insight = _insight(summary, "savings_rate")
    assert insight["rate"] == 0.0
    assert insight["available"] is False
    assert "unavailable" in insight["message"]
    assert savings_rate(0.0, 1280.0) is None


def test_savings_rate_value(make_txn):
    summary = aggregate([make_txn("Salary", 4000.0, Polarity.CREDIT), make_txn("Rent", 1000.0)])

    insight = _insight(summary, "savings_rate")
    assert insight["rate"] == 75.0
    assert insight["available"] is True
    assert insight["message"] == "Your savings rate is 75.0%. You're saving $3000.00 per month."


def test_top_category_ties_go_to_first_category(make_txn):
    summary = aggregate([make_txn("Shoes", 50.0), make_txn("Uber", 50.0)])

    top = _insight(summary, "top_category")
    assert top["category"] == "Transportation"
    assert top["amount"] == 50.0


def test_no_spending_names_first_category_at_zero(make_txn):
    summary = aggregate([make_txn("Salary", 100.0, Polarity.CREDIT)])

    assert [i["type"] for i in summary.insights] == ["savings_rate", "top_category"]
    top = _insight(summary, "top_category")
    assert top["category"] == "Food & Dining"
    assert top["amount"] == 0.0
    assert top["message"] == "Your highest spending category is Food & Dining at $0.00."
    assert _insight(summary, "recommendation") is None
    assert summary.categoryTotals == {c.value: 0.0 for c in Category}


def test_dining_recommendation_threshold(make_txn):
    heavy = aggregate([make_txn("Restaurant", 300.0), make_txn("Rent", 700.0)])
    light = aggregate([make_txn("Restaurant", 100.0), make_txn("Rent", 900.0)])

    recommendation = _insight(heavy, "recommendation")
    assert recommendation["potentialSavings"] == 45.0
    assert "$45.00/month" in recommendation["message"]
    # Exactly 10% is below the 20% threshold
    assert _insight(light, "recommendation") is None
    assert [i["type"] for i in heavy.insights] == ["savings_rate", "top_category", "recommendation"]


def test_monthly_trend_window_is_jan_to_jun(make_txn):
    transactions = [
        make_txn("Salary", 1000.0, Polarity.CREDIT, on=date(2025, 1, 31)),
        make_txn("Pizza", 20.0, on=date(2025, 3, 2)),
        make_txn("Pizza", 30.0, on=date(2024, 3, 9)),
        make_txn("Gym", 40.0, on=date(2025, 9, 1)),
    ]
    summary = aggregate(transactions)

    assert [p["month"] for p in summary.monthlyTrend] == list(TREND_MONTHS)
    by_month = {p["month"]: p for p in summary.monthlyTrend}
    assert by_month["Jan"]["income"] == 1000.0
    # Same short month from different years lands in one bucket
    assert by_month["Mar"]["spending"] == 50.0
    assert by_month["Feb"] == {"month": "Feb", "income": 0.0, "spending": 0.0}
    # September spending counts in totals but not in the trend
    assert summary.monthlySpending == 90.0
    assert sum(p["spending"] for p in summary.monthlyTrend) == 50.0


def test_empty_batch(make_txn):
    summary = aggregate([])

    assert summary.to_dict() == {
        "totalBalance": 0.0,
        "monthlyIncome": 0.0,
        "monthlySpending": 0.0,
        "categoryTotals": {c.value: 0.0 for c in Category},
        "monthlyTrend": [{"month": m, "income": 0.0, "spending": 0.0} for m in TREND_MONTHS],
        "insights": [
            {
                "type": "savings_rate",
                "message": "Savings rate unavailable: no income was found in this statement.",
                "rate": 0.0,
                "available": False,
            },
            {
                "type": "top_category",
                "message": "Your highest spending category is Food & Dining at $0.00.",
                "category": "Food & Dining",
                "amount": 0.0,
            },
        ],
    }


def test_overflowing_totals_are_rejected(make_txn):
    transactions = [make_txn("Wire transfer", 1e308), make_txn("Wire transfer", 1e308)]

    with pytest.raises(UnreadableInputError, match="overflow"):
        aggregate(transactions)
