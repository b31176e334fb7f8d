"""
Aggregator Module
Folds a batch of canonical transactions into the financial summary served
to the dashboard.
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from errors import UnreadableInputError
from extractors.financial_rules import Category, Polarity, Transaction
from .insights import generate_insights

logger = logging.getLogger(__name__)


# Trend window. Transactions dated Jul-Dec never appear in monthlyTrend.
TREND_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun")

# Locale-independent short month names, indexed by date.month - 1
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class FinancialSummary:
    """Derived summary of one transaction batch."""

    totalBalance: float
    monthlyIncome: float
    monthlySpending: float
    categoryTotals: dict = field(default_factory=dict)
    monthlyTrend: list = field(default_factory=list)
    insights: list = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serializable form with the dashboard's field names."""
        return {
            "totalBalance": self.totalBalance,
            "monthlyIncome": self.monthlyIncome,
            "monthlySpending": self.monthlySpending,
            "categoryTotals": dict(self.categoryTotals),
            "monthlyTrend": [dict(point) for point in self.monthlyTrend],
            "insights": [dict(insight) for insight in self.insights],
        }


def month_label(txn: Transaction) -> str:
    return MONTH_ABBREVIATIONS[txn.date.month - 1]


def build_monthly_trend(transactions: Iterable[Transaction]) -> list[dict]:
    """
    Group income and spending by short month name.

    Returns:
        One {month, income, spending} point per TREND_MONTHS label, in order
    """
    monthly = defaultdict(lambda: {"income": 0.0, "spending": 0.0})

    for txn in transactions:
        bucket = monthly[month_label(txn)]
        if txn.polarity is Polarity.CREDIT:
            bucket["income"] += txn.amount
        else:
            bucket["spending"] += txn.amount

    outside = sorted(set(monthly) - set(TREND_MONTHS))
    if outside:
        logger.debug(f"Months outside the trend window: {', '.join(outside)}")

    return [
        {
            "month": month,
            "income": monthly[month]["income"] if month in monthly else 0.0,
            "spending": monthly[month]["spending"] if month in monthly else 0.0,
        }
        for month in TREND_MONTHS
    ]


def aggregate(transactions: Iterable[Transaction]) -> FinancialSummary:
    """
    Compute the financial summary for a transaction batch.

    Pure function of its input: the same list always yields an equal summary.

    Args:
        transactions: Canonical transactions

    Returns:
        FinancialSummary

    Raises:
        UnreadableInputError: If the totals overflow to a non-finite value
    """
    transactions = list(transactions)

    category_totals = {category.value: 0.0 for category in Category}
    income = 0.0

    for txn in transactions:
        if txn.polarity is Polarity.CREDIT:
            income += txn.amount
        else:
            category_totals[txn.category.value] += txn.amount

    # Spending is defined as the sum of the category buckets so both agree exactly
    expenses = sum(category_totals.values())

    if not (math.isfinite(income) and math.isfinite(expenses)):
        raise UnreadableInputError(
            f"Totals overflow: income={income}, spending={expenses}"
        )

    summary = FinancialSummary(
        totalBalance=income - expenses,
        monthlyIncome=income,
        monthlySpending=expenses,
        categoryTotals=category_totals,
        monthlyTrend=build_monthly_trend(transactions),
        insights=generate_insights(income, expenses, category_totals),
    )

    logger.info(
        f"Aggregated {len(transactions)} transactions: income={income:.2f}, "
        f"spending={expenses:.2f}, balance={summary.totalBalance:.2f}"
    )
    return summary
