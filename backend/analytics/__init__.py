"""
Analytics Module - Financial summary aggregation and insights.
"""

from .aggregator import (
    FinancialSummary,
    TREND_MONTHS,
    aggregate,
    build_monthly_trend
)

from .insights import (
    generate_insights,
    savings_rate
)

__all__ = [
    'FinancialSummary',
    'TREND_MONTHS',
    'aggregate',
    'build_monthly_trend',
    'generate_insights',
    'savings_rate',
]
