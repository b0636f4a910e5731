"""
icuwatch Insights

Templated clinical observations selected by rule tables.
"""

from icuwatch.insights.generator import (
    first_match,
    generate_insight,
    generate_trend_summaries,
)
from icuwatch.insights.rules import (
    PRIMARY_SUMMARY_RULES,
    QUICK_INSIGHT_RULES,
    SECONDARY_SUMMARY_RULES,
    InsightContext,
    InsightRule,
    SummaryRule,
)

__all__ = [
    "first_match",
    "generate_insight",
    "generate_trend_summaries",
    "PRIMARY_SUMMARY_RULES",
    "QUICK_INSIGHT_RULES",
    "SECONDARY_SUMMARY_RULES",
    "InsightContext",
    "InsightRule",
    "SummaryRule",
]
