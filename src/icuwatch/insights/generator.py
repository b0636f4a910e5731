"""
Clinical Insight Generator

Evaluates the rule tables against a patient's snapshot.
"""

import random
from typing import Iterable, TypeVar

import structlog

from icuwatch.insights.rules import (
    QUICK_INSIGHT_RULES,
    SUMMARY_SLOTS,
    InsightContext,
    InsightRule,
    SummaryRule,
)
from icuwatch.models.patient import ClinicalInsight
from icuwatch.models.vitals import RiskLevel, VitalSnapshot, VitalTrends

logger = structlog.get_logger(__name__)

R = TypeVar("R", InsightRule, SummaryRule)


def first_match(
    rules: Iterable[R],
    ctx: InsightContext,
    rng: random.Random,
) -> R | None:
    """First rule for the context's risk level whose predicate and gate pass."""
    for rule in rules:
        if rule.risk_level != ctx.risk_level:
            continue
        if not rule.predicate(ctx):
            continue
        if rule.probability < 1.0 and rng.random() >= rule.probability:
            continue
        return rule
    return None


def generate_insight(
    risk_level: RiskLevel | str,
    snapshot: VitalSnapshot,
    rng: random.Random | None = None,
    rules: list[InsightRule] | None = None,
) -> str | None:
    """
    One-line insight for the patient card.

    Returns None for low-risk patients.
    """
    ctx = InsightContext.build(risk_level, snapshot)
    if rules is None:
        rules = QUICK_INSIGHT_RULES
    rule = first_match(rules, ctx, rng or random.Random())
    if rule is None:
        return None
    return rule.message


def generate_trend_summaries(
    risk_level: RiskLevel | str,
    snapshot: VitalSnapshot,
    trends: VitalTrends | None = None,
    rng: random.Random | None = None,
    slots: list[tuple[str, list[SummaryRule]]] | None = None,
) -> list[ClinicalInsight]:
    """
    Structured insights, at most one per slot.

    Low risk yields exactly the stable summary; high and medium risk
    yield up to two findings.
    """
    rng = rng or random.Random()
    ctx = InsightContext.build(risk_level, snapshot, trends)

    if slots is None:
        slots = SUMMARY_SLOTS

    summaries = []
    for slot_id, rules in slots:
        rule = first_match(rules, ctx, rng)
        if rule is None:
            continue
        summaries.append(rule.build(ctx, slot_id))

    logger.debug(
        "Generated trend summaries",
        risk_level=ctx.risk_level.value,
        summaries=[s.summary for s in summaries],
    )
    return summaries
