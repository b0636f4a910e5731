"""
Clinical Insight Rules

Priority-ordered (predicate, template) tables for the quick insight line
and the structured trend summaries. Each table is evaluated top-down and
the first matching rule wins. Rules with a probability below 1 only fire
when a draw from the injected random source passes.
"""

from dataclasses import dataclass, field
from typing import Callable

from icuwatch.models.patient import ClinicalInsight
from icuwatch.models.vitals import (
    RiskLevel,
    VitalChannel,
    VitalSnapshot,
    VitalStatus,
    VitalTrends,
)
from icuwatch.vitals.status import classify_snapshot


@dataclass
class InsightContext:
    """What a rule can look at."""
    risk_level: RiskLevel
    snapshot: VitalSnapshot
    trends: VitalTrends = field(default_factory=VitalTrends)
    statuses: dict[VitalChannel, VitalStatus] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        risk_level: RiskLevel | str,
        snapshot: VitalSnapshot,
        trends: VitalTrends | None = None,
    ) -> "InsightContext":
        return cls(
            risk_level=RiskLevel(risk_level),
            snapshot=snapshot,
            trends=trends or VitalTrends(),
            statuses=classify_snapshot(snapshot),
        )

    def status(self, channel: VitalChannel) -> VitalStatus | None:
        return self.statuses.get(channel)

    def is_red(self, *channels: VitalChannel) -> bool:
        return all(self.status(ch) == VitalStatus.RED for ch in channels)

    def is_yellow(self, *channels: VitalChannel) -> bool:
        return all(self.status(ch) == VitalStatus.YELLOW for ch in channels)

    def is_abnormal(self, *channels: VitalChannel) -> bool:
        return all(
            self.status(ch) not in (None, VitalStatus.NORMAL) for ch in channels
        )

    def earliest(self, channel: VitalChannel) -> float:
        """Oldest trend value, the current reading when no trend exists."""
        series = self.trends.series(channel)
        if series:
            return series[0]
        return self.snapshot.value(channel)


Predicate = Callable[[InsightContext], bool]


@dataclass(frozen=True)
class InsightRule:
    """A quick-insight rule: one line of text."""
    id: str
    risk_level: RiskLevel
    predicate: Predicate
    message: str
    probability: float = 1.0


@dataclass(frozen=True)
class SummaryRule:
    """A trend-summary rule producing a structured insight."""
    id: str
    risk_level: RiskLevel
    predicate: Predicate
    build: Callable[[InsightContext, str], ClinicalInsight]
    probability: float = 1.0


def always(ctx: InsightContext) -> bool:
    return True


HR, RR, SPO2, MAP, TEMP, ETCO2 = (
    VitalChannel.HR, VitalChannel.RR, VitalChannel.SPO2,
    VitalChannel.MAP, VitalChannel.TEMP, VitalChannel.ETCO2,
)


# =============================================================================
# Quick insight
# =============================================================================

QUICK_INSIGHT_RULES: list[InsightRule] = [
    # High risk
    InsightRule(
        id="respiratory_decompensation",
        risk_level=RiskLevel.HIGH,
        predicate=lambda c: c.is_red(HR, RR, SPO2),
        message="HR ↑, RR ↑, SpO2 ↓ — potential respiratory decompensation",
    ),
    InsightRule(
        id="early_shock",
        risk_level=RiskLevel.HIGH,
        predicate=lambda c: c.is_red(MAP, HR),
        message="MAP ↓ with HR ↑ — possible early shock pattern",
    ),
    InsightRule(
        id="sepsis_alert",
        risk_level=RiskLevel.HIGH,
        predicate=lambda c: c.is_red(TEMP, HR, RR),
        message="Temp ↑, HR ↑, RR ↑ — sepsis alert",
    ),
    InsightRule(
        id="vq_mismatch",
        risk_level=RiskLevel.HIGH,
        predicate=lambda c: c.is_red(SPO2, ETCO2),
        message="SpO2 ↓, EtCO2 ↑ — ventilation-perfusion mismatch",
    ),
    InsightRule(
        id="multiple_abnormalities",
        risk_level=RiskLevel.HIGH,
        predicate=always,
        message="Multiple vital sign abnormalities — deterioration risk",
    ),
    # Medium risk
    InsightRule(
        id="spo2_drift",
        risk_level=RiskLevel.MEDIUM,
        predicate=lambda c: c.is_yellow(SPO2),
        message="SpO2 trending downward over past 30 minutes",
    ),
    InsightRule(
        id="hr_variability",
        risk_level=RiskLevel.MEDIUM,
        predicate=lambda c: c.is_yellow(HR),
        message="HR variability reduced — monitor closely",
    ),
    InsightRule(
        id="map_fluctuation",
        risk_level=RiskLevel.MEDIUM,
        predicate=lambda c: c.is_yellow(MAP),
        message="MAP fluctuations detected — fluid status check recommended",
    ),
    InsightRule(
        id="borderline",
        risk_level=RiskLevel.MEDIUM,
        predicate=always,
        message="Vital signs at borderline thresholds — continue monitoring",
    ),
]


# =============================================================================
# Trend summaries
# =============================================================================

def _respiratory_decompensation(c: InsightContext, id: str) -> ClinicalInsight:
    s = c.snapshot
    hr_note = "abnormal" if c.is_abnormal(HR) else "compensatory"
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.HIGH,
        summary="Potential respiratory decompensation",
        analysis=(
            "Analysis shows a concerning pattern of increased work of breathing with "
            "decreasing oxygen saturation over the past hour. This pattern is "
            "consistent with early respiratory decompensation."
        ),
        contributing_factors=[
            f"Heart rate {c.earliest(HR)} → {s.hr} ({hr_note})",
            f"Respiratory rate trending upward ({c.earliest(RR)} → {s.rr})",
            f"SpO2 decreased from {c.earliest(SPO2)}% to {s.spo2}% despite increased FiO2",
        ],
        recommendation=(
            "Consider ABG assessment, chest imaging, and preparation for possible "
            "escalation of respiratory support."
        ),
    )


def _hemodynamic_instability(c: InsightContext, id: str) -> ClinicalInsight:
    s = c.snapshot
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.HIGH,
        summary="Hemodynamic instability",
        analysis=(
            "Vital signs indicate possible circulatory compromise with MAP below "
            "target threshold. Trend analysis suggests progressive deterioration "
            "over the past 30 minutes."
        ),
        contributing_factors=[
            f"MAP decreased from {c.earliest(MAP)} to {s.map} mmHg",
            f"Heart rate increased from {c.earliest(HR)} to {s.hr} bpm",
            f"SBP/DBP: {s.sbp}/{s.dbp} mmHg (inadequate perfusion pressure)",
        ],
        recommendation=(
            "Urgent fluid resuscitation assessment, consider vasopressor support if "
            "fluid non-responsive. Check lactate and reassess tissue perfusion."
        ),
    )


def _temperature(c: InsightContext, id: str) -> ClinicalInsight:
    s = c.snapshot
    febrile = c.is_red(TEMP)
    analysis = (
        f"Temperature of {s.temp}°C with associated vital sign changes suggests "
        "possible systemic inflammatory response."
    )
    if febrile:
        analysis += " Pattern is consistent with sepsis criteria."
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.HIGH if febrile else RiskLevel.MEDIUM,
        summary="Fever with systemic response" if febrile else "Temperature abnormality",
        analysis=analysis,
        contributing_factors=[
            f"Temperature {c.earliest(TEMP)} → {s.temp}°C",
            f"Heart rate elevated at {s.hr} bpm",
            f"Respiratory rate increased to {s.rr}",
        ],
        recommendation=(
            "Consider sepsis protocol activation, blood cultures, and early "
            "antimicrobial therapy."
            if febrile else
            "Monitor temperature trend, assess for infection sources, consider "
            "antipyretics if symptomatic."
        ),
    )


def _fluid_balance(c: InsightContext, id: str) -> ClinicalInsight:
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.MEDIUM,
        summary="Fluid balance concern",
        analysis=(
            "MAP fluctuations combined with other clinical indicators suggest possible "
            "fluid balance issues that may require intervention."
        ),
        contributing_factors=[
            "MAP variability increased in last 2 hours",
            "Urine output decreased to <0.5 ml/kg/hr",
            "Slight increase in heart rate with position changes",
        ],
        recommendation="Consider fluid challenge or assessment of volume status with ultrasound.",
    )


def _declining_respiratory(c: InsightContext, id: str) -> ClinicalInsight:
    s = c.snapshot
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.MEDIUM,
        summary="Declining respiratory status",
        analysis=(
            "Gradual decrease in SpO2 with increased respiratory rate suggests "
            "increasing oxygen demand or decreased respiratory efficiency."
        ),
        contributing_factors=[
            f"SpO2 trending downward over past 2 hours ({c.earliest(SPO2)}% → {s.spo2}%)",
            f"Mild increase in respiratory rate ({c.earliest(RR)} → {s.rr})",
            "Patient reports increased dyspnea with movement",
        ],
        recommendation=(
            "Consider increasing oxygen support and more frequent respiratory assessments."
        ),
    )


def _bp_fluctuation(c: InsightContext, id: str) -> ClinicalInsight:
    s = c.snapshot
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.MEDIUM,
        summary="Blood pressure fluctuation",
        analysis=(
            "MAP has been unstable over the monitoring period, potentially indicating "
            "early hemodynamic compromise or medication effect."
        ),
        contributing_factors=[
            f"MAP variability: {c.earliest(MAP)} → {s.map} mmHg",
            f"Heart rate trend: {c.earliest(HR)} → {s.hr} bpm",
            "Fluid balance status needs assessment",
        ],
        recommendation=(
            "Monitor fluid status, review medication timing relative to BP changes, "
            "consider more frequent measurements."
        ),
    )


def _early_drift(c: InsightContext, id: str) -> ClinicalInsight:
    s = c.snapshot
    direction = "down" if s.map < c.earliest(MAP) else "up"
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.MEDIUM,
        summary="Early vital sign drift",
        analysis=(
            "Multiple vital signs showing gradual deviation from baseline, though "
            "still within concerning but not critical ranges."
        ),
        contributing_factors=[
            f"Heart rate increased from {c.earliest(HR)} to {s.hr} bpm",
            "Respiratory pattern change noted in last hour",
            f"MAP now at {s.map} mmHg (trending {direction})",
        ],
        recommendation=(
            "Increase monitoring frequency, review medication schedule, assess for "
            "clinical changes."
        ),
    )


def _stable(c: InsightContext, id: str) -> ClinicalInsight:
    return ClinicalInsight(
        id=id,
        severity=RiskLevel.LOW,
        summary="Stable vital signs",
        analysis=(
            "All vital signs remain within normal ranges with appropriate variability. "
            "No concerning patterns detected in the last 4 hours."
        ),
        contributing_factors=[
            "Heart rate appropriately increases with activity",
            "Respiratory rate remains in normal range (12-18)",
            "SpO2 consistently above 95%",
        ],
        recommendation="Continue current care plan and monitoring frequency.",
    )


# Slot "trend1": the primary finding
PRIMARY_SUMMARY_RULES: list[SummaryRule] = [
    SummaryRule(
        id="respiratory_decompensation",
        risk_level=RiskLevel.HIGH,
        predicate=lambda c: c.is_abnormal(RR, SPO2),
        build=_respiratory_decompensation,
    ),
    SummaryRule(
        id="hemodynamic_instability",
        risk_level=RiskLevel.HIGH,
        predicate=lambda c: c.is_abnormal(MAP),
        build=_hemodynamic_instability,
    ),
    SummaryRule(
        id="declining_respiratory",
        risk_level=RiskLevel.MEDIUM,
        predicate=lambda c: c.is_abnormal(SPO2),
        build=_declining_respiratory,
    ),
    SummaryRule(
        id="bp_fluctuation",
        risk_level=RiskLevel.MEDIUM,
        predicate=lambda c: c.is_abnormal(MAP),
        build=_bp_fluctuation,
    ),
    SummaryRule(
        id="early_drift",
        risk_level=RiskLevel.MEDIUM,
        predicate=always,
        build=_early_drift,
    ),
    SummaryRule(
        id="stable",
        risk_level=RiskLevel.LOW,
        predicate=always,
        build=_stable,
    ),
]

# Slot "trend2": a secondary finding, high risk only
SECONDARY_SUMMARY_RULES: list[SummaryRule] = [
    SummaryRule(
        id="temperature",
        risk_level=RiskLevel.HIGH,
        predicate=lambda c: c.is_abnormal(TEMP),
        build=_temperature,
        probability=0.7,
    ),
    SummaryRule(
        id="fluid_balance",
        risk_level=RiskLevel.HIGH,
        predicate=always,
        build=_fluid_balance,
        probability=0.5,
    ),
]

SUMMARY_SLOTS: list[tuple[str, list[SummaryRule]]] = [
    ("trend1", PRIMARY_SUMMARY_RULES),
    ("trend2", SECONDARY_SUMMARY_RULES),
]
