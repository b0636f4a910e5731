"""
Tests for the clinical insight rule tables.
"""

import random
from dataclasses import replace

import pytest

from icuwatch.insights.generator import generate_insight, generate_trend_summaries
from icuwatch.insights.rules import (
    QUICK_INSIGHT_RULES,
    SECONDARY_SUMMARY_RULES,
    SUMMARY_SLOTS,
    InsightRule,
    always,
)
from icuwatch.models.vitals import RiskLevel, VitalSnapshot, VitalTrends
from icuwatch.synthetic.vitals import generate_snapshot


class FixedRandom(random.Random):
    """Random source whose draws always return the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


NORMAL = {"hr": 80, "rr": 16, "spo2": 98, "map": 80, "temp": 37.0}


def snapshot(**overrides) -> VitalSnapshot:
    return VitalSnapshot(**{**NORMAL, **overrides})


class TestQuickInsight:

    def test_low_risk_has_no_insight(self):
        assert generate_insight("low", snapshot()) is None

    def test_respiratory_decompensation(self):
        s = snapshot(hr=140, rr=35, spo2=85)
        assert "respiratory decompensation" in generate_insight("high", s)

    def test_early_shock(self):
        s = snapshot(hr=140, map=50)
        assert "early shock" in generate_insight("high", s)

    def test_sepsis_alert(self):
        s = snapshot(hr=140, rr=35, temp=39.6)
        assert "sepsis alert" in generate_insight("high", s)

    def test_ventilation_perfusion_mismatch(self):
        s = snapshot(spo2=84, etco2=65)
        assert "ventilation-perfusion mismatch" in generate_insight("high", s)

    def test_priority_order(self):
        # Both the decompensation and shock patterns match; the first rule wins
        s = snapshot(hr=140, rr=35, spo2=85, map=50)
        assert "respiratory decompensation" in generate_insight("high", s)

    def test_high_risk_fallback(self):
        s = snapshot(rr=35)
        assert generate_insight("high", s).startswith("Multiple vital sign abnormalities")

    @pytest.mark.parametrize("overrides,expected", [
        ({"spo2": 90}, "SpO2 trending downward"),
        ({"hr": 115}, "HR variability reduced"),
        ({"map": 60}, "MAP fluctuations detected"),
        ({"rr": 26}, "borderline thresholds"),
    ])
    def test_medium_risk(self, overrides, expected):
        assert expected in generate_insight("medium", snapshot(**overrides))

    def test_empty_rule_list_matches_nothing(self):
        assert generate_insight("high", snapshot(hr=150), rules=[]) is None

    def test_custom_rules(self):
        rules = [
            InsightRule(
                id="custom",
                risk_level=RiskLevel.LOW,
                predicate=always,
                message="All quiet",
            ),
        ]
        assert generate_insight("low", snapshot(), rules=rules) == "All quiet"

    def test_every_generated_high_patient_gets_an_insight(self):
        rng = random.Random(4)
        for _ in range(200):
            assert generate_insight("high", generate_snapshot("high", rng), rng) is not None


class TestTrendSummaries:

    def test_low_risk_is_stable(self):
        summaries = generate_trend_summaries("low", snapshot(), rng=random.Random(1))

        assert len(summaries) == 1
        assert summaries[0].id == "trend1"
        assert summaries[0].summary == "Stable vital signs"
        assert summaries[0].severity == RiskLevel.LOW

    def test_high_respiratory_primary(self):
        s = snapshot(hr=140, rr=35, spo2=85)
        summaries = generate_trend_summaries("high", s, rng=FixedRandom(0.99))

        assert len(summaries) == 1
        assert summaries[0].summary == "Potential respiratory decompensation"
        assert summaries[0].severity == RiskLevel.HIGH

    def test_contributing_factors_use_trend_start(self):
        s = snapshot(hr=140, rr=35, spo2=85)
        trends = VitalTrends(
            hr=[110.0, 140.0], rr=[22.0, 35.0], spo2=[94.0, 85.0],
            map=[80.0, 80.0], temp=[37.0, 37.0],
        )
        insight = generate_trend_summaries("high", s, trends, rng=FixedRandom(0.99))[0]

        assert "Respiratory rate trending upward (22.0 → 35.0)" in insight.contributing_factors
        assert insight.contributing_factors[0].startswith("Heart rate 110.0 → 140.0")

    def test_high_hemodynamic_primary(self):
        s = snapshot(map=50, sbp=70, dbp=40)
        summaries = generate_trend_summaries("high", s, rng=FixedRandom(0.99))
        assert summaries[0].summary == "Hemodynamic instability"

    def test_secondary_temperature(self):
        s = snapshot(hr=140, rr=35, spo2=85, temp=39.6)
        summaries = generate_trend_summaries("high", s, rng=FixedRandom(0.0))

        assert [i.id for i in summaries] == ["trend1", "trend2"]
        assert summaries[1].summary == "Fever with systemic response"
        assert summaries[1].severity == RiskLevel.HIGH

    def test_secondary_temperature_yellow(self):
        s = snapshot(map=50, temp=38.5)
        summaries = generate_trend_summaries("high", s, rng=FixedRandom(0.0))
        assert summaries[1].summary == "Temperature abnormality"
        assert summaries[1].severity == RiskLevel.MEDIUM

    def test_secondary_fluid_balance(self):
        s = snapshot(map=50)
        summaries = generate_trend_summaries("high", s, rng=FixedRandom(0.0))
        assert summaries[1].summary == "Fluid balance concern"

    def test_secondary_gate_can_skip(self):
        s = snapshot(map=50, temp=39.6)
        summaries = generate_trend_summaries("high", s, rng=FixedRandom(0.99))
        assert len(summaries) == 1

    @pytest.mark.parametrize("overrides,expected", [
        ({"spo2": 90}, "Declining respiratory status"),
        ({"map": 60}, "Blood pressure fluctuation"),
        ({"hr": 115}, "Early vital sign drift"),
    ])
    def test_medium_primary(self, overrides, expected):
        summaries = generate_trend_summaries("medium", snapshot(**overrides), rng=random.Random(1))
        assert len(summaries) == 1
        assert summaries[0].summary == expected

    def test_at_most_two_summaries(self):
        rng = random.Random(8)
        for risk_level in RiskLevel:
            for _ in range(200):
                s = generate_snapshot(risk_level, rng)
                assert 1 <= len(generate_trend_summaries(risk_level, s, rng=rng)) <= 2

    def test_temperature_gate_distribution(self):
        rng = random.Random(12)
        s = snapshot(map=50, temp=39.6)
        fired = sum(
            any(i.summary == "Fever with systemic response"
                for i in generate_trend_summaries("high", s, rng=rng))
            for _ in range(2000)
        )
        assert 0.65 < fired / 2000 < 0.75

    def test_overridden_probability(self):
        secondary = [replace(rule, probability=1.0) for rule in SECONDARY_SUMMARY_RULES]
        slots = [SUMMARY_SLOTS[0], ("trend2", secondary)]
        s = snapshot(map=50, temp=39.6)

        for seed in range(20):
            summaries = generate_trend_summaries("high", s, rng=random.Random(seed), slots=slots)
            assert summaries[1].summary == "Fever with systemic response"

    def test_empty_slots_yield_no_summaries(self):
        assert generate_trend_summaries("low", snapshot(), rng=random.Random(1), slots=[]) == []

    def test_quick_rules_cover_high_and_medium(self):
        levels = {rule.risk_level for rule in QUICK_INSIGHT_RULES}
        assert levels == {RiskLevel.HIGH, RiskLevel.MEDIUM}
