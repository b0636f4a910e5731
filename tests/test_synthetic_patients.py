"""
Tests for the synthetic ward generator.
"""

import random

import pytest

from icuwatch.models.vitals import RiskLevel, VentilationSupport
from icuwatch.synthetic.patients import (
    SyntheticPatientGenerator,
    bed_number,
    generate_patients,
    medication_for,
)
from icuwatch.synthetic.trends import TREND_LENGTH
from icuwatch.vitals.risk import aggregate_risk


@pytest.fixture
def ward():
    return SyntheticPatientGenerator(seed=42).generate_patients(200)


class TestSyntheticPatientGenerator:

    def test_seeded_ward_is_reproducible(self):
        first = SyntheticPatientGenerator(seed=42).generate_patients(12)
        second = SyntheticPatientGenerator(seed=42).generate_patients(12)
        assert [p.model_dump() for p in first] == [p.model_dump() for p in second]

    def test_ids_and_beds(self):
        patients = SyntheticPatientGenerator(seed=1).generate_patients(12)

        assert [p.id for p in patients] == [f"p{i}" for i in range(1, 13)]
        assert patients[0].bed_number == "A-1"
        assert patients[9].bed_number == "A-10"
        assert patients[10].bed_number == "B-1"

    def test_risk_level_matches_vitals(self, ward):
        for patient in ward:
            assert aggregate_risk(patient.vitals) == patient.risk_level

    def test_trends_end_at_current_vitals(self, ward):
        for patient in ward:
            assert len(patient.trends.hr) == TREND_LENGTH
            assert patient.trends.hr[-1] == round(patient.vitals.hr, 1)
            assert patient.trends.map[-1] == round(patient.vitals.map, 1)

    def test_age_range(self, ward):
        assert all(40 <= p.age < 80 for p in ward)

    def test_insights_follow_risk(self, ward):
        for patient in ward:
            if patient.risk_level == RiskLevel.LOW:
                assert patient.ai_insight is None
                assert len(patient.ai_trend_summaries) == 1
            else:
                assert patient.ai_insight
                assert 1 <= len(patient.ai_trend_summaries) <= 2

    def test_ventilation_follows_risk(self, ward):
        for patient in ward:
            if patient.risk_level == RiskLevel.HIGH:
                assert patient.ventilation_support in (VentilationSupport.MV, VentilationSupport.NIV)
            elif patient.risk_level == RiskLevel.MEDIUM:
                assert patient.ventilation_support in (VentilationSupport.NIV, VentilationSupport.O2)
            else:
                assert patient.ventilation_support == VentilationSupport.O2

    def test_labs(self, ward):
        for patient in ward:
            assert [lab.name for lab in patient.labs] == ["WBC", "Hgb", "Creatinine", "Lactate"]
            wbc = patient.labs[0]
            if patient.risk_level == RiskLevel.HIGH:
                assert wbc.is_abnormal

    def test_risk_weights(self):
        generator = SyntheticPatientGenerator(
            seed=3, risk_weights={"low": 0, "medium": 0, "high": 1},
        )
        assert all(p.risk_level == RiskLevel.HIGH for p in generator.generate_patients(20))

    def test_default_mix(self):
        patients = SyntheticPatientGenerator(seed=5).generate_patients(1000)
        low = sum(p.risk_level == RiskLevel.LOW for p in patients)
        assert 0.5 < low / 1000 < 0.7

    def test_module_wrapper(self):
        patients = generate_patients(5, rng=random.Random(8))
        assert len(patients) == 5


class TestReferenceData:

    def test_bed_number(self):
        assert bed_number(0) == "A-1"
        assert bed_number(25) == "C-6"

    def test_medication_grows_with_risk(self):
        assert len(medication_for(RiskLevel.LOW)) == 2
        assert len(medication_for(RiskLevel.MEDIUM)) == 4
        assert len(medication_for(RiskLevel.HIGH)) == 5
