"""
Tests for risk aggregation and patient record validation.
"""

import math

import pytest

from icuwatch.models.vitals import RiskLevel, VitalSnapshot
from icuwatch.vitals.risk import (
    PatientValidationError,
    aggregate_risk,
    check_patient,
    validate_patient,
)


NORMAL = {"hr": 80, "rr": 16, "spo2": 98, "map": 80, "temp": 37.0}


def snapshot(**overrides) -> VitalSnapshot:
    return VitalSnapshot(**{**NORMAL, **overrides})


class TestAggregateRisk:

    def test_all_normal_is_low(self):
        assert aggregate_risk(snapshot()) == RiskLevel.LOW

    def test_single_red_is_high(self):
        assert aggregate_risk(snapshot(hr=150)) == RiskLevel.HIGH

    def test_single_yellow_is_medium(self):
        assert aggregate_risk(snapshot(hr=105 + 6)) == RiskLevel.MEDIUM

    def test_reading_between_normal_and_yellow_edges_is_low(self):
        assert aggregate_risk(snapshot(hr=105)) == RiskLevel.LOW
        assert aggregate_risk(snapshot(hr=112)) == RiskLevel.MEDIUM

    def test_red_outranks_any_number_of_yellows(self):
        s = snapshot(hr=112, rr=25, spo2=90, map=60, temp=34.0)
        assert aggregate_risk(s) == RiskLevel.HIGH

    def test_one_red_same_as_many(self):
        one = snapshot(map=50)
        many = snapshot(map=50, hr=150, spo2=80)
        assert aggregate_risk(one) == aggregate_risk(many) == RiskLevel.HIGH

    @pytest.mark.parametrize("channel", ["etco2", "sbp", "dbp"])
    def test_optional_channels_do_not_contribute(self, channel):
        s = snapshot(**{channel: 500})
        assert aggregate_risk(s) == RiskLevel.LOW

    def test_mapping_input(self):
        assert aggregate_risk(dict(NORMAL, spo2=85)) == RiskLevel.HIGH

    def test_missing_mandatory_channel_is_high(self):
        values = dict(NORMAL)
        del values["temp"]
        assert aggregate_risk(values) == RiskLevel.HIGH

    def test_non_finite_reading_is_high(self):
        assert aggregate_risk(dict(NORMAL, hr=math.nan)) == RiskLevel.HIGH


class TestValidatePatient:

    @pytest.fixture
    def record(self):
        return {
            "id": "p1",
            "name": "Mary Smith",
            "age": 64,
            "gender": "Female",
            "bed_number": "A-1",
            "vitals": {"hr": 80, "rr": 16, "spo2": 98},
        }

    def test_valid_record(self, record):
        assert validate_patient(record) is True

    @pytest.mark.parametrize("field", ["id", "name", "age", "gender", "bed_number", "vitals"])
    def test_missing_field(self, record, field):
        del record[field]
        assert validate_patient(record) is False

    def test_missing_vital_names_field(self, record):
        del record["vitals"]["spo2"]
        with pytest.raises(PatientValidationError) as exc_info:
            check_patient(record)
        assert exc_info.value.field == "vitals.spo2"
