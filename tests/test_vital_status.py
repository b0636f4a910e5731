"""
Tests for the threshold table and status classifier.
"""

import math

import pytest

from icuwatch.models.vitals import VitalChannel, VitalSnapshot, VitalStatus
from icuwatch.vitals.status import classify, classify_snapshot, status_color
from icuwatch.vitals.thresholds import VITAL_THRESHOLDS, UnknownChannelError, get_thresholds


class TestThresholdTable:
    """Reference bands."""

    def test_every_channel_has_a_band(self):
        for channel in VitalChannel:
            assert channel in VITAL_THRESHOLDS

    @pytest.mark.parametrize("channel,normal,yellow,red", [
        ("hr", (60, 100), (55, 110), (45, 130)),
        ("rr", (12, 20), (10, 24), (6, 30)),
        ("spo2", (95, 100), (93, 100), (88, 100)),
        ("map", (70, 105), (65, 110), (55, 120)),
        ("sbp", (100, 140), (90, 160), (80, 180)),
        ("dbp", (60, 90), (55, 100), (45, 110)),
        ("temp", (36.0, 37.5), (35.5, 38.0), (34.5, 39.0)),
        ("etco2", (35, 45), (30, 50), (25, 60)),
    ])
    def test_reference_values(self, channel, normal, yellow, red):
        band = get_thresholds(channel)
        assert band.normal_range == normal
        assert band.yellow_alert == yellow
        assert band.red_alert == red

    def test_unknown_channel(self):
        with pytest.raises(UnknownChannelError):
            get_thresholds("lactate")
        with pytest.raises(KeyError):
            classify("lactate", 2.0)


class TestClassify:
    """Band comparison, red first."""

    @pytest.mark.parametrize("channel", list(VitalChannel))
    def test_inside_normal_range_is_normal(self, channel):
        low, high = get_thresholds(channel).normal_range
        assert classify(channel, (low + high) / 2) == VitalStatus.NORMAL

    @pytest.mark.parametrize("channel", list(VitalChannel))
    def test_red_edges_belong_to_inner_band(self, channel):
        low, high = get_thresholds(channel).red_alert
        assert classify(channel, low) != VitalStatus.RED
        assert classify(channel, high) != VitalStatus.RED

    @pytest.mark.parametrize("channel", list(VitalChannel))
    def test_past_red_edges_is_red(self, channel):
        low, high = get_thresholds(channel).red_alert
        assert classify(channel, low - 0.1) == VitalStatus.RED
        assert classify(channel, high + 0.1) == VitalStatus.RED

    def test_yellow_band(self):
        assert classify("hr", 105) == VitalStatus.NORMAL
        assert classify("hr", 111) == VitalStatus.YELLOW
        assert classify("hr", 50) == VitalStatus.YELLOW
        assert classify("rr", 25) == VitalStatus.YELLOW
        assert classify("temp", 38.5) == VitalStatus.YELLOW
        assert classify("spo2", 90) == VitalStatus.YELLOW

    def test_spo2_at_100_is_normal(self):
        assert classify(VitalChannel.SPO2, 100) == VitalStatus.NORMAL

    def test_values_outside_chart_range_are_accepted(self):
        assert classify("hr", 500) == VitalStatus.RED
        assert classify("hr", -10) == VitalStatus.RED

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, None])
    def test_non_finite_fails_closed(self, value):
        assert classify("hr", value) == VitalStatus.RED


class TestColorsAndSnapshots:

    def test_status_color(self):
        assert status_color("hr", 80) == "#10b981"
        assert status_color("hr", 115) == "#f59e0b"
        assert status_color("hr", 150) == "#ef4444"

    def test_classify_snapshot_skips_absent_channels(self):
        snapshot = VitalSnapshot(hr=150, rr=16, spo2=98, map=80, temp=37.0)
        statuses = classify_snapshot(snapshot)

        assert statuses[VitalChannel.HR] == VitalStatus.RED
        assert statuses[VitalChannel.RR] == VitalStatus.NORMAL
        assert VitalChannel.ETCO2 not in statuses
        assert VitalChannel.SBP not in statuses

    def test_classify_snapshot_accepts_mapping(self):
        statuses = classify_snapshot({"hr": 80, "etco2": 65})
        assert statuses == {
            VitalChannel.HR: VitalStatus.NORMAL,
            VitalChannel.ETCO2: VitalStatus.RED,
        }
