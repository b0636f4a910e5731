"""
ICU Vital Sign Thresholds

Normal / yellow / red bands per channel, plus the display range used
for charts. Classification only reads the yellow and red bands.
"""

from dataclasses import dataclass

from icuwatch.models.vitals import VitalChannel


Band = tuple[float, float]


class UnknownChannelError(KeyError):
    """Raised when a channel has no threshold band."""


@dataclass(frozen=True)
class ThresholdBand:
    normal_range: Band
    yellow_alert: Band
    red_alert: Band
    chart_range: Band

    def as_dict(self) -> dict[str, list[float]]:
        return {
            "normal_range": list(self.normal_range),
            "yellow_alert": list(self.yellow_alert),
            "red_alert": list(self.red_alert),
            "chart_range": list(self.chart_range),
        }


VITAL_THRESHOLDS: dict[VitalChannel, ThresholdBand] = {
    VitalChannel.HR: ThresholdBand(
        normal_range=(60, 100), yellow_alert=(55, 110),
        red_alert=(45, 130), chart_range=(30, 160),
    ),
    VitalChannel.RR: ThresholdBand(
        normal_range=(12, 20), yellow_alert=(10, 24),
        red_alert=(6, 30), chart_range=(5, 40),
    ),
    VitalChannel.SPO2: ThresholdBand(
        normal_range=(95, 100), yellow_alert=(93, 100),
        red_alert=(88, 100), chart_range=(80, 100),
    ),
    VitalChannel.MAP: ThresholdBand(
        normal_range=(70, 105), yellow_alert=(65, 110),
        red_alert=(55, 120), chart_range=(40, 130),
    ),
    VitalChannel.SBP: ThresholdBand(
        normal_range=(100, 140), yellow_alert=(90, 160),
        red_alert=(80, 180), chart_range=(60, 200),
    ),
    VitalChannel.DBP: ThresholdBand(
        normal_range=(60, 90), yellow_alert=(55, 100),
        red_alert=(45, 110), chart_range=(40, 120),
    ),
    VitalChannel.TEMP: ThresholdBand(
        normal_range=(36.0, 37.5), yellow_alert=(35.5, 38.0),
        red_alert=(34.5, 39.0), chart_range=(33, 40),
    ),
    VitalChannel.ETCO2: ThresholdBand(
        normal_range=(35, 45), yellow_alert=(30, 50),
        red_alert=(25, 60), chart_range=(20, 70),
    ),
}


def get_thresholds(channel: VitalChannel | str) -> ThresholdBand:
    """Look up the band for a channel."""
    try:
        return VITAL_THRESHOLDS[VitalChannel(channel)]
    except ValueError:
        raise UnknownChannelError(channel) from None
