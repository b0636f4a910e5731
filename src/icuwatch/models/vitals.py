"""
Vital Sign Models

Channels, statuses, risk levels and the snapshot/trend records that
every other module exchanges.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class VitalChannel(str, Enum):
    """A monitored vital-sign type."""
    HR = "hr"          # heart rate, bpm
    RR = "rr"          # respiratory rate, breaths/min
    SPO2 = "spo2"      # oxygen saturation, %
    MAP = "map"        # mean arterial pressure, mmHg
    SBP = "sbp"        # systolic pressure, mmHg
    DBP = "dbp"        # diastolic pressure, mmHg
    TEMP = "temp"      # temperature, degrees C
    ETCO2 = "etco2"    # end-tidal CO2, mmHg


# Channels every snapshot carries and risk aggregation reads
MANDATORY_CHANNELS: tuple[VitalChannel, ...] = (
    VitalChannel.HR,
    VitalChannel.RR,
    VitalChannel.SPO2,
    VitalChannel.MAP,
    VitalChannel.TEMP,
)

CHANNEL_UNITS: dict[VitalChannel, str] = {
    VitalChannel.HR: "bpm",
    VitalChannel.RR: "breaths/min",
    VitalChannel.SPO2: "%",
    VitalChannel.MAP: "mmHg",
    VitalChannel.SBP: "mmHg",
    VitalChannel.DBP: "mmHg",
    VitalChannel.TEMP: "C",
    VitalChannel.ETCO2: "mmHg",
}


class VitalStatus(str, Enum):
    """Per-reading alert status."""
    NORMAL = "normal"
    YELLOW = "yellow"
    RED = "red"


class RiskLevel(str, Enum):
    """Overall patient risk tier."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class VentilationSupport(str, Enum):
    """Respiratory support mode."""
    O2 = "O2"
    NIV = "NIV"
    MV = "MV"


class VitalSnapshot(BaseModel):
    """Current vital-sign readings for one patient at one instant."""

    hr: float = Field(..., description="Heart rate (bpm)")
    rr: float = Field(..., description="Respiratory rate (breaths/min)")
    spo2: float = Field(..., description="Oxygen saturation (%)")
    map: float = Field(..., description="Mean arterial pressure (mmHg)")
    temp: float = Field(..., description="Temperature (C)")
    sbp: float | None = Field(default=None, description="Systolic pressure (mmHg)")
    dbp: float | None = Field(default=None, description="Diastolic pressure (mmHg)")
    etco2: float | None = Field(default=None, description="End-tidal CO2 (mmHg)")

    model_config = {"frozen": True}

    def value(self, channel: VitalChannel | str) -> float | None:
        """Reading for a channel, None when an optional channel is absent."""
        return getattr(self, VitalChannel(channel).value)


class VitalTrends(BaseModel):
    """Fixed-length history per channel, oldest first."""

    hr: list[float] = Field(default_factory=list)
    rr: list[float] = Field(default_factory=list)
    spo2: list[float] = Field(default_factory=list)
    map: list[float] = Field(default_factory=list)
    temp: list[float] = Field(default_factory=list)
    etco2: list[float] | None = None

    def series(self, channel: VitalChannel | str) -> list[float] | None:
        return getattr(self, VitalChannel(channel).value, None)


class TimeSeriesPoint(BaseModel):
    """A single timestamped reading."""

    timestamp: datetime
    value: float
    chart_time: str | None = None


class VitalTimeSeries(BaseModel):
    """Timestamped series per channel."""

    hr: list[TimeSeriesPoint] | None = None
    rr: list[TimeSeriesPoint] | None = None
    spo2: list[TimeSeriesPoint] | None = None
    map: list[TimeSeriesPoint] | None = None
    sbp: list[TimeSeriesPoint] | None = None
    dbp: list[TimeSeriesPoint] | None = None
    temp: list[TimeSeriesPoint] | None = None
    etco2: list[TimeSeriesPoint] | None = None
