"""
Vital Sign Status Classifier

Three-level status per reading. The presentation layer re-runs the same
classifier for color coding, so generation-time and display-time results
always agree.
"""

import math
from typing import Any, Mapping

from icuwatch.models.vitals import VitalChannel, VitalSnapshot, VitalStatus
from icuwatch.vitals.thresholds import get_thresholds


STATUS_COLORS: dict[VitalStatus, str] = {
    VitalStatus.RED: "#ef4444",
    VitalStatus.YELLOW: "#f59e0b",
    VitalStatus.NORMAL: "#10b981",
}


def classify(channel: VitalChannel | str, value: float | None) -> VitalStatus:
    """
    Classify one reading against its channel's bands.

    Red is checked before yellow and the first match wins. A value on a
    band edge belongs to the inner band. Missing or non-finite readings
    fail closed to red.

    Raises:
        UnknownChannelError: If the channel has no threshold band
    """
    band = get_thresholds(channel)

    if value is None or not math.isfinite(value):
        return VitalStatus.RED

    red_low, red_high = band.red_alert
    if value < red_low or value > red_high:
        return VitalStatus.RED

    yellow_low, yellow_high = band.yellow_alert
    if value < yellow_low or value > yellow_high:
        return VitalStatus.YELLOW

    return VitalStatus.NORMAL


def status_color(channel: VitalChannel | str, value: float | None) -> str:
    """Display color for a reading."""
    return STATUS_COLORS[classify(channel, value)]


def classify_snapshot(
    snapshot: VitalSnapshot | Mapping[str, Any],
) -> dict[VitalChannel, VitalStatus]:
    """Status for every channel present in a snapshot."""
    if isinstance(snapshot, VitalSnapshot):
        values = snapshot.model_dump()
    else:
        values = dict(snapshot)

    statuses = {}
    for channel in VitalChannel:
        value = values.get(channel.value)
        if value is None:
            continue
        statuses[channel] = classify(channel, value)
    return statuses
