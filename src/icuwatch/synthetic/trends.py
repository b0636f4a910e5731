"""
Synthetic Vital Sign Trends

Builds the short history that leads up to a current reading. Drift is
proportional to risk and both drift and noise shrink toward the present,
so the most recent points hug the current value.
"""

import random

from icuwatch.models.vitals import RiskLevel, VitalChannel, VitalSnapshot, VitalTrends


TREND_LENGTH = 10

TREND_FACTORS: dict[RiskLevel, float] = {
    RiskLevel.HIGH: 0.7,
    RiskLevel.MEDIUM: 0.3,
    RiskLevel.LOW: 0.0,
}

# Per-channel noise magnitude; inverse channels deteriorate downward
CHANNEL_VARIANCE: dict[VitalChannel, float] = {
    VitalChannel.HR: 5,
    VitalChannel.RR: 2,
    VitalChannel.SPO2: 1,
    VitalChannel.MAP: 4,
    VitalChannel.TEMP: 0.2,
    VitalChannel.ETCO2: 3,
}
INVERSE_CHANNELS = frozenset({VitalChannel.SPO2})

SPO2_BOUNDS = (80.0, 100.0)


def generate_trend(
    current_value: float,
    variance: float,
    risk_level: RiskLevel | str,
    inverse: bool = False,
    rng: random.Random | None = None,
    length: int = TREND_LENGTH,
) -> list[float]:
    """
    Synthesize a history ending at ``current_value``.

    Step ``i`` (0 = earliest) moves the series by
    ``trend_factor * (1 - i/length) * 2`` plus uniform noise in
    ``[-variance, variance]`` scaled by ``(1 - i/length)``. The series is
    walked back from the present and then reversed, so the returned list
    is oldest first and its last element is the current value.

    Args:
        current_value: Reading at the most recent point
        variance: Noise magnitude for this channel
        risk_level: Scales the directional drift
        inverse: Drift downward into the present and clamp to SpO2 bounds
        rng: Random source; a fresh unseeded one when omitted
        length: Number of points

    Returns:
        ``length`` values rounded to one decimal
    """
    if length < 1:
        return []

    rng = rng or random.Random()
    trend_factor = TREND_FACTORS[RiskLevel(risk_level)]
    if inverse:
        trend_factor = -trend_factor

    value = _clamp(current_value) if inverse else current_value
    series = [round(value, 1)]

    # Walk from the present back to the earliest point
    for i in reversed(range(length - 1)):
        decay = 1 - i / length
        trend_effect = trend_factor * decay * 2
        noise = rng.uniform(-variance, variance) * decay
        value = value - trend_effect - noise
        if inverse:
            value = _clamp(value)
        series.append(round(value, 1))

    series.reverse()
    return series


def generate_vital_trends(
    snapshot: VitalSnapshot,
    risk_level: RiskLevel | str,
    rng: random.Random | None = None,
) -> VitalTrends:
    """Trends for every trend channel present in the snapshot."""
    rng = rng or random.Random()
    trends = {}
    for channel, variance in CHANNEL_VARIANCE.items():
        value = snapshot.value(channel)
        if value is None:
            continue
        trends[channel.value] = generate_trend(
            value,
            variance,
            risk_level,
            inverse=channel in INVERSE_CHANNELS,
            rng=rng,
        )
    return VitalTrends(**trends)


def _clamp(value: float) -> float:
    low, high = SPO2_BOUNDS
    return min(high, max(low, value))
