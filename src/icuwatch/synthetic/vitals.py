"""
Synthetic Vital Sign Snapshots

Samples a current reading per channel whose placement against the
threshold bands matches a requested risk level:

- high: beyond the red band, on a channel-specific favored side
- medium: between the yellow and red edges (outside normal, inside red)
- low: uniformly inside the normal range

Blood pressure is derived from MAP and a risk-dependent pulse pressure.
"""

import math
import random
from dataclasses import dataclass

import structlog

from icuwatch.models.vitals import RiskLevel, VitalChannel, VitalSnapshot
from icuwatch.vitals.thresholds import get_thresholds

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChannelSampling:
    """How one channel is placed relative to its bands."""
    high_side_prob: float          # high risk: chance of the high side
    high_offset: float             # high risk: max distance past the high red edge
    low_offset: float              # high risk: max distance past the low red edge
    floor: float                   # physiological floor
    medium_high_side_prob: float   # medium risk: chance of the high-yellow side
    medium_floor: float | None = None
    step: float = 1                # display resolution


CHANNEL_SAMPLING: dict[VitalChannel, ChannelSampling] = {
    VitalChannel.HR: ChannelSampling(
        high_side_prob=0.7, high_offset=20, low_offset=15, floor=30,
        medium_high_side_prob=0.7, medium_floor=30,
    ),
    VitalChannel.RR: ChannelSampling(
        high_side_prob=0.8, high_offset=8, low_offset=4, floor=4,
        medium_high_side_prob=0.7, medium_floor=5,
    ),
    # SpO2 only deteriorates downward
    VitalChannel.SPO2: ChannelSampling(
        high_side_prob=0.0, high_offset=0, low_offset=8, floor=80,
        medium_high_side_prob=0.0, medium_floor=85,
    ),
    VitalChannel.MAP: ChannelSampling(
        high_side_prob=0.4, high_offset=15, low_offset=15, floor=40,
        medium_high_side_prob=0.5,
    ),
    VitalChannel.TEMP: ChannelSampling(
        high_side_prob=0.7, high_offset=1.0, low_offset=1.0, floor=33,
        medium_high_side_prob=0.6, medium_floor=34, step=0.1,
    ),
    VitalChannel.ETCO2: ChannelSampling(
        high_side_prob=0.4, high_offset=15, low_offset=10, floor=20,
        medium_high_side_prob=0.5,
    ),
}

# Pulse pressure (SBP - DBP) ranges in mmHg, as (low, high) exclusive of high
NARROW_PULSE_PRESSURE = (20, 35)
WIDE_PULSE_PRESSURE = (50, 80)
MEDIUM_PULSE_PRESSURE = (30, 55)
NORMAL_PULSE_PRESSURE = (40, 50)

MIN_DBP = 40
MIN_PULSE_GAP = 10

ETCO2_MEDIUM_PROB = 0.5


def generate_snapshot(
    risk_level: RiskLevel | str,
    rng: random.Random | None = None,
) -> VitalSnapshot:
    """
    Generate a plausible snapshot for a risk level.

    Args:
        risk_level: Target risk tier
        rng: Random source; a fresh unseeded one when omitted

    Returns:
        A complete snapshot. etco2 is present for high risk and for half
        of medium-risk patients.
    """
    rng = rng or random.Random()
    risk_level = RiskLevel(risk_level)

    hr = sample_channel(VitalChannel.HR, risk_level, rng)
    rr = sample_channel(VitalChannel.RR, risk_level, rng)
    spo2 = sample_channel(VitalChannel.SPO2, risk_level, rng)
    map_ = sample_channel(VitalChannel.MAP, risk_level, rng)
    temp = round(sample_channel(VitalChannel.TEMP, risk_level, rng), 1)

    etco2 = None
    if risk_level == RiskLevel.HIGH or (
        risk_level == RiskLevel.MEDIUM and rng.random() > ETCO2_MEDIUM_PROB
    ):
        etco2 = sample_channel(VitalChannel.ETCO2, risk_level, rng)

    sbp = sbp_from_map(map_, risk_level, rng)
    dbp = dbp_from_map(map_, sbp)

    return VitalSnapshot(
        hr=hr, rr=rr, spo2=spo2, map=map_, temp=temp,
        sbp=sbp, dbp=dbp, etco2=etco2,
    )


def sample_channel(
    channel: VitalChannel,
    risk_level: RiskLevel,
    rng: random.Random,
) -> float:
    """Draw one reading for a channel at a risk level."""
    band = get_thresholds(channel)
    sampling = CHANNEL_SAMPLING[channel]

    if risk_level == RiskLevel.HIGH:
        if rng.random() < sampling.high_side_prob:
            return band.red_alert[1] + _offset(sampling.high_offset, sampling.step, rng)
        return max(sampling.floor, band.red_alert[0] - _offset(sampling.low_offset, sampling.step, rng))

    if risk_level == RiskLevel.MEDIUM:
        if rng.random() < sampling.medium_high_side_prob:
            low, high = band.yellow_alert[1], band.red_alert[1]
            return _within(low, high, sampling.step, rng)
        value = _within(band.red_alert[0], band.yellow_alert[0], sampling.step, rng)
        if sampling.medium_floor is not None:
            value = max(sampling.medium_floor, value)
        return value

    low, high = band.normal_range
    return _within(low, high, sampling.step, rng)


def sbp_from_map(map_: float, risk_level: RiskLevel | str, rng: random.Random) -> float:
    """
    Systolic pressure from MAP and a sampled pulse pressure.

    High-risk patients get a narrow or wide pulse pressure with equal odds.
    """
    risk_level = RiskLevel(risk_level)
    if risk_level == RiskLevel.HIGH:
        pp_range = NARROW_PULSE_PRESSURE if rng.random() < 0.5 else WIDE_PULSE_PRESSURE
    elif risk_level == RiskLevel.MEDIUM:
        pp_range = MEDIUM_PULSE_PRESSURE
    else:
        pp_range = NORMAL_PULSE_PRESSURE
    pulse_pressure = rng.randrange(*pp_range)

    # MAP = DBP + PP/3
    estimated_dbp = map_ - pulse_pressure / 3
    return round_half_up(estimated_dbp + pulse_pressure)


def dbp_from_map(map_: float, sbp: float) -> float:
    """Diastolic pressure back-solved from MAP = DBP + (SBP - DBP)/3."""
    calculated = round_half_up((3 * map_ - sbp) / 2)
    return min(sbp - MIN_PULSE_GAP, max(MIN_DBP, calculated))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _offset(max_offset: float, step: float, rng: random.Random) -> float:
    """A distance past a red edge of at least one display step."""
    if step >= 1:
        return rng.randint(1, max(1, int(max_offset)))
    return step + rng.random() * (max_offset - step)


def _within(low: float, high: float, step: float, rng: random.Random) -> float:
    """A value in [low, high), integral for whole-unit channels."""
    if step >= 1:
        return low + math.floor(rng.random() * (high - low))
    return low + rng.random() * (high - low)
