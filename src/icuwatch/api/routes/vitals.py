"""
Vital Sign Routes

Threshold lookup, per-reading classification and risk aggregation for
clients that bring their own readings.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from icuwatch.models.vitals import (
    CHANNEL_UNITS,
    RiskLevel,
    VitalChannel,
    VitalSnapshot,
    VitalStatus,
)
from icuwatch.vitals.risk import aggregate_risk
from icuwatch.vitals.status import classify, classify_snapshot, status_color
from icuwatch.vitals.thresholds import VITAL_THRESHOLDS

router = APIRouter(prefix="/vitals", tags=["Vitals"])


class ClassifyRequest(BaseModel):
    channel: VitalChannel
    value: float


class ClassifyResponse(BaseModel):
    channel: VitalChannel
    value: float
    status: VitalStatus
    color: str


class RiskResponse(BaseModel):
    risk_level: RiskLevel
    statuses: dict[VitalChannel, VitalStatus]


@router.get("/thresholds")
async def get_thresholds():
    """Bands and display unit for every channel."""
    return {
        channel.value: {**band.as_dict(), "unit": CHANNEL_UNITS[channel]}
        for channel, band in VITAL_THRESHOLDS.items()
    }


@router.post("/classify", response_model=ClassifyResponse)
async def classify_reading(request: ClassifyRequest):
    return ClassifyResponse(
        channel=request.channel,
        value=request.value,
        status=classify(request.channel, request.value),
        color=status_color(request.channel, request.value),
    )


@router.post("/risk", response_model=RiskResponse)
async def assess_risk(snapshot: VitalSnapshot):
    """Risk level and per-channel statuses for a snapshot."""
    return RiskResponse(
        risk_level=aggregate_risk(snapshot),
        statuses=classify_snapshot(snapshot),
    )
