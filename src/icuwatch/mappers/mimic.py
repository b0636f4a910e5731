"""
MIMIC-IV to Patient Mapper

Transforms raw MIMIC-IV patient records into the Patient model. Risk,
quick insight and trend summaries are recomputed from the mapped
snapshot with the same classifier the synthetic generator uses.
"""

import math
import random
from typing import Any

import structlog

from icuwatch.insights.generator import generate_insight, generate_trend_summaries
from icuwatch.models.mimic import MimicPatientResponse
from icuwatch.models.patient import MimicIdentifiers, Patient
from icuwatch.models.vitals import VentilationSupport, VitalSnapshot, VitalTrends
from icuwatch.vitals.risk import aggregate_risk

logger = structlog.get_logger(__name__)


CAREUNIT_SECTORS = {
    "MICU": "A",
    "SICU": "B",
    "CCU": "C",
    "CSRU": "D",
    "TSICU": "E",
}

DEFAULT_SEDATION = "RASS 0 (Alert and calm)"


def calculate_map(sbp: float | None, dbp: float | None) -> int:
    """MAP from systolic and diastolic pressure, 0 when either is missing."""
    if not sbp or not dbp:
        return 0
    return math.floor((sbp + 2 * dbp) / 3 + 0.5)


def bed_number_for(icu_stay_id: int | None, careunit: str | None) -> str:
    """Bed label from the care unit sector and the stay id."""
    if not icu_stay_id:
        return "Unknown"
    sector = CAREUNIT_SECTORS.get(careunit, "X") if careunit else "X"
    return f"{sector}-{icu_stay_id % 10 + 1}"


def map_mimic_patient(
    record: MimicPatientResponse | dict[str, Any],
    rng: random.Random | None = None,
) -> Patient:
    """
    Map one MIMIC-IV record to a Patient.

    Args:
        record: Raw record or its parsed model
        rng: Random source for insight tie-breaks

    Raises:
        pydantic.ValidationError: If the raw record is malformed
    """
    if not isinstance(record, MimicPatientResponse):
        record = MimicPatientResponse.model_validate(record)

    latest = record.latest_vitals
    vitals = VitalSnapshot(
        hr=(latest.heart_rate if latest else None) or 0,
        rr=(latest.resp_rate if latest else None) or 0,
        spo2=(latest.spo2 if latest else None) or 0,
        map=calculate_map(latest.sbp, latest.dbp) if latest else 0,
        sbp=latest.sbp if latest else None,
        dbp=latest.dbp if latest else None,
        temp=(latest.temperature if latest else None) or 0,
    )

    # Single-point trends until a time series is fetched
    trends = VitalTrends(
        hr=[vitals.hr], rr=[vitals.rr], spo2=[vitals.spo2],
        map=[vitals.map], temp=[vitals.temp],
    )

    risk_level = aggregate_risk(vitals)
    diagnosis = record.diagnoses[0].long_title if record.diagnoses else "Unknown"
    chart_time = latest.charttime if latest else None

    return Patient(
        id=f"mimic-{record.subject_id}",
        name=f"Patient {record.subject_id}",
        age=record.anchor_age,
        gender="Male" if record.gender == "M" else "Female",
        bed_number=bed_number_for(record.icustay_id, record.last_careunit),
        unit=record.last_careunit,
        diagnosis=diagnosis,
        ventilation_support=VentilationSupport(record.ventilation_status or "O2"),
        risk_level=risk_level,
        sedation_level=DEFAULT_SEDATION,
        vitals=vitals,
        trends=trends,
        ai_insight=generate_insight(risk_level, vitals, rng),
        ai_trend_summaries=generate_trend_summaries(risk_level, vitals, trends, rng),
        mimic=MimicIdentifiers(
            subject_id=record.subject_id,
            hadm_id=record.hadm_id,
            icu_stay_id=record.icustay_id,
            chart_time=chart_time,
        ),
        last_updated=chart_time,
        admission_time=record.admittime,
    )


def map_mimic_patients(
    records: list[MimicPatientResponse | dict[str, Any]],
    rng: random.Random | None = None,
) -> list[Patient]:
    return [map_mimic_patient(r, rng) for r in records]
