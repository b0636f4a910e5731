"""
MIMIC-IV Wire Models

Shape of the records served by a MIMIC-IV backend or exported to JSON.
Field names follow the MIMIC-IV tables.
"""

from typing import Literal

from pydantic import BaseModel, Field


class MimicLatestVitals(BaseModel):
    """Latest chartevents for a stay."""

    charttime: str
    heart_rate: float | None = None
    resp_rate: float | None = None
    spo2: float | None = None
    sbp: float | None = None
    dbp: float | None = None
    temperature: float | None = None


class MimicDiagnosis(BaseModel):
    icd_code: str
    icd_version: int
    long_title: str


class MimicPatientResponse(BaseModel):
    """Raw patient record."""

    subject_id: int
    hadm_id: int | None = None
    icustay_id: int | None = None

    # Demographics
    gender: Literal["M", "F"]
    anchor_age: int

    # Admission
    admittime: str
    dischtime: str | None = None
    admission_type: str | None = None
    admission_location: str | None = None

    # ICU stay
    intime: str | None = None
    outtime: str | None = None
    first_careunit: str | None = None
    last_careunit: str | None = None

    latest_vitals: MimicLatestVitals | None = None
    diagnoses: list[MimicDiagnosis] = Field(default_factory=list)
    ventilation_status: Literal["O2", "NIV", "MV"] | None = None


class MimicDataPoint(BaseModel):
    charttime: str
    value: float


class MimicTimeSeriesResponse(BaseModel):
    """One channel of charted values for a stay."""

    subject_id: int
    icustay_id: int | None = None
    vital_sign: Literal["hr", "rr", "spo2", "map", "temp", "etco2"]
    data_points: list[MimicDataPoint] = Field(default_factory=list)
