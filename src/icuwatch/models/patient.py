"""
Patient Models

The patient record consumed by the dashboard, plus the query types used
by data sources.
"""

from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from icuwatch.models.vitals import (
    RiskLevel,
    VentilationSupport,
    VitalSnapshot,
    VitalTrends,
)


class ClinicalInsight(BaseModel):
    """
    Templated clinical observation.

    Selected by matching per-channel statuses and the risk level
    against a fixed rule table.
    """

    id: str
    severity: RiskLevel
    summary: str
    analysis: str
    contributing_factors: list[str] = Field(default_factory=list)
    recommendation: str
    generated_at: datetime | None = None


class Medication(BaseModel):
    """Medication entry."""

    name: str
    dosage: str
    route: str | None = None
    frequency: str | None = None


class LabResult(BaseModel):
    """Laboratory result."""

    name: str
    value: float
    unit: str
    is_abnormal: bool = False
    reference_range: str | None = None
    chart_time: datetime | None = None


class MimicIdentifiers(BaseModel):
    """MIMIC-IV identifiers kept for traceability."""

    subject_id: int
    hadm_id: int | None = None
    icu_stay_id: int | None = None
    chart_time: str | None = None


class Patient(BaseModel):
    """
    Patient entity.

    Populated either by the synthetic generator or by mapping MIMIC-IV
    records. Replaced wholesale on refresh.
    """

    # Identification
    id: str
    name: str
    age: int
    gender: Literal["Male", "Female"]

    # Location
    bed_number: str
    unit: str | None = None

    # Clinical
    diagnosis: str
    ventilation_support: VentilationSupport = VentilationSupport.O2
    risk_level: RiskLevel
    sedation_level: str = "RASS 0 (Alert and calm)"

    # Vitals
    vitals: VitalSnapshot
    trends: VitalTrends = Field(default_factory=VitalTrends)

    # Insights
    ai_insight: str | None = None
    ai_trend_summaries: list[ClinicalInsight] = Field(default_factory=list)

    # Treatment
    medication: list[Medication] = Field(default_factory=list)
    labs: list[LabResult] = Field(default_factory=list)

    # Source metadata
    mimic: MimicIdentifiers | None = None
    last_updated: str | None = None
    admission_time: str | None = None


class PatientFilters(BaseModel):
    """Filters for patient queries."""

    risk_level: list[RiskLevel] | None = None
    ventilation_support: list[VentilationSupport] | None = None
    unit: list[str] | None = None
    diagnosis: str | None = None
    min_age: int | None = None
    max_age: int | None = None


T = TypeVar("T")


class PaginatedResult(BaseModel, Generic[T]):
    """One page of results."""

    data: list[T]
    total: int
    page: int
    page_size: int
    has_more: bool
