"""
icuwatch Data Models

Pydantic models for vital signs, patients and MIMIC-IV records.
"""

from icuwatch.models.vitals import (
    MANDATORY_CHANNELS,
    RiskLevel,
    TimeSeriesPoint,
    VentilationSupport,
    VitalChannel,
    VitalSnapshot,
    VitalStatus,
    VitalTimeSeries,
    VitalTrends,
)
from icuwatch.models.patient import (
    ClinicalInsight,
    LabResult,
    Medication,
    MimicIdentifiers,
    PaginatedResult,
    Patient,
    PatientFilters,
)
from icuwatch.models.mimic import MimicPatientResponse, MimicTimeSeriesResponse

__all__ = [
    # Vitals
    "MANDATORY_CHANNELS",
    "RiskLevel",
    "TimeSeriesPoint",
    "VentilationSupport",
    "VitalChannel",
    "VitalSnapshot",
    "VitalStatus",
    "VitalTimeSeries",
    "VitalTrends",
    # Patient
    "ClinicalInsight",
    "LabResult",
    "Medication",
    "MimicIdentifiers",
    "PaginatedResult",
    "Patient",
    "PatientFilters",
    # MIMIC-IV
    "MimicPatientResponse",
    "MimicTimeSeriesResponse",
]
