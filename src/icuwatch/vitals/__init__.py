"""
icuwatch Vitals

Threshold table, status classifier and risk aggregation.
"""

from icuwatch.vitals.thresholds import (
    VITAL_THRESHOLDS,
    ThresholdBand,
    UnknownChannelError,
    get_thresholds,
)
from icuwatch.vitals.status import classify, classify_snapshot, status_color
from icuwatch.vitals.risk import (
    PatientValidationError,
    aggregate_risk,
    check_patient,
    validate_patient,
)

__all__ = [
    "VITAL_THRESHOLDS",
    "ThresholdBand",
    "UnknownChannelError",
    "get_thresholds",
    "classify",
    "classify_snapshot",
    "status_color",
    "PatientValidationError",
    "aggregate_risk",
    "check_patient",
    "validate_patient",
]
