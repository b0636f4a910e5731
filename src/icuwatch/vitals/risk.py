"""
Patient Risk Aggregation

Collapses the five mandatory channel statuses into one risk level, and
checks that a raw patient record carries the minimum fields.
"""

from typing import Any, Mapping

import structlog

from icuwatch.models.vitals import (
    MANDATORY_CHANNELS,
    RiskLevel,
    VitalSnapshot,
    VitalStatus,
)
from icuwatch.vitals.status import classify

logger = structlog.get_logger(__name__)


class PatientValidationError(ValueError):
    """Raised when a patient record is missing a required field."""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


def aggregate_risk(snapshot: VitalSnapshot | Mapping[str, Any]) -> RiskLevel:
    """
    Overall risk from hr, rr, spo2, map and temp.

    Any red channel means high, otherwise any yellow channel means
    medium, otherwise low. etco2, sbp and dbp never contribute. A
    missing mandatory channel classifies red.
    """
    if isinstance(snapshot, VitalSnapshot):
        values = snapshot.model_dump()
    else:
        values = dict(snapshot)

    statuses = [classify(ch, values.get(ch.value)) for ch in MANDATORY_CHANNELS]
    red_count = statuses.count(VitalStatus.RED)
    yellow_count = statuses.count(VitalStatus.YELLOW)

    if red_count >= 1:
        return RiskLevel.HIGH
    if yellow_count >= 1:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


REQUIRED_PATIENT_FIELDS = ("id", "name", "age", "gender", "bed_number", "vitals")
REQUIRED_VITAL_FIELDS = ("hr", "rr", "spo2")


def check_patient(record: Mapping[str, Any]) -> None:
    """
    Validate that a raw patient record has the minimum display fields.

    Raises:
        PatientValidationError: Naming the first missing field
    """
    for name in REQUIRED_PATIENT_FIELDS:
        if not record.get(name):
            raise PatientValidationError(f"Required field '{name}' is missing", name)

    vitals = record["vitals"]
    for name in REQUIRED_VITAL_FIELDS:
        if vitals.get(name) is None:
            raise PatientValidationError(
                f"Required vital '{name}' is missing", f"vitals.{name}"
            )


def validate_patient(record: Mapping[str, Any]) -> bool:
    """True when a raw patient record has the minimum display fields."""
    try:
        check_patient(record)
    except PatientValidationError as e:
        logger.debug("Patient record rejected", field=e.field, patient_id=record.get("id"))
        return False
    return True
