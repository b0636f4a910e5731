"""
Patient Routes

Endpoints the monitoring dashboard reads: the ward list, a single
patient, vital time series and a refresh trigger.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel

from icuwatch.models.patient import PaginatedResult, Patient, PatientFilters
from icuwatch.models.vitals import RiskLevel, VentilationSupport, VitalTimeSeries
from icuwatch.repository import PatientsRepository
from icuwatch.sources.base import TimeRange

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_repository(request: Request) -> PatientsRepository:
    return request.app.state.repository


class RefreshResponse(BaseModel):
    source: str
    patients: int


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=PaginatedResult[Patient])
async def list_patients(
    page: int = Query(default=1, ge=1, description="Page number"),
    page_size: int = Query(default=12, ge=1, le=100, description="Items per page"),
    risk_level: list[RiskLevel] | None = Query(default=None),
    ventilation_support: list[VentilationSupport] | None = Query(default=None),
    unit: list[str] | None = Query(default=None),
    diagnosis: str | None = Query(default=None, description="Diagnosis substring"),
    min_age: int | None = Query(default=None, ge=0),
    max_age: int | None = Query(default=None, ge=0),
    repository: PatientsRepository = Depends(get_repository),
):
    """List patients, filtered and paginated."""
    filters = PatientFilters(
        risk_level=risk_level,
        ventilation_support=ventilation_support,
        unit=unit,
        diagnosis=diagnosis,
        min_age=min_age,
        max_age=max_age,
    )
    return await repository.get_patients_paginated(page, page_size, filters)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_patients(repository: PatientsRepository = Depends(get_repository)):
    """Reload the current source. The synthetic ward is regenerated."""
    await repository.refresh()
    patients = await repository.get_patients()
    return RefreshResponse(source=repository.source_type, patients=len(patients))


@router.get("/{patient_id}", response_model=Patient)
async def get_patient(
    patient_id: str,
    repository: PatientsRepository = Depends(get_repository),
):
    patient = await repository.get_patient_by_id(patient_id)
    if patient is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Patient {patient_id} not found",
        )
    return patient


@router.get("/{patient_id}/vitals", response_model=VitalTimeSeries)
async def get_patient_vitals(
    patient_id: str,
    time_range: TimeRange = Query(default="1h", alias="range"),
    repository: PatientsRepository = Depends(get_repository),
):
    series = await repository.get_vital_time_series(patient_id, time_range)
    if series is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Patient {patient_id} not found",
        )
    return series
