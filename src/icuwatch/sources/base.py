"""
Base Patient Data Source

All patient data sources implement this interface so the repository can
switch between them without affecting consumers.
"""

from abc import ABC, abstractmethod
from typing import Literal

from icuwatch.models.patient import PaginatedResult, Patient, PatientFilters
from icuwatch.models.vitals import VitalTimeSeries


TimeRange = Literal["1h", "4h", "12h", "24h"]


class DataSourceError(Exception):
    """Failure to load or fetch patient data."""

    def __init__(self, message: str, code: str, source: str):
        super().__init__(message)
        self.message = message
        self.code = code
        self.source = source

    def __str__(self) -> str:
        return f"[{self.source}:{self.code}] {self.message}"


class PatientDataSource(ABC):
    """Base class for patient data sources."""

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Type of source (mock, mimic-api, mimic-json)"""
        pass

    @abstractmethod
    async def get_patients(self, filters: PatientFilters | None = None) -> list[Patient]:
        pass

    @abstractmethod
    async def get_patient_by_id(self, patient_id: str) -> Patient | None:
        pass

    @abstractmethod
    async def get_vital_time_series(
        self,
        patient_id: str,
        time_range: TimeRange = "1h",
    ) -> VitalTimeSeries | None:
        pass

    async def get_patients_paginated(
        self,
        page: int = 1,
        page_size: int = 12,
        filters: PatientFilters | None = None,
    ) -> PaginatedResult[Patient]:
        patients = await self.get_patients(filters)
        return paginate(patients, page, page_size)

    async def refresh(self) -> None:
        """Reload data, where the source supports it."""

    async def close(self) -> None:
        """Release held resources."""


def apply_filters(patients: list[Patient], filters: PatientFilters | None) -> list[Patient]:
    """In-memory filtering shared by the local sources."""
    if not filters:
        return list(patients)

    filtered = list(patients)
    if filters.risk_level:
        filtered = [p for p in filtered if p.risk_level in filters.risk_level]
    if filters.ventilation_support:
        filtered = [p for p in filtered if p.ventilation_support in filters.ventilation_support]
    if filters.unit:
        filtered = [p for p in filtered if p.unit in filters.unit]
    if filters.min_age is not None:
        filtered = [p for p in filtered if p.age >= filters.min_age]
    if filters.max_age is not None:
        filtered = [p for p in filtered if p.age <= filters.max_age]
    if filters.diagnosis:
        needle = filters.diagnosis.lower()
        filtered = [p for p in filtered if needle in p.diagnosis.lower()]
    return filtered


def paginate(patients: list[Patient], page: int, page_size: int) -> PaginatedResult[Patient]:
    start = (page - 1) * page_size
    end = start + page_size
    return PaginatedResult[Patient](
        data=patients[start:end],
        total=len(patients),
        page=page,
        page_size=page_size,
        has_more=end < len(patients),
    )
