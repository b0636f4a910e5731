"""
MIMIC-IV JSON Data Source

Reads preprocessed MIMIC-IV exports from disk. Useful for development
without an API backend.

Expected layout:
    {
        "patients": [<MimicPatientResponse>, ...],
        "metadata": {"exportDate": ..., "mimicVersion": ..., "recordCount": ...}
    }
"""

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from icuwatch.mappers.mimic import map_mimic_patient
from icuwatch.mappers.timeseries import TIME_RANGE_INTERVALS, trends_to_time_series
from icuwatch.models.patient import Patient, PatientFilters
from icuwatch.models.vitals import VitalTimeSeries
from icuwatch.sources.base import (
    DataSourceError,
    PatientDataSource,
    TimeRange,
    apply_filters,
)

logger = structlog.get_logger(__name__)


class MimicJsonDataSource(PatientDataSource):
    """Patients mapped from a MIMIC-IV JSON export."""

    def __init__(self, json_path: str | Path):
        self.json_path = Path(json_path)
        self.metadata: dict = {}
        self._patients: list[Patient] = []
        self._initialized = False

    @property
    def source_type(self) -> str:
        return "mimic-json"

    async def initialize(self) -> None:
        """
        Load and map the export.

        Raises:
            DataSourceError: FILE_LOAD_ERROR when the file cannot be read,
                INIT_ERROR when its content cannot be mapped
        """
        try:
            raw = json.loads(self.json_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise DataSourceError(
                f"Failed to load JSON file: {e}", "FILE_LOAD_ERROR", self.source_type
            ) from e

        try:
            self._patients = [map_mimic_patient(r) for r in raw["patients"]]
        except (KeyError, TypeError, ValidationError) as e:
            raise DataSourceError(
                f"Error initializing JSON data source: {e}", "INIT_ERROR", self.source_type
            ) from e

        self.metadata = raw.get("metadata", {})
        self._initialized = True
        logger.info(
            "Loaded patients from MIMIC JSON",
            path=str(self.json_path),
            patients=len(self._patients),
        )

    async def _ensure_initialized(self) -> None:
        if not self._initialized:
            await self.initialize()

    async def get_patients(self, filters: PatientFilters | None = None) -> list[Patient]:
        await self._ensure_initialized()
        return apply_filters(self._patients, filters)

    async def get_patient_by_id(self, patient_id: str) -> Patient | None:
        await self._ensure_initialized()
        return next((p for p in self._patients if p.id == patient_id), None)

    async def get_vital_time_series(
        self,
        patient_id: str,
        time_range: TimeRange = "1h",
    ) -> VitalTimeSeries | None:
        # Exports carry only the latest reading
        patient = await self.get_patient_by_id(patient_id)
        if patient is None:
            return None
        return trends_to_time_series(patient.trends, TIME_RANGE_INTERVALS[time_range])

    async def refresh(self) -> None:
        self._initialized = False
        await self.initialize()
