"""
Mock Data Source

Serves a synthetic ward from SyntheticPatientGenerator.
"""

import random

import structlog

from icuwatch.mappers.timeseries import TIME_RANGE_INTERVALS, trends_to_time_series
from icuwatch.models.patient import Patient, PatientFilters
from icuwatch.models.vitals import VitalTimeSeries
from icuwatch.sources.base import PatientDataSource, TimeRange, apply_filters
from icuwatch.synthetic.patients import SyntheticPatientGenerator

logger = structlog.get_logger(__name__)


class MockDataSource(PatientDataSource):
    """Synthetic patients generated on first use."""

    def __init__(
        self,
        count: int = 12,
        seed: int | None = None,
        rng: random.Random | None = None,
        risk_weights: dict[str, float] | None = None,
    ):
        self.count = count
        self.generator = SyntheticPatientGenerator(
            seed=seed, rng=rng, risk_weights=risk_weights,
        )
        self._patients: list[Patient] = []
        self._initialized = False

    @property
    def source_type(self) -> str:
        return "mock"

    async def initialize(self, count: int | None = None) -> None:
        if count is not None:
            self.count = count
        self._patients = self.generator.generate_patients(self.count)
        self._initialized = True
        logger.info("Mock data source initialized", patients=len(self._patients))

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
        patient = await self.get_patient_by_id(patient_id)
        if patient is None:
            return None
        return trends_to_time_series(patient.trends, TIME_RANGE_INTERVALS[time_range])

    async def refresh(self) -> None:
        """Regenerate the ward with the same patient count."""
        self._initialized = False
        await self.initialize(self.count)
