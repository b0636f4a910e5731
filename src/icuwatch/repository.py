"""
Patients Repository

Single entry point for patient data. Holds one data source at a time and
swaps it when reconfigured. Instances are created by the caller and
passed to whatever needs them.
"""

import structlog

from icuwatch.config import DataSourceConfig
from icuwatch.models.patient import PaginatedResult, Patient, PatientFilters
from icuwatch.models.vitals import VitalTimeSeries
from icuwatch.sources.api import MimicApiDataSource
from icuwatch.sources.base import DataSourceError, PatientDataSource, TimeRange
from icuwatch.sources.json_file import MimicJsonDataSource
from icuwatch.sources.mock import MockDataSource

logger = structlog.get_logger(__name__)


async def create_data_source(config: DataSourceConfig) -> PatientDataSource:
    """
    Build and initialize the source a config describes.

    Raises:
        DataSourceError: CONFIG_ERROR when a required setting is missing
    """
    if config.type == "mock":
        source = MockDataSource(count=config.patient_count, seed=config.seed)
        await source.initialize()
        return source

    if config.type == "mimic-api":
        if not config.api_url:
            raise DataSourceError(
                "API URL is required for mimic-api source", "CONFIG_ERROR", config.type
            )
        return MimicApiDataSource(
            base_url=config.api_url,
            api_key=config.api_key,
            timeout=config.timeout_seconds,
        )

    if config.type == "mimic-json":
        if not config.json_path:
            raise DataSourceError(
                "JSON path is required for mimic-json source", "CONFIG_ERROR", config.type
            )
        source = MimicJsonDataSource(config.json_path)
        await source.initialize()
        return source

    raise DataSourceError(
        f"Unknown data source type: {config.type}", "CONFIG_ERROR", str(config.type)
    )


class PatientsRepository:
    """
    Patient data access over a swappable source.

    Usage:
        repo = await PatientsRepository.from_config(DataSourceConfig(type="mock", seed=7))
        patients = await repo.get_patients()
    """

    def __init__(self, source: PatientDataSource | None = None):
        self.source = source or MockDataSource()

    @classmethod
    async def from_config(cls, config: DataSourceConfig) -> "PatientsRepository":
        return cls(await create_data_source(config))

    @property
    def source_type(self) -> str:
        return self.source.source_type

    async def configure(self, config: DataSourceConfig) -> None:
        """Switch to the source described by ``config``."""
        new_source = await create_data_source(config)
        old_source, self.source = self.source, new_source
        if old_source is not new_source:
            await old_source.close()
        logger.info("Configured data source", source=config.type)

    async def get_patients(self, filters: PatientFilters | None = None) -> list[Patient]:
        return await self.source.get_patients(filters)

    async def get_patients_paginated(
        self,
        page: int = 1,
        page_size: int = 12,
        filters: PatientFilters | None = None,
    ) -> PaginatedResult[Patient]:
        return await self.source.get_patients_paginated(page, page_size, filters)

    async def get_patient_by_id(self, patient_id: str) -> Patient | None:
        return await self.source.get_patient_by_id(patient_id)

    async def get_vital_time_series(
        self,
        patient_id: str,
        time_range: TimeRange = "1h",
    ) -> VitalTimeSeries | None:
        return await self.source.get_vital_time_series(patient_id, time_range)

    async def refresh(self) -> None:
        await self.source.refresh()

    async def close(self) -> None:
        await self.source.close()
