"""
MIMIC-IV API Data Source

Talks to a backend that serves MIMIC-IV records over HTTP.
"""

from contextlib import contextmanager
from typing import Any, Iterator

import httpx
import structlog
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from icuwatch.mappers.mimic import map_mimic_patient
from icuwatch.mappers.timeseries import map_time_series_response
from icuwatch.models.patient import PaginatedResult, Patient, PatientFilters
from icuwatch.models.vitals import VitalTimeSeries
from icuwatch.sources.base import DataSourceError, PatientDataSource, TimeRange

logger = structlog.get_logger(__name__)


class MimicApiDataSource(PatientDataSource):
    """
    HTTP client for a MIMIC-IV backend.

    Endpoints:
        GET /patients                       list, supports filters and paging
        GET /patients/{id}                  single record
        GET /patients/{id}/vitals?range=    time series
        GET /health                         liveness
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @property
    def source_type(self) -> str:
        return "mimic-api"

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        reraise=True,
    )
    async def _request(self, path: str, params: dict[str, Any] | None) -> httpx.Response:
        return await self._client.get(path, params=params)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a JSON document. Transport failures get up to three attempts.

        Raises:
            DataSourceError: HTTP_<status> for error responses,
                NETWORK_ERROR for transport failures and non-JSON bodies
        """
        try:
            response = await self._request(path, params)
        except httpx.HTTPError as e:
            logger.error("MIMIC API request failed", path=path, error=str(e))
            raise DataSourceError(
                f"Network error: {e}", "NETWORK_ERROR", self.source_type
            ) from e

        if response.is_error:
            raise DataSourceError(
                f"API request failed: {response.reason_phrase}",
                f"HTTP_{response.status_code}",
                self.source_type,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DataSourceError(
                f"Invalid JSON response: {e}", "NETWORK_ERROR", self.source_type
            ) from e

    @contextmanager
    def _response_shape(self, path: str) -> Iterator[None]:
        """Report a payload that cannot be mapped as INVALID_RESPONSE."""
        try:
            yield
        except (KeyError, TypeError, ValidationError) as e:
            logger.error("Unexpected MIMIC API payload", path=path, error=str(e))
            raise DataSourceError(
                f"Unexpected response from {path}: {e}", "INVALID_RESPONSE", self.source_type
            ) from e

    @staticmethod
    def _filter_params(filters: PatientFilters | None) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if not filters:
            return params
        if filters.risk_level:
            params["risk_level"] = ",".join(r.value for r in filters.risk_level)
        if filters.ventilation_support:
            params["ventilation"] = ",".join(v.value for v in filters.ventilation_support)
        if filters.unit:
            params["unit"] = ",".join(filters.unit)
        if filters.min_age is not None:
            params["min_age"] = filters.min_age
        if filters.max_age is not None:
            params["max_age"] = filters.max_age
        if filters.diagnosis:
            params["diagnosis"] = filters.diagnosis
        return params

    async def get_patients(self, filters: PatientFilters | None = None) -> list[Patient]:
        data = await self._get("/patients", params=self._filter_params(filters))
        with self._response_shape("/patients"):
            return [map_mimic_patient(r) for r in data["patients"]]

    async def get_patients_paginated(
        self,
        page: int = 1,
        page_size: int = 12,
        filters: PatientFilters | None = None,
    ) -> PaginatedResult[Patient]:
        params = {"page": page, "page_size": page_size, **self._filter_params(filters)}
        data = await self._get("/patients", params=params)
        with self._response_shape("/patients"):
            return PaginatedResult[Patient](
                data=[map_mimic_patient(r) for r in data["patients"]],
                total=data["total"],
                page=data["page"],
                page_size=data["page_size"],
                has_more=data["page"] * data["page_size"] < data["total"],
            )

    async def get_patient_by_id(self, patient_id: str) -> Patient | None:
        try:
            data = await self._get(f"/patients/{patient_id}")
        except DataSourceError as e:
            if e.code == "HTTP_404":
                return None
            raise
        with self._response_shape(f"/patients/{patient_id}"):
            return map_mimic_patient(data)

    async def get_vital_time_series(
        self,
        patient_id: str,
        time_range: TimeRange = "1h",
    ) -> VitalTimeSeries | None:
        try:
            data = await self._get(
                f"/patients/{patient_id}/vitals", params={"range": time_range}
            )
        except DataSourceError as e:
            if e.code == "HTTP_404":
                return None
            raise
        with self._response_shape(f"/patients/{patient_id}/vitals"):
            return map_time_series_response(data["time_series"])

    async def health_check(self) -> bool:
        try:
            await self._get("/health")
        except DataSourceError:
            return False
        return True

    async def close(self) -> None:
        await self._client.aclose()
