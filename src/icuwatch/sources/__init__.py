"""
icuwatch Data Sources

Interchangeable patient data sources: synthetic, MIMIC-IV JSON export
and MIMIC-IV HTTP API.
"""

from icuwatch.sources.base import (
    DataSourceError,
    PatientDataSource,
    TimeRange,
    apply_filters,
    paginate,
)
from icuwatch.sources.mock import MockDataSource
from icuwatch.sources.json_file import MimicJsonDataSource
from icuwatch.sources.api import MimicApiDataSource

__all__ = [
    "DataSourceError",
    "PatientDataSource",
    "TimeRange",
    "apply_filters",
    "paginate",
    "MockDataSource",
    "MimicJsonDataSource",
    "MimicApiDataSource",
]
