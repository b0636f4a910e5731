"""
icuwatch Mappers

MIMIC-IV record and time-series mapping.
"""

from icuwatch.mappers.mimic import (
    bed_number_for,
    calculate_map,
    map_mimic_patient,
    map_mimic_patients,
)
from icuwatch.mappers.timeseries import (
    TIME_RANGE_INTERVALS,
    filter_time_series_by_range,
    map_time_series_response,
    resample_time_series,
    time_series_to_trends,
    trend_to_time_series,
    trends_to_time_series,
)

__all__ = [
    "bed_number_for",
    "calculate_map",
    "map_mimic_patient",
    "map_mimic_patients",
    "TIME_RANGE_INTERVALS",
    "filter_time_series_by_range",
    "map_time_series_response",
    "resample_time_series",
    "time_series_to_trends",
    "trend_to_time_series",
    "trends_to_time_series",
]
