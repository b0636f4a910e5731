"""
Time Series Mapper

Converts between MIMIC-IV charted series, timestamped VitalTimeSeries
and the fixed-length trend lists the dashboard sparklines use.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from icuwatch.models.mimic import MimicTimeSeriesResponse
from icuwatch.models.vitals import TimeSeriesPoint, VitalTimeSeries, VitalTrends


# Minutes between points for each dashboard time range
TIME_RANGE_INTERVALS = {
    "1h": 6,
    "4h": 24,
    "12h": 72,
    "24h": 144,
}


def _parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def map_time_series_response(
    responses: list[MimicTimeSeriesResponse | dict[str, Any]],
) -> VitalTimeSeries:
    """Group charted series by vital sign."""
    result: dict[str, list[TimeSeriesPoint]] = {}
    for response in responses:
        if not isinstance(response, MimicTimeSeriesResponse):
            response = MimicTimeSeriesResponse.model_validate(response)
        result[response.vital_sign] = [
            TimeSeriesPoint(
                timestamp=_parse_time(point.charttime),
                value=point.value,
                chart_time=point.charttime,
            )
            for point in response.data_points
        ]
    return VitalTimeSeries(**result)


def time_series_to_trends(series: VitalTimeSeries) -> VitalTrends:
    """Drop timestamps, keeping values in order."""
    def values(points):
        return [p.value for p in points] if points else []

    return VitalTrends(
        hr=values(series.hr),
        rr=values(series.rr),
        spo2=values(series.spo2),
        map=values(series.map),
        temp=values(series.temp),
        etco2=values(series.etco2) if series.etco2 else None,
    )


def resample_time_series(points: list[TimeSeriesPoint], target_count: int) -> list[float]:
    """
    Down-sample to ``target_count`` values by uniform index stepping.

    Series already at or below the target are returned whole.
    """
    if not points:
        return []
    if len(points) <= target_count:
        return [p.value for p in points]

    step = len(points) / target_count
    return [points[int(i * step)].value for i in range(target_count)]


def filter_time_series_by_range(
    points: list[TimeSeriesPoint],
    start: datetime,
    end: datetime,
) -> list[TimeSeriesPoint]:
    """Points with start <= timestamp <= end."""
    return [p for p in points if start <= p.timestamp <= end]


def trend_to_time_series(
    trend: list[float],
    interval_minutes: int = 6,
    now: datetime | None = None,
) -> list[TimeSeriesPoint]:
    """Timestamp a trend so its last value lands at ``now``."""
    now = now or datetime.now(timezone.utc)
    last = len(trend) - 1
    return [
        TimeSeriesPoint(
            timestamp=now - timedelta(minutes=(last - i) * interval_minutes),
            value=value,
        )
        for i, value in enumerate(trend)
    ]


def trends_to_time_series(
    trends: VitalTrends,
    interval_minutes: int = 6,
    now: datetime | None = None,
) -> VitalTimeSeries:
    now = now or datetime.now(timezone.utc)
    return VitalTimeSeries(
        hr=trend_to_time_series(trends.hr, interval_minutes, now),
        rr=trend_to_time_series(trends.rr, interval_minutes, now),
        spo2=trend_to_time_series(trends.spo2, interval_minutes, now),
        map=trend_to_time_series(trends.map, interval_minutes, now),
        temp=trend_to_time_series(trends.temp, interval_minutes, now),
        etco2=(
            trend_to_time_series(trends.etco2, interval_minutes, now)
            if trends.etco2 else None
        ),
    )
