"""
icuwatch Synthetic Data

Risk-consistent vital snapshots, trends and complete patient records.
"""

from icuwatch.synthetic.vitals import (
    CHANNEL_SAMPLING,
    dbp_from_map,
    generate_snapshot,
    sample_channel,
    sbp_from_map,
)
from icuwatch.synthetic.trends import (
    CHANNEL_VARIANCE,
    TREND_LENGTH,
    generate_trend,
    generate_vital_trends,
)
from icuwatch.synthetic.patients import SyntheticPatientGenerator, generate_patients

__all__ = [
    "CHANNEL_SAMPLING",
    "dbp_from_map",
    "generate_snapshot",
    "sample_channel",
    "sbp_from_map",
    "CHANNEL_VARIANCE",
    "TREND_LENGTH",
    "generate_trend",
    "generate_vital_trends",
    "SyntheticPatientGenerator",
    "generate_patients",
]
