"""
icuwatch: ICU Patient Monitoring Core

Vital-sign status classification, patient risk aggregation, synthetic
vital-sign generation and templated clinical insights for an ICU
monitoring dashboard.
"""

__version__ = "0.1.0"
__author__ = "icuwatch Team"
