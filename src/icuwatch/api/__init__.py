"""
icuwatch API

REST surface for the monitoring dashboard.
"""
