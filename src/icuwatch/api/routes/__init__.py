"""
icuwatch API Routes

All API route modules.
"""

from icuwatch.api.routes.patients import router as patients_router
from icuwatch.api.routes.vitals import router as vitals_router

__all__ = [
    "patients_router",
    "vitals_router",
]
