"""
Test results

Four sub-scores per player per test, with aggregated metrics and
performance analysis.
"""

from .router import router as results_router
from .service import ResultService, get_result_service

__all__ = ["results_router", "ResultService", "get_result_service"]
