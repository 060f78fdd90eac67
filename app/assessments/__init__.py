"""
Tests (assessments)

Physical tests with playing / recovery intervals, served under /tests.
"""

from .router import router as assessments_router
from .service import AssessmentService, get_assessment_service

__all__ = ["assessments_router", "AssessmentService", "get_assessment_service"]
