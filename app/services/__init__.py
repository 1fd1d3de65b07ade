"""
Application Services - Business Logic Layer

Services contain business logic extracted from route handlers,
coordinating repositories and the pure scoring functions.
"""

from app.services.history_service import (
    HistoryService,
    HistoricalSet,
    OutcomeTally,
    CompanySnapshot,
)
from app.services.analytics_service import (
    AnalyticsService,
    ScoreReport,
    get_analytics_service,
)

__all__ = [
    "HistoryService",
    "HistoricalSet",
    "OutcomeTally",
    "CompanySnapshot",
    "AnalyticsService",
    "ScoreReport",
    "get_analytics_service",
]
