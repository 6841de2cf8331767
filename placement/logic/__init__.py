"""
Placement Analytics Logic Module

Provides the pure aggregation, ranking and prediction core behind the
placement dashboard.
"""

from .contracts import (
    PlacementRecord,
    CompanyPlacement,
    College,
    FilterOptions,
    StudentProfile,
    AggregatedView,
    TrendPoint,
    RecruiterSummary,
    HeadlineStats,
    PlacementPrediction,
    InsufficientData,
    Recommendation,
)
from .adapter import RecordValidationError
from .record_store import RecordStore
from .engine import PlacementAnalytics, get_analytics
from .constants import CollegeType, GroupKey, Severity, SortPolicy, Tier

__all__ = [
    # Main facade
    "PlacementAnalytics",
    "get_analytics",
    "RecordStore",
    "RecordValidationError",

    # Contracts
    "PlacementRecord",
    "CompanyPlacement",
    "College",
    "FilterOptions",
    "StudentProfile",
    "AggregatedView",
    "TrendPoint",
    "RecruiterSummary",
    "HeadlineStats",
    "PlacementPrediction",
    "InsufficientData",
    "Recommendation",

    # Enums
    "CollegeType",
    "GroupKey",
    "Severity",
    "SortPolicy",
    "Tier",
]
