"""
Placement Analytics Engine

Main facade that exposes every dashboard query over a RecordStore.
This is the primary entry point for UI and reporting collaborators.

Every call recomputes from the raw records:
1. Filtering - select the record subset from the options
2. Reduction - aggregate, trend, rank or score the subset
3. Ordering - apply the requested stable sort / limit
"""

import logging
from typing import Any, Dict, List, Optional

from .aggregator import (
    aggregate,
    growth_metrics,
    headline_stats,
    package_distribution,
    performance_distribution,
    reduce_records,
    sort_views,
    type_breakdown,
)
from .constants import DEFAULT_TOP_RECRUITERS, GroupKey, SortPolicy
from .contracts import (
    AggregatedView,
    CompanyInsight,
    GrowthMetrics,
    HeadlineStats,
    PackageBucket,
    PerformanceBucket,
    PlacementRecord,
    RecruiterSummary,
    SectorSummary,
    StudentProfile,
    TrendPoint,
    TypeBreakdown,
)
from .exporter import export_admin_records, export_college_rankings, export_college_records
from .filters import OptionsLike, coerce_options, filter_colleges, filter_records
from .predictor import PredictionResult, predict
from .ranker import company_insights, rank_recruiters, sector_summary
from .record_store import RecordStore
from .trends import build_trend

logger = logging.getLogger(__name__)


class PlacementAnalytics:
    """
    Query facade over an immutable RecordStore.

    Holds no derived state: nothing is cached between calls.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self.version = "1.0.0"

    # -------------------------------------------------------------------------
    # Filtering
    # -------------------------------------------------------------------------

    def select(self, options: OptionsLike = None) -> List[PlacementRecord]:
        """Records matching the filter options, in store order."""
        return filter_records(self.store.records, options, self.store.colleges)

    def search_colleges(self, options: OptionsLike = None):
        """Colleges matching id/type/free-text options, in catalog order."""
        return filter_colleges(list(self.store.colleges.values()), options)

    # -------------------------------------------------------------------------
    # Aggregated views
    # -------------------------------------------------------------------------

    def college_rankings(
        self,
        options: OptionsLike = None,
        sort_by: str = SortPolicy.PLACEMENT_RATE,
    ) -> List[AggregatedView]:
        """
        One view per college in the filtered subset, sorted by policy.
        """
        records = self.select(options)
        views = aggregate(records, GroupKey.COLLEGE, self.store.colleges)
        logger.info(f"🏫 College rankings: {len(records)} records -> {len(views)} colleges (sort={sort_by})")
        return sort_views(views, sort_by)

    def branch_breakdown(
        self,
        options: OptionsLike = None,
        sort_by: str = SortPolicy.PLACEMENT_RATE,
    ) -> List[AggregatedView]:
        records = self.select(options)
        return sort_views(aggregate(records, GroupKey.BRANCH), sort_by)

    def sector_breakdown(
        self,
        options: OptionsLike = None,
        sort_by: str = SortPolicy.PLACEMENT_RATE,
    ) -> List[AggregatedView]:
        records = self.select(options)
        return sort_views(aggregate(records, GroupKey.SECTOR), sort_by)

    def type_breakdown(self, options: OptionsLike = None) -> List[TypeBreakdown]:
        """Government vs Private rollup of the college rankings."""
        views = aggregate(self.select(options), GroupKey.COLLEGE, self.store.colleges)
        return type_breakdown(views, self.store.colleges)

    def college_overview(
        self,
        college_id: int,
        options: OptionsLike = None,
    ) -> Optional[AggregatedView]:
        """
        Aggregate statistics for one college.

        Returns None for an unknown college or when nothing matches.
        """
        college = self.store.college(college_id)
        if college is None:
            logger.info(f"College {college_id} not found")
            return None

        scoped = coerce_options(options).model_copy(update={"college_id": college_id})
        records = self.select(scoped)
        if not records:
            return None
        return reduce_records(str(college_id), college.name, records)

    def headline_stats(self, options: OptionsLike = None) -> HeadlineStats:
        return headline_stats(self.select(options))

    def package_distribution(self, options: OptionsLike = None) -> List[PackageBucket]:
        return package_distribution(self.select(options))

    def performance_distribution(self, options: OptionsLike = None) -> List[PerformanceBucket]:
        return performance_distribution(self.select(options))

    def growth_metrics(self, year: int, options: OptionsLike = None) -> GrowthMetrics:
        """Year-over-year growth; any year in options is ignored."""
        scoped = coerce_options(options).model_copy(update={"year": None})
        return growth_metrics(self.select(scoped), year)

    # -------------------------------------------------------------------------
    # Trends and recruiters
    # -------------------------------------------------------------------------

    def trend(self, college_id: Optional[int] = None) -> List[TrendPoint]:
        if college_id is not None and self.store.college(college_id) is None:
            return []
        return build_trend(self.store.records, college_id)

    def top_recruiters(
        self,
        options: OptionsLike = None,
        limit: int = DEFAULT_TOP_RECRUITERS,
    ) -> List[RecruiterSummary]:
        return rank_recruiters(self.select(options), limit)

    def company_insights(
        self,
        search_text: Optional[str] = None,
        sector: Optional[str] = None,
        options: OptionsLike = None,
    ) -> List[CompanyInsight]:
        return company_insights(
            self.select(options),
            self.store.colleges,
            search_text=search_text,
            sector=sector,
        )

    def sector_summary(self, options: OptionsLike = None) -> List[SectorSummary]:
        return sector_summary(company_insights(self.select(options), self.store.colleges))

    # -------------------------------------------------------------------------
    # Prediction
    # -------------------------------------------------------------------------

    def predict(self, profile: StudentProfile) -> PredictionResult:
        result = predict(
            profile,
            self.store.records,
            self.store.colleges,
            self.store.skill_keywords,
        )
        logger.info(f"🎯 Prediction for college {profile.college_id} / {profile.branch}: {type(result).__name__}")
        return result

    def predict_from_dict(self, profile_data: Dict[str, Any]) -> PredictionResult:
        """
        Convenience method for form integration.

        Accepts camelCase keys (collegeId) as well as snake_case.
        """
        data = dict(profile_data)
        if "collegeId" in data and "college_id" not in data:
            data["college_id"] = data.pop("collegeId")
        profile = StudentProfile(**data)
        return self.predict(profile)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_college_rankings(
        self,
        options: OptionsLike = None,
        sort_by: str = SortPolicy.PLACEMENT_RATE,
    ) -> str:
        return export_college_rankings(self.college_rankings(options, sort_by), self.store.colleges)

    def export_college_records(self, college_id: int, options: OptionsLike = None) -> str:
        if self.store.college(college_id) is None:
            return ""
        scoped = coerce_options(options).model_copy(update={"college_id": college_id})
        return export_college_records(self.select(scoped), self.store.colleges)

    def export_admin_records(self) -> str:
        return export_admin_records(self.store.records, self.store.colleges)


# Convenience function for simple usage
def get_analytics(data_path: Optional[str] = None) -> PlacementAnalytics:
    """
    Build an analytics facade from a dataset file.

    Args:
        data_path: JSON dataset path; defaults to the configured path

    Returns:
        PlacementAnalytics
    """
    from ..config import get_settings

    path = data_path or get_settings().data_path
    return PlacementAnalytics(RecordStore.from_json_file(path))
