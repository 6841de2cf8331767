"""
Analytics Runner

Developer sanity check: loads the configured dataset and prints every
dashboard view once. Pure orchestration, no analytics logic.

Run from the repository root:
    python -m placement.logic.runner
"""

import logging

from ..config import configure_logging, get_settings
from .contracts import InsufficientData, StudentProfile
from .engine import get_analytics


def validate_runner():
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = get_settings()

    logger.info(f"🚀 Loading dataset: {settings.data_path}")
    analytics = get_analytics(settings.data_path)
    store = analytics.store

    if store.issues:
        logger.warning(f"⚠️ {len(store.issues)} data quality warnings in dataset")

    print("=" * 60)
    print("PLACEMENT ANALYTICS VALIDATION")
    print("=" * 60)

    stats = analytics.headline_stats()
    print(f"\nRecords: {stats.total_records}")
    print(f"Colleges: {stats.total_colleges}")
    print(f"Placement Rate: {stats.placement_rate}%")
    print(f"Average Package: {stats.avg_package} LPA")
    print(f"Companies: {stats.total_companies}")

    latest_year = max((r.year for r in store.records), default=None)
    if latest_year is None:
        print("\nNo records loaded.")
        return

    print(f"\n--- COLLEGE RANKINGS ({latest_year}) ---")
    for rank, view in enumerate(analytics.college_rankings({"year": latest_year}), 1):
        print(f"  {rank}. {view.name}: {view.placement_rate}% | {view.avg_package} LPA | top: {view.top_recruiter}")

    print(f"\n--- TOP RECRUITERS ({latest_year}) ---")
    for summary in analytics.top_recruiters({"year": latest_year}, limit=settings.top_recruiters):
        print(f"  {summary.company} ({summary.tier}): {summary.total_placements} hires @ {summary.avg_package} LPA")

    print("\n--- TREND ---")
    for point in analytics.trend():
        print(f"  {point.year}: {point.placement_rate}% | {point.avg_package} LPA")

    first_record = store.records[0]
    profile = StudentProfile(
        college_id=first_record.college_id,
        branch=first_record.branch,
        cgpa=8.2,
        projects=2,
        internships=1,
        certifications=1,
        skills="Python, React, SQL",
    )
    result = analytics.predict(profile)

    print("\n--- PREDICTION ---")
    if isinstance(result, InsufficientData):
        print(f"  Insufficient data: {result.reason}")
    else:
        print(f"  Probability: {result.probability}%")
        print(f"  Expected Package: {result.expected_package} LPA")
        for rec in result.recommendations:
            print(f"  [{rec.severity.upper()}] {rec.text}")

    print("\n" + "=" * 60)
    print("VALIDATION COMPLETE ✓")
    print("=" * 60)


if __name__ == "__main__":
    validate_runner()
