"""
CSV Exporter

Flattens derived views into rows with a fixed column order and encodes them
with the csv module. Column order and naming never change between calls so
exports can be re-read and compared.
"""

import csv
import io
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .aggregator import record_placement_rate
from .constants import (
    ADMIN_EXPORT_COLUMNS,
    COLLEGE_RANKING_COLUMNS,
    COLLEGE_RECORD_COLUMNS,
    MISSING_RECRUITER,
    UNKNOWN_LABEL,
)
from .contracts import AggregatedView, College, PlacementRecord


def college_ranking_rows(
    views: Sequence[AggregatedView],
    colleges: Mapping[int, College],
) -> List[Dict[str, Any]]:
    """One row per college view, keyed by COLLEGE_RANKING_COLUMNS."""
    rows = []
    for view in views:
        college = colleges.get(int(view.group_key)) if view.group_key.isdigit() else None
        rows.append({
            "College": view.name,
            "Type": college.type if college else UNKNOWN_LABEL,
            "Location": college.location if college else UNKNOWN_LABEL,
            "TotalStudents": view.total_students,
            "PlacedStudents": view.placed_students,
            "PlacementRate": view.placement_rate,
            "AvgPackage": view.avg_package,
            "HighestPackage": view.highest_package,
            "TopRecruiter": view.top_recruiter or MISSING_RECRUITER,
        })
    return rows


def college_record_rows(
    records: Sequence[PlacementRecord],
    colleges: Mapping[int, College],
) -> List[Dict[str, Any]]:
    """Per-record rows for a single college dashboard export."""
    rows = []
    for record in records:
        college = colleges.get(record.college_id)
        rows.append({
            "College": college.name if college else f"College {record.college_id}",
            "Branch": record.branch,
            "Year": record.year,
            "TotalStudents": record.total_students,
            "PlacedStudents": record.placed_students,
            "PlacementRate": record_placement_rate(record),
            "AvgPackage": record.avg_package,
            "HighestPackage": record.highest_package,
        })
    return rows


def admin_export_rows(
    records: Sequence[PlacementRecord],
    colleges: Mapping[int, College],
) -> List[Dict[str, Any]]:
    """Rows in the admin upload layout, so an export can be re-imported."""
    rows = []
    for record in records:
        college = colleges.get(record.college_id)
        rows.append({
            "College": college.name if college else f"College {record.college_id}",
            "Branch": record.branch,
            "Year": record.year,
            "Offers": record.offers,
            "Avg Package": record.avg_package,
            "Highest Package": record.highest_package,
            "Min CGPA": record.min_cgpa,
            "Total Students": record.total_students,
            "Placed Students": record.placed_students,
        })
    return rows


def to_csv(rows: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> str:
    """Encode rows with a header line in the given column order."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(columns), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({column: row.get(column, "") for column in columns})
    return buffer.getvalue()


def export_college_rankings(
    views: Sequence[AggregatedView],
    colleges: Mapping[int, College],
) -> str:
    return to_csv(college_ranking_rows(views, colleges), COLLEGE_RANKING_COLUMNS)


def export_college_records(
    records: Sequence[PlacementRecord],
    colleges: Mapping[int, College],
) -> str:
    return to_csv(college_record_rows(records, colleges), COLLEGE_RECORD_COLUMNS)


def export_admin_records(
    records: Sequence[PlacementRecord],
    colleges: Mapping[int, College],
) -> str:
    return to_csv(admin_export_rows(records, colleges), ADMIN_EXPORT_COLUMNS)


def read_college_rankings_csv(text: str) -> List[Dict[str, Any]]:
    """
    Parse a college rankings export back into typed rows.

    Raises:
        ValueError: If the header does not match the export layout
    """
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames != COLLEGE_RANKING_COLUMNS:
        raise ValueError(f"Unexpected columns: {reader.fieldnames}")

    rows = []
    for raw in reader:
        top: Optional[str] = raw["TopRecruiter"]
        rows.append({
            "College": raw["College"],
            "Type": raw["Type"],
            "Location": raw["Location"],
            "TotalStudents": int(raw["TotalStudents"]),
            "PlacedStudents": int(raw["PlacedStudents"]),
            "PlacementRate": int(raw["PlacementRate"]),
            "AvgPackage": float(raw["AvgPackage"]),
            "HighestPackage": float(raw["HighestPackage"]),
            "TopRecruiter": None if top == MISSING_RECRUITER else top,
        })
    return rows
