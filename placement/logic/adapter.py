"""
Data Adapter for the Placement Analytics Core

Transforms raw placement rows (dataset JSON or admin CSV upload) into the
typed contracts used by every other stage.

This is a pure READ + TRANSFORM layer:
- NO aggregation logic
- NO ranking
- NO file or DB writes

Shape violations are hard failures (RecordValidationError). Advisory
problems are logged and returned as DataQualityIssue entries.
"""

import csv
import io
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from .constants import BRANCHES, MAX_YEAR, MIN_YEAR
from .contracts import College, CompanyPlacement, DataQualityIssue, PlacementRecord
from .stats import parse_optional_float, parse_optional_int

logger = logging.getLogger(__name__)


class RecordValidationError(ValueError):
    """Raised when a raw row cannot become a valid record."""

    def __init__(self, index: int, message: str):
        self.index = index
        super().__init__(f"Record {index}: {message}")


REQUIRED_RECORD_FIELDS = (
    "college_id",
    "branch",
    "year",
    "total_students",
    "placed_students",
    "avg_package",
    "highest_package",
    "min_cgpa",
)

# Admin CSV header -> record field
ADMIN_CSV_FIELD_MAP = {
    "college": "college",
    "branch": "branch",
    "year": "year",
    "offers": "offers",
    "avg package": "avg_package",
    "highest package": "highest_package",
    "min cgpa": "min_cgpa",
    "total students": "total_students",
    "placed students": "placed_students",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(key: str) -> str:
    """Normalize camelCase dataset keys (e.g. 'minCGPA') to snake_case."""
    key = key.strip()
    if key == "minCGPA":
        return "min_cgpa"
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_keys(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {to_snake_case(str(key)): value for key, value in raw.items()}


def derive_placed_students(offers: Any, total_students: Any) -> Any:
    """Placed count for rows without one: offers capped at the cohort size."""
    offer_count = parse_optional_int(offers)
    total = parse_optional_int(total_students)
    if offer_count is None:
        return offers
    if total is None:
        return offer_count
    return min(offer_count, total)


# =============================================================================
# COLLEGES
# =============================================================================

def normalize_college(raw: Mapping[str, Any]) -> College:
    data = normalize_keys(raw)
    try:
        return College(**data)
    except ValidationError as e:
        raise RecordValidationError(parse_optional_int(data.get("id")) or -1, f"invalid college: {e}") from e


def normalize_colleges(rows: Iterable[Mapping[str, Any]]) -> List[College]:
    colleges = [normalize_college(row) for row in rows]
    seen = set()
    for college in colleges:
        if college.id in seen:
            raise RecordValidationError(college.id, f"duplicate college id {college.id}")
        seen.add(college.id)
    return colleges


# =============================================================================
# PLACEMENT RECORDS
# =============================================================================

def normalize_record(
    raw: Mapping[str, Any],
    index: int,
    branches: Sequence[str] = BRANCHES,
) -> Tuple[PlacementRecord, List[DataQualityIssue]]:
    """
    Normalize one raw placement row.

    Args:
        raw: Row with camelCase or snake_case keys
        index: Position in the input, used for error messages
        branches: Closed branch catalog

    Returns:
        Tuple of (PlacementRecord, data quality issues for this row)
    """
    data = normalize_keys(raw)

    # Some dataset versions only carry 'offers'; one student can hold several
    if data.get("placed_students") in (None, "") and data.get("offers") not in (None, ""):
        data["placed_students"] = derive_placed_students(data["offers"], data.get("total_students"))

    missing = [f for f in REQUIRED_RECORD_FIELDS if data.get(f) in (None, "")]
    if missing:
        raise RecordValidationError(index, f"missing required fields: {', '.join(missing)}")

    if data["branch"] not in branches:
        raise RecordValidationError(index, f"branch '{data['branch']}' is not in the branch catalog")

    year = parse_optional_int(data["year"])
    if year is None or not MIN_YEAR <= year <= MAX_YEAR:
        raise RecordValidationError(index, f"year {data['year']!r} outside {MIN_YEAR}-{MAX_YEAR}")
    data["year"] = year

    if data.get("offers") in (None, ""):
        data["offers"] = data["placed_students"]

    data["company_placements"] = [
        normalize_keys(cp) for cp in (data.get("company_placements") or [])
    ]

    try:
        record = PlacementRecord(**data)
    except ValidationError as e:
        raise RecordValidationError(index, str(e)) from e

    if record.placed_students > record.total_students:
        raise RecordValidationError(
            index,
            f"placed students ({record.placed_students}) exceed total students ({record.total_students})"
        )

    return record, check_record_quality(record, index)


def check_record_quality(record: PlacementRecord, index: int) -> List[DataQualityIssue]:
    """Advisory checks. Problems are reported, the record is kept as-is."""
    issues: List[DataQualityIssue] = []

    nested_total = sum(cp.placements for cp in record.company_placements)
    if nested_total > record.placed_students:
        issues.append(DataQualityIssue(
            index=index,
            college_id=record.college_id,
            branch=record.branch,
            year=record.year,
            message=f"Company placements sum to {nested_total}, above placed students ({record.placed_students})"
        ))

    if record.avg_package > record.highest_package:
        issues.append(DataQualityIssue(
            index=index,
            college_id=record.college_id,
            branch=record.branch,
            year=record.year,
            message=f"Average package {record.avg_package} above highest package {record.highest_package}"
        ))

    for issue in issues:
        logger.warning(f"⚠️ Data quality: record {index}: {issue.message}")

    return issues


def normalize_records(
    rows: Iterable[Mapping[str, Any]],
    branches: Sequence[str] = BRANCHES,
    college_ids: Optional[Iterable[int]] = None,
) -> Tuple[List[PlacementRecord], List[DataQualityIssue]]:
    """
    Normalize a batch of raw rows, preserving order.

    A record referencing a college missing from the catalog is a hard
    failure when college_ids is given.
    """
    known_ids = set(college_ids) if college_ids is not None else None
    records: List[PlacementRecord] = []
    issues: List[DataQualityIssue] = []

    for index, row in enumerate(rows):
        record, row_issues = normalize_record(row, index, branches)
        if known_ids is not None and record.college_id not in known_ids:
            raise RecordValidationError(index, f"unknown college id {record.college_id}")
        records.append(record)
        issues.extend(row_issues)

    logger.info(f"📦 Normalized {len(records)} placement records ({len(issues)} data quality warnings)")
    return records, issues


# =============================================================================
# ADMIN CSV IMPORT
# =============================================================================

def parse_admin_csv(
    text: str,
    colleges: Iterable[College],
    branches: Sequence[str] = BRANCHES,
) -> Tuple[List[PlacementRecord], List[DataQualityIssue]]:
    """
    Parse an admin CSV upload into placement records.

    Expected header (extra columns ignored):
        College, Branch, Year, Offers, Avg Package, Highest Package,
        Min CGPA, Total Students, Placed Students

    Without a Placed Students column the placed count is the offer count
    capped at Total Students. Colleges are resolved by exact name. Rows without nested company data
    get an empty company breakdown.
    """
    by_name = {college.name: college.id for college in colleges}
    reader = csv.DictReader(io.StringIO(text))

    rows: List[Dict[str, Any]] = []
    for index, raw_row in enumerate(reader):
        # Skip blank trailing lines
        if not any((value or "").strip() for value in raw_row.values()):
            continue

        row: Dict[str, Any] = {}
        for header, value in raw_row.items():
            field = ADMIN_CSV_FIELD_MAP.get((header or "").strip().lower())
            if field:
                row[field] = (value or "").strip()

        name = row.pop("college", "")
        if name not in by_name:
            raise RecordValidationError(index, f"unknown college '{name}'")
        row["college_id"] = by_name[name]

        for field in ("year", "offers", "total_students", "placed_students"):
            if field in row:
                row[field] = parse_optional_int(row[field])
        for field in ("avg_package", "highest_package", "min_cgpa"):
            if field in row:
                row[field] = parse_optional_float(row[field])

        rows.append(row)

    return normalize_records(rows, branches)
