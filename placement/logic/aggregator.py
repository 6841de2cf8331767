"""
Aggregator

Reduces a placement record subset into per-group derived metrics
(rates, averages, extremes, counts) and into the dashboard-wide rollups.

Conventions:
- placement_rate is an integer percentage, 0 for a zero-student group
- avg_package is the simple mean of record averages, NOT students-weighted
- sorting is left to the caller (see sort_views); every sort is stable
"""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .constants import (
    GroupKey,
    PACKAGE_DECIMALS,
    PACKAGE_RANGES,
    PERFORMANCE_RANGES,
    SortPolicy,
    UNKNOWN_LABEL,
)
from .contracts import (
    AggregatedView,
    College,
    CompanyPlacement,
    GrowthMetrics,
    HeadlineStats,
    PackageBucket,
    PerformanceBucket,
    PlacementRecord,
    TypeBreakdown,
)
from .stats import mean, percent, round_half_up


def _round_package(value: float) -> float:
    return round_half_up(value, PACKAGE_DECIMALS)


def top_recruiter(placements: Iterable[CompanyPlacement]) -> Optional[str]:
    """
    Company with the highest summed placements.
    Ties go to the company encountered first.
    """
    totals: Dict[str, int] = {}
    for cp in placements:
        totals[cp.company] = totals.get(cp.company, 0) + cp.placements

    best: Optional[str] = None
    best_total = -1
    for company, total in totals.items():
        if total > best_total:
            best, best_total = company, total
    return best


def reduce_records(
    group_key: str,
    name: str,
    records: Sequence[PlacementRecord],
) -> AggregatedView:
    """
    Reduce a group of records into a single AggregatedView.

    Args:
        group_key: Identifier of the group (college id, branch, ...)
        name: Display name of the group
        records: Records in the group, in input order

    Returns:
        AggregatedView for the group
    """
    total_students = sum(r.total_students for r in records)
    placed_students = sum(r.placed_students for r in records)

    placements = [cp for r in records for cp in r.company_placements]

    return AggregatedView(
        group_key=group_key,
        name=name,
        placement_rate=percent(placed_students, total_students),
        avg_package=_round_package(mean(r.avg_package for r in records)),
        highest_package=max((r.highest_package for r in records), default=0.0),
        total_students=total_students,
        placed_students=placed_students,
        total_companies=len({cp.company for cp in placements}),
        top_recruiter=top_recruiter(placements),
    )


def _reduce_sector(
    sector: str,
    entries: Sequence[Tuple[int, CompanyPlacement]],
    records: Sequence[PlacementRecord],
) -> AggregatedView:
    """
    Sector groups are built from company placement entries.
    Each contributing record's cohort is counted once per sector.
    """
    placements = [cp for _, cp in entries]
    record_indexes = {index for index, _ in entries}
    total_students = sum(records[i].total_students for i in record_indexes)
    placed_students = sum(cp.placements for cp in placements)

    return AggregatedView(
        group_key=sector,
        name=sector,
        placement_rate=min(100, percent(placed_students, total_students)),
        avg_package=_round_package(mean(cp.avg_package for cp in placements)),
        highest_package=max((cp.highest_package for cp in placements), default=0.0),
        total_students=total_students,
        placed_students=placed_students,
        total_companies=len({cp.company for cp in placements}),
        top_recruiter=top_recruiter(placements),
    )


def aggregate(
    records: Sequence[PlacementRecord],
    group_by: GroupKey = GroupKey.COLLEGE,
    colleges: Optional[Mapping[int, College]] = None,
) -> List[AggregatedView]:
    """
    Produce one AggregatedView per group, in first-encountered group order.

    Args:
        records: Filtered record subset
        group_by: college, branch or sector
        colleges: Catalog used for college display names

    Returns:
        List of AggregatedView objects (unsorted)
    """
    group_by = GroupKey(group_by)
    colleges = colleges or {}

    if group_by == GroupKey.SECTOR:
        sectors: Dict[str, List[Tuple[int, CompanyPlacement]]] = {}
        for index, record in enumerate(records):
            for cp in record.company_placements:
                sectors.setdefault(cp.sector, []).append((index, cp))
        return [
            _reduce_sector(sector, entries, records)
            for sector, entries in sectors.items()
        ]

    groups: Dict[object, List[PlacementRecord]] = {}
    for record in records:
        key = record.college_id if group_by == GroupKey.COLLEGE else record.branch
        groups.setdefault(key, []).append(record)

    views = []
    for key, group in groups.items():
        if group_by == GroupKey.COLLEGE:
            college = colleges.get(key)
            name = college.name if college else f"College {key}"
        else:
            name = key
        views.append(reduce_records(str(key), name, group))
    return views


# =============================================================================
# SORTING
# =============================================================================

_SORT_KEYS: Dict[SortPolicy, Tuple[Callable[[AggregatedView], object], bool]] = {
    SortPolicy.PLACEMENT_RATE: (lambda v: v.placement_rate, True),
    SortPolicy.AVG_PACKAGE: (lambda v: v.avg_package, True),
    SortPolicy.TOTAL_STUDENTS: (lambda v: v.total_students, True),
    SortPolicy.ALPHABETICAL: (lambda v: v.name.casefold(), False),
}


def sort_views(
    views: Sequence[AggregatedView],
    policy: str = SortPolicy.PLACEMENT_RATE,
) -> List[AggregatedView]:
    """
    Stable sort by one of the supported policies.
    Unknown policies fall back to placement rate.
    """
    try:
        policy = SortPolicy(policy)
    except ValueError:
        policy = SortPolicy.PLACEMENT_RATE

    key, descending = _SORT_KEYS[policy]
    # sorted() keeps equal keys in input order, also with reverse=True
    return sorted(views, key=key, reverse=descending)


# =============================================================================
# DASHBOARD ROLLUPS
# =============================================================================

def headline_stats(records: Sequence[PlacementRecord]) -> HeadlineStats:
    """Single aggregate statistic set for the whole subset."""
    if not records:
        return HeadlineStats()

    total_students = sum(r.total_students for r in records)
    placed_students = sum(r.placed_students for r in records)

    return HeadlineStats(
        total_records=len(records),
        total_colleges=len({r.college_id for r in records}),
        total_branches=len({r.branch for r in records}),
        total_students=total_students,
        placed_students=placed_students,
        total_offers=sum(r.offers for r in records),
        placement_rate=percent(placed_students, total_students),
        avg_package=_round_package(mean(r.avg_package for r in records)),
        highest_package=max(r.highest_package for r in records),
        total_companies=len({
            cp.company for r in records for cp in r.company_placements
        }),
    )


def type_breakdown(
    college_views: Sequence[AggregatedView],
    colleges: Mapping[int, College],
) -> List[TypeBreakdown]:
    """
    Roll per-college views up to college type (Government/Private).

    avg_package is the mean of the college averages.
    """
    groups: Dict[str, List[AggregatedView]] = {}
    for view in college_views:
        college = colleges.get(int(view.group_key)) if view.group_key.isdigit() else None
        college_type = college.type if college else UNKNOWN_LABEL
        groups.setdefault(college_type, []).append(view)

    breakdown = []
    for college_type, views in groups.items():
        total_students = sum(v.total_students for v in views)
        placed_students = sum(v.placed_students for v in views)
        breakdown.append(TypeBreakdown(
            type=college_type,
            colleges=len(views),
            total_students=total_students,
            placed_students=placed_students,
            avg_placement_rate=percent(placed_students, total_students),
            avg_package=_round_package(mean(v.avg_package for v in views)),
        ))
    return breakdown


def package_distribution(records: Sequence[PlacementRecord]) -> List[PackageBucket]:
    """
    Count placements by company average package range.
    Buckets are [min, max); empty buckets are omitted.
    """
    buckets = [
        PackageBucket(label=label, min_package=low, max_package=high, count=0)
        for label, low, high in PACKAGE_RANGES
    ]

    for record in records:
        for cp in record.company_placements:
            for bucket in buckets:
                upper_ok = bucket.max_package is None or cp.avg_package < bucket.max_package
                if cp.avg_package >= bucket.min_package and upper_ok:
                    bucket.count += cp.placements
                    break

    return [b for b in buckets if b.count > 0]


def record_placement_rate(record: PlacementRecord) -> int:
    return percent(record.placed_students, record.total_students)


def performance_distribution(records: Sequence[PlacementRecord]) -> List[PerformanceBucket]:
    """
    Count records by their own placement rate band.
    Empty bands are omitted.
    """
    buckets = [
        PerformanceBucket(label=label, min_rate=low, max_rate=high, count=0)
        for label, low, high in PERFORMANCE_RANGES
    ]

    for record in records:
        rate = record_placement_rate(record)
        for bucket in buckets:
            if bucket.min_rate <= rate <= bucket.max_rate:
                bucket.count += 1
                break

    return [b for b in buckets if b.count > 0]


def growth_metrics(records: Sequence[PlacementRecord], year: int) -> GrowthMetrics:
    """
    Change between `year` and the year before in mean record placement rate
    and mean average package. Zero when either year has no records.
    """
    current = [r for r in records if r.year == year]
    previous = [r for r in records if r.year == year - 1]

    if not current or not previous:
        return GrowthMetrics(year=year)

    placement_growth = (
        mean(record_placement_rate(r) for r in current)
        - mean(record_placement_rate(r) for r in previous)
    )
    package_growth = (
        mean(r.avg_package for r in current)
        - mean(r.avg_package for r in previous)
    )

    return GrowthMetrics(
        year=year,
        placement_growth=_round_package(placement_growth),
        package_growth=_round_package(package_growth),
    )
