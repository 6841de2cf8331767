"""
Trend Builder

Produces an ascending multi-year series of aggregate metrics, optionally
scoped to one college. Years without matching records are omitted rather
than zero-filled.
"""

from typing import Dict, List, Optional, Sequence

from .aggregator import reduce_records
from .contracts import PlacementRecord, TrendPoint


def build_trend(
    records: Sequence[PlacementRecord],
    college_id: Optional[int] = None,
) -> List[TrendPoint]:
    """
    Build the year-by-year trend.

    Args:
        records: Full record set
        college_id: Optional college scope; an unknown id yields []

    Returns:
        TrendPoints sorted by year ascending
    """
    by_year: Dict[int, List[PlacementRecord]] = {}
    for record in records:
        if college_id is not None and record.college_id != college_id:
            continue
        by_year.setdefault(record.year, []).append(record)

    points = []
    for year in sorted(by_year):
        view = reduce_records(str(year), str(year), by_year[year])
        points.append(TrendPoint(
            year=year,
            placement_rate=view.placement_rate,
            avg_package=view.avg_package,
            highest_package=view.highest_package,
        ))
    return points
