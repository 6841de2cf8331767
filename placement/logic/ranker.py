"""
Recruiter Ranker

Reduces the nested per-company hiring data into a ranked recruiter
leaderboard, and into the company/sector insight views.

Package averages here are placements-weighted, unlike the simple mean used
by the aggregator. Both are kept as-is so dashboard numbers stay put.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from .constants import MAX_SECTOR_DEMAND, PACKAGE_DECIMALS, SECTOR_DEMAND_PER_HIRE
from .contracts import (
    College,
    CompanyInsight,
    PlacementRecord,
    RecruiterSummary,
    SectorSummary,
)
from .stats import mean, round_half_up, safe_ratio


def rank_recruiters(
    records: Sequence[PlacementRecord],
    limit: int = 10,
) -> List[RecruiterSummary]:
    """
    Rank recruiters by total placements.

    Args:
        records: Filtered record subset
        limit: Maximum entries to return

    Returns:
        Up to `limit` RecruiterSummary entries, sorted by total placements
        descending with ties broken by company name ascending
    """
    if limit <= 0:
        return []

    stats: Dict[str, dict] = {}
    for record in records:
        for cp in record.company_placements:
            entry = stats.get(cp.company)
            if entry is None:
                # sector/tier come from the first occurrence
                entry = stats[cp.company] = {
                    "sector": cp.sector,
                    "tier": cp.tier,
                    "placements": 0,
                    "package_sum": 0.0,
                    "highest": 0.0,
                }
            entry["placements"] += cp.placements
            entry["package_sum"] += cp.avg_package * cp.placements
            entry["highest"] = max(entry["highest"], cp.highest_package)

    summaries = [
        RecruiterSummary(
            company=company,
            sector=entry["sector"],
            tier=entry["tier"],
            total_placements=entry["placements"],
            avg_package=round_half_up(
                safe_ratio(entry["package_sum"], entry["placements"]), PACKAGE_DECIMALS
            ),
            highest_package=entry["highest"],
        )
        for company, entry in stats.items()
    ]

    summaries.sort(key=lambda s: (-s.total_placements, s.company))
    return summaries[:limit]


def company_insights(
    records: Sequence[PlacementRecord],
    colleges: Optional[Mapping[int, College]] = None,
    search_text: Optional[str] = None,
    sector: Optional[str] = None,
) -> List[CompanyInsight]:
    """
    Per-company statistics across colleges and branches.

    Optional case-insensitive name search and exact sector filter.
    Sorted by total hires descending; equal totals keep first-seen order.
    """
    colleges = colleges or {}
    stats: Dict[str, dict] = {}

    for record in records:
        college = colleges.get(record.college_id)
        college_name = college.name if college else f"College {record.college_id}"

        for cp in record.company_placements:
            entry = stats.get(cp.company)
            if entry is None:
                entry = stats[cp.company] = {
                    "sector": cp.sector,
                    "hires": 0,
                    "package_sum": 0.0,
                    "min": cp.avg_package,
                    "max": cp.avg_package,
                    "colleges": {},
                    "branches": {},
                }
            entry["hires"] += cp.placements
            entry["package_sum"] += cp.avg_package * cp.placements
            entry["min"] = min(entry["min"], cp.avg_package)
            entry["max"] = max(entry["max"], cp.avg_package)
            entry["colleges"].setdefault(college_name, None)
            entry["branches"].setdefault(record.branch, None)

    insights = [
        CompanyInsight(
            company=company,
            sector=entry["sector"],
            total_hires=entry["hires"],
            avg_package=round_half_up(
                safe_ratio(entry["package_sum"], entry["hires"]), PACKAGE_DECIMALS
            ),
            min_package=entry["min"],
            max_package=entry["max"],
            college_count=len(entry["colleges"]),
            branch_count=len(entry["branches"]),
            colleges=list(entry["colleges"]),
            branches=list(entry["branches"]),
        )
        for company, entry in stats.items()
    ]

    if search_text:
        needle = search_text.lower()
        insights = [i for i in insights if needle in i.company.lower()]

    if sector and sector.lower() != "all":
        insights = [i for i in insights if i.sector == sector]

    return sorted(insights, key=lambda i: i.total_hires, reverse=True)


def sector_summary(insights: Sequence[CompanyInsight]) -> List[SectorSummary]:
    """
    Sector rollup of company insights.

    avg_package is the mean of the member companies' averages. demand is a
    normalized hiring volume capped at 100.
    """
    sectors: Dict[str, List[CompanyInsight]] = {}
    for insight in insights:
        sectors.setdefault(insight.sector, []).append(insight)

    summaries = []
    for sector, members in sectors.items():
        total_hires = sum(m.total_hires for m in members)
        summaries.append(SectorSummary(
            sector=sector,
            companies=len(members),
            total_hires=total_hires,
            avg_package=round_half_up(mean(m.avg_package for m in members), PACKAGE_DECIMALS),
            demand=min(MAX_SECTOR_DEMAND, total_hires * SECTOR_DEMAND_PER_HIRE),
        ))
    return summaries
