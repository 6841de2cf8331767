"""
Placement Predictor

Deterministic heuristic that combines a student profile with the matching
historical subset to estimate placement probability and expected package.
This is an explicit rule table, not a trained model.
"""

import logging
from typing import Callable, List, Mapping, Optional, Sequence, Tuple, Union

from .constants import (
    BASE_SCORE,
    CERTIFICATION_ADJUSTMENTS,
    CGPA_ADJUSTMENTS,
    CGPA_BELOW_CUTOFF_PENALTY,
    INTERNSHIP_ADJUSTMENTS,
    LOW_CGPA_THRESHOLD,
    MAX_PROBABILITY,
    MIN_PROBABILITY,
    MIN_PROJECTS,
    MIN_SKILLS_TEXT_LENGTH,
    PACKAGE_DECIMALS,
    PROJECT_ADJUSTMENTS,
    RECENCY_START_YEAR,
    RECOMMENDATION_TEXTS,
    SKILL_KEYWORDS,
    SKILL_MATCH_POINTS,
    Severity,
)
from .contracts import (
    College,
    FilterOptions,
    InsufficientData,
    PlacementPrediction,
    PlacementRecord,
    Recommendation,
    StudentProfile,
)
from .filters import filter_records
from .stats import mean, round_half_up, safe_ratio

logger = logging.getLogger(__name__)

PredictionResult = Union[PlacementPrediction, InsufficientData]


# =============================================================================
# HISTORICAL BASELINE
# =============================================================================

def historical_subset(
    records: Sequence[PlacementRecord],
    college_id: int,
    branch: str,
    since_year: int = RECENCY_START_YEAR,
) -> List[PlacementRecord]:
    """Records for the college and branch from `since_year` onwards, in input order."""
    options = FilterOptions(college_id=college_id, branch=branch)
    return [r for r in filter_records(records, options) if r.year >= since_year]


def baseline_statistics(history: Sequence[PlacementRecord]) -> Tuple[float, float, float]:
    """
    Baselines over a non-empty history.

    Returns:
        (avg_placement_rate, avg_package, min_cgpa)
    """
    avg_placement_rate = mean(100 * safe_ratio(r.offers, r.total_students) for r in history)
    avg_package = mean(r.avg_package for r in history)
    min_cgpa = min(r.min_cgpa for r in history)
    return avg_placement_rate, avg_package, min_cgpa


# =============================================================================
# SCORE ADJUSTMENTS
# =============================================================================

def _tiered(count: int, tiers: Sequence[Tuple[int, int]]) -> int:
    for minimum, points in tiers:
        if count >= minimum:
            return points
    return 0


def score_cgpa(profile: StudentProfile, min_cgpa: float) -> int:
    """Compare CGPA against the historical cutoff."""
    for offset, points in CGPA_ADJUSTMENTS:
        if profile.cgpa >= min_cgpa + offset:
            return points
    return CGPA_BELOW_CUTOFF_PENALTY


def score_projects(profile: StudentProfile) -> int:
    return _tiered(profile.projects, PROJECT_ADJUSTMENTS)


def score_internships(profile: StudentProfile) -> int:
    return _tiered(profile.internships, INTERNSHIP_ADJUSTMENTS)


def score_certifications(profile: StudentProfile) -> int:
    return _tiered(profile.certifications, CERTIFICATION_ADJUSTMENTS)


def matched_skills(skills: str, keywords: Sequence[str] = SKILL_KEYWORDS) -> List[str]:
    """Keywords contained (case-insensitively) in the free-text skills."""
    text = skills.lower()
    return [k for k in keywords if k.lower() in text]


def score_skills(profile: StudentProfile, keywords: Sequence[str] = SKILL_KEYWORDS) -> int:
    # No cap here; the final clamp bounds the total
    return len(matched_skills(profile.skills, keywords)) * SKILL_MATCH_POINTS


def clamp_probability(score: int) -> int:
    return max(MIN_PROBABILITY, min(MAX_PROBABILITY, score))


def compute_score(
    profile: StudentProfile,
    min_cgpa: float,
    keywords: Sequence[str] = SKILL_KEYWORDS,
) -> int:
    """Base score plus every additive adjustment, clamped to [5, 95]."""
    adjustments: List[Callable[[], int]] = [
        lambda: score_cgpa(profile, min_cgpa),
        lambda: score_projects(profile),
        lambda: score_internships(profile),
        lambda: score_certifications(profile),
        lambda: score_skills(profile, keywords),
    ]
    raw_score = BASE_SCORE + sum(adjust() for adjust in adjustments)
    return clamp_probability(raw_score)


# =============================================================================
# RECOMMENDATIONS
# =============================================================================

def generate_recommendations(profile: StudentProfile) -> List[Recommendation]:
    """
    Independent threshold rules evaluated in a fixed order.
    A closing tip is always appended.
    """
    recommendations: List[Recommendation] = []

    if profile.cgpa < LOW_CGPA_THRESHOLD:
        recommendations.append(Recommendation(
            severity=Severity.WARNING, text=RECOMMENDATION_TEXTS["low_cgpa"]
        ))

    if profile.projects < MIN_PROJECTS:
        recommendations.append(Recommendation(
            severity=Severity.INFO, text=RECOMMENDATION_TEXTS["few_projects"]
        ))

    if profile.internships == 0:
        recommendations.append(Recommendation(
            severity=Severity.INFO, text=RECOMMENDATION_TEXTS["no_internships"]
        ))

    if len(profile.skills) < MIN_SKILLS_TEXT_LENGTH:
        recommendations.append(Recommendation(
            severity=Severity.INFO, text=RECOMMENDATION_TEXTS["thin_skills"]
        ))

    recommendations.append(Recommendation(
        severity=Severity.SUCCESS, text=RECOMMENDATION_TEXTS["closing_tip"]
    ))

    return recommendations


# =============================================================================
# ENTRY POINT
# =============================================================================

def predict(
    profile: StudentProfile,
    records: Sequence[PlacementRecord],
    colleges: Optional[Mapping[int, College]] = None,
    keywords: Sequence[str] = SKILL_KEYWORDS,
) -> PredictionResult:
    """
    Estimate placement probability for a student.

    Args:
        profile: Student's academic profile
        records: Full record set; the recency-window subset is selected here
        colleges: Catalog used for the college display name
        keywords: Skill vocabulary

    Returns:
        PlacementPrediction, or InsufficientData when no history matches
    """
    history = historical_subset(records, profile.college_id, profile.branch)

    if not history:
        logger.info(
            f"No history for college {profile.college_id} / {profile.branch} since {RECENCY_START_YEAR}"
        )
        return InsufficientData(
            college_id=profile.college_id,
            branch=profile.branch,
            since_year=RECENCY_START_YEAR,
        )

    avg_placement_rate, avg_package, min_cgpa = baseline_statistics(history)
    probability = compute_score(profile, min_cgpa, keywords)

    college = (colleges or {}).get(profile.college_id)

    return PlacementPrediction(
        probability=probability,
        expected_package=round_half_up(avg_package * (probability / 100), PACKAGE_DECIMALS),
        avg_college_placement=int(round_half_up(avg_placement_rate)),
        recommendations=generate_recommendations(profile),
        college_name=college.name if college else "",
        branch=profile.branch,
        matched_records=len(history),
    )
