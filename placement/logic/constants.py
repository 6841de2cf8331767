"""
Placement Analytics Constants

Defines catalogs, scoring weights, thresholds, bucket ranges and export
layouts used by the analytics core.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

# =============================================================================
# CATALOGS
# =============================================================================

BRANCHES: Tuple[str, ...] = (
    "Computer Science",
    "Information Technology",
    "Electronics",
    "Electrical",
    "Mechanical",
    "Civil",
    "Chemical",
)

MIN_YEAR = 2020
MAX_YEAR = 2024

# Canonical skill keywords recognised by the predictor
SKILL_KEYWORDS: Tuple[str, ...] = (
    "python",
    "java",
    "react",
    "javascript",
    "machine learning",
    "data science",
)

# Values that mean "no filter" for categorical options
ALL_VALUES = ("", "all")


class CollegeType(str, Enum):
    """Ownership type of a college."""
    GOVERNMENT = "Government"
    PRIVATE = "Private"


class Tier(str, Enum):
    """Coarse recruiter classification."""
    TIER_1 = "Tier 1"
    TIER_2 = "Tier 2"
    TIER_3 = "Tier 3"


class GroupKey(str, Enum):
    """Grouping dimensions supported by the aggregator."""
    COLLEGE = "college"
    BRANCH = "branch"
    SECTOR = "sector"


class SortPolicy(str, Enum):
    """Sort orders for aggregated views."""
    PLACEMENT_RATE = "placementRate"
    AVG_PACKAGE = "avgPackage"
    TOTAL_STUDENTS = "totalStudents"
    ALPHABETICAL = "alphabetical"


class Severity(str, Enum):
    """Presentation tag for predictor recommendations."""
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


# =============================================================================
# PREDICTOR CONFIGURATION
# =============================================================================

# Only records from this year onwards feed the predictor baseline
RECENCY_START_YEAR = 2022

BASE_SCORE = 50
MIN_PROBABILITY = 5
MAX_PROBABILITY = 95

# (cgpa offset over historical minimum, score adjustment), checked in order
CGPA_ADJUSTMENTS: List[Tuple[float, int]] = [
    (1.0, 25),
    (0.0, 15),
    (-0.5, 5),
]
CGPA_BELOW_CUTOFF_PENALTY = -20

# (minimum count, score adjustment), checked in order
PROJECT_ADJUSTMENTS: List[Tuple[int, int]] = [(3, 15), (1, 8)]
INTERNSHIP_ADJUSTMENTS: List[Tuple[int, int]] = [(2, 12), (1, 6)]
CERTIFICATION_ADJUSTMENTS: List[Tuple[int, int]] = [(3, 10), (1, 5)]

SKILL_MATCH_POINTS = 3

# Recommendation thresholds
LOW_CGPA_THRESHOLD = 7.5
MIN_PROJECTS = 2
MIN_SKILLS_TEXT_LENGTH = 10

RECOMMENDATION_TEXTS: Dict[str, str] = {
    "low_cgpa": "Focus on improving academic performance. Many companies have CGPA cutoffs around 7.5-8.0",
    "few_projects": "Build more projects showcasing your technical skills. Aim for at least 2-3 substantial projects",
    "no_internships": "Try to get internship experience. It significantly boosts placement chances",
    "thin_skills": "Develop in-demand technical skills like programming languages, frameworks, and tools",
    "closing_tip": "Practice coding problems regularly and participate in competitive programming",
}

# =============================================================================
# DISTRIBUTION BUCKETS
# =============================================================================

# (label, min inclusive, max exclusive or None for open-ended)
PACKAGE_RANGES: List[Tuple[str, float, Optional[float]]] = [
    ("0-10 LPA", 0, 10),
    ("10-20 LPA", 10, 20),
    ("20-50 LPA", 20, 50),
    ("50-100 LPA", 50, 100),
    ("100+ LPA", 100, None),
]

# (label, min inclusive, max inclusive) on integer placement rates
PERFORMANCE_RANGES: List[Tuple[str, int, int]] = [
    ("Excellent (90-100%)", 90, 100),
    ("Good (75-89%)", 75, 89),
    ("Average (60-74%)", 60, 74),
    ("Below Average (<60%)", 0, 59),
]

# =============================================================================
# RANKING / OUTPUT CONFIGURATION
# =============================================================================

DEFAULT_TOP_RECRUITERS = 15
MAX_SECTOR_DEMAND = 100
SECTOR_DEMAND_PER_HIRE = 2

PACKAGE_DECIMALS = 2
UNKNOWN_LABEL = "Unknown"
MISSING_RECRUITER = "N/A"

# =============================================================================
# CSV EXPORT LAYOUTS
# =============================================================================

COLLEGE_RANKING_COLUMNS: List[str] = [
    "College",
    "Type",
    "Location",
    "TotalStudents",
    "PlacedStudents",
    "PlacementRate",
    "AvgPackage",
    "HighestPackage",
    "TopRecruiter",
]

COLLEGE_RECORD_COLUMNS: List[str] = [
    "College",
    "Branch",
    "Year",
    "TotalStudents",
    "PlacedStudents",
    "PlacementRate",
    "AvgPackage",
    "HighestPackage",
]

ADMIN_EXPORT_COLUMNS: List[str] = [
    "College",
    "Branch",
    "Year",
    "Offers",
    "Avg Package",
    "Highest Package",
    "Min CGPA",
    "Total Students",
    "Placed Students",
]
