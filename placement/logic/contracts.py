"""
Data Contracts for the Placement Analytics Core

Defines Pydantic models for the raw placement data (input), the filter and
profile inputs, and every derived view returned to dashboard consumers.
These contracts are the API boundary for the analytics core.
"""

from typing import Any, List, Mapping, Optional
from pydantic import BaseModel, Field

from .constants import ALL_VALUES, CollegeType, Severity, Tier
from .stats import parse_optional_float, parse_optional_int


# =============================================================================
# RAW DATA CONTRACTS
# =============================================================================

class CompanyPlacement(BaseModel):
    """Per-company hiring detail nested inside a placement record."""
    company: str
    sector: str
    tier: Tier
    placements: int = Field(ge=0)
    avg_package: float = Field(ge=0.0)
    highest_package: float = Field(ge=0.0)

    class Config:
        use_enum_values = True
        frozen = True


class PlacementRecord(BaseModel):
    """
    One (college, branch, year) observation.
    Monetary figures are in LPA.
    """
    college_id: int
    branch: str
    year: int

    # Cohort
    total_students: int = Field(ge=0)
    placed_students: int = Field(ge=0)
    offers: int = Field(ge=0)

    # Packages and cutoffs
    avg_package: float = Field(ge=0.0)
    highest_package: float = Field(ge=0.0)
    min_cgpa: float = Field(ge=0.0)

    # Other outcomes
    internship_offers: int = Field(default=0, ge=0)
    higher_studies: int = Field(default=0, ge=0)

    company_placements: List[CompanyPlacement] = Field(default_factory=list)

    class Config:
        frozen = True


class College(BaseModel):
    """Reference catalog entry for a college."""
    id: int
    name: str
    type: CollegeType
    location: str = ""
    ranking: int = 0
    established: Optional[int] = None
    total_students: int = 0
    placement_officer: str = ""

    class Config:
        use_enum_values = True
        frozen = True


class DataQualityIssue(BaseModel):
    """Advisory problem found while loading a record. Never fatal."""
    index: int
    college_id: Optional[int] = None
    branch: Optional[str] = None
    year: Optional[int] = None
    message: str


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class FilterOptions(BaseModel):
    """
    Recognised filter options. Every option that is None applies no filter.
    All options combine with logical AND.
    """
    year: Optional[int] = None
    college_id: Optional[int] = None
    college_type: Optional[str] = None
    branch: Optional[str] = None
    min_cgpa: Optional[float] = None
    min_package: Optional[float] = None
    max_package: Optional[float] = None
    search_text: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]] = None) -> "FilterOptions":
        """
        Build options from loosely-typed UI input.

        Accepts camelCase or snake_case keys. Blank or "all" categorical
        values and unparsable numbers are treated as "no filter".
        """
        raw = dict(raw or {})

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in raw:
                    return raw[key]
            return None

        def category(value: Any) -> Optional[str]:
            if value is None:
                return None
            text = str(value).strip()
            if text.lower() in ALL_VALUES:
                return None
            return text

        search = pick("searchText", "search_text", "search")
        search = str(search).strip() if search is not None else ""

        return cls(
            year=parse_optional_int(pick("year")),
            college_id=parse_optional_int(pick("collegeId", "college_id")),
            college_type=category(pick("collegeType", "college_type", "type")),
            branch=category(pick("branch")),
            min_cgpa=parse_optional_float(pick("minCGPA", "min_cgpa")),
            min_package=parse_optional_float(pick("minPackage", "min_package")),
            max_package=parse_optional_float(pick("maxPackage", "max_package")),
            search_text=search or None,
        )


class StudentProfile(BaseModel):
    """
    Input contract for the placement predictor.
    Represents a student's academic profile.
    """
    college_id: int
    branch: str
    cgpa: float = Field(ge=0.0, le=10.0)
    projects: int = Field(default=0, ge=0)
    internships: int = Field(default=0, ge=0)
    certifications: int = Field(default=0, ge=0)
    skills: str = ""


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class AggregatedView(BaseModel):
    """Derived metrics for one group (college, branch or sector)."""
    group_key: str
    name: str
    placement_rate: int = Field(ge=0, le=100)
    avg_package: float = 0.0
    highest_package: float = 0.0
    total_students: int = 0
    placed_students: int = 0
    total_companies: int = 0
    top_recruiter: Optional[str] = None


class TrendPoint(BaseModel):
    """Aggregate metrics for one year."""
    year: int
    placement_rate: int = Field(ge=0, le=100)
    avg_package: float = 0.0
    highest_package: float = 0.0


class RecruiterSummary(BaseModel):
    """One row of the recruiter leaderboard."""
    company: str
    sector: str
    tier: str
    total_placements: int
    avg_package: float
    highest_package: float


class HeadlineStats(BaseModel):
    """Single aggregate statistic set for a record subset."""
    total_records: int = 0
    total_colleges: int = 0
    total_branches: int = 0
    total_students: int = 0
    placed_students: int = 0
    total_offers: int = 0
    placement_rate: int = 0
    avg_package: float = 0.0
    highest_package: float = 0.0
    total_companies: int = 0


class TypeBreakdown(BaseModel):
    """College-type level rollup of per-college views."""
    type: str
    colleges: int
    total_students: int
    placed_students: int
    avg_placement_rate: int
    avg_package: float


class PackageBucket(BaseModel):
    label: str
    min_package: float
    max_package: Optional[float] = None
    count: int


class PerformanceBucket(BaseModel):
    label: str
    min_rate: int
    max_rate: int
    count: int


class GrowthMetrics(BaseModel):
    """Year-over-year change in mean placement rate and mean package."""
    year: int
    placement_growth: float = 0.0
    package_growth: float = 0.0


class CompanyInsight(BaseModel):
    """Cross-college statistics for a single recruiter."""
    company: str
    sector: str
    total_hires: int
    avg_package: float
    min_package: float
    max_package: float
    college_count: int
    branch_count: int
    colleges: List[str] = Field(default_factory=list)
    branches: List[str] = Field(default_factory=list)


class SectorSummary(BaseModel):
    sector: str
    companies: int
    total_hires: int
    avg_package: float
    demand: int = Field(ge=0, le=100)


class Recommendation(BaseModel):
    """Advisory text attached to a prediction."""
    severity: Severity
    text: str

    class Config:
        use_enum_values = True


class PlacementPrediction(BaseModel):
    """
    Output contract for the predictor when a historical baseline exists.
    """
    probability: int = Field(ge=5, le=95)
    expected_package: float
    avg_college_placement: int
    recommendations: List[Recommendation] = Field(default_factory=list)

    # Presentation context
    college_name: str = ""
    branch: str = ""
    matched_records: int = 0


class InsufficientData(BaseModel):
    """
    Terminal predictor state: no history for the college/branch in the
    recency window. Distinct from any score.
    """
    college_id: int
    branch: str
    since_year: int
    reason: str = "No placement history for this college and branch"
