"""
Shared fixtures: a small hand-computed dataset.

Colleges
    1 Alpha Institute  Government  Pune
    2 Beta College     Private     Mumbai  (officer: Mr. Bombay Rao)
    3 Gamma Tech       Private     Delhi

Records (index: college, branch, year, total/placed/offers, avg, high, minCGPA)
    0: 1 CS   2023  100/80/85  10.0  30.0  7.0   Microsoft 5@10, Infosys 10@8
    1: 2 CS   2023   50/50/50  20.0  40.0  7.5   Microsoft 3@20
    2: 1 CS   2021   60/30/30   6.0  12.0  6.5   Infosys 10@6
    3: 1 Mech 2023   40/20/20   5.0   9.0  6.0   Tata Motors 20@5
    4: 3 CS   2022    0/0/0     0.0   0.0  0.0   (none)
"""

import copy

import pytest

from placement.logic.engine import PlacementAnalytics
from placement.logic.record_store import RecordStore


COLLEGES = [
    {"id": 1, "name": "Alpha Institute", "type": "Government", "location": "Pune",
     "ranking": 12, "established": 1960, "totalStudents": 3000, "placementOfficer": "Dr. Anita Rao"},
    {"id": 2, "name": "Beta College", "type": "Private", "location": "Mumbai",
     "ranking": 40, "established": 1995, "totalStudents": 1500, "placementOfficer": "Mr. Bombay Rao"},
    {"id": 3, "name": "Gamma Tech", "type": "Private", "location": "Delhi",
     "ranking": 75, "established": 2008, "totalStudents": 900, "placementOfficer": "Ms. Priya Nair"},
]


def _cp(company, sector, tier, placements, avg, high):
    return {
        "company": company, "sector": sector, "tier": tier,
        "placements": placements, "avgPackage": avg, "highestPackage": high,
    }


PLACEMENTS = [
    {
        "collegeId": 1, "branch": "Computer Science", "year": 2023,
        "totalStudents": 100, "placedStudents": 80, "offers": 85,
        "avgPackage": 10.0, "highestPackage": 30.0, "minCGPA": 7.0,
        "internshipOffers": 40, "higherStudies": 5,
        "companyPlacements": [
            _cp("Microsoft", "Technology", "Tier 1", 5, 10.0, 12.0),
            _cp("Infosys", "IT Services", "Tier 3", 10, 8.0, 9.0),
        ],
    },
    {
        "collegeId": 2, "branch": "Computer Science", "year": 2023,
        "totalStudents": 50, "placedStudents": 50, "offers": 50,
        "avgPackage": 20.0, "highestPackage": 40.0, "minCGPA": 7.5,
        "companyPlacements": [
            _cp("Microsoft", "Technology", "Tier 1", 3, 20.0, 25.0),
        ],
    },
    {
        "collegeId": 1, "branch": "Computer Science", "year": 2021,
        "totalStudents": 60, "placedStudents": 30, "offers": 30,
        "avgPackage": 6.0, "highestPackage": 12.0, "minCGPA": 6.5,
        "companyPlacements": [
            _cp("Infosys", "IT Services", "Tier 3", 10, 6.0, 7.0),
        ],
    },
    {
        "collegeId": 1, "branch": "Mechanical", "year": 2023,
        "totalStudents": 40, "placedStudents": 20, "offers": 20,
        "avgPackage": 5.0, "highestPackage": 9.0, "minCGPA": 6.0,
        "companyPlacements": [
            _cp("Tata Motors", "Automotive", "Tier 2", 20, 5.0, 6.0),
        ],
    },
    {
        "collegeId": 3, "branch": "Computer Science", "year": 2022,
        "totalStudents": 0, "placedStudents": 0, "offers": 0,
        "avgPackage": 0.0, "highestPackage": 0.0, "minCGPA": 0.0,
        "companyPlacements": [],
    },
]


@pytest.fixture
def payload():
    return {
        "colleges": copy.deepcopy(COLLEGES),
        "placements": copy.deepcopy(PLACEMENTS),
    }


@pytest.fixture
def store(payload):
    return RecordStore.from_dict(payload)


@pytest.fixture
def analytics(store):
    return PlacementAnalytics(store)
