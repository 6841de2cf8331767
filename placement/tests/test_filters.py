"""
Tests for the Filter Engine.

Covers exact-match options, "all"/blank handling, inclusive numeric bounds,
lenient numeric parsing and free-text college search.
"""

from placement.logic.contracts import FilterOptions
from placement.logic.filters import filter_colleges, filter_records, matches_search


def _keys(records):
    return [(r.college_id, r.branch, r.year) for r in records]


def test_no_options_returns_everything_in_order(store):
    result = filter_records(store.records, None, store.colleges)
    assert result == list(store.records)


def test_year_exact_match_preserves_order(store):
    result = filter_records(store.records, {"year": "2023"}, store.colleges)
    assert _keys(result) == [
        (1, "Computer Science", 2023),
        (2, "Computer Science", 2023),
        (1, "Mechanical", 2023),
    ]


def test_all_and_blank_categories_apply_no_filter(store):
    result = filter_records(
        store.records,
        {"collegeType": "all", "branch": "", "year": None},
        store.colleges,
    )
    assert len(result) == len(store.records)


def test_college_type_filter_uses_catalog(store):
    result = filter_records(store.records, {"collegeType": "Private"}, store.colleges)
    assert [r.college_id for r in result] == [2, 3]


def test_branch_filter(store):
    result = filter_records(store.records, {"branch": "Mechanical"}, store.colleges)
    assert _keys(result) == [(1, "Mechanical", 2023)]


def test_invalid_numeric_bounds_mean_no_bound(store):
    """Empty or non-numeric bounds must not behave like zero."""
    for raw in ({"minCGPA": ""}, {"minCGPA": "abc"}, {"maxPackage": "  "}, {"maxPackage": "n/a"}):
        result = filter_records(store.records, raw, store.colleges)
        assert len(result) == len(store.records), raw


def test_min_cgpa_bound_is_inclusive(store):
    result = filter_records(store.records, {"minCGPA": "7.5"}, store.colleges)
    assert _keys(result) == [(2, "Computer Science", 2023)]


def test_package_bounds_are_inclusive(store):
    result = filter_records(
        store.records, {"minPackage": "10", "maxPackage": 20}, store.colleges
    )
    assert [r.avg_package for r in result] == [10.0, 20.0]


def test_options_combine_with_and(store):
    result = filter_records(
        store.records,
        {"year": 2023, "collegeType": "Government", "branch": "Computer Science"},
        store.colleges,
    )
    assert _keys(result) == [(1, "Computer Science", 2023)]


def test_empty_result_is_valid(store):
    assert filter_records(store.records, {"year": 2020}, store.colleges) == []


def test_search_matches_any_field(store):
    """
    'bombay' is not in Beta College's location (Mumbai) but is in the
    placement officer's name, so the college matches.
    """
    beta = store.college(2)
    assert "bombay" not in beta.location.lower()
    assert matches_search(beta, "bombay")

    colleges = filter_colleges(list(store.colleges.values()), {"searchText": "bombay"})
    assert [c.id for c in colleges] == [2]

    records = filter_records(store.records, {"searchText": "BOMBAY"}, store.colleges)
    assert [r.college_id for r in records] == [2]


def test_search_covers_type_field(store):
    colleges = filter_colleges(list(store.colleges.values()), {"search": "government"})
    assert [c.id for c in colleges] == [1]


def test_unknown_college_never_matches_college_options(store):
    # Catalog without college 3
    partial = {k: v for k, v in store.colleges.items() if k != 3}
    result = filter_records(store.records, {"collegeType": "Private"}, partial)
    assert [r.college_id for r in result] == [2]


def test_from_raw_parsing():
    options = FilterOptions.from_raw({
        "year": "2023",
        "collegeType": "All",
        "branch": "Civil",
        "minCGPA": "",
        "minPackage": "abc",
        "maxPackage": "12.5",
        "searchText": "  ",
    })
    assert options.year == 2023
    assert options.college_type is None
    assert options.branch == "Civil"
    assert options.min_cgpa is None
    assert options.min_package is None
    assert options.max_package == 12.5
    assert options.search_text is None
