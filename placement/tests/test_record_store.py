"""
Tests for the data adapter and Record Store: normalization, validation,
advisory data quality checks and admin CSV import.
"""

import copy
import json

import pytest

from placement.logic.adapter import (
    RecordValidationError,
    normalize_record,
    to_snake_case,
)
from placement.logic.record_store import RecordStore


def _with_first_record(payload, **record_overrides):
    payload = copy.deepcopy(payload)
    payload["placements"][0].update(record_overrides)
    return payload


def test_camel_case_keys_are_normalized(store):
    record = store.records[0]
    assert record.college_id == 1
    assert record.min_cgpa == 7.0
    assert record.internship_offers == 40
    assert record.company_placements[0].avg_package == 10.0

    alpha = store.college(1)
    assert alpha.placement_officer == "Dr. Anita Rao"
    assert alpha.total_students == 3000


def test_to_snake_case():
    assert to_snake_case("minCGPA") == "min_cgpa"
    assert to_snake_case("companyPlacements") == "company_placements"
    assert to_snake_case("total_students") == "total_students"


def test_store_preserves_input_order(store):
    assert [(r.college_id, r.year) for r in store.records] == [
        (1, 2023), (2, 2023), (1, 2021), (1, 2023), (3, 2022),
    ]
    assert len(store) == 5


def test_companies_and_branches_default(store):
    assert store.companies == ("Microsoft", "Infosys", "Tata Motors")
    assert "Computer Science" in store.branches
    assert "python" in store.skill_keywords


def test_unknown_college_lookup(store):
    assert store.college(99) is None
    assert store.college_name(99) == "College 99"


def test_catalogs_are_read_only(store):
    with pytest.raises(TypeError):
        store.colleges[4] = store.college(1)


@pytest.mark.parametrize("overrides,fragment", [
    ({"branch": "Aerospace"}, "branch catalog"),
    ({"year": 2019}, "outside"),
    ({"year": 2025}, "outside"),
    ({"placedStudents": 120, "offers": 120}, "exceed total students"),
    ({"totalStudents": None}, "missing required fields"),
    ({"collegeId": 42}, "unknown college id"),
])
def test_invalid_records_fail_loading(payload, overrides, fragment):
    with pytest.raises(RecordValidationError) as exc_info:
        RecordStore.from_dict(_with_first_record(payload, **overrides))
    assert fragment in str(exc_info.value)
    assert exc_info.value.index == 0


def test_validation_error_is_a_value_error(payload):
    with pytest.raises(ValueError):
        RecordStore.from_dict(_with_first_record(payload, year="not a year"))


def test_duplicate_college_ids_fail(payload):
    payload["colleges"].append(dict(payload["colleges"][0]))
    with pytest.raises(RecordValidationError):
        RecordStore.from_dict(payload)


def test_offers_default_to_placed_students(payload):
    raw = dict(payload["placements"][1])
    raw.pop("offers")
    record, issues = normalize_record(raw, 0)
    assert record.offers == 50
    assert issues == []


def test_data_quality_issues_are_not_fatal(payload, caplog):
    store = RecordStore.from_dict(
        _with_first_record(payload, placedStudents=10, offers=10, avgPackage=50.0)
    )

    # Nested placements (15) above placed students (10), avg above highest (30)
    assert len(store) == 5
    assert len(store.issues) == 2
    assert all(issue.index == 0 for issue in store.issues)
    assert "Data quality" in caplog.text


def test_from_json_file(tmp_path, payload):
    path = tmp_path / "placements.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    store = RecordStore.from_json_file(str(path))
    assert len(store) == 5
    assert len(store.colleges) == 3


def test_bundled_sample_dataset_loads():
    from placement.config import DEFAULT_DATA_PATH

    store = RecordStore.from_json_file(DEFAULT_DATA_PATH)
    assert len(store) > 0
    assert len(store.colleges) > 0


ADMIN_CSV = """College,Branch,Year,Offers,Avg Package,Highest Package,Min CGPA,Total Students
Gamma Tech,Computer Science,2024,45,7.5,15,6.8,60

"""


def test_csv_import_returns_new_store(store):
    updated = store.with_imported_csv(ADMIN_CSV)

    assert len(store) == 5
    assert len(updated) == 6

    imported = updated.records[-1]
    assert imported.college_id == 3
    assert imported.year == 2024
    assert imported.offers == 45
    assert imported.placed_students == 45
    assert imported.min_cgpa == 6.8
    assert imported.company_placements == []


def test_csv_import_replace(store):
    updated = store.with_imported_csv(ADMIN_CSV, replace=True)
    assert len(updated) == 1
    assert dict(updated.colleges) == dict(store.colleges)


def test_csv_import_unknown_college(store):
    text = "College,Branch,Year,Offers,Avg Package,Highest Package,Min CGPA,Total Students\n" \
           "Nowhere,Civil,2024,1,1,1,6,2\n"
    with pytest.raises(RecordValidationError):
        store.with_imported_csv(text)


def test_admin_export_reimports(store, analytics):
    reimported = store.with_imported_csv(analytics.export_admin_records(), replace=True)

    assert len(reimported) == len(store)
    for original, copy_ in zip(store.records, reimported.records):
        assert copy_.college_id == original.college_id
        assert copy_.branch == original.branch
        assert copy_.year == original.year
        assert copy_.offers == original.offers
        assert copy_.avg_package == original.avg_package
        assert copy_.min_cgpa == original.min_cgpa
        assert copy_.placed_students == original.placed_students
        assert copy_.total_students == original.total_students


def test_bundled_dataset_admin_export_reimports():
    """Offers can exceed the cohort size; the placed count must survive."""
    from placement.config import DEFAULT_DATA_PATH
    from placement.logic.engine import PlacementAnalytics

    store = RecordStore.from_json_file(DEFAULT_DATA_PATH)
    reimported = store.with_imported_csv(
        PlacementAnalytics(store).export_admin_records(), replace=True
    )

    assert len(reimported) == len(store)
    for original, copy_ in zip(store.records, reimported.records):
        assert copy_.offers == original.offers
        assert copy_.placed_students == original.placed_students


def test_csv_without_placed_column_caps_offers_at_total(store):
    text = "College,Branch,Year,Offers,Avg Package,Highest Package,Min CGPA,Total Students\n" \
           "Gamma Tech,Computer Science,2024,75,7.5,15,6.8,60\n"
    imported = store.with_imported_csv(text, replace=True).records[0]

    assert imported.offers == 75
    assert imported.placed_students == 60


def test_csv_placed_column_wins_over_offers(store):
    text = "College,Branch,Year,Offers,Avg Package,Highest Package,Min CGPA,Total Students,Placed Students\n" \
           "Gamma Tech,Computer Science,2024,75,7.5,15,6.8,60,52\n"
    imported = store.with_imported_csv(text, replace=True).records[0]

    assert imported.offers == 75
    assert imported.placed_students == 52
