"""
Tests for the Trend Builder: ascending years, omitted gaps, college scope.
"""

from placement.logic.trends import build_trend


def test_college_trend_omits_missing_years(store):
    """Alpha Institute has records in 2021 and 2023 only."""
    points = build_trend(store.records, college_id=1)

    assert [p.year for p in points] == [2021, 2023]

    assert points[0].placement_rate == 50
    assert points[0].avg_package == 6.0
    assert points[0].highest_package == 12.0

    # 2023: CS 80/100 and Mechanical 20/40
    assert points[1].placement_rate == 71
    assert points[1].avg_package == 7.5
    assert points[1].highest_package == 30.0


def test_global_trend_is_ascending(store):
    points = build_trend(store.records)
    assert [p.year for p in points] == [2021, 2022, 2023]
    # 2022 only has the zero-student cohort
    assert points[1].placement_rate == 0


def test_trend_never_invents_years(store):
    input_years = {r.year for r in store.records}
    for college_id in (None, 1, 2, 3):
        for point in build_trend(store.records, college_id):
            assert point.year in input_years


def test_unknown_college_gives_empty_trend(store):
    assert build_trend(store.records, college_id=99) == []
