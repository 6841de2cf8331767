"""
Filter Engine

Builds composable predicates over placement records and colleges and applies
them to produce a filtered subset. Relative order is always preserved and
an empty result is a normal outcome.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from .contracts import College, FilterOptions, PlacementRecord

RecordPredicate = Callable[[PlacementRecord], bool]
CollegePredicate = Callable[[College], bool]

OptionsLike = Union[FilterOptions, Mapping[str, Any], None]


def coerce_options(options: OptionsLike) -> FilterOptions:
    """Accept FilterOptions, a raw mapping from the UI, or None."""
    if isinstance(options, FilterOptions):
        return options
    return FilterOptions.from_raw(options)


def college_search_fields(college: College) -> List[str]:
    """Fields searched by free text, in evaluation order."""
    return [
        college.name,
        college.location,
        college.type,
        college.placement_officer,
    ]


def matches_search(college: College, search_text: str) -> bool:
    """Case-insensitive substring match against any searchable field."""
    needle = search_text.lower()
    return any(needle in (field or "").lower() for field in college_search_fields(college))


def build_college_predicates(
    options: FilterOptions,
    include_id: bool = True,
) -> List[CollegePredicate]:
    predicates: List[CollegePredicate] = []

    if include_id and options.college_id is not None:
        predicates.append(lambda c: c.id == options.college_id)

    if options.college_type:
        predicates.append(lambda c: c.type == options.college_type)

    if options.search_text:
        predicates.append(lambda c: matches_search(c, options.search_text))

    return predicates


def build_record_predicates(
    options: FilterOptions,
    colleges: Optional[Mapping[int, College]] = None,
) -> List[RecordPredicate]:
    """
    Build record predicates for every option that is set.

    College-dependent options (type, search text) look the record's college
    up in the catalog; a record whose college is unknown does not match them.
    """
    predicates: List[RecordPredicate] = []
    colleges = colleges or {}

    # Exact matches
    if options.year is not None:
        predicates.append(lambda r: r.year == options.year)

    if options.college_id is not None:
        predicates.append(lambda r: r.college_id == options.college_id)

    if options.branch:
        predicates.append(lambda r: r.branch == options.branch)

    # Inclusive numeric bounds
    if options.min_cgpa is not None:
        predicates.append(lambda r: r.min_cgpa >= options.min_cgpa)

    if options.min_package is not None:
        predicates.append(lambda r: r.avg_package >= options.min_package)

    if options.max_package is not None:
        predicates.append(lambda r: r.avg_package <= options.max_package)

    # College catalog lookups
    college_predicates = build_college_predicates(options, include_id=False)
    if college_predicates:
        def college_matches(record: PlacementRecord) -> bool:
            college = colleges.get(record.college_id)
            if college is None:
                return False
            return all(p(college) for p in college_predicates)

        predicates.append(college_matches)

    return predicates


def filter_records(
    records: Sequence[PlacementRecord],
    options: OptionsLike = None,
    colleges: Optional[Mapping[int, College]] = None,
) -> List[PlacementRecord]:
    """
    Apply all recognised options to a record sequence.

    Args:
        records: Records in their original order
        options: FilterOptions or raw UI mapping
        colleges: College catalog keyed by id

    Returns:
        Matching records, order preserved
    """
    predicates = build_record_predicates(coerce_options(options), colleges)
    return [r for r in records if all(p(r) for p in predicates)]


def filter_colleges(
    colleges: Sequence[College],
    options: OptionsLike = None,
) -> List[College]:
    """Apply the college-level options (id, type, search text)."""
    predicates = build_college_predicates(coerce_options(options))
    return [c for c in colleges if all(p(c) for p in predicates)]
