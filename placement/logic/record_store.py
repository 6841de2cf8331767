"""
Record Store

Holds the immutable placement records and reference catalogs for the
lifetime of the process. Catalog lookups are read-only mappings; an admin
import produces a new store instead of mutating the current one.
"""

import json
import logging
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .adapter import normalize_colleges, normalize_records, parse_admin_csv
from .constants import BRANCHES, SKILL_KEYWORDS
from .contracts import College, DataQualityIssue, PlacementRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Read-only container for records and catalogs.

    Components receive references to the same tuples and mappings; none of
    them may mutate what they are given.
    """

    def __init__(
        self,
        records: Iterable[PlacementRecord],
        colleges: Iterable[College],
        branches: Sequence[str] = BRANCHES,
        companies: Optional[Sequence[str]] = None,
        skill_keywords: Sequence[str] = SKILL_KEYWORDS,
        issues: Iterable[DataQualityIssue] = (),
    ):
        self._records: Tuple[PlacementRecord, ...] = tuple(records)
        self._colleges: Mapping[int, College] = MappingProxyType(
            {college.id: college for college in colleges}
        )
        self._branches: Tuple[str, ...] = tuple(branches)
        self._skill_keywords: Tuple[str, ...] = tuple(k.lower() for k in skill_keywords)
        self._issues: Tuple[DataQualityIssue, ...] = tuple(issues)

        if companies is None:
            companies = _companies_from_records(self._records)
        self._companies: Tuple[str, ...] = tuple(companies)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def records(self) -> Tuple[PlacementRecord, ...]:
        return self._records

    @property
    def colleges(self) -> Mapping[int, College]:
        return self._colleges

    @property
    def branches(self) -> Tuple[str, ...]:
        return self._branches

    @property
    def companies(self) -> Tuple[str, ...]:
        return self._companies

    @property
    def skill_keywords(self) -> Tuple[str, ...]:
        return self._skill_keywords

    @property
    def issues(self) -> Tuple[DataQualityIssue, ...]:
        return self._issues

    def college(self, college_id: int) -> Optional[College]:
        """Catalog lookup. Unknown ids return None."""
        return self._colleges.get(college_id)

    def college_name(self, college_id: int) -> str:
        college = self.college(college_id)
        return college.name if college else f"College {college_id}"

    def __len__(self) -> int:
        return len(self._records)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RecordStore":
        """
        Build a store from a dataset payload.

        Expected keys: 'colleges', 'placements', and optionally 'branches',
        'companies', 'skillKeywords'.
        """
        colleges = normalize_colleges(payload.get("colleges", []))
        branches = payload.get("branches") or BRANCHES
        records, issues = normalize_records(
            payload.get("placements", []),
            branches=branches,
            college_ids=[c.id for c in colleges],
        )
        return cls(
            records=records,
            colleges=colleges,
            branches=branches,
            companies=payload.get("companies"),
            skill_keywords=payload.get("skillKeywords") or payload.get("skill_keywords") or SKILL_KEYWORDS,
            issues=issues,
        )

    @classmethod
    def from_json_file(cls, path: str) -> "RecordStore":
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        store = cls.from_dict(payload)
        logger.info(f"📂 Loaded {len(store)} records and {len(store.colleges)} colleges from {path}")
        return store

    def with_imported_csv(self, text: str, replace: bool = False) -> "RecordStore":
        """
        Admin import: return a new store with the CSV rows added.

        Args:
            text: CSV content in the admin export layout
            replace: If True, imported rows replace the current records

        Returns:
            A new RecordStore; this one is left untouched
        """
        imported, issues = parse_admin_csv(text, self._colleges.values(), self._branches)
        records: List[PlacementRecord] = imported if replace else list(self._records) + imported
        all_issues = list(issues) if replace else list(self._issues) + list(issues)

        logger.info(f"📥 Imported {len(imported)} records from CSV (replace={replace})")

        return RecordStore(
            records=records,
            colleges=self._colleges.values(),
            branches=self._branches,
            companies=None,
            skill_keywords=self._skill_keywords,
            issues=all_issues,
        )


def _companies_from_records(records: Iterable[PlacementRecord]) -> List[str]:
    """Distinct company names in first-seen order."""
    seen = {}
    for record in records:
        for cp in record.company_placements:
            seen.setdefault(cp.company, None)
    return list(seen)
