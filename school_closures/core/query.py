"""
Dashboard queries over the full record set: filtering, summary totals and filter options.
Filters are always evaluated against the complete, unfiltered sequence.
"""

from typing import List, Sequence

from .config import ALL
from .schema import ClosureRecord, FilterSpec, Summary


def _matches_search(record: ClosureRecord, term: str) -> bool:
    if not term:
        return True
    return (term in record.schoolName.lower()
            or term in record.district.lower()
            or term in record.village.lower())


def _matches_year(record: ClosureRecord, year_filter) -> bool:
    if year_filter == ALL:
        return True
    return str(record.yearOfClosure) == str(year_filter).strip()


def _matches_district(record: ClosureRecord, district_filter: str) -> bool:
    return district_filter == ALL or record.district == district_filter


def apply_filter(records: Sequence[ClosureRecord], spec: FilterSpec = None) -> List[ClosureRecord]:
    """
    Return the records matching every filter predicate, in input order.

    Search is a case-insensitive substring match on school name, district or
    village. Year and district filters are exact matches unless set to "all".
    """
    if spec is None:
        spec = FilterSpec()
    term = spec.searchTerm.lower()

    return [
        record for record in records
        if _matches_search(record, term)
        and _matches_year(record, spec.yearFilter)
        and _matches_district(record, spec.districtFilter)
    ]


def summarize(records: Sequence[ClosureRecord]) -> Summary:
    """Totals for the summary cards. Pass the full record set, not a filtered view."""
    return Summary(
        totalSchools=len(records),
        districtsAffected=len({record.district for record in records}),
        totalStudentsAffected=sum(record.studentsBeforeClosure for record in records),
    )


def distinct_districts(records: Sequence[ClosureRecord]) -> List[str]:
    return sorted({record.district for record in records})


def distinct_years(records: Sequence[ClosureRecord]) -> List[int]:
    """Years present in the data, most recent first."""
    return sorted({record.yearOfClosure for record in records}, reverse=True)
