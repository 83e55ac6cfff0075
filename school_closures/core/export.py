"""
CSV and JSON serialization of closure records for download.
"""

import json
from datetime import date
from typing import List, Sequence

from . import config as config_module
from .errors import EmptyExportError
from .schema import ClosureRecord

CSV_HEADERS = [
    "School Name", "District", "Village", "Year of Closure",
    "Reason for Closure", "Students Before Closure",
    "Where Students Go", "Community Opinion", "Date Added",
]

MEDIA_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
}


def _quote(value: str, escape_quotes: bool) -> str:
    if escape_quotes:
        value = value.replace('"', '""')
    return f'"{value}"'


def _csv_row(record: ClosureRecord, escape_quotes: bool) -> str:
    return ",".join([
        _quote(record.schoolName, escape_quotes),
        _quote(record.district, escape_quotes),
        _quote(record.village, escape_quotes),
        str(record.yearOfClosure),
        _quote(record.reasonForClosure, escape_quotes),
        str(record.studentsBeforeClosure),
        _quote(record.whereStudentsGo, escape_quotes),
        _quote(record.communityOpinion, escape_quotes),
        _quote(record.dateAdded.isoformat(), escape_quotes),
    ])


def to_csv(records: Sequence[ClosureRecord], escape_quotes: bool = None) -> str:
    """
    Serialize records as CSV text with a fixed header row.

    Text fields are wrapped in double quotes and numbers are left bare.
    Embedded quotes are written verbatim unless escape_quotes is set (or
    CLOSURES_CSV_ESCAPE_QUOTES is enabled), in which case they are doubled.

    Raises:
        EmptyExportError: records is empty
    """
    if not records:
        raise EmptyExportError("csv")
    if escape_quotes is None:
        escape_quotes = config_module.CSV_ESCAPE_QUOTES

    lines = [",".join(CSV_HEADERS)]
    lines.extend(_csv_row(record, escape_quotes) for record in records)
    return "\n".join(lines)


def to_json(records: Sequence[ClosureRecord]) -> str:
    """Pretty-printed JSON array of records using the stored field names."""
    if not records:
        raise EmptyExportError("json")
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def parse_json(text: str) -> List[ClosureRecord]:
    """Read records back from to_json output."""
    return [ClosureRecord.from_dict(item) for item in json.loads(text)]


def serialize(records: Sequence[ClosureRecord], fmt: str) -> str:
    if fmt == "csv":
        return to_csv(records)
    if fmt == "json":
        return to_json(records)
    raise ValueError(f"Unsupported export format: {fmt}")


def export_filename(fmt: str, today: date = None, dataset_name: str = None) -> str:
    """Download filename of the form <dataset-name>-<YYYY-MM-DD>.<fmt>."""
    if today is None:
        today = date.today()
    if dataset_name is None:
        dataset_name = config_module.DATASET_NAME
    return f"{dataset_name}-{today.isoformat()}.{fmt}"
