"""
Closure registry core - validation, record store, query engine and export serializer.
"""

from .errors import (
    ClosureError,
    ClosureValidationError,
    EmptyExportError,
    InvalidStudentCount,
    InvalidYear,
    MissingFields,
    PersistenceError,
)
from .export import export_filename, parse_json, to_csv, to_json
from .query import apply_filter, distinct_districts, distinct_years, summarize
from .registry import ClosureRegistry, DashboardView, ExportOutcome, Notice, SubmitOutcome
from .schema import ClosureForm, ClosureRecord, FilterSpec, Summary, ValidatedPayload
from .storage import IKeyValueStorage, InMemoryStorage, SQLiteStorage
from .store import RecordStore
from .validator import empty_form, update_form, validate

__all__ = [
    'ClosureError',
    'ClosureValidationError',
    'EmptyExportError',
    'InvalidStudentCount',
    'InvalidYear',
    'MissingFields',
    'PersistenceError',
    'export_filename',
    'parse_json',
    'to_csv',
    'to_json',
    'apply_filter',
    'distinct_districts',
    'distinct_years',
    'summarize',
    'ClosureRegistry',
    'DashboardView',
    'ExportOutcome',
    'Notice',
    'SubmitOutcome',
    'ClosureForm',
    'ClosureRecord',
    'FilterSpec',
    'Summary',
    'ValidatedPayload',
    'IKeyValueStorage',
    'InMemoryStorage',
    'SQLiteStorage',
    'RecordStore',
    'empty_form',
    'update_form',
    'validate',
]
