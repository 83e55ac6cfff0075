"""
Registry facade used by presentation layers.
Wires validator, record store, query engine and export serializer together, and
turns every registry error into an outcome carrying a user-facing notice.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Union

from util.logging import logger

from .config import get_storage
from .errors import ClosureError, ClosureValidationError, EmptyExportError, MissingFields, PersistenceError
from .export import MEDIA_TYPES, export_filename, serialize
from .query import apply_filter, distinct_districts, distinct_years, summarize
from .schema import ClosureForm, ClosureRecord, FilterSpec, Summary
from .storage import InMemoryStorage
from .store import RecordStore
from .validator import validate

NO_DATA_MESSAGE = "No data available. Start by adding some school closure records."
NO_MATCH_MESSAGE = "No records match your current filters."


@dataclass(frozen=True)
class Notice:
    """A toast-style message for the user."""

    title: str
    description: str
    variant: str = "default"  # default|destructive

    @classmethod
    def from_error(cls, error: ClosureError) -> 'Notice':
        return cls(title=error.title, description=error.message, variant="destructive")


@dataclass
class SubmitOutcome:
    notice: Notice
    record: Optional[ClosureRecord] = None
    error: Optional[ClosureError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ExportOutcome:
    notice: Notice
    fmt: str
    record_count: int = 0
    filename: Optional[str] = None
    content: Optional[str] = None
    media_type: Optional[str] = None
    error: Optional[ClosureError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DashboardView:
    records: List[ClosureRecord]
    summary: Summary
    filtered_count: int
    districts: List[str]
    years: List[int]
    empty_message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


class ClosureRegistry:
    """Entry point for forms, dashboards and exports."""

    def __init__(self, store: RecordStore, today: Callable[[], date] = date.today):
        self.store = store
        self._today = today
        self.session_only = False
        self.warnings: List[str] = []

    @classmethod
    def from_config(cls) -> 'ClosureRegistry':
        return cls(RecordStore(get_storage()))

    def start(self) -> List[str]:
        """
        Load the store at application start.

        When the storage medium cannot be read, the registry continues with an
        empty in-memory store for this session and reports a warning.
        """
        try:
            self.store.load()
        except PersistenceError as e:
            self.store = RecordStore(InMemoryStorage(), key=self.store.key, today=self.store.today)
            self.store.load()
            self.session_only = True
            self.warnings.append(f"{e.message}. Records added now will only be kept for this session.")
            logger.warning("Storage unavailable, continuing with a session-only record store")
        self.warnings.extend(self.store.warnings)
        return list(self.warnings)

    def _ensure_started(self):
        if not self.store.loaded:
            self.start()

    def submit(self, raw: Union[ClosureForm, Dict[str, Any]]) -> SubmitOutcome:
        """Validate and store a form submission."""
        self._ensure_started()
        try:
            payload = validate(raw)
        except ClosureValidationError as e:
            fields = e.fields if isinstance(e, MissingFields) else [e.field]
            logger.log_validation_failure(e.kind, fields)
            return SubmitOutcome(notice=Notice.from_error(e), error=e)

        try:
            record = self.store.append(payload)
        except PersistenceError as e:
            return SubmitOutcome(notice=Notice.from_error(e), error=e)

        notice = Notice(
            title="Data saved successfully",
            description=f"School closure record for {record.schoolName} has been added",
        )
        return SubmitOutcome(notice=notice, record=record)

    def records(self) -> List[ClosureRecord]:
        self._ensure_started()
        return self.store.all()

    def get(self, record_id: str) -> Optional[ClosureRecord]:
        self._ensure_started()
        return self.store.get(record_id)

    def summary(self) -> Summary:
        self._ensure_started()
        return summarize(self.store.all())

    def dashboard(self, spec: FilterSpec = None) -> DashboardView:
        """Filtered records plus totals and filter options from the full set."""
        self._ensure_started()
        records = self.store.all()
        filtered = apply_filter(records, spec)

        empty_message = None
        if not records:
            empty_message = NO_DATA_MESSAGE
        elif not filtered:
            empty_message = NO_MATCH_MESSAGE

        return DashboardView(
            records=filtered,
            summary=summarize(records),
            filtered_count=len(filtered),
            districts=distinct_districts(records),
            years=distinct_years(records),
            empty_message=empty_message,
            warnings=list(self.warnings),
        )

    def export(self, fmt: str, spec: FilterSpec = None) -> ExportOutcome:
        """Serialize the currently filtered records for download."""
        self._ensure_started()
        if fmt not in MEDIA_TYPES:
            raise ValueError(f"Unsupported export format: {fmt}")

        filtered = apply_filter(self.store.all(), spec)
        try:
            content = serialize(filtered, fmt)
        except EmptyExportError as e:
            logger.log_export(fmt, 0, status="empty")
            return ExportOutcome(notice=Notice.from_error(e), fmt=fmt, error=e)

        filename = export_filename(fmt, self._today())
        logger.log_export(fmt, len(filtered), filename)
        notice = Notice(
            title="Export successful",
            description=f"Exported {len(filtered)} records to {fmt.upper()}",
        )
        return ExportOutcome(
            notice=notice,
            fmt=fmt,
            record_count=len(filtered),
            filename=filename,
            content=content,
            media_type=MEDIA_TYPES[fmt],
        )
