"""
Append-only record store over a key-value storage medium.
The in-memory collection mirrors the persisted blob and is flushed after every append.
"""

import json
import threading
import uuid
from datetime import date
from typing import Callable, List, Optional

from util.logging import logger

from .config import STORAGE_KEY
from .errors import PersistenceError
from .schema import ClosureRecord, ValidatedPayload
from .storage import IKeyValueStorage


class RecordStore:
    """Owns the closure record collection and its load/save lifecycle."""

    def __init__(self, storage: IKeyValueStorage, key: str = STORAGE_KEY,
                 today: Callable[[], date] = date.today,
                 id_factory: Callable[[], str] = None):
        self.storage = storage
        self.key = key
        self.today = today
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._records: List[ClosureRecord] = []
        self._ids = set()
        self._loaded = False
        self.warnings: List[str] = []
        # Serializes load and append; every write rewrites the whole blob.
        self._lock = threading.RLock()

    def load(self) -> List[ClosureRecord]:
        """
        Load the persisted collection into memory.

        An absent blob is an empty store. A corrupt blob is also treated as
        empty and reported through `warnings`; it is overwritten by the next
        successful append.

        Raises:
            PersistenceError: the storage medium could not be read
        """
        with self._lock:
            return self._load()

    def _load(self) -> List[ClosureRecord]:
        try:
            text = self.storage.load(self.key)
        except Exception as e:
            logger.log_storage_event("load", "failed", {"key": self.key, "error": str(e)[:100]})
            raise PersistenceError("load", "There was an error loading the school closure records") from e

        records = []
        if text:
            try:
                raw_items = json.loads(text)
                if not isinstance(raw_items, list):
                    raise ValueError("stored collection is not a list")
                records = [ClosureRecord.from_dict(item) for item in raw_items]
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                warning = f"Stored closure data under '{self.key}' is unreadable and was ignored: {e}"
                self.warnings.append(warning)
                logger.log_storage_event("load", "recovered", {"key": self.key, "error": str(e)[:100]})
                records = []

        self._records = records
        self._ids = {record.id for record in records}
        self._loaded = True
        logger.log_storage_event("load", "success", {"key": self.key, "count": len(records)})
        return list(self._records)

    def _write(self, records: List[ClosureRecord]) -> None:
        text = json.dumps([record.to_dict() for record in records])
        try:
            self.storage.save(self.key, text)
        except Exception as e:
            logger.log_storage_event("save", "failed", {"key": self.key, "error": str(e)[:100]})
            raise PersistenceError("save") from e
        logger.log_storage_event("save", "success", {"key": self.key, "count": len(records)})

    def save(self) -> None:
        """Flush the in-memory collection to storage."""
        with self._lock:
            self._write(self._records)

    def _new_id(self) -> str:
        record_id = self._id_factory()
        while record_id in self._ids:
            record_id = self._id_factory()
        return record_id

    def append(self, payload: ValidatedPayload) -> ClosureRecord:
        """
        Store a validated payload as a new record and flush it.

        The record is only kept in memory once the write succeeded.

        Raises:
            PersistenceError: the storage medium rejected the write
        """
        with self._lock:
            if not self._loaded:
                self._load()

            record = ClosureRecord.create(self._new_id(), payload, self.today())
            self._write(self._records + [record])

            self._records.append(record)
            self._ids.add(record.id)
        logger.log_record_operation("append", record.id, record.schoolName)
        return record

    def all(self) -> List[ClosureRecord]:
        """Every stored record in insertion order."""
        if not self._loaded:
            self.load()
        return list(self._records)

    def get(self, record_id: str) -> Optional[ClosureRecord]:
        if not self._loaded:
            self.load()
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def count(self) -> int:
        return len(self.all())

    @property
    def loaded(self) -> bool:
        return self._loaded
