"""
Registry facade tests - submission outcomes, dashboard views, exports and storage fallback.
"""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest

from school_closures.core.errors import (
    EmptyExportError,
    InvalidStudentCount,
    InvalidYear,
    MissingFields,
    PersistenceError,
)
from school_closures.core.registry import NO_DATA_MESSAGE, NO_MATCH_MESSAGE, ClosureRegistry
from school_closures.core.schema import FilterSpec
from school_closures.core.storage import InMemoryStorage
from school_closures.core.store import RecordStore

TODAY = date(2024, 6, 15)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def registry(storage):
    registry = ClosureRegistry(RecordStore(storage, today=lambda: TODAY), today=lambda: TODAY)
    registry.start()
    return registry


@pytest.fixture
def submission():
    return {
        "schoolName": "Zilla Parishad School",
        "district": "Pune",
        "village": "Shirur",
        "yearOfClosure": "2022",
        "reasonForClosure": "Low student enrollment",
        "studentsBeforeClosure": "45",
        "whereStudentsGo": "Government School, Shirur Town",
        "communityOpinion": "",
    }


class TestSubmit:

    def test_successful_submission(self, registry, submission):
        outcome = registry.submit(submission)

        assert outcome.ok
        assert outcome.record.schoolName == "Zilla Parishad School"
        assert outcome.notice.title == "Data saved successfully"
        assert outcome.notice.description == "School closure record for Zilla Parishad School has been added"
        assert outcome.notice.variant == "default"
        assert registry.records()[-1] == outcome.record

    @pytest.mark.parametrize("field,value,error_type,title", [
        ("village", "", MissingFields, "Missing required fields"),
        ("yearOfClosure", "2019", InvalidYear, "Invalid year"),
        ("yearOfClosure", "2026", InvalidYear, "Invalid year"),
        ("studentsBeforeClosure", "-3", InvalidStudentCount, "Invalid student count"),
    ])
    def test_rejected_submission_leaves_store_unchanged(self, registry, submission, field, value, error_type, title):
        submission[field] = value

        outcome = registry.submit(submission)

        assert not outcome.ok
        assert isinstance(outcome.error, error_type)
        assert outcome.record is None
        assert outcome.notice.title == title
        assert outcome.notice.variant == "destructive"
        assert registry.records() == []

    def test_storage_failure_becomes_notice(self, storage, registry, submission):
        storage.quota_bytes = 1

        outcome = registry.submit(submission)

        assert isinstance(outcome.error, PersistenceError)
        assert outcome.notice.title == "Error saving data"
        assert outcome.notice.description == "There was an error saving the school closure record"
        assert registry.records() == []

    def test_non_text_value_becomes_missing_fields_notice(self, registry, submission):
        outcome = registry.submit({**submission, "village": ["Shirur"]})

        assert isinstance(outcome.error, MissingFields)
        assert outcome.notice.title == "Missing required fields"
        assert registry.records() == []

    def test_get_by_id(self, registry, submission):
        record = registry.submit(submission).record

        assert registry.get(record.id) == record
        assert registry.get("missing") is None

    def test_submit_without_explicit_start(self, storage, submission):
        registry = ClosureRegistry(RecordStore(storage))
        assert registry.submit(submission).ok


class TestDashboard:

    def test_empty_store_message(self, registry):
        view = registry.dashboard()
        assert view.records == []
        assert view.empty_message == NO_DATA_MESSAGE
        assert view.summary.totalSchools == 0

    def test_example_scenario(self, registry, submission):
        registry.submit(submission)

        pune = registry.dashboard(FilterSpec(searchTerm="pune"))
        assert len(pune.records) == 1
        assert pune.records[0].schoolName == "Zilla Parishad School"

        nashik = registry.dashboard(FilterSpec(searchTerm="nashik"))
        assert nashik.records == []
        assert nashik.filtered_count == 0
        assert nashik.empty_message == NO_MATCH_MESSAGE

        summary = registry.summary()
        assert summary.totalSchools == 1
        assert summary.districtsAffected == 1
        assert summary.totalStudentsAffected == 45

    def test_summary_uses_full_set_while_count_uses_filter(self, registry, submission):
        registry.submit(submission)
        registry.submit({**submission, "schoolName": "Ashram Shala", "district": "Palghar",
                         "village": "Jawhar", "studentsBeforeClosure": "60"})

        view = registry.dashboard(FilterSpec(districtFilter="Palghar"))

        assert view.filtered_count == 1
        assert view.summary.totalSchools == 2
        assert view.summary.totalStudentsAffected == 105
        assert view.districts == ["Palghar", "Pune"]
        assert view.years == [2022]


class TestExport:

    def test_export_filtered_csv(self, registry, submission):
        registry.submit(submission)
        registry.submit({**submission, "schoolName": "Ashram Shala", "district": "Palghar"})

        outcome = registry.export("csv", FilterSpec(districtFilter="Palghar"))

        assert outcome.ok
        assert outcome.record_count == 1
        assert outcome.filename == "maharashtra-school-closures-2024-06-15.csv"
        assert outcome.media_type == "text/csv"
        assert outcome.content.count("\n") == 1
        assert outcome.notice.description == "Exported 1 records to CSV"

    def test_export_json(self, registry, submission):
        registry.submit(submission)
        outcome = registry.export("json")
        assert outcome.media_type == "application/json"
        assert outcome.filename.endswith(".json")
        assert outcome.notice.description == "Exported 1 records to JSON"

    @pytest.mark.parametrize("fmt", ["csv", "json"])
    def test_empty_export_produces_no_content(self, registry, fmt):
        outcome = registry.export(fmt)

        assert not outcome.ok
        assert isinstance(outcome.error, EmptyExportError)
        assert outcome.content is None
        assert outcome.filename is None
        assert outcome.notice.title == "No data to export"

    def test_filter_excluding_everything_is_empty_export(self, registry, submission):
        registry.submit(submission)
        outcome = registry.export("csv", FilterSpec(searchTerm="nashik"))
        assert isinstance(outcome.error, EmptyExportError)

    def test_unknown_format_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.export("xlsx")


class TestStartup:

    def test_corrupt_storage_surfaces_warning(self, storage):
        storage.save("schoolClosuresData", "not json at all")
        registry = ClosureRegistry(RecordStore(storage))

        warnings = registry.start()

        assert len(warnings) == 1
        assert registry.records() == []
        assert registry.dashboard().warnings == warnings

    def test_record_with_null_text_field_surfaces_warning(self, storage):
        storage.save("schoolClosuresData", json.dumps([{
            "id": "1", "schoolName": None, "district": None, "village": "Shirur",
            "yearOfClosure": 2022, "reasonForClosure": "Low student enrollment",
            "studentsBeforeClosure": 45, "whereStudentsGo": "Shirur Town", "dateAdded": "2024-06-10",
        }]))
        registry = ClosureRegistry(RecordStore(storage))

        warnings = registry.start()

        assert len(warnings) == 1
        view = registry.dashboard(FilterSpec(searchTerm="pune"))
        assert view.records == []
        assert view.districts == []

    def test_unreadable_storage_falls_back_to_session_store(self, submission):
        broken = MagicMock()
        broken.load.side_effect = OSError("storage unavailable")
        registry = ClosureRegistry(RecordStore(broken))

        warnings = registry.start()

        assert registry.session_only is True
        assert "only be kept for this session" in warnings[0]
        assert registry.submit(submission).ok
        assert len(registry.records()) == 1
        broken.save.assert_not_called()
