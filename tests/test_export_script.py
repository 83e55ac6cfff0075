"""
Command-line export tests.
"""

import json
from datetime import date
from unittest.mock import patch

import pytest

from scripts.export_records import main
from school_closures.core.registry import ClosureRegistry
from school_closures.core.storage import InMemoryStorage
from school_closures.core.store import RecordStore

TODAY = date(2024, 6, 15)


@pytest.fixture
def registry():
    registry = ClosureRegistry(RecordStore(InMemoryStorage(), today=lambda: TODAY), today=lambda: TODAY)
    registry.submit({
        "schoolName": "Zilla Parishad School",
        "district": "Pune",
        "village": "Shirur",
        "yearOfClosure": "2022",
        "reasonForClosure": "Low student enrollment",
        "studentsBeforeClosure": "45",
        "whereStudentsGo": "Government School, Shirur Town",
    })
    return registry


def test_exports_json_file(registry, tmp_path, capsys):
    with patch('scripts.export_records.ClosureRegistry.from_config', return_value=registry):
        exit_code = main(["json", "--output", str(tmp_path)])

    assert exit_code == 0
    target = tmp_path / "maharashtra-school-closures-2024-06-15.json"
    assert json.loads(target.read_text(encoding="utf-8"))[0]["district"] == "Pune"
    assert "Exported 1 records to JSON" in capsys.readouterr().out


def test_empty_filter_exits_with_error(registry, tmp_path, capsys):
    with patch('scripts.export_records.ClosureRegistry.from_config', return_value=registry):
        exit_code = main(["csv", "--district", "Nashik", "--output", str(tmp_path)])

    assert exit_code == 1
    assert list(tmp_path.iterdir()) == []
    assert "No data to export" in capsys.readouterr().err
