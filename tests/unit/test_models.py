"""
Unit tests for Pydantic data models.
"""

from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from script_tester.core.models import (
    FAILURE,
    SUCCESS,
    Outcome,
    Record,
    RunConfiguration,
    parse_module_paths,
)


class TestRecord:
    """Tests for Record model"""

    def test_defaults(self):
        """Test a bare record gets an id, timestamps and empty metadata"""
        record = Record()
        assert record.record_id
        assert record.content == b""
        assert record.attributes == {}
        assert isinstance(record.entry_date, datetime)
        assert isinstance(record.lineage_start_date, datetime)

    def test_size_derived_from_content(self):
        """Test size always equals content length"""
        record = Record(content=b"hello")
        assert record.size == 5
        assert record.with_content(b"hi").size == 2

    def test_record_is_frozen(self):
        """Test fields cannot be reassigned"""
        record = Record(content=b"hello")
        with pytest.raises(ValidationError):
            record.content = b"other"

    def test_with_content_keeps_identity_and_metadata(self):
        """Test a new version shares id, attributes and dates"""
        record = Record(content=b"hello", attributes={"filename": "x.txt"})
        updated = record.with_content(b"HELLO")

        assert updated is not record
        assert updated.record_id == record.record_id
        assert updated.attributes == {"filename": "x.txt"}
        assert updated.entry_date == record.entry_date
        assert record.content == b"hello"

    def test_with_attributes_replaces_map_and_stringifies(self):
        """Test attribute replacement converts values to strings"""
        record = Record(attributes={"a": "1"})
        updated = record.with_attributes({"b": 2})
        assert updated.attributes == {"b": "2"}
        assert record.attributes == {"a": "1"}

    def test_text_replaces_undecodable_bytes(self):
        """Test text() never raises on binary content"""
        record = Record(content=b"ok\xff")
        assert record.text().startswith("ok")

    def test_empty_record_id_rejected(self):
        """Test that empty record_id raises ValidationError"""
        with pytest.raises(ValidationError) as exc_info:
            Record(record_id="")
        assert "record_id" in str(exc_info.value)


class TestOutcome:
    """Tests for Outcome model"""

    def test_predefined_outcomes(self):
        assert SUCCESS.name == "success"
        assert FAILURE.name == "failure"

    def test_outcomes_hashable(self):
        """Test outcomes can key dictionaries"""
        groups = {SUCCESS: 1, FAILURE: 2}
        assert groups[SUCCESS] == 1

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Outcome(name="")


class TestRunConfiguration:
    """Tests for RunConfiguration model"""

    def test_defaults_match_cli_defaults(self):
        """Test success reporting is on and everything else off by default"""
        config = RunConfiguration(script_path=Path("s.py"))
        assert config.report_success is True
        assert config.report_failure is False
        assert config.include_attributes is False
        assert config.include_content is False
        assert config.input_dir is None
        assert config.module_paths == ()

    def test_configuration_is_immutable(self):
        config = RunConfiguration(script_path=Path("s.py"))
        with pytest.raises(ValidationError):
            config.report_failure = True

    def test_output_dirs_only_lists_configured(self):
        config = RunConfiguration(script_path=Path("s.py"), failure_dir=Path("/tmp/bad"))
        assert config.output_dirs() == {"Failure output directory": Path("/tmp/bad")}


class TestParseModulePaths:
    """Tests for module path splitting"""

    def test_splits_and_strips(self):
        assert parse_module_paths("lib, vendor/x.py ,") == ("lib", "vendor/x.py")

    def test_empty_values(self):
        assert parse_module_paths(None) == ()
        assert parse_module_paths("") == ()
