"""
Unit tests for report, persistence and attribute writers.
"""

import io
import json
from datetime import datetime

import pytest

from script_tester.batch.writers import AttributeWriter, PersistenceWriter, ReportWriter
from script_tester.batch.writers.report_writer import DASHED_LINE
from script_tester.core.models import FAILURE, SUCCESS, Record


def record(content: bytes = b"hello", **attributes) -> Record:
    return Record(
        record_id="rec-1",
        content=content,
        attributes=attributes,
        entry_date=datetime(2024, 1, 2, 3, 4, 5, 678000),
        lineage_start_date=datetime(2024, 1, 2, 3, 4, 5, 678000),
    )


class TestReportWriter:
    """Tests for ReportWriter"""

    def test_count_line_only(self):
        stream = io.StringIO()
        count = ReportWriter(stream).report(SUCCESS, [record(), record()])

        assert count == 2
        assert stream.getvalue() == "Records transferred to success: 2\n\n"

    def test_empty_group(self):
        stream = io.StringIO()
        ReportWriter(stream).report("failure", [])
        assert stream.getvalue() == "Records transferred to failure: 0\n\n"

    def test_content_block(self):
        stream = io.StringIO()
        ReportWriter(stream).report(SUCCESS, [record(b"HELLO")], include_content=True)
        assert stream.getvalue() == "HELLO\n\nRecords transferred to success: 1\n\n"

    def test_attribute_block_layout(self):
        stream = io.StringIO()
        ReportWriter(stream).report(
            SUCCESS, [record(b"hello", filename="x.txt")], include_attributes=True, include_content=True
        )

        expected = "\n".join([
            "Record rec-1",
            DASHED_LINE,
            "Record Attributes",
            "Key: 'entryDate'",
            "\tValue: '2024-01-02 03:04:05.678'",
            "Key: 'lineageStartDate'",
            "\tValue: '2024-01-02 03:04:05.678'",
            "Key: 'fileSize'",
            "\tValue: '5'",
            "Record Attribute Map Content",
            "Key: 'filename'",
            "\tValue: 'x.txt'",
            DASHED_LINE,
            "hello",
            "",
            "Records transferred to success: 1",
            "",
            "",
        ])
        assert stream.getvalue() == expected

    def test_dashed_line_width(self):
        assert DASHED_LINE == "-" * 57

    def test_undecodable_content_is_replaced(self):
        stream = io.StringIO()
        ReportWriter(stream).report(SUCCESS, [record(b"\xffok")], include_content=True)
        assert stream.getvalue().startswith("�ok\n")

    def test_defaults_to_stdout(self, capsys):
        ReportWriter().report(SUCCESS, [])
        assert capsys.readouterr().out == "Records transferred to success: 0\n\n"


class TestPersistenceWriter:
    """Tests for PersistenceWriter"""

    def test_writes_named_files(self, output_dir):
        result = PersistenceWriter().persist(
            SUCCESS, [record(b"HELLO", filename="x.txt"), record(b"WORLD", filename="y.txt")], output_dir
        )

        assert result.written_count == 2
        assert result.error_count == 0
        assert (output_dir / "x.txt").read_bytes() == b"HELLO"
        assert (output_dir / "y.txt").read_bytes() == b"WORLD"

    def test_overwrites_existing_file(self, output_dir):
        (output_dir / "x.txt").write_bytes(b"old content that is longer")
        PersistenceWriter().persist(SUCCESS, [record(b"new", filename="x.txt")], output_dir)
        assert (output_dir / "x.txt").read_bytes() == b"new"

    def test_missing_filename_is_collected(self, output_dir):
        records = [record(b"a"), record(b"b", filename="b.txt")]
        result = PersistenceWriter().persist(FAILURE, records, output_dir)

        assert result.error_count == 1
        assert "no 'filename' attribute" in result.errors[0]
        assert (output_dir / "b.txt").read_bytes() == b"b"

    @pytest.mark.parametrize("filename", ["../escape.txt", "sub/dir.txt", "..", ".", ""])
    def test_unsafe_filename_never_leaves_directory(self, tmp_path, output_dir, filename):
        result = PersistenceWriter().persist(SUCCESS, [record(b"x", filename=filename)], output_dir)

        assert result.error_count == 1
        assert list(output_dir.iterdir()) == []
        assert not (tmp_path / "escape.txt").exists()

    def test_counts_persisted_records(self, output_dir, metric_value):
        before = metric_value("script_tester_records_persisted_total", outcome="success")
        errors_before = metric_value("script_tester_persist_errors_total", outcome="success")

        PersistenceWriter().persist(SUCCESS, [record(filename="m.txt"), record()], output_dir)

        assert metric_value("script_tester_records_persisted_total", outcome="success") == before + 1
        assert metric_value("script_tester_persist_errors_total", outcome="success") == errors_before + 1


class TestAttributeWriter:
    """Tests for AttributeWriter"""

    def test_writes_json_document(self, output_dir):
        result = AttributeWriter().write(SUCCESS, [record(b"hello", filename="x.txt", kind="greeting")], output_dir)

        assert result.written == [output_dir / "x.txt.json"]
        document = json.loads((output_dir / "x.txt.json").read_text())
        assert document["record_id"] == "rec-1"
        assert document["outcome"] == "success"
        assert document["file_size"] == 5
        assert document["attributes"] == {"filename": "x.txt", "kind": "greeting"}
        assert document["entry_date"].startswith("2024-01-02T03:04:05")

    def test_falls_back_to_record_id(self, output_dir):
        AttributeWriter().write(FAILURE, [record(b"x", filename="../bad")], output_dir)
        assert (output_dir / "rec-1.json").exists()
